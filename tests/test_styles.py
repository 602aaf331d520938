from __future__ import annotations

from collections.abc import Mapping
import logging
from pathlib import Path
from typing import Any

import pytest

from epubpage.markup import Compatibility, MarkupFactory
from epubpage.paths import DefaultInternalPaths, InternalPath
from epubpage.styles import CSSFile, StyleResolver, StyleSource


class _RecordingEmitter:
    def __init__(self) -> None:
        self.warnings: list[tuple[str, BaseException | None]] = []

    def warning(self, message: str, exc: BaseException | None = None) -> None:
        self.warnings.append((message, exc))

    def event(self, name: str, payload: Mapping[str, Any]) -> None:
        return


def test_css_file_location_and_protocol() -> None:
    stylesheet = CSSFile("main.css", content=b"")

    assert isinstance(stylesheet, StyleSource)
    assert stylesheet.path_in_package == InternalPath("OEBPS/css/main.css")
    assert stylesheet.media_type == "text/css"


def test_css_file_reads_source_lazily(tmp_path: Path) -> None:
    source = tmp_path / "screen.css"
    source.write_bytes(b"h1{font-size:2em}")
    stylesheet = CSSFile.from_path(source)

    assert stylesheet.file_name == "screen.css"
    resolver = StyleResolver(MarkupFactory(Compatibility.XHTML11))
    attachment = resolver.attach(
        stylesheet, embed=True, folder=DefaultInternalPaths.TEXT_FOLDER
    )
    assert attachment.node.string == "h1{font-size:2em}"


def test_link_mode_references_stylesheet() -> None:
    resolver = StyleResolver(MarkupFactory(Compatibility.XHTML11))
    stylesheet = CSSFile("main.css", content=b"body{color:red}")

    attachment = resolver.attach(
        stylesheet, embed=False, folder=DefaultInternalPaths.TEXT_FOLDER
    )

    assert not attachment.embedded
    assert attachment.node.name == "link"
    assert attachment.node["rel"] == "stylesheet"
    assert attachment.node["type"] == "text/css"
    assert attachment.node["href"] == "../css/main.css"


def test_link_mode_honours_flat_layout() -> None:
    resolver = StyleResolver(MarkupFactory(Compatibility.XHTML11))
    stylesheet = CSSFile("main.css", content=b"")

    attachment = resolver.attach(
        stylesheet, embed=False, folder=DefaultInternalPaths.TEXT_FOLDER, flat=True
    )

    assert attachment.node["href"] == "main.css"


def test_inline_mode_copies_utf8_content() -> None:
    resolver = StyleResolver(MarkupFactory(Compatibility.XHTML5))
    content = "p::before{content:'é'}"
    stylesheet = CSSFile("main.css", content=content.encode("utf-8"), media_type="text/css")

    attachment = resolver.attach(stylesheet, embed=True, folder=DefaultInternalPaths.TEXT_FOLDER)

    assert attachment.embedded
    assert not attachment.failed
    assert attachment.node.name == "style"
    assert attachment.node["type"] == "text/css"
    assert attachment.node.string == content


def test_unreadable_stylesheet_is_logged(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    resolver = StyleResolver(MarkupFactory(Compatibility.XHTML11))
    stylesheet = CSSFile.from_path(tmp_path / "missing.css")

    with caplog.at_level(logging.WARNING, logger="epubpage.styles"):
        attachment = resolver.attach(
            stylesheet, embed=True, folder=DefaultInternalPaths.TEXT_FOLDER
        )

    assert attachment.failed
    assert isinstance(attachment.error, OSError)
    assert attachment.node.name == "style"
    assert attachment.node.string is None
    records = [record for record in caplog.records if record.name == "epubpage.styles"]
    assert len(records) == 1
    assert "missing.css" in records[0].message
    assert records[0].exc_info is not None


def test_unreadable_stylesheet_reaches_custom_emitter(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    emitter = _RecordingEmitter()
    resolver = StyleResolver(MarkupFactory(Compatibility.XHTML11), emitter=emitter)
    stylesheet = CSSFile.from_path(tmp_path / "missing.css")

    with caplog.at_level(logging.WARNING):
        attachment = resolver.attach(
            stylesheet, embed=True, folder=DefaultInternalPaths.TEXT_FOLDER
        )

    assert attachment.failed
    assert len(emitter.warnings) == 1
    message, exc = emitter.warnings[0]
    assert "missing.css" in message
    assert exc is attachment.error
    assert not caplog.records


def test_invalid_utf8_is_a_soft_failure() -> None:
    resolver = StyleResolver(MarkupFactory(Compatibility.XHTML11))
    stylesheet = CSSFile("broken.css", content=b"\xff\xfe\xfa")

    attachment = resolver.attach(stylesheet, embed=True, folder=DefaultInternalPaths.TEXT_FOLDER)

    assert attachment.failed
    assert isinstance(attachment.error, UnicodeDecodeError)
    assert attachment.node.string is None
