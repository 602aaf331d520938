"""Stylesheet sources and their attachment to a page head."""

from __future__ import annotations

from dataclasses import dataclass, field
import io
import logging
from pathlib import Path
from typing import BinaryIO, Protocol, runtime_checkable

from bs4.element import Tag

from .diagnostics import DiagnosticEmitter, LoggingEmitter
from .markup import MarkupFactory
from .paths import DefaultInternalPaths, InternalPath, relative_reference


__all__ = [
    "CSS_MEDIA_TYPE",
    "CSSFile",
    "StyleAttachment",
    "StyleResolver",
    "StyleSource",
]


logger = logging.getLogger(__name__)

CSS_MEDIA_TYPE = "text/css"


@runtime_checkable
class StyleSource(Protocol):
    """A stylesheet stored in the container."""

    media_type: str

    @property
    def path_in_package(self) -> InternalPath: ...

    def write(self, stream: BinaryIO) -> None: ...


@dataclass(slots=True)
class CSSFile:
    """Cascading stylesheet backed by in-memory bytes or a file on disk.

    When ``content`` is ``None`` the ``source`` file is read each time the
    stylesheet is written, so a missing file only fails at that point.
    """

    file_name: str
    folder: InternalPath = DefaultInternalPaths.STYLES_FOLDER
    content: bytes | None = None
    source: Path | None = None
    media_type: str = CSS_MEDIA_TYPE

    @classmethod
    def from_path(
        cls, path: Path | str, folder: InternalPath = DefaultInternalPaths.STYLES_FOLDER
    ) -> CSSFile:
        """Reference a stylesheet on disk, keeping its file name inside ``folder``."""
        source = Path(path)
        return cls(file_name=source.name, folder=folder, source=source)

    @property
    def path_in_package(self) -> InternalPath:
        return self.folder.join(self.file_name)

    def write(self, stream: BinaryIO) -> None:
        """Copy the stylesheet bytes into ``stream``."""
        if self.content is not None:
            stream.write(self.content)
            return
        if self.source is None:
            raise ValueError(f"Stylesheet '{self.file_name}' has neither content nor source")
        stream.write(self.source.read_bytes())


@dataclass(slots=True)
class StyleAttachment:
    """Head node produced for one stylesheet during a generation pass."""

    source: StyleSource
    embedded: bool
    node: Tag
    failed: bool = False
    error: BaseException | None = field(default=None, repr=False)


class StyleResolver:
    """Turn stylesheets into ``<style>`` or ``<link>`` head children."""

    def __init__(self, markup: MarkupFactory, *, emitter: DiagnosticEmitter | None = None) -> None:
        self.markup = markup
        self.emitter = emitter or LoggingEmitter(logger_obj=logger)

    def attach(
        self,
        style: StyleSource,
        *,
        embed: bool,
        folder: InternalPath,
        flat: bool = False,
    ) -> StyleAttachment:
        """Build the head child for ``style`` as seen from a page stored in ``folder``."""
        if embed:
            return self._embed(style)
        href = relative_reference(style.path_in_package, folder, flat)
        node = self.markup.link(rel="stylesheet", media_type=style.media_type, href=href)
        return StyleAttachment(source=style, embedded=False, node=node)

    def _embed(self, style: StyleSource) -> StyleAttachment:
        node = self.markup.style(style.media_type)
        attachment = StyleAttachment(source=style, embedded=True, node=node)
        # Unreadable stylesheets still yield an empty <style> element.
        try:
            buffer = io.BytesIO()
            style.write(buffer)
            node.string = buffer.getvalue().decode("utf-8")
        except Exception as exc:
            attachment.failed = True
            attachment.error = exc
            self.emitter.warning(
                f"Unable to embed stylesheet '{style.path_in_package}': {exc}", exc
            )
        return attachment
