"""Page documents assembled for an EPUB container.

Architecture
: `XHTMLDocument` is configured through plain properties, then generated into
  a BeautifulSoup tree and written to a caller-owned stream. Generation runs
  the head and body hooks, attaches stylesheets through `StyleResolver`,
  validates the structure, and appends the title last.
: The generated tree is memoised in a `GenerationCache`. Properties that
  change the output call `invalidate()`; `write` reuses the cached tree while it
  is clean and `generate` always rebuilds.
: Pages that need extra head or body content receive extension callables at
  construction instead of subclassing. Subclasses remain free to override the
  hooks named by `ExtensibleDocument`.

Usage Example
:
    >>> import io
    >>> from epubpage import Compatibility, CSSFile, XHTMLDocument
    >>> page = XHTMLDocument(Compatibility.XHTML5)
    >>> page.file_name = "chapter1.xhtml"
    >>> page.page_title = "Chapter 1"
    >>> page.style_files.append(CSSFile("main.css", content=b"body{color:red}"))
    >>> page.href
    'text/chapter1.xhtml'
    >>> _ = page.write(io.BytesIO())
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import Enum
import logging
from typing import TYPE_CHECKING, Any, BinaryIO, Protocol, runtime_checkable

from bs4 import BeautifulSoup
from bs4.element import PageElement, Tag
from slugify import slugify

from .cache import GenerationCache
from .diagnostics import DiagnosticEmitter, LoggingEmitter
from .exceptions import MissingConfigurationError, StructuralValidationError
from .markup import OPS_NAMESPACE, Compatibility, MarkupFactory, validate_structure
from .paths import DefaultInternalPaths, InternalPath, relative_reference
from .serializer import write_document
from .styles import StyleAttachment, StyleResolver, StyleSource


if TYPE_CHECKING:  # pragma: no cover - typing only
    from .config import DocumentConfig


__all__ = [
    "BODY_CLASS",
    "BodyExtension",
    "ExtensibleDocument",
    "GuideRole",
    "HeadExtension",
    "PathLookup",
    "XHTMLDocument",
]


logger = logging.getLogger(__name__)

BODY_CLASS = "epub"

HeadExtension = Callable[[Tag, "XHTMLDocument"], None]
BodyExtension = Callable[[Tag, "XHTMLDocument"], None]


class GuideRole(str, Enum):
    """Guide reference type advertised for a page."""

    IGNORE = "ignore"
    COVER = "cover"
    TITLE_PAGE = "title-page"
    TOC = "toc"
    INDEX = "index"
    GLOSSARY = "glossary"
    ACKNOWLEDGEMENTS = "acknowledgements"
    BIBLIOGRAPHY = "bibliography"
    COLOPHON = "colophon"
    COPYRIGHT_PAGE = "copyright-page"
    DEDICATION = "dedication"
    EPIGRAPH = "epigraph"
    FOREWORD = "foreword"
    LIST_OF_ILLUSTRATIONS = "loi"
    LIST_OF_TABLES = "lot"
    NOTES = "notes"
    PREFACE = "preface"
    TEXT = "text"


@runtime_checkable
class ExtensibleDocument(Protocol):
    """Hooks a page exposes to customise its generated tree."""

    def generate_head(self) -> Tag: ...

    def generate_body(self) -> Tag: ...

    def part_of_document(self, node: PageElement) -> bool: ...


@dataclass(frozen=True, slots=True)
class PathLookup:
    """Outcome of locating a page inside the container."""

    path: InternalPath | None = None
    error: MissingConfigurationError | None = None

    @property
    def ok(self) -> bool:
        return self.path is not None

    def unwrap(self) -> InternalPath:
        """Return the located path or raise the recorded error."""
        if self.path is None:
            raise self.error or MissingConfigurationError("Page location is unknown")
        return self.path


class XHTMLDocument:
    """Single content page generated for a given markup dialect."""

    def __init__(
        self,
        compatibility: Compatibility,
        *,
        folder: InternalPath = DefaultInternalPaths.TEXT_FOLDER,
        head_extensions: Iterable[HeadExtension] = (),
        body_extensions: Iterable[BodyExtension] = (),
        emitter: DiagnosticEmitter | None = None,
    ) -> None:
        self.compatibility = compatibility
        self.folder = folder
        self.head_extensions: list[HeadExtension] = list(head_extensions)
        self.body_extensions: list[BodyExtension] = list(body_extensions)
        self.emitter = emitter or LoggingEmitter(logger_obj=logger)

        self.file_name: str | None = None
        self.guide_role = GuideRole.IGNORE
        self.not_part_of_navigation = False
        self.flat_structure = False
        self._id: str | None = None

        self.markup = MarkupFactory(compatibility)
        self.head: Tag | None = None
        self.body: Tag | None = None
        self.attachments: tuple[StyleAttachment, ...] = ()

        self._page_title: str | None = None
        self._embed_styles = False
        self._styles: list[StyleSource] = []
        self._cache: GenerationCache[BeautifulSoup] = GenerationCache()

    @classmethod
    def from_config(
        cls,
        config: DocumentConfig,
        styles: Iterable[StyleSource] = (),
        **kwargs: Any,
    ) -> XHTMLDocument:
        """Create a page configured from ``config`` with the given stylesheets."""
        document = cls(config.compatibility, folder=config.internal_folder(), **kwargs)
        document.page_title = config.page_title
        document.embed_styles = config.embed_styles
        document.file_name = config.file_name
        document.flat_structure = config.flat_structure
        document.guide_role = config.guide_role
        document.not_part_of_navigation = config.not_part_of_navigation
        document.id = config.id
        document.style_files.extend(styles)
        return document

    @property
    def page_title(self) -> str | None:
        """Document title, mostly relevant to browsers."""
        return self._page_title

    @page_title.setter
    def page_title(self, value: str | None) -> None:
        self._page_title = value
        self.invalidate()

    @property
    def embed_styles(self) -> bool:
        """Embed stylesheet contents instead of referencing the files."""
        return self._embed_styles

    @embed_styles.setter
    def embed_styles(self, value: bool) -> None:
        self._embed_styles = bool(value)
        self.invalidate()

    @property
    def style_files(self) -> list[StyleSource]:
        """Stylesheets attached to the page, in head order.

        The list is live. Callers that change it after a write should call
        `invalidate()` or `generate()` to refresh the cached tree.
        """
        return self._styles

    @property
    def id(self) -> str | None:
        """Manifest identifier, derived from the file name when unset."""
        if self._id:
            return self._id
        if self.file_name:
            stem = self.file_name.rsplit(".", 1)[0]
            return slugify(stem, separator="_") or None
        return None

    @id.setter
    def id(self, value: str | None) -> None:
        self._id = value

    @property
    def dirty(self) -> bool:
        return self._cache.dirty

    def invalidate(self) -> None:
        """Force the next `write` to regenerate the tree."""
        self._cache.invalidate()

    def locate(self) -> PathLookup:
        """Return the page location, or the reason it cannot be computed."""
        if not self.file_name:
            return PathLookup(error=MissingConfigurationError("file_name has to be set"))
        return PathLookup(path=self.folder.join(self.file_name))

    @property
    def path_in_package(self) -> InternalPath:
        return self.locate().unwrap()

    @property
    def href(self) -> str:
        """Reference to the page from the package content file."""
        return relative_reference(
            self.path_in_package, DefaultInternalPaths.CONTENT_FILE, self.flat_structure
        )

    def generate_head(self) -> Tag:
        """Build a fresh ``<head>`` and apply the head extensions."""
        head = self.markup.head()
        for extension in self.head_extensions:
            extension(head, self)
        return head

    def generate_body(self) -> Tag:
        """Build a fresh ``<body>`` marked as e-book content."""
        body = self.markup.body(BODY_CLASS)
        for extension in self.body_extensions:
            extension(body, self)
        return body

    def part_of_document(self, node: PageElement) -> bool:
        """Report whether ``node`` belongs to this page; never in the base page."""
        return False

    def generate(self) -> BeautifulSoup:
        """Rebuild the page tree regardless of the cache state.

        A failed pass leaves the page as it was: ``markup``, ``head``, ``body``
        and ``attachments`` keep describing the last successful generation.
        """
        previous = self.markup
        self.markup = MarkupFactory(self.compatibility)
        try:
            document, head, body, attachments = self._build()
        except Exception:
            self.markup = previous
            raise

        self.head = head
        self.body = body
        self.attachments = attachments
        self.emitter.event(
            "document_generated",
            {
                "file_name": self.file_name,
                "styles": len(attachments),
                "embedded": self._embed_styles,
                "failed": sum(1 for attachment in attachments if attachment.failed),
            },
        )
        return self._cache.store(document)

    def _build(self) -> tuple[BeautifulSoup, Tag, Tag, tuple[StyleAttachment, ...]]:
        head = self.generate_head()
        body = self.generate_body()

        resolver = StyleResolver(self.markup, emitter=self.emitter)
        attachments = []
        for style in self._styles:
            attachment = resolver.attach(
                style,
                embed=self._embed_styles,
                folder=self.folder,
                flat=self.flat_structure,
            )
            head.append(attachment.node)
            attachments.append(attachment)

        root = self.markup.root()
        root.append(head)
        root.append(body)

        if self.compatibility.is_namespaced:
            root["xmlns:epub"] = OPS_NAMESPACE

        problems = validate_structure(root, self.compatibility)
        if head.find("title", recursive=False) is not None:
            problems.append("<title> is generated from page_title and must not be added by hooks")
        if problems:
            raise StructuralValidationError("Document content is not valid", problems)

        head.append(self.markup.title(self._page_title))
        return self.markup.document(root), head, body, tuple(attachments)

    def write(self, stream: BinaryIO) -> int:
        """Serialize the page into ``stream``, regenerating only when dirty."""
        document = self._cache.value
        if document is None:
            document = self.generate()
        else:
            logger.debug("Reusing cached page %s", self.file_name or "<unnamed>")
        return write_document(document, stream)
