"""Primary public API for epubpage."""

from __future__ import annotations

from epubpage.cache import GenerationCache
from epubpage.config import DocumentConfig
from epubpage.diagnostics import DiagnosticEmitter, LoggingEmitter
from epubpage.document import (
    BODY_CLASS,
    ExtensibleDocument,
    GuideRole,
    PathLookup,
    XHTMLDocument,
)
from epubpage.exceptions import (
    EPubPageError,
    MissingConfigurationError,
    StructuralValidationError,
)
from epubpage.markup import (
    OPS_NAMESPACE,
    XHTML_NAMESPACE,
    Compatibility,
    MarkupFactory,
    validate_structure,
)
from epubpage.paths import DefaultInternalPaths, InternalPath, relative_reference
from epubpage.serializer import serialize, write_document
from epubpage.styles import CSSFile, StyleAttachment, StyleResolver, StyleSource
from epubpage.version import get_version


__version__ = get_version()

__all__ = [
    "BODY_CLASS",
    "OPS_NAMESPACE",
    "XHTML_NAMESPACE",
    "CSSFile",
    "Compatibility",
    "DefaultInternalPaths",
    "DiagnosticEmitter",
    "DocumentConfig",
    "EPubPageError",
    "ExtensibleDocument",
    "GenerationCache",
    "GuideRole",
    "InternalPath",
    "LoggingEmitter",
    "MarkupFactory",
    "MissingConfigurationError",
    "PathLookup",
    "StructuralValidationError",
    "StyleAttachment",
    "StyleResolver",
    "StyleSource",
    "XHTMLDocument",
    "__version__",
    "get_version",
    "relative_reference",
    "serialize",
    "validate_structure",
    "write_document",
]
