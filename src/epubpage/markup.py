"""Markup element construction and structural checks.

Architecture
: `MarkupFactory` owns one XML-flavoured BeautifulSoup tree per generation pass
  and hands out the few element kinds a page needs (root, head, body, title,
  style, link). Nodes created by a factory can be attached anywhere in that
  factory's document.
: `validate_structure` inspects a root element for the shape rules a page must
  satisfy before it is serialized: element placement and required attributes,
  not the full dialect grammar.
"""

from __future__ import annotations

from enum import Enum

from bs4 import BeautifulSoup, Doctype
from bs4.element import Tag


__all__ = [
    "OPS_NAMESPACE",
    "XHTML_NAMESPACE",
    "Compatibility",
    "MarkupFactory",
    "validate_structure",
]


XHTML_NAMESPACE = "http://www.w3.org/1999/xhtml"
OPS_NAMESPACE = "http://www.idpf.org/2007/ops"


class Compatibility(str, Enum):
    """Markup dialect targeted by a generated page."""

    HTML401_STRICT = "html401-strict"
    HTML401_TRANSITIONAL = "html401-transitional"
    HTML401_FRAMESET = "html401-frameset"
    XHTML11 = "xhtml11"
    HTML5 = "html5"
    XHTML5 = "xhtml5"

    @property
    def is_namespaced(self) -> bool:
        """Return ``True`` for the EPUB 3 dialects that declare the OPS namespace."""
        return self in {Compatibility.HTML5, Compatibility.XHTML5}

    @property
    def is_xml(self) -> bool:
        return self in {Compatibility.XHTML11, Compatibility.HTML5, Compatibility.XHTML5}

    @property
    def doctype(self) -> tuple[str, str | None, str | None]:
        """Return the doctype name with its public and system identifiers."""
        return _DOCTYPES[self]


_DOCTYPES: dict[Compatibility, tuple[str, str | None, str | None]] = {
    Compatibility.HTML401_STRICT: (
        "HTML",
        "-//W3C//DTD HTML 4.01//EN",
        "http://www.w3.org/TR/html4/strict.dtd",
    ),
    Compatibility.HTML401_TRANSITIONAL: (
        "HTML",
        "-//W3C//DTD HTML 4.01 Transitional//EN",
        "http://www.w3.org/TR/html4/loose.dtd",
    ),
    Compatibility.HTML401_FRAMESET: (
        "HTML",
        "-//W3C//DTD HTML 4.01 Frameset//EN",
        "http://www.w3.org/TR/html4/frameset.dtd",
    ),
    Compatibility.XHTML11: (
        "html",
        "-//W3C//DTD XHTML 1.1//EN",
        "http://www.w3.org/TR/xhtml11/DTD/xhtml11.dtd",
    ),
    Compatibility.HTML5: ("html", None, None),
    Compatibility.XHTML5: ("html", None, None),
}

_HEAD_CHILDREN = frozenset({"base", "link", "meta", "script", "style", "title"})
_HTML5_HEAD_CHILDREN = _HEAD_CHILDREN | {"noscript", "template"}
_REQUIRED_ATTRIBUTES: dict[str, tuple[str, ...]] = {
    "link": ("rel", "href"),
    "meta": (),
    "style": ("type",),
    "script": ("type",),
}


class MarkupFactory:
    """Create page elements for a single compatibility mode."""

    def __init__(self, compatibility: Compatibility) -> None:
        self.compatibility = compatibility
        self.soup = BeautifulSoup(features="xml")

    def element(self, name: str, text: str | None = None, **attrs: str) -> Tag:
        """Return a new element named ``name`` with optional text content."""
        tag = self.soup.new_tag(name, attrs=attrs)
        if text is not None:
            tag.string = text
        return tag

    def root(self) -> Tag:
        attrs = {"xmlns": XHTML_NAMESPACE} if self.compatibility.is_xml else {}
        return self.element("html", **attrs)

    def head(self) -> Tag:
        return self.element("head")

    def body(self, css_class: str | None = None) -> Tag:
        body = self.element("body")
        if css_class:
            body["class"] = css_class
        return body

    def title(self, text: str | None) -> Tag:
        return self.element("title", text or None)

    def style(self, media_type: str, text: str | None = None) -> Tag:
        return self.element("style", text, type=media_type)

    def link(self, *, rel: str, media_type: str, href: str) -> Tag:
        return self.element("link", rel=rel, type=media_type, href=href)

    def document(self, root: Tag) -> BeautifulSoup:
        """Attach the doctype and ``root`` to the factory's document and return it."""
        name, public_id, system_id = self.compatibility.doctype
        self.soup.append(Doctype.for_name_and_ids(name, public_id, system_id))
        self.soup.append(root)
        return self.soup


def validate_structure(root: Tag, compatibility: Compatibility) -> list[str]:
    """Return the structural problems found under ``root``; empty when valid."""
    problems: list[str] = []
    if root.name != "html":
        return [f"root element must be <html>, found <{root.name}>"]

    for attribute in root.attrs:
        if attribute.startswith("xmlns:") and not compatibility.is_namespaced:
            problems.append(f"namespace declaration '{attribute}' requires an EPUB 3 dialect")

    children = [child for child in root.children if isinstance(child, Tag)]
    names = [child.name for child in children]
    if names != ["head", "body"]:
        problems.append(f"<html> must contain <head> then <body>, found {names}")
        return problems

    head, body = children
    allowed = _HTML5_HEAD_CHILDREN if compatibility.is_namespaced else _HEAD_CHILDREN
    titles = 0
    for child in head.find_all(True, recursive=False):
        if child.name not in allowed:
            problems.append(f"<{child.name}> is not allowed inside <head>")
            continue
        if child.name == "title":
            titles += 1
        required = _REQUIRED_ATTRIBUTES.get(child.name, ())
        if compatibility.is_namespaced and child.name in {"style", "script"}:
            required = ()
        missing = [attribute for attribute in required if not child.get(attribute)]
        if missing:
            problems.append(f"<{child.name}> is missing required attribute(s) {missing}")
    if titles > 1:
        problems.append("<head> must not contain more than one <title>")

    if body.find("head") is not None or body.find("body") is not None:
        problems.append("<body> must not contain document-level elements")

    return problems
