"""Byte serialization of generated pages.

Output settings are fixed: UTF-8 with an XML declaration, two-space indentation,
XML entity escaping. Indentation is only added between elements, so text-only
and mixed-content elements keep their text unchanged. The destination stream
belongs to the caller and is never closed here.
"""

from __future__ import annotations

from typing import BinaryIO

from bs4 import BeautifulSoup, Doctype
from bs4.element import Tag
from lxml import etree


__all__ = ["ENCODING", "serialize", "write_document"]


ENCODING = "utf-8"


def _doctype(document: BeautifulSoup) -> str | None:
    for node in document.contents:
        if isinstance(node, Doctype):
            return f"<!DOCTYPE {node}>"
    return None


def serialize(document: BeautifulSoup) -> bytes:
    """Return the indented UTF-8 encoding of ``document``."""
    root = document.find(True, recursive=False)
    if not isinstance(root, Tag):
        raise ValueError("Cannot serialize a document without a root element")
    element = etree.fromstring(str(root).encode(ENCODING))
    return etree.tostring(
        element,
        pretty_print=True,
        xml_declaration=True,
        encoding=ENCODING,
        doctype=_doctype(document),
    )


def write_document(document: BeautifulSoup, stream: BinaryIO) -> int:
    """Write ``document`` to ``stream`` in one pass and return the byte count."""
    payload = serialize(document)
    stream.write(payload)
    stream.flush()
    return len(payload)
