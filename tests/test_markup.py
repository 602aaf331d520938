from __future__ import annotations

from bs4.element import Tag
import pytest

from epubpage.markup import (
    OPS_NAMESPACE,
    XHTML_NAMESPACE,
    Compatibility,
    MarkupFactory,
    validate_structure,
)


def _page(factory: MarkupFactory) -> tuple[Tag, Tag, Tag]:
    root = factory.root()
    head = factory.head()
    body = factory.body("epub")
    root.append(head)
    root.append(body)
    return root, head, body


@pytest.mark.parametrize(
    ("compatibility", "expected"),
    [
        (Compatibility.HTML5, True),
        (Compatibility.XHTML5, True),
        (Compatibility.XHTML11, False),
        (Compatibility.HTML401_STRICT, False),
        (Compatibility.HTML401_TRANSITIONAL, False),
        (Compatibility.HTML401_FRAMESET, False),
    ],
)
def test_namespaced_dialects(compatibility: Compatibility, expected: bool) -> None:
    assert compatibility.is_namespaced is expected


def test_root_declares_xhtml_namespace_for_xml_dialects() -> None:
    assert MarkupFactory(Compatibility.XHTML11).root().get("xmlns") == XHTML_NAMESPACE
    assert MarkupFactory(Compatibility.HTML401_STRICT).root().get("xmlns") is None


def test_factory_builds_head_children() -> None:
    factory = MarkupFactory(Compatibility.XHTML11)

    link = factory.link(rel="stylesheet", media_type="text/css", href="../css/main.css")
    style = factory.style("text/css", "p{margin:0}")

    assert link.name == "link"
    assert link["rel"] == "stylesheet"
    assert link["href"] == "../css/main.css"
    assert style["type"] == "text/css"
    assert style.string == "p{margin:0}"
    assert factory.title(None).string is None


def test_document_prepends_doctype() -> None:
    factory = MarkupFactory(Compatibility.XHTML11)
    root, _, _ = _page(factory)

    document = factory.document(root)

    assert document.contents[0] == (
        'html PUBLIC "-//W3C//DTD XHTML 1.1//EN" "http://www.w3.org/TR/xhtml11/DTD/xhtml11.dtd"'
    )
    assert document.find("html") is root


def test_valid_page_has_no_problems() -> None:
    factory = MarkupFactory(Compatibility.XHTML5)
    root, head, _ = _page(factory)
    head.append(factory.link(rel="stylesheet", media_type="text/css", href="main.css"))
    root["xmlns:epub"] = OPS_NAMESPACE

    assert validate_structure(root, Compatibility.XHTML5) == []


def test_namespace_declaration_rejected_outside_epub3() -> None:
    factory = MarkupFactory(Compatibility.XHTML11)
    root, _, _ = _page(factory)
    root["xmlns:epub"] = OPS_NAMESPACE

    problems = validate_structure(root, Compatibility.XHTML11)

    assert any("xmlns:epub" in problem for problem in problems)


def test_misplaced_and_incomplete_elements_are_reported() -> None:
    factory = MarkupFactory(Compatibility.XHTML11)
    root, head, _ = _page(factory)
    head.append(factory.element("div"))
    head.append(factory.element("link", rel="stylesheet"))
    head.append(factory.element("style"))

    problems = validate_structure(root, Compatibility.XHTML11)

    assert "<div> is not allowed inside <head>" in problems
    assert any(problem.startswith("<link> is missing") for problem in problems)
    assert any(problem.startswith("<style> is missing") for problem in problems)


def test_style_type_optional_for_html5() -> None:
    factory = MarkupFactory(Compatibility.HTML5)
    root, head, _ = _page(factory)
    head.append(factory.element("style"))

    assert validate_structure(root, Compatibility.HTML5) == []


def test_root_requires_head_then_body() -> None:
    factory = MarkupFactory(Compatibility.XHTML11)
    root = factory.root()
    root.append(factory.body())

    assert validate_structure(root, Compatibility.XHTML11)
    assert validate_structure(factory.head(), Compatibility.XHTML11) == [
        "root element must be <html>, found <head>"
    ]
