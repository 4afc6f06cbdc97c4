"""Reading decoded GEDCOM text into a python-gedcom element tree."""

import io

from gedcom.element.element import Element
from gedcom.parser import GedcomFormatViolationError, Parser

from gedlineage.errors import StructuralParseError


def _gedcom_stream(text: str) -> io.BytesIO:
    # The parser wants newline-terminated byte lines; blank lines and indentation are dropped
    lines = (line.lstrip() for line in text.splitlines())
    return io.BytesIO("".join(f"{line}\n" for line in lines if line).encode("utf-8"))


def read_record_tree(text: str) -> Element:
    """
    Parse GEDCOM text and return the root element.

    The root has no tag of its own; its child elements are the level-0
    records in file order. Raises StructuralParseError on lines that do not
    follow the GEDCOM line grammar or that skip a nesting level.
    """
    parser = Parser()
    try:
        parser.parse(_gedcom_stream(text), strict=True)
    except GedcomFormatViolationError as exc:
        raise StructuralParseError(f"Malformed GEDCOM record tree: {exc}") from exc
    return parser.get_root_element()


def find_child(element: Element, tag: str) -> Element | None:
    """Return the first direct child element with the given tag."""
    for child in element.get_child_elements():
        if child.get_tag() == tag:
            return child
    return None
