"""Structural markup: an indentation-based element syntax rendered to XML/HTML.

Each non-blank line is either an element or a text paragraph:

    article(id=intro):
      h1: Hello
      section(class="lead wide"):
        Plain lines become <p> elements.
        p: Explicit paragraph
      hr:

- `name:` opens an element; `name: text` gives it inline text.
- `(key=value, other="quoted value")` after the name sets attributes.
- Children are indented deeper than their parent with spaces; all children of
  one element share the same indentation.
- Any other line is a paragraph of text; a leading backslash escapes a line
  that would otherwise read as an element.
- Lines starting with `!` are comments.

A document has exactly one root element. parse() raises SamSyntaxError with
the offending line number on any violation.
"""

import copy
import re
import xml.etree.ElementTree as ET


ELEMENT_RE = re.compile(
    r'^(?P<name>[A-Za-z_][\w.-]*)(?:\((?P<attrs>[^)]*)\))?:(?:[ \t]+(?P<text>.*))?$'
)
ATTR_RE = re.compile(
    r'\s*(?P<key>[A-Za-z_][\w.-]*)\s*=\s*(?:"(?P<quoted>[^"]*)"|(?P<bare>[^,"\s]+))\s*(?:,|$)'
)
PARAGRAPH_TAG = "p"
COMMENT_PREFIX = "!"
ESCAPE_PREFIX = "\\"
INDENT = "  "


class SamSyntaxError(ValueError):
    """Malformed structural markup, reported with a 1-based line number."""

    def __init__(self, message: str, line_no: int):
        super().__init__(f"line {line_no}: {message}")
        self.line_no = line_no


class _Frame:
    """An open element on the indentation stack."""
    __slots__ = ("indent", "element", "child_indent")

    def __init__(self, indent: int, element: ET.Element):
        self.indent = indent
        self.element = element
        self.child_indent = None


def _parse_attributes(raw: str, line_no: int) -> dict[str, str]:
    attrs: dict[str, str] = {}
    raw = raw.strip()
    pos = 0
    while pos < len(raw):
        m = ATTR_RE.match(raw, pos)
        if not m or m.end() == pos:
            raise SamSyntaxError(f"malformed attribute list '({raw})'", line_no)
        attrs[m["key"]] = m["quoted"] if m["quoted"] is not None else m["bare"]
        pos = m.end()
    return attrs


def _make_node(stripped: str, line_no: int) -> tuple[ET.Element, bool]:
    """Return (element, can_have_children) for one stripped line."""
    if stripped.startswith(ESCAPE_PREFIX):
        node = ET.Element(PARAGRAPH_TAG)
        node.text = stripped[len(ESCAPE_PREFIX):]
        return node, False

    m = ELEMENT_RE.match(stripped)
    if not m:
        node = ET.Element(PARAGRAPH_TAG)
        node.text = stripped
        return node, False

    attrs = _parse_attributes(m["attrs"], line_no) if m["attrs"] else {}
    node = ET.Element(m["name"], attrs)
    if m["text"]:
        node.text = m["text"].strip()
    return node, True


def parse(text: str) -> ET.Element:
    """Parse structural markup into an element tree and return its root."""
    root = None
    stack: list[_Frame] = []

    for line_no, line in enumerate(text.splitlines(), start=1):
        stripped = line.strip()
        if not stripped or stripped.startswith(COMMENT_PREFIX):
            continue

        leading = line[: len(line) - len(line.lstrip())]
        if "\t" in leading:
            raise SamSyntaxError("tabs are not allowed in indentation", line_no)
        indent = len(leading)

        node, is_container = _make_node(stripped, line_no)

        if root is None:
            if indent != 0:
                raise SamSyntaxError("root element must not be indented", line_no)
            if not is_container:
                raise SamSyntaxError(f"expected a root element, found text '{stripped}'", line_no)
            root = node
            stack.append(_Frame(indent, node))
            continue

        while stack and stack[-1].indent >= indent:
            stack.pop()
        if not stack:
            raise SamSyntaxError(
                f"document must have a single root element, found second root '{stripped}'", line_no
            )

        parent = stack[-1]
        if parent.child_indent is None:
            parent.child_indent = indent
        elif parent.child_indent != indent:
            raise SamSyntaxError(
                f"inconsistent indentation: expected {parent.child_indent} spaces, found {indent}",
                line_no,
            )

        parent.element.append(node)
        if is_container:
            stack.append(_Frame(indent, node))

    if root is None:
        raise SamSyntaxError("document has no root element", 1)
    return root


def render(element: ET.Element, indent: int = 0, self_closing: bool = False) -> str:
    """Serialize an element tree to markup, pretty-printed starting at indent depth.

    With self_closing=False, empty elements are written as '<hr></hr>' so the
    output is valid HTML as well as XML.
    """
    tree = copy.deepcopy(element)
    tree.tail = None
    ET.indent(tree, space=INDENT, level=indent)
    return ET.tostring(tree, encoding="unicode", short_empty_elements=self_closing)
