"""Redaction of class and method bodies.

`redact` walks a parsed file depth-first and replaces the bodies of hidden
classes and methods with placeholder comments. Everything it does not touch
is copied from the original text byte for byte, so formatting, comments and
blank lines survive.
"""

from collections.abc import Iterable
from dataclasses import dataclass

from tree_sitter import Node

from capsule_packer.parsing import (
    NodeKind,
    ParsedSource,
    class_body,
    declaration_name,
    method_body_span,
    node_kind,
)

CLASS_PLACEHOLDER = "/* whole class collapsed */"
METHOD_PLACEHOLDER = "/* logic hidden */"
HIDDEN_METHOD_BODY = "{ " + METHOD_PLACEHOLDER + " }"
INDENT_UNIT = "    "


@dataclass(frozen=True)
class _Edit:
    start: int
    end: int
    replacement: bytes


def render(parsed: ParsedSource) -> str:
    """Render a parsed file without any redaction."""
    return parsed.text


def redact(
    parsed: ParsedSource,
    hidden_classes: Iterable[str] = (),
    hidden_methods: Iterable[str] = (),
) -> str:
    """Render a parsed file with hidden classes and methods blanked out.

    A hidden class keeps its header and braces, its members are replaced by a
    single collapse comment and nothing inside it is visited. A hidden method
    keeps its signature and gets an empty block with a comment; an expression
    body loses its `=>` and terminating semicolon. Names are matched by
    identifier only, and unknown names are ignored.

    Args:
        parsed (ParsedSource): File parsed from its original text.
        hidden_classes (Iterable[str]): Names of classes to collapse.
        hidden_methods (Iterable[str]): Names of methods whose bodies to hide.

    Returns:
        str: The redacted source text.
    """
    classes = frozenset(hidden_classes)
    methods = frozenset(hidden_methods)
    if not classes and not methods:
        return render(parsed)

    source = parsed.source_bytes
    edits: list[_Edit] = []
    _collect_edits(parsed.root, source, classes, methods, edits)
    return _apply_edits(source, edits).decode("utf-8")


def _collect_edits(
    node: Node,
    source: bytes,
    hidden_classes: frozenset[str],
    hidden_methods: frozenset[str],
    edits: list[_Edit],
) -> None:
    kind = node_kind(node)
    if kind is NodeKind.CLASS and declaration_name(node) in hidden_classes:
        body = class_body(node)
        if body is not None:
            indent = _line_indent(source, node.start_byte)
            inner = _member_indent(source, body, indent)
            edits.append(_Edit(body.start_byte, body.end_byte, _collapsed_body(indent, inner)))
            return
    elif kind is NodeKind.METHOD and declaration_name(node) in hidden_methods:
        span = method_body_span(node)
        if span is not None:
            edits.append(_Edit(span[0], span[1], HIDDEN_METHOD_BODY.encode("utf-8")))
            return

    for child in node.children:
        _collect_edits(child, source, hidden_classes, hidden_methods, edits)


def _collapsed_body(indent: str, inner: str) -> bytes:
    body = "{\n" + inner + CLASS_PLACEHOLDER + "\n" + indent + "}"
    return body.encode("utf-8")


def _member_indent(source: bytes, body: Node, indent: str) -> str:
    """Return the indentation for the placeholder line inside `body`.

    The first member's indentation is reused when it starts its own line and
    is deeper than the class header. Otherwise one level is added in the
    header's style: a tab for tab-indented headers, four spaces else.
    """
    if body.named_children:
        start = body.named_children[0].start_byte
        line_start = source.rfind(b"\n", 0, start) + 1
        prefix = source[line_start:start]
        if line_start > body.start_byte and not prefix.strip(b" \t"):
            member = prefix.decode("utf-8")
            if len(member) > len(indent) and member.startswith(indent):
                return member
    return indent + ("\t" if "\t" in indent else INDENT_UNIT)


def _line_indent(source: bytes, offset: int) -> str:
    """Return the leading whitespace of the line containing `offset`."""
    line_start = source.rfind(b"\n", 0, offset) + 1
    line = source[line_start:offset]
    stripped = line.lstrip(b" \t")
    return line[: len(line) - len(stripped)].decode("utf-8")


def _apply_edits(source: bytes, edits: list[_Edit]) -> bytes:
    # Edits never overlap: the walk stops at every node it replaces.
    parts: list[bytes] = []
    position = 0
    for edit in sorted(edits, key=lambda e: e.start):
        parts.append(source[position:edit.start])
        parts.append(edit.replacement)
        position = edit.end
    parts.append(source[position:])
    return b"".join(parts)
