"""Parsing of C# source files.

This module is the boundary to the tree-sitter C# grammar. It turns raw text
into a `ParsedSource`, classifies syntax nodes into the handful of kinds the
packer cares about, and builds the class/method outline shown in the
navigator.
"""

from dataclasses import dataclass, field
from enum import Enum
from functools import lru_cache

import tree_sitter_c_sharp
from tree_sitter import Language, Node, Parser, Tree

CLASS_NODE_TYPES = frozenset(
    {
        "class_declaration",
        "struct_declaration",
        "interface_declaration",
        "record_declaration",
    }
)
METHOD_NODE_TYPES = frozenset({"method_declaration"})


class NodeKind(Enum):
    """Kinds of syntax nodes distinguished during redaction."""

    CLASS = "class"
    METHOD = "method"
    OTHER = "other"


@dataclass(frozen=True)
class ParsedSource:
    """Original source text together with the tree parsed from it.

    Attributes:
        text (str): Unmodified file content.
        tree (Tree): tree-sitter tree for `text`.
    """

    text: str
    tree: Tree

    @property
    def source_bytes(self) -> bytes:
        """UTF-8 bytes the tree's byte offsets refer to."""
        return self.text.encode("utf-8")

    @property
    def root(self) -> Node:
        return self.tree.root_node


@dataclass
class MethodOutline:
    """A method entry in the navigator."""

    name: str
    return_type: str

    @property
    def label(self) -> str:
        return f"{self.return_type} {self.name}()"


@dataclass
class ClassOutline:
    """A class entry in the navigator with every method declared inside it."""

    name: str
    methods: list[MethodOutline] = field(default_factory=list)

    @property
    def label(self) -> str:
        return f"class {self.name}"


@dataclass
class SourceOutline:
    """Classes of one file in document order."""

    classes: list[ClassOutline] = field(default_factory=list)

    def class_names(self) -> list[str]:
        return [cls.name for cls in self.classes]

    def method_names(self) -> list[str]:
        return [method.name for cls in self.classes for method in cls.methods]


@lru_cache(maxsize=1)
def csharp_language() -> Language:
    """Return the tree-sitter language object for C#."""
    return Language(tree_sitter_c_sharp.language())


def parse_source(text: str) -> ParsedSource:
    """Parse C# text into a `ParsedSource`.

    tree-sitter recovers from syntax errors, so any text (including empty or
    non-C# input) yields a tree.

    Args:
        text (str): Source text.

    Returns:
        ParsedSource: The text and its syntax tree.
    """
    parser = Parser(csharp_language())
    return ParsedSource(text=text, tree=parser.parse(text.encode("utf-8")))


def node_kind(node: Node) -> NodeKind:
    """Classify a syntax node."""
    if node.type in CLASS_NODE_TYPES:
        return NodeKind.CLASS
    if node.type in METHOD_NODE_TYPES:
        return NodeKind.METHOD
    return NodeKind.OTHER


def declaration_name(node: Node) -> str | None:
    """Return the identifier of a class or method declaration."""
    name = node.child_by_field_name("name")
    if name is None:
        return None
    return name.text.decode("utf-8")


def class_body(node: Node) -> Node | None:
    """Return the brace-delimited member list of a class-like declaration.

    Positional records declared without braces have no body.
    """
    body = node.child_by_field_name("body")
    if body is not None and body.type == "declaration_list":
        return body
    for child in node.children:
        if child.type == "declaration_list":
            return child
    return None


def method_body_span(node: Node) -> tuple[int, int] | None:
    """Return the byte span of a method body.

    For a block body this is the block itself. For an expression body it runs
    from `=>` through the terminating semicolon. Methods without a body
    (abstract, interface, extern, partial) return None.
    """
    children = node.children
    for index, child in enumerate(children):
        if child.type == "block":
            return child.start_byte, child.end_byte
        if child.type == "arrow_expression_clause":
            end = child.end_byte
            for sibling in children[index + 1:]:
                if sibling.type == ";":
                    end = sibling.end_byte
                    break
            return child.start_byte, end
    return None


def method_return_type(node: Node) -> str:
    """Return the return type text of a method declaration."""
    for field_name in ("returns", "type"):
        returns = node.child_by_field_name(field_name)
        if returns is not None:
            return returns.text.decode("utf-8")
    return ""


def iter_nodes(node: Node, kind: NodeKind):
    """Yield descendants of `node` of the given kind in document order."""
    for child in node.children:
        if node_kind(child) is kind:
            yield child
        yield from iter_nodes(child, kind)


def build_outline(parsed: ParsedSource) -> SourceOutline:
    """Build the navigator outline of a parsed file.

    Every class-like declaration is listed, nested ones included. Each class
    lists all methods found anywhere inside it, so methods of a nested class
    also appear under the enclosing class.

    Args:
        parsed (ParsedSource): Parsed file.

    Returns:
        SourceOutline: Classes and their methods.
    """
    outline = SourceOutline()
    for class_node in iter_nodes(parsed.root, NodeKind.CLASS):
        name = declaration_name(class_node)
        if name is None:
            continue
        entry = ClassOutline(name=name)
        for method_node in iter_nodes(class_node, NodeKind.METHOD):
            method_name = declaration_name(method_node)
            if method_name is None:
                continue
            entry.methods.append(
                MethodOutline(name=method_name, return_type=method_return_type(method_node))
            )
        outline.classes.append(entry)
    return outline
