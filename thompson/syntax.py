"""
Regular expression syntax trees

The trees are produced by an external parser, this module only gives
them a shape the :func:`NFA <thompson.automatons.NFA>` builder can walk.
"""


from dataclasses import dataclass
from typing import Any, Mapping, Optional, Tuple

KINDS = ("empty", "text", "or", "cat", "star", "plus", "optional")


class StructureError(Exception):
    """The syntax tree is not shaped as expected"""

    def __init__(self, message, node_type, field=None):
        self.node_type = node_type
        self.field = field
        if field is None:
            super().__init__("{}: {!r}".format(message, node_type))
        else:
            super().__init__("{}. Node {!r} requires {!r}".format(message, node_type, field))


@dataclass(frozen=True)
class SyntaxNode:
    type: str
    symbol: Optional[str] = None
    parts: Optional[Tuple["SyntaxNode", ...]] = None
    sub: Optional["SyntaxNode"] = None


def empty() -> SyntaxNode:
    return SyntaxNode("empty")


def text(symbol: str) -> SyntaxNode:
    return SyntaxNode("text", symbol=symbol)


def alt(*parts: SyntaxNode) -> SyntaxNode:
    return SyntaxNode("or", parts=parts)


def cat(*parts: SyntaxNode) -> SyntaxNode:
    return SyntaxNode("cat", parts=parts)


def star(sub: SyntaxNode) -> SyntaxNode:
    return SyntaxNode("star", sub=sub)


def plus(sub: SyntaxNode) -> SyntaxNode:
    return SyntaxNode("plus", sub=sub)


def optional(sub: SyntaxNode) -> SyntaxNode:
    return SyntaxNode("optional", sub=sub)


def from_mapping(data: Mapping[str, Any]) -> SyntaxNode:
    """
    Convert nested mappings, as decoded from JSON, into a tree of
    :func:`SyntaxNode <thompson.syntax.SyntaxNode>`.

    The literal of a ``text`` node is read from ``symbol`` or, as some
    parsers name it, ``text``. Unknown kinds are kept as-is and only
    rejected when the tree is built.
    """
    try:
        type_ = data["type"]
    except (KeyError, TypeError):
        raise StructureError("Missing node type", None, "type") from None

    symbol = data.get("symbol", data.get("text"))
    if symbol is not None and not isinstance(symbol, str):
        raise StructureError("Literal is not a string", type_, "symbol")
    parts = data.get("parts")
    if parts is not None:
        if not isinstance(parts, (list, tuple)):
            raise StructureError("Sub-nodes are not a list", type_, "parts")
        parts = tuple(map(from_mapping, parts))
    sub = data.get("sub")
    if sub is not None:
        if not isinstance(sub, Mapping):
            raise StructureError("Sub-node is not a mapping", type_, "sub")
        sub = from_mapping(sub)
    return SyntaxNode(type_, symbol=symbol, parts=parts, sub=sub)
