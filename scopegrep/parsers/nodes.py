"""Syntax node views consumed by the span index.

The context engine only needs a node's kind, its first and last source line
and its named children. ``SyntaxNode`` captures that read-only surface so the
engine can run over tree-sitter trees or over hand-built ``SpanNode`` trees.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, Sequence

if TYPE_CHECKING:
    from tree_sitter import Node


class SyntaxNode(Protocol):
    """Read-only view of a parsed syntax node."""

    @property
    def kind(self) -> str: ...

    @property
    def start_line(self) -> int: ...

    @property
    def end_line(self) -> int: ...

    @property
    def named_children(self) -> Sequence[SyntaxNode]: ...


@dataclass(frozen=True, eq=False)
class SpanNode:
    """In-memory syntax node, used for tests and pre-built trees."""

    kind: str
    start_line: int
    end_line: int
    children: tuple[SpanNode, ...] = ()

    @property
    def named_children(self) -> Sequence[SpanNode]:
        return self.children


class TreeSitterNode:
    """Adapter exposing a tree-sitter ``Node`` as a ``SyntaxNode``.

    The wrapped node is borrowed; it stays valid only while the owning
    ``Tree`` is alive.
    """

    __slots__ = ("_node",)

    def __init__(self, node: Node) -> None:
        self._node = node

    @property
    def kind(self) -> str:
        return self._node.type

    @property
    def start_line(self) -> int:
        return self._node.start_point[0]

    @property
    def end_line(self) -> int:
        return self._node.end_point[0]

    @property
    def named_children(self) -> Sequence[TreeSitterNode]:
        return [TreeSitterNode(child) for child in self._node.named_children]

    def __repr__(self) -> str:
        return f"TreeSitterNode({self.kind}, {self.start_line}-{self.end_line})"


def node_size(node: SyntaxNode) -> int:
    """Number of lines a node spans beyond its first line."""
    return node.end_line - node.start_line
