"""Line-indexed tables over one parsed syntax tree.

The span index answers three questions for every source line:

- which syntax nodes start on it (``nodes_starting_at``)
- which multi-line scopes cover it, identified by their start line
  (``scopes_for``)
- which lines make up the "header" of a scope starting on it
  (``header_window``)

The index is built with a single pre-order walk over named nodes and is never
mutated afterwards. Nodes are borrowed from the parse tree; the owner must
keep the tree alive for as long as the index is used.
"""

from __future__ import annotations

from typing import Iterator, Sequence

from scopegrep.core.types.common import LineNumber
from scopegrep.parsers.nodes import SyntaxNode


class SpanIndex:
    """Immutable per-file tables of node starts, scope membership and headers."""

    def __init__(
        self,
        num_lines: int,
        nodes_by_line: Sequence[Sequence[SyntaxNode]],
        scopes: Sequence[frozenset[int]],
        headers: Sequence[tuple[int, int] | None],
        root_line: LineNumber = 0,
        root_end: LineNumber | None = None,
        root_line_has_scope: bool = False,
    ) -> None:
        self._num_lines = num_lines
        self._nodes_by_line = tuple(tuple(nodes) for nodes in nodes_by_line)
        self._scopes = tuple(scopes)
        self._headers = tuple(headers)
        self._root_line = root_line
        self._root_end = root_line if root_end is None else root_end
        self._root_line_has_scope = root_line_has_scope

    @classmethod
    def build(cls, root: SyntaxNode, num_lines: int, header_max: int) -> SpanIndex:
        """Walk ``root`` pre-order and build the line tables.

        Args:
            root: Root of the parsed tree
            num_lines: Number of source lines; all tables are sized to it
            header_max: Maximum number of lines in a scope header window

        Returns:
            A populated, read-only SpanIndex
        """
        num_lines = max(0, num_lines)
        header_max = max(0, header_max)
        last = num_lines - 1

        nodes_by_line: list[list[SyntaxNode]] = [[] for _ in range(num_lines)]
        scopes: list[set[int]] = [set() for _ in range(num_lines)]
        headers: list[tuple[int, int] | None] = [None] * num_lines

        stack: list[SyntaxNode] = [root]
        while stack:
            node = stack.pop()
            start = node.start_line
            if start < 0 or start >= num_lines:
                continue
            end = min(node.end_line, last)
            size = end - start

            nodes_by_line[start].append(node)

            if size > 0:
                # Later (inner) nodes on the same start line overwrite outer ones.
                head_end = end
                if size > header_max:
                    head_end = start + header_max
                headers[start] = (start, head_end)

                for line in range(start, end + 1):
                    scopes[line].add(start)

            # Reversed so children pop in source order.
            stack.extend(reversed(list(node.named_children)))

        root_line = min(max(root.start_line, 0), max(last, 0))
        root_end = max(root_line, min(root.end_line, last))
        # A non-root block sharing the root's first line is a real scope.
        root_line_has_scope = num_lines > 0 and any(
            node is not root and min(node.end_line, last) > root_line
            for node in nodes_by_line[root_line]
        )
        return cls(
            num_lines=num_lines,
            nodes_by_line=nodes_by_line,
            scopes=[frozenset(s) for s in scopes],
            headers=headers,
            root_line=root_line,
            root_end=root_end,
            root_line_has_scope=root_line_has_scope,
        )

    @property
    def num_lines(self) -> int:
        return self._num_lines

    @property
    def root_line(self) -> LineNumber:
        """Start line of the tree root."""
        return self._root_line

    def in_range(self, line: LineNumber) -> bool:
        return 0 <= line < self._num_lines

    @property
    def root_span(self) -> tuple[int, int]:
        """Inclusive span of the tree root, clamped to the file."""
        return (self._root_line, self._root_end)

    def is_top_of_file(self, line: LineNumber) -> bool:
        """True for the scope that starts the file.

        That is line 0, or the root's first line when only the root itself
        opens a block there (files that begin with blank lines).
        """
        if line == 0:
            return True
        return line == self._root_line and not self._root_line_has_scope

    def nodes_starting_at(self, line: LineNumber) -> tuple[SyntaxNode, ...]:
        if not self.in_range(line):
            return ()
        return self._nodes_by_line[line]

    def scopes_for(self, line: LineNumber) -> frozenset[int]:
        """Start lines of every multi-line scope covering ``line``."""
        if not self.in_range(line):
            return frozenset()
        return self._scopes[line]

    def header_window(self, line: LineNumber) -> tuple[int, int]:
        """Half-open ``(start, end)`` range of header lines for a scope start."""
        if not self.in_range(line):
            return (line, line)
        header = self._headers[line]
        if header is None:
            return (line, line + 1)
        return header

    def node_end(self, node: SyntaxNode) -> LineNumber:
        """Last line of ``node`` clamped to the file."""
        return min(node.end_line, self._num_lines - 1)

    def enclosing_scope(self, line: LineNumber) -> tuple[int, int]:
        """Inclusive span of the block that ``line`` belongs to.

        Scans start lines from ``line`` backwards and returns the widest node,
        among the first start line that has one, whose span covers ``line``
        and extends past it. Lines where no node starts are self-bounded.
        """
        if not self.in_range(line) or not self._nodes_by_line[line]:
            return (line, line)

        for start in range(line, -1, -1):
            best_end = -1
            for node in self._nodes_by_line[start]:
                end = self.node_end(node)
                if start <= line <= end and end > line and end > best_end:
                    best_end = end
            if best_end >= 0:
                return (start, best_end)

        return (line, line)

    def iter_descendants(self, node: SyntaxNode) -> Iterator[SyntaxNode]:
        """Yield every named descendant of ``node`` in pre-order."""
        stack = list(reversed(list(node.named_children)))
        while stack:
            child = stack.pop()
            yield child
            stack.extend(reversed(list(child.named_children)))

    def describe(self, lines: Sequence[str]) -> str:
        """Render the per-line scope table used by verbose mode."""
        labels = [str(sorted(self._scopes[i])) for i in range(self._num_lines)]
        width = max((len(label) for label in labels), default=0)
        rows = []
        for i, label in enumerate(labels):
            text = lines[i] if i < len(lines) else ""
            rows.append(f"{label:<{width}} {i:3} {text}")
        return "\n".join(rows)
