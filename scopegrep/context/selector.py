"""Context selection: decide which lines to show around lines of interest.

Selection runs in fixed phases over a monotonically growing show-set:

1. seed the show-set with every line of interest (LOI)
2. pad each line of interest by ``loi_pad`` lines
3. optionally add the file's last line and its parent scopes
4. reveal the headers and boundaries of every scope enclosing an LOI
5. sample the body of any block that starts on an LOI
6. add the top ``margin`` lines
7. close one-line gaps

A selector is built per selection run and discarded after rendering.
"""

from __future__ import annotations

from typing import Iterable, Sequence

from loguru import logger

from scopegrep.core.config.context_config import ContextConfig
from scopegrep.core.types.common import LineNumber
from scopegrep.context.span_index import SpanIndex
from scopegrep.parsers.nodes import SyntaxNode, node_size


class ContextSelector:
    """Computes the show-set for one file and one set of lines of interest."""

    def __init__(
        self,
        index: SpanIndex,
        lines: Sequence[str],
        config: ContextConfig | None = None,
    ) -> None:
        self.index = index
        self.lines = lines
        self.config = config or ContextConfig()
        self.num_lines = index.num_lines

        self.lines_of_interest: set[int] = set()
        self._show_lines: set[int] = set()
        self._done_parent_scopes: set[int] = set()
        self._done_child_scopes: set[int] = set()

    @property
    def show_lines(self) -> frozenset[int]:
        return frozenset(self._show_lines)

    def add_lines_of_interest(self, lines: Iterable[LineNumber]) -> None:
        """Union ``lines`` into the LOI set without recomputing context."""
        self.lines_of_interest.update(lines)

    def add_context(self) -> None:
        """Expand the show-set from the current lines of interest."""
        if not self.lines_of_interest:
            return

        lois = sorted(i for i in self.lines_of_interest if self._in_range(i))
        self._show_lines.update(lois)

        pad = self.config.loi_pad
        if pad > 0:
            padded: set[int] = set()
            for line in lois:
                start = max(0, line - pad)
                end = min(self.num_lines - 1, line + pad)
                padded.update(range(start, end + 1))
            self._show_lines.update(padded)

        if self.config.last_line and self.num_lines > 0:
            bottom = self.num_lines - 1
            self._show_lines.add(bottom)
            self.add_parent_scopes(bottom)

        if self.config.parent_context:
            for i in lois:
                self.add_parent_scopes(i)

        if self.config.child_context:
            for i in lois:
                self.add_child_context(i)

        self._show_lines.update(range(min(self.config.margin, self.num_lines)))

        self.close_small_gaps()
        logger.trace(
            f"Selected {len(self._show_lines)} of {self.num_lines} lines "
            f"for {len(lois)} line(s) of interest"
        )

    def add_parent_scopes(self, i: LineNumber) -> None:
        """Reveal the header and boundary of every scope enclosing line ``i``."""
        if not self._in_range(i) or i in self._done_parent_scopes:
            return
        self._done_parent_scopes.add(i)

        for scope_start in sorted(self.index.scopes_for(i)):
            if self.index.is_top_of_file(scope_start):
                # The top-of-file scope spans the whole file: only its header
                # is ever revealed, and only on request.
                if self.config.show_top_of_file_parent_scope:
                    self._show_header(scope_start)
                continue

            self._show_header(scope_start)

            start, end = self.index.enclosing_scope(scope_start)
            if end == scope_start or (start, end) == self.index.root_span:
                continue
            self._show_range(start, end)

    def add_child_context(self, i: LineNumber) -> None:
        """Reveal a bounded sample of the block starting at line ``i``."""
        if not self._in_range(i) or i in self._done_child_scopes:
            return
        roots = self.index.nodes_starting_at(i)
        if not roots:
            return
        self._done_child_scopes.add(i)

        _, last_line = self.index.enclosing_scope(i)
        size = last_line - i
        if size < 0:
            return

        if size < self.config.small_scope_lines:
            self._show_range(i, last_line)
            return

        children: list[SyntaxNode] = []
        for node in roots:
            children.extend(self.index.iter_descendants(node))
        # Stable sort: equal-sized children keep source order.
        children.sort(key=node_size, reverse=True)

        budget = self.config.child_budget(size)
        added = 0
        for child in children:
            if added >= budget:
                break
            remaining = budget - added

            new_lines = self._child_lines(child, floor=i) - self._show_lines
            if len(new_lines) > remaining:
                head_start, head_end = self.index.header_window(child.start_line)
                new_lines = set(self._clamped_range(head_start, head_end - 1))
                new_lines -= self._show_lines
                if len(new_lines) > remaining:
                    continue

            self._show_lines.update(new_lines)
            added += len(new_lines)

    def close_small_gaps(self) -> None:
        """Fill every gap of exactly one line between shown lines.

        A single pass over the sorted show-set; fills are not re-examined.
        Gaps before a blank final line are left open.
        """
        ordered = sorted(self._show_lines)
        last = self.num_lines - 1
        closed = set(self._show_lines)

        for curr, nxt in zip(ordered, ordered[1:]):
            if nxt == last and self._is_blank(nxt):
                continue
            if nxt - curr == 2:
                closed.add(curr + 1)

        self._show_lines = closed

    def _child_lines(self, child: SyntaxNode, floor: LineNumber) -> set[int]:
        """Span of ``child`` plus headers of in-block scopes containing its start."""
        start = child.start_line
        lines = set(self._clamped_range(start, self.index.node_end(child)))
        for scope_start in self.index.scopes_for(start):
            if scope_start < floor:
                continue
            head_start, head_end = self.index.header_window(scope_start)
            lines.update(self._clamped_range(head_start, head_end - 1))
        return lines

    def _show_header(self, scope_start: LineNumber) -> None:
        head_start, head_end = self.index.header_window(scope_start)
        self._show_range(head_start, head_end - 1)

    def _show_range(self, start: LineNumber, end: LineNumber) -> None:
        """Show the inclusive range ``[start, end]`` clipped to the file."""
        self._show_lines.update(self._clamped_range(start, end))

    def _clamped_range(self, start: LineNumber, end: LineNumber) -> range:
        return range(max(0, start), min(end, self.num_lines - 1) + 1)

    def _in_range(self, line: LineNumber) -> bool:
        return 0 <= line < self.num_lines

    def _is_blank(self, line: LineNumber) -> bool:
        return line >= len(self.lines) or not self.lines[line].strip()
