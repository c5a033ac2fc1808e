"""Per-file context facade: parse, match, select and render.

Typical use::

    tc = TreeContext("app.py", source, ContextConfig(line_number=True))
    tc.add_lines_of_interest(tc.grep("def main"))
    tc.add_context()
    print(tc.format())
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any, Iterable

from loguru import logger

from scopegrep.context.renderer import render_context
from scopegrep.context.selector import ContextSelector
from scopegrep.context.span_index import SpanIndex
from scopegrep.core.config.context_config import ContextConfig
from scopegrep.core.types.common import Language, LineNumber
from scopegrep.parsers.nodes import SyntaxNode
from scopegrep.parsers.parser_factory import (
    DEFAULT_REGISTRY,
    LanguageRegistry,
    ParsedSource,
    parse_source,
)
from scopegrep.search.matcher import grep_lines


def split_source_lines(text: str) -> list[str]:
    """Split on newlines, ignoring a single trailing newline."""
    lines = text.split("\n")
    if len(lines) > 1 and lines[-1] == "":
        lines.pop()
    return lines


class TreeContext:
    """One file's span index plus one selection run over it."""

    def __init__(
        self,
        filename: str | Path,
        source: str | bytes,
        config: ContextConfig | None = None,
        *,
        root: SyntaxNode | None = None,
        registry: LanguageRegistry = DEFAULT_REGISTRY,
        **options: Any,
    ) -> None:
        """Parse ``source`` and index it.

        Args:
            filename: Path used to resolve the language
            source: File content
            config: Context options; keyword ``options`` override its fields
            root: Pre-parsed tree root; skips tree-sitter parsing when given
            registry: Extension to grammar lookup

        Raises:
            UnrecognizedFileTypeError: When ``root`` is None and the file type is unknown
            UnsupportedLanguageError: When ``root`` is None and no grammar exists
        """
        base = config or ContextConfig()
        if options:
            base = ContextConfig.model_validate({**base.model_dump(), **options})
        self.config = base
        self.filename = str(filename)

        text = source.decode("utf-8", errors="replace") if isinstance(source, bytes) else source
        self.lines = split_source_lines(text)

        self._parsed: ParsedSource | None = None
        if root is None:
            # Keep the parse result alive: index nodes borrow from its tree.
            self._parsed = parse_source(filename, source, registry)
            root = self._parsed.root

        self.index = SpanIndex.build(root, len(self.lines), self.config.header_max)
        self.selector = ContextSelector(self.index, self.lines, self.config)
        self.highlighted: dict[int, str] = {}

        if self.config.verbose:
            logger.info(f"Scope table for {self.filename}:\n{self.describe()}")

    @property
    def language(self) -> Language | None:
        return self._parsed.language if self._parsed else None

    @property
    def num_lines(self) -> int:
        return len(self.lines)

    @property
    def lines_of_interest(self) -> set[int]:
        return self.selector.lines_of_interest

    @property
    def show_lines(self) -> frozenset[int]:
        return self.selector.show_lines

    def grep(self, pattern: str | re.Pattern[str], ignore_case: bool = False) -> set[int]:
        """Return lines matching ``pattern``; highlights are kept for rendering."""
        result = grep_lines(
            self.lines, pattern, ignore_case=ignore_case, color=self.config.color
        )
        self.highlighted.update(result.highlighted)
        return result.found

    def add_lines_of_interest(self, lines: Iterable[LineNumber]) -> None:
        self.selector.add_lines_of_interest(lines)

    def add_context(self) -> None:
        self.selector.add_context()

    def format(self) -> str:
        """Render the selected lines; empty until ``add_context`` selects any."""
        return render_context(
            self.lines,
            self.selector.show_lines,
            lines_of_interest=self.selector.lines_of_interest,
            highlighted=self.highlighted,
            color=self.config.color,
            line_number=self.config.line_number,
            mark_lois=self.config.mark_lois,
        )

    def describe(self) -> str:
        """Per-line scope table for debugging."""
        return self.index.describe(self.lines)
