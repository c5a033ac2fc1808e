"""Regular-expression matching over source lines.

Produces the lines of interest that seed context selection, plus an optional
highlighted rendering of each matching line.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Sequence

from scopegrep.core.exceptions import InvalidPatternError

HIGHLIGHT_START = "\x1b[1;31m"
HIGHLIGHT_END = "\x1b[0m"


@dataclass
class GrepResult:
    """Matching line indices and their highlighted text (color mode only)."""

    found: set[int] = field(default_factory=set)
    highlighted: dict[int, str] = field(default_factory=dict)

    def __bool__(self) -> bool:
        return bool(self.found)


def compile_pattern(pattern: str, ignore_case: bool = False) -> re.Pattern[str]:
    """Compile ``pattern``, raising InvalidPatternError on bad syntax."""
    flags = re.IGNORECASE if ignore_case else 0
    try:
        return re.compile(pattern, flags)
    except re.error as exc:
        raise InvalidPatternError(pattern, str(exc)) from exc


def grep_lines(
    lines: Sequence[str],
    pattern: str | re.Pattern[str],
    ignore_case: bool = False,
    color: bool = False,
) -> GrepResult:
    """Find lines matching ``pattern``.

    Args:
        lines: Source lines to scan
        pattern: Regular expression text or a compiled pattern
        ignore_case: Match case-insensitively (text patterns only)
        color: Also record a highlighted variant of each matching line

    Returns:
        GrepResult with the 0-based matching line numbers
    """
    regex = (
        pattern
        if isinstance(pattern, re.Pattern)
        else compile_pattern(pattern, ignore_case)
    )

    result = GrepResult()
    for i, line in enumerate(lines):
        if regex.search(line) is None:
            continue
        result.found.add(i)
        if color:
            result.highlighted[i] = regex.sub(
                lambda m: f"{HIGHLIGHT_START}{m.group(0)}{HIGHLIGHT_END}", line
            )
    return result
