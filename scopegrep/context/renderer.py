from __future__ import annotations

from typing import AbstractSet, Mapping, Sequence

ANSI_RESET = "\x1b[0m"
ANSI_RED = "\x1b[31m"

LOI_GLYPH = "█"
SPACER_GLYPH = "│"
ELLIPSIS = "⋮...\n"
NUMBERED_ELLIPSIS = "...⋮...\n"


def line_spacer(is_loi: bool, *, mark_lois: bool, color: bool) -> str:
    """Return the one-character gutter between line number and text."""
    spacer = LOI_GLYPH if is_loi and mark_lois else SPACER_GLYPH
    if color:
        return f"{ANSI_RED}{spacer}{ANSI_RESET}"
    return spacer


def render_context(
    lines: Sequence[str],
    show_lines: AbstractSet[int],
    *,
    lines_of_interest: AbstractSet[int] = frozenset(),
    highlighted: Mapping[int, str] | None = None,
    color: bool = False,
    line_number: bool = False,
    mark_lois: bool = True,
) -> str:
    """Render shown lines in order, collapsing each hidden run into one marker.

    An empty show-set renders as the empty string, never as the whole file.
    """
    if not show_lines:
        return ""

    highlighted = highlighted or {}
    marker = NUMBERED_ELLIPSIS if line_number else ELLIPSIS
    out: list[str] = []

    if color:
        out.append(f"{ANSI_RESET}\n")

    pending_ellipsis = 0 not in show_lines
    for i, line in enumerate(lines):
        if i not in show_lines:
            if pending_ellipsis:
                out.append(marker)
                pending_ellipsis = False
            continue

        spacer = line_spacer(
            i in lines_of_interest, mark_lois=mark_lois, color=color
        )
        text = highlighted.get(i, line).rstrip("\r")
        if line_number:
            out.append(f"{i + 1:3}{spacer}{text}\n")
        else:
            out.append(f"{spacer}{text}\n")
        pending_ellipsis = True

    return "".join(out)
