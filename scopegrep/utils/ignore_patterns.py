"""Ignore pattern handling for file discovery (gitignore semantics)."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

import pathspec
from loguru import logger

DEFAULT_IGNORE_PATTERNS: tuple[str, ...] = (
    ".astignore",
    ".git/",
    ".gitignore",
    ".venv/",
    "venv/",
    "testdata/",
    "go.sum",
    "node_modules/",
    "dist/",
    ".*",
)


def load_ignore_file(path: Path) -> list[str]:
    """Read patterns from an ignore file.

    Blank lines and ``#`` comments are skipped and duplicates removed, keeping
    first-seen order. A missing file yields no patterns.
    """
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return []
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning(f"Failed to read ignore file ({path}): {exc}")
        return []

    patterns: list[str] = []
    seen: set[str] = set()
    for line in raw.splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("#") or stripped in seen:
            continue
        seen.add(stripped)
        patterns.append(stripped)
    return patterns


def build_ignore_spec(patterns: Iterable[str]) -> pathspec.GitIgnoreSpec:
    return pathspec.GitIgnoreSpec.from_lines(list(patterns))


class IgnoreMatcher:
    """Decides whether a path below a search root should be skipped."""

    def __init__(
        self,
        root: Path,
        *,
        ignore_filename: str = ".astignore",
        use_defaults: bool = True,
        extra_patterns: Iterable[str] = (),
    ) -> None:
        self.root = root
        patterns: list[str] = list(DEFAULT_IGNORE_PATTERNS) if use_defaults else []
        patterns.extend(load_ignore_file(root / ignore_filename))
        patterns.extend(extra_patterns)
        self.patterns = patterns
        self._spec = build_ignore_spec(patterns)

    def matches(self, path: Path, is_dir: bool = False) -> bool:
        """True when ``path`` (below the root, or root-relative) is ignored."""
        try:
            rel = path.relative_to(self.root)
        except ValueError:
            rel = path
        value = rel.as_posix()
        if value in ("", "."):
            return False
        if is_dir:
            value = f"{value}/"
        return self._spec.match_file(value)
