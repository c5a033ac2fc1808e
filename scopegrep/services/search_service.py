"""Search service: walk paths and render syntax-aware context per file.

Each file gets its own TreeContext; nothing is shared between files, so a
failure in one file never affects another. Unknown or unsupported file types
are skipped, not treated as errors.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator

from loguru import logger

from scopegrep.context.tree_context import TreeContext
from scopegrep.core.config.config import Config
from scopegrep.core.exceptions import FileTypeError
from scopegrep.parsers.parser_factory import DEFAULT_REGISTRY, LanguageRegistry
from scopegrep.search.matcher import compile_pattern
from scopegrep.utils.ignore_patterns import IgnoreMatcher

BINARY_SNIFF_BYTES = 8192


@dataclass
class FileResult:
    """Rendered context for one matching file."""

    path: Path
    display_path: str
    output: str
    match_count: int


def is_binary(content: bytes) -> bool:
    return b"\0" in content[:BINARY_SNIFF_BYTES]


class SearchService:
    """Runs a pattern over files and directories."""

    def __init__(
        self,
        config: Config | None = None,
        registry: LanguageRegistry = DEFAULT_REGISTRY,
    ) -> None:
        self.config = config or Config()
        self.registry = registry
        self.files_scanned = 0
        self.files_skipped = 0
        self.error_count = 0

    def iter_files(self, root: Path) -> Iterator[Path]:
        """Yield files below ``root`` that are not ignored, in sorted order."""
        search = self.config.search
        matcher = IgnoreMatcher(
            root,
            ignore_filename=search.ignore_filename,
            use_defaults=search.use_default_ignores,
            extra_patterns=search.extra_ignore_patterns,
        )

        def _on_error(exc: OSError) -> None:
            logger.warning(f"Cannot read directory {exc.filename}: {exc.strerror}")
            self.error_count += 1

        for dirpath, dirnames, filenames in os.walk(root, onerror=_on_error):
            current = Path(dirpath)
            dirnames[:] = sorted(
                d for d in dirnames if not matcher.matches(current / d, is_dir=True)
            )
            for name in sorted(filenames):
                path = current / name
                if matcher.matches(path):
                    continue
                yield path

    def search_file(
        self, path: Path, pattern: str, display_path: str | None = None
    ) -> FileResult | None:
        """Search one file; return None when it is skipped or has no match."""
        display = display_path or path.as_posix()
        if not self.registry.is_supported(path):
            logger.debug(f"Skipping {display}: no grammar for this file type")
            self.files_skipped += 1
            return None

        try:
            content = path.read_bytes()
        except OSError as exc:
            logger.warning(f"Failed to read {display}: {exc}")
            self.error_count += 1
            return None

        if is_binary(content):
            logger.debug(f"Skipping binary file {display}")
            self.files_skipped += 1
            return None

        try:
            tc = TreeContext(path, content, self.config.context, registry=self.registry)
        except FileTypeError as exc:
            logger.debug(f"Skipping {display}: {exc}")
            self.files_skipped += 1
            return None

        self.files_scanned += 1
        regex = compile_pattern(pattern, self.config.search.ignore_case)
        found = tc.grep(regex)
        if not found:
            return None

        tc.add_lines_of_interest(found)
        tc.add_context()
        return FileResult(
            path=path,
            display_path=display,
            output=tc.format(),
            match_count=len(found),
        )

    def search(self, pattern: str, paths: Iterable[str | Path]) -> Iterator[FileResult]:
        """Yield a FileResult for every matching file under ``paths``.

        Raises:
            InvalidPatternError: If ``pattern`` is not a valid regular expression
        """
        # Fail on a bad pattern before touching the filesystem.
        compile_pattern(pattern, self.config.search.ignore_case)

        for raw in paths:
            target = Path(raw)
            if target.is_file():
                result = self.search_file(target, pattern, target.as_posix())
                if result is not None:
                    yield result
                continue
            if not target.is_dir():
                logger.error(f"No such file or directory: {target}")
                self.error_count += 1
                continue

            root = target.resolve()
            for path in self.iter_files(root):
                display = _display_path(path, root, target)
                result = self.search_file(path, pattern, display)
                if result is not None:
                    yield result


def _display_path(path: Path, root: Path, target: Path) -> str:
    rel = path.relative_to(root)
    if target == Path("."):
        return rel.as_posix()
    return (target / rel).as_posix()
