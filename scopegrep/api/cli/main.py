"""scopegrep command-line entry point.

Exit codes follow grep: 0 when at least one file matched, 1 when nothing
matched, 2 when an error occurred (bad pattern, bad config, unreadable path).
"""

from __future__ import annotations

import argparse
import sys
from typing import Sequence

from loguru import logger

from scopegrep.api.cli.parsers.search_parser import create_parser
from scopegrep.core.config.config import Config
from scopegrep.core.exceptions import ConfigFileError, InvalidPatternError
from scopegrep.parsers.parser_factory import DEFAULT_REGISTRY, LanguageRegistry
from scopegrep.services.search_service import SearchService

EXIT_MATCH = 0
EXIT_NO_MATCH = 1
EXIT_ERROR = 2


def setup_logging(verbose: bool = False, debug: bool = False) -> None:
    """Configure logging with loguru."""
    logger.remove()  # Remove default handler

    level = "DEBUG" if debug else "INFO" if verbose else "WARNING"
    logger.add(
        sys.stderr,
        format="<level>{level: <8}</level> | <cyan>{name}</cyan> - <level>{message}</level>",
        level=level,
        colorize=None,
    )


def format_languages(registry: LanguageRegistry = DEFAULT_REGISTRY) -> str:
    """Describe supported languages and the file names that select them."""
    keys_by_language: dict[str, list[str]] = {}
    for ext, lang in registry.extensions.items():
        keys_by_language.setdefault(lang.value, []).append(ext)
    for name, lang in registry.filenames.items():
        keys_by_language.setdefault(lang.value, []).append(name)

    rows = []
    for lang in registry.supported_languages():
        keys = ", ".join(sorted(keys_by_language.get(lang.value, [])))
        rows.append(f"{lang.value:<12} {keys}")
    return "\n".join(rows)


def _resolve_color(args: argparse.Namespace, config: Config) -> None:
    if getattr(args, "color", None) is None and "color" not in config.context.model_fields_set:
        config.context.color = sys.stdout.isatty()


def run(args: argparse.Namespace) -> int:
    """Execute a search for parsed CLI arguments."""
    try:
        config = Config.load(args)
    except ConfigFileError as exc:
        logger.error(str(exc))
        return EXIT_ERROR
    _resolve_color(args, config)

    service = SearchService(config)
    paths = args.paths or ["."]
    matched = 0

    try:
        for result in service.search(args.pattern, paths):
            matched += 1
            sys.stdout.write(f"\n{result.display_path}:\n")
            sys.stdout.write(result.output)
    except InvalidPatternError as exc:
        logger.error(str(exc))
        return EXIT_ERROR

    sys.stdout.flush()
    logger.info(
        f"Searched {service.files_scanned} file(s), skipped {service.files_skipped}, "
        f"{matched} matched"
    )

    if service.error_count:
        return EXIT_ERROR
    return EXIT_MATCH if matched else EXIT_NO_MATCH


def main(argv: Sequence[str] | None = None) -> int:
    parser = create_parser()
    args = parser.parse_args(argv)

    setup_logging(verbose=args.verbose, debug=args.debug)

    if args.languages:
        print(format_languages())
        return EXIT_MATCH

    if not args.pattern:
        parser.print_usage(sys.stderr)
        logger.error("a search pattern is required")
        return EXIT_ERROR

    return run(args)


if __name__ == "__main__":
    sys.exit(main())
