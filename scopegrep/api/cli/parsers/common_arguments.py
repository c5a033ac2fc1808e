"""Common CLI argument patterns shared across parsers."""

import argparse
from pathlib import Path


def add_common_arguments(parser: argparse.ArgumentParser) -> None:
    """Add logging and config-file arguments.

    Args:
        parser: Argument parser to add common arguments to
    """
    parser.add_argument(
        "--config",
        type=Path,
        metavar="PATH",
        help="JSON configuration file with 'context' and 'search' sections",
    )

    group = parser.add_argument_group("logging options")
    group.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log progress and the per-line scope table of each file",
    )
    group.add_argument(
        "--debug",
        action="store_true",
        help="Log skipped files and configuration sources",
    )


def add_config_arguments(parser: argparse.ArgumentParser, configs: list[str]) -> None:
    """Add CLI arguments for specified config sections.

    Args:
        parser: Argument parser to add config arguments to
        configs: Config section names to include ("search", "context")
    """
    if "search" in configs:
        from scopegrep.core.config.search_config import SearchConfig

        SearchConfig.add_cli_arguments(parser)

    if "context" in configs:
        from scopegrep.core.config.context_config import ContextConfig

        ContextConfig.add_cli_arguments(parser)
