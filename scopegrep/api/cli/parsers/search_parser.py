"""Argument parser for the scopegrep command."""

import argparse

from scopegrep import __version__

from .common_arguments import add_common_arguments, add_config_arguments


def create_parser() -> argparse.ArgumentParser:
    """Build the top-level ``scopegrep`` argument parser."""
    parser = argparse.ArgumentParser(
        prog="scopegrep",
        description=(
            "Search source files with a regular expression and show each match "
            "inside its syntax-aware context: enclosing function and class "
            "headers, a sample of the matched block, and collapsed markers for "
            "everything else."
        ),
    )

    parser.add_argument(
        "pattern",
        nargs="?",
        help="Regular expression to search for",
    )
    parser.add_argument(
        "paths",
        nargs="*",
        default=None,
        help="Files or directories to search (default: current directory)",
    )
    parser.add_argument(
        "--languages",
        action="store_true",
        help="List supported languages and file extensions, then exit",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    add_common_arguments(parser)
    add_config_arguments(parser, ["search", "context"])

    return parser
