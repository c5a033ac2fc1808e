"""Argument parsers for the scopegrep CLI."""

from .search_parser import create_parser

__all__ = ["create_parser"]
