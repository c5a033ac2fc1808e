"""Parsing collaborators: language detection and syntax node views."""

from .nodes import SpanNode, SyntaxNode, TreeSitterNode
from .parser_factory import (
    DEFAULT_REGISTRY,
    EXTENSION_TO_LANGUAGE,
    FILENAME_TO_LANGUAGE,
    LanguageRegistry,
    ParsedSource,
    detect_language,
    parse_source,
)

__all__ = [
    "DEFAULT_REGISTRY",
    "EXTENSION_TO_LANGUAGE",
    "FILENAME_TO_LANGUAGE",
    "LanguageRegistry",
    "ParsedSource",
    "SpanNode",
    "SyntaxNode",
    "TreeSitterNode",
    "detect_language",
    "parse_source",
]
