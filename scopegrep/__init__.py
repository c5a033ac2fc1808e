"""scopegrep: regex search with syntax-aware context.

Matches are shown inside the code structure that surrounds them: headers of
enclosing functions and classes, a bounded sample of the matched block, and
a single collapsed marker for each run of omitted lines.
"""

__version__ = "0.1.0"

from scopegrep.context.renderer import render_context
from scopegrep.context.selector import ContextSelector
from scopegrep.context.span_index import SpanIndex
from scopegrep.context.tree_context import TreeContext
from scopegrep.core.config.context_config import ContextConfig
from scopegrep.core.exceptions import (
    InvalidPatternError,
    ScopeGrepError,
    UnrecognizedFileTypeError,
    UnsupportedLanguageError,
)

__all__ = [
    "ContextConfig",
    "ContextSelector",
    "InvalidPatternError",
    "ScopeGrepError",
    "SpanIndex",
    "TreeContext",
    "UnrecognizedFileTypeError",
    "UnsupportedLanguageError",
    "__version__",
    "render_context",
]
