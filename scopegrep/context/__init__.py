"""Context selection engine: span index, selector and renderer."""

from .renderer import render_context
from .selector import ContextSelector
from .span_index import SpanIndex
from .tree_context import TreeContext, split_source_lines

__all__ = [
    "ContextSelector",
    "SpanIndex",
    "TreeContext",
    "render_context",
    "split_source_lines",
]
