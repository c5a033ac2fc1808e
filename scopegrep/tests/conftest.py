"""Shared fixtures: a hand-built syntax tree shaped like a small Python module."""

import pytest

from scopegrep.context.selector import ContextSelector
from scopegrep.context.span_index import SpanIndex
from scopegrep.core.config.context_config import ContextConfig
from scopegrep.parsers.nodes import SpanNode

SAMPLE_LINES = [
    "import os",  # 0
    "",  # 1
    "def small():",  # 2
    "    a = 1",  # 3
    "    return a",  # 4
    "",  # 5
    "def large():",  # 6
    "    x = 1",  # 7
    "    y = 2",  # 8
    "    if x:",  # 9
    "        z = 3",  # 10
    "        w = 4",  # 11
    "    for i in y:",  # 12
    "        print(i)",  # 13
    "    q = 5",  # 14
    "    return q",  # 15
    "",  # 16
    "def main():",  # 17
    "    small()",  # 18
    "    large()",  # 19
]


def stmt(line: int, kind: str = "expression_statement") -> SpanNode:
    return SpanNode(kind, line, line)


def block(start: int, end: int, *children: SpanNode) -> SpanNode:
    return SpanNode("block", start, end, tuple(children))


def build_sample_tree() -> SpanNode:
    small = SpanNode(
        "function_definition",
        2,
        4,
        (
            stmt(2, "identifier"),
            stmt(2, "parameters"),
            block(3, 4, stmt(3), stmt(4, "return_statement")),
        ),
    )
    large = SpanNode(
        "function_definition",
        6,
        15,
        (
            stmt(6, "identifier"),
            stmt(6, "parameters"),
            block(
                7,
                15,
                stmt(7),
                stmt(8),
                SpanNode(
                    "if_statement",
                    9,
                    11,
                    (stmt(9, "identifier"), block(10, 11, stmt(10), stmt(11))),
                ),
                SpanNode("for_statement", 12, 13, (block(13, 13, stmt(13)),)),
                stmt(14),
                stmt(15, "return_statement"),
            ),
        ),
    )
    main = SpanNode(
        "function_definition",
        17,
        19,
        (stmt(17, "identifier"), block(18, 19, stmt(18), stmt(19))),
    )
    return SpanNode(
        "module", 0, 19, (stmt(0, "import_statement"), small, large, main)
    )


def make_selector(
    lines=None, root=None, **options
) -> ContextSelector:
    """Selector over the sample module (or the given tree) with context options."""
    lines = SAMPLE_LINES if lines is None else lines
    root = build_sample_tree() if root is None else root
    config = ContextConfig(**options)
    index = SpanIndex.build(root, len(lines), config.header_max)
    return ContextSelector(index, lines, config)


@pytest.fixture
def sample_tree() -> SpanNode:
    return build_sample_tree()


@pytest.fixture
def sample_index(sample_tree) -> SpanIndex:
    return SpanIndex.build(sample_tree, len(SAMPLE_LINES), header_max=10)


@pytest.fixture
def sample_lines() -> list[str]:
    return list(SAMPLE_LINES)


@pytest.fixture
def selector_factory():
    return make_selector
