"""Tests for the line-indexed span tables."""

from scopegrep.context.span_index import SpanIndex
from scopegrep.parsers.nodes import SpanNode


class TestNodesStartingAt:
    def test_nodes_listed_in_pre_order(self, sample_index):
        kinds = [n.kind for n in sample_index.nodes_starting_at(6)]
        assert kinds == ["function_definition", "identifier", "parameters"]

    def test_root_and_first_child_share_line(self, sample_index):
        kinds = [n.kind for n in sample_index.nodes_starting_at(0)]
        assert kinds == ["module", "import_statement"]

    def test_blank_line_has_no_nodes(self, sample_index):
        assert sample_index.nodes_starting_at(1) == ()

    def test_out_of_range_is_empty(self, sample_index):
        assert sample_index.nodes_starting_at(-1) == ()
        assert sample_index.nodes_starting_at(500) == ()


class TestScopes:
    def test_nested_scopes(self, sample_index):
        assert sample_index.scopes_for(10) == frozenset({0, 6, 7, 9, 10})

    def test_blank_line_inside_module(self, sample_index):
        assert sample_index.scopes_for(16) == frozenset({0})

    def test_single_line_nodes_open_no_scope(self, sample_index):
        # for_statement's body is a one-line block: only the loop is a scope.
        assert sample_index.scopes_for(13) == frozenset({0, 6, 7, 12})

    def test_out_of_range_is_empty(self, sample_index):
        assert sample_index.scopes_for(20) == frozenset()

    def test_spans_past_the_end_are_clamped(self):
        root = SpanNode("module", 0, 40, (SpanNode("block", 2, 99),))
        index = SpanIndex.build(root, 5, header_max=10)

        assert index.scopes_for(4) == frozenset({0, 2})
        assert index.header_window(2) == (2, 4)
        assert index.node_end(root) == 4


class TestHeaderWindow:
    def test_short_scope_header_is_whole_span(self, sample_index):
        assert sample_index.header_window(6) == (6, 15)
        assert sample_index.header_window(9) == (9, 11)

    def test_long_scope_header_is_clamped(self, sample_index):
        assert sample_index.header_window(0) == (0, 10)

    def test_header_max_limits_window(self, sample_tree):
        index = SpanIndex.build(sample_tree, 20, header_max=2)
        assert index.header_window(6) == (6, 8)

    def test_zero_header_max(self, sample_tree):
        index = SpanIndex.build(sample_tree, 20, header_max=0)
        assert index.header_window(6) == (6, 6)

    def test_default_window_is_the_line_itself(self, sample_index):
        assert sample_index.header_window(13) == (13, 14)
        assert sample_index.header_window(1) == (1, 2)

    def test_inner_node_on_same_line_wins(self):
        inner = SpanNode("block", 0, 3)
        root = SpanNode("module", 0, 8, (inner,))
        index = SpanIndex.build(root, 9, header_max=10)

        assert index.header_window(0) == (0, 3)

    def test_out_of_range_is_empty_window(self, sample_index):
        assert sample_index.header_window(50) == (50, 50)


class TestEnclosingScope:
    def test_scope_starting_on_line(self, sample_index):
        assert sample_index.enclosing_scope(6) == (6, 15)
        assert sample_index.enclosing_scope(10) == (10, 11)

    def test_last_line_of_block_resolves_to_outer_block(self, sample_index):
        assert sample_index.enclosing_scope(11) == (7, 15)

    def test_line_without_nodes_is_self_bounded(self, sample_index):
        assert sample_index.enclosing_scope(1) == (1, 1)

    def test_nothing_extends_past_the_last_line(self, sample_index):
        assert sample_index.enclosing_scope(19) == (19, 19)

    def test_out_of_range(self, sample_index):
        assert sample_index.enclosing_scope(99) == (99, 99)
        assert sample_index.enclosing_scope(-3) == (-3, -3)


class TestTopOfFile:
    def test_line_zero_is_top_of_file(self, sample_index):
        assert sample_index.root_line == 0
        assert sample_index.is_top_of_file(0)
        assert not sample_index.is_top_of_file(6)

    def test_root_after_leading_blank_lines(self):
        root = SpanNode("module", 2, 6, (SpanNode("function", 3, 6),))
        index = SpanIndex.build(root, 7, header_max=10)

        assert index.root_line == 2
        assert index.is_top_of_file(2)
        assert not index.is_top_of_file(3)
        assert index.root_span == (2, 6)

    def test_block_sharing_root_line_is_not_top_of_file(self):
        root = SpanNode("module", 2, 6, (SpanNode("function_definition", 2, 4),))
        index = SpanIndex.build(root, 7, header_max=10)

        assert not index.is_top_of_file(2)
        assert index.is_top_of_file(0)
        assert index.header_window(2) == (2, 4)


def test_empty_file():
    index = SpanIndex.build(SpanNode("module", 0, 0), 0, header_max=10)

    assert index.num_lines == 0
    assert index.scopes_for(0) == frozenset()
    assert index.describe([]) == ""


def test_iter_descendants_pre_order(sample_tree, sample_index):
    main = sample_tree.children[-1]
    kinds = [(n.kind, n.start_line) for n in sample_index.iter_descendants(main)]
    assert kinds == [
        ("identifier", 17),
        ("block", 18),
        ("expression_statement", 18),
        ("expression_statement", 19),
    ]


def test_describe_lists_scopes_per_line(sample_index, sample_lines):
    table = sample_index.describe(sample_lines).splitlines()

    assert len(table) == len(sample_lines)
    assert "[0, 6, 7, 9, 10]" in table[10]
    assert table[10].endswith("        z = 3")
