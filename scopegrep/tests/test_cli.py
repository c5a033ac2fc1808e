"""Tests for the scopegrep command line."""

import pytest

from scopegrep.api.cli.main import EXIT_ERROR, EXIT_MATCH, EXIT_NO_MATCH, main
from scopegrep.api.cli.parsers import create_parser

SOURCE = """class Store:
    def get(self, key):
        return self.items[key]

    def put(self, key, value):
        self.items[key] = value
"""


@pytest.fixture
def source_dir(tmp_path):
    (tmp_path / "store.py").write_text(SOURCE)
    return tmp_path


def test_parser_defaults():
    args = create_parser().parse_args(["needle"])
    assert args.pattern == "needle"
    assert args.paths == []
    assert args.color is None
    assert args.verbose is False


def test_languages_listing(capsys):
    assert main(["--languages"]) == EXIT_MATCH
    out = capsys.readouterr().out
    assert "python" in out
    assert ".py" in out
    assert "dockerfile" in out


def test_pattern_required(capsys):
    assert main([]) == EXIT_ERROR


def test_invalid_pattern(source_dir):
    assert main(["(", str(source_dir), "--no-color"]) == EXIT_ERROR


def test_missing_path(tmp_path):
    assert main(["x", str(tmp_path / "absent"), "--no-color"]) == EXIT_ERROR


def test_bad_config_file(source_dir):
    config = source_dir / "bad.json"
    config.write_text("{nope")
    assert main(["get", str(source_dir), "--config", str(config)]) == EXIT_ERROR


def test_match(source_dir, capsys):
    pytest.importorskip("tree_sitter_language_pack")

    code = main(["return self", str(source_dir / "store.py"), "--no-color", "-n"])

    assert code == EXIT_MATCH
    out = capsys.readouterr().out
    assert f"{(source_dir / 'store.py').as_posix()}:" in out
    assert "  1│class Store:" in out
    assert "  3█        return self.items[key]" in out


def test_no_match(source_dir, capsys):
    pytest.importorskip("tree_sitter_language_pack")

    assert main(["nothing_like_this", str(source_dir), "--no-color"]) == EXIT_NO_MATCH
    assert capsys.readouterr().out == ""
