"""Tests for language detection and tree-sitter parsing."""

from types import MappingProxyType

import pytest

from scopegrep.core.exceptions import (
    FileTypeError,
    UnrecognizedFileTypeError,
    UnsupportedLanguageError,
)
from scopegrep.core.types.common import Language
from scopegrep.parsers import parser_factory
from scopegrep.parsers.parser_factory import (
    DEFAULT_REGISTRY,
    EXTENSION_TO_LANGUAGE,
    LanguageRegistry,
    detect_language,
    parse_source,
)


class TestDetectLanguage:
    @pytest.mark.parametrize(
        "path, expected",
        [
            ("main.go", Language.GO),
            ("pkg/app.py", Language.PYTHON),
            ("component.tsx", Language.TSX),
            ("lib.rs", Language.RUST),
            ("README.rst", Language.RST),
            ("SCRIPT.SH", Language.BASH),
        ],
    )
    def test_by_extension(self, path, expected):
        assert detect_language(path) is expected

    @pytest.mark.parametrize("name", ["Dockerfile", "dockerfile", "build/DOCKERFILE"])
    def test_dockerfile_by_name(self, name):
        assert detect_language(name) is Language.DOCKERFILE

    def test_unknown_extension(self):
        with pytest.raises(UnrecognizedFileTypeError) as exc_info:
            detect_language("notes.unknown")
        assert exc_info.value.path == "notes.unknown"

    def test_no_extension(self):
        with pytest.raises(UnrecognizedFileTypeError):
            detect_language("LICENSE")


class TestGrammarLookup:
    def test_supported_language(self):
        assert DEFAULT_REGISTRY.grammar_for("x.py") == (Language.PYTHON, "python")

    @pytest.mark.parametrize("path", ["doc.rst", "query.ql", "init.el", "x.regex"])
    def test_known_language_without_grammar(self, path):
        with pytest.raises(UnsupportedLanguageError) as exc_info:
            DEFAULT_REGISTRY.grammar_for(path)
        assert isinstance(exc_info.value, FileTypeError)

    def test_is_supported(self):
        assert DEFAULT_REGISTRY.is_supported("main.go")
        assert not DEFAULT_REGISTRY.is_supported("doc.rst")
        assert not DEFAULT_REGISTRY.is_supported("data.bin")

    def test_supported_languages_sorted(self):
        names = [lang.value for lang in DEFAULT_REGISTRY.supported_languages()]
        assert names == sorted(names)
        assert "python" in names
        assert "rst" not in names

    def test_tables_are_read_only(self):
        assert isinstance(EXTENSION_TO_LANGUAGE, MappingProxyType)
        with pytest.raises(TypeError):
            EXTENSION_TO_LANGUAGE[".new"] = Language.PYTHON  # type: ignore[index]

    def test_custom_registry(self):
        registry = LanguageRegistry(extensions={".pyw": Language.PYTHON})
        assert registry.grammar_for("gui.pyw") == (Language.PYTHON, "python")
        with pytest.raises(UnrecognizedFileTypeError):
            registry.detect_language("main.go")


class TestParseSource:
    def test_unrecognized_file_raises_before_parsing(self):
        with pytest.raises(UnrecognizedFileTypeError):
            parse_source("notes.unknown", "text")

    def test_parse_python(self):
        pytest.importorskip("tree_sitter_language_pack")

        parsed = parse_source("mod.py", "import os\n\ndef f():\n    return 1\n")

        assert parsed.language is Language.PYTHON
        root = parsed.root
        assert root.kind == "module"
        kinds = [child.kind for child in root.named_children]
        assert kinds == ["import_statement", "function_definition"]
        func = root.named_children[1]
        assert (func.start_line, func.end_line) == (2, 3)

    def test_parse_bytes(self):
        pytest.importorskip("tree_sitter_language_pack")

        parsed = parse_source("main.go", b"package main\n\nfunc main() {\n}\n")
        assert parsed.root.kind == "source_file"

    def test_grammar_download_failure_is_unsupported(self, monkeypatch):
        pytest.importorskip("tree_sitter")

        class DownloadError(RuntimeError):
            pass

        def _offline(grammar):
            raise DownloadError(f"cannot fetch {grammar}")

        monkeypatch.setattr(parser_factory, "_load_grammar", _offline)

        with pytest.raises(UnsupportedLanguageError) as exc_info:
            parse_source("mod.py", "x = 1\n")
        assert exc_info.value.language == "python"
