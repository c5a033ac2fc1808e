"""Language detection and tree-sitter parsing.

The extension table is process-wide configuration: it is built once as a
read-only mapping and handed around by reference. Grammars come from
``tree-sitter-language-pack``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import TYPE_CHECKING, Mapping

from loguru import logger

from scopegrep.core.exceptions import (
    UnrecognizedFileTypeError,
    UnsupportedLanguageError,
)
from scopegrep.core.types.common import Language
from scopegrep.parsers.nodes import TreeSitterNode

if TYPE_CHECKING:
    from tree_sitter import Tree

EXTENSION_TO_LANGUAGE: Mapping[str, Language] = MappingProxyType(
    {
        ".bash": Language.BASH,
        ".c": Language.C,
        ".cc": Language.CPP,
        ".cl": Language.COMMON_LISP,
        ".cpp": Language.CPP,
        ".cs": Language.CSHARP,
        ".csm": Language.SCHEME,
        ".css": Language.CSS,
        ".el": Language.ELISP,
        ".elm": Language.ELM,
        ".erl": Language.ERLANG,
        ".et": Language.EMBEDDED_TEMPLATE,
        ".ex": Language.ELIXIR,
        ".go": Language.GO,
        ".gomod": Language.GOMOD,
        ".hack": Language.HACK,
        ".hcl": Language.HCL,
        ".hs": Language.HASKELL,
        ".html": Language.HTML,
        ".java": Language.JAVA,
        ".jl": Language.JULIA,
        ".js": Language.JAVASCRIPT,
        ".json": Language.JSON,
        ".jsx": Language.JAVASCRIPT,
        ".kt": Language.KOTLIN,
        ".lua": Language.LUA,
        ".m": Language.OBJC,
        ".mjs": Language.JAVASCRIPT,
        ".mk": Language.MAKE,
        ".ml": Language.OCAML,
        ".php": Language.PHP,
        ".pl": Language.PERL,
        ".py": Language.PYTHON,
        ".ql": Language.QL,
        ".r": Language.R,
        ".rb": Language.RUBY,
        ".regex": Language.REGEX,
        ".rs": Language.RUST,
        ".rst": Language.RST,
        ".scala": Language.SCALA,
        ".sh": Language.BASH,
        ".sql": Language.SQL,
        ".sqlite": Language.SQLITE,
        ".toml": Language.TOML,
        ".ts": Language.TYPESCRIPT,
        ".tsx": Language.TSX,
        ".yaml": Language.YAML,
        ".yml": Language.YAML,
    }
)

# Extensionless well-known files, matched case-insensitively.
FILENAME_TO_LANGUAGE: Mapping[str, Language] = MappingProxyType(
    {
        "dockerfile": Language.DOCKERFILE,
        "makefile": Language.MAKE,
        "gnumakefile": Language.MAKE,
    }
)

# Languages with a grammar in tree-sitter-language-pack, keyed to the
# grammar name the pack expects.
GRAMMAR_NAMES: Mapping[Language, str] = MappingProxyType(
    {
        Language.BASH: "bash",
        Language.C: "c",
        Language.CPP: "cpp",
        Language.CSHARP: "csharp",
        Language.CSS: "css",
        Language.DOCKERFILE: "dockerfile",
        Language.ELIXIR: "elixir",
        Language.ELM: "elm",
        Language.ERLANG: "erlang",
        Language.GO: "go",
        Language.HASKELL: "haskell",
        Language.HCL: "hcl",
        Language.HTML: "html",
        Language.JAVA: "java",
        Language.JAVASCRIPT: "javascript",
        Language.JSON: "json",
        Language.JULIA: "julia",
        Language.KOTLIN: "kotlin",
        Language.LUA: "lua",
        Language.MAKE: "make",
        Language.OBJC: "objc",
        Language.OCAML: "ocaml",
        Language.PERL: "perl",
        Language.PHP: "php",
        Language.PYTHON: "python",
        Language.R: "r",
        Language.RUBY: "ruby",
        Language.RUST: "rust",
        Language.SCALA: "scala",
        Language.SQL: "sql",
        Language.TOML: "toml",
        Language.TSX: "tsx",
        Language.TYPESCRIPT: "typescript",
        Language.YAML: "yaml",
    }
)


@dataclass(frozen=True)
class LanguageRegistry:
    """Read-only lookup from file names to languages and grammars."""

    extensions: Mapping[str, Language] = field(
        default_factory=lambda: EXTENSION_TO_LANGUAGE
    )
    filenames: Mapping[str, Language] = field(
        default_factory=lambda: FILENAME_TO_LANGUAGE
    )
    grammars: Mapping[Language, str] = field(default_factory=lambda: GRAMMAR_NAMES)

    def detect_language(self, path: str | Path) -> Language:
        """Resolve the language for ``path`` or raise UnrecognizedFileTypeError."""
        p = Path(path)
        by_name = self.filenames.get(p.name.lower())
        if by_name is not None:
            return by_name

        language = self.extensions.get(p.suffix.lower())
        if language is None:
            raise UnrecognizedFileTypeError(path)
        return language

    def grammar_for(self, path: str | Path) -> tuple[Language, str]:
        """Resolve language and grammar name, raising on unknown or unsupported."""
        language = self.detect_language(path)
        grammar = self.grammars.get(language)
        if grammar is None:
            raise UnsupportedLanguageError(path, language.value)
        return language, grammar

    def is_supported(self, path: str | Path) -> bool:
        try:
            self.grammar_for(path)
        except (UnrecognizedFileTypeError, UnsupportedLanguageError):
            return False
        return True

    def supported_languages(self) -> list[Language]:
        return sorted(self.grammars, key=lambda lang: lang.value)


DEFAULT_REGISTRY = LanguageRegistry()


@dataclass
class ParsedSource:
    """A parsed file: the owning tree plus a node view of its root."""

    path: str
    language: Language
    tree: Tree = field(repr=False)

    @property
    def root(self) -> TreeSitterNode:
        return TreeSitterNode(self.tree.root_node)


@lru_cache(maxsize=None)
def _load_grammar(grammar: str):  # type: ignore[no-untyped-def]
    from tree_sitter_language_pack import get_language

    return get_language(grammar)  # type: ignore[arg-type]


def detect_language(
    path: str | Path, registry: LanguageRegistry = DEFAULT_REGISTRY
) -> Language:
    """Resolve the language for a file path."""
    return registry.detect_language(path)


def parse_source(
    path: str | Path,
    source: bytes | str,
    registry: LanguageRegistry = DEFAULT_REGISTRY,
) -> ParsedSource:
    """Parse ``source`` with the grammar registered for ``path``.

    Raises:
        UnrecognizedFileTypeError: No language is registered for the file.
        UnsupportedLanguageError: The language has no usable grammar.
    """
    language, grammar = registry.grammar_for(path)

    from tree_sitter import Parser

    try:
        ts_language = _load_grammar(grammar)
    except ImportError:
        raise
    except Exception as exc:
        # Lookup errors and failed on-demand downloads both mean no grammar.
        logger.debug(f"Grammar '{grammar}' unavailable: {exc}")
        raise UnsupportedLanguageError(path, language.value) from exc

    if isinstance(source, str):
        source = source.encode("utf-8")

    parser = Parser(ts_language)
    tree = parser.parse(source)
    return ParsedSource(path=str(path), language=language, tree=tree)
