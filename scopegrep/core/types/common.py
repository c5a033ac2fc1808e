"""Common identifiers shared across scopegrep modules."""

from enum import Enum

# 0-based index into a file's source lines
LineNumber = int


class Language(str, Enum):
    """Language identifiers resolved from file extensions and well-known names."""

    BASH = "bash"
    C = "c"
    COMMON_LISP = "commonlisp"
    CPP = "cpp"
    CSHARP = "csharp"
    CSS = "css"
    DOCKERFILE = "dockerfile"
    ELISP = "elisp"
    ELIXIR = "elixir"
    ELM = "elm"
    EMBEDDED_TEMPLATE = "embedded_template"
    ERLANG = "erlang"
    GO = "go"
    GOMOD = "gomod"
    HACK = "hack"
    HASKELL = "haskell"
    HCL = "hcl"
    HTML = "html"
    JAVA = "java"
    JAVASCRIPT = "javascript"
    JSON = "json"
    JULIA = "julia"
    KOTLIN = "kotlin"
    LUA = "lua"
    MAKE = "make"
    OBJC = "objc"
    OCAML = "ocaml"
    PERL = "perl"
    PHP = "php"
    PYTHON = "python"
    QL = "ql"
    R = "r"
    REGEX = "regex"
    RST = "rst"
    RUBY = "ruby"
    RUST = "rust"
    SCALA = "scala"
    SCHEME = "scheme"
    SQL = "sql"
    SQLITE = "sqlite"
    TOML = "toml"
    TSX = "tsx"
    TYPESCRIPT = "typescript"
    YAML = "yaml"

