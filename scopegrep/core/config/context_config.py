"""Context selection and rendering configuration for scopegrep.

These settings control which extra lines are shown around each match and
how the final snippet is rendered. Values come from defaults, an optional
config file, ``SCOPEGREP_*`` environment variables and CLI flags.
"""

import argparse
import os
from typing import Any

from pydantic import Field, field_validator, model_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

DEFAULT_HEADER_MAX = 10
DEFAULT_MARGIN = 3
DEFAULT_LOI_PAD = 1

# Child sampling heuristics: small blocks are shown whole, larger ones get a
# proportional sample clamped to [min, max] lines.
DEFAULT_SMALL_SCOPE_LINES = 5
DEFAULT_CHILD_MIN_LINES = 5
DEFAULT_CHILD_MAX_LINES = 25
DEFAULT_CHILD_FRACTION = 0.10

_BOOL_ENV_FIELDS = (
    "color",
    "verbose",
    "line_number",
    "mark_lois",
    "parent_context",
    "child_context",
    "last_line",
    "show_top_of_file_parent_scope",
)
_INT_ENV_FIELDS = (
    "margin",
    "loi_pad",
    "header_max",
    "small_scope_lines",
    "child_min_lines",
    "child_max_lines",
)


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in {"1", "true", "yes", "on"}


class ContextConfig(BaseSettings):
    """Options for the context selector and renderer.

    Malformed numeric options are never fatal: negative values are clamped
    to zero so a bad setting degrades output instead of aborting a search.
    """

    model_config = SettingsConfigDict(
        env_prefix="SCOPEGREP_",
        case_sensitive=False,
        validate_default=True,
        extra="ignore",
    )

    color: bool = Field(default=False, description="Colorize markers and matches")
    verbose: bool = Field(
        default=False, description="Log the per-line scope table while indexing"
    )
    line_number: bool = Field(default=False, description="Prefix lines with numbers")
    mark_lois: bool = Field(
        default=True, description="Mark lines of interest with a distinct glyph"
    )
    parent_context: bool = Field(
        default=True, description="Reveal headers of enclosing scopes"
    )
    child_context: bool = Field(
        default=True, description="Sample the body of scopes starting on a match"
    )
    last_line: bool = Field(
        default=False, description="Always show the file's final line"
    )
    margin: int = Field(
        default=DEFAULT_MARGIN, description="Number of lines always shown at the top"
    )
    loi_pad: int = Field(
        default=DEFAULT_LOI_PAD, description="Lines of padding around each match"
    )
    header_max: int = Field(
        default=DEFAULT_HEADER_MAX, description="Maximum lines in a scope header"
    )
    show_top_of_file_parent_scope: bool = Field(
        default=False,
        description="Reveal the header of the scope that starts the file",
    )

    small_scope_lines: int = Field(
        default=DEFAULT_SMALL_SCOPE_LINES,
        description="Blocks shorter than this are revealed whole by child context",
    )
    child_min_lines: int = Field(
        default=DEFAULT_CHILD_MIN_LINES,
        description="Lower bound of the child sampling budget",
    )
    child_max_lines: int = Field(
        default=DEFAULT_CHILD_MAX_LINES,
        description="Upper bound of the child sampling budget",
    )
    child_fraction: float = Field(
        default=DEFAULT_CHILD_FRACTION,
        description="Share of a large block revealed by child sampling",
    )

    @field_validator(*_INT_ENV_FIELDS)
    def clamp_non_negative(cls, value: int) -> int:  # noqa: N805
        """Treat negative counts as zero."""
        return max(0, value)

    @field_validator("child_fraction")
    def clamp_fraction(cls, value: float) -> float:  # noqa: N805
        """Keep the sampling fraction within [0, 1]."""
        return min(1.0, max(0.0, value))

    @model_validator(mode="after")
    def order_child_bounds(self) -> "ContextConfig":
        if self.child_max_lines < self.child_min_lines:
            self.child_max_lines = self.child_min_lines
        return self

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Read only explicit values; the environment goes through load_from_env."""
        return (init_settings,)

    def child_budget(self, block_size: int) -> int:
        """Number of lines child sampling may add for a block of ``block_size``."""
        computed = int(block_size * self.child_fraction + 0.5)
        return max(self.child_min_lines, min(self.child_max_lines, computed))

    @classmethod
    def add_cli_arguments(cls, parser: argparse.ArgumentParser) -> None:
        """Add context-related CLI arguments."""
        group = parser.add_argument_group("context options")
        group.add_argument(
            "--color",
            action=argparse.BooleanOptionalAction,
            default=None,
            help="Colorize output (default: only when stdout is a terminal)",
        )
        group.add_argument(
            "-n",
            "--line-number",
            action=argparse.BooleanOptionalAction,
            default=None,
            help="Show line numbers",
        )
        group.add_argument(
            "--mark-lois",
            action=argparse.BooleanOptionalAction,
            default=None,
            help="Mark matching lines with a distinct glyph",
        )
        group.add_argument(
            "--parent-context",
            action=argparse.BooleanOptionalAction,
            default=None,
            help="Show the headers of scopes enclosing each match",
        )
        group.add_argument(
            "--child-context",
            action=argparse.BooleanOptionalAction,
            default=None,
            help="Show a sample of the block starting on a match",
        )
        group.add_argument(
            "--last-line",
            action=argparse.BooleanOptionalAction,
            default=None,
            help="Always show the last line of the file",
        )
        group.add_argument(
            "--margin",
            type=int,
            default=None,
            help=f"Lines always shown at the top of the file (default: {DEFAULT_MARGIN})",
        )
        group.add_argument(
            "--loi-pad",
            type=int,
            default=None,
            help=f"Lines of padding around each match (default: {DEFAULT_LOI_PAD})",
        )
        group.add_argument(
            "--header-max",
            type=int,
            default=None,
            help=f"Maximum lines shown for a scope header (default: {DEFAULT_HEADER_MAX})",
        )
        group.add_argument(
            "--top-of-file-scope",
            dest="top_of_file_scope",
            action=argparse.BooleanOptionalAction,
            default=None,
            help="Also show the header of the scope starting at the top of the file",
        )

    @classmethod
    def load_from_env(cls) -> dict[str, Any]:
        """Load context config from environment variables."""
        config: dict[str, Any] = {}

        for name in _BOOL_ENV_FIELDS:
            if (value := os.getenv(f"SCOPEGREP_{name.upper()}")) is not None:
                config[name] = _parse_bool(value)
        for name in _INT_ENV_FIELDS:
            value = os.getenv(f"SCOPEGREP_{name.upper()}")
            if value is None:
                continue
            try:
                config[name] = int(value)
            except ValueError:
                # Unparseable numbers are dropped; the field keeps its default.
                continue
        if fraction := os.getenv("SCOPEGREP_CHILD_FRACTION"):
            try:
                config["child_fraction"] = float(fraction)
            except ValueError:
                pass

        return config

    @classmethod
    def extract_cli_overrides(cls, args: Any) -> dict[str, Any]:
        """Extract context config overrides from CLI arguments."""
        overrides: dict[str, Any] = {}

        mapping = {
            "color": "color",
            "line_number": "line_number",
            "mark_lois": "mark_lois",
            "parent_context": "parent_context",
            "child_context": "child_context",
            "last_line": "last_line",
            "margin": "margin",
            "loi_pad": "loi_pad",
            "header_max": "header_max",
            "top_of_file_scope": "show_top_of_file_parent_scope",
        }
        for arg_name, field_name in mapping.items():
            value = getattr(args, arg_name, None)
            if value is not None:
                overrides[field_name] = value

        if getattr(args, "verbose", False):
            overrides["verbose"] = True

        return overrides

    def __repr__(self) -> str:
        """String representation of context configuration."""
        return (
            f"ContextConfig("
            f"parent_context={self.parent_context}, "
            f"child_context={self.child_context}, "
            f"margin={self.margin}, "
            f"loi_pad={self.loi_pad}, "
            f"header_max={self.header_max})"
        )
