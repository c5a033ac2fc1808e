"""Search and file discovery configuration for scopegrep."""

import argparse
import os
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

DEFAULT_IGNORE_FILENAME = ".astignore"


class SearchConfig(BaseSettings):
    """Pattern matching and traversal settings."""

    model_config = SettingsConfigDict(
        env_prefix="SCOPEGREP_",
        case_sensitive=False,
        validate_default=True,
        extra="ignore",
    )

    ignore_case: bool = Field(default=False, description="Case-insensitive matching")
    ignore_filename: str = Field(
        default=DEFAULT_IGNORE_FILENAME,
        description="Name of the per-root ignore file (gitignore syntax)",
    )
    use_default_ignores: bool = Field(
        default=True, description="Skip VCS, virtualenv and build directories"
    )
    extra_ignore_patterns: list[str] = Field(
        default_factory=list, description="Additional gitignore-style patterns"
    )

    @field_validator("ignore_filename")
    def validate_ignore_filename(cls, value: str) -> str:  # noqa: N805
        normalized = value.strip()
        return normalized or DEFAULT_IGNORE_FILENAME

    @field_validator("extra_ignore_patterns")
    def strip_patterns(cls, value: list[str]) -> list[str]:  # noqa: N805
        return [p.strip() for p in value if p.strip()]

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (init_settings,)

    @classmethod
    def add_cli_arguments(cls, parser: argparse.ArgumentParser) -> None:
        """Add search-related CLI arguments."""
        parser.add_argument(
            "-i",
            "--ignore-case",
            action="store_true",
            default=None,
            help="Match the pattern case-insensitively",
        )
        parser.add_argument(
            "--ignore-file",
            dest="ignore_file",
            default=None,
            help=f"Name of the ignore file read from each root (default: {DEFAULT_IGNORE_FILENAME})",
        )
        parser.add_argument(
            "--exclude",
            action="append",
            default=None,
            metavar="PATTERN",
            help="Additional gitignore-style pattern to skip (repeatable)",
        )
        parser.add_argument(
            "--no-default-ignores",
            dest="no_default_ignores",
            action="store_true",
            help="Do not skip VCS, virtualenv and build directories",
        )

    @classmethod
    def load_from_env(cls) -> dict[str, Any]:
        """Load search config from environment variables."""
        config: dict[str, Any] = {}

        if (value := os.getenv("SCOPEGREP_IGNORE_CASE")) is not None:
            config["ignore_case"] = value.strip().lower() in {"1", "true", "yes", "on"}
        if ignore_filename := os.getenv("SCOPEGREP_IGNORE_FILENAME"):
            config["ignore_filename"] = ignore_filename
        if (value := os.getenv("SCOPEGREP_USE_DEFAULT_IGNORES")) is not None:
            config["use_default_ignores"] = value.strip().lower() in {
                "1",
                "true",
                "yes",
                "on",
            }
        if patterns := os.getenv("SCOPEGREP_EXTRA_IGNORE_PATTERNS"):
            # Comma-separated gitignore patterns
            config["extra_ignore_patterns"] = patterns.split(",")

        return config

    @classmethod
    def extract_cli_overrides(cls, args: Any) -> dict[str, Any]:
        """Extract search config overrides from CLI arguments."""
        overrides: dict[str, Any] = {}

        if getattr(args, "ignore_case", None):
            overrides["ignore_case"] = True
        if getattr(args, "ignore_file", None):
            overrides["ignore_filename"] = args.ignore_file
        if getattr(args, "exclude", None):
            overrides["extra_ignore_patterns"] = list(args.exclude)
        if getattr(args, "no_default_ignores", False):
            overrides["use_default_ignores"] = False

        return overrides
