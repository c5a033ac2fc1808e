"""Top-level configuration for scopegrep.

Sources are layered in increasing precedence:

1. Field defaults
2. JSON config file (``--config``), sections ``context`` and ``search``
3. ``SCOPEGREP_*`` environment variables
4. CLI flags
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from loguru import logger
from pydantic import BaseModel, Field, ValidationError

from scopegrep.core.config.context_config import ContextConfig
from scopegrep.core.config.search_config import SearchConfig
from scopegrep.core.exceptions import ConfigFileError


def load_config_file(path: Path) -> dict[str, Any]:
    """Read a JSON config file and return its top-level mapping."""
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigFileError(f"Failed to read config file {path}: {exc}") from exc

    try:
        data = json.loads(raw) if raw.strip() else {}
    except json.JSONDecodeError as exc:
        raise ConfigFileError(f"Invalid JSON in config file {path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigFileError(f"Config file {path} must contain a JSON object")
    for section in ("context", "search"):
        if section in data and not isinstance(data[section], dict):
            raise ConfigFileError(
                f"Config file {path}: section '{section}' must be an object"
            )
    return data


class Config(BaseModel):
    """Aggregate configuration used by the CLI and search service."""

    context: ContextConfig = Field(default_factory=ContextConfig)
    search: SearchConfig = Field(default_factory=SearchConfig)

    @classmethod
    def load(
        cls, args: Any | None = None, config_file: Path | None = None
    ) -> Config:
        """Build a Config from file, environment and CLI overrides."""
        if config_file is None and args is not None:
            config_file = getattr(args, "config", None)

        file_data: dict[str, Any] = {}
        if config_file is not None:
            file_data = load_config_file(Path(config_file))
            logger.debug(f"Loaded configuration from {config_file}")

        context_values: dict[str, Any] = dict(file_data.get("context", {}))
        context_values.update(ContextConfig.load_from_env())
        search_values: dict[str, Any] = dict(file_data.get("search", {}))
        search_values.update(SearchConfig.load_from_env())

        if args is not None:
            context_values.update(ContextConfig.extract_cli_overrides(args))
            search_values.update(SearchConfig.extract_cli_overrides(args))

        try:
            return cls(
                context=ContextConfig(**context_values),
                search=SearchConfig(**search_values),
            )
        except ValidationError as exc:
            raise ConfigFileError(f"Invalid configuration: {exc}") from exc
