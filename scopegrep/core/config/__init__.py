"""Configuration models for scopegrep."""

from .config import Config, load_config_file
from .context_config import ContextConfig
from .search_config import SearchConfig

__all__ = ["Config", "ContextConfig", "SearchConfig", "load_config_file"]
