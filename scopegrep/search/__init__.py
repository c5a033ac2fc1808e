"""Pattern matching over source lines."""

from .matcher import GrepResult, compile_pattern, grep_lines

__all__ = ["GrepResult", "compile_pattern", "grep_lines"]
