"""Core type definitions."""

from .common import Language, LineNumber

__all__ = ["Language", "LineNumber"]
