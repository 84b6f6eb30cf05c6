"""Shared utilities and exceptions."""

from tripmap.shared.exceptions import KeyMissingError, ToolError

__all__ = ["KeyMissingError", "ToolError"]
