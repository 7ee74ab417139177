"""Shared utilities for partialsum CLI commands."""

from .rich_output import ProgressManager, RichOutputFormatter

__all__ = ["ProgressManager", "RichOutputFormatter"]
