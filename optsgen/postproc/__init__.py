"""Post-processing of generated files by external Go tools."""

from .formatter import PostProcessor

__all__ = ["PostProcessor"]
