"""Rendering of generated Go source."""

from .renderer import CodeRenderer, build_context

__all__ = ["CodeRenderer", "build_context"]
