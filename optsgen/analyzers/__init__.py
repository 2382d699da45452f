"""Go source analysis: parsing, declaration lookup and field classification."""

from __future__ import annotations

from .fields import classify_fields, normalise_comment
from .locator import StructDeclaration, locate_struct
from .tree_sitter import GoSourceParser, ParsedSource

__all__ = [
    "GoSourceParser",
    "ParsedSource",
    "StructDeclaration",
    "classify_fields",
    "locate_struct",
    "normalise_comment",
]
