"""Error types raised by the optsgen pipeline."""

from __future__ import annotations

from typing import Optional


class OptsGenError(RuntimeError):
    """Base class for every fatal generator failure."""

    def __init__(self, message: str, *, stage: Optional[str] = None) -> None:
        super().__init__(message)
        self.stage = stage


class SourceLoadError(OptsGenError):
    """Raised when the source file or its environment cannot be read."""


class ParseError(OptsGenError):
    """Raised when the source bytes are not valid Go."""

    def __init__(self, message: str, *, line: int = 0, column: int = 0) -> None:
        super().__init__(message)
        self.line = line
        self.column = column


class DeclarationNotFoundError(OptsGenError):
    """Raised when no type declaration matches the requested name."""


class TypeMismatchError(OptsGenError):
    """Raised when the matched declaration is not a plain struct type."""


class FieldNameError(OptsGenError):
    """Raised when a struct field entry carries no usable name."""


class OutputWriteError(OptsGenError):
    """Raised when the generated file cannot be written."""


class RenderError(OptsGenError):
    """Raised when the output template fails to evaluate."""


class PostProcessError(OptsGenError):
    """Raised when an external formatting tool fails."""

    def __init__(self, message: str, *, command: Optional[list[str]] = None) -> None:
        super().__init__(message)
        self.command = command or []


__all__ = [
    "DeclarationNotFoundError",
    "FieldNameError",
    "OptsGenError",
    "OutputWriteError",
    "ParseError",
    "PostProcessError",
    "RenderError",
    "SourceLoadError",
    "TypeMismatchError",
]
