"""Core data models shared across optsgen components."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List


@dataclass(frozen=True)
class FieldDescriptor:
    """One struct field as seen by the renderer."""

    name: str
    declared_type: str
    is_composite: bool
    doc_comment: str = ""
    is_nilable: bool = True


@dataclass
class SourceUnit:
    """Raw input for one generator invocation."""

    path: Path
    package_name: str
    type_name: str
    data: bytes


@dataclass
class RenderContext:
    """Everything the output template needs."""

    package_name: str
    imports: List[str]
    type_name: str
    fields: List[FieldDescriptor] = field(default_factory=list)


@dataclass
class GenerationResult:
    """Outcome of a generator run."""

    output_path: Path
    content: str
    fields: List[FieldDescriptor]
    written: bool
    formatted: bool
