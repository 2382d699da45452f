"""Generator for fluent option accessors on Go structs."""

from .errors import OptsGenError
from .orchestrator import GenerationState, Generator

__all__ = ["GenerationState", "Generator", "OptsGenError"]
