from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Callable

import pytest

from optsgen.analyzers import GoSourceParser, ParsedSource


@pytest.fixture
def write_go(tmp_path: Path) -> Callable[..., Path]:
    """Write dedented Go source into the pytest tmp_path and return its path."""

    def _write(content: str, name: str = "types.go") -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(content).lstrip("\n"), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def parse_go() -> Callable[[str], ParsedSource]:
    """Parse dedented Go source held in a string."""
    parser = GoSourceParser()

    def _parse(content: str) -> ParsedSource:
        return parser.parse(textwrap.dedent(content).lstrip("\n").encode("utf-8"))

    return _parse
