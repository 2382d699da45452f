"""Source loading driven by the go generate environment."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Mapping

from .errors import SourceLoadError
from .logging import get_logger
from .models import SourceUnit

SOURCE_ENV = "GOFILE"
PACKAGE_ENV = "GOPACKAGE"

_GO_SUFFIX = ".go"

logger = get_logger("loader")


def load_source(
    type_name: str,
    *,
    source: str | os.PathLike[str] | None = None,
    package: str | None = None,
    environ: Mapping[str, str] | None = None,
) -> SourceUnit:
    """Read the Go file named by ``GOFILE`` (or ``source``) as raw bytes.

    The package name comes from ``GOPACKAGE`` unless ``package`` is given. It
    may be left empty here; the orchestrator falls back to the package clause
    of the parsed file.
    """
    env = os.environ if environ is None else environ
    if not type_name or not type_name.strip():
        raise SourceLoadError("a target type name is required")
    if type_name != type_name.strip():
        raise SourceLoadError(f"type name {type_name!r} has surrounding whitespace")

    source_value = source if source is not None else env.get(SOURCE_ENV)
    if not source_value:
        raise SourceLoadError(f"no source file given and ${SOURCE_ENV} is not set")

    path = Path(source_value)
    try:
        data = path.read_bytes()
    except OSError as exc:
        raise SourceLoadError(f"cannot read {path}: {exc.strerror or exc}") from exc

    package_name = package if package is not None else env.get(PACKAGE_ENV, "")
    logger.debug("Loaded %d bytes from %s", len(data), path)
    return SourceUnit(
        path=path,
        package_name=package_name.strip(),
        type_name=type_name,
        data=data,
    )


def output_path_for(source_path: Path, type_name: str) -> Path:
    """Return the generated file path for ``type_name`` next to ``source_path``.

    ``containers.go`` + ``ListOptions`` gives ``containers_list_options.go``.
    """
    stem = source_path.name
    if stem.endswith(_GO_SUFFIX):
        stem = stem[: -len(_GO_SUFFIX)]
    suffix = type_name.lower().replace("options", "_options", 1)
    return source_path.with_name(f"{stem}_{suffix}{_GO_SUFFIX}")


__all__ = ["PACKAGE_ENV", "SOURCE_ENV", "load_source", "output_path_for"]
