"""Configuration loading for optsgen (.optsgen.yml)."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence

import yaml

from .errors import OptsGenError

CONFIG_FILENAME = ".optsgen.yml"

DEFAULT_IMPORTS: tuple[str, ...] = (
    '"reflect"',
    '"github.com/containers/podman/v4/pkg/bindings/internal/util"',
)

DEFAULT_POSTPROCESS_COMMANDS: tuple[tuple[str, ...], ...] = (
    ("go", "fmt"),
    ("goimports", "-w"),
)

POINTER_STRIP_MODES = ("outermost", "first")

SKIP_FORMAT_ENV = "OPTSGEN_SKIP_FORMAT"


class ConfigError(OptsGenError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class PostProcessConfig:
    """External formatter commands run against the generated file."""

    enabled: bool = True
    commands: List[List[str]] = field(
        default_factory=lambda: [list(command) for command in DEFAULT_POSTPROCESS_COMMANDS]
    )


@dataclass
class GeneratorConfig:
    """Represents the settings defined in .optsgen.yml."""

    root: Path
    imports: List[str] = field(default_factory=lambda: list(DEFAULT_IMPORTS))
    pointer_strip: str = "outermost"
    templates_dir: Optional[Path] = None
    postprocess: PostProcessConfig = field(default_factory=PostProcessConfig)


def load_config(
    config_path: Path, *, environ: Mapping[str, str] | None = None
) -> GeneratorConfig:
    """Load configuration from disk, applying environment overrides."""
    env = os.environ if environ is None else environ
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if config_file.exists():
        config = _build_config(root, _read_config(config_file))
    else:
        config = GeneratorConfig(root=root)

    if _as_bool(env.get(SKIP_FORMAT_ENV)):
        config.postprocess.enabled = False
    return config


def _build_config(root: Path, data: Dict[str, Any]) -> GeneratorConfig:
    config = GeneratorConfig(root=root)

    if "imports" in data:
        imports = data["imports"]
        if not isinstance(imports, list) or not all(isinstance(item, str) for item in imports):
            raise ConfigError("imports must be a list of quoted import paths")
        config.imports = [_quote_import(item) for item in imports]

    pointer_strip = data.get("pointer_strip")
    if pointer_strip is not None:
        mode = str(pointer_strip).strip().lower()
        if mode not in POINTER_STRIP_MODES:
            raise ConfigError(
                f"pointer_strip must be one of {', '.join(POINTER_STRIP_MODES)}, got {pointer_strip!r}"
            )
        config.pointer_strip = mode

    templates_dir = data.get("templates_dir")
    if templates_dir:
        config.templates_dir = root / str(templates_dir)

    postprocess_data = data.get("postprocess")
    if postprocess_data is not None:
        if not isinstance(postprocess_data, dict):
            raise ConfigError("postprocess must be a mapping")
        enabled = _as_bool(postprocess_data.get("enabled"))
        if enabled is not None:
            config.postprocess.enabled = enabled
        if "commands" in postprocess_data:
            config.postprocess.commands = _as_commands(postprocess_data["commands"])

    return config


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.suffix not in {".yml", ".yaml"}:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Failed to read {path.name}: {exc}") from exc
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise ConfigError(f"{path.name} must contain a mapping at the root")
    return loaded


def _quote_import(value: str) -> str:
    stripped = value.strip()
    if stripped.endswith('"') or stripped.endswith("`"):
        return stripped
    return f'"{stripped}"'


def _as_commands(value: Any) -> List[List[str]]:
    if not isinstance(value, list):
        raise ConfigError("postprocess.commands must be a list")
    commands: List[List[str]] = []
    for entry in value:
        if isinstance(entry, str):
            parts = entry.split()
        elif isinstance(entry, Sequence) and all(isinstance(part, str) for part in entry):
            parts = list(entry)
        else:
            raise ConfigError(f"Invalid postprocess command: {entry!r}")
        if not parts:
            raise ConfigError("postprocess commands must not be empty")
        commands.append(parts)
    return commands


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "DEFAULT_IMPORTS",
    "GeneratorConfig",
    "PostProcessConfig",
    "load_config",
]
