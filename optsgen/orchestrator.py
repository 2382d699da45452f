"""Pipeline orchestration for a single generator invocation."""

from __future__ import annotations

import os
from enum import Enum
from pathlib import Path
from typing import Mapping

from .analyzers import GoSourceParser, classify_fields, locate_struct
from .config import GeneratorConfig, load_config
from .errors import OptsGenError, OutputWriteError, SourceLoadError
from .loader import load_source, output_path_for
from .logging import get_logger
from .models import GenerationResult
from .postproc import PostProcessor
from .rendering import CodeRenderer, build_context


class GenerationState(str, Enum):
    """Stages of a run. Every failure ends in ABORTED; DONE is the only success."""

    LOADING = "loading"
    PARSING = "parsing"
    LOCATING = "locating"
    RENDERING = "rendering"
    FORMATTING = "formatting"
    DONE = "done"
    ABORTED = "aborted"


class Generator:
    """Loads, parses, locates, renders and formats one accessor file."""

    def __init__(
        self,
        parser: GoSourceParser | None = None,
        renderer: CodeRenderer | None = None,
        postprocessor: PostProcessor | None = None,
        config: GeneratorConfig | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        self.parser = parser or GoSourceParser()
        self._renderer = renderer
        self._postprocessor = postprocessor
        self._config = config
        self._environ = os.environ if environ is None else environ
        self.state = GenerationState.LOADING
        self.logger = get_logger("orchestrator")

    def generate(
        self,
        type_name: str,
        *,
        source: str | os.PathLike[str] | None = None,
        package: str | None = None,
        output_dir: Path | None = None,
        config_path: Path | None = None,
        format_output: bool = True,
        dry_run: bool = False,
    ) -> GenerationResult:
        """Generate the accessor file for ``type_name``.

        With ``dry_run`` the rendered content is returned without touching the
        filesystem or running the formatters.
        """
        self._enter(GenerationState.LOADING)
        try:
            return self._run(
                type_name,
                source=source,
                package=package,
                output_dir=output_dir,
                config_path=config_path,
                format_output=format_output,
                dry_run=dry_run,
            )
        except OptsGenError as exc:
            if exc.stage is None:
                exc.stage = self.state.value
            self.logger.debug("Aborted while %s: %s", self.state.value, exc)
            self.state = GenerationState.ABORTED
            raise

    def _run(
        self,
        type_name: str,
        *,
        source: str | os.PathLike[str] | None,
        package: str | None,
        output_dir: Path | None,
        config_path: Path | None,
        format_output: bool,
        dry_run: bool,
    ) -> GenerationResult:
        unit = load_source(type_name, source=source, package=package, environ=self._environ)
        config = self._config or load_config(
            config_path or unit.path.parent, environ=self._environ
        )

        self._enter(GenerationState.PARSING)
        parsed = self.parser.parse(unit.data)
        package_name = unit.package_name or parsed.package_name()
        if not package_name:
            raise SourceLoadError(f"cannot determine the package name for {unit.path}")

        self._enter(GenerationState.LOCATING)
        declaration = locate_struct(parsed, unit.type_name)
        fields = classify_fields(parsed, declaration, pointer_strip=config.pointer_strip)

        self._enter(GenerationState.RENDERING)
        context = build_context(
            package_name,
            unit.type_name,
            fields,
            fixed_imports=config.imports,
            source_imports=parsed.imports(),
        )
        renderer = self._renderer or CodeRenderer(config.templates_dir)
        content = renderer.render(context)

        output_path = output_path_for(unit.path, unit.type_name)
        if output_dir is not None:
            output_path = Path(output_dir) / output_path.name

        if dry_run:
            self._enter(GenerationState.DONE)
            return GenerationResult(
                output_path=output_path,
                content=content,
                fields=fields,
                written=False,
                formatted=False,
            )

        try:
            with output_path.open("w", encoding="utf-8") as handle:
                handle.write(content)
        except OSError as exc:
            raise OutputWriteError(f"cannot write {output_path}: {exc.strerror or exc}") from exc
        self.logger.info("Wrote %s (%d fields)", output_path, len(fields))

        formatted = False
        if format_output and config.postprocess.enabled:
            self._enter(GenerationState.FORMATTING)
            postprocessor = self._postprocessor or PostProcessor(config.postprocess.commands)
            postprocessor.run(output_path)
            formatted = True

        self._enter(GenerationState.DONE)
        return GenerationResult(
            output_path=output_path,
            content=content,
            fields=fields,
            written=True,
            formatted=formatted,
        )

    def _enter(self, state: GenerationState) -> None:
        self.state = state
        self.logger.debug("State -> %s", state.value)


__all__ = ["GenerationState", "Generator"]
