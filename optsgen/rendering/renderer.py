"""Renders the accessor file from a Jinja template."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Sequence

from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateError

from ..errors import RenderError
from ..logging import get_logger
from ..models import FieldDescriptor, RenderContext

TEMPLATE_NAME = "options.go.j2"

logger = get_logger("renderer")


def build_context(
    package_name: str,
    type_name: str,
    fields: Sequence[FieldDescriptor],
    *,
    fixed_imports: Iterable[str],
    source_imports: Iterable[str],
) -> RenderContext:
    """Assemble the template input; fixed imports come first, duplicates are kept."""
    imports: List[str] = list(fixed_imports)
    imports.extend(source_imports)
    return RenderContext(
        package_name=package_name,
        imports=imports,
        type_name=type_name,
        fields=list(fields),
    )


class CodeRenderer:
    """Turns a RenderContext into the full text of the generated file."""

    def __init__(self, templates_dir: Path | None = None) -> None:
        self.templates_dir = templates_dir
        self._env = self._create_env(templates_dir)

    def render(self, context: RenderContext) -> str:
        try:
            template = self._env.get_template(TEMPLATE_NAME)
            content = template.render(
                package_name=context.package_name,
                imports=context.imports,
                type_name=context.type_name,
                fields=context.fields,
            )
        except TemplateError as exc:
            raise RenderError(f"template {TEMPLATE_NAME} failed: {exc}") from exc
        logger.debug("Rendered %d bytes for %s", len(content), context.type_name)
        return content

    @staticmethod
    def _create_env(templates_dir: Path | None) -> Environment:
        directories = []
        if templates_dir:
            directories.append(str(templates_dir))
        directories.append(str(Path(__file__).with_name("templates")))
        return Environment(
            loader=FileSystemLoader(directories),
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            undefined=StrictUndefined,
        )


__all__ = ["CodeRenderer", "TEMPLATE_NAME", "build_context"]
