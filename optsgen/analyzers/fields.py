"""Field classification for the located struct."""

from __future__ import annotations

import re
from typing import Iterable, List, Optional

from tree_sitter import Node

from ..errors import FieldNameError
from ..logging import get_logger
from ..models import FieldDescriptor
from .locator import StructDeclaration
from .tree_sitter import ParsedSource

COMPOSITE_TYPES = frozenset({"map_type", "struct_type", "slice_type", "array_type"})
_NON_NILABLE_COMPOSITES = frozenset({"struct_type", "array_type"})

# Tool directives such as //go:generate or //nolint:lll are not documentation.
_DIRECTIVE = re.compile(r"^(line |extern |export |[a-z0-9]+:[a-z0-9])")

logger = get_logger("fields")


def classify_fields(
    parsed: ParsedSource,
    declaration: StructDeclaration,
    *,
    pointer_strip: str = "outermost",
) -> List[FieldDescriptor]:
    """Describe every named field of ``declaration`` in declaration order."""
    descriptors: List[FieldDescriptor] = []
    for field_node in declaration.fields:
        type_node = field_node.child_by_field_name("type")
        names = field_node.children_by_field_name("name")
        if not names or type_node is None:
            raise FieldNameError(
                f"bad name: field {parsed.text(field_node)!r} in {declaration.name} has no name"
            )

        inner, depth = _unwrap_pointers(type_node)
        composite = inner.type in COMPOSITE_TYPES
        declared_type = _declared_type(parsed, type_node, inner, composite, pointer_strip)
        nilable = not composite or depth > 0 or inner.type not in _NON_NILABLE_COMPOSITES
        comment = _field_comment(parsed, field_node, declaration.comments)

        for name_node in names:
            name = parsed.text(name_node)
            if not name:
                raise FieldNameError(f"bad name in {declaration.name}")
            descriptors.append(
                FieldDescriptor(
                    name=name,
                    declared_type=declared_type,
                    is_composite=composite,
                    doc_comment=comment,
                    is_nilable=nilable,
                )
            )
    logger.debug(
        "Classified %d fields (%d composite)",
        len(descriptors),
        sum(1 for descriptor in descriptors if descriptor.is_composite),
    )
    return descriptors


def normalise_comment(lines: Iterable[str]) -> str:
    """Join comment lines, trim them and lower-case the first letter."""
    text = " ".join(line.strip() for line in lines if line.strip()).strip()
    if not text:
        return ""
    return text[0].lower() + text[1:]


def _unwrap_pointers(type_node: Node) -> tuple[Node, int]:
    inner = type_node
    depth = 0
    while inner.type == "pointer_type" and inner.named_children:
        inner = inner.named_children[0]
        depth += 1
    return inner, depth


def _declared_type(
    parsed: ParsedSource, type_node: Node, inner: Node, composite: bool, pointer_strip: str
) -> str:
    raw = parsed.text(type_node)
    if pointer_strip == "first":
        return raw.replace("*", "", 1)
    if composite:
        # Composite fields are assigned directly, so the pointer must stay.
        return raw
    return parsed.text(inner)


def _field_comment(parsed: ParsedSource, field_node: Node, comments: List[Node]) -> str:
    trailing = _trailing_comments(field_node, comments)
    if trailing:
        return normalise_comment(_comment_lines(parsed, trailing))
    return normalise_comment(_comment_lines(parsed, _leading_comments(parsed, field_node, comments)))


def _trailing_comments(field_node: Node, comments: List[Node]) -> List[Node]:
    anchor = field_node.child_by_field_name("tag")
    if anchor is None:
        anchor = field_node.child_by_field_name("type")
    if anchor is None:
        return []
    row = anchor.end_point[0]
    return [
        comment
        for comment in comments
        if comment.start_byte >= anchor.end_byte and comment.start_point[0] == row
    ]


def _leading_comments(parsed: ParsedSource, field_node: Node, comments: List[Node]) -> List[Node]:
    block: List[Node] = []
    expected_row = field_node.start_point[0] - 1
    for comment in reversed(comments):
        if comment.start_byte >= field_node.start_byte:
            continue
        if comment.end_point[0] != expected_row or not _starts_line(parsed, comment):
            break
        block.append(comment)
        expected_row = comment.start_point[0] - 1
    block.reverse()
    return block


def _starts_line(parsed: ParsedSource, node: Node) -> bool:
    line_start = parsed.data.rfind(b"\n", 0, node.start_byte) + 1
    return not parsed.data[line_start : node.start_byte].strip()


def _comment_lines(parsed: ParsedSource, comments: List[Node]) -> List[str]:
    lines: List[str] = []
    for comment in comments:
        raw = parsed.text(comment)
        if raw.startswith("//"):
            body = raw[2:]
            if _DIRECTIVE.match(body):
                continue
            lines.append(body)
        elif raw.startswith("/*"):
            body = raw[2:-2] if raw.endswith("*/") else raw[2:]
            lines.extend(line.lstrip(" \t*") for line in body.splitlines())
    return lines


__all__ = ["COMPOSITE_TYPES", "classify_fields", "normalise_comment"]
