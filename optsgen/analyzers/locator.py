"""Locates the target struct declaration in a parsed Go file."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from tree_sitter import Node

from ..errors import DeclarationNotFoundError, TypeMismatchError
from ..logging import get_logger
from .tree_sitter import ParsedSource

_TYPE_DECLARATIONS = {"type_spec", "type_alias"}

_KIND_NAMES = {
    "interface_type": "an interface",
    "map_type": "a map",
    "slice_type": "a slice",
    "array_type": "an array",
    "pointer_type": "a pointer",
    "function_type": "a function type",
    "channel_type": "a channel",
    "type_identifier": "a named type",
    "qualified_type": "a named type",
    "generic_type": "a generic instantiation",
}

logger = get_logger("locator")


@dataclass
class StructDeclaration:
    """The struct selected for generation."""

    name: str
    node: Node
    struct: Node
    fields: List[Node] = field(default_factory=list)
    comments: List[Node] = field(default_factory=list)


def locate_struct(parsed: ParsedSource, type_name: str) -> StructDeclaration:
    """Return the first type declaration named ``type_name``.

    The whole tree is searched. Later declarations with the same name are
    ignored after a warning.
    """
    matches = [
        node
        for node in parsed.walk()
        if node.type in _TYPE_DECLARATIONS and _declared_name(parsed, node) == type_name
    ]
    if not matches:
        raise DeclarationNotFoundError(f"type {type_name} is not declared in the source file")
    if len(matches) > 1:
        lines = ", ".join(str(node.start_point[0] + 1) for node in matches[1:])
        logger.warning(
            "Found %d declarations of %s; using line %d and ignoring line(s) %s",
            len(matches),
            type_name,
            matches[0].start_point[0] + 1,
            lines,
        )

    node = matches[0]
    if node.child_by_field_name("type_parameters") is not None:
        raise TypeMismatchError(f"type {type_name} has type parameters, which are not supported")

    type_node = node.child_by_field_name("type")
    if type_node is None or type_node.type != "struct_type":
        kind = _KIND_NAMES.get(type_node.type, type_node.type) if type_node is not None else "unknown"
        raise TypeMismatchError(f"type {type_name} is {kind}, not a struct")

    declaration = StructDeclaration(name=type_name, node=node, struct=type_node)
    for field_list in type_node.named_children:
        if field_list.type != "field_declaration_list":
            continue
        for child in field_list.named_children:
            if child.type == "field_declaration":
                declaration.fields.append(child)
                declaration.comments.extend(
                    part for part in child.children if part.type == "comment"
                )
            elif child.type == "comment":
                declaration.comments.append(child)
    declaration.comments.sort(key=lambda comment: comment.start_byte)
    logger.debug("Located %s with %d field entries", type_name, len(declaration.fields))
    return declaration


def _declared_name(parsed: ParsedSource, node: Node) -> str:
    name = node.child_by_field_name("name")
    return parsed.text(name) if name is not None else ""


__all__ = ["StructDeclaration", "locate_struct"]
