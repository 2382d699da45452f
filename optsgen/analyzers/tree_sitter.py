"""Tree-sitter powered Go source parser."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Optional

import tree_sitter_go
from tree_sitter import Language, Node, Parser, Tree

from ..errors import ParseError
from ..logging import get_logger

GO_LANGUAGE = Language(tree_sitter_go.language())

logger = get_logger("parser")


@dataclass
class ParsedSource:
    """A parsed Go file together with the bytes it was parsed from."""

    tree: Tree
    data: bytes

    @property
    def root(self) -> Node:
        return self.tree.root_node

    def text(self, node: Node) -> str:
        return self.data[node.start_byte : node.end_byte].decode("utf-8")

    def walk(self) -> Iterator[Node]:
        """Yield every node depth-first, parents before children."""
        stack = [self.root]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def package_name(self) -> Optional[str]:
        for child in self.root.children:
            if child.type != "package_clause":
                continue
            for part in child.named_children:
                if part.type == "package_identifier":
                    return self.text(part)
        return None

    def imports(self) -> List[str]:
        """Return every import spec verbatim, alias included, in source order."""
        specs: List[str] = []
        for child in self.root.children:
            if child.type != "import_declaration":
                continue
            for spec in _import_specs(child):
                specs.append(self.text(spec))
        return specs


class GoSourceParser:
    """Parses Go source bytes, keeping comments as tree nodes."""

    def __init__(self) -> None:
        self._parser = Parser(GO_LANGUAGE)

    def parse(self, data: bytes) -> ParsedSource:
        try:
            data.decode("utf-8")
        except UnicodeDecodeError as exc:
            line = data.count(b"\n", 0, exc.start) + 1
            column = exc.start - (data.rfind(b"\n", 0, exc.start) + 1) + 1
            raise ParseError(
                f"illegal UTF-8 encoding at line {line}, column {column}", line=line, column=column
            ) from exc
        tree = self._parser.parse(data)
        parsed = ParsedSource(tree=tree, data=data)
        if tree.root_node.has_error:
            node = _first_error(tree.root_node)
            line, column = (node.start_point[0] + 1, node.start_point[1] + 1) if node else (0, 0)
            kind = "missing token" if node is not None and node.is_missing else "syntax error"
            raise ParseError(f"{kind} at line {line}, column {column}", line=line, column=column)
        logger.debug("Parsed %d top-level nodes", tree.root_node.child_count)
        return parsed


def _import_specs(declaration: Node) -> Iterator[Node]:
    for child in declaration.named_children:
        if child.type == "import_spec":
            yield child
        elif child.type == "import_spec_list":
            for spec in child.named_children:
                if spec.type == "import_spec":
                    yield spec


def _first_error(node: Node) -> Optional[Node]:
    if node.is_error or node.is_missing:
        return node
    for child in node.children:
        if child.has_error or child.is_missing:
            found = _first_error(child)
            if found is not None:
                return found
    return None


__all__ = ["GO_LANGUAGE", "GoSourceParser", "ParsedSource"]
