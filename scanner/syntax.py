"""Syntax tree provider and the statement translation layer.

The provider turns source bytes into a tree-sitter concrete syntax tree.
Tree-sitter is error-tolerant: malformed input yields a tree containing
``ERROR`` nodes instead of an exception, so well-formed statements around a
syntax error are still found.

``extract_statements`` is the only place that looks at raw grammar node
type names; everything downstream works with ``StatementKind``.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Dict, FrozenSet, Iterator, List, Optional, Protocol

import tree_sitter_javascript as tsjavascript
import tree_sitter_typescript as tstypescript
from tree_sitter import Language, Parser

from .records import Location

logger = logging.getLogger(__name__)

# Grammar used per file suffix; anything else is parsed as JavaScript.
GRAMMAR_BY_SUFFIX: Dict[str, str] = {
    ".js": "javascript",
    ".jsx": "javascript",
    ".ts": "typescript",
    ".tsx": "tsx",
}
DEFAULT_GRAMMAR = "javascript"

_LANGUAGE_LOADERS: Dict[str, Callable[[], Any]] = {
    "javascript": tsjavascript.language,
    "typescript": tstypescript.language_typescript,
    "tsx": tstypescript.language_tsx,
}

IMPORT_NODE = "import_statement"
CALL_NODE = "call_expression"
ASSIGNMENT_NODE = "assignment_expression"
EXPORT_NODES: FrozenSet[str] = frozenset({
    "export_statement",
    "export_clause",
    "export_default_declaration",
    "export_named_declaration",
})
REQUIRE_CALLEE = "require"
QUOTE_CHARS = "'\""


class SyntaxTreeProvider(Protocol):
    """Parses source bytes into a tree exposing ``root_node``."""

    def parse(self, path: Path, source: bytes) -> Any:
        ...


class TreeSitterProvider:
    """SyntaxTreeProvider backed by tree-sitter JavaScript/TypeScript grammars."""

    def __init__(self) -> None:
        self._parsers: Dict[str, Parser] = {}

    def grammar_for(self, path: Path) -> str:
        return GRAMMAR_BY_SUFFIX.get(path.suffix.lower(), DEFAULT_GRAMMAR)

    def _parser(self, grammar: str) -> Parser:
        parser = self._parsers.get(grammar)
        if parser is None:
            parser = Parser(Language(_LANGUAGE_LOADERS[grammar]()))
            self._parsers[grammar] = parser
            logger.debug("Loaded tree-sitter parser for %s", grammar)
        return parser

    def parse(self, path: Path, source: bytes) -> Any:
        return self._parser(self.grammar_for(path)).parse(source)


class StatementKind(Enum):
    """Statement shapes the analyzer understands."""

    IMPORT = "import"
    REQUIRE = "require"
    EXPORT = "export"


@dataclass(frozen=True)
class Statement:
    """A recognized statement. ``specifier`` is set for IMPORT/REQUIRE, ``code`` for EXPORT."""

    kind: StatementKind
    location: Location
    specifier: Optional[str] = None
    code: Optional[str] = None


def node_text(node: Any) -> str:
    return (node.text or b"").decode("utf-8", errors="replace")


def node_location(node: Any) -> Location:
    row, column = node.start_point
    return Location(line=row + 1, column=column)


def unquote(text: str) -> str:
    """Strip the quote characters surrounding a string literal."""
    return text.strip(QUOTE_CHARS)


def iter_descendants(root: Any, types: FrozenSet[str]) -> Iterator[Any]:
    """Yield nodes of the given types in document (pre-)order, root included."""
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type in types:
            yield node
        stack.extend(reversed(node.children))


def _import_statements(root: Any) -> Iterator[Statement]:
    # TypeScript `import x = require(...)` nests its string in an import_require_clause
    # and is not recorded.
    for node in iter_descendants(root, frozenset({IMPORT_NODE})):
        source = next((child for child in node.named_children if child.type == "string"), None)
        if source is None:
            continue
        specifier = unquote(node_text(source))
        if not specifier:
            continue
        yield Statement(StatementKind.IMPORT, node_location(node), specifier=specifier)


def _require_calls(root: Any) -> Iterator[Statement]:
    for node in iter_descendants(root, frozenset({CALL_NODE})):
        callee = node.child_by_field_name("function")
        if callee is None or callee.type != "identifier" or node_text(callee) != REQUIRE_CALLEE:
            continue
        arguments = node.child_by_field_name("arguments")
        if arguments is None or arguments.type != "arguments" or arguments.named_child_count != 1:
            continue
        argument = arguments.named_children[0]
        if argument.type != "string":
            continue
        specifier = unquote(node_text(argument))
        if not specifier:
            continue
        yield Statement(StatementKind.REQUIRE, node_location(node), specifier=specifier)


def _export_constructs(root: Any) -> Iterator[Statement]:
    for node in iter_descendants(root, EXPORT_NODES):
        yield Statement(StatementKind.EXPORT, node_location(node), code=node_text(node))


def _commonjs_exports(root: Any) -> Iterator[Statement]:
    for node in iter_descendants(root, frozenset({ASSIGNMENT_NODE})):
        left = node.child_by_field_name("left")
        if left is None or left.type != "member_expression":
            continue
        target = node_text(left)
        if target == "module.exports" or target.startswith("exports."):
            yield Statement(StatementKind.EXPORT, node_location(node), code=node_text(node))


def extract_statements(root: Any) -> List[Statement]:
    """
    Translate a raw syntax tree into tagged statements.

    Imports come first, then require calls, then export declarations and
    finally CommonJS export assignments; each group is in document order.

    Args:
        root: The tree's root node.

    Returns:
        List of recognized statements.
    """
    statements: List[Statement] = []
    statements.extend(_import_statements(root))
    statements.extend(_require_calls(root))
    statements.extend(_export_constructs(root))
    statements.extend(_commonjs_exports(root))
    return statements
