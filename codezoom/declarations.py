"""Declaration lookup and per-file declaration inventories.

Parses TypeScript source with Tree-sitter. ``find_declaration`` scans the
program's top-level statements in source order and returns the first
function, class, or variable declarator bound to a given name; declarations
in nested scopes are never considered. ``collect_declarations`` walks the
whole tree in pre-order and lists every declared name plus the imported
module sources.

Sources that do not parse cleanly raise ``DeclarationParseError`` so callers
can tell a broken file apart from an absent declaration (``None``).
"""

from __future__ import annotations

import hashlib
import logging
from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache

logger = logging.getLogger(__name__)

GRAMMAR_NAME = "typescript"
MISSING_PARSER_ERROR = "Tree-sitter parser package not found. Install tree-sitter-language-pack."


class DeclarationError(Exception):
    """Base class for declaration lookup failures."""


class ParserUnavailableError(DeclarationError):
    """No Tree-sitter provider could supply the TypeScript grammar."""


class DeclarationParseError(DeclarationError):
    """The source text does not parse under the TypeScript grammar."""

    def __init__(self, message: str, line: int | None = None, column: int | None = None) -> None:
        super().__init__(message)
        self.line = line
        self.column = column


class ElementKind(str, Enum):
    FUNCTION = "Function"
    CLASS = "Class"
    VARIABLE = "Variable"
    MODULE = "Module"
    UNKNOWN = "Unknown"


KIND_BY_NODE_TYPE: dict[str, ElementKind] = {
    "function_declaration": ElementKind.FUNCTION,
    "generator_function_declaration": ElementKind.FUNCTION,
    "class_declaration": ElementKind.CLASS,
    "abstract_class_declaration": ElementKind.CLASS,
    "variable_declarator": ElementKind.VARIABLE,
}
IMPORT_NODE_TYPE = "import_statement"
BINDING_IDENTIFIER_TYPES = frozenset({"identifier", "type_identifier"})
EXPORT_NODE_TYPE = "export_statement"
DECLARATOR_LIST_TYPES = frozenset({"lexical_declaration", "variable_declaration"})


@dataclass(frozen=True)
class ElementDetails:
    """A located declaration and its exact source text."""

    kind: ElementKind
    name: str
    code: str
    start_byte: int
    end_byte: int
    start_line: int
    end_line: int


@dataclass(frozen=True)
class FileDeclarations:
    """Names declared in one file, in source order."""

    content_hash: str
    classes: tuple[str, ...]
    functions: tuple[str, ...]
    modules: tuple[str, ...]
    variables: tuple[str, ...]


@lru_cache(maxsize=4)
def _load_parser(language_name: str):
    """Load a Tree-sitter parser using supported provider packages.

    Tries ``tree_sitter_language_pack`` first, then ``tree_sitter_languages``.
    Returns ``(parser, error_message)``.
    """
    errors: list[str] = []

    try:
        from tree_sitter_language_pack import get_parser

        return get_parser(language_name), None
    except ModuleNotFoundError:
        pass
    except Exception as exc:
        errors.append(f"Failed to load Tree-sitter parser for {language_name}: {exc}")

    try:
        from tree_sitter_languages import get_parser

        return get_parser(language_name), None
    except ModuleNotFoundError:
        pass
    except Exception as exc:
        errors.append(f"Failed to load Tree-sitter parser for {language_name}: {exc}")

    if errors:
        return None, errors[0]

    return None, MISSING_PARSER_ERROR


def element_kind(node_type: str) -> ElementKind:
    """Map a Tree-sitter node type to the declaration kind it introduces."""
    return KIND_BY_NODE_TYPE.get(node_type, ElementKind.UNKNOWN)


def _node_text(source_bytes: bytes, node) -> str:
    """Decode source slice covered by a Tree-sitter node."""
    return source_bytes[node.start_byte : node.end_byte].decode("utf-8", errors="replace")


def _first_error_node(root):
    """Return the first ERROR or MISSING node in pre-order, if any."""
    for node in iter_preorder(root):
        if node.type == "ERROR" or getattr(node, "is_missing", False):
            return node
    return None


def parse_source(content: str):
    """Parse ``content`` and return ``(tree, source_bytes)``.

    Raises ``ParserUnavailableError`` or ``DeclarationParseError``.
    """
    parser, parser_error = _load_parser(GRAMMAR_NAME)
    if parser is None:
        raise ParserUnavailableError(parser_error or MISSING_PARSER_ERROR)

    source_bytes = content.encode("utf-8", errors="replace")
    tree = parser.parse(source_bytes)
    root = tree.root_node
    if root.has_error:
        bad = _first_error_node(root)
        if bad is None:
            raise DeclarationParseError("Source does not parse as TypeScript.")
        line, column = bad.start_point
        raise DeclarationParseError(
            f"Source does not parse as TypeScript: syntax error at line {line + 1}, column {column + 1}.",
            line=int(line),
            column=int(column),
        )
    return tree, source_bytes


def iter_preorder(root) -> Iterator:
    """Yield ``root`` and its descendants in pre-order without recursion."""
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


def iter_top_level_declarations(root) -> Iterator:
    """Yield declaration nodes introduced by the program's own statements.

    ``export`` wrappers are unwrapped, and ``const``/``let``/``var`` statements
    yield each of their declarators in order.
    """
    for statement in root.named_children:
        if statement.type == EXPORT_NODE_TYPE:
            statement = statement.child_by_field_name("declaration")
            if statement is None:
                continue
        if statement.type in DECLARATOR_LIST_TYPES:
            for child in statement.named_children:
                if child.type == "variable_declarator":
                    yield child
        elif statement.type in KIND_BY_NODE_TYPE:
            yield statement


def bound_name(source_bytes: bytes, node) -> str | None:
    """Return the plain identifier a declaration binds, if it binds one."""
    name_node = node.child_by_field_name("name")
    if name_node is None or name_node.type not in BINDING_IDENTIFIER_TYPES:
        return None
    return _node_text(source_bytes, name_node)


def _details(source_bytes: bytes, node, name: str) -> ElementDetails:
    return ElementDetails(
        kind=element_kind(node.type),
        name=name,
        code=_node_text(source_bytes, node),
        start_byte=int(node.start_byte),
        end_byte=int(node.end_byte),
        start_line=int(node.start_point[0]),
        end_line=int(node.end_point[0]),
    )


def find_declaration(name: str, content: str) -> ElementDetails | None:
    """Return the first top-level declaration of ``name`` or ``None``."""
    tree, source_bytes = parse_source(content)
    for node in iter_top_level_declarations(tree.root_node):
        if bound_name(source_bytes, node) == name:
            details = _details(source_bytes, node, name)
            logger.debug(
                "Found %s %s at lines %d-%d",
                details.kind.value,
                name,
                details.start_line + 1,
                details.end_line + 1,
            )
            return details
    logger.debug("No declaration named %s", name)
    return None


def _import_source(source_bytes: bytes, node) -> str | None:
    source = node.child_by_field_name("source")
    if source is None:
        return None
    text = _node_text(source_bytes, source)
    if len(text) >= 2 and text[0] == text[-1] and text[0] in "\"'":
        return text[1:-1]
    return text


def collect_declarations(content: str) -> FileDeclarations:
    """Inventory classes, functions, imported modules, and variables."""
    tree, source_bytes = parse_source(content)
    classes: list[str] = []
    functions: list[str] = []
    modules: list[str] = []
    variables: list[str] = []
    by_kind = {
        ElementKind.CLASS: classes,
        ElementKind.FUNCTION: functions,
        ElementKind.VARIABLE: variables,
    }

    for node in iter_preorder(tree.root_node):
        if node.type == IMPORT_NODE_TYPE:
            module = _import_source(source_bytes, node)
            if module is not None:
                modules.append(module)
            continue
        kind = KIND_BY_NODE_TYPE.get(node.type)
        if kind is None:
            continue
        declared = bound_name(source_bytes, node)
        if declared is not None:
            by_kind[kind].append(declared)

    return FileDeclarations(
        content_hash=hashlib.md5(content.encode("utf-8", errors="replace")).hexdigest(),
        classes=tuple(classes),
        functions=tuple(functions),
        modules=tuple(modules),
        variables=tuple(variables),
    )


__all__ = [
    "GRAMMAR_NAME",
    "DeclarationError",
    "ParserUnavailableError",
    "DeclarationParseError",
    "ElementKind",
    "KIND_BY_NODE_TYPE",
    "ElementDetails",
    "FileDeclarations",
    "element_kind",
    "parse_source",
    "iter_preorder",
    "iter_top_level_declarations",
    "bound_name",
    "find_declaration",
    "collect_declarations",
]
