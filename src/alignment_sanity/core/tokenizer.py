"""Extract classified alignment tokens from source text.

Tree-sitter grammars from ``tree-sitter-language-pack`` locate operators in
their syntactic role; JSON and JSONC are scanned line by line with the
structural delimiter classifier instead.
"""

import logging
from pathlib import Path
from typing import cast

from tree_sitter import Node, Query, QueryCursor
from tree_sitter_language_pack import SupportedLanguage, get_language, get_parser

from alignment_sanity.core.delimiters import find_structural_delimiters, iter_unquoted
from alignment_sanity.core.languages import detect_language_from_path, is_line_scanned, normalize_language
from alignment_sanity.models import AlignmentToken, TokenCategory

logger = logging.getLogger(__name__)

TRAILING_COMMENT = "trailing_comment"

_CATEGORY_BY_TEXT = {
    "=": TokenCategory.ASSIGNMENT,
    ":": TokenCategory.KEY_VALUE,
    ",": TokenCategory.LIST_SEPARATOR,
    "&&": TokenCategory.LOGICAL_AND,
    "and": TokenCategory.LOGICAL_AND,
    "||": TokenCategory.LOGICAL_OR,
    "or": TokenCategory.LOGICAL_OR,
}

_LITERAL_TYPES = frozenset(
    {
        "string",
        "template_string",
        "string_literal",
        "string_fragment",
        "interpolation",
        "formatted_string",
        "comment",
        "line_comment",
        "block_comment",
    }
)

_OBJECT_LIKE_TYPES = frozenset({"object", "object_pattern", "object_type", "dictionary"})

_ARRAY_LIKE_TYPES = frozenset({"array", "array_pattern", "list", "tuple", "tuple_type", "type_arguments"})

_BLOCK_SCOPE_TYPES = frozenset(
    {
        "program",
        "module",
        "stylesheet",
        "block",
        "statement_block",
        "class_body",
        "enum_body",
        "interface_body",
        "function_definition",
        "function_declaration",
        "arrow_function",
        "class_definition",
        "class_declaration",
        "if_statement",
        "for_statement",
        "while_statement",
    }
)


def _load_query(language: str) -> Query:
    queries_dir = Path(__file__).parent.parent / "queries"
    query_path = queries_dir / f"{language}_operators.scm"
    if not query_path.exists():
        raise FileNotFoundError(f"Query file not found: {query_path}")
    query_text = query_path.read_text(encoding="utf-8")
    return Query(get_language(cast(SupportedLanguage, language)), query_text)


def indent_of(line: str) -> int:
    return len(line) - len(line.lstrip())


def _char_column(line_bytes: bytes, byte_column: int) -> int:
    return len(line_bytes[:byte_column].decode("utf-8", errors="ignore"))


def _inside_literal(node: Node) -> bool:
    current = node.parent
    while current is not None:
        if current.type in _LITERAL_TYPES:
            return True
        current = current.parent
    return False


def scope_of(node: Node) -> str:
    """Identify the construct whose tokens may align with ``node``.

    The nearest array-like ancestor wins so that sibling inline records in one
    array share a scope. Otherwise the first object-like ancestor below the
    nearest block is used, then the block itself.
    """
    first_object: Node | None = None
    current = node.parent
    while current is not None:
        if current.type in _ARRAY_LIKE_TYPES:
            return f"array_{current.id}"
        if first_object is None and current.type in _OBJECT_LIKE_TYPES:
            first_object = current
        if current.type in _BLOCK_SCOPE_TYPES:
            break
        current = current.parent

    if first_object is not None:
        return f"object_{first_object.id}"
    if current is not None:
        return f"{current.type}_{current.id}"
    return "root"


def _in_range(line: int, start_line: int | None, end_line: int | None) -> bool:
    return (start_line is None or line >= start_line) and (end_line is None or line <= end_line)


def _with_ordinals(drafts: list[dict[str, object]]) -> list[AlignmentToken]:
    drafts.sort(key=lambda d: (cast(int, d["line"]), cast(int, d["column"])))
    seen: dict[tuple[object, object], int] = {}
    tokens: list[AlignmentToken] = []
    for draft in drafts:
        key = (draft["line"], draft["category"])
        ordinal = seen.get(key, 0)
        seen[key] = ordinal + 1
        tokens.append(AlignmentToken.model_validate({**draft, "ordinal": ordinal}))
    return tokens


def _classify(node: Node, text: str, prefix: str) -> tuple[TokenCategory, str, str] | None:
    if node.type == "comment":
        if node.start_point[0] != node.end_point[0] or not prefix.strip():
            return None
        return TokenCategory.TRAILING_ANNOTATION, TRAILING_COMMENT, TRAILING_COMMENT

    category = _CATEGORY_BY_TEXT.get(text)
    if category is None or node.parent is None:
        return None
    if category is TokenCategory.LIST_SEPARATOR and node.parent.start_point[0] != node.parent.end_point[0]:
        # Only separators of single-line records align.
        return None
    return category, node.parent.type, scope_of(node)


def _node_text(node: Node, source_bytes: bytes) -> str:
    return source_bytes[node.start_byte : node.end_byte].decode("utf-8")


def _call_name_node(arguments: Node) -> Node:
    """Identifier naming the called function; the property of a member call like ``obj.method(...)``."""
    function = cast(Node, cast(Node, arguments.parent).child_by_field_name("function"))
    if function.type == "member_expression":
        return cast(Node, function.child_by_field_name("property"))
    return function


def _aligns_arguments(arguments: Node) -> bool:
    """Only single-line, top-level calls with two or more arguments right-align their arguments."""
    if arguments.start_point[0] != arguments.end_point[0] or _inside_literal(arguments):
        return False
    if len([n for n in arguments.named_children if n.type != "comment"]) < 2:
        return False
    current = arguments.parent.parent if arguments.parent else None
    while current is not None:
        if current.type == "arguments":
            return False
        current = current.parent
    return True


def _tokenize_tree(source: str, language: str, start_line: int | None, end_line: int | None) -> list[AlignmentToken]:
    source_bytes = source.encode("utf-8")
    tree = get_parser(cast(SupportedLanguage, language)).parse(source_bytes)
    query = _load_query(language)

    byte_lines = source_bytes.split(b"\n")
    text_lines = source.split("\n")

    captures = QueryCursor(query).captures(tree.root_node)
    nodes: dict[tuple[int, int], Node] = {}
    for captured in captures.get("op", []):
        nodes.setdefault((captured.start_byte, captured.end_byte), captured)

    drafts: list[dict[str, object]] = []
    for arguments in captures.get("args", []):
        row = arguments.start_point[0]
        if not _in_range(row, start_line, end_line) or not _aligns_arguments(arguments):
            continue
        line_text = text_lines[row]
        scope = f"call_{_node_text(_call_name_node(arguments), source_bytes)}"
        for argument in arguments.named_children:
            if argument.type == "comment":
                continue
            drafts.append(
                {
                    "line": row,
                    "column": _char_column(byte_lines[row], argument.start_point[1]),
                    "text": _node_text(argument, source_bytes),
                    "category": TokenCategory.FUNCTION_ARGUMENT,
                    "indent": indent_of(line_text),
                    "parent_context": "arguments",
                    "scope": scope,
                }
            )

    for node in nodes.values():
        row, byte_column = node.start_point
        if not _in_range(row, start_line, end_line) or _inside_literal(node):
            continue
        line_text = text_lines[row]
        column = _char_column(byte_lines[row], byte_column)
        text = _node_text(node, source_bytes)
        classified = _classify(node, text, line_text[:column])
        if classified is None:
            continue
        category, parent_context, scope = classified
        drafts.append(
            {
                "line": row,
                "column": column,
                "text": text,
                "category": category,
                "indent": indent_of(line_text),
                "parent_context": parent_context,
                "scope": scope,
            }
        )

    return _with_ordinals(drafts)


def _tokenize_lines(source: str, language: str, start_line: int | None, end_line: int | None) -> list[AlignmentToken]:
    allow_comments = language == "jsonc"
    depth = 0
    drafts: list[dict[str, object]] = []

    for row, line_text in enumerate(source.split("\n")):
        wanted = _in_range(row, start_line, end_line)
        colons = set(find_structural_delimiters(line_text)) if wanted else set()
        common = {"line": row, "indent": indent_of(line_text)}

        for column, char, _ in iter_unquoted(line_text):
            if allow_comments and line_text.startswith("//", column):
                if wanted and line_text[:column].strip():
                    drafts.append(
                        {
                            **common,
                            "column": column,
                            "text": line_text[column:].rstrip(),
                            "category": TokenCategory.TRAILING_ANNOTATION,
                            "parent_context": TRAILING_COMMENT,
                            "scope": TRAILING_COMMENT,
                        }
                    )
                break
            if char in "{[":
                depth += 1
            elif char in "}]":
                depth = max(0, depth - 1)
            elif column in colons:
                drafts.append(
                    {
                        **common,
                        "column": column,
                        "text": ":",
                        "category": TokenCategory.KEY_VALUE,
                        "parent_context": "pair",
                        "scope": f"json_depth_{depth}",
                    }
                )

    return _with_ordinals(drafts)


def tokenize(
    source: str,
    language: str,
    start_line: int | None = None,
    end_line: int | None = None,
) -> list[AlignmentToken]:
    """Return the alignment tokens of ``source``, optionally limited to an inclusive line range."""
    resolved = normalize_language(language)
    if is_line_scanned(resolved):
        tokens = _tokenize_lines(source, resolved, start_line, end_line)
    else:
        tokens = _tokenize_tree(source, resolved, start_line, end_line)
    logger.debug("Extracted %d token(s) from %s source", len(tokens), resolved)
    return tokens


def tokenize_file(path: str, language: str | None = None) -> list[AlignmentToken]:
    file_path = Path(path)
    resolved_language = normalize_language(language) if language else detect_language_from_path(file_path)

    try:
        source = file_path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise FileNotFoundError(f"File not found: {path}") from None

    return tokenize(source, resolved_language)
