"""Unit tests for the line-scanned JSON/JSONC tokenizer."""

import pytest

from alignment_sanity.core.tokenizer import indent_of, tokenize
from alignment_sanity.models import TokenCategory

PACKAGE_JSON = '{\n  "name": "x",\n  "vscode:prepublish": "npm",\n  "items": ["a:b"]\n}'


def test_structural_colons_only() -> None:
    tokens = tokenize(PACKAGE_JSON, "json")

    assert [(t.line, t.column) for t in tokens] == [(1, 8), (2, 21), (3, 9)]
    assert {t.category for t in tokens} == {TokenCategory.KEY_VALUE}
    assert {t.scope for t in tokens} == {"json_depth_1"}
    assert {t.indent for t in tokens} == {2}
    assert {t.parent_context for t in tokens} == {"pair"}


def test_nested_inline_object_gets_deeper_scope_and_ordinal() -> None:
    tokens = tokenize('{\n  "a": {"b": 1},\n  "cc": 2\n}', "json")

    assert [(t.line, t.ordinal, t.scope) for t in tokens] == [
        (1, 0, "json_depth_1"),
        (1, 1, "json_depth_2"),
        (2, 0, "json_depth_1"),
    ]


def test_jsonc_trailing_comments() -> None:
    source = '{\n  // note {\n  "a": 1, // one\n  "bbb": 2 // two\n}'

    tokens = tokenize(source, "jsonc")
    comments = [t for t in tokens if t.category is TokenCategory.TRAILING_ANNOTATION]

    assert [(t.line, t.column, t.text) for t in comments] == [(2, 10, "// one"), (3, 11, "// two")]
    assert {t.scope for t in tokens if t.category is TokenCategory.KEY_VALUE} == {"json_depth_1"}


def test_plain_json_has_no_comment_tokens() -> None:
    tokens = tokenize('{\n  "url": "http://x"\n}', "json")

    assert [t.category for t in tokens] == [TokenCategory.KEY_VALUE]


def test_line_range_limits_tokens_but_keeps_depth() -> None:
    tokens = tokenize(PACKAGE_JSON, "json", start_line=2, end_line=2)

    assert [(t.line, t.scope) for t in tokens] == [(2, "json_depth_1")]


def test_unsupported_language_raises() -> None:
    with pytest.raises(ValueError, match="Unsupported language"):
        tokenize("x", "cobol")


@pytest.mark.parametrize(("line", "expected"), [("", 0), ("abc", 0), ("    x", 4), ("\t y", 2), ("   ", 3)])
def test_indent_of(line: str, expected: int) -> None:
    assert indent_of(line) == expected
