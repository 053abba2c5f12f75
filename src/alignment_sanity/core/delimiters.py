"""Detect structural delimiters in a single line of text.

A delimiter such as the JSON key/value colon may also occur verbatim inside
quoted strings (``"vscode:prepublish"``). The scanner here walks a line once,
tracking whether it is inside a string, whether the next character is
escaped, and where the most recently closed string ended.
"""

from collections.abc import Iterator


def iter_unquoted(line: str, quote: str = '"', escape: str = "\\") -> Iterator[tuple[int, str, int]]:
    """Yield ``(column, char, last_string_end)`` for every character outside a quoted string.

    ``last_string_end`` is the column of the closing quote of the most recently
    closed string, or ``-1`` if no string has closed yet. Quote characters
    themselves are never yielded. An unterminated string swallows the rest of
    the line.
    """
    in_string = False
    escaped = False
    last_string_end = -1

    for column, char in enumerate(line):
        if in_string:
            if escaped:
                escaped = False
            elif char == escape:
                escaped = True
            elif char == quote:
                in_string = False
                last_string_end = column
            continue

        if char == quote:
            in_string = True
            continue

        yield column, char, last_string_end


def find_structural_delimiters(line: str, delimiter: str = ":", quote: str = '"', escape: str = "\\") -> list[int]:
    """Return the columns of every structural ``delimiter`` on ``line``.

    A delimiter is structural when it sits outside any string and only
    whitespace separates it from the end of the string that closed just
    before it. Each candidate consumes the closed string, so a second
    delimiter after the same key is not structural.
    """
    columns: list[int] = []
    consumed_until = -1

    for column, char, last_string_end in iter_unquoted(line, quote, escape):
        if char != delimiter or last_string_end == -1 or last_string_end <= consumed_until:
            continue
        consumed_until = last_string_end
        if line[last_string_end + 1 : column].strip() == "":
            columns.append(column)

    return columns
