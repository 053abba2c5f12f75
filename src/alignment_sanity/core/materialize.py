"""Turn alignment groups into literal whitespace insertions.

Groups are resolved left to right against a shift table holding every
insertion this materializer has already scheduled, so later groups on a shared
line see the columns the earlier ones produced. Existing whitespace at an
insertion point is inspected so that a second run over already aligned text
schedules nothing.
"""

import logging
from collections.abc import Iterable, Sequence

from alignment_sanity.core.grouper import insertion_column, reference_column, required_padding
from alignment_sanity.core.shift import LineShiftTable, resolution_order
from alignment_sanity.models import AlignmentGroup, AlignmentToken, PaddingOperation

logger = logging.getLogger(__name__)


def count_existing_spaces(text: str, column: int, leftward: bool) -> int:
    """Count consecutive spaces touching ``column``: to its left if ``leftward``, else starting at it."""
    count = 0
    if leftward:
        index = column - 1
        while index >= 0 and text[index] == " ":
            count += 1
            index -= 1
    else:
        index = column
        while index < len(text) and text[index] == " ":
            count += 1
            index += 1
    return count


def _in_snapshot(token: AlignmentToken, insert_at: int, lines: Sequence[str]) -> bool:
    return 0 <= token.line < len(lines) and 0 <= insert_at <= len(lines[token.line])


def sort_for_application(operations: Iterable[PaddingOperation]) -> list[PaddingOperation]:
    """Order operations from the end of the document toward the start."""
    return sorted(operations, key=lambda op: (op.line, op.column), reverse=True)


def materialize_padding(
    groups: Iterable[AlignmentGroup],
    lines: Sequence[str],
    respect_existing_padding: bool = True,
) -> list[PaddingOperation]:
    """Compute the whitespace insertions that make ``groups`` aligned in ``lines``.

    A member whose insertion point already carries more spaces than required is
    left untouched when ``respect_existing_padding`` is set. The returned list is
    sorted for right-to-left application.
    """
    shifts = LineShiftTable()
    operations: list[PaddingOperation] = []

    for group in sorted(groups, key=resolution_order):
        placed = [
            (token, insertion_column(token, group.pad_after))
            for token in group.members
            if _in_snapshot(token, insertion_column(token, group.pad_after), lines)
        ]
        if len(placed) < 2:
            logger.debug("Skipping group %s: members outside the line snapshot", group.id)
            continue

        target = max(reference_column(token, group.pad_after) + shifts.before(token.line, at) for token, at in placed)

        for token, at in placed:
            needed = required_padding(token, target, group.pad_after, shifts.before(token.line, at))
            if needed <= 0:
                continue
            existing = count_existing_spaces(lines[token.line], at, leftward=not group.pad_after)
            if respect_existing_padding and existing > needed:
                logger.debug(
                    "Line %d col %d already padded (%d > %d), leaving it", token.line, at, existing, needed
                )
                continue
            operations.append(PaddingOperation(line=token.line, column=at, spaces=needed))
            shifts.add(token.line, at, needed)

    logger.debug("Scheduled %d padding operation(s)", len(operations))
    return sort_for_application(operations)


def apply_padding_operations(lines: Sequence[str], operations: Iterable[PaddingOperation], fill: str = " ") -> list[str]:
    """Apply ``operations`` to a copy of ``lines``, inserting ``fill`` repeated ``spaces`` times."""
    result = list(lines)
    for op in sort_for_application(operations):
        text = result[op.line]
        result[op.line] = text[: op.column] + fill * op.spaces + text[op.column :]
    return result
