"""Shift-aware alignment of trailing annotations.

Trailing comments have to line up on the rendered layout, which already
contains the pad-after whitespace inserted for separators earlier on the same
line. Primary groups are resolved first, left to right, each one against the
insertions of the groups before it. Their pad-after insertions alone are
recorded in a second :class:`LineShiftTable`, and annotation groups are then
resolved against ``column + shift`` from that table.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from alignment_sanity.core.grouper import group_tokens, insertion_column, reference_column, required_padding
from alignment_sanity.models import AlignmentGroup, AlignmentToken, PaddingHint, TokenCategory

logger = logging.getLogger(__name__)


class LineShiftTable:
    """Per-line record of scheduled insertions as ``(column, spaces)`` pairs."""

    def __init__(self) -> None:
        self._insertions: dict[int, list[tuple[int, int]]] = {}

    def add(self, line: int, column: int, spaces: int) -> None:
        if spaces > 0:
            self._insertions.setdefault(line, []).append((column, spaces))

    def before(self, line: int, column: int) -> int:
        """Total spaces inserted on ``line`` at or left of ``column``."""
        return sum(spaces for at, spaces in self._insertions.get(line, ()) if at <= column)

    def total(self, line: int) -> int:
        return sum(spaces for _, spaces in self._insertions.get(line, ()))

    def lines(self) -> list[int]:
        return sorted(self._insertions)

    def __len__(self) -> int:
        return len(self._insertions)


@dataclass
class AlignmentResult:
    groups: list[AlignmentGroup]
    annotation_groups: list[AlignmentGroup]
    shifts: LineShiftTable = field(default_factory=LineShiftTable)

    @property
    def all_groups(self) -> list[AlignmentGroup]:
        return [*self.groups, *self.annotation_groups]


def is_annotation(token: AlignmentToken) -> bool:
    return token.category is TokenCategory.TRAILING_ANNOTATION


def resolution_order(group: AlignmentGroup) -> tuple[bool, int, int]:
    """Primary groups by first member ``(line, column)``, annotation groups last."""
    first = group.members[0]
    return (is_annotation(first), first.line, first.column)


def _render_primary(groups: Iterable[AlignmentGroup]) -> tuple[list[PaddingHint], LineShiftTable]:
    """Resolve primary ``groups`` left to right on the rendered layout.

    Every insertion shifts later columns on its line, so a second aligned column
    on a shared line sees the padding the first one added. Returns the hints
    and a separate table holding only the pad-after insertions.
    """
    rendered = LineShiftTable()
    pad_after = LineShiftTable()
    hints: list[PaddingHint] = []

    for group in sorted(groups, key=resolution_order):
        target = max(
            reference_column(t, group.pad_after) + rendered.before(t.line, insertion_column(t, group.pad_after))
            for t in group.members
        )
        for token in group.members:
            at = insertion_column(token, group.pad_after)
            spaces = required_padding(token, target, group.pad_after, rendered.before(token.line, at))
            if spaces <= 0:
                continue
            hints.append(PaddingHint(line=token.line, column=at, spaces=spaces))
            rendered.add(token.line, at, spaces)
            if group.pad_after:
                pad_after.add(token.line, at, spaces)

    return hints, pad_after


def pad_after_shifts(groups: Iterable[AlignmentGroup]) -> LineShiftTable:
    """Record the pad-after insertions that primary ``groups`` place on each line."""
    return _render_primary(groups)[1]


def shift_annotation_group(group: AlignmentGroup, shifts: LineShiftTable) -> AlignmentGroup:
    """Re-resolve an annotation group's target on the shifted (rendered) layout."""
    target = max(t.column + shifts.before(t.line, t.column) for t in group.members)
    return group.model_copy(update={"target_column": target})


def resolve_alignment(tokens: Iterable[AlignmentToken]) -> AlignmentResult:
    """Group ``tokens`` and resolve annotation groups against primary pad-after shifts."""
    primary: list[AlignmentToken] = []
    annotations: list[AlignmentToken] = []
    for token in tokens:
        (annotations if is_annotation(token) else primary).append(token)

    groups = group_tokens(primary)
    shifts = pad_after_shifts(groups)
    annotation_groups = [shift_annotation_group(g, shifts) for g in group_tokens(annotations)]

    logger.debug(
        "Resolved %d primary and %d annotation group(s); %d shifted line(s)",
        len(groups),
        len(annotation_groups),
        len(shifts),
    )
    return AlignmentResult(groups=groups, annotation_groups=annotation_groups, shifts=shifts)


def padding_hints(result: AlignmentResult, max_padding: int | None = None) -> list[PaddingHint]:
    """Flatten ``result`` into virtual padding hints in original-text coordinates.

    Hints wider than ``max_padding`` are dropped.
    """
    hints, _ = _render_primary(result.groups)

    for group in result.annotation_groups:
        for token in group.members:
            spaces = required_padding(token, group.target_column, False, result.shifts.before(token.line, token.column))
            hints.append(PaddingHint(line=token.line, column=token.column, spaces=spaces))

    return sorted(
        (h for h in hints if h.spaces > 0 and (max_padding is None or h.spaces <= max_padding)),
        key=lambda h: (h.line, h.column),
    )
