"""Bucket alignment tokens into groups that share one column.

Tokens may align only when their bucket key ``(category, indent,
parent_context, ordinal, scope)`` matches exactly and they sit on
consecutive lines. A blank line (a gap of two or more) ends a run, and runs
with a single member are dropped because there is nothing to align against.
"""

import logging
from collections.abc import Iterable, Sequence

from alignment_sanity.models import AlignmentGroup, AlignmentToken, BucketKey, TokenCategory

logger = logging.getLogger(__name__)

# Separators pad after themselves so the content that follows lines up.
# Everything else pads before so the operators themselves line up.
_PAD_AFTER_CATEGORIES = frozenset({TokenCategory.KEY_VALUE, TokenCategory.LIST_SEPARATOR})

# Pad before, but line up on the right edge.
_RIGHT_ALIGNED_CATEGORIES = frozenset({TokenCategory.FUNCTION_ARGUMENT})


def pads_after(category: TokenCategory) -> bool:
    return category in _PAD_AFTER_CATEGORIES


def aligns_right(category: TokenCategory) -> bool:
    return category in _RIGHT_ALIGNED_CATEGORIES


def reference_column(token: AlignmentToken, pad_after: bool) -> int:
    """Column that must reach the group's target.

    This is the token end when padding after or when right-aligning, its start otherwise.
    """
    return token.end_column if pad_after or aligns_right(token.category) else token.column


def insertion_column(token: AlignmentToken, pad_after: bool) -> int:
    """Column where padding for ``token`` is inserted."""
    return token.end_column if pad_after else token.column


def resolve_target_column(members: Sequence[AlignmentToken], pad_after: bool) -> int:
    return max(reference_column(token, pad_after) for token in members)


def required_padding(token: AlignmentToken, target_column: int, pad_after: bool, shift: int = 0) -> int:
    """Spaces needed for ``token`` to reach ``target_column``; never negative."""
    return max(0, target_column - (reference_column(token, pad_after) + shift))


def _split_runs(bucket: list[AlignmentToken]) -> list[list[AlignmentToken]]:
    runs: list[list[AlignmentToken]] = []
    current: list[AlignmentToken] = []
    for token in bucket:
        if current and token.line - current[-1].line > 1:
            runs.append(current)
            current = []
        current.append(token)
    if current:
        runs.append(current)
    return runs


def make_group(members: list[AlignmentToken]) -> AlignmentGroup:
    first = members[0]
    pad_after = pads_after(first.category)
    return AlignmentGroup(
        id=f"{first.line}-{first.column}-{first.category.value}",
        members=members,
        target_column=resolve_target_column(members, pad_after),
        pad_after=pad_after,
    )


def group_tokens(tokens: Iterable[AlignmentToken]) -> list[AlignmentGroup]:
    """Partition ``tokens`` into alignment groups ordered by their first member's position."""
    ordered = sorted(tokens, key=lambda t: t.line)

    buckets: dict[BucketKey, list[AlignmentToken]] = {}
    for token in ordered:
        buckets.setdefault(token.bucket_key, []).append(token)

    groups: list[AlignmentGroup] = []
    for bucket in buckets.values():
        for run in _split_runs(bucket):
            if len(run) > 1:
                groups.append(make_group(run))

    groups.sort(key=lambda g: (g.members[0].line, g.members[0].column))
    logger.debug("Grouped %d token(s) into %d group(s)", len(ordered), len(groups))
    return groups


def filter_groups_in_range(groups: Iterable[AlignmentGroup], start_line: int, end_line: int) -> list[AlignmentGroup]:
    """Keep groups with at least one member inside the inclusive line range."""
    return [g for g in groups if any(start_line <= t.line <= end_line for t in g.members)]
