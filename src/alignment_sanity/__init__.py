from alignment_sanity.core.delimiters import find_structural_delimiters
from alignment_sanity.core.grouper import group_tokens
from alignment_sanity.core.materialize import apply_padding_operations, materialize_padding
from alignment_sanity.core.shift import padding_hints, resolve_alignment
from alignment_sanity.models import AlignmentGroup, AlignmentToken, PaddingHint, PaddingOperation, TokenCategory

__all__ = [
    "AlignmentGroup",
    "AlignmentToken",
    "PaddingHint",
    "PaddingOperation",
    "TokenCategory",
    "apply_padding_operations",
    "find_structural_delimiters",
    "group_tokens",
    "materialize_padding",
    "padding_hints",
    "resolve_alignment",
]
