from dataclasses import dataclass
from pathlib import Path

from alignment_sanity.core.languages import normalize_language, resolve_language
from alignment_sanity.core.materialize import apply_padding_operations, materialize_padding
from alignment_sanity.core.shift import AlignmentResult, resolve_alignment
from alignment_sanity.core.tokenizer import tokenize
from alignment_sanity.models import AlignmentToken, PaddingOperation

PREVIEW_MARKER = "·"


@dataclass
class AlignmentReport:
    language: str
    tokens: list[AlignmentToken]
    result: AlignmentResult
    operations: list[PaddingOperation]
    aligned_text: str

    @property
    def changed(self) -> bool:
        return bool(self.operations)

    @property
    def changed_lines(self) -> list[int]:
        return sorted({op.line for op in self.operations})


def align_source(
    source: str,
    language: str,
    respect_existing_padding: bool = True,
    fill: str = " ",
) -> AlignmentReport:
    """Tokenize, group and materialize ``source``; ``fill`` is the character inserted as padding."""
    resolved = normalize_language(language)
    tokens = tokenize(source, resolved)
    result = resolve_alignment(tokens)
    lines = source.split("\n")
    operations = materialize_padding(result.all_groups, lines, respect_existing_padding=respect_existing_padding)
    aligned = "\n".join(apply_padding_operations(lines, operations, fill=fill))
    return AlignmentReport(
        language=resolved,
        tokens=tokens,
        result=result,
        operations=operations,
        aligned_text=aligned,
    )


def preview_source(source: str, language: str, marker: str = PREVIEW_MARKER, respect_existing_padding: bool = True) -> str:
    """Render the planned padding with a visible ``marker`` instead of spaces."""
    return align_source(source, language, respect_existing_padding=respect_existing_padding, fill=marker).aligned_text


def align_file(path: str, language: str | None = None, respect_existing_padding: bool = True) -> AlignmentReport:
    file_path = Path(path)
    resolved_language = resolve_language(language, file_path)

    try:
        source = file_path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise FileNotFoundError(f"File not found: {path}") from None

    return align_source(source, resolved_language, respect_existing_padding=respect_existing_padding)
