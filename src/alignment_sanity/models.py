from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class TokenCategory(StrEnum):
    ASSIGNMENT = "assignment"
    KEY_VALUE = "key-value-separator"
    LOGICAL_AND = "logical-and"
    LOGICAL_OR = "logical-or"
    LIST_SEPARATOR = "list-separator"
    TRAILING_ANNOTATION = "trailing-annotation"
    FUNCTION_ARGUMENT = "function-argument"


BucketKey = tuple[TokenCategory, int, str, int, str]


class AlignmentToken(BaseModel):
    model_config = ConfigDict(frozen=True)

    line: int
    column: int
    text: str
    category: TokenCategory
    indent: int = 0
    parent_context: str = "unknown"
    ordinal: int = 0
    scope: str = "root"

    @property
    def end_column(self) -> int:
        return self.column + len(self.text)

    @property
    def bucket_key(self) -> BucketKey:
        return (self.category, self.indent, self.parent_context, self.ordinal, self.scope)


class AlignmentGroup(BaseModel):
    id: str
    members: list[AlignmentToken] = Field(min_length=2)
    target_column: int
    pad_after: bool

    @property
    def category(self) -> TokenCategory:
        return self.members[0].category

    @property
    def first_line(self) -> int:
        return self.members[0].line


class PaddingHint(BaseModel):
    """Virtual padding for a rendering layer: draw ``spaces`` blanks at ``(line, column)``."""

    model_config = ConfigDict(frozen=True)

    line: int
    column: int
    spaces: int


class PaddingOperation(BaseModel):
    """Literal whitespace insertion against the original, unpadded line text."""

    model_config = ConfigDict(frozen=True)

    line: int
    column: int
    spaces: int
