from __future__ import annotations
from pydantic import BaseModel, Field, field_validator


class LexerConfig(BaseModel):
    keep_whitespace: bool = False
    keep_comments: bool = False
    comment_prefix: str = "#"
    punctuation: str = "()[]{}<>.,;:=+-*/%!?&|^~@$"
    quote_chars: str = "\"'"
    max_tokens: int | None = Field(None, ge=1)

    @field_validator("comment_prefix")
    @classmethod
    def _non_empty_prefix(cls, v: str) -> str:
        if not v or v.isspace():
            raise ValueError("comment_prefix must be non-blank")
        return v
