from __future__ import annotations
from enum import Enum
from typing import Dict, List
from pydantic import BaseModel, Field


class TokenKind(str, Enum):
    WORD = "word"
    NUMBER = "number"
    STRING = "string"
    PUNCT = "punct"
    SPACE = "space"
    COMMENT = "comment"


class Token(BaseModel):
    kind: TokenKind
    text: str
    # offsets into the subject: characters for str input, bytes for UTF-8 input
    start: int = Field(..., ge=0)
    end: int = Field(..., ge=0)


class ScanSummary(BaseModel):
    tokens: int = Field(0, ge=0)
    by_kind: Dict[TokenKind, int] = Field(default_factory=dict)

    @classmethod
    def from_tokens(cls, tokens: List[Token]) -> "ScanSummary":
        by_kind: Dict[TokenKind, int] = {}
        for t in tokens:
            by_kind[t.kind] = by_kind.get(t.kind, 0) + 1
        return cls(tokens=len(tokens), by_kind=by_kind)
