from __future__ import annotations
import logging
from typing import Iterator, List, Optional

from seqcursor.collection.cursor import CollectionCursor
from seqcursor.collection.views import UnicodeScalarView
from seqcursor.errors import LexError
from seqcursor.models.config import LexerConfig
from seqcursor.models.token import Token, TokenKind

log = logging.getLogger(__name__)

# two-character operators recognised before single punctuation
OPERATORS = ("==", "!=", "<=", ">=", "->", "::", "&&", "||")


def _is_word_start(c: str) -> bool:
    return c.isalpha() or c == "_"


def _is_word_char(c: str) -> bool:
    return c.isalnum() or c == "_"


def _read_number(cur: CollectionCursor) -> None:
    cur.advance_while(str.isdigit)
    pair = cur.peek2()
    if pair is not None and pair[0] == "." and pair[1].isdigit():
        cur.advance()
        cur.advance_while(str.isdigit)


def _read_string(cur: CollectionCursor, quote: str) -> None:
    start = cur.position
    cur.advance()  # opening quote
    while True:
        c = cur.pop()
        if c is None:
            raise LexError("unterminated string", start)
        if c == "\\":
            if cur.pop() is None:
                raise LexError("unterminated string", start)
        elif c == quote:
            return


def scan(cur: CollectionCursor, config: Optional[LexerConfig] = None) -> Iterator[Token]:
    """
    Yield tokens from ``cur`` until it is exhausted.

    ``cur`` must have one-character ``str`` elements and ``str`` slices: a
    cursor over a ``str``, or over a UnicodeScalarView.
    """
    config = config or LexerConfig()
    emitted = 0
    while not cur.is_at_end:
        if config.max_tokens is not None and emitted >= config.max_tokens:
            return
        start = cur.position
        c = cur.peek()

        if c.isspace():
            cur.advance_while(str.isspace)
            kind = TokenKind.SPACE
        elif cur.starts_with(config.comment_prefix):
            cur.advance_while(lambda ch: ch != "\n")
            kind = TokenKind.COMMENT
        elif c.isdigit():
            _read_number(cur)
            kind = TokenKind.NUMBER
        elif _is_word_start(c):
            cur.advance_while(_is_word_char)
            kind = TokenKind.WORD
        elif c in config.quote_chars:
            _read_string(cur, c)
            kind = TokenKind.STRING
        elif any(cur.read_prefix(op) for op in OPERATORS):
            kind = TokenKind.PUNCT
        elif cur.pop_where(lambda ch: ch in config.punctuation) is not None:
            kind = TokenKind.PUNCT
        else:
            raise LexError(f"unexpected character {c!r}", start)

        if kind is TokenKind.SPACE and not config.keep_whitespace:
            continue
        if kind is TokenKind.COMMENT and not config.keep_comments:
            continue
        emitted += 1
        yield Token(kind=kind, text=cur.consumed_since(start), start=start, end=cur.position)


def tokenize(text: str, config: Optional[LexerConfig] = None) -> List[Token]:
    tokens = list(scan(CollectionCursor(text), config))
    log.debug("tokenized %d chars into %d tokens", len(text), len(tokens))
    return tokens


def tokenize_bytes(data: bytes, config: Optional[LexerConfig] = None) -> List[Token]:
    """Tokenize UTF-8 ``data``; token offsets are byte offsets."""
    cur = CollectionCursor(bytes(data))
    tokens = cur.with_view(UnicodeScalarView(cur.subject), lambda sub: list(scan(sub, config)))
    log.debug("tokenized %d bytes into %d tokens (stopped at %d)", len(data), len(tokens), cur.position)
    return tokens
