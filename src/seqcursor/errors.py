from __future__ import annotations


class CursorBoundsError(IndexError):
    """A cursor was asked to move outside ``[start, end]``.

    This is a programming error: callers are expected to check
    ``is_at_end``/``count`` (or use a ``pop_*``/``read*`` variant) first.
    """


class ParseError(ValueError):
    """Base class for failures raised by code built on top of the cursors."""

    def __init__(self, message: str, offset: int | None = None):
        super().__init__(message)
        self.message = message
        self.offset = offset

    def __str__(self):
        if self.offset is not None:
            return f"{self.message} (at offset {self.offset})"
        return self.message


class UnderrunError(ParseError):
    def __init__(self, need: int, offset: int, left: int):
        super().__init__(f"underrun: need {need}, left {left}", offset)
        self.need = need
        self.left = left


class LexError(ParseError):
    pass


class FrameError(ParseError):
    pass
