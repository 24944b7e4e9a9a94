from __future__ import annotations
from typing import Any, Callable, Optional, Tuple

from seqcursor.errors import CursorBoundsError


class SpanCursor:
    """
    A cursor over a contiguous buffer, addressed by integer offset.

    The buffer is wrapped in a read-only ``memoryview``; everything handed out
    (``remainder()``, ``read()``, ``read_while()``) is a slice of that same
    view, not a copy. While the cursor (or a slice from it) is alive, a
    ``bytearray`` behind it cannot be resized. Release the view with
    ``close()`` or by using the cursor as a context manager.

    A SpanCursor is single-owner: ``copy.copy``/``copy.deepcopy`` are refused.

    Checked/unchecked pairs
    -----------------------
    ``advance``/``unchecked_advance``, ``advance_by``/``unchecked_advance_by``
    and ``pop``/``unchecked_pop`` have the same effect when their precondition
    holds. The checked form raises CursorBoundsError (``pop`` returns None)
    when it does not; the unchecked form only ``assert``s, so under ``-O`` a
    violation goes unnoticed and leaves the cursor in an invalid state. Use
    the unchecked form only where surrounding code has already established
    the bound.
    """

    __slots__ = ("_span", "_position")

    def __init__(self, buffer, position: int = 0):
        span = memoryview(buffer).toreadonly()
        if not (0 <= position <= len(span)):
            raise CursorBoundsError(f"position {position} outside [0, {len(span)}]")
        self._span = span
        self._position = position

    def __copy__(self):
        raise TypeError("SpanCursor cannot be copied")

    def __deepcopy__(self, memo):
        raise TypeError("SpanCursor cannot be copied")

    def __enter__(self) -> "SpanCursor":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def close(self) -> None:
        self._span.release()

    def __repr__(self) -> str:
        return f"SpanCursor(position={self._position}, len={len(self._span)})"

    # ---- state ----

    @property
    def span(self) -> memoryview:
        return self._span

    @property
    def position(self) -> int:
        """Offset of the next element; ``len(span)`` at the end."""
        return self._position

    @property
    def count(self) -> int:
        """Number of unparsed elements."""
        return len(self._span) - self._position

    @property
    def is_empty(self) -> bool:
        return self._position == len(self._span)

    def remainder(self) -> memoryview:
        return self._span[self._position:]

    # ---- advance ----

    def advance(self) -> None:
        if self._position >= len(self._span):
            raise CursorBoundsError("advance() called at end of span")
        self._position += 1

    def unchecked_advance(self) -> None:
        assert self._position < len(self._span)
        self._position += 1

    def advance_by(self, distance: int) -> None:
        """Move ``distance`` elements; negative distances move backwards."""
        target = self._position + distance
        if not (0 <= target <= len(self._span)):
            raise CursorBoundsError(f"offset {distance} from {self._position} leaves [0, {len(self._span)}]")
        self._position = target

    def unchecked_advance_by(self, distance: int) -> None:
        assert 0 <= self._position + distance <= len(self._span)
        self._position += distance

    def advance_while(self, predicate: Callable[[Any], bool]) -> None:
        """
        Advance while ``predicate`` accepts the current element.

        If the predicate raises, the cursor keeps the progress made before
        the failing call.
        """
        span = self._span
        end = len(span)
        position = self._position
        try:
            while position < end and predicate(span[position]):
                position += 1
        finally:
            self._position = position

    # ---- peek ----

    def peek(self):
        if self._position >= len(self._span):
            return None
        return self._span[self._position]

    def peek2(self) -> Optional[Tuple[Any, Any]]:
        p = self._position
        if p + 1 >= len(self._span):
            return None
        return self._span[p], self._span[p + 1]

    def peek3(self) -> Optional[Tuple[Any, Any, Any]]:
        p = self._position
        if p + 2 >= len(self._span):
            return None
        return self._span[p], self._span[p + 1], self._span[p + 2]

    # ---- pop ----

    def pop(self):
        """Return the current element and advance, or None at the end."""
        if self._position >= len(self._span):
            return None
        return self.unchecked_pop()

    def unchecked_pop(self):
        """Return the current element and advance; the caller guarantees one is left."""
        assert self._position < len(self._span)
        element = self._span[self._position]
        self._position += 1
        return element

    def pop_element(self, element) -> bool:
        if self._position >= len(self._span) or self._span[self._position] != element:
            return False
        self.unchecked_advance()
        return True

    def pop_where(self, predicate: Callable[[Any], bool]):
        if self._position >= len(self._span):
            return None
        element = self._span[self._position]
        if not predicate(element):
            return None
        self.unchecked_advance()
        return element

    # ---- read ----

    def read(self, count: int) -> Optional[memoryview]:
        """
        Consume exactly ``count`` elements and return them as a sub-view.

        Reading everything that is left (``count == self.count``) succeeds;
        asking for more returns None without moving.
        """
        if count < 0:
            raise ValueError(f"count must be non-negative, got {count}")
        start = self._position
        end = start + count
        if end > len(self._span):
            return None
        self.unchecked_advance_by(count)
        return self._span[start:end]

    def read_while(self, predicate: Callable[[Any], bool]) -> memoryview:
        """Consume and return the longest prefix accepted by ``predicate``."""
        start = self._position
        self.advance_while(predicate)
        return self._span[start:self._position]
