from __future__ import annotations
import re
from contextlib import contextmanager
from typing import Any, Callable, Iterator, Optional, Tuple

from seqcursor.collection.indices import index_space
from seqcursor.errors import CursorBoundsError

Predicate = Callable[[Any], bool]


class CollectionCursor:
    """
    A cursor over an ordered, indexable collection.

    ``position`` is the index of the next element to be parsed; it always lies
    between the subject's start and end index (inclusive of the end). The
    subject is never modified, only ``position`` moves.

    Indices are whatever the subject uses: plain offsets for ``str``/``bytes``/
    ``list``/``tuple``, or opaque indices for a subject that implements
    ``IndexSpace`` (see ``seqcursor.collection.views``).

    "No match" outcomes return ``None``/``False``/an empty sub-sequence and
    leave ``position`` alone. Moving outside the subject (``advance()`` at the
    end, ``advance_by`` past either bound) raises CursorBoundsError. Errors
    raised by caller predicates propagate unchanged.
    """

    __slots__ = ("subject", "position", "_indices")

    def __init__(self, subject, position=None):
        self.subject = subject
        self._indices = index_space(subject)
        start, end = self._indices.start_index, self._indices.end_index
        if position is None:
            position = start
        elif not (start <= position <= end):
            raise CursorBoundsError(f"position {position!r} outside [{start!r}, {end!r}]")
        self.position = position

    def copy(self) -> "CollectionCursor":
        """An independent cursor over the same subject at the same position."""
        return CollectionCursor(self.subject, self.position)

    __copy__ = copy

    def __repr__(self) -> str:
        return f"CollectionCursor(position={self.position!r}, end={self._indices.end_index!r})"

    # ---- state ----

    @property
    def is_at_end(self) -> bool:
        return self.position == self._indices.end_index

    def remainder(self):
        """The unparsed part of the subject; empty when at the end."""
        return self._indices.slice(self.position, self._indices.end_index)

    def consumed_since(self, start):
        """The sub-sequence between an earlier position ``start`` and ``position``."""
        return self._indices.slice(start, self.position)

    # ---- advance ----

    def advance(self) -> None:
        """Move past the current element. Raises CursorBoundsError at the end."""
        if self.is_at_end:
            raise CursorBoundsError("advance() called at end of subject")
        self.position = self._indices.index_after(self.position)

    def advance_by(self, distance: int) -> None:
        """Move ``distance`` elements; negative distances move backwards."""
        self.position = self._indices.index_offset(self.position, distance)

    def advance_while(self, predicate: Callable[..., bool], *, inspect: bool = False) -> None:
        """
        Advance while ``predicate`` accepts the current element.

        Stops at the end of the subject or the first rejected element. With
        ``inspect=True`` the predicate is called as ``predicate(element, cursor)``
        so it can look at the cursor. The cursor it gets is a copy taken at the
        current position, so moving it does not affect the scan.

        If the predicate raises, the cursor keeps the progress it made before
        that call.
        """
        idx = self._indices
        end = idx.end_index
        while self.position != end:
            element = idx.element_at(self.position)
            accepted = predicate(element, self.copy()) if inspect else predicate(element)
            if not accepted:
                break
            self.position = idx.index_after(self.position)

    def advance_matching(self, pattern) -> bool:
        """
        Advance past a regex match of a prefix of the remainder, if there is one.
        The remainder is matched on its own, so ``^`` and ``\\b`` see
        ``position`` as the start of the text and lookbehinds never see
        consumed elements.
        """
        m = self._regex(pattern).match(self.remainder())
        if m is None:
            return False
        self.position += m.end()
        return True

    # ---- peek ----

    def peek(self):
        """The current element, or None at the end."""
        if self.is_at_end:
            return None
        return self._indices.element_at(self.position)

    def peek2(self) -> Optional[Tuple[Any, Any]]:
        """The next two elements, or None if fewer remain."""
        if self.is_at_end:
            return None
        idx = self._indices
        b = idx.index_after(self.position)
        if b == idx.end_index:
            return None
        return idx.element_at(self.position), idx.element_at(b)

    def peek3(self) -> Optional[Tuple[Any, Any, Any]]:
        """The next three elements, or None if fewer remain."""
        if self.is_at_end:
            return None
        idx = self._indices
        b = idx.index_after(self.position)
        if b == idx.end_index:
            return None
        c = idx.index_after(b)
        if c == idx.end_index:
            return None
        return idx.element_at(self.position), idx.element_at(b), idx.element_at(c)

    # ---- prefix tests ----

    def has_prefix(self, element) -> bool:
        """Whether the current element equals ``element``."""
        return not self.is_at_end and self._indices.element_at(self.position) == element

    def starts_with(self, prefix) -> bool:
        """Whether the remainder starts with the elements of ``prefix``."""
        return self._prefix_end(prefix) is not None

    def has_prefix_match(self, pattern) -> bool:
        """Whether a regex matches a prefix of the remainder."""
        return self._regex(pattern).match(self.remainder()) is not None

    def _prefix_end(self, prefix):
        idx = self._indices
        end = idx.end_index
        index = self.position
        for expected in prefix:
            if index == end or idx.element_at(index) != expected:
                return None
            index = idx.index_after(index)
        return index

    def _regex(self, pattern) -> re.Pattern:
        if not isinstance(self.subject, (str, bytes, bytearray)):
            raise TypeError(
                f"pattern matching needs a str or bytes subject, not {type(self.subject).__name__}"
            )
        return re.compile(pattern)

    # ---- pop ----

    def pop(self):
        """Return the current element and advance, or None at the end."""
        if self.is_at_end:
            return None
        element = self._indices.element_at(self.position)
        self.position = self._indices.index_after(self.position)
        return element

    def pop_element(self, element) -> bool:
        """Consume the current element if it equals ``element``."""
        if not self.has_prefix(element):
            return False
        self.position = self._indices.index_after(self.position)
        return True

    def pop_where(self, predicate: Predicate):
        """Consume and return the current element if ``predicate`` accepts it, else None."""
        if self.is_at_end:
            return None
        element = self._indices.element_at(self.position)
        if not predicate(element):
            return None
        self.position = self._indices.index_after(self.position)
        return element

    # ---- read ----

    def read(self, count: int):
        """
        Consume exactly ``count`` elements and return them as a sub-sequence.

        Returns None (and does not move) when fewer than ``count`` remain.
        ``read(0)`` always succeeds with an empty sub-sequence.
        """
        if count < 0:
            raise ValueError(f"count must be non-negative, got {count}")
        idx = self._indices
        start = self.position
        end = idx.index_offset_limited(start, count, idx.end_index)
        if end is None:
            return None
        self.position = end
        return idx.slice(start, end)

    def read_prefix(self, prefix) -> bool:
        """Consume ``prefix`` if the remainder starts with it."""
        end = self._prefix_end(prefix)
        if end is None:
            return False
        self.position = end
        return True

    def read_while(self, predicate: Predicate):
        """
        Consume and return the longest prefix whose elements all satisfy
        ``predicate`` (possibly empty).

        If the predicate raises, the error propagates and ``position`` stays at
        the end of the prefix accepted so far.
        """
        start = self.position
        self.advance_while(predicate)
        return self._indices.slice(start, self.position)

    def read_match(self, pattern) -> Optional[re.Match]:
        """
        Consume a regex match of a prefix of the remainder and return it, or
        None. Match offsets are relative to the remainder.
        """
        m = self._regex(pattern).match(self.remainder())
        if m is None:
            return None
        self.position += m.end()
        return m

    # ---- views ----

    @contextmanager
    def nested(self, view) -> Iterator["CollectionCursor"]:
        """
        Parse ``view`` (which must share this subject's indices) from the
        current position. Whatever way the block exits, this cursor takes the
        nested cursor's final position.

            with cur.nested(UnicodeScalarView(cur.subject)) as sub:
                word = sub.read_while(str.isalpha)
        """
        sub = CollectionCursor(view, self.position)
        try:
            yield sub
        finally:
            self.position = sub.position

    def with_view(self, view, body: Callable[["CollectionCursor"], Any]):
        """Run ``body`` on a nested cursor over ``view``; see ``nested``."""
        with self.nested(view) as sub:
            return body(sub)
