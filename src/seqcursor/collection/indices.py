from __future__ import annotations
from typing import Any, Optional, Protocol, Sequence, runtime_checkable

from seqcursor.errors import CursorBoundsError


@runtime_checkable
class IndexSpace(Protocol):
    """
    Navigation capability a CollectionCursor needs from its subject.

    Indices are opaque to the cursor: it only compares them (``==``, ``<=``)
    and asks the space to move them. A space that does not use plain integer
    offsets (e.g. byte offsets of variable-width scalars) implements this
    protocol itself; ordinary Python sequences are adapted by SequenceIndices.
    """

    @property
    def start_index(self) -> Any: ...

    @property
    def end_index(self) -> Any: ...

    def index_after(self, index: Any) -> Any: ...

    def index_offset(self, index: Any, distance: int) -> Any: ...

    def index_offset_limited(self, index: Any, distance: int, limit: Any) -> Optional[Any]: ...

    def element_at(self, index: Any) -> Any: ...

    def slice(self, lo: Any, hi: Any) -> Any: ...


class SequenceIndices:
    """Integer-offset IndexSpace over a ``str``, ``bytes``, ``list``, ``tuple``..."""

    __slots__ = ("seq",)

    def __init__(self, seq: Sequence):
        self.seq = seq

    @property
    def start_index(self) -> int:
        return 0

    @property
    def end_index(self) -> int:
        return len(self.seq)

    def index_after(self, index: int) -> int:
        if not (0 <= index < len(self.seq)):
            raise CursorBoundsError(f"cannot advance past index {index} (end {len(self.seq)})")
        return index + 1

    def index_offset(self, index: int, distance: int) -> int:
        out = index + distance
        if not (0 <= out <= len(self.seq)):
            raise CursorBoundsError(f"offset {distance} from {index} leaves [0, {len(self.seq)}]")
        return out

    def index_offset_limited(self, index: int, distance: int, limit: int) -> Optional[int]:
        out = index + distance
        # limit only bounds the walk in the direction of travel
        if distance >= 0 and index <= limit < out:
            return None
        if distance < 0 and out < limit <= index:
            return None
        if not (0 <= out <= len(self.seq)):
            raise CursorBoundsError(f"offset {distance} from {index} leaves [0, {len(self.seq)}]")
        return out

    def element_at(self, index: int):
        return self.seq[index]

    def slice(self, lo: int, hi: int):
        return self.seq[lo:hi]


def index_space(subject) -> IndexSpace:
    """Return ``subject`` if it navigates itself, else wrap it in SequenceIndices."""
    if isinstance(subject, IndexSpace):
        return subject
    return SequenceIndices(subject)
