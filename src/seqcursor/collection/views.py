from __future__ import annotations
from typing import Iterator, Optional

from seqcursor.errors import CursorBoundsError


def _lead_width(lead: int) -> int:
    # 0 for continuation bytes and leads no valid UTF-8 sequence starts with
    # (0xC0, 0xC1 overlong; 0xF5.. beyond U+10FFFF)
    if lead < 0x80:
        return 1
    if 0xC2 <= lead < 0xE0:
        return 2
    if 0xE0 <= lead < 0xF0:
        return 3
    if 0xF0 <= lead < 0xF5:
        return 4
    return 0


class UnicodeScalarView:
    """
    UTF-8 bytes viewed as Unicode scalars.

    Elements are one-character ``str`` values; indices are the byte offsets
    where each scalar starts. Because the indices are byte offsets, a
    CollectionCursor over the raw ``bytes`` and one over this view share an
    index space, which is what ``CollectionCursor.nested`` relies on:

        cur = CollectionCursor("café.".encode())
        word = cur.with_view(UnicodeScalarView(cur.subject),
                             lambda sub: sub.read_while(str.isalpha))
    """

    __slots__ = ("data",)

    def __init__(self, data: bytes | bytearray | memoryview):
        self.data = bytes(data)

    def _width(self, index: int) -> int:
        w = _lead_width(self.data[index])
        if w == 0:
            raise UnicodeDecodeError("utf-8", self.data, index, index + 1, "invalid start byte")
        if index + w > len(self.data):
            raise UnicodeDecodeError("utf-8", self.data, index, len(self.data), "unexpected end of data")
        return w

    def _index_before(self, index: int) -> int:
        j = index - 1
        while j > 0 and 0x80 <= self.data[j] < 0xC0:
            j -= 1
        return j

    @property
    def start_index(self) -> int:
        return 0

    @property
    def end_index(self) -> int:
        return len(self.data)

    def index_after(self, index: int) -> int:
        if not (0 <= index < len(self.data)):
            raise CursorBoundsError(f"cannot advance past byte offset {index} (end {len(self.data)})")
        return index + self._width(index)

    def index_offset(self, index: int, distance: int) -> int:
        out = self.index_offset_limited(index, distance, None)
        assert out is not None
        return out

    def index_offset_limited(self, index: int, distance: int, limit: Optional[int]) -> Optional[int]:
        if distance >= 0:
            for _ in range(distance):
                if index == limit:
                    return None
                index = self.index_after(index)
        else:
            for _ in range(-distance):
                if index == limit:
                    return None
                if index <= 0:
                    raise CursorBoundsError("cannot move before the start of the view")
                index = self._index_before(index)
        return index

    def element_at(self, index: int) -> str:
        return self.data[index:index + self._width(index)].decode("utf-8")

    def slice(self, lo: int, hi: int) -> str:
        return self.data[lo:hi].decode("utf-8")

    def __iter__(self) -> Iterator[str]:
        return iter(self.data.decode("utf-8"))
