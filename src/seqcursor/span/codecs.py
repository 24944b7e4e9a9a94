from __future__ import annotations
import struct

from seqcursor.errors import UnderrunError
from seqcursor.span.cursor import SpanCursor


def view(cur: SpanCursor, n: int) -> memoryview:
    """Consume ``n`` bytes as a sub-view; raise UnderrunError (without moving) if short."""
    out = cur.read(n)
    if out is None:
        raise UnderrunError(n, cur.position, cur.count)
    return out


def take(cur: SpanCursor, n: int) -> bytes:
    return view(cur, n).tobytes()


def read_ascii(cur: SpanCursor, n: int) -> str:
    """Fixed-width ASCII field, NUL/space padding stripped."""
    return take(cur, n).decode("ascii", errors="ignore").rstrip("\x00").rstrip()


def uint(cur: SpanCursor, width: int) -> int:
    """Big-endian unsigned integer of ``width`` bytes."""
    return int.from_bytes(view(cur, width), "big")


def sint(cur: SpanCursor, width: int) -> int:
    """Big-endian two's-complement integer of ``width`` bytes."""
    return int.from_bytes(view(cur, width), "big", signed=True)


_F32 = struct.Struct(">f")
_F64 = struct.Struct(">d")


def f32(cur: SpanCursor) -> float:
    return _F32.unpack(view(cur, _F32.size))[0]


def f64(cur: SpanCursor) -> float:
    return _F64.unpack(view(cur, _F64.size))[0]
