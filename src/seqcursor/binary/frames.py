from __future__ import annotations
import logging
from pathlib import Path
from typing import Iterator, List, Optional, Union

from seqcursor.errors import FrameError, UnderrunError
from seqcursor.models.frame import HEADER_SIZE, Frame
from seqcursor.span import codecs
from seqcursor.span.cursor import SpanCursor

log = logging.getLogger(__name__)

BytesLike = Union[str, Path, bytes, bytearray, memoryview]


def load_bytes(inp: BytesLike) -> bytes:
    if isinstance(inp, (bytes, bytearray, memoryview)):
        return bytes(inp)
    return Path(str(inp)).read_bytes()


def iter_frames(data: BytesLike, *, max_frames: Optional[int] = None) -> Iterator[Frame]:
    """
    Stream type-length-value frames: u8 tag, u32 big-endian payload length,
    payload. Trailing bytes shorter than a header, or a payload running past
    the end of the data, raise FrameError.
    """
    raw = load_bytes(data)
    emitted = 0
    with SpanCursor(raw) as cur:
        while not cur.is_empty:
            if max_frames is not None and emitted >= max_frames:
                return
            start = cur.position
            try:
                tag = codecs.uint(cur, 1)
                length = codecs.uint(cur, 4)
                payload = codecs.take(cur, length)
            except UnderrunError as e:
                raise FrameError(f"truncated frame: {e.message}", start) from e
            log.debug("frame tag=%d len=%d at %d", tag, length, start)
            emitted += 1
            yield Frame(tag=tag, offset=start, payload=payload)


def read_frames(data: BytesLike) -> List[Frame]:
    return list(iter_frames(data))


def encode_frame(tag: int, payload: bytes) -> bytes:
    out = bytearray()
    out += tag.to_bytes(1, "big")
    out += len(payload).to_bytes(4, "big", signed=False)
    out += payload
    assert len(out) == HEADER_SIZE + len(payload)
    return bytes(out)
