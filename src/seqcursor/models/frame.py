from __future__ import annotations
from pydantic import BaseModel, Field, field_serializer

HEADER_SIZE = 5  # u8 tag + u32 length


class Frame(BaseModel):
    tag: int = Field(..., ge=0, le=0xFF)
    offset: int = Field(..., ge=0)   # of the frame header
    payload: bytes = b""

    @property
    def size(self) -> int:
        return HEADER_SIZE + len(self.payload)

    @field_serializer("payload", when_used="json")
    def _payload_hex(self, v: bytes) -> str:
        return v.hex()
