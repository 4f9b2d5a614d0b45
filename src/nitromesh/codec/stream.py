"""Sequential little-endian reader/writer used by the header and mesh codecs.

The reader never seeks: it tracks how many bytes it has consumed so errors can
report the offset of the field that could not be read.
"""

from __future__ import annotations

import io
import struct
from typing import Any, BinaryIO, Tuple, Union

from .errors import E_RANGE, inconsistent, truncated

__all__ = ["ByteSource", "BinaryReader", "BinaryWriter", "as_stream"]

ByteSource = Union[bytes, bytearray, memoryview, BinaryIO]

_CHUNK = 1 << 20


def as_stream(source: ByteSource) -> BinaryIO:
    if isinstance(source, (bytes, bytearray, memoryview)):
        return io.BytesIO(bytes(source))
    return source


class BinaryReader:
    def __init__(self, stream: BinaryIO):
        self.stream = stream
        self.offset = 0

    def read_exact(self, size: int, field: str) -> bytes:
        # Chunked so a corrupt count cannot force one huge allocation;
        # short reads from pipes are legal, keep going until EOF.
        buf = bytearray()
        while len(buf) < size:
            more = self.stream.read(min(size - len(buf), _CHUNK))
            if not more:
                raise truncated(field, self.offset, size, len(buf))
            buf += more
        self.offset += size
        return bytes(buf)

    def unpack(self, fmt: str, field: str) -> Tuple[Any, ...]:
        raw = self.read_exact(struct.calcsize(fmt), field)
        return struct.unpack(fmt, raw)

    def read_u32(self, field: str) -> int:
        return self.unpack("<I", field)[0]

    def read_remaining(self) -> bytes:
        rest = self.stream.read()
        self.offset += len(rest)
        return rest


class BinaryWriter:
    """Accumulates the encoded payload in memory."""

    def __init__(self) -> None:
        self.buffer = bytearray()

    @property
    def offset(self) -> int:
        return len(self.buffer)

    def pack(self, fmt: str, *values: Any, field: str) -> None:
        try:
            self.buffer += struct.pack(fmt, *values)
        except (struct.error, OverflowError) as e:
            raise inconsistent(
                f"Value does not fit {field}: {e}",
                {"field": field, "offset": self.offset, "values": list(values)},
                code=E_RANGE,
            ) from e

    def write(self, data: bytes) -> None:
        self.buffer += data

    def getvalue(self) -> bytes:
        return bytes(self.buffer)
