"""Wire-format constants for the mesh format.

All values are little-endian. Struct formats are kept here so the header and
mesh codecs agree on field widths.
"""

from __future__ import annotations

DEFAULT_IDENTIFIER = 0x06
DESCRIPTOR_SIZE = 13
DEFAULT_DESCRIPTOR = b"p3n4ccu2t3b3\x00"

U32 = "<I"
TRIANGLE = "<3H"

POSITION = "<3f"
NORMAL = "<4f"
COLOR_MASK_SIZE = 4
UV = "<2f"
TANGENT = "<3f"
BITANGENT = "<3f"

# position(12) + normal(16) + color(4) + uv(8) + tangent(12) + bitangent(12)
VERTEX_RECORD = "<3f4f4s2f3f3f"
VERTEX_RECORD_SIZE = 64

__all__ = [
    "DEFAULT_IDENTIFIER",
    "DESCRIPTOR_SIZE",
    "DEFAULT_DESCRIPTOR",
    "U32",
    "TRIANGLE",
    "POSITION",
    "NORMAL",
    "COLOR_MASK_SIZE",
    "UV",
    "TANGENT",
    "BITANGENT",
    "VERTEX_RECORD",
    "VERTEX_RECORD_SIZE",
]
