"""nitromesh package

Codec for the fixed-layout binary mesh asset format: decode a file into a
:class:`~nitromesh.model.Mesh`, re-encode it byte for byte (trailing bytes the
format does not model included), and dump it for inspection.

File-level helpers live in :mod:`nitromesh.api`.
"""

from ._version import __version__  # noqa: F401
from .codec import (
    MeshError,
    TruncatedInputError,
    InconsistentMeshError,
    decode_mesh,
    encode_mesh,
    write_mesh_to,
    check_mesh,
)
from .describe import describe_mesh
from .model import Mesh, MeshHeader, Triangle

__all__ = [
    "__version__",
    "Mesh",
    "MeshHeader",
    "Triangle",
    "MeshError",
    "TruncatedInputError",
    "InconsistentMeshError",
    "decode_mesh",
    "encode_mesh",
    "write_mesh_to",
    "check_mesh",
    "describe_mesh",
]
