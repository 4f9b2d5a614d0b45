"""Binary codec for the mesh asset format."""

from .errors import (
    MeshError,
    TruncatedInputError,
    InconsistentMeshError,
)
from .header import read_header, write_header, describe_header
from .mesh import decode_mesh, encode_mesh, write_mesh_to, check_mesh

__all__ = [
    "MeshError",
    "TruncatedInputError",
    "InconsistentMeshError",
    "read_header",
    "write_header",
    "describe_header",
    "decode_mesh",
    "encode_mesh",
    "write_mesh_to",
    "check_mesh",
]
