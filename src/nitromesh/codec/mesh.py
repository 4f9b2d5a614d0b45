"""Mesh body codec: triangle index stream, vertex records and stray tail.

Each vertex record is written field by field in this order::

    position   3 x f32
    normal     4 x f32
    color      4 x u8   (raw, no scaling)
    uv         2 x f32  (v stored on disk as 1 - v)
    tangent    3 x f32  (w is implicitly 1.0 and not stored)
    bitangent  3 x f32

Whatever follows the last declared vertex record is kept as ``stray_bytes``.
"""

from __future__ import annotations

import struct
from typing import BinaryIO, List

from ..logging import get_logger
from ..model import Mesh, Triangle
from .constants import (
    BITANGENT,
    COLOR_MASK_SIZE,
    NORMAL,
    POSITION,
    TANGENT,
    TRIANGLE,
    UV,
    VERTEX_RECORD,
)
from .errors import E_INCONSISTENT, E_NO_HEADER, E_RANGE, inconsistent
from .header import header_issues, read_header, write_header
from .stream import BinaryReader, BinaryWriter, ByteSource, as_stream

__all__ = ["decode_mesh", "encode_mesh", "write_mesh_to", "check_mesh"]

VERTEX_STREAMS = (
    "vertices",
    "normals",
    "color_masks",
    "uvs",
    "tangents",
    "bitangents",
)

_VERTEX_RECORD = struct.Struct(VERTEX_RECORD)


def decode_mesh(source: ByteSource) -> Mesh:
    """Decode a complete mesh from ``source``.

    ``source`` is either a bytes-like object or a readable binary stream; a
    stream is consumed to its end but not closed.

    Raises:
        TruncatedInputError: the input ends before a declared field.
    """
    logger = get_logger()
    reader = BinaryReader(as_stream(source))
    header = read_header(reader)
    logger.debug(
        "header: submeshes=%d indices=%d vertices=%d",
        header.submesh_count,
        header.triangle_index_count,
        header.vertex_count,
    )
    if header.triangle_index_count % 3:
        logger.warning(
            "Triangle index count %d is not a multiple of 3; reading %d triangles",
            header.triangle_index_count,
            header.triangle_count,
        )

    mesh = Mesh(header=header)
    for i in range(header.triangle_count):
        a, b, c = reader.unpack(TRIANGLE, f"triangles[{i}]")
        mesh.triangles.append(Triangle(a, b, c))

    for i in range(header.vertex_count):
        raw = reader.read_exact(_VERTEX_RECORD.size, f"vertex record {i}")
        (
            px, py, pz,
            nx, ny, nz, nw,
            color,
            u, v,
            tx, ty, tz,
            bx, by, bz,
        ) = _VERTEX_RECORD.unpack(raw)
        mesh.vertices.append((px, py, pz))
        mesh.normals.append((nx, ny, nz, nw))
        mesh.color_masks.append(color)
        mesh.uvs.append((u, 1.0 - v))
        mesh.tangents.append((tx, ty, tz))
        mesh.bitangents.append((bx, by, bz))

    mesh.stray_bytes = bytearray(reader.read_remaining())
    if mesh.stray_bytes:
        logger.warning(
            "%d stray bytes after offset %d kept as opaque tail",
            len(mesh.stray_bytes),
            reader.offset - len(mesh.stray_bytes),
        )
    return mesh


def check_mesh(mesh: Mesh) -> List[str]:
    """Return the reasons ``mesh`` cannot be encoded (empty when it can)."""
    header = mesh.header
    if header is None:
        return ["Mesh has no header"]
    issues = header_issues(header)
    if len(mesh.triangles) < header.triangle_count:
        issues.append(
            f"triangles has {len(mesh.triangles)} entries, header declares {header.triangle_count}"
        )
    for name in VERTEX_STREAMS:
        have = len(getattr(mesh, name))
        if have < header.vertex_count:
            issues.append(
                f"{name} has {have} entries, header declares {header.vertex_count}"
            )
    return issues


def _pack_vertex(writer: BinaryWriter, mesh: Mesh, i: int) -> None:
    writer.pack(POSITION, *mesh.vertices[i], field=f"vertices[{i}]")
    writer.pack(NORMAL, *mesh.normals[i], field=f"normals[{i}]")
    try:
        color = bytes(mesh.color_masks[i])
    except (TypeError, ValueError) as e:
        raise inconsistent(
            f"color_masks[{i}] is not a sequence of 0-255 channels",
            {"field": f"color_masks[{i}]"},
            code=E_RANGE,
        ) from e
    if len(color) != COLOR_MASK_SIZE:
        raise inconsistent(
            f"color_masks[{i}] has {len(color)} channels, expected {COLOR_MASK_SIZE}",
            {"field": f"color_masks[{i}]"},
        )
    writer.write(color)
    uv = tuple(mesh.uvs[i])
    if len(uv) != 2:
        raise inconsistent(
            f"uvs[{i}] has {len(uv)} components, expected 2",
            {"field": f"uvs[{i}]", "values": list(uv)},
            code=E_RANGE,
        )
    writer.pack(UV, uv[0], 1.0 - uv[1], field=f"uvs[{i}]")
    writer.pack(TANGENT, *mesh.tangents[i], field=f"tangents[{i}]")
    writer.pack(BITANGENT, *mesh.bitangents[i], field=f"bitangents[{i}]")


def encode_mesh(mesh: Mesh) -> bytes:
    """Encode ``mesh`` to bytes.

    Only the first ``triangle_count`` triangles and ``vertex_count`` entries
    of each attribute stream are written; extras are ignored.

    Raises:
        InconsistentMeshError: the streams are shorter than the header counts,
            the submesh table disagrees with ``submesh_count``, or a value
            does not fit its wire width.
    """
    issues = check_mesh(mesh)
    if issues:
        raise inconsistent(
            "; ".join(issues),
            {"issues": issues},
            code=E_NO_HEADER if mesh.header is None else E_INCONSISTENT,
        )
    header = mesh.header
    assert header is not None

    writer = BinaryWriter()
    write_header(header, writer)
    for i, tri in enumerate(mesh.triangles[: header.triangle_count]):
        writer.pack(TRIANGLE, *tri, field=f"triangles[{i}]")
    for i in range(header.vertex_count):
        _pack_vertex(writer, mesh, i)
    writer.write(bytes(mesh.stray_bytes))
    return writer.getvalue()


def write_mesh_to(mesh: Mesh, sink: BinaryIO) -> int:
    """Encode ``mesh`` and write it to ``sink`` in a single call.

    Nothing reaches ``sink`` unless encoding succeeded.
    """
    data = encode_mesh(mesh)
    sink.write(data)
    return len(data)
