"""Mesh header codec.

Layout (little-endian)::

    u32       identifier
    u8[13]    descriptor (UTF-8 text, NUL terminated)
    u32       submesh_count
    u32[n]    submesh_start_indices (n = submesh_count)
    u32       triangle_index_count
    u32       vertex_count
"""

from __future__ import annotations

from typing import List

from ..model import MeshHeader
from .constants import DESCRIPTOR_SIZE, U32
from .errors import inconsistent
from .stream import BinaryReader, BinaryWriter

__all__ = ["read_header", "write_header", "header_issues", "describe_header"]


def read_header(reader: BinaryReader) -> MeshHeader:
    identifier = reader.read_u32("identifier")
    descriptor = reader.read_exact(DESCRIPTOR_SIZE, "descriptor")
    submesh_count = reader.read_u32("submesh_count")
    starts = list(
        reader.unpack(f"<{submesh_count}I", "submesh_start_indices")
    )
    triangle_index_count = reader.read_u32("triangle_index_count")
    vertex_count = reader.read_u32("vertex_count")
    return MeshHeader(
        identifier=identifier,
        descriptor=descriptor,
        submesh_count=submesh_count,
        submesh_start_indices=starts,
        triangle_index_count=triangle_index_count,
        vertex_count=vertex_count,
    )


def header_issues(header: MeshHeader) -> List[str]:
    issues: List[str] = []
    if not isinstance(header.descriptor, (bytes, bytearray, memoryview)):
        issues.append(
            f"Descriptor must be bytes, got {type(header.descriptor).__name__}"
        )
    elif len(header.descriptor) != DESCRIPTOR_SIZE:
        issues.append(
            f"Descriptor is {len(header.descriptor)} bytes, expected {DESCRIPTOR_SIZE}"
        )
    if len(header.submesh_start_indices) != header.submesh_count:
        issues.append(
            "Submesh table has "
            f"{len(header.submesh_start_indices)} entries, header declares {header.submesh_count}"
        )
    return issues


def write_header(header: MeshHeader, writer: BinaryWriter) -> None:
    issues = header_issues(header)
    if issues:
        raise inconsistent("; ".join(issues), {"section": "header"})
    writer.pack(U32, header.identifier, field="identifier")
    writer.write(bytes(header.descriptor))
    writer.pack(U32, header.submesh_count, field="submesh_count")
    for i, start in enumerate(header.submesh_start_indices):
        writer.pack(U32, start, field=f"submesh_start_indices[{i}]")
    writer.pack(U32, header.triangle_index_count, field="triangle_index_count")
    writer.pack(U32, header.vertex_count, field="vertex_count")


def describe_header(header: MeshHeader) -> str:
    lines = [
        f"  Identifier: 0x{header.identifier:08X}",
        f"  Descriptor: {header.descriptor_text}",
        f"  Submesh count: {header.submesh_count}",
        "  Submesh start indices:",
    ]
    for i, start in enumerate(header.submesh_start_indices):
        lines.append(f"    {i}: {start}")
    lines.append(f"  Triangle indices: {header.triangle_index_count}")
    lines.append(f"  Vertex count: {header.vertex_count}")
    return "\n".join(lines) + "\n"
