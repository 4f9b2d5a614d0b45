"""Dataclass models for a decoded mesh."""

from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple

from .codec.constants import DEFAULT_DESCRIPTOR, DEFAULT_IDENTIFIER

Vec2 = Tuple[float, float]
Vec3 = Tuple[float, float, float]
Vec4 = Tuple[float, float, float, float]

__all__ = ["MeshHeader", "Triangle", "Mesh", "Vec2", "Vec3", "Vec4"]


@dataclass(slots=True)
class MeshHeader:
    identifier: int = DEFAULT_IDENTIFIER
    # Fixed-width field; the trailing NUL is part of the value.
    descriptor: bytes = DEFAULT_DESCRIPTOR
    submesh_count: int = 1
    submesh_start_indices: List[int] = field(default_factory=lambda: [0])
    triangle_index_count: int = 0
    vertex_count: int = 0

    @property
    def descriptor_text(self) -> str:
        return self.descriptor.decode("utf-8", errors="replace")

    @property
    def triangle_count(self) -> int:
        return self.triangle_index_count // 3


@dataclass(frozen=True, slots=True)
class Triangle:
    a: int
    b: int
    c: int

    def __iter__(self):
        yield self.a
        yield self.b
        yield self.c


@dataclass(slots=True)
class Mesh:
    """Decoded mesh: header plus parallel per-vertex attribute streams.

    ``uvs`` hold v already flipped into the engine convention. ``tangents``
    carry three components; use :meth:`tangent4` when a 4-vector is needed.
    ``stray_bytes`` is whatever followed the declared data in the source and
    is written back verbatim.
    """

    header: Optional[MeshHeader] = None
    triangles: List[Triangle] = field(default_factory=list)
    vertices: List[Vec3] = field(default_factory=list)
    normals: List[Vec4] = field(default_factory=list)
    color_masks: List[bytes] = field(default_factory=list)
    uvs: List[Vec2] = field(default_factory=list)
    tangents: List[Vec3] = field(default_factory=list)
    bitangents: List[Vec3] = field(default_factory=list)
    stray_bytes: bytearray = field(default_factory=bytearray)
    source_path: Optional[Path] = field(default=None, compare=False, repr=False)

    def tangent4(self, index: int) -> Vec4:
        x, y, z = self.tangents[index]
        return (x, y, z, 1.0)
