"""Human-readable dumps of a decoded mesh.

Intended for inspection only; the output is not parsed back.
"""

from __future__ import annotations

from typing import Callable, List

from .codec.header import describe_header
from .model import Mesh

__all__ = [
    "describe_mesh",
    "describe_triangles",
    "describe_vertices",
    "describe_normals",
    "describe_color_masks",
    "describe_uvs",
    "describe_tangents",
    "describe_bitangents",
]


def _f(value: float) -> str:
    # f32 carries about 7 significant digits.
    return f"{value:.7g}"


def _block(title: str, lines: List[str]) -> str:
    return f"{title}:\n" + "".join(f"  {line}\n" for line in lines)


def describe_triangles(mesh: Mesh) -> str:
    return _block(
        "Triangles",
        [f"[A: {t.a}, B: {t.b}, C: {t.c}]" for t in mesh.triangles],
    )


def describe_vertices(mesh: Mesh) -> str:
    return _block(
        "Vertices",
        [f"[X: {_f(x)}, Y: {_f(y)}, Z: {_f(z)}]" for x, y, z in mesh.vertices],
    )


def describe_normals(mesh: Mesh) -> str:
    return _block(
        "Normals",
        [
            f"[X: {_f(x)}, Y: {_f(y)}, Z: {_f(z)}, W: {_f(w)}]"
            for x, y, z, w in mesh.normals
        ],
    )


def describe_color_masks(mesh: Mesh) -> str:
    lines = []
    for color in mesh.color_masks:
        r, g, b, a = bytes(color)
        lines.append(
            f"[#{r:02X}{g:02X}{b:02X}{a:02X}] /rgba({r:03d}, {g:03d}, {b:03d}, {a:03d})/"
        )
    return _block("Color masks", lines)


def describe_uvs(mesh: Mesh) -> str:
    return _block("UVs", [f"[U: {_f(u)}, V: {_f(v)}]" for u, v in mesh.uvs])


def describe_tangents(mesh: Mesh) -> str:
    return _block(
        "Tangents",
        [
            f"[X: {_f(x)}, Y: {_f(y)}, Z: {_f(z)}, (W 1.0; implicit)]"
            for x, y, z in mesh.tangents
        ],
    )


def describe_bitangents(mesh: Mesh) -> str:
    return _block(
        "Bitangents",
        [f"[X: {_f(x)}, Y: {_f(y)}, Z: {_f(z)}]" for x, y, z in mesh.bitangents],
    )


_SECTIONS: List[Callable[[Mesh], str]] = [
    describe_triangles,
    describe_vertices,
    describe_normals,
    describe_color_masks,
    describe_uvs,
    describe_tangents,
    describe_bitangents,
]


def describe_mesh(mesh: Mesh) -> str:
    if mesh.header is None:
        header = "  (none)\n"
    else:
        header = describe_header(mesh.header)
    return f"Header:\n{header}\n" + "".join(fn(mesh) for fn in _SECTIONS)
