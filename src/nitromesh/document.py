"""Mesh documents: JSON/YAML text form of a decoded mesh.

Byte fields (descriptor, stray bytes) are stored as hex so the document maps
back to a mesh that encodes to the same bytes. UV v values are stored in the
in-memory (already flipped) convention.
"""

from __future__ import annotations
from pathlib import Path
from typing import Any, Dict, List, Sequence
import json

import yaml

from .model import Mesh, MeshHeader, Triangle

__all__ = ["mesh_to_dict", "mesh_from_dict", "save_document", "load_document"]

_YAML_SUFFIXES = {".yaml", ".yml"}


def _header_to_dict(header: MeshHeader) -> Dict[str, Any]:
    return {
        "identifier": header.identifier,
        "descriptor": header.descriptor_text,
        "descriptor_hex": bytes(header.descriptor).hex(),
        "submesh_count": header.submesh_count,
        "submesh_start_indices": list(header.submesh_start_indices),
        "triangle_index_count": header.triangle_index_count,
        "vertex_count": header.vertex_count,
    }


def mesh_to_dict(mesh: Mesh) -> Dict[str, Any]:
    return {
        "header": (
            _header_to_dict(mesh.header) if mesh.header is not None else None
        ),
        "triangles": [[t.a, t.b, t.c] for t in mesh.triangles],
        "vertices": [list(v) for v in mesh.vertices],
        "normals": [list(n) for n in mesh.normals],
        "color_masks": [list(bytes(c)) for c in mesh.color_masks],
        "uvs": [list(uv) for uv in mesh.uvs],
        "tangents": [list(t) for t in mesh.tangents],
        "bitangents": [list(b) for b in mesh.bitangents],
        "stray_bytes": bytes(mesh.stray_bytes).hex(),
    }


def _vectors(data: Dict[str, Any], key: str, width: int) -> List[tuple]:
    out = []
    for i, item in enumerate(data.get(key) or []):
        if not isinstance(item, Sequence) or len(item) != width:
            raise ValueError(f"{key}[{i}] must be a list of {width} numbers")
        out.append(tuple(float(x) for x in item))
    return out


def _header_from_dict(raw: Dict[str, Any]) -> MeshHeader:
    header = MeshHeader()
    if "descriptor_hex" in raw:
        header.descriptor = bytes.fromhex(raw["descriptor_hex"])
    elif "descriptor" in raw:
        header.descriptor = str(raw["descriptor"]).encode("utf-8")
    header.identifier = int(raw.get("identifier", header.identifier))
    starts = raw.get("submesh_start_indices", header.submesh_start_indices)
    header.submesh_start_indices = [int(s) for s in starts]
    header.submesh_count = int(
        raw.get("submesh_count", len(header.submesh_start_indices))
    )
    header.triangle_index_count = int(raw.get("triangle_index_count", 0))
    header.vertex_count = int(raw.get("vertex_count", 0))
    return header


def mesh_from_dict(data: Dict[str, Any]) -> Mesh:
    if not isinstance(data, dict):
        raise ValueError("Root of mesh document must be an object")
    raw_header = data.get("header")
    mesh = Mesh(
        header=(
            _header_from_dict(raw_header) if isinstance(raw_header, dict) else None
        )
    )
    for i, tri in enumerate(data.get("triangles") or []):
        if not isinstance(tri, Sequence) or len(tri) != 3:
            raise ValueError(f"triangles[{i}] must be a list of 3 indices")
        mesh.triangles.append(Triangle(*(int(x) for x in tri)))
    mesh.vertices = _vectors(data, "vertices", 3)
    mesh.normals = _vectors(data, "normals", 4)
    mesh.uvs = _vectors(data, "uvs", 2)
    mesh.tangents = _vectors(data, "tangents", 3)
    mesh.bitangents = _vectors(data, "bitangents", 3)
    for i, color in enumerate(data.get("color_masks") or []):
        try:
            mesh.color_masks.append(bytes(color))
        except (TypeError, ValueError) as e:
            raise ValueError(f"color_masks[{i}] must be 0-255 channels") from e
    mesh.stray_bytes = bytearray.fromhex(data.get("stray_bytes") or "")
    return mesh


def save_document(mesh: Mesh, path: str | Path) -> Path:
    p = Path(path)
    data = mesh_to_dict(mesh)
    if p.suffix.lower() in _YAML_SUFFIXES:
        text = yaml.safe_dump(data, sort_keys=False)
    else:
        text = json.dumps(data, indent=2)
    p.write_text(text, encoding="utf-8")
    return p


def load_document(path: str | Path) -> Mesh:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(p)
    text = p.read_text(encoding="utf-8")
    if p.suffix.lower() in _YAML_SUFFIXES:
        data: Any = yaml.safe_load(text)
    else:
        data = json.loads(text)
    return mesh_from_dict(data)
