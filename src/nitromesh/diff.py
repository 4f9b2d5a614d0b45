"""Structured diff between two meshes.

Both sides are first mapped through :func:`nitromesh.document.mesh_to_dict`
so every reported value is JSON-serializable. Per-stream element changes are
capped at ``max_elements``; the summary still counts every difference.
"""

from __future__ import annotations
from pathlib import Path
from typing import Any, Dict, List

from .api import read_mesh
from .document import mesh_to_dict
from .model import Mesh

__all__ = ["diff_meshes", "diff_mesh_files"]

_STREAMS = (
    "triangles",
    "vertices",
    "normals",
    "color_masks",
    "uvs",
    "tangents",
    "bitangents",
)


def _diff_header(
    a: Dict[str, Any] | None, b: Dict[str, Any] | None
) -> List[Dict[str, Any]]:
    if a is None or b is None:
        if a is b:
            return []
        return [
            {
                "section": "header",
                "field": "present",
                "left": a is not None,
                "right": b is not None,
            }
        ]
    changes = []
    for key in a:
        if key == "descriptor":  # compared through descriptor_hex
            continue
        if a[key] != b.get(key):
            changes.append(
                {"section": "header", "field": key, "left": a[key], "right": b.get(key)}
            )
    return changes


def _diff_stream(
    name: str, a: List[Any], b: List[Any], max_elements: int
) -> tuple[List[Dict[str, Any]], int]:
    changes: List[Dict[str, Any]] = []
    count = 0
    if len(a) != len(b):
        changes.append(
            {"section": name, "field": "length", "left": len(a), "right": len(b)}
        )
        count += 1
    differing = [i for i in range(min(len(a), len(b))) if a[i] != b[i]]
    count += len(differing)
    for i in differing[:max_elements]:
        changes.append({"section": name, "index": i, "left": a[i], "right": b[i]})
    if len(differing) > max_elements:
        changes.append(
            {"section": name, "omitted": len(differing) - max_elements}
        )
    return changes, count


def diff_meshes(
    left: Mesh, right: Mesh, *, max_elements: int = 32
) -> Dict[str, Any]:
    a = mesh_to_dict(left)
    b = mesh_to_dict(right)
    changes = _diff_header(a["header"], b["header"])
    count = len(changes)
    for name in _STREAMS:
        stream_changes, stream_count = _diff_stream(
            name, a[name], b[name], max_elements
        )
        changes.extend(stream_changes)
        count += stream_count
    if a["stray_bytes"] != b["stray_bytes"]:
        changes.append(
            {
                "section": "stray_bytes",
                "left": a["stray_bytes"],
                "right": b["stray_bytes"],
            }
        )
        count += 1
    return {"changes": changes, "summary": {"count": count}}


def diff_mesh_files(
    left: str | Path, right: str | Path, *, max_elements: int = 32
) -> Dict[str, Any]:
    result = diff_meshes(
        read_mesh(left), read_mesh(right), max_elements=max_elements
    )
    result["summary"]["left"] = str(left)
    result["summary"]["right"] = str(right)
    return result
