"""High-level file API for nitromesh.

Path based helpers wrap the byte-level codec with scoped file handling and
reporter tasks. Reads close the file on every exit path; writes go through a
temporary sibling file so a failed encode or write never replaces the
destination.
"""

from __future__ import annotations

import io
import os
import shutil
import tempfile
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

from .codec.constants import VERTEX_RECORD_SIZE
from .codec.errors import TruncatedInputError
from .codec.header import read_header
from .codec.mesh import decode_mesh, encode_mesh
from .codec.stream import BinaryReader
from .logging import get_logger
from .model import Mesh
from .reporting import task

__all__ = [
    "WriteOptions",
    "WriteResult",
    "read_mesh",
    "write_mesh",
    "inspect_mesh",
]


@dataclass(slots=True)
class WriteOptions:
    # Replace an existing destination file.
    overwrite: bool = True
    # Write to a temporary file and move it into place once complete.
    atomic: bool = True


@dataclass(slots=True)
class WriteResult:
    output_file: Path
    bytes_written: int


def read_mesh(path: str | Path) -> Mesh:
    """Read and decode the mesh file at ``path``.

    The returned mesh remembers ``path`` as its ``source_path`` so it can be
    written back in place with :func:`write_mesh`.
    """
    p = Path(path)
    with task("mesh.read", f"Read {p.name}") as stats:
        with p.open("rb") as f:
            mesh = decode_mesh(f)
        mesh.source_path = p
        stats.update(
            triangles=len(mesh.triangles),
            vertices=len(mesh.vertices),
            stray=len(mesh.stray_bytes),
        )
    return mesh


def _match_mode(target: Path, tmp: Path) -> None:
    # mkstemp creates 0600; give the replacement the mode a plain open() would.
    if target.exists():
        shutil.copymode(target, tmp)
        return
    umask = os.umask(0)
    os.umask(umask)
    os.chmod(tmp, 0o666 & ~umask)


def _atomic_write(target: Path, data: bytes) -> None:
    fd, tmp_name = tempfile.mkstemp(
        prefix=f".{target.name}.", suffix=".tmp", dir=target.parent
    )
    tmp = Path(tmp_name)
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        _match_mode(target, tmp)
        os.replace(tmp, target)
    except BaseException:
        tmp.unlink(missing_ok=True)
        raise


def write_mesh(
    mesh: Mesh,
    path: str | Path | None = None,
    options: Optional[WriteOptions] = None,
) -> WriteResult:
    """Encode ``mesh`` and write it to ``path``.

    ``path`` defaults to the file the mesh was read from.

    Raises:
        InconsistentMeshError: the mesh cannot be encoded; nothing is written.
        FileExistsError: the destination exists and overwrite is disabled.
    """
    options = options or WriteOptions()
    if path is not None:
        target = Path(path)
    elif mesh.source_path is not None:
        target = mesh.source_path
    else:
        raise ValueError("No output path given and mesh has no source path")
    if not options.overwrite and target.exists():
        raise FileExistsError(target)

    with task("mesh.write", f"Write {target.name}") as stats:
        data = encode_mesh(mesh)
        if options.atomic:
            _atomic_write(target, data)
        else:
            with target.open("wb") as f:
                f.write(data)
        stats.update(bytes=len(data))
    get_logger().debug("wrote %d bytes to %s", len(data), target)
    return WriteResult(output_file=target, bytes_written=len(data))


def _region(offset: int, size: int) -> Dict[str, int]:
    return {"offset": offset, "size": size}


def inspect_mesh(path: str | Path) -> Dict[str, Any]:
    """Describe the byte layout of a mesh file without decoding attributes.

    Returns a JSON-serializable dict with the header fields, the offset and
    size of each section and a list of structural ``issues`` (truncation,
    index counts that are not a multiple of 3).
    """
    data = Path(path).read_bytes()
    result: Dict[str, Any] = {"file_size": len(data), "issues": []}
    issues: List[str] = result["issues"]
    reader = BinaryReader(io.BytesIO(data))
    try:
        header = read_header(reader)
    except TruncatedInputError as e:
        result["header"] = None
        issues.append(f"Header truncated at {e.context['field']}")
        return result

    header_dict = asdict(header)
    header_dict["descriptor"] = header.descriptor_text
    result["header"] = header_dict

    offset = reader.offset
    tri_size = header.triangle_count * 6
    vert_size = header.vertex_count * VERTEX_RECORD_SIZE
    data_end = offset + tri_size + vert_size
    result["sections"] = {
        "header": _region(0, offset),
        "triangles": _region(offset, tri_size),
        "vertices": _region(offset + tri_size, vert_size),
        "stray_bytes": _region(data_end, max(0, len(data) - data_end)),
    }
    if header.triangle_index_count % 3:
        issues.append(
            f"Triangle index count {header.triangle_index_count} is not a multiple of 3"
        )
    if data_end > len(data):
        issues.append(
            f"Declared data ends at {data_end}, file has {len(data)} bytes"
        )
    return result
