"""File-level API: scoped reads, atomic writes and layout inspection."""

import os
import stat
from pathlib import Path

import pytest

from nitromesh import InconsistentMeshError, Mesh, TruncatedInputError
from nitromesh.api import WriteOptions, inspect_mesh, read_mesh, write_mesh
from nitromesh.reporting import SilentReporter, set_reporter

from mesh_bytes import header_bytes, quad_file


@pytest.fixture(autouse=True)
def _quiet():
    set_reporter(SilentReporter())


def _write(tmp_path: Path, name: str, data: bytes) -> Path:
    p = tmp_path / name
    p.write_bytes(data)
    return p


def test_read_mesh_remembers_source(tmp_path: Path):
    p = _write(tmp_path, "quad.msh", quad_file(stray=b"tail"))
    mesh = read_mesh(p)
    assert mesh.source_path == p
    assert len(mesh.triangles) == 2
    assert mesh.stray_bytes == b"tail"


def test_write_back_in_place_is_byte_identical(tmp_path: Path):
    original = quad_file(stray=b"\x00\x01\x02")
    p = _write(tmp_path, "quad.msh", original)
    result = write_mesh(read_mesh(p))
    assert result.output_file == p
    assert result.bytes_written == len(original)
    assert p.read_bytes() == original


def test_write_shorter_mesh_truncates_destination(tmp_path: Path):
    p = _write(tmp_path, "quad.msh", quad_file(stray=b"x" * 100))
    mesh = read_mesh(p)
    mesh.stray_bytes.clear()
    write_mesh(mesh)
    assert p.read_bytes() == quad_file()


def test_write_requires_path_for_fresh_mesh():
    with pytest.raises(ValueError, match="No output path"):
        write_mesh(Mesh())


def test_failed_encode_leaves_destination_untouched(tmp_path: Path):
    original = quad_file()
    p = _write(tmp_path, "quad.msh", original)
    mesh = read_mesh(p)
    mesh.normals.pop()
    with pytest.raises(InconsistentMeshError):
        write_mesh(mesh)
    assert p.read_bytes() == original
    assert sorted(x.name for x in tmp_path.iterdir()) == ["quad.msh"]


def test_no_overwrite_option(tmp_path: Path):
    p = _write(tmp_path, "quad.msh", quad_file())
    with pytest.raises(FileExistsError):
        write_mesh(read_mesh(p), options=WriteOptions(overwrite=False))


def test_non_atomic_write(tmp_path: Path):
    src = _write(tmp_path, "quad.msh", quad_file())
    out = tmp_path / "copy.msh"
    write_mesh(read_mesh(src), out, WriteOptions(atomic=False))
    assert out.read_bytes() == quad_file()


def test_read_truncated_file_raises(tmp_path: Path):
    p = _write(tmp_path, "bad.msh", quad_file()[:-1])
    with pytest.raises(TruncatedInputError):
        read_mesh(p)


def test_read_missing_file_raises_oserror(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        read_mesh(tmp_path / "missing.msh")


def test_inspect_mesh_sections(tmp_path: Path):
    p = _write(tmp_path, "quad.msh", quad_file(stray=b"abcd"))
    info = inspect_mesh(p)
    assert info["issues"] == []
    assert info["header"]["vertex_count"] == 4
    assert info["header"]["descriptor"] == "p3n4ccu2t3b3\x00"
    sections = info["sections"]
    assert sections["header"] == {"offset": 0, "size": 33}
    assert sections["triangles"] == {"offset": 33, "size": 12}
    assert sections["vertices"] == {"offset": 45, "size": 256}
    assert sections["stray_bytes"] == {"offset": 301, "size": 4}
    assert info["file_size"] == 305


def test_inspect_mesh_reports_truncation(tmp_path: Path):
    p = _write(tmp_path, "short.msh", quad_file()[:100])
    info = inspect_mesh(p)
    assert any("Declared data ends" in issue for issue in info["issues"])


def test_inspect_mesh_truncated_header(tmp_path: Path):
    p = _write(tmp_path, "hdr.msh", header_bytes()[:10])
    info = inspect_mesh(p)
    assert info["header"] is None
    assert info["issues"] == ["Header truncated at descriptor"]


@pytest.mark.skipif(os.name != "posix", reason="POSIX permission bits")
def test_write_back_keeps_file_mode(tmp_path: Path):
    p = _write(tmp_path, "quad.msh", quad_file())
    p.chmod(0o644)
    write_mesh(read_mesh(p))
    assert stat.S_IMODE(p.stat().st_mode) == 0o644


@pytest.mark.skipif(os.name != "posix", reason="POSIX permission bits")
def test_atomic_write_new_file_follows_umask(tmp_path: Path):
    src = _write(tmp_path, "quad.msh", quad_file())
    out = tmp_path / "copy.msh"
    umask = os.umask(0o022)
    try:
        write_mesh(read_mesh(src), out)
    finally:
        os.umask(umask)
    assert stat.S_IMODE(out.stat().st_mode) == 0o644
