from pathlib import Path

from nitromesh import decode_mesh
from nitromesh.diff import diff_mesh_files, diff_meshes
from nitromesh.model import Triangle
from nitromesh.reporting import SilentReporter, set_reporter

from mesh_bytes import quad_file


def test_identical_meshes_have_no_changes():
    a = decode_mesh(quad_file())
    b = decode_mesh(quad_file())
    result = diff_meshes(a, b)
    assert result == {"changes": [], "summary": {"count": 0}}


def test_diff_reports_header_and_element_changes():
    a = decode_mesh(quad_file())
    b = decode_mesh(quad_file(stray=b"z"))
    b.header.identifier = 9
    b.triangles[1] = Triangle(3, 2, 1)
    b.uvs[0] = (0.0, 0.0)
    result = diff_meshes(a, b)
    changes = result["changes"]
    assert {"section": "header", "field": "identifier", "left": 6, "right": 9} in changes
    assert {
        "section": "triangles",
        "index": 1,
        "left": [2, 1, 3],
        "right": [3, 2, 1],
    } in changes
    assert any(c["section"] == "uvs" and c["index"] == 0 for c in changes)
    assert {"section": "stray_bytes", "left": "", "right": "7a"} in changes
    assert result["summary"]["count"] == 4


def test_diff_reports_length_change():
    a = decode_mesh(quad_file())
    b = decode_mesh(quad_file())
    b.vertices.append((0.0, 0.0, 0.0))
    changes = diff_meshes(a, b)["changes"]
    assert changes == [
        {"section": "vertices", "field": "length", "left": 4, "right": 5}
    ]


def test_diff_caps_element_changes():
    a = decode_mesh(quad_file())
    b = decode_mesh(quad_file())
    b.normals = [(1.0, 1.0, 1.0, 1.0)] * 4
    result = diff_meshes(a, b, max_elements=1)
    normals = [c for c in result["changes"] if c["section"] == "normals"]
    assert normals[-1] == {"section": "normals", "omitted": 3}
    assert result["summary"]["count"] == 4


def test_diff_mesh_files(tmp_path: Path):
    set_reporter(SilentReporter())
    left = tmp_path / "a.msh"
    right = tmp_path / "b.msh"
    left.write_bytes(quad_file())
    right.write_bytes(quad_file(stray=b"\x01"))
    result = diff_mesh_files(left, right)
    assert result["summary"]["count"] == 1
    assert result["summary"]["left"] == str(left)
