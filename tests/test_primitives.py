"""Tests for primitive loading and the per-direction variant table."""

import math

import numpy as np
import pytest

from circuitvox import AssetLoadError, Direction, PrimitiveLibrary
from circuitvox import config
from circuitvox.assets import load_triangles
from circuitvox.linalg import Mat3, Vec3
from circuitvox.primitives import CELL_CENTER, VERTEX_DTYPE, index_triangles, rotate_about_center


def test_quarter_turn_four_times_is_identity():
    quarter = Mat3.rotate_y(math.pi / 2)
    v = Vec3(0.3, -1.2, 2.5)

    out = v
    for _ in range(4):
        out = quarter @ out

    assert out.to_tuple() == pytest.approx(v.to_tuple(), abs=1e-9)


def test_rotation_keeps_cell_center_fixed():
    rotated = rotate_about_center(CELL_CENTER.reshape(1, 3), Mat3.rotate_z(math.pi / 2))

    assert rotated[0] == pytest.approx(CELL_CENTER)


def test_index_triangles_merges_shared_corners():
    quad = np.array(
        [
            [[0, 0, 0], [1, 0, 0], [1, 1, 0]],
            [[0, 0, 0], [1, 1, 0], [0, 1, 0]],
        ],
        dtype=np.float64,
    )

    positions, indices = index_triangles(quad)

    assert positions.shape == (4, 3)
    assert indices.dtype == np.uint32
    assert len(indices) == 6
    assert np.allclose(positions[indices].reshape(2, 3, 3), quad)


def test_library_builds_all_six_facings(library):
    for name in config.PRIMITIVE_ASSETS:
        assert name in library
        for direction in Direction:
            assert library.variant(name, direction).vertex_count == 3


def test_variant_front_points_along_its_direction(library):
    for direction in Direction:
        pos = library.variant("inverter", direction).vertices["pos"].astype(np.float64)
        reach = (pos - CELL_CENTER) @ np.asarray(direction.offset, dtype=np.float64)
        assert reach.max() == pytest.approx(0.5, abs=1e-5)


def test_variants_have_tinted_colors_and_zero_uv(library):
    tint = np.asarray(config.PRIMITIVE_ASSETS["wire"][1])
    for direction in Direction:
        vertices = library.variant("wire", direction).vertices
        assert vertices.dtype == VERTEX_DTYPE
        assert np.all(np.abs(vertices["color"] - tint) <= config.TINT_SPREAD + 1e-6)
        assert np.all(vertices["uv"] == 0.0)


def test_facings_share_one_color_set(library):
    base = library.variant("and_gate", Direction.POS_X).vertices["color"]
    for direction in Direction:
        assert np.array_equal(library.variant("and_gate", direction).vertices["color"], base)


def test_variant_arrays_are_read_only(library):
    variant = library.variant("xor_gate", Direction.NEG_Z)

    with pytest.raises(ValueError):
        variant.vertices["pos"][0] = (9.0, 9.0, 9.0)
    with pytest.raises(ValueError):
        variant.indices[0] = 1


def test_failed_load_stores_nothing(make_loader, rng):
    lib = PrimitiveLibrary(loader=make_loader(fail_on={"inverter.obj"}), rng=rng)

    with pytest.raises(AssetLoadError):
        lib.load("inverter", "models/inverter.obj", (0.1, 0.1, 0.9))

    assert "inverter" not in lib
    assert lib.names == []


def test_load_all_is_all_or_nothing(make_loader, rng):
    loader = make_loader(fail_on={"xor_gate.obj"})
    lib = PrimitiveLibrary(loader=loader, rng=rng)

    with pytest.raises(AssetLoadError):
        lib.load_all(asset_dir="models")

    # and_gate was built before the failure but never committed.
    assert "and_gate.obj" in loader.calls
    assert lib.names == []


@pytest.mark.parametrize(
    "triangles",
    [
        np.zeros((4, 3)),
        np.zeros(7),
        np.zeros((2, 3, 2)),
        np.zeros((0, 3, 3)),
    ],
    ids=["flat-corners", "ragged", "2d-corners", "empty"],
)
def test_malformed_loader_output_is_an_asset_error(make_loader, rng, triangles):
    lib = PrimitiveLibrary(loader=make_loader(triangles=triangles), rng=rng)

    with pytest.raises(AssetLoadError):
        lib.load_all(asset_dir="models")

    assert lib.names == []


def test_load_all_uses_asset_dir(fake_loader, rng):
    lib = PrimitiveLibrary(loader=fake_loader, rng=rng)

    lib.load_all(asset_dir="somewhere")

    assert sorted(fake_loader.calls) == sorted(f for f, _ in config.PRIMITIVE_ASSETS.values())
    assert lib.names == sorted(config.PRIMITIVE_ASSETS)


def test_missing_variant_raises_key_error(make_loader, rng):
    lib = PrimitiveLibrary(loader=make_loader(), rng=rng)

    with pytest.raises(KeyError):
        lib.variant("wire", Direction.POS_X)


class TestTrimeshLoader:
    def test_reads_obj_triangles(self, tmp_path):
        path = tmp_path / "quad.obj"
        path.write_text(
            "v 0 0 0\nv 1 0 0\nv 1 1 0\nv 0 1 0\nf 1 2 3\nf 1 3 4\n",
            encoding="utf-8",
        )

        triangles = load_triangles(path)

        assert triangles.shape == (2, 3, 3)
        assert triangles.min() == pytest.approx(0.0)
        assert triangles.max() == pytest.approx(1.0)

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(AssetLoadError):
            load_triangles(tmp_path / "nope.obj")

    def test_file_without_faces_raises(self, tmp_path):
        path = tmp_path / "points.obj"
        path.write_text("v 0 0 0\nv 1 0 0\nv 1 1 0\n", encoding="utf-8")

        with pytest.raises(AssetLoadError):
            load_triangles(path)

    def test_bundled_models_load(self, rng):
        lib = PrimitiveLibrary(rng=rng)

        lib.load_all()

        assert lib.names == sorted(config.PRIMITIVE_ASSETS)
        for name in lib.names:
            pos = lib.variant(name, Direction.POS_X).vertices["pos"]
            assert pos.min() >= -1e-6
            assert pos.max() <= 1.0 + 1e-6
