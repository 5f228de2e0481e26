"""Shared test fixtures."""

from pathlib import Path

import numpy as np
import pytest

from circuitvox import BlockRegistry, MeshBuilder, Picker, PrimitiveLibrary, World
from circuitvox.assets import AssetLoadError

# One triangle whose tip reaches the +X face of the unit cell.
FRONT_TRIANGLE = np.array(
    [
        [[0.5, 0.5, 0.5], [1.0, 0.4, 0.5], [1.0, 0.6, 0.5]],
    ],
    dtype=np.float64,
)


class FakeLoader:
    """Stands in for the trimesh loader; records paths and can fail on chosen files."""

    def __init__(self, triangles=FRONT_TRIANGLE, fail_on=()):
        self.triangles = triangles
        self.fail_on = set(fail_on)
        self.calls = []

    def __call__(self, path):
        path = Path(path)
        self.calls.append(path.name)
        if path.name in self.fail_on:
            raise AssetLoadError(f"mesh asset not found: {path}")
        return self.triangles.copy()


@pytest.fixture
def rng():
    """Seeded generator so tints and seeding are reproducible."""
    return np.random.default_rng(1234)


@pytest.fixture
def registry():
    return BlockRegistry()


@pytest.fixture
def world():
    return World()


@pytest.fixture
def fake_loader():
    return FakeLoader()


@pytest.fixture
def library(fake_loader, rng):
    """Library with every configured primitive built from the fake triangle."""
    lib = PrimitiveLibrary(loader=fake_loader, rng=rng)
    lib.load_all(asset_dir="models")
    return lib


@pytest.fixture
def builder(library):
    return MeshBuilder(library)


@pytest.fixture
def picker():
    return Picker()


@pytest.fixture
def make_loader():
    """Factory for loaders with custom triangles or failing files."""
    return FakeLoader
