"""Per-block-type mesh primitives, pre-rotated for all six facings.

Every model is authored facing +X inside the unit cell [0, 1]^3. Loading it
produces one read-only variant per `Direction`, generated once by rotating the
cell-centred base mesh; meshing then only copies variants with an offset.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from pathlib import Path

import numpy as np

from . import config
from .assets import AssetLoadError, MeshAssetLoader, load_triangles
from .blocks import Direction
from .linalg import Mat3

logger = logging.getLogger(__name__)

VERTEX_DTYPE = np.dtype(
    [
        ("pos", np.float32, 3),
        ("color", np.float32, 3),
        ("uv", np.float32, 2),
    ]
)

CELL_CENTER = np.array([0.5, 0.5, 0.5], dtype=np.float64)

# Rotation applied to the +X base mesh to face each direction.
ORIENTATION_ROTATIONS: dict[Direction, Mat3] = {
    Direction.POS_X: Mat3.identity(),
    Direction.NEG_X: Mat3.rotate_y(math.pi),
    Direction.POS_Z: Mat3.rotate_y(math.pi * 1.5),
    Direction.NEG_Z: Mat3.rotate_y(math.pi / 2),
    Direction.POS_Y: Mat3.rotate_z(math.pi / 2),
    Direction.NEG_Y: Mat3.rotate_z(math.pi * 1.5),
}


@dataclass(frozen=True, eq=False)
class PrimitiveVariant:
    vertices: np.ndarray
    indices: np.ndarray

    def __post_init__(self) -> None:
        self.vertices.flags.writeable = False
        self.indices.flags.writeable = False

    @property
    def vertex_count(self) -> int:
        return len(self.vertices)


def index_triangles(triangles: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    """Collapse a triangle soup into unique positions plus a uint32 index list."""
    corners = np.asarray(triangles, dtype=np.float64).reshape(-1, 3)
    positions, inverse = np.unique(corners, axis=0, return_inverse=True)
    return positions, inverse.reshape(-1).astype(np.uint32)


def tint_colors(
    count: int, tint: tuple[float, float, float], spread: float, rng: np.random.Generator
) -> np.ndarray:
    base = np.asarray(tint, dtype=np.float64)
    return base + rng.uniform(-spread, spread, size=(count, 3))


def rotate_about_center(positions: np.ndarray, rotation: Mat3) -> np.ndarray:
    centred = positions - CELL_CENTER
    return centred @ rotation.as_array().T + CELL_CENTER


class PrimitiveLibrary:
    """Lookup table (primitive name, Direction) -> PrimitiveVariant."""

    def __init__(
        self,
        loader: MeshAssetLoader = load_triangles,
        tint_spread: float = config.TINT_SPREAD,
        rng: np.random.Generator | None = None,
    ) -> None:
        self.loader = loader
        self.tint_spread = tint_spread
        self.rng = rng if rng is not None else np.random.default_rng()
        self._variants: dict[tuple[str, Direction], PrimitiveVariant] = {}

    def __contains__(self, name: str) -> bool:
        return (name, Direction.POS_X) in self._variants

    @property
    def names(self) -> list[str]:
        return sorted({name for name, _ in self._variants})

    def variant(self, name: str, direction: Direction) -> PrimitiveVariant:
        return self._variants[(name, direction)]

    def _build(
        self, name: str, path: str | Path, tint: tuple[float, float, float]
    ) -> dict[tuple[str, Direction], PrimitiveVariant]:
        triangles = np.asarray(self.loader(path))
        if triangles.ndim != 3 or triangles.shape[1:] != (3, 3) or len(triangles) == 0:
            raise AssetLoadError(
                f"loader returned {triangles.shape} for {path}, expected (n, 3, 3) triangles"
            )
        positions, indices = index_triangles(triangles)
        colors = tint_colors(len(positions), tint, self.tint_spread, self.rng)

        built = {}
        for direction, rotation in ORIENTATION_ROTATIONS.items():
            vertices = np.zeros(len(positions), dtype=VERTEX_DTYPE)
            vertices["pos"] = rotate_about_center(positions, rotation)
            vertices["color"] = colors
            built[(name, direction)] = PrimitiveVariant(vertices, indices.copy())
        logger.info(
            "loaded primitive %r from %s: %d vertices, %d triangles",
            name,
            Path(path).name,
            len(positions),
            len(indices) // 3,
        )
        return built

    def load(self, name: str, path: str | Path, tint: tuple[float, float, float]) -> None:
        # Loader errors propagate before anything is stored.
        self._variants.update(self._build(name, path, tint))

    def load_all(self, assets=None, asset_dir: str | Path = config.ASSET_DIR) -> None:
        assets = assets if assets is not None else config.PRIMITIVE_ASSETS
        staged = {}
        for name, (filename, tint) in assets.items():
            staged.update(self._build(name, Path(asset_dir) / filename, tint))
        self._variants.update(staged)
