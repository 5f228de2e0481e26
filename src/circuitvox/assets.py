"""Mesh-asset loading: model file -> triangle positions.

The primitive library only needs triangle corners, so loaders return an
``(n, 3, 3)`` float array and nothing else (no normals, no texcoords).
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol

import numpy as np
import trimesh

logger = logging.getLogger(__name__)


class AssetLoadError(RuntimeError):
    """A model file could not be turned into triangles."""


class MeshAssetLoader(Protocol):
    def __call__(self, path: str | Path) -> np.ndarray: ...


def _load_mesh(path: Path) -> trimesh.Trimesh:
    loaded = trimesh.load(path, force="mesh")
    if isinstance(loaded, trimesh.Scene):
        meshes = [g for g in loaded.geometry.values() if isinstance(g, trimesh.Trimesh)]
        if not meshes:
            raise AssetLoadError(f"scene has no mesh geometry: {path}")
        return trimesh.util.concatenate(meshes)
    if not isinstance(loaded, trimesh.Trimesh):
        raise AssetLoadError(f"unsupported mesh type from {path}: {type(loaded).__name__}")
    return loaded


def load_triangles(path: str | Path) -> np.ndarray:
    path = Path(path)
    if not path.is_file():
        raise AssetLoadError(f"mesh asset not found: {path}")
    try:
        mesh = _load_mesh(path)
    except AssetLoadError:
        raise
    except Exception as e:
        raise AssetLoadError(f"failed to load mesh {path}: {e}") from e

    triangles = np.asarray(mesh.triangles, dtype=np.float64)
    if triangles.size == 0:
        raise AssetLoadError(f"mesh asset has no triangles: {path}")
    logger.debug("loaded %s: %d triangles", path.name, len(triangles))
    return triangles.reshape(-1, 3, 3)
