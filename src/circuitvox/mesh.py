from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol

import numpy as np

from . import config
from .blocks import Block, BlockRegistry, BlockType, Direction, neighbor
from .linalg import Mat4
from .primitives import VERTEX_DTYPE, PrimitiveLibrary, PrimitiveVariant
from .world import World

logger = logging.getLogger(__name__)

# Unit-cube faces: neighbour direction -> quad corners, counter-clockwise seen from outside.
_BOX_FACES = {
    Direction.POS_Y: ((0, 1, 0), (0, 1, 1), (1, 1, 1), (1, 1, 0)),
    Direction.NEG_Y: ((0, 0, 0), (1, 0, 0), (1, 0, 1), (0, 0, 1)),
    Direction.POS_X: ((1, 0, 0), (1, 1, 0), (1, 1, 1), (1, 0, 1)),
    Direction.NEG_X: ((0, 0, 0), (0, 0, 1), (0, 1, 1), (0, 1, 0)),
    Direction.POS_Z: ((0, 0, 1), (1, 0, 1), (1, 1, 1), (0, 1, 1)),
    Direction.NEG_Z: ((0, 0, 0), (0, 1, 0), (1, 1, 0), (1, 0, 0)),
}
_QUAD_INDICES = np.array([0, 1, 2, 0, 2, 3], dtype=np.uint32)


@dataclass
class WorldMesh:
    vertices: np.ndarray
    indices: np.ndarray

    @classmethod
    def empty(cls) -> WorldMesh:
        return cls(np.zeros(0, dtype=VERTEX_DTYPE), np.zeros(0, dtype=np.uint32))

    @property
    def vertex_count(self) -> int:
        return len(self.vertices)

    @property
    def index_count(self) -> int:
        return len(self.indices)

    def __add__(self, other: WorldMesh) -> WorldMesh:
        return WorldMesh(
            np.concatenate([self.vertices, other.vertices]),
            np.concatenate([self.indices, other.indices + np.uint32(self.vertex_count)]),
        )


class RenderBackend(Protocol):
    """Consumer of rebuilt world meshes; owns every GPU resource."""

    def upload(self, mesh: WorldMesh) -> None: ...

    def draw(self, view: Mat4, projection: Mat4) -> None: ...


class _MeshAccumulator:
    def __init__(self) -> None:
        self.vertex_chunks: list[np.ndarray] = []
        self.index_chunks: list[np.ndarray] = []
        self.vertex_count = 0

    def append(self, vertices: np.ndarray, indices: np.ndarray, offset) -> None:
        placed = vertices.copy()
        placed["pos"] += np.asarray(offset, dtype=np.float32)
        self.vertex_chunks.append(placed)
        self.index_chunks.append(indices.astype(np.uint32) + np.uint32(self.vertex_count))
        self.vertex_count += len(vertices)

    def finish(self) -> WorldMesh:
        if not self.vertex_chunks:
            return WorldMesh.empty()
        return WorldMesh(np.concatenate(self.vertex_chunks), np.concatenate(self.index_chunks))


class MeshBuilder:
    """Turns the whole block registry into one world-space vertex/index buffer.

    Wires connect: each occupied axis neighbour gets a connector stub facing it,
    and a wire with no neighbours shows the isolated centre piece. Gates are a
    single primitive facing against their stored direction.
    Rebuilds are whole-world and synchronous; nothing is patched incrementally.
    """

    def __init__(self, library: PrimitiveLibrary, show_boxes: bool = False) -> None:
        self.library = library
        self.show_boxes = show_boxes

    def variants_for(self, block: Block, registry: BlockRegistry) -> list[PrimitiveVariant]:
        if block.type is BlockType.WIRE:
            chosen = [
                self.library.variant(BlockType.WIRE.value, direction)
                for direction in Direction
                if registry.exists(neighbor(block.coord, direction))
            ]
            if not chosen:
                chosen.append(self.library.variant(config.WIRE_CENTER, Direction.POS_X))
            return chosen
        return [self.library.variant(block.type.value, block.direction.opposite)]

    def build(self, registry: BlockRegistry) -> WorldMesh:
        acc = _MeshAccumulator()
        for block in registry.all():
            for variant in self.variants_for(block, registry):
                acc.append(variant.vertices, variant.indices, block.coord)
        mesh = acc.finish()
        if self.show_boxes:
            mesh = mesh + build_boxes(registry)
        logger.debug(
            "rebuilt world mesh: %d blocks, %d vertices, %d indices",
            len(registry),
            mesh.vertex_count,
            mesh.index_count,
        )
        return mesh

    def rebuild_if_changed(self, world: World) -> WorldMesh | None:
        if not world.consume_changed():
            return None
        return self.build(world.registry)


def build_boxes(registry: BlockRegistry, inset: float = config.BOX_INSET) -> WorldMesh:
    """Flat-coloured unit boxes with the faces shared by two occupied cells left out."""
    acc = _MeshAccumulator()
    face = np.zeros(4, dtype=VERTEX_DTYPE)
    for block in registry.all():
        face["color"] = config.BOX_COLORS[block.type.value]
        for direction, corners in _BOX_FACES.items():
            if registry.exists(neighbor(block.coord, direction)):
                continue
            # Pull the shell out slightly so it does not z-fight with the primitive.
            face["pos"] = (np.asarray(corners, dtype=np.float32) - 0.5) * (1.0 + 2.0 * inset) + 0.5
            acc.append(face, _QUAD_INDICES, block.coord)
    return acc.finish()
