from __future__ import annotations

import logging

import numpy as np

from . import config
from .blocks import Block, BlockRegistry, BlockType, Coord, Direction

logger = logging.getLogger(__name__)


class World:
    """Block registry plus the "world changed" flag that gates mesh rebuilds.

    All mutation goes through here so the flag is raised exactly when the
    registry actually changed. It starts raised so the first frame builds a mesh.
    """

    def __init__(self, registry: BlockRegistry | None = None) -> None:
        self.registry = registry if registry is not None else BlockRegistry()
        self.changed = True

    def __len__(self) -> int:
        return len(self.registry)

    def exists(self, coord: Coord) -> bool:
        return self.registry.exists(coord)

    def find(self, coord: Coord) -> Block | None:
        return self.registry.find(coord)

    def insert(
        self,
        coord: Coord,
        block_type: BlockType,
        direction: Direction = Direction.POS_Y,
    ) -> bool:
        ok = self.registry.insert(coord, block_type, direction)
        if ok:
            self.changed = True
            logger.debug("placed %s at %s facing %s", block_type.value, coord, direction.name)
        return ok

    def remove(self, coord: Coord) -> bool:
        ok = self.registry.remove(coord)
        if ok:
            self.changed = True
            logger.debug("removed block at %s", coord)
        return ok

    def consume_changed(self) -> bool:
        changed = self.changed
        self.changed = False
        return changed

    def populate_random(
        self,
        count: int = config.SEED_BLOCKS,
        extent: int = config.SEED_EXTENT,
        block_type: BlockType = BlockType.INVERTER,
        rng: np.random.Generator | None = None,
    ) -> int:
        """Scatter `count` blocks inside [0, extent)^3; returns how many landed."""
        rng = rng if rng is not None else np.random.default_rng()
        placed = 0
        for x, y, z in rng.integers(0, extent, size=(count, 3)):
            if self.insert((int(x), int(y), int(z)), block_type):
                placed += 1
        logger.info("seeded world with %d %s block(s)", placed, block_type.value)
        return placed
