from __future__ import annotations

import enum
from dataclasses import dataclass

from . import config
from .blocks import BlockRegistry, BlockType, Coord, Direction, neighbor
from .linalg import Vec3
from .world import World

_PARALLEL_EPS = 1e-12


class Face(enum.Enum):
    """Cell faces named by the plane they lie in; value = (axis, side, outward normal)."""

    TOP_XZ = (1, 1, Direction.POS_Y)
    BOTTOM_XZ = (1, 0, Direction.NEG_Y)
    BACK_ZY = (0, 1, Direction.POS_X)
    FRONT_ZY = (0, 0, Direction.NEG_X)
    BACK_XY = (2, 1, Direction.POS_Z)
    FRONT_XY = (2, 0, Direction.NEG_Z)

    @property
    def axis(self) -> int:
        return self.value[0]

    @property
    def side(self) -> int:
        return self.value[1]

    @property
    def normal(self) -> Direction:
        return self.value[2]


@dataclass(frozen=True)
class PickResult:
    block: Coord
    face: Face


class Picker:
    """Finds the block and face the viewer is aimed at.

    The ray is sampled at fixed increments rather than traversed cell by cell,
    so thin grazing hits between samples can be missed; the step budget bounds
    the work per call.
    """

    def __init__(
        self,
        steps: int = config.RAY_STEPS,
        step_fraction: float = config.RAY_STEP_FRACTION,
    ) -> None:
        self.steps = steps
        self.step_fraction = step_fraction

    def march(self, registry: BlockRegistry, origin, direction) -> Coord | None:
        origin = Vec3.from_seq(origin)
        direction = Vec3.from_seq(direction)
        for i in range(1, self.steps + 1):
            cell = (origin + direction * (self.step_fraction * i)).cell()
            if registry.exists(cell):
                return cell
        return None

    def face_intersection(self, cell: Coord, face: Face, origin: Vec3, direction: Vec3) -> Vec3 | None:
        axis = face.axis
        denom = direction[axis]
        if abs(denom) < _PARALLEL_EPS:
            return None
        plane = cell[axis] + face.side
        t = (plane - origin[axis]) / denom
        if t < 0.0:
            return None
        point = origin + direction * t
        for other in range(3):
            if other == axis:
                continue
            if not (cell[other] <= point[other] <= cell[other] + 1):
                return None
        return point

    def select_face(self, cell: Coord, origin, direction) -> Face | None:
        origin = Vec3.from_seq(origin)
        direction = Vec3.from_seq(direction)
        best = None
        best_distance = float("inf")
        for face in Face:
            point = self.face_intersection(cell, face, origin, direction)
            if point is None:
                continue
            distance = origin.distance(point)
            if distance < best_distance:
                best = face
                best_distance = distance
        return best

    def cast_target(self, registry: BlockRegistry, origin, direction) -> PickResult | None:
        direction = Vec3.from_seq(direction)
        if direction.mag() == 0.0:
            return None
        direction = direction.norm()
        cell = self.march(registry, origin, direction)
        if cell is None:
            return None
        face = self.select_face(cell, origin, direction)
        if face is None:
            return None
        return PickResult(cell, face)

    def place_block(self, world: World, result: PickResult | None, block_type: BlockType) -> bool:
        if result is None:
            return False
        target = neighbor(result.block, result.face.normal)
        # The new block faces back through the face it was placed on.
        return world.insert(target, block_type, result.face.normal.opposite)

    def delete_block(self, world: World, result: PickResult | None) -> bool:
        if result is None:
            return False
        return world.remove(result.block)
