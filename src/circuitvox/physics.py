from __future__ import annotations

from dataclasses import dataclass, field

from . import config
from .blocks import BlockRegistry, Coord

X, Y, Z = 0, 1, 2

# (plane axes tested for overlap, axis corrected), in priority order.
_PLANE_PRIORITY = (
    ((X, Y), Z),
    ((X, Z), Y),
    ((Y, Z), X),
)


@dataclass
class AABB:
    lo: list[float] = field(default_factory=lambda: [0.0, 0.0, 0.0])
    hi: list[float] = field(default_factory=lambda: [1.0, 1.0, 1.0])

    @classmethod
    def unit(cls, cell: Coord) -> AABB:
        return cls([float(c) for c in cell], [float(c) + 1.0 for c in cell])

    def size(self, axis: int) -> float:
        return self.hi[axis] - self.lo[axis]

    def overlaps_axis(self, other: AABB, axis: int) -> bool:
        return self.hi[axis] > other.lo[axis] and self.lo[axis] < other.hi[axis]

    def overlaps_plane(self, other: AABB, axes: tuple[int, int]) -> bool:
        return all(self.overlaps_axis(other, axis) for axis in axes)

    def translate(self, delta) -> None:
        for axis in range(3):
            self.lo[axis] += delta[axis]
            self.hi[axis] += delta[axis]


def _clamp_axis(box: AABB, other: AABB, vel: list[float], axis: int, epsilon: float) -> bool:
    size = box.size(axis)
    if box.hi[axis] < other.lo[axis] and box.hi[axis] + vel[axis] > other.lo[axis]:
        box.hi[axis] = other.lo[axis] - epsilon
        box.lo[axis] = box.hi[axis] - size
        vel[axis] = 0.0
        return True
    if box.lo[axis] > other.hi[axis] and box.lo[axis] + vel[axis] < other.hi[axis]:
        box.lo[axis] = other.hi[axis] + epsilon
        box.hi[axis] = box.lo[axis] + size
        vel[axis] = 0.0
        return True
    return False


def resolve(
    box: AABB,
    other: AABB,
    vel: list[float],
    epsilon: float = config.COLLISION_EPSILON,
) -> int | None:
    """Stop `box` from crossing into `other` during the next step of `vel`.

    Only the first overlapping plane (XY, then XZ, then YZ) is considered and
    only its perpendicular axis is corrected, so a corner approach on two axes
    at once is handled one axis per call. `box` and `vel` are updated in place;
    returns the corrected axis or None.
    """
    for axes, axis in _PLANE_PRIORITY:
        if box.overlaps_plane(other, axes):
            return axis if _clamp_axis(box, other, vel, axis, epsilon) else None
    return None


def resolve_against_blocks(
    box: AABB,
    registry: BlockRegistry,
    vel: list[float],
    epsilon: float = config.COLLISION_EPSILON,
) -> int:
    hits = 0
    for block in registry.all():
        if resolve(box, AABB.unit(block.coord), vel, epsilon) is not None:
            hits += 1
    return hits
