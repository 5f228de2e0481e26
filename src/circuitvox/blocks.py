from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Iterator

Coord = tuple[int, int, int]


class BlockType(enum.Enum):
    WIRE = "wire"
    INVERTER = "inverter"
    AND_GATE = "and_gate"
    OR_GATE = "or_gate"
    XOR_GATE = "xor_gate"


class Direction(enum.Enum):
    POS_X = (1, 0, 0)
    NEG_X = (-1, 0, 0)
    POS_Y = (0, 1, 0)
    NEG_Y = (0, -1, 0)
    POS_Z = (0, 0, 1)
    NEG_Z = (0, 0, -1)

    @property
    def offset(self) -> Coord:
        return self.value

    @property
    def opposite(self) -> Direction:
        dx, dy, dz = self.value
        return Direction((-dx, -dy, -dz))


def neighbor(coord: Coord, direction: Direction) -> Coord:
    dx, dy, dz = direction.offset
    return (coord[0] + dx, coord[1] + dy, coord[2] + dz)


@dataclass(frozen=True)
class Block:
    coord: Coord
    type: BlockType
    direction: Direction = Direction.POS_Y


class BlockRegistry:
    """Sparse store of placed blocks, at most one per integer grid coordinate.

    Absence is an ordinary outcome here: lookups return None and mutations
    report success with a bool instead of raising. Iteration follows insertion
    order, which keeps mesh rebuilds deterministic.
    """

    def __init__(self) -> None:
        self._blocks: dict[Coord, Block] = {}

    def __len__(self) -> int:
        return len(self._blocks)

    def __contains__(self, coord: Coord) -> bool:
        return self.exists(coord)

    def __iter__(self) -> Iterator[Block]:
        return self.all()

    def exists(self, coord: Coord) -> bool:
        return tuple(coord) in self._blocks

    def find(self, coord: Coord) -> Block | None:
        return self._blocks.get(tuple(coord))

    def insert(
        self,
        coord: Coord,
        block_type: BlockType,
        direction: Direction = Direction.POS_Y,
    ) -> bool:
        key = (int(coord[0]), int(coord[1]), int(coord[2]))
        if key in self._blocks:
            return False
        self._blocks[key] = Block(key, block_type, direction)
        return True

    def remove(self, coord: Coord) -> bool:
        return self._blocks.pop(tuple(coord), None) is not None

    def all(self) -> Iterator[Block]:
        return iter(list(self._blocks.values()))
