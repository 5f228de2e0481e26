from __future__ import annotations

from dataclasses import dataclass, field

from . import config
from .blocks import BlockRegistry, Coord
from .camera import CameraState
from .controls import FrameInput
from .linalg import Vec3
from .physics import AABB, resolve_against_blocks


def _body_box(origin=(0.0, 0.0, 0.0)) -> AABB:
    return AABB(
        [origin[i] + config.BODY_MIN[i] for i in range(3)],
        [origin[i] + config.BODY_MAX[i] for i in range(3)],
    )


@dataclass
class Player:
    """Free-flying body: a box that is pushed by input and stopped by blocks."""

    body: AABB = field(default_factory=_body_box)
    vel: list[float] = field(default_factory=lambda: [0.0, 0.0, 0.0])

    @classmethod
    def at(cls, position) -> Player:
        return cls(body=_body_box(position))

    def eye(self) -> Vec3:
        return Vec3.from_seq(self.body.lo) + Vec3.from_seq(config.EYE_OFFSET)

    def drop_cell(self) -> Coord:
        """Grid cell one below the body's min corner."""
        x, y, z = Vec3.from_seq(self.body.lo).cell()
        return (x, y - 1, z)

    def step(self, frame: FrameInput, camera: CameraState, registry: BlockRegistry) -> None:
        speed = config.FAST_SPEED if frame.fast else config.WALK_SPEED

        self.vel[0] *= config.HORIZONTAL_DAMPING
        self.vel[2] *= config.HORIZONTAL_DAMPING
        forward = camera.forward()
        right = camera.right()
        self.vel[0] += (forward.x * frame.forward + right.x * frame.strafe) * speed
        self.vel[2] += (forward.z * frame.forward + right.z * frame.strafe) * speed
        self.vel[1] = frame.vertical * speed

        resolve_against_blocks(self.body, registry, self.vel)
        self.body.translate(self.vel)
        camera.position = self.eye()
