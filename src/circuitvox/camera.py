from __future__ import annotations

import math
from dataclasses import dataclass, field

from . import config
from .linalg import Mat4, Vec3


@dataclass
class CameraState:
    position: Vec3 = field(default_factory=Vec3)
    yaw: float = 0.0
    pitch: float = 0.0

    def look(self, dx: float, dy: float, sensitivity: float = config.MOUSE_SENSITIVITY) -> None:
        # Mouse right turns right (yaw decreases), mouse up looks up.
        self.yaw -= dx * sensitivity
        self.pitch -= dy * sensitivity
        self.pitch = max(-config.PITCH_LIMIT, min(config.PITCH_LIMIT, self.pitch))

    def direction(self) -> Vec3:
        return Vec3(
            math.cos(self.pitch) * math.sin(self.yaw),
            math.sin(self.pitch),
            math.cos(self.pitch) * math.cos(self.yaw),
        )

    def forward(self) -> Vec3:
        """Horizontal heading, ignoring pitch."""
        return Vec3(math.sin(self.yaw), 0.0, math.cos(self.yaw))

    def right(self) -> Vec3:
        return Vec3(
            math.sin(self.yaw - math.pi / 2),
            0.0,
            math.cos(self.yaw - math.pi / 2),
        )

    def up(self) -> Vec3:
        return self.right().cross(self.direction())

    def view_matrix(self) -> Mat4:
        return Mat4.look_at(self.position, self.position + self.direction(), self.up())

    def projection_matrix(self, aspect: float) -> Mat4:
        return Mat4.perspective(math.radians(config.FOV), aspect, config.NEAR, config.FAR)
