from __future__ import annotations

import logging
from dataclasses import dataclass, field

from .camera import CameraState
from .controls import FrameInput
from .mesh import MeshBuilder, RenderBackend, WorldMesh
from .picker import Picker, PickResult
from .player import Player
from .world import World

logger = logging.getLogger(__name__)


@dataclass
class Session:
    """One running sandbox: world, viewer and the per-frame update order.

    `tick` runs input -> pick/mutate -> rebuild (only if the world changed)
    -> collision and movement -> upload, all synchronously.
    """

    world: World
    builder: MeshBuilder
    backend: RenderBackend
    picker: Picker = field(default_factory=Picker)
    player: Player = field(default_factory=Player)
    camera: CameraState = field(default_factory=CameraState)
    last_target: PickResult | None = None

    def __post_init__(self) -> None:
        self.camera.position = self.player.eye()

    def tick(self, frame: FrameInput) -> WorldMesh | None:
        self.camera.look(frame.mouse_dx, frame.mouse_dy)

        if frame.place or frame.remove:
            target = self.picker.cast_target(
                self.world.registry, self.camera.position, self.camera.direction()
            )
            self.last_target = target
            if frame.remove:
                self.picker.delete_block(self.world, target)
            if frame.place:
                self.picker.place_block(self.world, target, frame.selected)

        if frame.drop_block:
            self.world.insert(self.player.drop_cell(), frame.selected)

        if frame.toggle_boxes:
            self.builder.show_boxes = not self.builder.show_boxes
            self.world.changed = True
            logger.debug("box overlay %s", "on" if self.builder.show_boxes else "off")

        mesh = self.builder.rebuild_if_changed(self.world)

        self.player.step(frame, self.camera, self.world.registry)

        if mesh is not None:
            self.backend.upload(mesh)
        return mesh
