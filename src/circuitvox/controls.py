"""Per-frame input snapshot.

Input is sampled once per frame into an immutable `FrameInput`, which is then
passed explicitly to the picker and the player step. Mouse buttons and toggle
keys go through `EdgeLatch` so holding a trigger fires it only once.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import pygame

from .blocks import BlockType

SELECT_KEYS = {
    pygame.K_1: BlockType.WIRE,
    pygame.K_2: BlockType.INVERTER,
    pygame.K_3: BlockType.AND_GATE,
    pygame.K_4: BlockType.OR_GATE,
    pygame.K_5: BlockType.XOR_GATE,
}


@dataclass(frozen=True)
class FrameInput:
    forward: float = 0.0
    strafe: float = 0.0
    vertical: float = 0.0
    fast: bool = False
    mouse_dx: float = 0.0
    mouse_dy: float = 0.0
    place: bool = False
    remove: bool = False
    drop_block: bool = False
    toggle_boxes: bool = False
    selected: BlockType = BlockType.WIRE
    quit: bool = False


class EdgeLatch:
    """Reports True only on the frame a held signal goes from released to pressed."""

    def __init__(self) -> None:
        self.armed = True

    def __call__(self, held: bool) -> bool:
        if not held:
            self.armed = True
            return False
        fired = self.armed
        self.armed = False
        return fired


@dataclass
class InputSampler:
    selected: BlockType = BlockType.WIRE
    place_latch: EdgeLatch = field(default_factory=EdgeLatch)
    remove_latch: EdgeLatch = field(default_factory=EdgeLatch)
    boxes_latch: EdgeLatch = field(default_factory=EdgeLatch)

    def sample(self, events) -> FrameInput:
        quit_requested = False
        for event in events:
            if event.type == pygame.QUIT:
                quit_requested = True
            elif event.type == pygame.KEYDOWN:
                if event.key in (pygame.K_ESCAPE, pygame.K_q):
                    quit_requested = True
                elif event.key in SELECT_KEYS:
                    self.selected = SELECT_KEYS[event.key]

        keys = pygame.key.get_pressed()
        left, _, right = pygame.mouse.get_pressed()[:3]
        mx, my = pygame.mouse.get_rel()

        forward = 0.0
        if keys[pygame.K_w] and not keys[pygame.K_s]:
            forward = 1.0
        elif keys[pygame.K_s]:
            forward = -1.0
        strafe = 0.0
        if keys[pygame.K_a] and not keys[pygame.K_d]:
            strafe = -1.0
        elif keys[pygame.K_d]:
            strafe = 1.0
        vertical = 0.0
        if keys[pygame.K_SPACE]:
            vertical = 1.0
        elif keys[pygame.K_LSHIFT]:
            vertical = -1.0

        return FrameInput(
            forward=forward,
            strafe=strafe,
            vertical=vertical,
            fast=bool(keys[pygame.K_LCTRL]),
            mouse_dx=float(mx),
            mouse_dy=float(my),
            place=self.place_latch(bool(right)),
            remove=self.remove_latch(bool(left)),
            drop_block=bool(keys[pygame.K_f]),
            toggle_boxes=self.boxes_latch(bool(keys[pygame.K_TAB])),
            selected=self.selected,
            quit=quit_requested,
        )
