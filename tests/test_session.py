"""Tests for the player body and the per-frame session update."""

import pytest

from circuitvox import BlockType, Direction, config
from circuitvox.camera import CameraState
from circuitvox.controls import FrameInput
from circuitvox.player import Player
from circuitvox.session import Session


class RecordingBackend:
    def __init__(self):
        self.uploads = []

    def upload(self, mesh):
        self.uploads.append(mesh)

    def draw(self, view, projection):
        pass


@pytest.fixture
def backend():
    return RecordingBackend()


@pytest.fixture
def session(world, builder, backend):
    return Session(world=world, builder=builder, backend=backend)


class TestPlayer:
    def test_vertical_input_sets_velocity(self, registry):
        player = Player.at((0.5, 3.0, 0.5))
        camera = CameraState()

        player.step(FrameInput(vertical=1.0), camera, registry)

        assert player.body.lo[1] == pytest.approx(2.75 + config.WALK_SPEED)
        assert camera.position.to_tuple() == pytest.approx(player.eye().to_tuple())

    def test_horizontal_velocity_is_damped(self, registry):
        player = Player.at((0.0, 0.0, 0.0))
        camera = CameraState()
        frame = FrameInput(forward=1.0)

        player.step(frame, camera, registry)
        assert player.vel[2] == pytest.approx(config.WALK_SPEED)
        player.step(frame, camera, registry)
        assert player.vel[2] == pytest.approx(config.WALK_SPEED * (1 + config.HORIZONTAL_DAMPING))

    def test_fast_flag_uses_fast_speed(self, registry):
        player = Player.at((0.0, 0.0, 0.0))

        player.step(FrameInput(strafe=1.0, fast=True), CameraState(), registry)

        assert player.vel[0] == pytest.approx(-config.FAST_SPEED)

    def test_descending_onto_block_stops_above_it(self, registry):
        registry.insert((0, 0, 0), BlockType.WIRE)
        player = Player.at((0.5, 1.3, 0.5))

        player.step(FrameInput(vertical=-1.0, fast=True), CameraState(), registry)

        assert player.vel[1] == 0.0
        assert player.body.lo[1] == pytest.approx(1.001)

    def test_drop_cell_is_below_feet(self):
        player = Player.at((0.5, 1.3, 0.5))

        assert player.drop_cell() == (0, 0, 0)


class TestSession:
    def test_first_tick_uploads_then_idles(self, session, backend):
        assert session.tick(FrameInput()) is not None
        assert session.tick(FrameInput()) is None
        assert len(backend.uploads) == 1

    def test_camera_starts_at_player_eye(self, session):
        assert session.camera.position.to_tuple() == pytest.approx(session.player.eye().to_tuple())

    def test_remove_then_place_from_view(self, session, world, backend):
        world.insert((0, 0, 3), BlockType.WIRE)
        session.tick(FrameInput())

        session.tick(FrameInput(remove=True))
        assert not world.exists((0, 0, 3))
        assert session.last_target.block == (0, 0, 3)

        world.insert((0, 0, 3), BlockType.WIRE)
        session.tick(FrameInput(place=True, selected=BlockType.INVERTER))
        placed = world.find((0, 0, 2))
        assert placed.type is BlockType.INVERTER
        assert placed.direction is Direction.POS_Z
        assert len(backend.uploads) == 3

    def test_click_with_nothing_in_view(self, session, world):
        session.tick(FrameInput())

        assert session.tick(FrameInput(place=True)) is None
        assert session.last_target is None
        assert len(world) == 0

    def test_drop_block_goes_under_player(self, session, world):
        cell = session.player.drop_cell()

        session.tick(FrameInput(drop_block=True, selected=BlockType.OR_GATE))

        assert world.find(cell).type is BlockType.OR_GATE

    def test_toggle_boxes_forces_rebuild(self, session, world, backend):
        world.insert((4, 4, 4), BlockType.INVERTER)
        plain = session.tick(FrameInput())

        boxed = session.tick(FrameInput(toggle_boxes=True))

        assert session.builder.show_boxes
        assert boxed.vertex_count == plain.vertex_count + 24
