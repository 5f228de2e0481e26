from __future__ import annotations

import argparse
import logging
from pathlib import Path

import numpy as np
import pygame

from . import config
from .assets import AssetLoadError
from .controls import InputSampler
from .gl_draw import clear, draw_crosshair, setup_gl
from .logging_config import setup_logging
from .mesh import MeshBuilder
from .primitives import PrimitiveLibrary
from .render_gl import GLMeshRenderer
from .session import Session
from .world import World

logger = logging.getLogger("circuitvox")


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="circuitvox", add_help=True)
    parser.add_argument("--assets", type=Path, default=config.ASSET_DIR, help="Directory holding the primitive .obj models.")
    parser.add_argument("--width", type=int, default=config.WIDTH)
    parser.add_argument("--height", type=int, default=config.HEIGHT)
    parser.add_argument("--seed", type=int, default=None, help="Seed for primitive tints and initial block placement.")
    parser.add_argument("--log-level", default="INFO", choices=("DEBUG", "INFO", "WARNING", "ERROR"))
    parser.add_argument("--log-file", default=None)
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    setup_logging(getattr(logging, args.log_level), args.log_file)
    rng = np.random.default_rng(args.seed)

    pygame.init()
    pygame.display.set_mode((args.width, args.height), pygame.OPENGL | pygame.DOUBLEBUF)
    pygame.display.set_caption("circuitvox")

    library = PrimitiveLibrary(rng=rng)
    try:
        library.load_all(asset_dir=args.assets)
    except AssetLoadError as e:
        logger.critical("cannot start without primitive geometry: %s", e)
        pygame.quit()
        return 1

    world = World()
    world.populate_random(rng=rng)
    backend = GLMeshRenderer()
    session = Session(world=world, builder=MeshBuilder(library), backend=backend)
    sampler = InputSampler()

    setup_gl(args.width, args.height)
    aspect = args.width / float(args.height)
    pygame.mouse.set_visible(False)
    pygame.event.set_grab(True)
    pygame.mouse.get_rel()

    clock = pygame.time.Clock()
    frame_budget_ms = 1000.0 / config.FPS_LIMIT
    while True:
        frame = sampler.sample(pygame.event.get())
        if frame.quit:
            break

        session.tick(frame)

        clear()
        backend.draw(session.camera.view_matrix(), session.camera.projection_matrix(aspect))
        draw_crosshair(args.width, args.height)
        pygame.display.flip()

        if clock.get_rawtime() > frame_budget_ms:
            logger.warning("frame drop: %d ms, %d blocks", clock.get_rawtime(), len(world))
        clock.tick(config.FPS_LIMIT)

    backend.release()
    pygame.quit()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
