from __future__ import annotations

import math
from pathlib import Path

# --- Picking ---
RAY_STEPS = 150
RAY_STEP_FRACTION = 1.0 / 25.0

# --- Collision ---
COLLISION_EPSILON = 0.001

# --- Primitive geometry ---
TINT_SPREAD = 0.2
ASSET_DIR = Path(__file__).with_name("models")

# name -> (model file, tint rgb in [0, 1])
PRIMITIVE_ASSETS = {
    "and_gate": ("and_gate.obj", (0.5, 0.5, 0.9)),
    "xor_gate": ("xor_gate.obj", (0.5, 0.5, 0.9)),
    "or_gate": ("or_gate.obj", (0.5, 0.5, 0.9)),
    "wire": ("wire.obj", (0.9, 0.1, 0.1)),
    "wire_center": ("wire_center.obj", (0.7, 0.1, 0.1)),
    "inverter": ("inverter.obj", (0.1, 0.1, 0.9)),
}
WIRE_CENTER = "wire_center"

# Flat colours for the debug box overlay, keyed by block type value.
BOX_COLORS = {
    "wire": (0.6, 0.0, 0.0),
    "inverter": (0.0, 0.0, 0.8),
    "and_gate": (0.0, 0.0, 0.8),
    "or_gate": (0.0, 0.0, 0.8),
    "xor_gate": (0.0, 0.0, 0.8),
}
BOX_INSET = 0.01

# --- World seeding ---
SEED_BLOCKS = 1
SEED_EXTENT = 120

# --- Window / loop ---
WIDTH = 800
HEIGHT = 600
FPS_LIMIT = 60
FOV = 90
NEAR = 0.01
FAR = 1000.0
CLEAR_COLOR = (0.0, 0.0, 0.0)
MOUSE_SENSITIVITY = 0.003
PITCH_LIMIT = math.pi / 2

# --- Player body ---
BODY_MIN = (-0.15, -0.25, -0.15)
BODY_MAX = (0.15, 0.7, 0.15)
EYE_OFFSET = (0.15, 0.85, 0.15)
WALK_SPEED = 0.02
FAST_SPEED = 0.1
HORIZONTAL_DAMPING = 0.35
