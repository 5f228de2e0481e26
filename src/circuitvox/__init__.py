"""Voxel logic-circuit sandbox: block registry, primitive meshes, picking and collision."""

from .blocks import Block, BlockRegistry, BlockType, Direction
from .mesh import MeshBuilder, WorldMesh
from .physics import AABB, resolve, resolve_against_blocks
from .picker import Face, Picker, PickResult
from .assets import AssetLoadError
from .primitives import PrimitiveLibrary, PrimitiveVariant
from .world import World

__all__ = [
    "AABB",
    "AssetLoadError",
    "Block",
    "BlockRegistry",
    "BlockType",
    "Direction",
    "Face",
    "MeshBuilder",
    "Picker",
    "PickResult",
    "PrimitiveLibrary",
    "PrimitiveVariant",
    "World",
    "WorldMesh",
    "resolve",
    "resolve_against_blocks",
]
