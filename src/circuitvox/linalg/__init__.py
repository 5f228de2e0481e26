from .vec3 import Vec3
from .mat3 import Mat3
from .mat4 import Mat4

__all__ = ["Vec3", "Mat3", "Mat4"]
