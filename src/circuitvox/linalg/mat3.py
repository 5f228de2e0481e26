import math

import numpy as np

from circuitvox.linalg.vec3 import Vec3


class Mat3:
    """3x3 rotation matrix, row-major, acting on column vectors (v' = M @ v).

    `as_array()` hands the same matrix to numpy so a whole vertex buffer can be
    rotated at once with `positions @ M.as_array().T`.
    """

    def __init__(self, m=None):
        if m is None:
            m = (1.0, 0.0, 0.0,
                 0.0, 1.0, 0.0,
                 0.0, 0.0, 1.0)  # fmt: skip
        if len(m) != 9:
            raise ValueError("Mat3 expects 9 elements")
        self.m = [float(x) for x in m]

    @classmethod
    def identity(cls):
        return cls()

    @classmethod
    def rotate_y(cls, angle):
        """Rotate around +Y by `angle` radians (right-hand rule: +Z toward +X)."""
        c, s = math.cos(angle), math.sin(angle)
        return cls((c, 0.0, s,
                    0.0, 1.0, 0.0,
                    -s, 0.0, c))  # fmt: skip

    @classmethod
    def rotate_z(cls, angle):
        """Rotate around +Z by `angle` radians (right-hand rule: +X toward +Y)."""
        c, s = math.cos(angle), math.sin(angle)
        return cls((c, -s, 0.0,
                    s, c, 0.0,
                    0.0, 0.0, 1.0))  # fmt: skip

    def row(self, r):
        return self.m[r * 3 : r * 3 + 3]

    def __repr__(self):
        return f"Mat3({self.row(0)}, {self.row(1)}, {self.row(2)})"

    def as_array(self):
        return np.asarray(self.m, dtype=np.float64).reshape(3, 3)

    def transform(self, v):
        x, y, z = float(v.x), float(v.y), float(v.z)
        return Vec3(*(a * x + b * y + c * z for a, b, c in (self.row(r) for r in range(3))))

    def __matmul__(self, other):
        if isinstance(other, Mat3):
            cols = [other.m[c::3] for c in range(3)]
            return Mat3([sum(a * b for a, b in zip(self.row(r), col)) for r in range(3) for col in cols])
        if isinstance(other, Vec3):
            return self.transform(other)
        raise TypeError(f"unsupported operand type(s) for @: 'Mat3' and '{type(other)}'")
