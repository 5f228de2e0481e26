import math

from circuitvox.linalg.vec3 import Vec3


class Mat4:
    """4x4 matrix, row-major, acting on column vectors: p' = M @ (x, y, z, 1).

    OpenGL wants column-major storage; use `column_major()` when loading a
    matrix into the fixed-function stack.
    """

    def __init__(self, m=None):
        if m is None:
            m = [1.0 if r == c else 0.0 for r in range(4) for c in range(4)]
        if len(m) != 16:
            raise ValueError("Mat4 expects 16 elements")
        self.m = [float(x) for x in m]

    @classmethod
    def identity(cls):
        return cls()

    @classmethod
    def perspective(cls, fov_y, aspect, near, far):
        """Right-handed perspective, fov_y in radians, OpenGL clip space (z in [-w, w])."""
        if aspect == 0:
            raise ValueError("aspect must be non-zero")
        n, fa = float(near), float(far)
        if n <= 0 or fa <= 0 or n == fa:
            raise ValueError("invalid near/far")
        f = 1.0 / math.tan(fov_y * 0.5)
        return cls((f / float(aspect), 0.0, 0.0, 0.0,
                    0.0, f, 0.0, 0.0,
                    0.0, 0.0, (fa + n) / (n - fa), (2.0 * fa * n) / (n - fa),
                    0.0, 0.0, -1.0, 0.0))  # fmt: skip

    @classmethod
    def look_at(cls, eye, target, up):
        """Right-handed view matrix looking from `eye` toward `target`."""
        f = (target - eye).norm()
        s = f.cross(up).norm()
        u = s.cross(f)
        return cls((s.x, s.y, s.z, -s.dot(eye),
                    u.x, u.y, u.z, -u.dot(eye),
                    -f.x, -f.y, -f.z, f.dot(eye),
                    0.0, 0.0, 0.0, 1.0))  # fmt: skip

    def row(self, r):
        return self.m[r * 4 : r * 4 + 4]

    def __repr__(self):
        return f"Mat4({self.row(0)}, {self.row(1)}, {self.row(2)}, {self.row(3)})"

    def column_major(self):
        return self.m[0::4] + self.m[1::4] + self.m[2::4] + self.m[3::4]

    def transform_point(self, v):
        p = (float(v.x), float(v.y), float(v.z), 1.0)
        x, y, z, w = (sum(a * b for a, b in zip(self.row(r), p)) for r in range(4))
        if w != 0.0:
            x, y, z = x / w, y / w, z / w
        return Vec3(x, y, z)

    def __matmul__(self, other):
        if isinstance(other, Mat4):
            cols = [other.m[c::4] for c in range(4)]
            return Mat4([sum(a * b for a, b in zip(self.row(r), col)) for r in range(4) for col in cols])
        if isinstance(other, Vec3):
            return self.transform_point(other)
        raise TypeError(f"unsupported operand type(s) for @: 'Mat4' and '{type(other)}'")
