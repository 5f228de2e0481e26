import math


class Vec3:
    def __init__(self, x=0.0, y=0.0, z=0.0):
        self.x, self.y, self.z = x, y, z

    @classmethod
    def from_seq(cls, seq):
        """Build from any 3-sequence (tuple, list, numpy row, Vec3)."""
        if isinstance(seq, Vec3):
            return seq.clone()
        x, y, z = seq
        return cls(float(x), float(y), float(z))

    def mag(self):
        return math.sqrt(self.x**2 + self.y**2 + self.z**2)

    def norm(self):
        mag = self.mag()
        if mag > 0:
            return Vec3(
                self.x / mag,
                self.y / mag,
                self.z / mag,
            )
        return self

    def distance(self, other):
        return (self - other).mag()

    def __add__(self, other):
        return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other):
        return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, other):
        return Vec3(self.x * other, self.y * other, self.z * other)

    def __getitem__(self, axis):
        return (self.x, self.y, self.z)[axis]

    def dot(self, vec3):
        return self.x * vec3.x + self.y * vec3.y + self.z * vec3.z

    def cross(self, vec3):
        return Vec3(
            self.y * vec3.z - self.z * vec3.y,
            self.z * vec3.x - self.x * vec3.z,
            self.x * vec3.y - self.y * vec3.x,
        )

    def __repr__(self):
        return f"Vec3{self.to_tuple()!r}"

    def clone(self):
        return Vec3(
            self.x,
            self.y,
            self.z,
        )

    def cell(self):
        """Integer grid cell containing this point (floor on every axis)."""
        return (
            int(math.floor(self.x)),
            int(math.floor(self.y)),
            int(math.floor(self.z)),
        )

    def to_tuple(self):
        return (self.x, self.y, self.z)
