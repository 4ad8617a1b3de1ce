#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
================================================================================
2D Vectors and Affine Transforms
================================================================================

Project:        Brownian Canvas
Module:         vector.py

Author:         Ryan Kamp
Affiliation:    University of Cincinnati Department of Computer Science
Email:          kamprj@mail.uc.edu
GitHub:         https://github.com/ryanjosephkamp

Created:        February 3, 2026
Last Updated:   February 3, 2026

License:        MIT License
================================================================================

Small value types used at the edges of the simulation (initial placement,
drawing, graphics primitives). The hot loops work on NumPy arrays directly;
`Point.as_array` / `Point.from_array` convert between the two.

A transform is a 2x2 linear map plus a translation:

    x' = a*x + b*y + dx
    y' = c*x + d*y + dy
"""

import math
from dataclasses import dataclass

import numpy as np


class SingularTransformError(ValueError):
    """Raised when inverting a transform whose 2x2 block has zero determinant."""


@dataclass(frozen=True)
class Point:
    """Two component vector, always copied."""
    x: float = 0.0
    y: float = 0.0

    @classmethod
    def zero(cls) -> "Point":
        return cls(0.0, 0.0)

    @classmethod
    def from_array(cls, values) -> "Point":
        return cls(float(values[0]), float(values[1]))

    def as_array(self) -> np.ndarray:
        return np.array([self.x, self.y], dtype=float)

    def __neg__(self) -> "Point":
        return Point(-self.x, -self.y)

    def __add__(self, other: "Point") -> "Point":
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Point") -> "Point":
        return Point(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> "Point":
        return Point(self.x * scalar, self.y * scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> "Point":
        return Point(self.x / scalar, self.y / scalar)

    def __iter__(self):
        yield self.x
        yield self.y

    def dot(self, other: "Point") -> float:
        return self.x * other.x + self.y * other.y

    def cross(self, other: "Point") -> float:
        """z-component of the 3D cross product."""
        return self.x * other.y - self.y * other.x

    def norm(self) -> float:
        return math.hypot(self.x, self.y)

    def norm_squared(self) -> float:
        return self.x * self.x + self.y * self.y

    def transform(self, t: "Transform2D") -> "Point":
        return Point(
            t.a * self.x + t.b * self.y + t.dx,
            t.c * self.x + t.d * self.y + t.dy,
        )


@dataclass(frozen=True)
class Transform2D:
    """Affine map of the plane (row-major 2x2 block plus translation)."""
    a: float = 1.0
    b: float = 0.0
    dx: float = 0.0
    c: float = 0.0
    d: float = 1.0
    dy: float = 0.0

    @classmethod
    def identity(cls) -> "Transform2D":
        return cls()

    @classmethod
    def rotate(cls, angle: float, about: Point = Point()) -> "Transform2D":
        """Counter-clockwise rotation by `angle` radians about a fixed point."""
        s, c = math.sin(angle), math.cos(angle)
        return cls(
            a=c, b=-s, dx=(1.0 - c) * about.x + s * about.y,
            c=s, d=c, dy=(1.0 - c) * about.y - s * about.x,
        )

    @classmethod
    def scale_xy(cls, sx: float, sy: float, about: Point = Point()) -> "Transform2D":
        """Anisotropic scale leaving `about` fixed."""
        return cls(
            a=sx, b=0.0, dx=(1.0 - sx) * about.x,
            c=0.0, d=sy, dy=(1.0 - sy) * about.y,
        )

    @classmethod
    def scale(cls, s: float, about: Point = Point()) -> "Transform2D":
        return cls.scale_xy(s, s, about)

    @classmethod
    def translate(cls, dx: float, dy: float) -> "Transform2D":
        return cls(dx=dx, dy=dy)

    @property
    def determinant(self) -> float:
        return self.a * self.d - self.b * self.c

    def inv(self) -> "Transform2D":
        det = self.determinant
        if det == 0.0:
            raise SingularTransformError(
                f"transform is singular (a*d - b*c == 0): {self}"
            )
        inv_det = 1.0 / det
        return Transform2D(
            a=self.d * inv_det, b=-self.b * inv_det,
            dx=(self.b * self.dy - self.d * self.dx) * inv_det,
            c=-self.c * inv_det, d=self.a * inv_det,
            dy=(self.c * self.dx - self.a * self.dy) * inv_det,
        )

    def combine_left(self, lhs: "Transform2D") -> "Transform2D":
        """Return `lhs` applied after `self`."""
        return lhs.combine_right(self)

    def combine_right(self, rhs: "Transform2D") -> "Transform2D":
        """Return `self` applied after `rhs`."""
        return Transform2D(
            a=self.a * rhs.a + self.b * rhs.c,
            b=self.a * rhs.b + self.b * rhs.d,
            dx=self.a * rhs.dx + self.b * rhs.dy + self.dx,
            c=self.c * rhs.a + self.d * rhs.c,
            d=self.c * rhs.b + self.d * rhs.d,
            dy=self.c * rhs.dx + self.d * rhs.dy + self.dy,
        )

    def __call__(self, point: Point) -> Point:
        return point.transform(self)

    def as_tuple(self):
        return (self.a, self.b, self.dx, self.c, self.d, self.dy)
