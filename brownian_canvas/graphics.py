#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
================================================================================
Graphics Primitives
================================================================================

Project:        Brownian Canvas
Module:         graphics.py

Author:         Ryan Kamp
Affiliation:    University of Cincinnati Department of Computer Science
Email:          kamprj@mail.uc.edu
GitHub:         https://github.com/ryanjosephkamp

Created:        February 3, 2026
Last Updated:   February 3, 2026

License:        MIT License
================================================================================

Backend-independent shapes handed to a renderer. A geometry is one of
Circle, Polygon, Line or Bezier; each carries only its own parameters.
Renderers and bounding-box code dispatch on the geometry type.

Bounding boxes are returned as (lower_left, width_height).
"""

from dataclasses import dataclass, field
from functools import singledispatch
from typing import Optional, Sequence, Tuple, Union

from .vector import Point, Transform2D

Color = Union[str, Tuple[float, float, float], Tuple[float, float, float, float]]

DEFAULT_SHAPE_COLOR: Color = (0.0, 0.0, 0.0, 1.0)

# Cubic-Bezier circle approximation constant
BEZIER_CIRCLE = 0.551915024494


@dataclass(frozen=True)
class Circle:
    center: Point
    radius: float


@dataclass(frozen=True)
class Polygon:
    points: Tuple[Point, ...]


@dataclass(frozen=True)
class Line:
    points: Tuple[Point, ...]


@dataclass(frozen=True)
class Bezier:
    """
    Chain of cubic segments: p0, (c1, c2, p1), (c1, c2, p2), ...

    Control points are stored flat, so len(points) == 3k + 1.
    """
    points: Tuple[Point, ...]

    def __post_init__(self):
        if len(self.points) < 4 or (len(self.points) - 1) % 3 != 0:
            raise ValueError(
                f"a cubic Bezier chain needs 3k + 1 points, got {len(self.points)}"
            )


Geometry = Union[Circle, Polygon, Line, Bezier]


def _point_set_box(points: Sequence[Point], t: Optional[Transform2D]) -> Tuple[Point, Point]:
    if len(points) == 0:
        raise ValueError("cannot take the bounding box of an empty point set")
    if t is not None:
        points = [p.transform(t) for p in points]
    xs = [p.x for p in points]
    ys = [p.y for p in points]
    xmin, ymin = min(xs), min(ys)
    return Point(xmin, ymin), Point(max(xs) - xmin, max(ys) - ymin)


@singledispatch
def bounding_box(geometry, transform: Optional[Transform2D] = None) -> Tuple[Point, Point]:
    raise TypeError(f"not a geometry: {type(geometry).__name__}")


@bounding_box.register
def _(geometry: Circle, transform: Optional[Transform2D] = None) -> Tuple[Point, Point]:
    r = geometry.radius
    if transform is None:
        return geometry.center - Point(r, r), Point(2.0 * r, 2.0 * r)
    # A transformed circle is an ellipse; these are its exact half extents.
    center = geometry.center.transform(transform)
    srx = r * Point(transform.a, transform.b).norm()
    sry = r * Point(transform.c, transform.d).norm()
    return center - Point(srx, sry), Point(2.0 * srx, 2.0 * sry)


@bounding_box.register
def _(geometry: Polygon, transform: Optional[Transform2D] = None) -> Tuple[Point, Point]:
    return _point_set_box(geometry.points, transform)


@bounding_box.register
def _(geometry: Line, transform: Optional[Transform2D] = None) -> Tuple[Point, Point]:
    return _point_set_box(geometry.points, transform)


@bounding_box.register
def _(geometry: Bezier, transform: Optional[Transform2D] = None) -> Tuple[Point, Point]:
    # Control-point hull: contains the curve, may be slightly larger.
    return _point_set_box(geometry.points, transform)


@dataclass(frozen=True)
class Graphic:
    """A geometry plus how to paint it."""
    geometry: Geometry
    color: Color = DEFAULT_SHAPE_COLOR
    line_width: float = 1.0
    fill: bool = True
    transform: Optional[Transform2D] = None

    def with_color(self, color: Color) -> "Graphic":
        return Graphic(self.geometry, color, self.line_width, self.fill, self.transform)

    def bounding_box(self) -> Tuple[Point, Point]:
        return bounding_box(self.geometry, self.transform)


@dataclass(frozen=True)
class GraphicCollection:
    elements: Tuple[Graphic, ...] = field(default_factory=tuple)
    transform: Optional[Transform2D] = None

    def bounding_box(self) -> Tuple[Point, Point]:
        corners = []
        for element in self.elements:
            t = element.transform
            if self.transform is not None:
                t = self.transform if t is None else t.combine_left(self.transform)
            ll, wh = bounding_box(element.geometry, t)
            corners.extend([ll, ll + wh])
        return _point_set_box(corners, None)


def circle(center: Point, radius: float, **style) -> Graphic:
    return Graphic(Circle(center, radius), **style)


def polygon(points: Sequence[Point], **style) -> Graphic:
    return Graphic(Polygon(tuple(points)), **style)


def rect(lower_left: Point, width_height: Point, **style) -> Graphic:
    w, h = width_height.x, width_height.y
    return polygon([
        lower_left,
        lower_left + Point(w, 0.0),
        lower_left + width_height,
        lower_left + Point(0.0, h),
    ], **style)


def line(points: Sequence[Point], **style) -> Graphic:
    return Graphic(Line(tuple(points)), fill=False, **style)


def bezier(points: Sequence[Point], **style) -> Graphic:
    return Graphic(Bezier(tuple(points)), fill=False, **style)


def _unit_coil_points(num_loops: int):
    """Control points of `num_loops` unit circles drawn as a helix."""
    c = BEZIER_CIRCLE
    loop = [
        Point(0.0, 1.0), Point(c, 1.0), Point(1.0, c), Point(1.0, 0.0),
        Point(1.0, -c), Point(c, -1.0), Point(0.0, -1.0), Point(-c, -1.0),
        Point(-1.0, -c), Point(-1.0, 0.0), Point(-1.0, c), Point(-c, 1.0),
    ]
    pts = [Point(-1.0, 0.0), Point(-1.0, c), Point(-c, 1.0)]
    for _ in range(num_loops):
        pts.extend(loop)
    pts.extend([Point(0.0, 1.0), Point(c, 1.0), Point(1.0, c), Point(1.0, 0.0)])
    return pts


def spring_graphic(
    num_loops: int,
    default_length: float,
    p0: Point,
    p1: Point,
    **style
) -> GraphicCollection:
    """
    A coil spring from p0 to p1: straight leaders at both ends and a Bezier
    helix in between. Loop size is set by `default_length`, so stretching
    the spring spreads the loops rather than resizing them.
    """
    if num_loops < 1:
        raise ValueError(f"num_loops must be >= 1, got {num_loops}")
    length = (p1 - p0).norm()
    if length == 0.0:
        raise ValueError("spring endpoints coincide")

    inv_unit_length = 1.0 / (1.5 + 0.8 * num_loops)
    loop_height = default_length * inv_unit_length
    loop_width = 0.5 * default_length * inv_unit_length
    leader = 0.5 * default_length * inv_unit_length

    scale = Transform2D.scale_xy(loop_width, loop_height)
    coil = [p.transform(scale) for p in _unit_coil_points(num_loops)]

    loop_length = length - 2.0 * loop_width - 2.0 * leader
    dx = loop_length / (len(coil) - 1)
    coil = [
        p.transform(Transform2D.translate(i * dx + leader + loop_width, 0.0))
        for i, p in enumerate(coil)
    ]

    s0, s1 = coil[0], coil[-1]
    lead0 = [s0 - Point(leader, 0.0), s0]
    lead1 = [s1, s1 + Point(leader, 0.0)]

    cos_t = (p1.x - p0.x) / length
    sin_t = (p1.y - p0.y) / length
    place = Transform2D(a=cos_t, b=-sin_t, dx=p0.x, c=sin_t, d=cos_t, dy=p0.y)

    return GraphicCollection((
        line([place(p) for p in lead0], **style),
        bezier([place(p) for p in coil], **style),
        line([place(p) for p in lead1], **style),
    ))
