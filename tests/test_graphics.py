#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
================================================================================
Graphics Module Tests
================================================================================

Author:         Ryan Kamp
Affiliation:    University of Cincinnati Department of Computer Science
Email:          kamprj@mail.uc.edu
GitHub:         https://github.com/ryanjosephkamp

Created:        February 3, 2026
License:        MIT License
================================================================================
"""

import math

import pytest
from brownian_canvas.graphics import (
    Bezier,
    Circle,
    GraphicCollection,
    Line,
    Polygon,
    bounding_box,
    circle,
    line,
    rect,
    spring_graphic,
)
from brownian_canvas.vector import Point, Transform2D


def assert_box(box, lower_left, width_height):
    ll, wh = box
    assert ll.x == pytest.approx(lower_left[0])
    assert ll.y == pytest.approx(lower_left[1])
    assert wh.x == pytest.approx(width_height[0])
    assert wh.y == pytest.approx(width_height[1])


class TestBoundingBox:
    """Tests for per-geometry bounding boxes."""

    def test_circle(self):
        assert_box(bounding_box(Circle(Point(1.0, 2.0), 0.5)), (0.5, 1.5), (1.0, 1.0))

    def test_scaled_circle(self):
        t = Transform2D.scale_xy(2.0, 1.0)
        assert_box(bounding_box(Circle(Point(1.0, 0.0), 1.0), t), (0.0, -1.0), (4.0, 2.0))

    def test_rotated_circle_is_unchanged_in_size(self):
        t = Transform2D.rotate(0.7)
        ll, wh = bounding_box(Circle(Point(0.0, 0.0), 1.0), t)
        assert wh.x == pytest.approx(2.0)
        assert wh.y == pytest.approx(2.0)

    def test_polygon(self):
        poly = Polygon((Point(0.0, 0.0), Point(2.0, 1.0), Point(-1.0, 3.0)))
        assert_box(bounding_box(poly), (-1.0, 0.0), (3.0, 3.0))

    def test_line_with_translation(self):
        seg = Line((Point(0.0, 0.0), Point(1.0, 1.0)))
        assert_box(bounding_box(seg, Transform2D.translate(2.0, 3.0)), (2.0, 3.0), (1.0, 1.0))

    def test_rotated_square(self):
        square = rect(Point(-1.0, -1.0), Point(2.0, 2.0))
        box = bounding_box(square.geometry, Transform2D.rotate(math.pi / 4))
        s = math.sqrt(2.0)
        assert_box(box, (-s, -s), (2 * s, 2 * s))

    def test_empty_point_set_raises(self):
        with pytest.raises(ValueError):
            bounding_box(Polygon(()))

    def test_unknown_geometry_raises(self):
        with pytest.raises(TypeError):
            bounding_box("circle")

    def test_bezier_needs_3k_plus_1_points(self):
        with pytest.raises(ValueError):
            Bezier((Point(0.0, 0.0), Point(1.0, 1.0)))
        Bezier(tuple(Point(float(i), 0.0) for i in range(7)))


class TestGraphics:
    """Tests for styled graphics and collections."""

    def test_graphic_transform(self):
        g = circle(Point(0.0, 0.0), 1.0, transform=Transform2D.translate(5.0, 0.0))
        assert_box(g.bounding_box(), (4.0, -1.0), (2.0, 2.0))

    def test_with_color(self):
        g = line([Point(0.0, 0.0), Point(1.0, 0.0)], line_width=2.0)
        red = g.with_color("red")
        assert red.color == "red"
        assert red.line_width == 2.0
        assert red.fill is False

    def test_collection_box(self):
        coll = GraphicCollection((
            circle(Point(0.0, 0.0), 1.0),
            circle(Point(4.0, 0.0), 0.5),
        ), transform=Transform2D.translate(0.0, 1.0))
        assert_box(coll.bounding_box(), (-1.0, 0.0), (5.5, 2.0))


class TestSpring:
    """Tests for the coil-spring builder."""

    def test_endpoints(self):
        p0, p1 = Point(1.0, 1.0), Point(6.0, 1.0)
        spring = spring_graphic(4, 5.0, p0, p1)
        assert len(spring.elements) == 3
        start = spring.elements[0].geometry.points[0]
        end = spring.elements[2].geometry.points[-1]
        assert start.x == pytest.approx(p0.x)
        assert start.y == pytest.approx(p0.y)
        assert end.x == pytest.approx(p1.x)
        assert end.y == pytest.approx(p1.y)

    def test_rotated_spring_ends(self):
        p0, p1 = Point(0.0, 0.0), Point(0.0, 3.0)
        spring = spring_graphic(3, 3.0, p0, p1)
        end = spring.elements[2].geometry.points[-1]
        assert end.x == pytest.approx(0.0, abs=1e-12)
        assert end.y == pytest.approx(3.0)

    def test_coil_is_bezier(self):
        spring = spring_graphic(2, 4.0, Point(0.0, 0.0), Point(4.0, 0.0))
        coil = spring.elements[1].geometry
        assert isinstance(coil, Bezier)
        assert (len(coil.points) - 1) % 3 == 0

    def test_invalid_spring(self):
        with pytest.raises(ValueError):
            spring_graphic(0, 1.0, Point(0.0, 0.0), Point(1.0, 0.0))
        with pytest.raises(ValueError):
            spring_graphic(3, 1.0, Point(1.0, 1.0), Point(1.0, 1.0))
