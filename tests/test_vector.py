#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
================================================================================
Vector Module Tests
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

import numpy as np
import pytest
from brownian_canvas.vector import Point, SingularTransformError, Transform2D


class TestPoint:
    """Tests for 2D point arithmetic."""

    def test_arithmetic(self):
        p = Point(1.0, 2.0)
        q = Point(3.0, -1.0)
        assert p + q == Point(4.0, 1.0)
        assert p - q == Point(-2.0, 3.0)
        assert -p == Point(-1.0, -2.0)
        assert p * 2.0 == Point(2.0, 4.0)
        assert 2.0 * p == Point(2.0, 4.0)
        assert q / 2.0 == Point(1.5, -0.5)

    def test_products_and_norm(self):
        p = Point(3.0, 4.0)
        assert p.norm() == 5.0
        assert p.norm_squared() == 25.0
        assert p.dot(Point(1.0, 0.0)) == 3.0
        assert Point(1.0, 0.0).cross(Point(0.0, 1.0)) == 1.0

    def test_array_conversion(self):
        p = Point.from_array(np.array([1.5, -2.5]))
        assert p == Point(1.5, -2.5)
        assert np.array_equal(p.as_array(), [1.5, -2.5])
        assert tuple(p) == (1.5, -2.5)
        assert Point.zero() == Point()


class TestTransform2D:
    """Tests for affine transforms."""

    def test_translate(self):
        t = Transform2D.translate(1.0, -2.0)
        assert t(Point(0.0, 0.0)) == Point(1.0, -2.0)

    def test_rotate_about_point(self):
        """A quarter turn about (1, 1) maps (2, 1) to (1, 2)."""
        t = Transform2D.rotate(math.pi / 2, Point(1.0, 1.0))
        p = t(Point(2.0, 1.0))
        assert p.x == pytest.approx(1.0)
        assert p.y == pytest.approx(2.0)
        # The centre is fixed
        c = t(Point(1.0, 1.0))
        assert c.x == pytest.approx(1.0)
        assert c.y == pytest.approx(1.0)

    def test_scale_about_point(self):
        t = Transform2D.scale_xy(2.0, 3.0, Point(1.0, 1.0))
        assert t(Point(1.0, 1.0)) == Point(1.0, 1.0)
        assert t(Point(2.0, 2.0)) == Point(3.0, 4.0)

    def test_combine_order(self):
        """combine_left applies the argument second."""
        scale = Transform2D.scale(2.0)
        shift = Transform2D.translate(1.0, 0.0)
        p = Point(1.0, 1.0)
        assert scale.combine_left(shift)(p) == shift(scale(p))
        assert scale.combine_right(shift)(p) == scale(shift(p))

    def test_inverse_round_trip(self):
        t = Transform2D.rotate(0.3, Point(2.0, -1.0)).combine_left(
            Transform2D.scale_xy(2.0, 0.5)
        )
        p = Point(0.7, -3.2)
        q = t.inv()(t(p))
        assert q.x == pytest.approx(p.x)
        assert q.y == pytest.approx(p.y)

    def test_singular_inverse_raises(self):
        t = Transform2D(a=1.0, b=2.0, c=2.0, d=4.0)
        with pytest.raises(SingularTransformError):
            t.inv()
