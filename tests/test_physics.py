#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
================================================================================
Physics Module Tests
================================================================================

Author:         Ryan Kamp
Affiliation:    University of Cincinnati Department of Computer Science
Email:          kamprj@mail.uc.edu
GitHub:         https://github.com/ryanjosephkamp

Created:        February 3, 2026
License:        MIT License
================================================================================
"""

import numpy as np
import pytest
from brownian_canvas.binning import half_stencil
from brownian_canvas.errors import ConfigurationError, SimulationError
from brownian_canvas.physics import (
    FORCE_LAWS,
    ForceModel,
    Params,
    SoftCoreLJ,
    TruncatedLJ,
    brute_force_forces,
    check_tagged_geometry,
    compute_forces_and_energy,
    force_calc,
    force_pair,
    force_tagged,
    minimum_image,
    wrap_position,
    wrap_positions,
)


def random_solvent(n, size, seed, min_sep=0.05):
    """Uniform positions with no two particles closer than `min_sep`."""
    rng = np.random.default_rng(seed)
    points = []
    while len(points) < n:
        p = rng.uniform(0.0, size, size=2)
        if all(np.linalg.norm(minimum_image(p - q, size)) > min_sep for q in points):
            points.append(p)
    return np.array(points)


class TestParams:
    """Tests for the physical parameter dataclass."""

    def test_default_parameters(self):
        params = Params()
        assert params.force == 0.0
        assert params.temp == 310.0
        assert params.ep == 5.0
        assert params.rad_sol == 0.15
        assert params.rad_par == 0.75
        assert params.msol == 30.0
        assert params.mpar == 1500.0

    def test_derived_lengths(self):
        params = Params()
        assert params.contact_shift == pytest.approx(0.6)
        assert params.tagged_margin == pytest.approx(0.9)

    @pytest.mark.parametrize("field_name,value", [
        ("rad_sol", 0.0),
        ("rad_par", -1.0),
        ("msol", 0.0),
        ("ep", -1.0),
        ("temp", -10.0),
        ("force", float("nan")),
    ])
    def test_invalid_values_rejected(self, field_name, value):
        with pytest.raises(ConfigurationError):
            Params(**{field_name: value})

    def test_replace_validates(self):
        params = Params()
        assert params.replace(temp=350.0).temp == 350.0
        with pytest.raises(ConfigurationError):
            params.replace(msol=-1.0)
        with pytest.raises(ConfigurationError):
            params.replace(colour=1.0)

    def test_tagged_geometry(self):
        check_tagged_geometry(Params(), 15.0)
        with pytest.raises(ConfigurationError):
            check_tagged_geometry(Params(rad_par=1.0), 2.0)


class TestSoftCoreLaw:
    """Tests for the soft-core Lennard-Jones law."""

    def test_formula(self):
        """F = 2nε/r [(r0/r)^2n - (r0/r)^n] between the floor and r0."""
        params = Params()
        law = SoftCoreLJ()
        r, r0, eps = 0.25, 0.3, params.ep
        x = (r0 / r) ** 2
        expected = 2 * 2 * eps / r * (x * x - x)
        assert law.magnitude(r, params) == pytest.approx(expected)

    def test_repulsive_inside_cutoff(self):
        params = Params()
        law = SoftCoreLJ()
        for r in np.linspace(0.01, 0.299, 50):
            assert law.magnitude(r, params) > 0.0

    def test_floor_clamps_force(self):
        """Below 0.6 r0 the force stays at its value at 0.6 r0."""
        params = Params()
        law = SoftCoreLJ()
        f1 = law.magnitude(0.18, params)
        assert law.magnitude(0.1, params) == pytest.approx(f1)
        assert law.magnitude(1e-6, params) == pytest.approx(f1)

    def test_zero_at_and_beyond_cutoff(self):
        params = Params()
        law = SoftCoreLJ()
        assert law.magnitude(0.3, params) == 0.0
        assert law.magnitude(0.5, params) == 0.0
        assert law.potential(0.3, params) == 0.0

    def test_force_is_minus_potential_gradient(self):
        params = Params()
        law = SoftCoreLJ()
        h = 1e-6
        for r in (0.1, 0.2, 0.25, 0.29):
            dudr = (law.potential(r + h, params) - law.potential(r - h, params)) / (2 * h)
            assert law.magnitude(r, params) == pytest.approx(-dudr, rel=1e-5)

    @pytest.mark.parametrize("kwargs", [{"exponent": 0}, {"floor_ratio": 0.0}, {"floor_ratio": 1.0}])
    def test_invalid_law_arguments(self, kwargs):
        with pytest.raises(ConfigurationError):
            SoftCoreLJ(**kwargs)


class TestTruncatedLJLaw:
    """Tests for the truncated 12-6 law."""

    def test_sigma(self):
        assert TruncatedLJ().sigma(Params()) == pytest.approx(0.3 / 2 ** (1 / 6))

    def test_continuous_at_cutoff(self):
        params = Params()
        law = TruncatedLJ()
        assert law.magnitude(0.3 * (1 - 1e-9), params) == pytest.approx(0.0, abs=1e-5)
        assert law.potential(0.3 * (1 - 1e-9), params) == pytest.approx(0.0, abs=1e-9)

    def test_repulsive_and_steep(self):
        params = Params()
        law = TruncatedLJ()
        assert law.magnitude(0.2, params) > law.magnitude(0.25, params) > 0.0

    def test_force_is_minus_potential_gradient(self):
        params = Params()
        law = TruncatedLJ()
        h = 1e-7
        r = 0.27
        dudr = (law.potential(r + h, params) - law.potential(r - h, params)) / (2 * h)
        assert law.magnitude(r, params) == pytest.approx(-dudr, rel=1e-5)

    def test_registry(self):
        assert FORCE_LAWS["soft_core"] is SoftCoreLJ
        assert FORCE_LAWS["truncated_lj"] is TruncatedLJ


class TestPairForces:
    """Tests for solvent-solvent and tagged-solvent forces."""

    @pytest.mark.parametrize("law", [SoftCoreLJ(), TruncatedLJ()])
    def test_antisymmetry(self, law):
        params = Params()
        ri = np.array([5.0, 5.0])
        rj = np.array([5.2, 5.1])
        f_ij = force_pair(ri, rj, params, law)
        f_ji = force_pair(rj, ri, params, law)
        assert np.allclose(f_ij, -f_ji)
        # Repulsive: pushes i away from j
        assert np.dot(f_ij, ri - rj) > 0

    def test_cutoff(self):
        params = Params()
        ri = np.zeros(2)
        assert np.array_equal(force_pair(ri, ri + [0.3, 0.0], params), [0.0, 0.0])
        assert np.array_equal(force_pair(ri, ri + [0.0, 0.31], params), [0.0, 0.0])
        assert force_pair(ri, ri + [0.299, 0.0], params)[0] < 0.0

    @pytest.mark.parametrize("law", [SoftCoreLJ(), TruncatedLJ()])
    def test_coincident_particles_raise(self, law):
        params = Params()
        ri = np.array([5.0, 5.0])
        with pytest.raises(ZeroDivisionError):
            force_pair(ri, ri.copy(), params, law)

    def test_tagged_uses_shifted_distance(self):
        """The tagged law is evaluated at r - (r_par - r_sol)."""
        params = Params()
        rpar = np.array([7.5, 7.5])
        rsol = np.array([8.35, 7.5])
        f = force_tagged(rpar, rsol, params, 15.0)
        expected = SoftCoreLJ().magnitude(0.25, params)
        assert f[0] == pytest.approx(-expected)
        assert f[1] == 0.0

    def test_tagged_out_of_reach(self):
        params = Params()
        f = force_tagged([7.5, 7.5], [8.41, 7.5], params, 15.0)
        assert np.array_equal(f, [0.0, 0.0])

    @pytest.mark.parametrize("image", ["margin", "canonical"])
    def test_tagged_across_boundary(self, image):
        params = Params()
        rpar = np.array([0.3, 7.5])
        rsol = np.array([14.55, 7.5])
        f = force_tagged(rpar, rsol, params, 15.0, image=image)
        expected = SoftCoreLJ().magnitude(0.15, params)
        assert f[0] == pytest.approx(expected)
        assert f[1] == pytest.approx(0.0)

    def test_unknown_image_convention(self):
        with pytest.raises(ConfigurationError):
            force_tagged([7.5, 7.5], [8.0, 7.5], Params(), 15.0, image="nearest")


class TestPeriodicBoundaries:
    """Tests for periodic helpers."""

    def test_wrap_into_box(self):
        positions = np.array([[15.2, -0.3], [7.0, 15.0], [0.0, 14.999]])
        wrapped = wrap_positions(positions.copy(), 15.0)
        assert np.all(wrapped >= 0.0)
        assert np.all(wrapped < 15.0)
        assert np.allclose(wrapped, [[0.2, 14.7], [7.0, 0.0], [0.0, 14.999]])

    def test_wrap_idempotent(self):
        rng = np.random.default_rng(1)
        positions = rng.uniform(-7.0, 22.0, size=(200, 2))
        once = wrap_positions(positions.copy(), 15.0)
        twice = wrap_positions(once.copy(), 15.0)
        assert np.array_equal(once, twice)

    def test_tiny_negative_maps_to_zero(self):
        wrapped = wrap_position([-1e-17, 3.0], 15.0)
        assert wrapped[0] == 0.0
        assert wrapped[1] == 3.0

    def test_minimum_image(self):
        d = minimum_image([14.0, -8.0], 15.0)
        assert np.allclose(d, [-1.0, 7.0])


class TestForceAccumulation:
    """Half-stencil sweep against the all-pairs reference."""

    @pytest.mark.parametrize("law", [SoftCoreLJ(), TruncatedLJ()])
    def test_matches_brute_force(self, law):
        params = Params()
        size = 15.0
        rpar = np.array([7.5, 7.5])
        rsol = random_solvent(400, size, seed=3)
        # Keep solvent out of the tagged core, where the truncated law is undefined
        outside = np.linalg.norm(rsol - rpar, axis=1) > params.contact_shift + 0.05
        rsol = rsol[outside]

        f_tag, f_sol, pe = compute_forces_and_energy(params, rpar, rsol, size, 15, law=law)
        b_tag, b_sol, b_pe = brute_force_forces(params, rpar, rsol, size, law=law)

        assert np.allclose(f_tag, b_tag, rtol=1e-9, atol=1e-9)
        assert np.allclose(f_sol, b_sol, rtol=1e-9, atol=1e-9)
        assert pe == pytest.approx(b_pe, rel=1e-9, abs=1e-9)

    def test_pairs_across_corner(self):
        """Particles near different corners interact through the wrap."""
        params = Params()
        size = 15.0
        rsol = np.array([
            [0.05, 0.05],
            [14.9, 14.95],
            [0.1, 14.9],
            [14.95, 0.1],
            [7.0, 0.05],
            [7.1, 14.9],
        ])
        rpar = np.array([7.5, 7.5])
        f_tag, f_sol, pe = compute_forces_and_energy(params, rpar, rsol, size, 15)
        b_tag, b_sol, b_pe = brute_force_forces(params, rpar, rsol, size)

        assert np.all(np.linalg.norm(f_sol, axis=1) > 0.0)
        assert np.allclose(f_sol, b_sol, rtol=1e-9, atol=1e-12)
        assert pe == pytest.approx(b_pe)

    def test_tagged_particle_near_edge(self):
        params = Params()
        size = 15.0
        rsol = random_solvent(300, size, seed=9)
        rpar = np.array([0.2, 14.8])
        f_tag, f_sol, _ = compute_forces_and_energy(params, rpar, rsol, size, 15)
        b_tag, b_sol, _ = brute_force_forces(params, rpar, rsol, size)
        assert np.allclose(f_tag, b_tag, rtol=1e-9, atol=1e-9)
        assert np.allclose(f_sol, b_sol, rtol=1e-9, atol=1e-9)

    def test_small_grid_and_wider_stencil(self):
        params = Params()
        rsol = random_solvent(120, 6.0, seed=5)
        rpar = np.array([3.0, 3.0])
        b_tag, b_sol, b_pe = brute_force_forces(params, rpar, rsol, 6.0)

        for n_bins, reach in [(3, 1), (20, 1), (20, 2), (40, 3)]:
            f_tag, f_sol, pe = compute_forces_and_energy(
                params, rpar, rsol, 6.0, n_bins, stencil=half_stencil(reach)
            )
            assert np.allclose(f_sol, b_sol, rtol=1e-9, atol=1e-9)
            assert np.allclose(f_tag, b_tag, rtol=1e-9, atol=1e-9)
            assert pe == pytest.approx(b_pe, rel=1e-9, abs=1e-9)

    def test_newton_third_law(self):
        """Internal forces sum to zero."""
        params = Params()
        rsol = random_solvent(400, 15.0, seed=4)
        f_tag, f_sol = force_calc(params, [7.5, 7.5], rsol)
        assert np.allclose(f_tag + f_sol.sum(axis=0), 0.0, atol=1e-8)

    def test_force_model_defaults(self):
        model = ForceModel()
        assert model.size == 15.0
        assert model.n_bins == 15
        assert isinstance(model.law, SoftCoreLJ)
        assert model.stencil.shape == (4, 2)

    def test_no_solvent(self):
        f_tag, f_sol, pe = compute_forces_and_energy(Params(), [7.5, 7.5], np.empty((0, 2)), 15.0)
        assert np.array_equal(f_tag, [0.0, 0.0])
        assert f_sol.shape == (0, 2)
        assert pe == 0.0

    def test_coincident_solvent_raises(self):
        rsol = np.array([[3.0, 3.0], [3.0, 3.0]])
        with pytest.raises(ZeroDivisionError):
            compute_forces_and_energy(Params(), [7.5, 7.5], rsol, 15.0)

    def test_solvent_inside_tagged_core(self):
        """Soft-core stays finite inside the core; truncated LJ refuses."""
        params = Params()
        rsol = np.array([[7.9, 7.5], [3.0, 3.0]])
        f_tag, f_sol, pe = compute_forces_and_energy(params, [7.5, 7.5], rsol, 15.0)
        assert np.all(np.isfinite(f_tag))
        assert f_tag[0] < 0.0
        assert np.isfinite(pe)

        with pytest.raises(SimulationError):
            compute_forces_and_energy(params, [7.5, 7.5], rsol, 15.0, law=TruncatedLJ())
        with pytest.raises(SimulationError):
            force_tagged([7.5, 7.5], [7.9, 7.5], params, 15.0, law=TruncatedLJ())

    @pytest.mark.parametrize("n_bins, reach", [(150, 1), (100, 1), (120, 2)])
    def test_grid_too_fine_for_cutoff(self, n_bins, reach):
        """Cells smaller than the cutoff would silently drop pairs."""
        params = Params()
        rsol = np.array([[3.0, 3.0], [3.28, 3.0]])
        with pytest.raises(ConfigurationError):
            force_calc(params, [7.5, 7.5], rsol, size=15.0, n_bins=n_bins,
                       stencil=half_stencil(reach))

    def test_grid_geometry_checked_by_model(self):
        with pytest.raises(ConfigurationError):
            ForceModel(n_bins=150).compute(Params(), [7.5, 7.5], np.empty((0, 2)))
        with pytest.raises(ConfigurationError):
            force_calc(Params(), [2.0, 2.0], np.empty((0, 2)), size=1.5, n_bins=3)

    def test_fine_valid_grid_matches_brute_force(self):
        """Cells just over one cutoff wide still see every pair."""
        params = Params()
        rsol = np.array([[3.0, 3.0], [3.28, 3.0]])
        f_tag, f_sol = force_calc(params, [7.5, 7.5], rsol, size=15.0, n_bins=45)
        b_tag, b_sol, _ = brute_force_forces(params, [7.5, 7.5], rsol, 15.0)
        assert f_sol[0, 0] < 0.0
        assert np.allclose(f_sol, b_sol)
