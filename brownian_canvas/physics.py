#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
================================================================================
Pairwise Force Engine
================================================================================

Project:        Brownian Canvas
Module:         physics.py

Author:         Ryan Kamp
Affiliation:    University of Cincinnati Department of Computer Science
Email:          kamprj@mail.uc.edu
GitHub:         https://github.com/ryanjosephkamp

Created:        February 3, 2026
Last Updated:   February 3, 2026

License:        MIT License
================================================================================

Short-range pair forces for a large tagged particle immersed in a bath of
small solvent particles, on a periodic square of side L.

Two interchangeable force laws are provided:

Soft-core Lennard-Jones (default), with contact diameter r0 = 2 r_sol:

    F(r) = 2 n ε / r [(r0/r)^(2n) - (r0/r)^n]      r1 <= r < r0
    F(r) = F(r1)                                    r < r1 = 0.6 r0
    F(r) = 0                                        r >= r0

The floor r1 keeps the force finite when two particles overlap deeply.

Truncated 12-6 Lennard-Jones (WCA), with σ = r0 / 2^(1/6):

    F(r) = 24 ε / r [2(σ/r)¹² - (σ/r)⁶]             r < r0
    F(r) = 0                                        r >= r0

Both are purely repulsive. The tagged particle uses the same law evaluated
at r - (r_par - r_sol). The truncated law has no finite value once that
shifted distance reaches zero, so a solvent particle inside the tagged core
is an error under it; the soft-core law stays finite there.

Solvent pairs are found with a G x G bin grid and a half stencil, so every
pair of touching cells is visited once and Newton's third law gives the
partner's force for free. Units: nm, pN, pN·nm.
"""

import math
from dataclasses import dataclass, field, replace
from typing import ClassVar, Tuple

import numpy as np
from numba import jit

from .binning import BinGrid, check_grid_geometry, half_stencil
from .errors import ConfigurationError, SimulationError

# Force-law kernel codes
LAW_SOFT_CORE = 0
LAW_TRUNCATED_LJ = 1

# Tagged-particle image conventions
IMAGE_MARGIN = 0
IMAGE_CANONICAL = 1
IMAGE_MODES = {"margin": IMAGE_MARGIN, "canonical": IMAGE_CANONICAL}

TWO_TO_ONE_SIXTH = 2.0 ** (1.0 / 6.0)


@dataclass(frozen=True)
class Params:
    """
    Physical parameters, fixed for the duration of a step.

    Default values match a ~1.5 nm colloid in a water-like solvent at body
    temperature.
    """
    force: float = 0.0      # External pull on the tagged particle along +x (pN)
    temp: float = 310.0     # Temperature (K)
    ep: float = 5.0         # Potential well depth (pN·nm)
    rad_sol: float = 0.15   # Solvent particle radius (nm)
    rad_par: float = 0.75   # Tagged particle radius (nm)
    msol: float = 30.0      # Solvent mass (1e-27 kg)
    mpar: float = 1500.0    # Tagged particle mass (1e-27 kg)

    def __post_init__(self):
        self.validate()

    def validate(self) -> None:
        for name in ("force", "temp", "ep", "rad_sol", "rad_par", "msol", "mpar"):
            if not math.isfinite(getattr(self, name)):
                raise ConfigurationError(f"{name} must be finite, got {getattr(self, name)}")
        for name in ("rad_sol", "rad_par", "msol", "mpar"):
            if getattr(self, name) <= 0.0:
                raise ConfigurationError(f"{name} must be positive, got {getattr(self, name)}")
        if self.ep < 0.0:
            raise ConfigurationError(f"ep must be non-negative, got {self.ep}")
        if self.temp < 0.0:
            raise ConfigurationError(f"temp must be non-negative, got {self.temp}")

    def replace(self, **changes) -> "Params":
        """Copy with some fields changed; the copy is validated."""
        unknown = set(changes) - set(self.__dataclass_fields__)
        if unknown:
            raise ConfigurationError(f"unknown parameter(s): {sorted(unknown)}")
        return replace(self, **changes)

    @property
    def contact_shift(self) -> float:
        """Offset applied to tagged-solvent separations."""
        return self.rad_par - self.rad_sol

    @property
    def tagged_margin(self) -> float:
        return self.rad_par + self.rad_sol


# ---------------------------------------------------------------------------
# Scalar kernels
# ---------------------------------------------------------------------------

@jit(nopython=True, cache=True)
def soft_core_force_magnitude(
    r: float, r0: float, epsilon: float, exponent: int, floor_ratio: float
) -> float:
    """
    Soft-core LJ force magnitude (positive = repulsive).

    Below r1 = floor_ratio * r0 the force is held at its value at r1.
    """
    if r >= r0:
        return 0.0
    r1 = floor_ratio * r0
    if r < r1:
        r = r1
    xn = (r0 / r) ** exponent
    return 2.0 * exponent * epsilon / r * (xn * xn - xn)


@jit(nopython=True, cache=True)
def soft_core_potential(
    r: float, r0: float, epsilon: float, exponent: int, floor_ratio: float
) -> float:
    """
    Potential consistent with `soft_core_force_magnitude`, zero at r0.

    U = ε[(r0/r)^(2n) - 2(r0/r)^n + 1], continued linearly below r1.
    """
    if r >= r0:
        return 0.0
    r1 = floor_ratio * r0
    if r < r1:
        x1 = (r0 / r1) ** exponent
        u1 = epsilon * (x1 * x1 - 2.0 * x1 + 1.0)
        f1 = 2.0 * exponent * epsilon / r1 * (x1 * x1 - x1)
        return u1 + f1 * (r1 - r)
    xn = (r0 / r) ** exponent
    return epsilon * (xn * xn - 2.0 * xn + 1.0)


@jit(nopython=True, cache=True)
def truncated_lj_force_magnitude(r: float, r0: float, epsilon: float) -> float:
    """
    WCA force magnitude, cut at the potential minimum r0 = 2^(1/6) σ.

    F(r) = -dV/dr = 24ε/r [2(σ/r)¹² - (σ/r)⁶]
    """
    if r >= r0:
        return 0.0
    if r <= 0.0:
        raise ZeroDivisionError("truncated LJ evaluated at zero separation")
    sigma = r0 / TWO_TO_ONE_SIXTH
    sr6 = (sigma / r) ** 6
    sr12 = sr6 * sr6
    return 24.0 * epsilon / r * (2.0 * sr12 - sr6)


@jit(nopython=True, cache=True)
def truncated_lj_potential(r: float, r0: float, epsilon: float) -> float:
    """V(r) = 4ε[(σ/r)¹² - (σ/r)⁶] + ε inside the cutoff, 0 outside."""
    if r >= r0:
        return 0.0
    if r <= 0.0:
        raise ZeroDivisionError("truncated LJ evaluated at zero separation")
    sigma = r0 / TWO_TO_ONE_SIXTH
    sr6 = (sigma / r) ** 6
    return 4.0 * epsilon * (sr6 * sr6 - sr6) + epsilon


@jit(nopython=True, cache=True)
def law_force_magnitude(kind: int, r: float, law_args: np.ndarray) -> float:
    if kind == LAW_SOFT_CORE:
        return soft_core_force_magnitude(
            r, law_args[0], law_args[1], int(law_args[2]), law_args[3]
        )
    return truncated_lj_force_magnitude(r, law_args[0], law_args[1])


@jit(nopython=True, cache=True)
def law_potential(kind: int, r: float, law_args: np.ndarray) -> float:
    if kind == LAW_SOFT_CORE:
        return soft_core_potential(
            r, law_args[0], law_args[1], int(law_args[2]), law_args[3]
        )
    return truncated_lj_potential(r, law_args[0], law_args[1])


@jit(nopython=True, cache=True)
def pair_force_energy(
    dx: float, dy: float, kind: int, law_args: np.ndarray
) -> Tuple[float, float, float]:
    """
    Force on i from j for separation (dx, dy) = r_i - r_j, plus pair energy.
    """
    r_sq = dx * dx + dy * dy
    if r_sq >= law_args[0] * law_args[0]:
        return 0.0, 0.0, 0.0
    if r_sq == 0.0:
        raise ZeroDivisionError("coincident solvent particles")
    r = np.sqrt(r_sq)
    f_over_r = law_force_magnitude(kind, r, law_args) / r
    return f_over_r * dx, f_over_r * dy, law_potential(kind, r, law_args)


@jit(nopython=True, cache=True)
def tagged_force_energy(
    px: float, py: float,
    sx: float, sy: float,
    size: float,
    shift: float,
    margin: float,
    image: int,
    kind: int,
    law_args: np.ndarray
) -> Tuple[float, float, float]:
    """
    Force on the tagged particle at (px, py) from a solvent particle at
    (sx, sy), plus pair energy.

    Each axis is corrected for periodicity on its own. With IMAGE_MARGIN an
    axis wraps only when the gap through the boundary is within the
    combined radii, which is enough to find every interacting image as
    long as margin < L/2. IMAGE_CANONICAL uses the usual |d| > L/2 test.
    """
    dx = px - sx
    dy = py - sy

    if image == IMAGE_MARGIN:
        if dx < -size + margin:
            dx += size
        elif dx > size - margin:
            dx -= size
        if dy < -size + margin:
            dy += size
        elif dy > size - margin:
            dy -= size
    else:
        if dx > size / 2:
            dx -= size
        elif dx < -size / 2:
            dx += size
        if dy > size / 2:
            dy -= size
        elif dy < -size / 2:
            dy += size

    r_sq = dx * dx + dy * dy
    reach = law_args[0] + shift
    if r_sq >= reach * reach:
        return 0.0, 0.0, 0.0
    if r_sq == 0.0:
        raise ZeroDivisionError("solvent particle at the tagged particle centre")
    r = np.sqrt(r_sq)
    r_eff = r - shift
    if r_eff <= 0.0 and kind == LAW_TRUNCATED_LJ:
        raise SimulationError("solvent particle inside the tagged particle core")
    f_over_r = law_force_magnitude(kind, r_eff, law_args) / r
    return f_over_r * dx, f_over_r * dy, law_potential(kind, r_eff, law_args)


# ---------------------------------------------------------------------------
# Force laws
# ---------------------------------------------------------------------------

class ForceLaw:
    """
    Interface shared by the pair laws.

    Subclasses provide `kind` (kernel code), `name` and `kernel_args`; the
    contact distance r0 = 2 r_sol is both the cutoff and the length scale.
    """
    kind: ClassVar[int]
    name: ClassVar[str]

    def cutoff(self, params: Params) -> float:
        return 2.0 * params.rad_sol

    def kernel_args(self, params: Params) -> np.ndarray:
        raise NotImplementedError

    def magnitude(self, r: float, params: Params) -> float:
        """Scalar force at separation r (positive = repulsive)."""
        return law_force_magnitude(self.kind, float(r), self.kernel_args(params))

    def potential(self, r: float, params: Params) -> float:
        return law_potential(self.kind, float(r), self.kernel_args(params))


@dataclass(frozen=True)
class SoftCoreLJ(ForceLaw):
    """Power-law repulsion with a stability floor at floor_ratio * r0."""
    exponent: int = 2
    floor_ratio: float = 0.6

    kind: ClassVar[int] = LAW_SOFT_CORE
    name: ClassVar[str] = "soft_core"

    def __post_init__(self):
        if self.exponent < 1:
            raise ConfigurationError(f"exponent must be >= 1, got {self.exponent}")
        if not 0.0 < self.floor_ratio < 1.0:
            raise ConfigurationError(
                f"floor_ratio must lie in (0, 1), got {self.floor_ratio}"
            )

    def kernel_args(self, params: Params) -> np.ndarray:
        return np.array(
            [self.cutoff(params), params.ep, float(self.exponent), self.floor_ratio],
            dtype=np.float64,
        )


@dataclass(frozen=True)
class TruncatedLJ(ForceLaw):
    """12-6 Lennard-Jones cut and shifted at its minimum; no lower clamp."""

    kind: ClassVar[int] = LAW_TRUNCATED_LJ
    name: ClassVar[str] = "truncated_lj"

    def sigma(self, params: Params) -> float:
        return self.cutoff(params) / TWO_TO_ONE_SIXTH

    def kernel_args(self, params: Params) -> np.ndarray:
        return np.array([self.cutoff(params), params.ep, 0.0, 0.0], dtype=np.float64)


FORCE_LAWS = {
    SoftCoreLJ.name: SoftCoreLJ,
    TruncatedLJ.name: TruncatedLJ,
}


def image_code(image: str) -> int:
    try:
        return IMAGE_MODES[image]
    except KeyError:
        raise ConfigurationError(
            f"unknown image convention {image!r}; expected one of {sorted(IMAGE_MODES)}"
        ) from None


def check_tagged_geometry(params: Params, size: float) -> None:
    """The axis-wise image test is only sound while r_par + r_sol < L/2."""
    if params.tagged_margin >= size / 2:
        raise ConfigurationError(
            f"rad_par + rad_sol = {params.tagged_margin:.4g} must be below half "
            f"the domain size ({size / 2:.4g})"
        )


# ---------------------------------------------------------------------------
# Periodic helpers
# ---------------------------------------------------------------------------

def wrap_positions(positions: np.ndarray, size: float) -> np.ndarray:
    """
    Wrap positions into [0, size) in place with a single shift per axis.

    Values exactly at `size` after the shift (from rounding of tiny
    negative coordinates) are mapped to 0.
    """
    positions[positions >= size] -= size
    positions[positions < 0.0] += size
    positions[positions >= size] = 0.0
    return positions


def wrap_position(position, size: float) -> np.ndarray:
    """Wrapped copy of a single 2-vector."""
    return wrap_positions(np.array(position, dtype=float), size)


def minimum_image(displacement, size: float) -> np.ndarray:
    """Shortest periodic image of a displacement (canonical convention)."""
    d = np.asarray(displacement, dtype=float)
    return d - size * np.round(d / size)


# ---------------------------------------------------------------------------
# Pair forces (Python entry points)
# ---------------------------------------------------------------------------

def force_pair(ri, rj, params: Params, law: ForceLaw = SoftCoreLJ()) -> np.ndarray:
    """
    Force on solvent particle i from solvent particle j.

    No periodic correction is applied; pass an already-imaged `rj`.

    Raises:
        ZeroDivisionError: if ri and rj coincide
    """
    fx, fy, _ = pair_force_energy(
        float(ri[0]) - float(rj[0]), float(ri[1]) - float(rj[1]),
        law.kind, law.kernel_args(params)
    )
    return np.array([fx, fy])


def force_tagged(
    rpar, rsol, params: Params, size: float,
    law: ForceLaw = SoftCoreLJ(), image: str = "margin"
) -> np.ndarray:
    """Force on the tagged particle from one solvent particle."""
    fx, fy, _ = tagged_force_energy(
        float(rpar[0]), float(rpar[1]), float(rsol[0]), float(rsol[1]),
        float(size), params.contact_shift, params.tagged_margin,
        image_code(image), law.kind, law.kernel_args(params)
    )
    return np.array([fx, fy])


# ---------------------------------------------------------------------------
# Force accumulation
# ---------------------------------------------------------------------------

@jit(nopython=True, cache=True)
def _accumulate_cells(
    rpar: np.ndarray,
    rsol: np.ndarray,
    cell_start: np.ndarray,
    members: np.ndarray,
    n_bins: int,
    size: float,
    stencil: np.ndarray,
    kind: int,
    law_args: np.ndarray,
    shift: float,
    margin: float,
    image: int
) -> Tuple[np.ndarray, np.ndarray, float]:
    """
    Half-stencil sweep over the bin grid.

    Cells are visited row-major. Within a cell each unordered pair is taken
    once; each member is then paired with every particle in the stencil
    cells, and finally with the tagged particle. A stencil cell reached by
    wrapping past the grid edge has its particles shifted by ±size on that
    axis so the pair law sees the minimum-image separation.
    """
    n_particles = rsol.shape[0]
    f_solvent = np.zeros((n_particles, 2))
    f_tagged = np.zeros(2)
    potential_energy = 0.0

    for row in range(n_bins):
        for col in range(n_bins):
            cell = row * n_bins + col
            start = cell_start[cell]
            stop = cell_start[cell + 1]
            if start == stop:
                continue

            # Pairs inside this cell
            for a in range(start, stop - 1):
                i = members[a]
                for b in range(a + 1, stop):
                    j = members[b]
                    fx, fy, e = pair_force_energy(
                        rsol[i, 0] - rsol[j, 0], rsol[i, 1] - rsol[j, 1],
                        kind, law_args
                    )
                    f_solvent[i, 0] += fx
                    f_solvent[i, 1] += fy
                    f_solvent[j, 0] -= fx
                    f_solvent[j, 1] -= fy
                    potential_energy += e

            for a in range(start, stop):
                i = members[a]
                xi = rsol[i, 0]
                yi = rsol[i, 1]

                # Pairs with neighbouring cells
                for s in range(stencil.shape[0]):
                    nrow = row + stencil[s, 0]
                    ncol = col + stencil[s, 1]
                    shift_x = 0.0
                    shift_y = 0.0
                    if nrow < 0:
                        nrow += n_bins
                        shift_y = -size
                    elif nrow >= n_bins:
                        nrow -= n_bins
                        shift_y = size
                    if ncol < 0:
                        ncol += n_bins
                        shift_x = -size
                    elif ncol >= n_bins:
                        ncol -= n_bins
                        shift_x = size

                    other = nrow * n_bins + ncol
                    for b in range(cell_start[other], cell_start[other + 1]):
                        j = members[b]
                        fx, fy, e = pair_force_energy(
                            xi - (rsol[j, 0] + shift_x),
                            yi - (rsol[j, 1] + shift_y),
                            kind, law_args
                        )
                        f_solvent[i, 0] += fx
                        f_solvent[i, 1] += fy
                        f_solvent[j, 0] -= fx
                        f_solvent[j, 1] -= fy
                        potential_energy += e

                # Tagged particle
                fx, fy, e = tagged_force_energy(
                    rpar[0], rpar[1], xi, yi, size, shift, margin, image,
                    kind, law_args
                )
                f_tagged[0] += fx
                f_tagged[1] += fy
                f_solvent[i, 0] -= fx
                f_solvent[i, 1] -= fy
                potential_energy += e

    return f_tagged, f_solvent, potential_energy


@jit(nopython=True, cache=True)
def _accumulate_all_pairs(
    rpar: np.ndarray,
    rsol: np.ndarray,
    size: float,
    kind: int,
    law_args: np.ndarray,
    shift: float,
    margin: float,
    image: int
) -> Tuple[np.ndarray, np.ndarray, float]:
    """O(N²) reference: every solvent pair under the canonical minimum image."""
    n_particles = rsol.shape[0]
    f_solvent = np.zeros((n_particles, 2))
    f_tagged = np.zeros(2)
    potential_energy = 0.0

    for i in range(n_particles):
        for j in range(i + 1, n_particles):
            dx = rsol[i, 0] - rsol[j, 0]
            dy = rsol[i, 1] - rsol[j, 1]
            if dx > size / 2:
                dx -= size
            elif dx < -size / 2:
                dx += size
            if dy > size / 2:
                dy -= size
            elif dy < -size / 2:
                dy += size
            fx, fy, e = pair_force_energy(dx, dy, kind, law_args)
            f_solvent[i, 0] += fx
            f_solvent[i, 1] += fy
            f_solvent[j, 0] -= fx
            f_solvent[j, 1] -= fy
            potential_energy += e

        fx, fy, e = tagged_force_energy(
            rpar[0], rpar[1], rsol[i, 0], rsol[i, 1], size, shift, margin,
            image, kind, law_args
        )
        f_tagged[0] += fx
        f_tagged[1] += fy
        f_solvent[i, 0] -= fx
        f_solvent[i, 1] -= fy
        potential_energy += e

    return f_tagged, f_solvent, potential_energy


@dataclass(frozen=True)
class ForceModel:
    """
    Pair law, bin grid resolution and neighbour stencil, bundled.

    The default reproduces the reference setup: soft-core law, 15 x 15
    bins, reach-1 half stencil, margin-based tagged image test.
    """
    size: float = 15.0
    n_bins: int = 15
    law: ForceLaw = field(default_factory=SoftCoreLJ)
    stencil_reach: int = 1
    image: str = "margin"

    def __post_init__(self):
        image_code(self.image)

    @property
    def stencil(self) -> np.ndarray:
        return half_stencil(self.stencil_reach)

    def compute(self, params: Params, rpar, rsol) -> Tuple[np.ndarray, np.ndarray, float]:
        return compute_forces_and_energy(
            params, rpar, rsol, self.size, self.n_bins,
            law=self.law, stencil=self.stencil, image=self.image
        )


def _as_inputs(rpar, rsol) -> Tuple[np.ndarray, np.ndarray]:
    rpar = np.ascontiguousarray(rpar, dtype=np.float64).reshape(2)
    rsol = np.ascontiguousarray(rsol, dtype=np.float64).reshape(-1, 2)
    return rpar, rsol


def compute_forces_and_energy(
    params: Params,
    rpar,
    rsol,
    size: float,
    n_bins: int = 15,
    law: ForceLaw = SoftCoreLJ(),
    stencil: np.ndarray = None,
    image: str = "margin"
) -> Tuple[np.ndarray, np.ndarray, float]:
    """
    Net force on the tagged particle, per-solvent forces and total
    potential energy, via the bin grid.

    The external pulling force (params.force) is *not* included; the
    integrator adds it.

    Args:
        params: Physical parameters
        rpar: Tagged particle position (2,)
        rsol: Nx2 solvent positions inside [0, size)
        size: Periodic domain side length
        n_bins: Bins per side
        law: Pair force law
        stencil: Half-stencil offsets (default: reach 1)
        image: Tagged-particle image convention, "margin" or "canonical"

    Returns:
        f_tagged: (2,) force on the tagged particle
        f_solvent: Nx2 forces on solvent particles
        potential_energy: Total pair potential energy

    Raises:
        ConfigurationError: if the grid and stencil cannot see every pair
            within the cutoff, or the tagged particle is too large for the box
    """
    rpar, rsol = _as_inputs(rpar, rsol)
    if stencil is None:
        stencil = half_stencil(1)
    stencil = np.ascontiguousarray(stencil, dtype=np.int64).reshape(-1, 2)
    reach = int(np.abs(stencil).max()) if len(stencil) else 1
    check_grid_geometry(size, n_bins, law.cutoff(params), reach)
    check_tagged_geometry(params, size)
    grid = BinGrid.build(rsol, size, n_bins)
    return _accumulate_cells(
        rpar, rsol, grid.cell_start, grid.members_flat, grid.n_bins, float(size),
        stencil,
        law.kind, law.kernel_args(params),
        params.contact_shift, params.tagged_margin, image_code(image)
    )


def force_calc(
    params: Params,
    rpar,
    rsol,
    size: float = 15.0,
    n_bins: int = 15,
    law: ForceLaw = SoftCoreLJ(),
    stencil: np.ndarray = None,
    image: str = "margin"
) -> Tuple[np.ndarray, np.ndarray]:
    """Pure force evaluation: (net force on tagged, per-solvent forces)."""
    f_tagged, f_solvent, _ = compute_forces_and_energy(
        params, rpar, rsol, size, n_bins, law, stencil, image
    )
    return f_tagged, f_solvent


def brute_force_forces(
    params: Params,
    rpar,
    rsol,
    size: float,
    law: ForceLaw = SoftCoreLJ(),
    image: str = "margin"
) -> Tuple[np.ndarray, np.ndarray, float]:
    """All-pairs evaluation with the canonical minimum image, for checking."""
    rpar, rsol = _as_inputs(rpar, rsol)
    return _accumulate_all_pairs(
        rpar, rsol, float(size), law.kind, law.kernel_args(params),
        params.contact_shift, params.tagged_margin, image_code(image)
    )
