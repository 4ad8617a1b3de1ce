#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
================================================================================
Bead-Spring Polymer (Overdamped Brownian Dynamics)
================================================================================

Project:        Brownian Canvas
Module:         polymer.py

Author:         Ryan Kamp
Affiliation:    University of Cincinnati Department of Computer Science
Email:          kamprj@mail.uc.edu
GitHub:         https://github.com/ryanjosephkamp

Created:        February 3, 2026
Last Updated:   February 3, 2026

License:        MIT License
================================================================================

A chain of beads joined by harmonic bonds whose ends are held a distance
`sep` apart. Each step moves the interior beads by

    Δr_i = (μ F_i + ξ_i) dt,    ξ_i ~ sqrt(2 D dt) N(0, 1)

with mobility μ = D / (k_B T). The tension on the last bead is kept
so the end-to-end force can be recorded against the separation.
"""

import logging
from typing import Optional

import numpy as np

from .errors import ConfigurationError
from .rng import NormalDist
from .thermodynamics import kB

logger = logging.getLogger(__name__)

DIFFUSION = 1.0e13      # nm²/ns
RADIUS = 0.75           # nm
N_MONOMERS = 512


def bond_forces(monomers: np.ndarray, temp: float, radius: float = RADIUS) -> np.ndarray:
    """
    Force on monomer i from the bond to monomer i - 1, for i = 1..N-1.

    Bonds are harmonic with rest length 2 radius and stiffness
    k = 3 k_B T / (2 radius)².

    Returns:
        (N-1)x2 array; row i-1 is the force on bead i (bead i-1 gets minus)
    """
    k = 3.0 * kB * temp / (2.0 * radius) ** 2
    rij = monomers[1:] - monomers[:-1]
    r = np.linalg.norm(rij, axis=1, keepdims=True)
    return -k * (r - 2.0 * radius) * rij / r


class Polymer:
    """Bead-spring chain with pinned endpoints."""

    def __init__(
        self,
        temp: float,
        sep: float,
        n_monomers: int = N_MONOMERS,
        radius: float = RADIUS
    ):
        if temp <= 0.0:
            raise ConfigurationError(f"temp must be positive, got {temp}")
        if n_monomers < 2:
            raise ConfigurationError(f"need at least 2 monomers, got {n_monomers}")
        self.temp = temp
        self.sep = sep
        self.radius = radius
        xs = np.linspace(-sep / 2.0, sep / 2.0, n_monomers)
        self.monomers = np.column_stack([xs, np.zeros(n_monomers)])
        self.force: Optional[np.ndarray] = None

    @classmethod
    def init(cls, temp: float, sep: float, **kwargs) -> "Polymer":
        return cls(temp, sep, **kwargs)

    @property
    def n_monomers(self) -> int:
        return self.monomers.shape[0]

    @property
    def mobility(self) -> float:
        return DIFFUSION / (kB * self.temp)

    def step(self, rng: NormalDist, dt: float) -> None:
        """One Euler-Maruyama step; the two endpoints stay fixed."""
        n = self.n_monomers
        mu = self.mobility
        f = bond_forces(self.monomers, self.temp, self.radius)

        # Noise is drawn x then y for beads 1..N-1 in order.
        noise = np.sqrt(2.0 * DIFFUSION * dt) * rng.sample(2 * (n - 1)).reshape(n - 1, 2)

        vel = np.zeros_like(self.monomers)
        vel[1:] += mu * f + noise
        vel[:-1] -= mu * f

        self.monomers[1:-1] += vel[1:-1] * dt
        self.force = vel[-1] / mu

    def scale(self, new_sep: float) -> None:
        """Stretch the chain along x so its ends are `new_sep` apart."""
        if self.sep == 0.0:
            raise ConfigurationError("cannot rescale a chain with zero separation")
        self.monomers[:, 0] *= new_sep / self.sep
        self.sep = new_sep
        logger.debug("Polymer end-to-end separation set to %.4g nm", new_sep)

    def end_to_end(self) -> float:
        return float(np.linalg.norm(self.monomers[-1] - self.monomers[0]))
