#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
================================================================================
Thermodynamics and Temperature Control
================================================================================

Project:        Brownian Canvas
Module:         thermodynamics.py

Author:         Ryan Kamp
Affiliation:    University of Cincinnati Department of Computer Science
Email:          kamprj@mail.uc.edu
GitHub:         https://github.com/ryanjosephkamp

Created:        February 3, 2026
Last Updated:   February 3, 2026

License:        MIT License
================================================================================

Unit conventions and thermal bookkeeping for the solvent bath:

- lengths in nm, times in ns, forces in pN, energies in pN·nm
- masses in units of 1e-27 kg
- velocities in nm/ns (= m/s)

With these units a force divided by a mass is an acceleration in
1e-6 nm/ns², hence UNIT_CONVERSION = 1e6 on every F/m. A kinetic energy
m v² / 2 comes out in 1e-27 J and is multiplied by 1e-6 to give pN·nm.

In 2D, equipartition gives m <v²> = 2 k_B T.
"""

from typing import Optional

import numpy as np

from .rng import NormalDist

kB = 0.0138064838709677419355   # Boltzmann constant (pN·nm / K)
UNIT_CONVERSION = 1.0e6         # (pN / 1e-27 kg) -> nm / ns²
ENERGY_CONVERSION = 1.0e-6      # 1e-27 kg · (nm/ns)² -> pN·nm


def maxwell_sigma(temp: float, mass: float) -> float:
    """
    Per-axis standard deviation of a Maxwell-Boltzmann velocity.

    σ_v = sqrt(k_B T / m), in nm/ns.
    """
    return 1000.0 * np.sqrt(kB * temp / mass)


def sample_maxwell_velocities(
    n_particles: int,
    temp: float,
    mass: float,
    dist: Optional[NormalDist] = None
) -> np.ndarray:
    """
    Draw Nx2 velocities, x then y for each particle in turn.

    `dist` supplies the stream (its mu/sigma are reset, dropping a spare
    banked under other values); a fresh default-seeded sampler is used if
    omitted.
    """
    if dist is None:
        dist = NormalDist()
    dist.set_params(0.0, maxwell_sigma(temp, mass))
    return dist.sample(2 * n_particles).reshape(n_particles, 2)


def kinetic_energy(velocities: np.ndarray, mass: float) -> float:
    """
    Total kinetic energy in pN·nm.

    KE = Σ (1/2) m v²
    """
    v = np.asarray(velocities, dtype=float).reshape(-1, 2)
    return 0.5 * mass * float(np.sum(v * v)) * ENERGY_CONVERSION


def solvent_temperature(velocities: np.ndarray, mass: float) -> float:
    """
    Instantaneous temperature from the mean squared speed.

    T = m <v²> / (2 k_B), with 2 degrees of freedom per particle.
    """
    v = np.asarray(velocities, dtype=float).reshape(-1, 2)
    if v.shape[0] == 0:
        return 0.0
    v2avg = float(np.mean(np.sum(v * v, axis=1)))
    return mass / 2.0 / kB * v2avg * ENERGY_CONVERSION


def rescale_temperature(velocities: np.ndarray, target_temp: float, mass: float) -> float:
    """
    Velocity-rescaling thermostat, applied in place.

    Multiplies every velocity by sqrt(T_target / T_current). A bath at
    zero temperature is left untouched.

    Returns:
        The scaling factor that was applied (1.0 if none)
    """
    current = solvent_temperature(velocities, mass)
    if current <= 0.0:
        return 1.0
    alpha = np.sqrt(target_temp / current)
    velocities *= alpha
    return float(alpha)


def total_energy(state, params, potential_energy: float) -> float:
    """Kinetic energy of every particle plus the supplied potential energy."""
    return (
        kinetic_energy(state.vsol, params.msol)
        + kinetic_energy(state.vpar, params.mpar)
        + potential_energy
    )
