#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
================================================================================
Brownian Canvas
================================================================================

Project:        Brownian Canvas
Description:    2D simulation of a large tagged particle diffusing through a
                periodic bath of small soft-sphere solvent particles

Author:         Ryan Kamp
Affiliation:    University of Cincinnati Department of Computer Science
Email:          kamprj@mail.uc.edu
GitHub:         https://github.com/ryanjosephkamp

Created:        February 3, 2026
Last Updated:   February 3, 2026

License:        MIT License
================================================================================

This package implements a Brownian motion simulation featuring:
- Short-range soft-core and truncated Lennard-Jones pair forces
- Spatial binning with a half-stencil sweep, accelerated with Numba
- Velocity Verlet integration with periodic boundaries
- A deterministic xoroshiro128+ generator for reproducible runs

Modules:
    - vector: 2D points and affine transforms
    - rng: xoroshiro128+ generator and Box-Muller normal sampler
    - binning: Spatial hash grid and neighbour stencils
    - physics: Force laws, periodic wrapping and force accumulation
    - thermodynamics: Maxwell velocities, temperature and thermostat
    - simulation: State, integrator and command-driven simulation loop
    - recording: Tagged-particle trajectory output
    - graphics: Backend-independent shapes and bounding boxes
    - visualization: Matplotlib rendering
    - polymer: Bead-spring chain with overdamped Brownian dynamics
    - config: YAML configuration files and logging setup
    - errors: Exception hierarchy
"""

from .errors import BrownianCanvasError, ConfigurationError, SimulationError
from .physics import ForceModel, Params, SoftCoreLJ, TruncatedLJ
from .simulation import BrownianSimulation, SimulationConfig, State

__version__ = "1.0.0"
__author__ = "Ryan Kamp"

__all__ = [
    "BrownianCanvasError",
    "ConfigurationError",
    "SimulationError",
    "ForceModel",
    "Params",
    "SoftCoreLJ",
    "TruncatedLJ",
    "BrownianSimulation",
    "SimulationConfig",
    "State",
]
