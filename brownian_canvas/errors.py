#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
================================================================================
Exception Types
================================================================================

Project:        Brownian Canvas
Module:         errors.py

Author:         Ryan Kamp
Affiliation:    University of Cincinnati Department of Computer Science
Email:          kamprj@mail.uc.edu
GitHub:         https://github.com/ryanjosephkamp

Created:        February 3, 2026
Last Updated:   February 3, 2026

License:        MIT License
================================================================================
"""


class BrownianCanvasError(Exception):
    """Base class for all errors raised by this package."""


class ConfigurationError(BrownianCanvasError, ValueError):
    """Invalid parameters or geometry, surfaced before any stepping happens."""


class SimulationError(BrownianCanvasError, RuntimeError):
    """
    The integrator reached a state it cannot continue from.

    Raised for non-finite positions/velocities and for call-order misuse
    (e.g. resetting while the loop is running).
    """
