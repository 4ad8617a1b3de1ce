#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
================================================================================
Trajectory Recording
================================================================================

Project:        Brownian Canvas
Module:         recording.py

Author:         Ryan Kamp
Affiliation:    University of Cincinnati Department of Computer Science
Email:          kamprj@mail.uc.edu
GitHub:         https://github.com/ryanjosephkamp

Created:        February 3, 2026
Last Updated:   February 3, 2026

License:        MIT License
================================================================================

Collects (t, x, y) samples of the tagged particle. By default positions are
unwrapped (position + offset) so a trajectory that crosses the periodic
boundary stays continuous.
"""

import logging
from pathlib import Path
from typing import List, Tuple, Union

import numpy as np

logger = logging.getLogger(__name__)

HEADER = "t(ns), x(nm), y(nm)"


class TrajectoryRecorder:
    """Push-style sink for tagged-particle samples."""

    def __init__(self, unwrapped: bool = True):
        self.unwrapped = unwrapped
        self._samples: List[Tuple[float, float, float]] = []

    def record(self, state) -> Tuple[float, float, float]:
        position = state.unwrapped_position() if self.unwrapped else state.rpar
        sample = (float(state.t), float(position[0]), float(position[1]))
        self._samples.append(sample)
        return sample

    def clear(self) -> None:
        self._samples.clear()

    def __len__(self) -> int:
        return len(self._samples)

    def as_array(self) -> np.ndarray:
        """Kx3 array of (t, x, y) rows."""
        if not self._samples:
            return np.empty((0, 3))
        return np.array(self._samples, dtype=float)

    def write_csv(self, path: Union[str, Path]) -> Path:
        path = Path(path)
        np.savetxt(path, self.as_array(), delimiter=", ", header=HEADER, comments="")
        logger.info("Wrote %d trajectory samples to %s", len(self), path)
        return path

    def to_braced_text(self) -> str:
        """Samples as a nested-brace list, e.g. `{ { 0, 7.5, 7.5 }, ... }`."""
        rows = ",\n".join(f"{{ {t}, {x}, {y} }}" for t, x, y in self._samples)
        return f"{HEADER}\n{{ {rows} }}\n"
