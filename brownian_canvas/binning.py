#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
================================================================================
Spatial Bin Grid
================================================================================

Project:        Brownian Canvas
Module:         binning.py

Author:         Ryan Kamp
Affiliation:    University of Cincinnati Department of Computer Science
Email:          kamprj@mail.uc.edu
GitHub:         https://github.com/ryanjosephkamp

Created:        February 3, 2026
Last Updated:   February 3, 2026

License:        MIT License
================================================================================

Partitions the periodic square [0, L)^2 into a G x G grid of cells so that
force evaluation only has to look at neighbouring cells, taking the cost
from O(N^2) to roughly O(N).

The grid is rebuilt from scratch on every force evaluation. Storage is a
counting sort (CSR layout): particle indices of cell k are

    members[cell_start[k]:cell_start[k + 1]]

with cells numbered row-major, k = row * G + col, row from y and col from x.
Cells have no fixed capacity, so a crowded cell can never drop a particle.
"""

from dataclasses import dataclass
from typing import Tuple

import numpy as np
from numba import jit

from .errors import ConfigurationError


@jit(nopython=True, cache=True)
def bin_particles(
    positions: np.ndarray,
    size: float,
    n_bins: int
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Assign particles to cells.

    Args:
        positions: Nx2 array of positions, expected inside [0, size)
        size: Side length of the periodic domain
        n_bins: Cells per side (G)

    Returns:
        cell_start: (G*G + 1) offsets into `members`
        members: N particle indices grouped by cell, ascending within a cell
    """
    n_particles = positions.shape[0]
    n_cells = n_bins * n_bins
    cell_size = size / n_bins

    cell_of = np.empty(n_particles, dtype=np.int64)
    counts = np.zeros(n_cells, dtype=np.int64)

    for idx in range(n_particles):
        row = int(np.floor(positions[idx, 1] / cell_size)) % n_bins
        col = int(np.floor(positions[idx, 0] / cell_size)) % n_bins
        cell = row * n_bins + col
        cell_of[idx] = cell
        counts[cell] += 1

    cell_start = np.zeros(n_cells + 1, dtype=np.int64)
    for cell in range(n_cells):
        cell_start[cell + 1] = cell_start[cell] + counts[cell]

    fill = cell_start[:-1].copy()
    members = np.empty(n_particles, dtype=np.int64)
    for idx in range(n_particles):
        cell = cell_of[idx]
        members[fill[cell]] = idx
        fill[cell] += 1

    return cell_start, members


def half_stencil(reach: int = 1) -> np.ndarray:
    """
    Neighbour offsets (drow, dcol) covering each unordered cell pair once.

    For reach 1 this is (-1,-1), (-1,0), (-1,+1), (0,-1): the row above and
    the cell to the left. Sweeping every cell with this stencil visits each
    pair of touching cells exactly once.
    """
    if reach < 1:
        raise ConfigurationError(f"stencil reach must be >= 1, got {reach}")
    offsets = []
    for drow in range(-reach, 1):
        for dcol in range(-reach, reach + 1):
            if drow == 0 and dcol >= 0:
                continue
            offsets.append((drow, dcol))
    return np.array(offsets, dtype=np.int64)


def full_stencil(reach: int = 1) -> np.ndarray:
    """All (2*reach + 1)^2 - 1 neighbour offsets, excluding the cell itself."""
    return np.array(
        [(dr, dc)
         for dr in range(-reach, reach + 1)
         for dc in range(-reach, reach + 1)
         if (dr, dc) != (0, 0)],
        dtype=np.int64,
    )


def check_grid_geometry(size: float, n_bins: int, cutoff: float, reach: int = 1) -> None:
    """
    Validate that a G x G grid with the given stencil reach sees every pair
    within `cutoff`.

    Raises:
        ConfigurationError: if wrapped neighbours would alias one another or
            the stencil does not reach the cutoff.
    """
    if size <= 0:
        raise ConfigurationError(f"domain size must be positive, got {size}")
    if n_bins < 2 * reach + 1:
        raise ConfigurationError(
            f"need at least {2 * reach + 1} bins per side for stencil reach "
            f"{reach}, got {n_bins}"
        )
    cell_size = size / n_bins
    if cell_size * reach < cutoff:
        raise ConfigurationError(
            f"cell size {cell_size:.4g} x reach {reach} is smaller than the "
            f"interaction cutoff {cutoff:.4g}; use fewer bins or a larger reach"
        )


@dataclass(frozen=True)
class BinGrid:
    """Per-evaluation cell lists for a periodic square domain."""
    size: float
    n_bins: int
    cell_start: np.ndarray
    members_flat: np.ndarray

    @classmethod
    def build(cls, positions: np.ndarray, size: float, n_bins: int) -> "BinGrid":
        positions = np.ascontiguousarray(positions, dtype=np.float64).reshape(-1, 2)
        cell_start, members = bin_particles(positions, float(size), int(n_bins))
        return cls(size=float(size), n_bins=int(n_bins),
                   cell_start=cell_start, members_flat=members)

    @property
    def cell_size(self) -> float:
        return self.size / self.n_bins

    @property
    def n_particles(self) -> int:
        return int(self.members_flat.shape[0])

    def cell_index(self, row: int, col: int) -> int:
        return (row % self.n_bins) * self.n_bins + (col % self.n_bins)

    def members(self, row: int, col: int) -> np.ndarray:
        k = self.cell_index(row, col)
        return self.members_flat[self.cell_start[k]:self.cell_start[k + 1]]

    def occupancy(self) -> np.ndarray:
        """G x G array of particle counts."""
        return np.diff(self.cell_start).reshape(self.n_bins, self.n_bins)
