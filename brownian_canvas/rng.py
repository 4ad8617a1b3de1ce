#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
================================================================================
Deterministic Random Numbers
================================================================================

Project:        Brownian Canvas
Module:         rng.py

Author:         Ryan Kamp
Affiliation:    University of Cincinnati Department of Computer Science
Email:          kamprj@mail.uc.edu
GitHub:         https://github.com/ryanjosephkamp

Created:        February 3, 2026
Last Updated:   February 3, 2026

License:        MIT License
================================================================================

A xoroshiro128+ generator (Blackman & Vigna) and a Box-Muller normal
sampler built on it. Streams are fully determined by the two seed words,
so a run can be replayed exactly.

Uniform floats use the exponent-stuffing trick: the top 52 random bits are
OR-ed into the mantissa of 1.0, giving a double in [1, 2); subtracting it
from 2.0 lands in (0, 1]. Zero is unreachable, so ln(u) in Box-Muller is
always finite.
"""

import math
import struct
import time
from typing import Callable, Optional, Tuple

import numpy as np

MASK64 = (1 << 64) - 1

# Default state words (from random.org)
S0 = 0x2475136DB02A2834
S1 = 0x9417ED9540B8FE6E

ONE_BITS = 0x3FF0000000000000

EntropySource = Callable[[], Tuple[int, int]]


def _rotl(x: int, k: int) -> int:
    return ((x << k) | (x >> (64 - k))) & MASK64


def _bits_to_float(bits: int) -> float:
    return struct.unpack("<d", struct.pack("<Q", bits))[0]


def time_entropy() -> Tuple[int, int]:
    """Wall-clock entropy source: (ns since epoch mod 2^64, 0)."""
    return time.time_ns() & MASK64, 0


def fixed_entropy(s0: int, s1: int = 0) -> EntropySource:
    """Entropy source that always returns the same words (for replayable runs)."""
    words = (s0 & MASK64, s1 & MASK64)
    return lambda: words


class Rng:
    """
    xoroshiro128+ with 128 bits of state held as two 64-bit words.

    A fresh generator starts from fixed default words; call `seed` to get
    a different stream per run.
    """

    def __init__(self, s0: Optional[int] = None, s1: Optional[int] = None):
        self.s0 = S0
        self.s1 = S1
        if s0 is not None or s1 is not None:
            self.seed(s0 or 0, s1 or 0)

    def seed(self, s0: int, s1: int = 0) -> None:
        """Fold the seed words onto the defaults (addition mod 2^64)."""
        self.s0 = (S0 + s0) & MASK64
        self.s1 = (S1 + s1) & MASK64

    def next_u64(self) -> int:
        s0 = self.s0
        s1 = self.s1
        result = (s0 + s1) & MASK64

        s1 ^= s0
        self.s0 = _rotl(s0, 24) ^ s1 ^ ((s1 << 16) & MASK64)
        self.s1 = _rotl(s1, 37)
        return result

    def uniform(self) -> float:
        """Uniform double in (0, 1]."""
        bits = ONE_BITS | (self.next_u64() >> 12)
        return 2.0 - _bits_to_float(bits)

    @property
    def state(self) -> Tuple[int, int]:
        return self.s0, self.s1


class NormalDist:
    """
    Normal variates N(mu, sigma^2) via Box-Muller.

    Each transform yields a pair; the second value is banked and returned
    by the next call without consuming any uniforms.
    """

    def __init__(self, mu: float = 0.0, sigma: float = 1.0, rng: Optional[Rng] = None):
        self.rng = rng if rng is not None else Rng()
        self.mu = mu
        self.sigma = sigma
        self._spare: Optional[float] = None

    def seed(self, s0: int, s1: int = 0) -> None:
        """Reseed the underlying generator and drop any banked variate."""
        self.rng.seed(s0, s1)
        self._spare = None

    def set_params(self, mu: float, sigma: float) -> None:
        """Change mu/sigma; a spare banked under other values is dropped."""
        if (mu, sigma) != (self.mu, self.sigma):
            self._spare = None
        self.mu = mu
        self.sigma = sigma

    def next(self) -> float:
        if self._spare is not None:
            value, self._spare = self._spare, None
            return value

        u0 = self.rng.uniform()
        u1 = self.rng.uniform()
        r = self.sigma * math.sqrt(-2.0 * math.log(u0))
        theta = 2.0 * math.pi * u1
        self._spare = r * math.sin(theta) + self.mu
        return r * math.cos(theta) + self.mu

    __next__ = next

    def __iter__(self):
        return self

    def sample(self, n: int) -> np.ndarray:
        """Draw `n` variates in stream order."""
        return np.fromiter((self.next() for _ in range(n)), dtype=float, count=n)

    @property
    def has_spare(self) -> bool:
        return self._spare is not None
