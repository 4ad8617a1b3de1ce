#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
================================================================================
Brownian Dynamics Simulation Engine
================================================================================

Project:        Brownian Canvas
Module:         simulation.py

Author:         Ryan Kamp
Affiliation:    University of Cincinnati Department of Computer Science
Email:          kamprj@mail.uc.edu
GitHub:         https://github.com/ryanjosephkamp

Created:        February 3, 2026
Last Updated:   February 3, 2026

License:        MIT License
================================================================================

A large tagged particle in a periodic bath of small solvent particles,
advanced with velocity Verlet. The solvent is optionally held at a target
temperature by periodic velocity rescaling; the tagged particle is never
thermostatted, so its motion is the Brownian observable.

Call order for the driver: stop before reset. A Reset command that
arrives while the loop is running is rejected.
"""

import logging
import math
from collections import deque
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Union

import numpy as np

from .binning import check_grid_geometry
from .errors import ConfigurationError, SimulationError
from .graphics import Circle
from .physics import (
    ForceLaw,
    ForceModel,
    Params,
    SoftCoreLJ,
    check_tagged_geometry,
    image_code,
    wrap_positions,
)
from .recording import TrajectoryRecorder
from .rng import EntropySource, NormalDist, time_entropy
from .thermodynamics import (
    UNIT_CONVERSION,
    rescale_temperature,
    sample_maxwell_velocities,
    solvent_temperature,
    total_energy,
)
from .vector import Point

logger = logging.getLogger(__name__)

MAX_FRAME_TIME = 1.0 / 60.0  # seconds


@dataclass
class SimulationConfig:
    """Configuration for the Brownian simulation."""
    # Domain
    size: float = 15.0          # Side of the periodic square (nm)
    n_bins: int = 15            # Bin grid cells per side
    spacing: float = 0.6        # Initial solvent lattice spacing (nm)

    # Time integration
    dt: float = 2.5e-5          # Physics step (ns)
    substeps: int = 4           # Physics steps per frame

    # Force model
    force_law: ForceLaw = field(default_factory=SoftCoreLJ)
    stencil_reach: int = 1
    image: str = "margin"       # Tagged-particle image test: "margin" or "canonical"

    # Thermostat
    use_thermostat: bool = True
    thermostat_interval: int = 20   # Frames between velocity rescales

    # Output
    record_interval: int = 20       # Frames between trajectory samples
    max_frame_time: float = MAX_FRAME_TIME

    def validate(self, params: Params) -> None:
        """
        Check the geometry against the parameters.

        Raises:
            ConfigurationError: on any inconsistency
        """
        if self.dt <= 0.0 or not math.isfinite(self.dt):
            raise ConfigurationError(f"dt must be positive, got {self.dt}")
        if self.substeps < 1:
            raise ConfigurationError(f"substeps must be >= 1, got {self.substeps}")
        if self.spacing <= 0.0:
            raise ConfigurationError(f"spacing must be positive, got {self.spacing}")
        if self.thermostat_interval < 0 or self.record_interval < 1:
            raise ConfigurationError("thermostat/record intervals must be non-negative/positive")
        image_code(self.image)
        check_grid_geometry(
            self.size, self.n_bins, self.force_law.cutoff(params), self.stencil_reach
        )
        check_tagged_geometry(params, self.size)

    @property
    def force_model(self) -> ForceModel:
        return ForceModel(
            size=self.size,
            n_bins=self.n_bins,
            law=self.force_law,
            stencil_reach=self.stencil_reach,
            image=self.image,
        )


@dataclass
class State:
    """
    Simulation snapshot.

    Solvent index is particle identity for the lifetime of a run.
    `offset` accumulates the tagged particle's periodic wraps so that
    rpar + offset is its unwrapped position.
    """
    rpar: np.ndarray
    vpar: np.ndarray
    rsol: np.ndarray
    vsol: np.ndarray
    t: float = 0.0
    offset: np.ndarray = field(default_factory=lambda: np.zeros(2))

    def __post_init__(self):
        self.rpar = np.asarray(self.rpar, dtype=float).reshape(2)
        self.vpar = np.asarray(self.vpar, dtype=float).reshape(2)
        self.offset = np.asarray(self.offset, dtype=float).reshape(2)
        self.rsol = np.asarray(self.rsol, dtype=float).reshape(-1, 2)
        self.vsol = np.asarray(self.vsol, dtype=float).reshape(-1, 2)
        if self.rsol.shape != self.vsol.shape:
            raise ConfigurationError(
                f"rsol and vsol must have equal length "
                f"({self.rsol.shape[0]} != {self.vsol.shape[0]})"
            )

    @property
    def n_solvent(self) -> int:
        return self.rsol.shape[0]

    def unwrapped_position(self) -> np.ndarray:
        return self.rpar + self.offset

    def copy(self) -> "State":
        return State(
            rpar=self.rpar.copy(), vpar=self.vpar.copy(),
            rsol=self.rsol.copy(), vsol=self.vsol.copy(),
            t=self.t, offset=self.offset.copy(),
        )


def lattice_sites(spacing: float, size: float) -> np.ndarray:
    """Coordinates spacing/2, 3 spacing/2, ... strictly below size - spacing/2."""
    n_sites = int(math.ceil((size - spacing) / spacing - 1e-9))
    if n_sites <= 0:
        return np.empty(0)
    return spacing / 2.0 + spacing * np.arange(n_sites)


def initialize_state(
    spacing: float,
    params: Params,
    config: Optional[SimulationConfig] = None,
    entropy: EntropySource = time_entropy
) -> State:
    """
    Lay solvent on a square lattice and draw thermal velocities.

    The tagged particle sits at the centre, at rest. Lattice sites within
    rad_par + rad_sol of it are skipped. Solvent velocities are drawn per
    axis from N(0, sqrt(k_B T / m_sol)), seeded from `entropy()`.

    Raises:
        ConfigurationError: for invalid geometry or if no solvent fits
    """
    config = config or SimulationConfig()
    if spacing <= 0.0:
        raise ConfigurationError(f"spacing must be positive, got {spacing}")
    config.validate(params)

    size = config.size
    rpar = np.array([size / 2.0, size / 2.0])

    coords = lattice_sites(spacing, size)
    xs, ys = np.meshgrid(coords, coords)  # row-major: y outer, x inner
    sites = np.column_stack([xs.ravel(), ys.ravel()])
    keep = np.linalg.norm(sites - rpar, axis=1) > params.rad_par + params.rad_sol
    rsol = sites[keep]
    if rsol.shape[0] == 0:
        raise ConfigurationError(
            f"spacing {spacing} leaves no room for solvent in a box of size {size}"
        )

    s0, s1 = entropy()
    dist = NormalDist()
    dist.seed(s0, s1)
    vsol = sample_maxwell_velocities(rsol.shape[0], params.temp, params.msol, dist)

    logger.info(
        "Initialized %d solvent particles (spacing=%.3g nm, size=%.3g nm, T=%.1f K)",
        rsol.shape[0], spacing, size, params.temp
    )
    return State(rpar=rpar, vpar=np.zeros(2), rsol=rsol, vsol=vsol)


def velocity_verlet_step(
    state: State,
    dt: float,
    params: Params,
    model: Optional[ForceModel] = None
) -> float:
    """
    Advance the state by one velocity Verlet step, in place.

    1. F0 = F(r)
    2. r' = r + v dt + (F0/m) dt² / 2, then wrap into [0, L)
    3. F1 = F(r')
    4. v' = v + (F0/m + F1/m) dt / 2

    The external pull (params.force, along +x) acts on the tagged particle
    only. The state is only updated if every new coordinate is finite.

    Returns:
        Potential energy at the new positions (pN·nm)

    Raises:
        SimulationError: if the step produced non-finite values or moved a
            particle by more than half the box
    """
    model = model or ForceModel()
    size = model.size
    pull = np.array([params.force, 0.0])

    fpar0, fsol0, _ = model.compute(params, state.rpar, state.rsol)
    apar0 = (fpar0 + pull) / params.mpar * UNIT_CONVERSION
    asol0 = fsol0 / params.msol * UNIT_CONVERSION

    rpar_step = state.vpar * dt + 0.5 * apar0 * dt * dt
    rsol_step = state.vsol * dt + 0.5 * asol0 * dt * dt
    if not (np.all(np.isfinite(rsol_step)) and np.all(np.isfinite(rpar_step))):
        raise SimulationError(f"non-finite displacement at t={state.t:.6g} ns")
    if max(np.max(np.abs(rsol_step), initial=0.0), np.max(np.abs(rpar_step))) >= size / 2:
        raise SimulationError(
            f"a particle moved more than half the box in one step at t={state.t:.6g} ns; "
            f"reduce dt"
        )

    rpar = state.rpar + rpar_step
    offset = state.offset.copy()
    for axis in range(2):
        if rpar[axis] >= size:
            rpar[axis] -= size
            offset[axis] += size
        elif rpar[axis] < 0.0:
            rpar[axis] += size
            offset[axis] -= size
            if rpar[axis] >= size:
                # -ε rounded up to exactly size
                rpar[axis] = 0.0
                offset[axis] += size
    rsol = wrap_positions(state.rsol + rsol_step, size)

    fpar1, fsol1, potential_energy = model.compute(params, rpar, rsol)
    apar1 = (fpar1 + pull) / params.mpar * UNIT_CONVERSION
    asol1 = fsol1 / params.msol * UNIT_CONVERSION

    vpar = state.vpar + 0.5 * (apar0 + apar1) * dt
    vsol = state.vsol + 0.5 * (asol0 + asol1) * dt
    if not (np.all(np.isfinite(vsol)) and np.all(np.isfinite(vpar))):
        raise SimulationError(f"non-finite velocity at t={state.t:.6g} ns")

    state.rpar = rpar
    state.offset = offset
    state.rsol = rsol
    state.vpar = vpar
    state.vsol = vsol
    state.t += dt
    return potential_energy


def system_energy(state: State, params: Params, model: Optional[ForceModel] = None) -> float:
    """Kinetic plus potential energy of the whole system (pN·nm)."""
    model = model or ForceModel()
    _, _, potential_energy = model.compute(params, state.rpar, state.rsol)
    return total_energy(state, params, potential_energy)


# ---------------------------------------------------------------------------
# Driver
# ---------------------------------------------------------------------------

def disks_from_state(state: State, params: Params):
    """Tagged disk and solvent disks, as handed to a draw callback."""
    tagged = Circle(Point.from_array(state.rpar), params.rad_par)
    solvent = [Circle(Point(float(x), float(y)), params.rad_sol) for x, y in state.rsol]
    return tagged, solvent


DrawCallback = Callable[[Circle, List[Circle]], None]


@dataclass(frozen=True)
class Start:
    pass


@dataclass(frozen=True)
class Stop:
    pass


@dataclass(frozen=True)
class Reset:
    pass


@dataclass(frozen=True)
class SetParam:
    name: str
    value: float


@dataclass(frozen=True)
class SetRecording:
    enabled: bool


Command = Union[Start, Stop, Reset, SetParam, SetRecording]


class BrownianSimulation:
    """
    Owns one simulation and processes UI commands between frames.

    Controls never touch the state directly: they `submit` commands, and
    the queue is drained at the top of every `step`. Each running frame
    performs `config.substeps` physics steps of fixed size `config.dt`,
    independent of the wall-clock frame interval.
    """

    def __init__(
        self,
        params: Optional[Params] = None,
        config: Optional[SimulationConfig] = None,
        entropy: EntropySource = time_entropy,
        draw: Optional[DrawCallback] = None,
        recorder: Optional[TrajectoryRecorder] = None
    ):
        self.params = params or Params()
        self.config = config or SimulationConfig()
        self.config.validate(self.params)
        self.entropy = entropy
        self.draw = draw
        self.recorder = recorder or TrajectoryRecorder()
        self.recording = False
        self.running = False
        self.frame_count = 0
        self.record_count = 0
        self.last_potential_energy = 0.0
        self._commands = deque()
        self._model = self.config.force_model
        self.state = initialize_state(
            self.config.spacing, self.params, self.config, self.entropy
        )

    # -- commands -----------------------------------------------------------

    def submit(self, command: Command) -> None:
        self._commands.append(command)

    def process_commands(self) -> None:
        while self._commands:
            self._apply(self._commands.popleft())

    def _apply(self, command: Command) -> None:
        if isinstance(command, Start):
            if not self.running:
                self.running = True
                self.frame_count = 0
                self.record_count = 0
                logger.info("Simulation started at t=%.6g ns", self.state.t)
                if self.recording:
                    self.recorder.record(self.state)
        elif isinstance(command, Stop):
            if self.running:
                self.running = False
                logger.info("Simulation stopped at t=%.6g ns", self.state.t)
        elif isinstance(command, Reset):
            self.reset()
        elif isinstance(command, SetParam):
            params = self.params.replace(**{command.name: command.value})
            self.config.validate(params)
            self.params = params
            logger.debug("Set %s = %r", command.name, command.value)
        elif isinstance(command, SetRecording):
            self.recording = command.enabled
            self.record_count = 0
        else:
            raise TypeError(f"unknown command: {command!r}")

    def reset(self) -> State:
        """
        Replace the state with a freshly initialized one.

        Raises:
            SimulationError: if the loop is running (stop first)
        """
        if self.running:
            raise SimulationError("stop the simulation before resetting it")
        self.state = initialize_state(
            self.config.spacing, self.params, self.config, self.entropy
        )
        self.frame_count = 0
        self.record_count = 0
        logger.info("Simulation reset")
        self._draw()
        return self.state

    # -- stepping -----------------------------------------------------------

    def step(self, frame_dt: float = MAX_FRAME_TIME) -> bool:
        """
        Loop callback: drain commands, then advance one frame if running.

        `frame_dt` is wall-clock time and only used for diagnostics.

        Returns:
            True if physics was advanced
        """
        self.process_commands()
        if not self.running:
            return False
        self.advance_frame()
        logger.debug(
            "frame %d: t=%.6g ns, wall dt=%.4g s", self.frame_count, self.state.t, frame_dt
        )
        return True

    def advance_frame(self) -> None:
        """Thermostat/record on cadence, run the physics substeps, draw."""
        cfg = self.config
        self.frame_count += 1
        if cfg.use_thermostat and cfg.thermostat_interval and \
                self.frame_count % cfg.thermostat_interval == 0:
            rescale_temperature(self.state.vsol, self.params.temp, self.params.msol)
        if self.recording:
            self.record_count += 1
            if self.record_count % cfg.record_interval == 0:
                self.recorder.record(self.state)

        for _ in range(cfg.substeps):
            self.last_potential_energy = velocity_verlet_step(
                self.state, cfg.dt, self.params, self._model
            )
        self._draw()

    def run(self, n_frames: int) -> State:
        """Advance `n_frames` frames regardless of the running flag."""
        for _ in range(n_frames):
            self.process_commands()
            self.advance_frame()
        return self.state

    def _draw(self) -> None:
        if self.draw is not None:
            tagged, solvent = disks_from_state(self.state, self.params)
            self.draw(tagged, solvent)

    @property
    def temperature(self) -> float:
        return solvent_temperature(self.state.vsol, self.params.msol)


class Simloop:
    """
    Turns frame timestamps into clamped frame intervals for a stepper.

    A long pause (e.g. a hidden window) is seen as a single frame of at
    most `max_frame_time` seconds.
    """

    def __init__(self, stepper, max_frame_time: float = MAX_FRAME_TIME):
        self.stepper = stepper
        self.max_frame_time = max_frame_time
        self._last_time: Optional[float] = None

    def tick(self, now: float) -> bool:
        if self._last_time is None:
            dt = self.max_frame_time
        else:
            dt = min(self.max_frame_time, now - self._last_time)
        self._last_time = now
        return self.stepper.step(dt)

    def reset_clock(self) -> None:
        self._last_time = None
