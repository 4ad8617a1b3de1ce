#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
================================================================================
Brownian Canvas - Command Line Interface
================================================================================

Project:        Brownian Canvas
Module:         main.py

Author:         Ryan Kamp
Affiliation:    University of Cincinnati Department of Computer Science
Email:          kamprj@mail.uc.edu
GitHub:         https://github.com/ryanjosephkamp

Created:        February 3, 2026
Last Updated:   February 3, 2026

License:        MIT License
================================================================================

Command line interface for running the tagged-particle Brownian motion
simulation and the bead-spring polymer demo.
"""

import argparse
import time

import numpy as np
import matplotlib.pyplot as plt

from brownian_canvas.config import DEFAULT_LOG_FORMAT, load_config, setup_logging
from brownian_canvas.physics import Params
from brownian_canvas.polymer import Polymer
from brownian_canvas.rng import NormalDist, fixed_entropy, time_entropy
from brownian_canvas.simulation import BrownianSimulation, SetRecording, SimulationConfig, Start
from brownian_canvas.thermodynamics import kinetic_energy
from brownian_canvas.visualization import (
    create_animation, render_energy_plot, render_state_matplotlib, render_trajectory
)


def run_simulation(
    sim: BrownianSimulation,
    n_frames: int = 2000,
    record_path=None
):
    """
    Run the tagged-particle simulation and plot a summary.

    Args:
        sim: Configured simulation
        n_frames: Number of frames (each is `substeps` physics steps)
        record_path: Optional CSV path for the tagged trajectory
    """
    print("=" * 60)
    print("Brownian Canvas - Tagged Particle Run")
    print("=" * 60)
    print(f"\n{sim.state.n_solvent} solvent particles, box {sim.config.size:.1f} nm, "
          f"T = {sim.params.temp:.1f} K, pull = {sim.params.force:.2f} pN")

    sim.submit(SetRecording(True))
    sim.submit(Start())

    times, kinetic, potential, total = [], [], [], []
    t_start = time.time()

    for frame in range(n_frames):
        sim.step()
        if frame % 20 == 0:
            state = sim.state
            ke = (kinetic_energy(state.vsol, sim.params.msol)
                  + kinetic_energy(state.vpar[None, :], sim.params.mpar))
            times.append(state.t)
            kinetic.append(ke)
            potential.append(sim.last_potential_energy)
            total.append(ke + sim.last_potential_energy)
            if frame % 500 == 0:
                print(f"  Frame {frame:5d}: t = {state.t:.4g} ns, T = {sim.temperature:.1f} K")

    t_end = time.time()
    steps = n_frames * sim.config.substeps
    print(f"\nSimulation completed in {t_end - t_start:.2f} seconds")
    print(f"Steps per second: {steps / (t_end - t_start):.1f}")

    state = sim.state
    displacement = state.unwrapped_position() - np.array([sim.config.size / 2.0] * 2)
    print(f"\nFinal State:")
    print(f"  Time:             {state.t:.4g} ns")
    print(f"  Temperature:      {sim.temperature:.1f} K")
    print(f"  Tagged offset:    ({state.offset[0]:.1f}, {state.offset[1]:.1f}) nm")
    print(f"  Net displacement: ({displacement[0]:.3f}, {displacement[1]:.3f}) nm")
    print(f"  Samples recorded: {len(sim.recorder)}")

    if record_path:
        sim.recorder.write_csv(record_path)
        print(f"\nTrajectory saved to {record_path}")

    fig, axes = plt.subplots(1, 3, figsize=(18, 6))
    render_state_matplotlib(state, sim.params, sim.config.size, ax=axes[0])
    render_trajectory(sim.recorder.as_array(), ax=axes[1])
    render_energy_plot(
        np.array(times), np.array(kinetic), np.array(potential), np.array(total), ax=axes[2]
    )
    plt.tight_layout()
    plt.savefig('brownian_run.png', dpi=150)
    print(f"\nPlot saved to brownian_run.png")
    plt.show()


def run_animation(sim: BrownianSimulation, n_frames: int = 300):
    """
    Animate the simulation frame by frame.

    Args:
        sim: Configured simulation
        n_frames: Number of animation frames
    """
    print("=" * 60)
    print("Brownian Canvas - Animation")
    print("=" * 60)

    sim.submit(Start())
    sim.process_commands()
    print(f"Creating animation with {n_frames} frames...")
    ani = create_animation(sim, n_frames)
    plt.show()
    return ani


def run_polymer_demo(
    temp: float = 310.0,
    n_steps: int = 2000,
    seed=None
):
    """
    Pull a bead-spring chain to a series of end-to-end separations and
    report the mean endpoint tension at each.
    """
    print("=" * 60)
    print("Brownian Canvas - Polymer Force-Extension")
    print("=" * 60)

    n_monomers = 64
    contour = 2.0 * 0.75 * (n_monomers - 1)
    dist = NormalDist()
    s0, s1 = (fixed_entropy(seed) if seed is not None else time_entropy)()
    dist.seed(s0, s1)

    polymer = Polymer.init(temp, 0.2 * contour, n_monomers=n_monomers)
    seps = np.linspace(0.2, 0.9, 8) * contour
    mean_forces = []
    dt = 1.0e-15

    for sep in seps:
        polymer.scale(sep)
        forces = []
        for _ in range(n_steps):
            polymer.step(dist, dt)
            forces.append(polymer.force[0])
        mean_forces.append(float(np.mean(forces)))
        print(f"  sep = {sep:7.2f} nm: <F_x> = {mean_forces[-1]:.4g} pN")

    fig, ax = plt.subplots(1, 1, figsize=(8, 5))
    ax.plot(seps, mean_forces, 'bo-')
    ax.set_xlabel('End-to-end separation (nm)')
    ax.set_ylabel('Mean endpoint force (pN)')
    ax.set_title('Force-Extension')
    ax.grid(True, alpha=0.3)
    plt.tight_layout()
    plt.savefig('polymer_force_extension.png', dpi=150)
    print(f"\nPlot saved to polymer_force_extension.png")
    plt.show()


def main():
    """Main entry point for CLI."""
    parser = argparse.ArgumentParser(
        description="Brownian Canvas - Tagged Particle in a 2D Soft-Sphere Solvent",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py --run                       Run and plot a summary
  python main.py --run --record traj.csv     Also save the trajectory
  python main.py --animate                   Animate the simulation
  python main.py --polymer                   Polymer force-extension demo
  python main.py --run --config sim.yaml     Use a YAML configuration
        """
    )

    parser.add_argument('--run', action='store_true',
                       help='Run the simulation and plot a summary')
    parser.add_argument('--animate', action='store_true',
                       help='Animate the simulation')
    parser.add_argument('--polymer', action='store_true',
                       help='Run the polymer force-extension demo')
    parser.add_argument('--frames', '-f', type=int, default=2000,
                       help='Number of frames (default: 2000)')
    parser.add_argument('--record', metavar='PATH',
                       help='Write the tagged trajectory to a CSV file')
    parser.add_argument('--config', metavar='PATH',
                       help='YAML configuration file')
    parser.add_argument('--seed', type=lambda s: int(s, 0),
                       help='Deterministic RNG seed (default: from the clock)')
    parser.add_argument('--log-level', default=None,
                       help='Logging level (default: INFO)')

    args = parser.parse_args()

    params, config, log_settings = Params(), SimulationConfig(), {}
    if args.config:
        bundle = load_config(args.config)
        params, config, log_settings = bundle.params, bundle.config, bundle.logging
    setup_logging(
        level=args.log_level or log_settings.get('level', 'INFO'),
        log_file=log_settings.get('log_file'),
        log_format=log_settings.get('log_format', DEFAULT_LOG_FORMAT),
    )

    entropy = fixed_entropy(args.seed) if args.seed is not None else time_entropy

    if args.run:
        sim = BrownianSimulation(params, config, entropy=entropy)
        run_simulation(sim, n_frames=args.frames, record_path=args.record)
    elif args.animate:
        sim = BrownianSimulation(params, config, entropy=entropy)
        run_animation(sim, n_frames=args.frames)
    elif args.polymer:
        run_polymer_demo(temp=params.temp, seed=args.seed)
    else:
        parser.print_help()
        print("\nNo action specified. Run with --run, --animate, or --polymer")


if __name__ == "__main__":
    main()
