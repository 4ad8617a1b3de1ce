#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
================================================================================
Matplotlib Rendering
================================================================================

Project:        Brownian Canvas
Module:         visualization.py

Author:         Ryan Kamp
Affiliation:    University of Cincinnati Department of Computer Science
Email:          kamprj@mail.uc.edu
GitHub:         https://github.com/ryanjosephkamp

Created:        February 3, 2026
Last Updated:   February 3, 2026

License:        MIT License
================================================================================

This module draws the simulation with Matplotlib:
- Solvent and tagged disks in data units (EllipseCollection)
- Backend-independent graphics (circles, polygons, lines, Bezier chains)
- Recorded trajectories and energy traces
- A draw callback and an animation driven by BrownianSimulation
"""

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.collections import EllipseCollection
from matplotlib.path import Path as MplPath
from matplotlib.patches import Circle as CirclePatch, PathPatch, Polygon as PolygonPatch
import matplotlib.animation as animation
from functools import singledispatch
from typing import List, Optional, Tuple, Union
from dataclasses import dataclass

from .graphics import BEZIER_CIRCLE, Bezier, Circle, Graphic, GraphicCollection, Line, Polygon
from .physics import Params
from .simulation import BrownianSimulation, State
from .vector import Point, Transform2D


@dataclass
class VisualizationConfig:
    """Configuration for visualization."""
    solvent_color: str = "#4c9be8"
    tagged_color: str = "#e63946"
    edge_color: str = "white"
    background_color: str = "#1a1a2e"
    show_box: bool = True
    figsize: Tuple[int, int] = (8, 8)


def _setup_axes(ax: Optional[plt.Axes], config: VisualizationConfig):
    if ax is None:
        fig = plt.figure(figsize=config.figsize)
        ax = fig.add_axes([0, 0, 1, 1])  # Full figure, no margins
    else:
        fig = ax.figure
    return fig, ax


def _draw_disks(
    ax: plt.Axes,
    tagged: Circle,
    solvent: List[Circle],
    size: float,
    config: VisualizationConfig
) -> None:
    ax.clear()
    ax.set_facecolor(config.background_color)
    ax.figure.patch.set_facecolor(config.background_color)

    if solvent:
        offsets = np.array([[c.center.x, c.center.y] for c in solvent])
        diameters = np.array([2.0 * c.radius for c in solvent])
        ax.add_collection(EllipseCollection(
            diameters, diameters, np.zeros(len(solvent)),
            units='xy', offsets=offsets, offset_transform=ax.transData,
            facecolors=config.solvent_color, edgecolors=config.edge_color,
            linewidths=0.3,
        ))
    ax.add_patch(CirclePatch(
        (tagged.center.x, tagged.center.y), tagged.radius,
        facecolor=config.tagged_color, edgecolor=config.edge_color, linewidth=0.5,
    ))

    margin = size * 0.02
    ax.set_xlim(-margin, size + margin)
    ax.set_ylim(-margin, size + margin)
    ax.set_aspect('equal')

    if config.show_box:
        ax.plot([0, size, size, 0, 0], [0, 0, size, size, 0],
                'white', linewidth=1.5, alpha=0.5)

    ax.set_xticks([])
    ax.set_yticks([])
    ax.axis('off')


def render_state_matplotlib(
    state: State,
    params: Params,
    size: float,
    config: Optional[VisualizationConfig] = None,
    ax: Optional[plt.Axes] = None
) -> plt.Figure:
    """
    Render the tagged particle and the solvent.

    Args:
        state: Simulation snapshot
        params: Supplies the disk radii
        size: Side of the periodic box (nm)
        config: Visualization configuration
        ax: Optional existing axes to draw on

    Returns:
        Matplotlib figure
    """
    if config is None:
        config = VisualizationConfig()
    fig, ax = _setup_axes(ax, config)

    tagged = Circle(Point.from_array(state.rpar), params.rad_par)
    solvent = [Circle(Point(float(x), float(y)), params.rad_sol) for x, y in state.rsol]
    _draw_disks(ax, tagged, solvent, size, config)
    return fig


def make_draw_callback(
    ax: plt.Axes,
    size: float,
    config: Optional[VisualizationConfig] = None
):
    """Draw callback for BrownianSimulation that repaints `ax` every frame."""
    config = config or VisualizationConfig()

    def draw(tagged: Circle, solvent: List[Circle]) -> None:
        _draw_disks(ax, tagged, solvent, size, config)

    return draw


# ---------------------------------------------------------------------------
# Graphics primitives
# ---------------------------------------------------------------------------

def _apply(points, transform: Optional[Transform2D]) -> np.ndarray:
    if transform is not None:
        points = [transform(p) for p in points]
    return np.array([[p.x, p.y] for p in points])


@singledispatch
def _geometry_patch(geometry, transform, style):
    raise TypeError(f"cannot render {type(geometry).__name__}")


@_geometry_patch.register
def _(geometry: Circle, transform, style):
    if transform is None:
        return CirclePatch((geometry.center.x, geometry.center.y), geometry.radius, **style)
    # Render the circle as its four-segment Bezier so the transform is exact.
    c = BEZIER_CIRCLE
    r = geometry.radius
    unit = [
        Point(1, 0), Point(1, c), Point(c, 1), Point(0, 1),
        Point(-c, 1), Point(-1, c), Point(-1, 0),
        Point(-1, -c), Point(-c, -1), Point(0, -1),
        Point(c, -1), Point(1, -c), Point(1, 0),
    ]
    points = [geometry.center + p * r for p in unit]
    return _geometry_patch(Bezier(tuple(points)), transform, style)


@_geometry_patch.register
def _(geometry: Polygon, transform, style):
    return PolygonPatch(_apply(geometry.points, transform), closed=True, **style)


@_geometry_patch.register
def _(geometry: Line, transform, style):
    return PolygonPatch(_apply(geometry.points, transform), closed=False, **style)


@_geometry_patch.register
def _(geometry: Bezier, transform, style):
    vertices = _apply(geometry.points, transform)
    codes = [MplPath.MOVETO] + [MplPath.CURVE4] * (len(vertices) - 1)
    return PathPatch(MplPath(vertices, codes), **style)


def render_graphic(
    graphic: Union[Graphic, GraphicCollection],
    ax: plt.Axes,
    transform: Optional[Transform2D] = None
) -> None:
    """
    Add a Graphic (or a GraphicCollection) to `ax`.

    A collection's transform is applied after each element's own one.
    """
    if isinstance(graphic, GraphicCollection):
        for element in graphic.elements:
            t = graphic.transform
            if transform is not None:
                t = transform if t is None else t.combine_left(transform)
            render_graphic(element, ax, t)
        return

    t = graphic.transform
    if transform is not None:
        t = transform if t is None else t.combine_left(transform)
    style = {
        "facecolor": graphic.color if graphic.fill else "none",
        "edgecolor": graphic.color,
        "linewidth": graphic.line_width,
        "fill": graphic.fill,
    }
    ax.add_patch(_geometry_patch(graphic.geometry, t, style))


def render_trajectory(
    samples: np.ndarray,
    ax: Optional[plt.Axes] = None
) -> plt.Figure:
    """
    Plot a recorded (t, x, y) trajectory.

    Args:
        samples: Kx3 array from TrajectoryRecorder.as_array()
        ax: Optional existing axes

    Returns:
        Matplotlib figure
    """
    if ax is None:
        fig, ax = plt.subplots(1, 1, figsize=(6, 6))
    else:
        fig = ax.figure

    ax.clear()
    if len(samples) > 0:
        ax.plot(samples[:, 1], samples[:, 2], 'k-', linewidth=1, alpha=0.7)
        ax.plot(samples[0, 1], samples[0, 2], 'go', markersize=6, label='Start')
        ax.plot(samples[-1, 1], samples[-1, 2], 'ro', markersize=6, label='End')
        ax.legend(loc='best')
    ax.set_xlabel('x (nm)')
    ax.set_ylabel('y (nm)')
    ax.set_title('Tagged Particle Trajectory')
    ax.set_aspect('equal', adjustable='datalim')
    ax.grid(True, alpha=0.3)
    return fig


def render_energy_plot(
    times: np.ndarray,
    kinetic: np.ndarray,
    potential: np.ndarray,
    total: np.ndarray,
    ax: Optional[plt.Axes] = None
) -> plt.Figure:
    """
    Render energy vs time plot.

    Args:
        times: Time array (ns)
        kinetic: Kinetic energy array (pN·nm)
        potential: Potential energy array (pN·nm)
        total: Total energy array (pN·nm)
        ax: Optional existing axes

    Returns:
        Matplotlib figure
    """
    if ax is None:
        fig, ax = plt.subplots(1, 1, figsize=(10, 4))
    else:
        fig = ax.figure

    ax.clear()
    ax.plot(times, kinetic, 'r-', label='Kinetic', linewidth=1.5)
    ax.plot(times, potential, 'b-', label='Potential', linewidth=1.5)
    ax.plot(times, total, 'k-', label='Total', linewidth=2)

    ax.set_xlabel('Time (ns)')
    ax.set_ylabel('Energy (pN·nm)')
    ax.set_title('Energy vs Time')
    ax.legend(loc='best')
    ax.grid(True, alpha=0.3)

    return fig


def create_animation(
    simulation: BrownianSimulation,
    n_frames: int,
    config: Optional[VisualizationConfig] = None,
    fps: int = 30
) -> animation.FuncAnimation:
    """
    Animate a running simulation; each animation frame advances one
    simulation frame.
    """
    if config is None:
        config = VisualizationConfig()

    fig, ax = plt.subplots(1, 1, figsize=config.figsize)
    simulation.draw = make_draw_callback(ax, simulation.config.size, config)

    def update(frame):
        simulation.advance_frame()
        return ax,

    ani = animation.FuncAnimation(
        fig, update, frames=n_frames,
        interval=1000 / fps, blit=False
    )

    return ani
