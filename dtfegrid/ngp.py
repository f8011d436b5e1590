"""Nearest-grid-point assignment of particle mass and velocity to a regular grid."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from .box import Box
from .particles import Particle
from .settings import InterpolationError, Options, Quantities


def _positions(particles: Sequence[Particle], ndim: int) -> np.ndarray:
    if not particles:
        return np.empty((0, ndim))
    positions = np.array([p.position[:ndim] for p in particles], dtype=float)
    if positions.shape[1] != ndim:
        raise ValueError(f"Particles must have at least {ndim} coordinates.")
    return positions


def _cell_indices(
    positions: np.ndarray, grid_size: tuple[int, ...], box: Box
) -> tuple[np.ndarray, np.ndarray]:
    """Return the flat cell index of every particle inside the grid and a mask of those."""
    ndim = len(grid_size)
    if box.ndim != ndim:
        raise ValueError(
            f"The grid has {ndim} dimensions but the box has {box.ndim}."
        )
    lower = np.array(box.coords[::2])
    spacing = np.array(box.lengths()) / np.array(grid_size)
    cells = np.floor((positions - lower) / spacing).astype(int)
    valid = np.all((cells >= 0) & (cells < np.array(grid_size)), axis=1)
    flat = np.ravel_multi_index(tuple(cells[valid].T), grid_size) if valid.any() \
        else np.empty(0, dtype=int)
    return flat, valid


def ngp_interpolation(
    particles: Sequence[Particle],
    samples: Sequence,
    options: Options,
) -> Quantities:
    """Assign density and velocity to the cells of ``options.region``.

    Each particle deposits its whole weight into the cell holding it.  The
    velocity of a cell is its momentum divided by its mass, zero for empty
    cells.  The density is normalised by the cell volume and the average
    density.  Only a regular grid is supported.
    """
    if samples or options.redshift_cone_on:
        raise InterpolationError(
            "The NGP method can interpolate the fields only on a regular rectangular "
            "grid. No NGP interpolation methods are implemented for redshift cone "
            "coordinates or for user defined sample points."
        )

    grid_size = tuple(options.grid_size)
    ndim = len(grid_size)
    total = options.total_grid()
    box = options.region
    fields = options.a_field

    positions = _positions(particles, ndim)
    flat, valid = _cell_indices(positions, grid_size, box)
    inside = [p for p, ok in zip(particles, valid) if ok]
    weights = np.array([p.weight for p in inside], dtype=float)

    mass = np.bincount(flat, weights=weights, minlength=total).astype(float)
    result = Quantities()

    if fields.velocity:
        momentum = np.zeros((total, ndim))
        if inside:
            velocities = np.array([p.velocity[:ndim] for p in inside], dtype=float)
            for axis in range(ndim):
                momentum[:, axis] = np.bincount(
                    flat, weights=velocities[:, axis] * weights, minlength=total
                )
        occupied = mass != 0.0
        velocity = np.zeros_like(momentum)
        velocity[occupied] = momentum[occupied] / mass[occupied, None]
        result.velocity = list(velocity)

    if fields.density:
        if options.average_density is None:
            raise InterpolationError(
                "The average density must be known to normalise the NGP density."
            )
        factor = total / box.volume() / options.average_density
        result.density = (mass * factor).tolist()

    return result


def ngp_particle_count(
    particles: Sequence[Particle],
    grid_size: Sequence[int],
    box: Box,
) -> list[int]:
    """Return how many particles fall into each cell of a regular grid over ``box``."""
    grid_size = tuple(int(n) for n in grid_size)
    total = int(np.prod(grid_size))
    positions = _positions(particles, len(grid_size))
    flat, _ = _cell_indices(positions, grid_size, box)
    return np.bincount(flat, minlength=total).astype(int).tolist()