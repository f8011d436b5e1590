"""Cloud-in-cell assignment of particle mass and velocity to a regular grid."""

from __future__ import annotations

import itertools
from collections.abc import Callable, Sequence

import numpy as np

from .particles import Particle
from .settings import InterpolationError, Options, Quantities

Kernel = Callable[[np.ndarray], np.ndarray]


def _cic_kernel(offset: np.ndarray) -> np.ndarray:
    """Weights of the cells below, at and above each particle along every axis.

    ``offset`` is the distance of the particle from the centre of its cell,
    in units of the cell size, shape ``(N, ndim)``; the result has shape
    ``(N, ndim, 3)``.
    """
    return np.stack(
        (np.maximum(-offset, 0.0), 1.0 - np.abs(offset), np.maximum(offset, 0.0)),
        axis=-1,
    )


def _assign_to_grid(
    particles: Sequence[Particle],
    samples: Sequence,
    options: Options,
    kernel: Kernel,
    name: str,
) -> Quantities:
    """Spread particle mass and momentum over the grid of ``options.region``.

    Every particle contributes to the three nearest cells along each axis with
    the weights given by ``kernel``; contributions falling outside the grid are
    dropped.  The velocity of a cell is its momentum divided by its mass (zero
    for empty cells) and the density is normalised by the cell volume and the
    average density.
    """
    if samples or options.redshift_cone_on:
        raise InterpolationError(
            f"The {name} method can interpolate the fields only on a regular "
            f"rectangular grid. No {name} interpolation methods are implemented for "
            "redshift cone coordinates or for user defined sample points."
        )

    grid_size = tuple(options.grid_size)
    grid = np.array(grid_size)
    ndim = len(grid_size)
    total = options.total_grid()
    box = options.region
    if box.ndim != ndim:
        raise ValueError(f"The grid has {ndim} dimensions but the box has {box.ndim}.")
    fields = options.a_field

    lower = np.array(box.coords[::2])
    spacing = np.array(box.lengths()) / grid
    outer = box.padded(tuple(np.repeat(spacing, 2)))
    selected = [p for p in particles if outer.contains(p)]

    mass = np.zeros(total)
    momentum = np.zeros((total, ndim))
    if selected:
        positions = np.array([p.position[:ndim] for p in selected], dtype=float)
        weights = np.array([p.weight for p in selected], dtype=float)
        velocities = np.array([p.velocity[:ndim] for p in selected], dtype=float)

        scaled = (positions - lower) / spacing
        base = np.floor(scaled).astype(int)
        kernel_weights = kernel(scaled - base - 0.5)
        axes = np.arange(ndim)

        for shifts in itertools.product(range(3), repeat=ndim):
            shift = np.array(shifts)
            cells = base + shift - 1
            contribution = weights * np.prod(kernel_weights[:, axes, shift], axis=1)
            valid = np.all((cells >= 0) & (cells < grid), axis=1)
            if not valid.any():
                continue
            flat = np.ravel_multi_index(tuple(cells[valid].T), grid_size)
            np.add.at(mass, flat, contribution[valid])
            np.add.at(momentum, flat, velocities[valid] * contribution[valid, None])

    result = Quantities()
    if fields.velocity:
        velocity = np.zeros_like(momentum)
        occupied = mass != 0.0
        velocity[occupied] = momentum[occupied] / mass[occupied, None]
        result.velocity = list(velocity)

    if fields.density:
        if options.average_density is None:
            raise InterpolationError(
                f"The average density must be known to normalise the {name} density."
            )
        factor = total / box.volume() / options.average_density
        result.density = (mass * factor).tolist()

    return result


def cic_interpolation(
    particles: Sequence[Particle],
    samples: Sequence,
    options: Options,
) -> Quantities:
    """Interpolate density and velocity to the grid with the cloud-in-cell scheme.

    Only a regular rectangular grid is supported; user sampling points or a
    redshift cone raise :class:`InterpolationError`.
    """
    return _assign_to_grid(particles, samples, options, _cic_kernel, "CIC")