"""Triangular-shaped-cloud assignment of particle mass and velocity to a regular grid."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from .cic import _assign_to_grid
from .particles import Particle
from .settings import Options, Quantities


def _tsc_kernel(offset: np.ndarray) -> np.ndarray:
    """Quadratic weights of the cells below, at and above each particle per axis."""
    return np.stack(
        (
            0.5 * (0.5 - offset) ** 2,
            0.75 - offset**2,
            0.5 * (0.5 + offset) ** 2,
        ),
        axis=-1,
    )


def tsc_interpolation(
    particles: Sequence[Particle],
    samples: Sequence,
    options: Options,
) -> Quantities:
    """Interpolate density and velocity to the grid with the triangular-shaped-cloud scheme.

    Only a regular rectangular grid is supported; user sampling points or a
    redshift cone raise :class:`InterpolationError`.
    """
    return _assign_to_grid(particles, samples, options, _tsc_kernel, "TSC")