"""Evaluation of triangulated fields at the points of a sampling grid.

The fields are taken at the sampling points themselves; they are not
averaged over the sampling cells.
"""

from __future__ import annotations

import itertools
import math
from collections.abc import Iterable, Sequence

import numpy as np

from .delaunay import CellFields, VertexTriangulation
from .particles import SCALAR_COMPONENTS, SamplePoint
from .settings import Field, Options, Quantities


def _scalar_components(triangulation: VertexTriangulation) -> int:
    if triangulation.vertices:
        return triangulation.vertices[0].scalar.size
    return SCALAR_COMPONENTS


def _zero_fields(field: Field, ndim: int, n_scalar: int) -> CellFields:
    return CellFields(
        inside=False,
        density=0.0 if field.density else None,
        velocity=np.zeros(ndim) if field.velocity else None,
        velocity_gradient=np.zeros(ndim * ndim) if field.velocity_gradient else None,
        scalar=np.zeros(n_scalar) if field.scalar else None,
        scalar_gradient=np.zeros(ndim * n_scalar) if field.scalar_gradient else None,
    )


def _append(quantities: Quantities, values: CellFields, field: Field) -> None:
    if field.density:
        quantities.density.append(values.density)
    if field.velocity:
        quantities.velocity.append(values.velocity)
    if field.velocity_gradient:
        quantities.velocity_gradient.append(values.velocity_gradient)
    if field.scalar:
        quantities.scalar.append(values.scalar)
    if field.scalar_gradient:
        quantities.scalar_gradient.append(values.scalar_gradient)


def _sample(
    triangulation: VertexTriangulation,
    points: Iterable,
    count: int,
    field: Field,
    ndim: int,
) -> Quantities:
    """Evaluate ``field`` at every point; zeros everywhere if the triangulation is degenerate."""
    quantities = Quantities()
    if not triangulation.is_complete:
        zeros = _zero_fields(field, ndim, _scalar_components(triangulation))
        for _ in range(count):
            _append(quantities, zeros, field)
        return quantities
    for point in points:
        _append(quantities, triangulation.evaluate(point, field), field)
    return quantities


def _cell_centres(bounds: Sequence[float], grid_size: Sequence[int]) -> list[np.ndarray]:
    return [
        lo + (np.arange(n) + 0.5) * (hi - lo) / n
        for lo, hi, n in zip(bounds[::2], bounds[1::2], grid_size)
    ]


def interpolate_grid(triangulation: VertexTriangulation, options: Options) -> Quantities:
    """Evaluate the fields of ``options.u_field`` at the centres of a regular grid.

    The grid covers ``options.region`` with ``options.grid_size`` cells; the
    results are ordered with the last axis varying fastest.
    """
    grid_size = options.grid_size
    ndim = len(grid_size)
    box = options.region
    if box.ndim != ndim:
        raise ValueError(f"The grid has {ndim} dimensions but the region has {box.ndim}.")
    axes = _cell_centres(box.coords, grid_size)
    points = (np.array(p) for p in itertools.product(*axes))
    return _sample(triangulation, points, options.total_grid(), options.u_field, ndim)


def _cone_to_cartesian(r: float, angles: Sequence[float], origin: np.ndarray) -> np.ndarray:
    if len(angles) == 1:
        (theta,) = angles
        return origin + np.array([r * math.cos(theta), r * math.sin(theta)])
    theta, psi = angles
    return origin + np.array(
        [
            r * math.sin(theta) * math.cos(psi),
            r * math.sin(theta) * math.sin(psi),
            r * math.cos(theta),
        ]
    )


def interpolate_redshift_cone(
    triangulation: VertexTriangulation, options: Options
) -> Quantities:
    """Evaluate the fields on a grid in spherical coordinates around ``options.origin_position``.

    ``options.redshift_cone`` holds the radial range followed by the angular
    ranges in degrees: ``psi`` in two dimensions, ``theta`` and ``psi`` in
    three.  The results are ordered with the last coordinate varying fastest.
    """
    grid_size = options.grid_size
    ndim = len(grid_size)
    if ndim not in (2, 3):
        raise ValueError("A redshift cone grid needs two or three dimensions.")
    cone = options.redshift_cone
    if cone.ndim != ndim:
        raise ValueError(
            f"The grid has {ndim} dimensions but the redshift cone has {cone.ndim}."
        )
    origin = np.array(options.origin_position[:ndim], dtype=float)
    if origin.size != ndim:
        raise ValueError(f"The origin must have {ndim} coordinates.")
    bounds = list(cone.coords[:2]) + [math.radians(a) for a in cone.coords[2:]]
    axes = _cell_centres(bounds, grid_size)
    points = (
        _cone_to_cartesian(float(r), [float(a) for a in angles], origin)
        for r, *angles in itertools.product(*axes)
    )
    return _sample(triangulation, points, options.total_grid(), options.u_field, ndim)


def interpolate_user_sampling(
    triangulation: VertexTriangulation,
    samples: Sequence[SamplePoint],
    options: Options,
) -> Quantities:
    """Evaluate the fields at user supplied sampling points.

    Points outside ``options.region`` are skipped.  If the triangulation has
    no full-dimensional cells, every sample gets zero values.
    """
    ndim = options.region.ndim
    inside = (s for s in samples if options.region.contains(s))
    return _sample(triangulation, inside, len(samples), options.u_field, ndim)