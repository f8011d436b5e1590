"""Linear interpolation of vertex fields inside the cells of a Delaunay triangulation."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np
from scipy.spatial import Delaunay, QhullError

from .particles import Vertex
from .settings import Field


@dataclass
class CellFields:
    """Field values at one sampling point.

    Quantities that were not requested are None.  ``inside`` is False when the
    point lies outside the triangulation, in which case every requested
    quantity is zero.
    """

    inside: bool
    density: float | None = None
    velocity: np.ndarray | None = None
    velocity_gradient: np.ndarray | None = None
    scalar: np.ndarray | None = None
    scalar_gradient: np.ndarray | None = None


@dataclass(frozen=True)
class _Cell:
    base: int
    others: np.ndarray
    inverse: np.ndarray


class VertexTriangulation:
    """Delaunay triangulation of a set of vertices carrying density, velocity and scalar data.

    Inside every cell the fields vary linearly, so their gradients are constant
    per cell and are obtained from the differences between the cell's vertices.
    """

    def __init__(self, vertices: Sequence[Vertex]) -> None:
        self.vertices = list(vertices)
        if self.vertices:
            self.ndim = self.vertices[0].position.size
            if any(v.position.size != self.ndim for v in self.vertices):
                raise ValueError("All vertices must have the same number of coordinates.")
            self._positions = np.array([v.position for v in self.vertices], dtype=float)
            self._densities = np.array([v.density for v in self.vertices], dtype=float)
            self._velocities = np.array([v.velocity for v in self.vertices], dtype=float)
            scalar_sizes = {v.scalar.size for v in self.vertices}
            if len(scalar_sizes) != 1:
                raise ValueError("All vertices must have the same number of scalar components.")
            self._scalars = np.array([v.scalar for v in self.vertices], dtype=float)
        else:
            self.ndim = 0
            self._positions = np.empty((0, 0))
        self._delaunay: Delaunay | None = None
        if self.ndim >= 1 and len(self.vertices) >= self.ndim + 1:
            try:
                self._delaunay = Delaunay(self._positions)
            except QhullError:
                self._delaunay = None
        self._cells: dict[int, _Cell] = {}

    @property
    def number_of_vertices(self) -> int:
        """Number of vertices the triangulation was built from."""
        return len(self.vertices)

    @property
    def is_complete(self) -> bool:
        """True if the triangulation has full-dimensional cells."""
        return self._delaunay is not None

    def _as_point(self, point) -> np.ndarray:
        coords = np.asarray(getattr(point, "position", point), dtype=float).ravel()
        if coords.size != self.ndim:
            raise ValueError(
                f"Point has {coords.size} coordinates but the triangulation has {self.ndim}."
            )
        return coords

    def locate(self, point) -> int | None:
        """Return the index of the cell containing ``point``, or None if outside."""
        if self._delaunay is None:
            return None
        coords = self._as_point(point)
        simplex = int(self._delaunay.find_simplex(coords[None, :])[0])
        return None if simplex < 0 else simplex

    def _cell(self, simplex: int) -> _Cell:
        cell = self._cells.get(simplex)
        if cell is None:
            indices = self._delaunay.simplices[simplex]
            base, others = int(indices[0]), np.array(indices[1:])
            differences = self._positions[others] - self._positions[base]
            cell = _Cell(base, others, np.linalg.inv(differences))
            self._cells[simplex] = cell
        return cell

    def _zeros(self, field: Field) -> CellFields:
        ndim = self.ndim
        n_scalar = self._scalars.shape[1] if self.vertices else 0
        return CellFields(
            inside=False,
            density=0.0 if field.density else None,
            velocity=np.zeros(ndim) if field.velocity else None,
            velocity_gradient=np.zeros(ndim * ndim) if field.velocity_gradient else None,
            scalar=np.zeros(n_scalar) if field.scalar else None,
            scalar_gradient=np.zeros(ndim * n_scalar) if field.scalar_gradient else None,
        )

    def _gradient(self, cell: _Cell, values: np.ndarray) -> np.ndarray:
        """Gradient matrix whose entry ``[j, i]`` is d value_i / d x_j."""
        return cell.inverse @ (values[cell.others] - values[cell.base])

    def evaluate(self, point, field: Field) -> CellFields:
        """Interpolate the fields selected in ``field`` at ``point``.

        Gradients are returned flattened so that entry ``i*ndim + j`` holds
        ``d f_i / d x_j``.
        """
        simplex = self.locate(point)
        if simplex is None:
            return self._zeros(field)
        coords = self._as_point(point)
        cell = self._cell(simplex)
        relative = coords - self._positions[cell.base]
        result = CellFields(inside=True)

        if field.density:
            gradient = self._gradient(cell, self._densities)
            result.density = float(self._densities[cell.base] + relative @ gradient)

        if field.velocity or field.velocity_gradient:
            gradient = self._gradient(cell, self._velocities)
            if field.velocity:
                result.velocity = self._velocities[cell.base] + relative @ gradient
            if field.velocity_gradient:
                result.velocity_gradient = gradient.T.ravel()

        if field.scalar or field.scalar_gradient:
            gradient = self._gradient(cell, self._scalars)
            if field.scalar:
                result.scalar = self._scalars[cell.base] + relative @ gradient
            if field.scalar_gradient:
                result.scalar_gradient = gradient.T.ravel()

        return result