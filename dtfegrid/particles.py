"""Particles, user sampling points and triangulation vertices."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

SCALAR_COMPONENTS = 1
"""Number of components carried by the scalar field of each particle."""


def _vector(values, name: str) -> np.ndarray:
    array = np.array(values, dtype=float, ndmin=1)
    if array.ndim != 1:
        raise ValueError(f"{name} must be a one-dimensional sequence of numbers.")
    return array


@dataclass(eq=False)
class Particle:
    """A point with a position, a weight and the fields carried by it.

    The velocity has one component per spatial dimension and defaults to
    zero; the scalar has ``SCALAR_COMPONENTS`` components.
    """

    position: np.ndarray
    weight: float = 1.0
    density: float = 0.0
    velocity: np.ndarray | None = None
    scalar: np.ndarray | None = None

    def __post_init__(self) -> None:
        self.position = _vector(self.position, "position")
        ndim = self.position.size
        if self.velocity is None:
            self.velocity = np.zeros(ndim)
        else:
            self.velocity = _vector(self.velocity, "velocity")
            if self.velocity.size != ndim:
                raise ValueError(
                    f"velocity has {self.velocity.size} components, expected {ndim}."
                )
        if self.scalar is None:
            self.scalar = np.zeros(SCALAR_COMPONENTS)
        else:
            self.scalar = _vector(self.scalar, "scalar")
        self.weight = float(self.weight)
        self.density = float(self.density)


@dataclass(eq=False)
class SamplePoint:
    """A user supplied sampling position and the size of its sampling cell."""

    position: np.ndarray
    delta: np.ndarray | None = None

    def __post_init__(self) -> None:
        self.position = _vector(self.position, "position")
        if self.delta is None:
            self.delta = np.zeros(self.position.size)
        else:
            self.delta = _vector(self.delta, "delta")
            if self.delta.size != self.position.size:
                raise ValueError(
                    f"delta has {self.delta.size} components, "
                    f"expected {self.position.size}."
                )


@dataclass(eq=False)
class Vertex(Particle):
    """A triangulation vertex: particle data plus padding-test flags."""

    dummy: bool = False
    dummy_neighbor: bool = False

    @classmethod
    def from_particle(cls, particle: Particle) -> Vertex:
        """Build a vertex holding a copy of the particle's data."""
        return cls(
            position=particle.position.copy(),
            weight=particle.weight,
            density=particle.density,
            velocity=particle.velocity.copy(),
            scalar=particle.scalar.copy(),
        )

    def mark_dummy(self) -> None:
        """Flag the vertex as a padding test point; its density becomes zero."""
        self.dummy = True
        self.dummy_neighbor = True
        self.density = 0.0

    def mark_dummy_neighbor(self) -> None:
        """Flag the vertex as having a padding test point among its neighbours."""
        self.dummy_neighbor = True