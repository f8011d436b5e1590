"""Interpolation settings and the containers for interpolated fields."""

from __future__ import annotations

import math
from dataclasses import dataclass, field as dataclass_field
from enum import Enum

from .box import Box


class InterpolationError(RuntimeError):
    """Raised when an interpolation cannot be carried out as requested."""


class Method(Enum):
    """The available field interpolation methods."""

    DTFE = "dtfe"
    NGP = "ngp"
    CIC = "cic"
    TSC = "tsc"
    SPH = "sph"


@dataclass
class Field:
    """Which quantities are to be computed."""

    density: bool = False
    velocity: bool = False
    velocity_gradient: bool = False
    velocity_divergence: bool = False
    velocity_shear: bool = False
    velocity_vorticity: bool = False
    velocity_std: bool = False
    scalar: bool = False
    scalar_gradient: bool = False

    def selected_velocity_derivatives(self) -> bool:
        """Return True if any quantity derived from the velocity gradient is selected."""
        return self.velocity_divergence or self.velocity_shear or self.velocity_vorticity

    def deselect_velocity_derivatives(self) -> None:
        """Turn off the divergence, shear and vorticity."""
        self.velocity_divergence = False
        self.velocity_shear = False
        self.velocity_vorticity = False


@dataclass
class Options:
    """Settings controlling an interpolation run.

    ``u_field`` selects the quantities evaluated at the sampling points and
    ``a_field`` those averaged over the sampling cells.  An
    ``average_density`` of None means it has to be derived from the data.
    """

    method: Method = Method.DTFE
    grid_size: tuple[int, ...] = (128, 128, 128)
    box_coordinates: Box = dataclass_field(default_factory=Box)
    region: Box = dataclass_field(default_factory=Box)
    padded_box: Box = dataclass_field(default_factory=Box)
    padding_length: float | tuple[float, ...] = 0.0
    periodic: bool = False
    region_on: bool = False
    partition: tuple[int, ...] = ()
    part_no: int = -1
    partition_on: bool = False
    u_field: Field = dataclass_field(default_factory=Field)
    a_field: Field = dataclass_field(default_factory=Field)
    average_density: float | None = None
    extensive: bool = False
    redshift_cone_on: bool = False
    redshift_cone: Box = dataclass_field(default_factory=Box)
    origin_position: tuple[float, ...] = (0.0, 0.0, 0.0)
    sph_neighbors: int = 40
    verbose_level: int = 2

    def __post_init__(self) -> None:
        self.grid_size = tuple(int(n) for n in self.grid_size)
        if any(n <= 0 for n in self.grid_size):
            raise ValueError("Every grid dimension must be a positive integer.")

    def total_grid(self) -> int:
        """Return the number of cells of the sampling grid."""
        return math.prod(self.grid_size)


@dataclass
class Quantities:
    """Interpolated fields, one entry per sampling point."""

    density: list = dataclass_field(default_factory=list)
    velocity: list = dataclass_field(default_factory=list)
    velocity_gradient: list = dataclass_field(default_factory=list)
    velocity_divergence: list = dataclass_field(default_factory=list)
    velocity_shear: list = dataclass_field(default_factory=list)
    velocity_vorticity: list = dataclass_field(default_factory=list)
    velocity_std: list = dataclass_field(default_factory=list)
    scalar: list = dataclass_field(default_factory=list)
    scalar_gradient: list = dataclass_field(default_factory=list)