"""Axis-aligned boxes stored as ``(xmin, xmax, ymin, ymax, ...)``."""

from __future__ import annotations

import math
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from numbers import Real


class InvalidBoxError(ValueError):
    """Raised when a box does not satisfy the constraints placed on it."""


@dataclass(frozen=True)
class Box:
    """A rectangular region given by its lower and upper bound on each axis."""

    coords: tuple[float, ...] = (0.0,) * 6

    def __post_init__(self) -> None:
        coords = tuple(float(c) for c in self.coords)
        if not coords or len(coords) % 2:
            raise InvalidBoxError(
                "A box needs a lower and an upper bound for every axis; "
                f"got {len(coords)} coordinates."
            )
        object.__setattr__(self, "coords", coords)

    @property
    def ndim(self) -> int:
        """Number of spatial dimensions of the box."""
        return len(self.coords) // 2

    def __getitem__(self, index: int) -> float:
        return self.coords[index]

    def __len__(self) -> int:
        return len(self.coords)

    def __iter__(self) -> Iterator[float]:
        return iter(self.coords)

    def _bounds(self) -> Iterator[tuple[float, float]]:
        return zip(self.coords[::2], self.coords[1::2])

    def contains(self, point) -> bool:
        """Return True if a point (or anything with a ``position``) lies inside, bounds included."""
        position = tuple(getattr(point, "position", point))
        if len(position) < self.ndim:
            raise ValueError(
                f"Point has {len(position)} coordinates but the box has {self.ndim} axes."
            )
        return all(lo <= x <= hi for (lo, hi), x in zip(self._bounds(), position))

    def overlaps(self, other: Box) -> bool:
        """Return True if the two boxes share at least one point."""
        self._check_same_dimension(other)
        return all(
            o_lo <= hi and o_hi >= lo
            for (lo, hi), (o_lo, o_hi) in zip(self._bounds(), other._bounds())
        )

    def translate(self, offset: Sequence[float]) -> Box:
        """Return the box shifted by ``offset`` along each axis."""
        offset = tuple(offset)
        if len(offset) != self.ndim:
            raise ValueError(f"Offset must have {self.ndim} components.")
        shifted = []
        for (lo, hi), delta in zip(self._bounds(), offset):
            shifted.extend((lo + delta, hi + delta))
        return Box(tuple(shifted))

    def padded(self, padding) -> Box:
        """Return the box grown by ``padding`` on each edge.

        ``padding`` is either one number for every edge or a sequence of
        ``2*ndim`` values ordered like the box coordinates.  Negative values
        shrink the box.
        """
        if isinstance(padding, Real):
            padding = (float(padding),) * len(self.coords)
        padding = tuple(padding)
        if len(padding) != len(self.coords):
            raise ValueError(f"Padding must have {len(self.coords)} values.")
        grown = []
        for (lo, hi), below, above in zip(self._bounds(), padding[::2], padding[1::2]):
            grown.extend((lo - below, hi + above))
        return Box(tuple(grown))

    def validate_sub_box(self, main_box: Box, periodic: bool) -> None:
        """Check that this box is usable as a sub-region of ``main_box``.

        For periodic data the box may extend at most one box length beyond
        the main box on each side; otherwise it must lie inside the main box.
        """
        self._check_same_dimension(main_box)
        pairs = zip(self._bounds(), main_box._bounds())
        if periodic:
            for (lo, hi), (m_lo, m_hi) in pairs:
                if lo < 2 * m_lo - m_hi:
                    raise InvalidBoxError(
                        "The padded box selected by you must have left boundaries at most "
                        "'-boxLength' along each axis from the main data box."
                    )
                if hi > 2 * m_hi - m_lo:
                    raise InvalidBoxError(
                        "The box selected by you must have right boundaries at most "
                        "'+boxLength' along each axis from the main data box."
                    )
        else:
            for (lo, hi), (m_lo, m_hi) in pairs:
                if lo < m_lo or hi > m_hi:
                    raise InvalidBoxError(
                        "The padded box selected by you must fit inside the main data box "
                        "since the particle positions are NOT PERIODIC. Choose a new box "
                        "inside the main box or choose periodic computations."
                    )

    def volume(self) -> float:
        """Return the volume (area in two dimensions) of the box."""
        return math.prod(self.lengths())

    def lengths(self) -> tuple[float, ...]:
        """Return the extent of the box along each axis."""
        return tuple(hi - lo for lo, hi in self._bounds())

    def is_null(self) -> bool:
        """Return True if every coordinate is zero, i.e. no box was specified."""
        return all(c == 0.0 for c in self.coords)

    def __str__(self) -> str:
        return "{" + ",".join(f"[{lo:g},{hi:g}]" for lo, hi in self._bounds()) + "}"

    def _check_same_dimension(self, other: Box) -> None:
        if other.ndim != self.ndim:
            raise InvalidBoxError(
                f"Cannot compare a {self.ndim}-dimensional box with a "
                f"{other.ndim}-dimensional one."
            )