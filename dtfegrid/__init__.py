"""Grid interpolation of particle data by NGP, CIC and TSC mass assignment and by linear interpolation on a Delaunay triangulation."""

__version__ = "0.1.0"

__all__ = [
    "box",
    "particles",
    "settings",
    "ngp",
    "cic",
    "tsc",
    "delaunay",
    "sampling",
]