# dtfegrid

`dtfegrid` turns a set of particles into fields sampled on a grid. It offers two
kinds of interpolation:

- **Mass assignment** to a regular grid: nearest grid point (`dtfegrid.ngp`),
  cloud in cell (`dtfegrid.cic`) and triangular shaped cloud (`dtfegrid.tsc`).
  These give the density and the mass-weighted velocity in each cell.
- **Linear interpolation on a Delaunay triangulation** (`dtfegrid.delaunay` and
  `dtfegrid.sampling`). Density, velocity and scalar values stored at the vertices
  are interpolated linearly inside each triangle or tetrahedron. The velocity and
  scalar gradients are constant within each cell. The fields can be sampled at the
  centres of a regular grid, on a redshift-cone grid, or at points you supply.

## Installation

```
pip install dtfegrid
```

## Modules

- `dtfegrid.box`: `Box` is an immutable axis-aligned box stored as
  `(xmin, xmax, ymin, ymax, ...)`. It provides:
  - `contains(point)`: accepts a coordinate sequence or any object with a
    `position`. The bounds count as inside.
  - `overlaps(other)`.
  - `translate(offset)` and `padded(padding)`: each returns a new box. `padding` is
    one number or `2*ndim` values, and negative values shrink the box.
  - `validate_sub_box(main_box, periodic)`: raises `InvalidBoxError` if the box does
    not fit the main box. A periodic main box allows up to one box length beyond
    it on each side.
  - `volume()`, `lengths()` and `is_null()`.
- `dtfegrid.particles`:
  - `Particle` holds a position, weight, density, velocity and scalar. The velocity
    defaults to zeros and the scalar to `SCALAR_COMPONENTS` zeros.
  - `SamplePoint` holds a position and a cell size `delta`.
  - `Vertex` is a `Particle` with padding-test flags. It provides
    `Vertex.from_particle`, `mark_dummy()` and `mark_dummy_neighbor()`.
- `dtfegrid.settings`:
  - `Options` holds the grid size, region, redshift cone, origin, average density
    and the two field selections. `u_field` selects the fields computed at the
    sampling points. `a_field` selects the fields produced by the mass-assignment
    schemes.
  - `Field` flags the quantities to compute.
  - `Method` names the interpolation schemes.
  - `Quantities` holds the results, one list entry per sampling point.
  - `InterpolationError` is raised for unsupported requests.
- `dtfegrid.ngp`:
  - `ngp_interpolation(particles, samples, options)` deposits particles into grid
    cells.
  - `ngp_particle_count(particles, grid_size, box)` returns the number of particles
    in each cell.
- `dtfegrid.cic`: `cic_interpolation(particles, samples, options)`.
- `dtfegrid.tsc`: `tsc_interpolation(particles, samples, options)`.
- `dtfegrid.delaunay`:
  - `VertexTriangulation(vertices)` builds the triangulation.
  - `locate(point)` returns the containing cell, or `None` if the point lies outside
    the triangulation.
  - `evaluate(point, field)` returns a `CellFields`. Gradients are flattened so that
    entry `i*ndim + j` is `d f_i / d x_j`. Points outside the triangulation get zeros.
- `dtfegrid.sampling`:
  - `interpolate_grid(triangulation, options)` samples at the cell centres of
    `options.region`, with the last axis varying fastest.
  - `interpolate_redshift_cone(triangulation, options)` samples a grid in spherical
    coordinates around `options.origin_position`. The angles in
    `options.redshift_cone` are given in degrees.
  - `interpolate_user_sampling(triangulation, samples, options)` samples at your
    points and skips those outside `options.region`.
  - If the triangulation has no full-dimensional cells, every sampling point gets
    zeros.

Results are ordered in row-major order, with the last axis varying fastest.

## Usage

Mass assignment with cloud in cell:

```python
from dtfegrid.box import Box
from dtfegrid.particles import Particle
from dtfegrid.settings import Field, Options
from dtfegrid.cic import cic_interpolation

particles = [Particle(position=(x, y, z), velocity=(vx, vy, vz))
             for (x, y, z), (vx, vy, vz) in zip(positions, velocities)]
options = Options(
    grid_size=(64, 64, 64),
    region=Box((0, 100, 0, 100, 0, 100)),
    a_field=Field(density=True, velocity=True),
    average_density=len(particles) / 100**3,
)
result = cic_interpolation(particles, [], options)
density = result.density      # normalised to the average density
velocity = result.velocity    # momentum / mass per cell, zero in empty cells
```

The density needs `average_density`; without it, `InterpolationError` is raised.
NGP, CIC and TSC work only on a regular grid. Passing sampling points, or setting
`redshift_cone_on`, raises `InterpolationError`.

Linear interpolation on a Delaunay triangulation:

```python
from dtfegrid.particles import Vertex
from dtfegrid.delaunay import VertexTriangulation
from dtfegrid.sampling import interpolate_grid

vertices = [Vertex.from_particle(p) for p in particles]
for vertex, rho in zip(vertices, vertex_densities):
    vertex.density = rho
triangulation = VertexTriangulation(vertices)
options = Options(
    grid_size=(32, 32, 32),
    region=Box((0, 100, 0, 100, 0, 100)),
    u_field=Field(density=True, velocity=True, velocity_gradient=True),
)
result = interpolate_grid(triangulation, options)
```

## What the package does not do

- It does not estimate densities at the vertices. You must set `Vertex.density`
  before building a `VertexTriangulation`.
- It does not compute the velocity divergence, shear or vorticity. The `Field`
  flags and `Quantities` lists for these exist but nothing fills them. The same
  applies to `velocity_std`.
- It does not average fields over sampling cells. The triangulation is sampled
  only at points.
- It provides no function that picks a scheme from `Options.method`, and no
  implementation of `Method.SPH`. Call the scheme's function directly.
- It does not pad the data, split it into partitions, or handle periodic
  boundaries.
- It does not read or write data files, and it has no command-line program.

## Running the tests

```
pip install dtfegrid[test]
pytest
```