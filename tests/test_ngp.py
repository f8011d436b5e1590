import numpy as np
import pytest

from dtfegrid.box import Box
from dtfegrid.ngp import ngp_interpolation, ngp_particle_count
from dtfegrid.particles import Particle, SamplePoint
from dtfegrid.settings import Field, InterpolationError, Options


def _options(**kwargs):
    defaults = dict(
        grid_size=(2, 2),
        region=Box((0.0, 2.0, 0.0, 2.0)),
        a_field=Field(density=True, velocity=True),
        average_density=1.0,
    )
    defaults.update(kwargs)
    return Options(**defaults)


def _particles():
    return [
        Particle([0.5, 0.5], weight=2.0, velocity=[1.0, -1.0]),
        Particle([1.5, 0.5], weight=1.0, velocity=[3.0, 2.0]),
        Particle([1.5, 1.5], weight=1.0, velocity=[0.0, 4.0]),
        Particle([3.0, 3.0], weight=5.0, velocity=[9.0, 9.0]),
    ]


def test_particle_count():
    counts = ngp_particle_count(_particles(), (2, 2), Box((0.0, 2.0, 0.0, 2.0)))
    assert counts == [1, 0, 1, 1]


def test_particle_count_excludes_upper_edge():
    particles = [Particle([2.0, 1.0]), Particle([0.0, 0.0])]
    counts = ngp_particle_count(particles, (2, 2), Box((0.0, 2.0, 0.0, 2.0)))
    assert sum(counts) == 1
    assert counts[0] == 1


def test_particle_count_empty():
    counts = ngp_particle_count([], (3, 2), Box((0.0, 1.0, 0.0, 1.0)))
    assert counts == [0] * 6


def test_density_matches_mass_per_cell():
    particles = _particles()
    options = _options()
    result = ngp_interpolation(particles, [], options)
    counts = ngp_particle_count(particles, (2, 2), options.region)
    weights_per_cell = np.zeros(4)
    for p in particles[:3]:
        weights_per_cell[counts.index(1) if False else 0] += 0
    # cell volume is 1 and average density 1, so density equals mass in each cell
    assert np.allclose(result.density, [2.0, 0.0, 1.0, 1.0])
    assert sum(result.density) == pytest.approx(sum(p.weight for p in particles[:3]))


def test_velocity_is_mass_weighted_and_zero_in_empty_cells():
    particles = [
        Particle([0.2, 0.2], weight=1.0, velocity=[2.0, 3.0]),
        Particle([0.7, 0.9], weight=4.0, velocity=[2.0, 3.0]),
    ]
    result = ngp_interpolation(particles, [], _options())
    assert np.allclose(result.velocity[0], [2.0, 3.0])
    for cell in result.velocity[1:]:
        assert np.allclose(cell, 0.0)


def test_density_not_requested_is_empty():
    options = _options(a_field=Field(velocity=True))
    result = ngp_interpolation(_particles(), [], options)
    assert result.density == []
    assert len(result.velocity) == 4


def test_velocity_not_requested_is_empty():
    options = _options(a_field=Field(density=True))
    result = ngp_interpolation(_particles(), [], options)
    assert result.velocity == []
    assert len(result.density) == 4


def test_density_normalisation_scales_with_average_density():
    base = ngp_interpolation(_particles(), [], _options(average_density=1.0))
    halved = ngp_interpolation(_particles(), [], _options(average_density=2.0))
    assert np.allclose(np.array(base.density) / 2.0, halved.density)


def test_missing_average_density_raises():
    with pytest.raises(InterpolationError):
        ngp_interpolation(_particles(), [], _options(average_density=None))


def test_user_samples_rejected():
    with pytest.raises(InterpolationError):
        ngp_interpolation(_particles(), [SamplePoint([0.5, 0.5])], _options())


def test_redshift_cone_rejected():
    with pytest.raises(InterpolationError):
        ngp_interpolation(_particles(), [], _options(redshift_cone_on=True))


def test_three_dimensional_mass_conservation():
    rng = np.random.default_rng(3)
    particles = [Particle(rng.uniform(0.0, 4.0, size=3), weight=1.5) for _ in range(50)]
    options = Options(
        grid_size=(4, 4, 4),
        region=Box((0.0, 4.0, 0.0, 4.0, 0.0, 4.0)),
        a_field=Field(density=True),
        average_density=1.0,
    )
    result = ngp_interpolation(particles, [], options)
    assert len(result.density) == 64
    assert sum(result.density) == pytest.approx(1.5 * 50)


def test_dimension_mismatch_raises():
    with pytest.raises(ValueError):
        ngp_particle_count(_particles(), (2, 2, 2), Box((0.0, 2.0, 0.0, 2.0)))