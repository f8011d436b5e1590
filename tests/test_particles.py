import numpy as np
import pytest

from dtfegrid.particles import SCALAR_COMPONENTS, Particle, SamplePoint, Vertex


def test_particle_defaults():
    p = Particle(position=(1.0, 2.0, 3.0))
    assert p.weight == 1.0
    assert p.density == 0.0
    assert np.array_equal(p.velocity, np.zeros(3))
    assert p.scalar.shape == (SCALAR_COMPONENTS,)
    assert np.array_equal(p.scalar, np.zeros(SCALAR_COMPONENTS))


def test_particle_two_dimensional_velocity_default():
    p = Particle(position=(1.0, 2.0))
    assert p.velocity.shape == (2,)


def test_particle_velocity_length_mismatch():
    with pytest.raises(ValueError):
        Particle(position=(0.0, 0.0, 0.0), velocity=(1.0, 2.0))


def test_particle_rejects_nested_position():
    with pytest.raises(ValueError):
        Particle(position=[[0.0, 1.0], [2.0, 3.0]])


def test_particle_copies_input():
    position = [1.0, 2.0, 3.0]
    p = Particle(position=position)
    position[0] = 99.0
    assert p.position[0] == 1.0


def test_vertex_from_particle_copies_data():
    p = Particle(position=(1.0, 2.0, 3.0), weight=2.5, density=4.0,
                 velocity=(0.1, 0.2, 0.3), scalar=(7.0,))
    v = Vertex.from_particle(p)
    assert np.array_equal(v.position, p.position)
    assert v.weight == p.weight
    assert v.density == p.density
    assert np.array_equal(v.velocity, p.velocity)
    assert np.array_equal(v.scalar, p.scalar)
    assert v.dummy is False
    assert v.dummy_neighbor is False
    v.velocity[0] = -5.0
    assert p.velocity[0] == pytest.approx(0.1)


def test_mark_dummy_sets_flags_and_clears_density():
    v = Vertex(position=(0.0, 0.0, 0.0), density=3.0)
    v.mark_dummy()
    assert v.dummy is True
    assert v.dummy_neighbor is True
    assert v.density == 0.0


def test_mark_dummy_neighbor_only_sets_neighbor():
    v = Vertex(position=(0.0, 0.0, 0.0), density=3.0)
    v.mark_dummy_neighbor()
    assert v.dummy is False
    assert v.dummy_neighbor is True
    assert v.density == 3.0


def test_sample_point_default_delta():
    s = SamplePoint(position=(1.0, 2.0, 3.0))
    assert np.array_equal(s.delta, np.zeros(3))


def test_sample_point_delta_mismatch():
    with pytest.raises(ValueError):
        SamplePoint(position=(1.0, 2.0, 3.0), delta=(0.1,))