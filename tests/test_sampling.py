"""
Tests for boundary sampling and plane triangulation.
"""
import math

import pytest

from orbit_sim.core.errors import ValidationError
from orbit_sim.core.vector import distance
from orbit_sim.objects.orbit_model import create
from orbit_sim.physics.sampling import triangulate_fan, validate_sample_count


@pytest.fixture
def orbit():
    return create(
        major_focus=(450.0, 150.0, 0.0),
        semi_major_axis=300.0,
        eccentricity=0.75,
        inclination_deg=25.0,
        longitude_of_ascending_node_deg=25.0,
        argument_of_periapsis_deg=60.0,
        central_body_mass=10.0,
    )


@pytest.mark.parametrize("n", [3, 4, 7, 64])
def test_boundary_is_closed_with_n_plus_one_points(orbit, n):
    points = orbit.sample_boundary_3d(n)
    assert len(points) == n + 1
    assert points[0] == points[-1]


def test_boundary_rejects_too_few_samples(orbit):
    with pytest.raises(ValidationError, match="at least 3"):
        orbit.sample_boundary_3d(2)
    with pytest.raises(ValidationError):
        orbit.sample_boundary_2d(0)
    with pytest.raises(ValidationError):
        orbit.triangulate_plane(2)


def test_sample_count_must_be_integer():
    with pytest.raises(ValidationError, match="integer"):
        validate_sample_count(3.5)
    with pytest.raises(ValidationError, match="integer"):
        validate_sample_count(True)


def test_first_sample_is_periapsis(orbit):
    points = orbit.sample_boundary_3d(8)
    assert points[0].is_close(orbit.periapsis_position, abs_tol=1e-9)
    # Even n: the halfway sample is at ν = π
    assert points[4].is_close(orbit.apoapsis_position, abs_tol=1e-9)


def test_samples_lie_on_ellipse(orbit):
    two_a = 2.0 * orbit.semi_major_axis
    for p in orbit.sample_boundary_3d(32):
        total = distance(p, orbit.major_focus) + distance(p, orbit.minor_focus)
        assert abs(total - two_a) < 1e-9


def test_samples_evenly_spaced_in_true_anomaly(orbit):
    n = 12
    points = orbit.sample_boundary_3d(n)
    focus = orbit.major_focus
    for k in range(n):
        a = points[k].sub(focus)
        b = points[k + 1].sub(focus)
        angle = math.acos(max(-1.0, min(1.0, a.dot(b) / (a.norm() * b.norm()))))
        assert abs(angle - 2.0 * math.pi / n) < 1e-9


def test_boundary_2d_is_plane_projection(orbit):
    points_3d = orbit.sample_boundary_3d(10)
    points_2d = orbit.sample_boundary_2d(10)
    assert len(points_2d) == 11
    assert points_2d[0] == points_2d[-1]
    for p3, p2 in zip(points_3d, points_2d):
        assert p2 == (p3.x, p3.z)


def test_triangulate_plane_fan(orbit):
    n = 9
    triangles = orbit.triangulate_plane(n)
    boundary = orbit.sample_boundary_3d(n)
    center = orbit.center
    assert len(triangles) == 3 * n
    for k in range(n):
        assert triangles[3 * k] == center
        assert triangles[3 * k + 1] == boundary[k]
        assert triangles[3 * k + 2] == boundary[k + 1]


def test_triangulate_fan_requires_closed_boundary(orbit):
    with pytest.raises(ValidationError):
        triangulate_fan(orbit.center, orbit.sample_boundary_3d(3)[:3])


def test_sample_cache_overwritten_not_synced(orbit):
    assert orbit.sampled_points_3d == []
    orbit.sample_boundary_3d(8)
    assert len(orbit.sampled_points_3d) == 9
    orbit.sample_boundary_3d(16)
    assert len(orbit.sampled_points_3d) == 17

    cached = list(orbit.sampled_points_3d)
    orbit.set_eccentricity(0.1)
    # Mutation does not touch the cache until the next sampling request
    assert orbit.sampled_points_3d == cached
    orbit.sample_boundary_2d(5)
    assert len(orbit.sampled_points_2d) == 6
