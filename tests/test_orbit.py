import math

import pytest

from orbit_sim.core.vector import Vector3
from orbit_sim.physics import orbit as kep
from orbit_sim.physics.orbit import OrbitalElements

G_SCENE = 1000.0


def norm(v):
    return math.sqrt(v[0]**2 + v[1]**2 + v[2]**2)


@pytest.fixture
def inclined_elements():
    return OrbitalElements(
        semi_major_axis=300.0,
        eccentricity=0.4,
        inclination_deg=35.0,
        longitude_of_ascending_node_deg=60.0,
        argument_of_periapsis_deg=45.0,
        central_body_mass=10.0,
        epoch=5.0,
        mean_longitude_at_epoch_deg=12.0,
    )


@pytest.mark.parametrize("e", [0.0, 0.1, 0.5, 0.75, 0.99])
def test_shape_identities(e):
    a = 250.0
    assert abs(kep.semi_minor_axis(a, e) - a * math.sqrt(1 - e * e)) < 1e-9
    assert abs(kep.semi_parameter(a, e) - a * (1 - e * e)) < 1e-9
    assert abs(kep.periapsis_distance(a, e) + kep.apoapsis_distance(a, e) - 2 * a) < 1e-9


def test_true_anomaly_quadrants():
    e = 0.5
    assert kep.true_anomaly_from_eccentric(0.0, e) == 0.0
    assert math.isclose(kep.true_anomaly_from_eccentric(math.pi, e), math.pi, abs_tol=1e-12)
    # First half of the orbit positive, second half negative (atan2, not atan)
    assert 0.0 < kep.true_anomaly_from_eccentric(1.0, e) < math.pi
    assert -math.pi < kep.true_anomaly_from_eccentric(4.0, e) < 0.0


def test_true_anomaly_runs_ahead_of_eccentric_anomaly():
    # Between periapsis and apoapsis ν > E for e > 0
    E = 1.0
    assert kep.true_anomaly_from_eccentric(E, 0.3) > E


def test_radius_from_eccentric_anomaly_matches_conic(inclined_elements):
    a = inclined_elements.semi_major_axis
    e = inclined_elements.eccentricity
    p = kep.semi_parameter(a, e)
    for E in [0.2, 1.5, 3.0, 4.5, 6.0]:
        nu = kep.true_anomaly_from_eccentric(E, e)
        assert abs(kep.radius_at_true_anomaly(p, e, nu) - a * (1 - e * math.cos(E))) < 1e-9


def test_mean_anomaly_is_wrapped(inclined_elements):
    mu = G_SCENE * inclined_elements.central_body_mass
    for t in [-1000.0, 0.0, 5.0, 1234.5, 1e6]:
        M = kep.mean_anomaly_rad(inclined_elements, t, mu)
        assert 0.0 <= M < 2.0 * math.pi


def test_mean_longitude_is_linear(inclined_elements):
    mu = G_SCENE * inclined_elements.central_body_mass
    n = kep.mean_motion(inclined_elements.semi_major_axis, mu)
    L0 = kep.mean_longitude_rad(inclined_elements, inclined_elements.epoch, mu)
    assert math.isclose(L0, math.radians(12.0), abs_tol=1e-12)
    L1 = kep.mean_longitude_rad(inclined_elements, inclined_elements.epoch + 100.0, mu)
    assert math.isclose(L1 - L0, 100.0 * n, rel_tol=1e-12)


def test_circular_orbit_radius_constant():
    # Circular orbit: r should stay ~a for all times
    a = 7000.0
    elements = OrbitalElements(
        semi_major_axis=a,
        eccentricity=0.0,
        inclination_deg=0.0,
        longitude_of_ascending_node_deg=0.0,
        argument_of_periapsis_deg=0.0,
        central_body_mass=5.972e24,
    )
    mu = 6.67430e-20 * 5.972e24
    period = kep.orbital_period(a, mu)
    focus = Vector3.zero()

    for frac in [0.0, 0.25, 0.5, 0.75, 1.0]:
        t = frac * period
        r = kep.position_at(elements, focus, t, mu)
        v = kep.velocity_at(elements, t, mu)
        assert abs(norm(r) - a) < 1e-6

        # Check vis-viva: v^2 = mu(2/r - 1/a) = mu/a for circular
        assert abs(norm(v) - math.sqrt(mu / a)) < 1e-6


def test_vis_viva_elliptic(inclined_elements):
    mu = G_SCENE * inclined_elements.central_body_mass
    a = inclined_elements.semi_major_axis
    focus = Vector3(1.0, 2.0, 3.0)
    for t in [0.0, 17.0, 250.0, 999.0]:
        r = norm(kep.position_at(inclined_elements, focus, t, mu).sub(focus))
        v = norm(kep.velocity_at(inclined_elements, t, mu))
        assert math.isclose(v * v, mu * (2.0 / r - 1.0 / a), rel_tol=1e-9)


def test_velocity_is_derivative_of_position(inclined_elements):
    mu = G_SCENE * inclined_elements.central_body_mass
    focus = Vector3.zero()
    t, h = 42.0, 1e-4
    r_plus = kep.position_at(inclined_elements, focus, t + h, mu)
    r_minus = kep.position_at(inclined_elements, focus, t - h, mu)
    numeric = r_plus.sub(r_minus).scale(1.0 / (2.0 * h))
    assert numeric.is_close(kep.velocity_at(inclined_elements, t, mu), abs_tol=1e-4)


def test_time_of_periapsis_passage(inclined_elements):
    mu = G_SCENE * inclined_elements.central_body_mass
    tp = kep.time_of_periapsis_passage(inclined_elements, mu)
    assert tp <= inclined_elements.epoch
    M = kep.mean_anomaly_rad(inclined_elements, tp, mu)
    assert min(M, 2.0 * math.pi - M) < 1e-9


def test_nodes_lie_in_reference_plane(inclined_elements):
    focus = Vector3(0.0, 50.0, 0.0)
    for nu in (kep.ascending_node_true_anomaly(inclined_elements),
               kep.descending_node_true_anomaly(inclined_elements)):
        p = kep.position_at_true_anomaly(inclined_elements, focus, nu)
        assert abs(p.y - focus.y) < 1e-9


def test_body_rises_after_ascending_node(inclined_elements):
    focus = Vector3.zero()
    nu = kep.ascending_node_true_anomaly(inclined_elements)
    assert kep.position_at_true_anomaly(inclined_elements, focus, nu + 0.01).y > 0.0
    nu = kep.descending_node_true_anomaly(inclined_elements)
    assert kep.position_at_true_anomaly(inclined_elements, focus, nu + 0.01).y < 0.0


def test_propagate_returns_samples(inclined_elements):
    mu = G_SCENE * inclined_elements.central_body_mass
    out = kep.propagate(inclined_elements, Vector3.zero(), [0.0, 10.0, 20.0], mu)
    assert [t for (t, _r, _v) in out] == [0.0, 10.0, 20.0]
    assert out[0][1] != out[1][1]
