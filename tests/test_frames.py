"""
Tests for the perifocal <-> world rotation and reference-plane helpers.
"""
import math

from orbit_sim.core.frames import (
    perifocal_to_world,
    world_to_perifocal,
    project_to_reference_plane,
    to_plane_coords,
)
from orbit_sim.core.vector import Vector3


def deg(x):
    return x * math.pi / 180.0


class TestPerifocalToWorld:
    def test_zero_angles_is_identity(self):
        v = Vector3(1.0, 2.0, 3.0)
        assert perifocal_to_world(v, 0.0, 0.0, 0.0).is_close(v, abs_tol=1e-12)

    def test_node_rotation_moves_periapsis_in_plane(self):
        # i = 0: periapsis direction is rotated by (argp + raan) about +Y
        result = perifocal_to_world(Vector3(1.0, 0.0, 0.0), deg(10.0), 0.0, deg(25.0))
        expected = (math.cos(deg(35.0)), 0.0, -math.sin(deg(35.0)))
        assert result.is_close(expected, abs_tol=1e-12)

    def test_inclination_keeps_line_of_nodes(self):
        node = Vector3(1.0, 0.0, 0.0)
        assert perifocal_to_world(node, 0.0, deg(60.0), 0.0).is_close(node, abs_tol=1e-12)

    def test_inclination_lifts_leading_half_of_orbit(self):
        # Body-frame quarter orbit after the node is -Z (prograde) and rises for i > 0
        quarter = Vector3(0.0, 0.0, -1.0)
        r = perifocal_to_world(quarter, 0.0, deg(30.0), 0.0)
        assert r.y > 0.0
        assert abs(r.y - math.sin(deg(30.0))) < 1e-12

    def test_rotation_order_matters(self):
        v = Vector3(1.0, 0.0, 0.0)
        a = perifocal_to_world(v, deg(40.0), deg(30.0), deg(20.0))
        # Swapping periapsis and node angles changes the result when inclined
        b = perifocal_to_world(v, deg(20.0), deg(30.0), deg(40.0))
        assert not a.is_close(b, abs_tol=1e-6)

    def test_roundtrip(self):
        v = Vector3(3.0, -2.0, 7.5)
        angles = (deg(40.0), deg(-51.6), deg(123.0))
        back = world_to_perifocal(perifocal_to_world(v, *angles), *angles)
        assert back.is_close(v, abs_tol=1e-12)


class TestReferencePlane:
    def test_projection_drops_height(self):
        p = project_to_reference_plane(Vector3(1.0, 9.0, 2.0), Vector3(5.0, 3.0, 5.0))
        assert p == Vector3(1.0, 3.0, 2.0)

    def test_plane_coords(self):
        assert to_plane_coords(Vector3(1.0, 9.0, 2.0)) == (1.0, 2.0)
