from __future__ import annotations

from typing import List, Sequence

from orbit_sim.core.constants import LINE_OF_NODES, UP
from orbit_sim.core.vector import Vector2, Vector3


def perifocal_to_world(v_pqw: Vector3, argp_rad: float, inc_rad: float, raan_rad: float) -> Vector3:
    """
    Rotate a vector from the perifocal (periapsis-on-+X) frame into world axes.

    Rotation sequence (order matters, the three do not commute):
        1. argument of periapsis about the reference-plane normal
        2. inclination about the line of nodes
        3. longitude of the ascending node about the reference-plane normal

    The result is a direction/offset; callers translate by the focus.
    """
    v = v_pqw.rotated(UP, argp_rad)
    v = v.rotated(LINE_OF_NODES, inc_rad)
    return v.rotated(UP, raan_rad)


def world_to_perifocal(v_world: Vector3, argp_rad: float, inc_rad: float, raan_rad: float) -> Vector3:
    """Inverse of perifocal_to_world: undo node, then inclination, then periapsis."""
    v = v_world.rotated(UP, -raan_rad)
    v = v.rotated(LINE_OF_NODES, -inc_rad)
    return v.rotated(UP, -argp_rad)


def project_to_reference_plane(point: Vector3, plane_origin: Vector3) -> Vector3:
    """Drop a world point onto the reference plane passing through plane_origin."""
    return Vector3(point.x, plane_origin.y, point.z)


def to_plane_coords(point: Vector3) -> Vector2:
    """Reference-plane (x, z) coordinates of a world point."""
    return (point.x, point.z)


def to_plane_coords_list(points: Sequence[Vector3]) -> List[Vector2]:
    return [to_plane_coords(p) for p in points]
