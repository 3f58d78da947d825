"""
Point sampling of the orbit boundary for drawing.

Samples are spaced evenly in true anomaly (not time), so they bunch up
near apoapsis in time but stay evenly spread in angle around the focus.
"""

from __future__ import annotations

import math
from typing import List, Sequence

from orbit_sim.core.constants import MIN_BOUNDARY_SAMPLES
from orbit_sim.core.errors import ValidationError
from orbit_sim.core.frames import perifocal_to_world, to_plane_coords_list
from orbit_sim.core.vector import Vector2, Vector3
from orbit_sim.physics.orbit import (
    OrbitalElements,
    perifocal_position,
    radius_at_true_anomaly,
    semi_parameter,
)


def validate_sample_count(n: int) -> None:
    if isinstance(n, bool) or not isinstance(n, int):
        raise ValidationError(f"Sample count must be an integer. Got: {n!r}")
    if n < MIN_BOUNDARY_SAMPLES:
        raise ValidationError(f"Sample count must be at least {MIN_BOUNDARY_SAMPLES}. Got: {n}")


def boundary_points_3d(elements: OrbitalElements, center: Vector3, n: int) -> List[Vector3]:
    """
    n + 1 world points around the ellipse, first point repeated at the end.

    Each point is built relative to the ellipse center in the perifocal
    frame (the center sits at -a*e on the periapsis axis), rotated into
    world axes and translated by the world-space center.
    """
    validate_sample_count(n)

    a = elements.semi_major_axis
    e = elements.eccentricity
    p = semi_parameter(a, e)
    center_offset = Vector3(a * e, 0.0, 0.0)

    points: List[Vector3] = []
    step = 2.0 * math.pi / n
    for k in range(n):
        nu = k * step
        rel = perifocal_position(radius_at_true_anomaly(p, e, nu), nu).add(center_offset)
        world = perifocal_to_world(rel, elements.argp_rad, elements.inc_rad, elements.raan_rad)
        points.append(center.add(world))

    points.append(points[0])
    return points


def boundary_points_2d(points_3d: Sequence[Vector3]) -> List[Vector2]:
    """Reference-plane projection (x, z) of sampled boundary points."""
    return to_plane_coords_list(points_3d)


def triangulate_fan(center: Vector3, boundary: Sequence[Vector3]) -> List[Vector3]:
    """
    Fan triangulation of a closed boundary around its center.

    Returns a flat list; every three consecutive points form one triangle
    (center, p_k, p_k+1).
    """
    if len(boundary) < MIN_BOUNDARY_SAMPLES + 1:
        raise ValidationError(
            f"Closed boundary needs at least {MIN_BOUNDARY_SAMPLES + 1} points. Got: {len(boundary)}"
        )

    triangles: List[Vector3] = []
    for k in range(len(boundary) - 1):
        triangles.extend((center, boundary[k], boundary[k + 1]))
    return triangles
