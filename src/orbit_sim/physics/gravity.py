# Two-body model

from __future__ import annotations

import logging
import math

from orbit_sim.core.constants import GRAVITATIONAL_CONSTANT, KEPLER_MAX_ITER, KEPLER_TOL
from orbit_sim.core.errors import ValidationError

logger = logging.getLogger(__name__)


def wrap_to_2pi(angle_rad: float) -> float:
    """Wrap angle to [0, 2π)."""
    two_pi = 2.0 * math.pi
    wrapped = angle_rad % two_pi
    # Tiny negative inputs round up to exactly 2π under float %
    return 0.0 if wrapped >= two_pi else wrapped


def wrap_to_360(angle_deg: float) -> float:
    """Wrap angle to [0, 360)."""
    wrapped = angle_deg % 360.0
    return 0.0 if wrapped >= 360.0 else wrapped


def gravitational_parameter(mass: float, g: float = GRAVITATIONAL_CONSTANT) -> float:
    """mu = G * M."""
    return g * mass


def solve_keplers_equation(
    M_rad: float,
    e: float,
    tol: float = KEPLER_TOL,
    max_iter: int = KEPLER_MAX_ITER,
) -> float:
    """
    Solve Kepler's equation for elliptic orbits:
        M = E - e sin(E)
    using Newton-Raphson starting from E = M.

    Since E - M = e sin(E), the root lies in [M, min(M + e, π)] when M <= π
    and in [max(M - e, π), M] otherwise. Every iterate is clamped to that
    bracket. Inside it f(E) = E - e sin(E) - M is convex (M <= π) or concave
    (M > π), so after the first step Newton approaches the root from one side
    without leaving the bracket. The last iterate is returned when the cap is
    reached.

    Args:
        M_rad: Mean anomaly (rad), wrapped to [0, 2π) first
        e: eccentricity (0 <= e < 1)
        tol: convergence tolerance on |ΔE|
        max_iter: iteration cap

    Returns:
        E_rad: Eccentric anomaly (rad) in [0, 2π]
    """
    if not (0.0 <= e < 1.0):
        raise ValidationError(f"Elliptic Kepler solver requires 0 <= e < 1. Got: {e}")

    M = wrap_to_2pi(M_rad)
    if M <= math.pi:
        lo, hi = M, min(M + e, math.pi)
    else:
        lo, hi = max(M - e, math.pi), M

    E = M
    dE = math.inf
    for _ in range(max_iter):
        step = (M - E + e * math.sin(E)) / (1.0 - e * math.cos(E))
        E_next = min(max(E + step, lo), hi)
        dE = E_next - E
        E = E_next
        if abs(dE) < tol:
            return E

    logger.debug("Kepler solver hit iteration cap (M=%r, e=%r, last dE=%.3e)", M, e, dE)
    return E
