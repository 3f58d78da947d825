# src/orbit_sim/physics/orbit.py

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Tuple

from orbit_sim.core.constants import AXIS_Z
from orbit_sim.core.errors import ValidationError
from orbit_sim.core.frames import perifocal_to_world
from orbit_sim.core.vector import Vector3
from orbit_sim.physics.gravity import solve_keplers_equation, wrap_to_2pi


def _require_finite(label: str, value: float) -> None:
    if not isinstance(value, (int, float)) or not math.isfinite(value):
        raise ValidationError(f"{label} must be finite. Got: {value!r}")


def validate_semi_major_axis(a: float) -> None:
    _require_finite("Semi-major axis", a)
    if a <= 0:
        raise ValidationError(f"Semi-major axis must be positive. Got: {a}")


def validate_eccentricity(e: float) -> None:
    _require_finite("Eccentricity", e)
    if not (0.0 <= e < 1.0):
        raise ValidationError(f"Eccentricity must be in range [0, 1). Got: {e}")


def validate_mass(m: float) -> None:
    _require_finite("Central body mass", m)
    if m <= 0:
        raise ValidationError(f"Central body mass must be positive. Got: {m}")


def validate_angle(label: str, angle_deg: float) -> None:
    _require_finite(label, angle_deg)


def validate_epoch(t0: float) -> None:
    _require_finite("Epoch", t0)


@dataclass(frozen=True)
class OrbitalElements:
    """
    Orbital element set for an elliptic orbit, as given at the public
    boundary (angles in degrees).

    Units:
        semi_major_axis: length unit of the scene
        eccentricity: 0 <= e < 1
        inclination_deg: tilt of the orbital plane; negative swaps the node convention
        longitude_of_ascending_node_deg: rotation of the line of nodes
        argument_of_periapsis_deg: periapsis angle inside the orbital plane
        central_body_mass: scaled mass, mu = G * M
        epoch: time at which mean_longitude_at_epoch_deg holds
        mean_longitude_at_epoch_deg: L0
    """
    semi_major_axis: float
    eccentricity: float
    inclination_deg: float
    longitude_of_ascending_node_deg: float
    argument_of_periapsis_deg: float
    central_body_mass: float
    epoch: float = 0.0
    mean_longitude_at_epoch_deg: float = 0.0

    def __post_init__(self):
        validate_semi_major_axis(self.semi_major_axis)
        validate_eccentricity(self.eccentricity)
        validate_mass(self.central_body_mass)
        validate_angle("Inclination", self.inclination_deg)
        validate_angle("Longitude of ascending node", self.longitude_of_ascending_node_deg)
        validate_angle("Argument of periapsis", self.argument_of_periapsis_deg)
        validate_epoch(self.epoch)
        validate_angle("Mean longitude at epoch", self.mean_longitude_at_epoch_deg)

    @property
    def inc_rad(self) -> float:
        return math.radians(self.inclination_deg)

    @property
    def raan_rad(self) -> float:
        return math.radians(self.longitude_of_ascending_node_deg)

    @property
    def argp_rad(self) -> float:
        return math.radians(self.argument_of_periapsis_deg)

    @property
    def L0_rad(self) -> float:
        return math.radians(self.mean_longitude_at_epoch_deg)


# --- shape -----------------------------------------------------------------

def semi_parameter(a: float, e: float) -> float:
    """p = a(1 - e^2)."""
    return a * (1.0 - e * e)


def semi_minor_axis(a: float, e: float) -> float:
    return a * math.sqrt(1.0 - e * e)


def periapsis_distance(a: float, e: float) -> float:
    return semi_parameter(a, e) / (1.0 + e)


def apoapsis_distance(a: float, e: float) -> float:
    return semi_parameter(a, e) / (1.0 - e)


def radius_at_true_anomaly(p: float, e: float, nu_rad: float) -> float:
    """Conic equation r = p / (1 + e cos ν)."""
    return p / (1.0 + e * math.cos(nu_rad))


# --- timing ----------------------------------------------------------------

def mean_motion(a: float, mu: float) -> float:
    """n = sqrt(mu / a^3), computed without forming a^3."""
    return math.sqrt(mu / a) / a


def orbital_period(a: float, mu: float) -> float:
    """T = 2π sqrt(a^3 / mu)."""
    return 2.0 * math.pi * a * math.sqrt(a / mu)


def time_of_periapsis_passage(elements: OrbitalElements, mu: float) -> float:
    """Last time at or before the epoch at which the mean anomaly is zero."""
    n = mean_motion(elements.semi_major_axis, mu)
    M0 = mean_anomaly_rad(elements, elements.epoch, mu)
    return elements.epoch - M0 / n


# --- anomaly pipeline ------------------------------------------------------

def mean_longitude_rad(elements: OrbitalElements, t: float, mu: float) -> float:
    """L(t) = L0 + n (t - t0), not wrapped."""
    n = mean_motion(elements.semi_major_axis, mu)
    return elements.L0_rad + n * (t - elements.epoch)


def mean_anomaly_rad(elements: OrbitalElements, t: float, mu: float) -> float:
    """M(t) = (L(t) - ω - Ω) mod 2π."""
    L = mean_longitude_rad(elements, t, mu)
    return wrap_to_2pi(L - elements.argp_rad - elements.raan_rad)


def eccentric_anomaly_rad(elements: OrbitalElements, t: float, mu: float) -> float:
    return solve_keplers_equation(mean_anomaly_rad(elements, t, mu), elements.eccentricity)


def true_anomaly_from_eccentric(E_rad: float, e: float) -> float:
    """ν from E; atan2 keeps the quadrant over the whole orbit."""
    return math.atan2(math.sqrt(1.0 - e * e) * math.sin(E_rad), math.cos(E_rad) - e)


def true_anomaly_rad(elements: OrbitalElements, t: float, mu: float) -> float:
    """True anomaly wrapped to [0, 2π)."""
    E = eccentric_anomaly_rad(elements, t, mu)
    return wrap_to_2pi(true_anomaly_from_eccentric(E, elements.eccentricity))


# --- body frame ------------------------------------------------------------

def perifocal_position(r: float, nu_rad: float) -> Vector3:
    """Point at distance r and true anomaly ν, periapsis on +X."""
    return Vector3(r * math.cos(nu_rad), 0.0, AXIS_Z * r * math.sin(nu_rad))


def perifocal_velocity(mu: float, p: float, e: float, nu_rad: float) -> Vector3:
    """Time derivative of perifocal_position for a Keplerian orbit."""
    k = math.sqrt(mu / p)
    return Vector3(-k * math.sin(nu_rad), 0.0, AXIS_Z * k * (e + math.cos(nu_rad)))


def position_at_true_anomaly(elements: OrbitalElements, focus: Vector3, nu_rad: float) -> Vector3:
    a = elements.semi_major_axis
    e = elements.eccentricity
    r = radius_at_true_anomaly(semi_parameter(a, e), e, nu_rad)
    offset = perifocal_to_world(
        perifocal_position(r, nu_rad),
        elements.argp_rad,
        elements.inc_rad,
        elements.raan_rad,
    )
    return focus.add(offset)


def position_at(elements: OrbitalElements, focus: Vector3, t: float, mu: float) -> Vector3:
    """World position at time t."""
    return position_at_true_anomaly(elements, focus, true_anomaly_rad(elements, t, mu))


def velocity_at(elements: OrbitalElements, t: float, mu: float) -> Vector3:
    """World velocity at time t (same length/time units as the scene)."""
    e = elements.eccentricity
    p = semi_parameter(elements.semi_major_axis, e)
    nu = true_anomaly_rad(elements, t, mu)
    return perifocal_to_world(
        perifocal_velocity(mu, p, e, nu),
        elements.argp_rad,
        elements.inc_rad,
        elements.raan_rad,
    )


def ascending_node_true_anomaly(elements: OrbitalElements) -> float:
    """
    True anomaly of the ascending node.

    The line of nodes sits at argument of latitude 0 / 180°. A negative
    inclination tilts the plane the other way, so the body rises through
    the reference plane at 180° instead of 0°.
    """
    u = 0.0 if elements.inclination_deg >= 0.0 else math.pi
    return wrap_to_2pi(u - elements.argp_rad)


def descending_node_true_anomaly(elements: OrbitalElements) -> float:
    return wrap_to_2pi(ascending_node_true_anomaly(elements) + math.pi)


def propagate(
    elements: OrbitalElements,
    focus: Vector3,
    times: List[float],
    mu: float,
) -> List[Tuple[float, Vector3, Vector3]]:
    """
    Propagate an orbit across a list of time stamps.
    Returns list of (t, position, velocity).
    """
    out: List[Tuple[float, Vector3, Vector3]] = []
    for t in times:
        out.append((t, position_at(elements, focus, t, mu), velocity_at(elements, t, mu)))
    return out
