from __future__ import annotations

import logging
import math
from typing import Callable, List, Optional, Sequence, Tuple

from orbit_sim.core.constants import GRAVITATIONAL_CONSTANT
from orbit_sim.core.errors import DegenerateGeometryError, ValidationError
from orbit_sim.core.frames import perifocal_to_world, project_to_reference_plane
from orbit_sim.core.vector import Vector2, Vector3
from orbit_sim.physics import orbit as kep
from orbit_sim.physics.gravity import gravitational_parameter, wrap_to_2pi, wrap_to_360
from orbit_sim.physics.orbit import OrbitalElements
from orbit_sim.physics.sampling import boundary_points_2d, boundary_points_3d, triangulate_fan

logger = logging.getLogger(__name__)

ChangeCallback = Callable[["OrbitModel", str], None]


def _degrees(angle_rad: float) -> float:
    # math.degrees can round a value just under 2π up to 360.0
    return wrap_to_360(math.degrees(angle_rad))


def _validate_focus(v) -> Vector3:
    try:
        focus = Vector3.of(v)
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"Major focus must be a 3-component vector. Got: {v!r}") from exc
    if not focus.is_finite():
        raise ValidationError(f"Major focus must be finite. Got: {v!r}")
    return focus


def _validate_g(g: float) -> None:
    if not isinstance(g, (int, float)) or not math.isfinite(g) or g <= 0:
        raise ValidationError(f"Gravitational constant must be positive. Got: {g!r}")


class OrbitModel:
    """
    A body on a Keplerian ellipse around a central mass at `major_focus`.

    Canonical state is the element set below; everything else (foci, apsides,
    nodes, period, anomalies, positions) is recomputed from it on every call.
    Angles cross the public boundary in degrees; `*_rad` views are computed
    from the stored degrees.

    Setters validate, return False on rejection and leave state untouched.
    Successful setters notify subscribers with (model, element_name).

    A model built with OrbitModel() has no semi-major axis or mass yet;
    geometry queries raise DegenerateGeometryError until both are set.
    """

    def __init__(self, gravitational_constant: float = GRAVITATIONAL_CONSTANT):
        _validate_g(gravitational_constant)
        self._g = float(gravitational_constant)

        self._major_focus: Vector3 = Vector3.zero()
        self._semi_major_axis: float = 0.0
        self._eccentricity: float = 0.0
        self._inclination_deg: float = 0.0
        self._longitude_of_ascending_node_deg: float = 0.0
        self._argument_of_periapsis_deg: float = 0.0
        self._central_body_mass: float = 0.0
        self._epoch: float = 0.0
        self._mean_longitude_at_epoch_deg: float = 0.0

        self._observers: List[ChangeCallback] = []

        # Owned drawing cache, written only by the sampling calls
        self.sampled_points_3d: List[Vector3] = []
        self.sampled_points_2d: List[Vector2] = []

    @classmethod
    def from_elements(
        cls,
        elements: OrbitalElements,
        major_focus: Sequence[float] = (0.0, 0.0, 0.0),
        gravitational_constant: float = GRAVITATIONAL_CONSTANT,
    ) -> OrbitModel:
        model = cls(gravitational_constant=gravitational_constant)
        model._major_focus = _validate_focus(major_focus)
        model._semi_major_axis = float(elements.semi_major_axis)
        model._eccentricity = float(elements.eccentricity)
        model._inclination_deg = float(elements.inclination_deg)
        model._longitude_of_ascending_node_deg = float(elements.longitude_of_ascending_node_deg)
        model._argument_of_periapsis_deg = float(elements.argument_of_periapsis_deg)
        model._central_body_mass = float(elements.central_body_mass)
        model._epoch = float(elements.epoch)
        model._mean_longitude_at_epoch_deg = float(elements.mean_longitude_at_epoch_deg)
        return model

    def __repr__(self) -> str:
        if not self.is_fully_specified:
            return "<OrbitModel (unspecified)>"
        return (
            "<OrbitModel a={:.6g}, e={:.6f}, i={:.1f}°, LAN={:.1f}°, w={:.1f}°, M={:.6g}, "
            "epoch={:.6g}, L0={:.1f}°>".format(
                self._semi_major_axis, self._eccentricity, self._inclination_deg,
                self._longitude_of_ascending_node_deg, self._argument_of_periapsis_deg,
                self._central_body_mass, self._epoch, self._mean_longitude_at_epoch_deg,
            )
        )

    # ------------------------------------------------------------------
    # Change notification

    def subscribe(self, callback: ChangeCallback) -> None:
        if callback not in self._observers:
            self._observers.append(callback)

    def unsubscribe(self, callback: ChangeCallback) -> None:
        if callback in self._observers:
            self._observers.remove(callback)

    def _notify(self, name: str) -> None:
        for callback in list(self._observers):
            callback(self, name)

    def _assign(self, name: str, value, validator: Callable[[float], None]) -> bool:
        try:
            validator(value)
        except ValidationError as exc:
            logger.warning("Rejected %s=%r: %s", name, value, exc)
            return False
        setattr(self, "_" + name, float(value))
        self._notify(name)
        return True

    # ------------------------------------------------------------------
    # Canonical elements

    @property
    def gravitational_constant(self) -> float:
        return self._g

    @property
    def major_focus(self) -> Vector3:
        return self._major_focus

    def set_major_focus(self, value: Sequence[float]) -> bool:
        try:
            focus = _validate_focus(value)
        except ValidationError as exc:
            logger.warning("Rejected major_focus=%r: %s", value, exc)
            return False
        self._major_focus = focus
        self._notify("major_focus")
        return True

    @property
    def semi_major_axis(self) -> float:
        return self._semi_major_axis

    def set_semi_major_axis(self, value: float) -> bool:
        return self._assign("semi_major_axis", value, kep.validate_semi_major_axis)

    @property
    def eccentricity(self) -> float:
        return self._eccentricity

    def set_eccentricity(self, value: float) -> bool:
        return self._assign("eccentricity", value, kep.validate_eccentricity)

    @property
    def inclination(self) -> float:
        """Inclination in degrees."""
        return self._inclination_deg

    @property
    def inclination_rad(self) -> float:
        return math.radians(self._inclination_deg)

    def set_inclination(self, value_deg: float) -> bool:
        return self._assign("inclination_deg", value_deg, lambda v: kep.validate_angle("Inclination", v))

    @property
    def longitude_of_ascending_node(self) -> float:
        """Longitude of the ascending node in degrees."""
        return self._longitude_of_ascending_node_deg

    @property
    def longitude_of_ascending_node_rad(self) -> float:
        return math.radians(self._longitude_of_ascending_node_deg)

    def set_longitude_of_ascending_node(self, value_deg: float) -> bool:
        return self._assign(
            "longitude_of_ascending_node_deg",
            value_deg,
            lambda v: kep.validate_angle("Longitude of ascending node", v),
        )

    @property
    def argument_of_periapsis(self) -> float:
        """Argument of periapsis in degrees."""
        return self._argument_of_periapsis_deg

    @property
    def argument_of_periapsis_rad(self) -> float:
        return math.radians(self._argument_of_periapsis_deg)

    def set_argument_of_periapsis(self, value_deg: float) -> bool:
        return self._assign(
            "argument_of_periapsis_deg",
            value_deg,
            lambda v: kep.validate_angle("Argument of periapsis", v),
        )

    @property
    def central_body_mass(self) -> float:
        return self._central_body_mass

    def set_central_body_mass(self, value: float) -> bool:
        return self._assign("central_body_mass", value, kep.validate_mass)

    @property
    def epoch(self) -> float:
        return self._epoch

    def set_epoch(self, value: float) -> bool:
        return self._assign("epoch", value, kep.validate_epoch)

    @property
    def mean_longitude_at_epoch(self) -> float:
        """Mean longitude at epoch in degrees."""
        return self._mean_longitude_at_epoch_deg

    @property
    def mean_longitude_at_epoch_rad(self) -> float:
        return math.radians(self._mean_longitude_at_epoch_deg)

    def set_mean_longitude_at_epoch(self, value_deg: float) -> bool:
        return self._assign(
            "mean_longitude_at_epoch_deg",
            value_deg,
            lambda v: kep.validate_angle("Mean longitude at epoch", v),
        )

    @property
    def is_fully_specified(self) -> bool:
        return self._semi_major_axis > 0.0 and self._central_body_mass > 0.0

    @property
    def elements(self) -> OrbitalElements:
        """Snapshot of the current element set."""
        if not self.is_fully_specified:
            raise DegenerateGeometryError(
                "Orbit is not fully specified: semi-major axis and central body mass must be set "
                f"(a={self._semi_major_axis}, M={self._central_body_mass})."
            )
        return OrbitalElements(
            semi_major_axis=self._semi_major_axis,
            eccentricity=self._eccentricity,
            inclination_deg=self._inclination_deg,
            longitude_of_ascending_node_deg=self._longitude_of_ascending_node_deg,
            argument_of_periapsis_deg=self._argument_of_periapsis_deg,
            central_body_mass=self._central_body_mass,
            epoch=self._epoch,
            mean_longitude_at_epoch_deg=self._mean_longitude_at_epoch_deg,
        )

    # ------------------------------------------------------------------
    # Derived shape and timing

    @property
    def semi_minor_axis(self) -> float:
        el = self.elements
        return kep.semi_minor_axis(el.semi_major_axis, el.eccentricity)

    @property
    def semi_parameter(self) -> float:
        el = self.elements
        return kep.semi_parameter(el.semi_major_axis, el.eccentricity)

    @property
    def periapsis(self) -> float:
        """Periapsis distance from the major focus."""
        el = self.elements
        return kep.periapsis_distance(el.semi_major_axis, el.eccentricity)

    @property
    def apoapsis(self) -> float:
        """Apoapsis distance from the major focus."""
        el = self.elements
        return kep.apoapsis_distance(el.semi_major_axis, el.eccentricity)

    @property
    def linear_eccentricity(self) -> float:
        """Center-to-focus distance a*e."""
        el = self.elements
        return el.semi_major_axis * el.eccentricity

    @property
    def gravitational_parameter(self) -> float:
        return gravitational_parameter(self.elements.central_body_mass, self._g)

    @property
    def mean_motion(self) -> float:
        """Mean motion in rad per time unit."""
        return kep.mean_motion(self.elements.semi_major_axis, self.gravitational_parameter)

    @property
    def orbital_period(self) -> float:
        return kep.orbital_period(self.elements.semi_major_axis, self.gravitational_parameter)

    @property
    def specific_angular_momentum(self) -> float:
        return math.sqrt(self.gravitational_parameter * self.semi_parameter)

    @property
    def longitude_of_periapsis(self) -> float:
        """ϖ = Ω + ω in degrees, wrapped to [0, 360)."""
        return wrap_to_360(self._longitude_of_ascending_node_deg + self._argument_of_periapsis_deg)

    @property
    def time_of_periapsis_passage(self) -> float:
        return kep.time_of_periapsis_passage(self.elements, self.gravitational_parameter)

    # ------------------------------------------------------------------
    # Derived geometry (world space)

    def _along_periapsis_axis(self, distance: float) -> Vector3:
        el = self.elements
        offset = perifocal_to_world(Vector3(distance, 0.0, 0.0), el.argp_rad, el.inc_rad, el.raan_rad)
        return self._major_focus.add(offset)

    @property
    def center(self) -> Vector3:
        return self._along_periapsis_axis(-self.linear_eccentricity)

    @property
    def minor_focus(self) -> Vector3:
        return self._along_periapsis_axis(-2.0 * self.linear_eccentricity)

    @property
    def periapsis_position(self) -> Vector3:
        return kep.position_at_true_anomaly(self.elements, self._major_focus, 0.0)

    @property
    def apoapsis_position(self) -> Vector3:
        return kep.position_at_true_anomaly(self.elements, self._major_focus, math.pi)

    @property
    def periapsis_projection(self) -> Vector3:
        """Periapsis dropped onto the reference plane through the major focus."""
        return project_to_reference_plane(self.periapsis_position, self._major_focus)

    @property
    def apoapsis_projection(self) -> Vector3:
        return project_to_reference_plane(self.apoapsis_position, self._major_focus)

    @property
    def ascending_node_position(self) -> Vector3:
        el = self.elements
        return kep.position_at_true_anomaly(el, self._major_focus, kep.ascending_node_true_anomaly(el))

    @property
    def descending_node_position(self) -> Vector3:
        el = self.elements
        return kep.position_at_true_anomaly(el, self._major_focus, kep.descending_node_true_anomaly(el))

    # ------------------------------------------------------------------
    # Time queries (angles returned in degrees)

    def mean_longitude_at(self, t: float) -> float:
        L = kep.mean_longitude_rad(self.elements, t, self.gravitational_parameter)
        return _degrees(wrap_to_2pi(L))

    def mean_anomaly_at(self, t: float) -> float:
        return _degrees(kep.mean_anomaly_rad(self.elements, t, self.gravitational_parameter))

    def eccentric_anomaly_at(self, t: float) -> float:
        E = kep.eccentric_anomaly_rad(self.elements, t, self.gravitational_parameter)
        return _degrees(wrap_to_2pi(E))

    def true_anomaly_at(self, t: float) -> float:
        return _degrees(kep.true_anomaly_rad(self.elements, t, self.gravitational_parameter))

    def true_longitude_at(self, t: float) -> float:
        """ν + ω + Ω."""
        el = self.elements
        nu = kep.true_anomaly_rad(el, t, self.gravitational_parameter)
        return _degrees(wrap_to_2pi(nu + el.argp_rad + el.raan_rad))

    def mean_argument_of_latitude_at(self, t: float) -> float:
        """M + ω."""
        el = self.elements
        M = kep.mean_anomaly_rad(el, t, self.gravitational_parameter)
        return _degrees(wrap_to_2pi(M + el.argp_rad))

    def true_argument_of_latitude_at(self, t: float) -> float:
        """ν + ω."""
        el = self.elements
        nu = kep.true_anomaly_rad(el, t, self.gravitational_parameter)
        return _degrees(wrap_to_2pi(nu + el.argp_rad))

    def radius_at(self, t: float) -> float:
        el = self.elements
        nu = kep.true_anomaly_rad(el, t, self.gravitational_parameter)
        return kep.radius_at_true_anomaly(self.semi_parameter, el.eccentricity, nu)

    def position_at(self, t: float) -> Vector3:
        return kep.position_at(self.elements, self._major_focus, t, self.gravitational_parameter)

    def velocity_at(self, t: float) -> Vector3:
        return kep.velocity_at(self.elements, t, self.gravitational_parameter)

    def speed_at(self, t: float) -> float:
        return self.velocity_at(t).norm()

    def propagate(self, times: List[float]) -> List[Tuple[float, Vector3, Vector3]]:
        """List of (t, position, velocity)."""
        return kep.propagate(self.elements, self._major_focus, times, self.gravitational_parameter)

    # ------------------------------------------------------------------
    # Sampling for drawing

    def sample_boundary_3d(self, n: int) -> List[Vector3]:
        """
        n + 1 world points evenly spaced in true anomaly, closed (first == last).
        Overwrites sampled_points_3d.
        """
        points = boundary_points_3d(self.elements, self.center, n)
        self.sampled_points_3d = points
        return list(points)

    def sample_boundary_2d(self, n: int) -> List[Vector2]:
        """Same samples projected to reference-plane (x, z). Overwrites sampled_points_2d."""
        points = boundary_points_2d(boundary_points_3d(self.elements, self.center, n))
        self.sampled_points_2d = points
        return list(points)

    def triangulate_plane(self, n: int) -> List[Vector3]:
        """Flat list of 3n points; each triple is (center, p_k, p_k+1)."""
        boundary = self.sample_boundary_3d(n)
        return triangulate_fan(self.center, boundary)


def create(
    major_focus: Sequence[float],
    semi_major_axis: float,
    eccentricity: float,
    inclination_deg: float,
    longitude_of_ascending_node_deg: float,
    argument_of_periapsis_deg: float,
    central_body_mass: float,
    epoch: float = 0.0,
    mean_longitude_at_epoch_deg: float = 0.0,
    gravitational_constant: Optional[float] = None,
) -> OrbitModel:
    """
    Validating factory. Raises ValidationError and builds nothing if any
    element is out of range.
    """
    elements = OrbitalElements(
        semi_major_axis=semi_major_axis,
        eccentricity=eccentricity,
        inclination_deg=inclination_deg,
        longitude_of_ascending_node_deg=longitude_of_ascending_node_deg,
        argument_of_periapsis_deg=argument_of_periapsis_deg,
        central_body_mass=central_body_mass,
        epoch=epoch,
        mean_longitude_at_epoch_deg=mean_longitude_at_epoch_deg,
    )
    if gravitational_constant is None:
        gravitational_constant = GRAVITATIONAL_CONSTANT
    return OrbitModel.from_elements(elements, major_focus, gravitational_constant)
