from __future__ import annotations

from dataclasses import dataclass

from orbit_sim.simulation.scenario import Scenario
from orbit_sim.simulation.engine import SimulationLog


@dataclass
class PositionRecorderSystem:
    name: str = "position_recorder"

    def on_step(self, t: float, scenario: Scenario, log: SimulationLog) -> None:
        for orbit_id, orbit in scenario.orbit_items():
            log.record_position(orbit_id, t, orbit.position_at(t))


@dataclass
class PeriapsisPassageSystem:
    """
    Records a 'periapsis' event on the tick where an orbit's mean anomaly
    wraps around (i.e. the body passed periapsis since the previous tick).

    A tick at or before the previous one (a new run reusing this system)
    starts tracking afresh instead of comparing against stale state.
    """
    name: str = "periapsis_passage"

    def __post_init__(self):
        self._last_mean_anomaly = {}
        self._last_t = {}

    def on_step(self, t: float, scenario: Scenario, log: SimulationLog) -> None:
        for orbit_id, orbit in scenario.orbit_items():
            M = orbit.mean_anomaly_at(t)
            last = self._last_mean_anomaly.get(orbit_id)
            last_t = self._last_t.get(orbit_id)
            if last is not None and t > last_t and M < last:
                log.record_event(t, "periapsis", orbit_id=orbit_id)
            self._last_mean_anomaly[orbit_id] = M
            self._last_t[orbit_id] = t
