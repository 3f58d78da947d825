from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Protocol, Tuple

from orbit_sim.core.vector import Vector3
from orbit_sim.simulation.scenario import Scenario

logger = logging.getLogger(__name__)


class System(Protocol):
    """
    Plugin interface for simulation systems.
    Each system runs per tick and can write to the log.
    """
    name: str

    def on_step(self, t: float, scenario: Scenario, log: "SimulationLog") -> None:
        ...


@dataclass
class SimulationLog:
    """
    Stores outputs from a simulation run.
    Keep it simple and serializable.
    """
    # Positions: orbit_id -> list of (t, position)
    positions: Dict[str, List[Tuple[float, Vector3]]] = field(default_factory=dict)

    # Free-form events
    events: List[Dict[str, Any]] = field(default_factory=list)

    def record_position(self, orbit_id: str, t: float, r: Vector3) -> None:
        self.positions.setdefault(orbit_id, []).append((t, r))

    def record_event(self, t: float, kind: str, **data: Any) -> None:
        self.events.append({"t": t, "kind": kind, **data})


@dataclass
class Engine:
    """
    Fixed-step simulation engine.
    Deterministic replay: given same scenario + dt + start/end => same output.
    """
    dt: float
    systems: List[System] = field(default_factory=list)

    def run(self, scenario: Scenario, t_start: float, t_end: float) -> SimulationLog:
        if self.dt <= 0:
            raise ValueError("dt must be positive.")
        if t_end < t_start:
            raise ValueError("t_end must be >= t_start.")

        log = SimulationLog()
        logger.info(
            "Running scenario '%s' from t=%g to t=%g (dt=%g, %d systems)",
            scenario.name, t_start, t_end, self.dt, len(self.systems),
        )

        # Inclusive end if it lands exactly; otherwise last tick < end.
        # Tick times are t_start + k*dt so rounding does not accumulate.
        k = 0
        t = t_start
        while t <= t_end + 1e-9:
            for sys in self.systems:
                sys.on_step(t, scenario, log)
            k += 1
            t = t_start + k * self.dt

        logger.info("Scenario '%s' finished after %d ticks", scenario.name, k)
        return log
