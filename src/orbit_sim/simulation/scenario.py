from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from orbit_sim.objects.orbit_model import OrbitModel


@dataclass
class Scenario:
    """
    Container for all orbits in a simulation run.
    Keep this pure: just data + lookup, no stepping logic.
    """
    name: str
    orbits: Dict[str, OrbitModel] = field(default_factory=dict)

    def add_orbit(self, orbit_id: str, orbit: OrbitModel) -> None:
        if not orbit_id.strip():
            raise ValueError("Orbit ID cannot be empty or whitespace.")
        if orbit_id in self.orbits:
            raise ValueError(f"Duplicate orbit ID: {orbit_id}")
        self.orbits[orbit_id] = orbit

    def orbit_list(self) -> List[OrbitModel]:
        return list(self.orbits.values())

    def orbit_items(self) -> List[Tuple[str, OrbitModel]]:
        return list(self.orbits.items())
