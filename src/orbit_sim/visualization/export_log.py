from __future__ import annotations

import json
from dataclasses import asdict
from pathlib import Path
from typing import Any, Dict

from orbit_sim.objects.orbit_model import OrbitModel
from orbit_sim.simulation.engine import SimulationLog


def export_log_to_json(log: SimulationLog, out_path: str = "out/orbitlog.json") -> str:
    """
    Export minimal playback data:
      {
        "positions": {
          "ORB-001": [{"t":0.0,"r":[x,y,z]}, ...],
          ...
        },
        "events": [{"t": ..., "kind": ..., ...}, ...]
      }
    """
    data: Dict[str, Any] = {"positions": {}, "events": list(log.events)}

    for orbit_id, samples in log.positions.items():
        data["positions"][orbit_id] = [{"t": t, "r": [r[0], r[1], r[2]]} for (t, r) in samples]

    Path(out_path).parent.mkdir(parents=True, exist_ok=True)
    with open(out_path, "w", encoding="utf-8") as f:
        json.dump(data, f)

    return out_path


def export_orbit_geometry_to_json(
    orbit: OrbitModel,
    samples: int = 128,
    out_path: str = "out/orbit_geometry.json",
) -> str:
    """
    Export everything a drawing front end needs for one orbit:

    {
      "elements": {...},                       # degrees at the boundary
      "major_focus": [x,y,z], "minor_focus": [...], "center": [...],
      "periapsis": [...], "apoapsis": [...],
      "ascending_node": [...], "descending_node": [...],
      "orbital_period": T,
      "boundary_3d": [[x,y,z], ...],           # samples + 1, closed
      "boundary_2d": [[x,z], ...],
      "plane_triangles": [[x,y,z], ...]        # three points per face
    }
    """
    def vec(v):
        return [v[0], v[1], v[2]]

    data: Dict[str, Any] = {
        "elements": asdict(orbit.elements),
        "major_focus": vec(orbit.major_focus),
        "minor_focus": vec(orbit.minor_focus),
        "center": vec(orbit.center),
        "periapsis": vec(orbit.periapsis_position),
        "apoapsis": vec(orbit.apoapsis_position),
        "ascending_node": vec(orbit.ascending_node_position),
        "descending_node": vec(orbit.descending_node_position),
        "orbital_period": orbit.orbital_period,
        "boundary_3d": [vec(p) for p in orbit.sample_boundary_3d(samples)],
        "boundary_2d": [[p[0], p[1]] for p in orbit.sample_boundary_2d(samples)],
        "plane_triangles": [vec(p) for p in orbit.triangulate_plane(samples)],
    }

    Path(out_path).parent.mkdir(parents=True, exist_ok=True)
    with open(out_path, "w", encoding="utf-8") as f:
        json.dump(data, f)

    return out_path
