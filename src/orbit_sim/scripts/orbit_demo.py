import logging

from orbit_sim.logging_config import setup_logging
from orbit_sim.objects.orbit_model import OrbitModel, create
from orbit_sim.simulation.scenario import Scenario
from orbit_sim.simulation.engine import Engine
from orbit_sim.simulation.systems.state_recorder import PeriapsisPassageSystem, PositionRecorderSystem
from orbit_sim.visualization.export_log import export_log_to_json, export_orbit_geometry_to_json
from orbit_sim.visualization.plotly_viewer import render_animated_orbit, render_orbit_scene

# Scene units: G is scaled so one revolution takes a few hundred time units
SCENE_G = 1000.0

logger = setup_logging(logging.INFO)

orbit = create(
    major_focus=(450.0, 150.0, 0.0),
    semi_major_axis=300.0,
    eccentricity=0.75,
    inclination_deg=20.0,
    longitude_of_ascending_node_deg=25.0,
    argument_of_periapsis_deg=0.0,
    central_body_mass=10.0,
    epoch=0.0,
    mean_longitude_at_epoch_deg=0.0,
    gravitational_constant=SCENE_G,
)


def on_change(model: OrbitModel, element: str) -> None:
    logger.info("Element %s changed: %r", element, model)


orbit.subscribe(on_change)
orbit.set_eccentricity(1.2)  # rejected, logged as a warning
orbit.set_inclination(30.0)

logger.info("Period: %.3f, periapsis: %.3f, apoapsis: %.3f", orbit.orbital_period, orbit.periapsis, orbit.apoapsis)

scenario = Scenario(name="Orbit Demo")
scenario.add_orbit("ORB-001", orbit)

engine = Engine(dt=orbit.orbital_period / 200.0, systems=[PositionRecorderSystem(), PeriapsisPassageSystem()])
log = engine.run(scenario, t_start=0.0, t_end=2.0 * orbit.orbital_period)

paths = [
    render_orbit_scene(orbit, out_html="out/orbit_scene.html", body_time=0.25 * orbit.orbital_period),
    render_animated_orbit(log, "ORB-001", orbit=orbit, out_html="out/orbit_animated.html"),
    export_log_to_json(log, out_path="out/orbitlog.json"),
    export_orbit_geometry_to_json(orbit, out_path="out/orbit_geometry.json"),
]

for path in paths:
    logger.info("Wrote %s", path)
