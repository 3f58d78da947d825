from __future__ import annotations

from orbit_sim.core.vector import Vector3

# Newtonian gravitational constant (SI). Masses handed to OrbitModel are
# scaled by the caller so that mu = G * M lands in scene units.
GRAVITATIONAL_CONSTANT: float = 6.67430e-11

# World frame is right-handed with +Y as the reference-plane normal.
UP: Vector3 = Vector3(0.0, 1.0, 0.0)

# Line of nodes before the node rotation is applied.
LINE_OF_NODES: Vector3 = Vector3(1.0, 0.0, 0.0)

# Sign of the body-frame z component. -1 makes prograde motion
# counter-clockwise when looking down from +Y.
AXIS_Z: float = -1.0

# Kepler solver
KEPLER_MAX_ITER: int = 10
KEPLER_TOL: float = 1e-10

# A closed polygon needs at least three distinct points
MIN_BOUNDARY_SAMPLES: int = 3
