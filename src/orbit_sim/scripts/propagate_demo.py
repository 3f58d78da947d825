from orbit_sim.objects.orbit_model import create

orbit = create(
    major_focus=(0.0, 0.0, 0.0),
    semi_major_axis=7000.0,
    eccentricity=0.001,
    inclination_deg=51.6,
    longitude_of_ascending_node_deg=30.0,
    argument_of_periapsis_deg=40.0,
    central_body_mass=5.972e24,
    gravitational_constant=6.67430e-20,  # km^3 / (kg s^2)
)

for t in [0, 600, 1200, 1800]:
    r = orbit.position_at(float(t))
    print(t, r)
