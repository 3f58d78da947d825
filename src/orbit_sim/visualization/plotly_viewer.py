from __future__ import annotations

import math
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

import plotly.graph_objects as go

from orbit_sim.core.vector import Vector3
from orbit_sim.objects.orbit_model import OrbitModel
from orbit_sim.simulation.engine import SimulationLog


def _plot_xyz(points: Sequence[Vector3]) -> Tuple[List[float], List[float], List[float]]:
    # World +Y (reference-plane normal) is drawn as plotly's vertical z axis
    xs = [p[0] for p in points]
    ys = [p[2] for p in points]
    zs = [p[1] for p in points]
    return xs, ys, zs


def _body_mesh(center: Vector3, radius: float, n_lat: int = 16, n_lon: int = 32):
    # Sphere mesh (parametric) for the central body
    lats = [(-math.pi / 2) + i * (math.pi / (n_lat - 1)) for i in range(n_lat)]
    lons = [(-math.pi) + j * (2 * math.pi / (n_lon - 1)) for j in range(n_lon)]

    x, y, z = [], [], []
    for lat in lats:
        row_x, row_y, row_z = [], [], []
        for lon in lons:
            row_x.append(center.x + radius * math.cos(lat) * math.cos(lon))
            row_y.append(center.z + radius * math.cos(lat) * math.sin(lon))
            row_z.append(center.y + radius * math.sin(lat))
        x.append(row_x)
        y.append(row_y)
        z.append(row_z)
    return x, y, z


def _marker(point: Vector3, name: str, size: int = 5) -> go.Scatter3d:
    xs, ys, zs = _plot_xyz([point])
    return go.Scatter3d(x=xs, y=ys, z=zs, mode="markers", name=name, marker=dict(size=size))


def _plane_mesh(triangles: Sequence[Vector3], name: str = "Orbital plane") -> go.Mesh3d:
    """Triangle soup (flat list, three points per face) as a Mesh3d trace."""
    xs, ys, zs = _plot_xyz(triangles)
    n_faces = len(triangles) // 3
    return go.Mesh3d(
        x=xs, y=ys, z=zs,
        i=[3 * f for f in range(n_faces)],
        j=[3 * f + 1 for f in range(n_faces)],
        k=[3 * f + 2 for f in range(n_faces)],
        opacity=0.2,
        name=name,
        showscale=False,
    )


def build_orbit_figure(
    orbit: OrbitModel,
    samples: int = 128,
    show_plane: bool = True,
    show_apsides: bool = True,
    show_nodes: bool = True,
    body_time: Optional[float] = None,
    body_radius: Optional[float] = None,
    title: str = "Keplerian Orbit",
) -> go.Figure:
    """
    Builds a static 3D figure of one orbit:
      - central body sphere at the major focus
      - orbit boundary line (sample_boundary_3d)
      - optional filled orbital plane (triangulate_plane)
      - optional apsis / node markers
      - optional body marker at body_time
    """
    fig = go.Figure()

    radius = body_radius if body_radius is not None else 0.05 * orbit.periapsis
    bx, by, bz = _body_mesh(orbit.major_focus, radius)
    fig.add_trace(go.Surface(x=bx, y=by, z=bz, showscale=False, opacity=0.6, name="Central body"))

    boundary = orbit.sample_boundary_3d(samples)
    xs, ys, zs = _plot_xyz(boundary)
    fig.add_trace(go.Scatter3d(x=xs, y=ys, z=zs, mode="lines", name="Orbit"))

    if show_plane:
        fig.add_trace(_plane_mesh(orbit.triangulate_plane(samples)))

    if show_apsides:
        fig.add_trace(_marker(orbit.periapsis_position, "Periapsis"))
        fig.add_trace(_marker(orbit.apoapsis_position, "Apoapsis"))

    if show_nodes:
        fig.add_trace(_marker(orbit.ascending_node_position, "Ascending node"))
        fig.add_trace(_marker(orbit.descending_node_position, "Descending node"))

    if body_time is not None:
        fig.add_trace(_marker(orbit.position_at(body_time), f"Body @ t={body_time:g}", size=7))

    fig.update_layout(
        title=title,
        scene=dict(
            xaxis_title="X",
            yaxis_title="Z",
            zaxis_title="Y (up)",
            aspectmode="data",
        ),
        margin=dict(l=0, r=0, t=40, b=0),
        legend=dict(orientation="h"),
    )
    return fig


def render_orbit_scene(
    orbit: OrbitModel,
    out_html: str = "out/orbit_scene.html",
    samples: int = 128,
    **figure_kwargs,
) -> str:
    """Writes build_orbit_figure(...) to an HTML file and returns its path."""
    fig = build_orbit_figure(orbit, samples=samples, **figure_kwargs)
    Path(out_html).parent.mkdir(parents=True, exist_ok=True)
    fig.write_html(out_html, auto_open=False)
    return out_html


def render_animated_orbit(
    log: SimulationLog,
    orbit_id: str,
    orbit: Optional[OrbitModel] = None,
    out_html: str = "out/orbit_animated.html",
    samples: int = 128,
) -> str:
    """
    Renders an animated 3D scene for ONE orbit:
      - orbit boundary (from the model if given, else the logged track)
      - a moving marker across the logged timesteps
    """
    if orbit_id not in log.positions:
        raise ValueError(f"orbit_id '{orbit_id}' not found in log.positions")

    track = log.positions[orbit_id]
    times = [t for (t, _r) in track]
    xs, ys, zs = _plot_xyz([r for (_t, r) in track])

    fig = go.Figure()

    if orbit is not None:
        lx, ly, lz = _plot_xyz(orbit.sample_boundary_3d(samples))
    else:
        lx, ly, lz = xs, ys, zs
    fig.add_trace(go.Scatter3d(x=lx, y=ly, z=lz, mode="lines", name=f"{orbit_id} orbit"))

    fig.add_trace(go.Scatter3d(
        x=[xs[0]], y=[ys[0]], z=[zs[0]],
        mode="markers",
        name=f"{orbit_id} body",
        marker=dict(size=6),
    ))

    # Frames update the marker trace (index 1)
    frames = []
    for i in range(len(times)):
        frames.append(go.Frame(
            name=str(i),
            data=[go.Scatter3d(x=[xs[i]], y=[ys[i]], z=[zs[i]], mode="markers", marker=dict(size=6))],
            traces=[1],
        ))
    fig.frames = frames

    fig.update_layout(
        title=f"Animated Playback: {orbit_id}",
        scene=dict(xaxis_title="X", yaxis_title="Z", zaxis_title="Y (up)", aspectmode="data"),
        margin=dict(l=0, r=0, t=40, b=0),
        updatemenus=[dict(
            type="buttons",
            showactive=True,
            buttons=[
                dict(label="Play", method="animate",
                     args=[None, {"frame": {"duration": 50, "redraw": True}, "fromcurrent": True}]),
                dict(label="Pause", method="animate",
                     args=[[None], {"frame": {"duration": 0, "redraw": False}, "mode": "immediate"}]),
            ],
        )],
        sliders=[dict(
            steps=[dict(method="animate", args=[[str(i)], {"mode": "immediate", "frame": {"duration": 0, "redraw": True}}],
                        label=f"{times[i]:g}") for i in range(0, len(times), max(1, len(times) // 20))],
            active=0,
        )],
    )

    Path(out_html).parent.mkdir(parents=True, exist_ok=True)
    fig.write_html(out_html, auto_open=False)
    return out_html
