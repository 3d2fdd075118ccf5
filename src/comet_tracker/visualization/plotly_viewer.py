from __future__ import annotations

from pathlib import Path
from typing import List, Tuple

import plotly.graph_objects as go

from comet_tracker.core.frames import Vector3
from comet_tracker.simulation.engine import SimulationLog


def to_scene(r_au: Vector3, scale: float = 1.0) -> Vector3:
    """Ecliptic AU -> scene units. Plotly's z axis is already "up", so only scale."""
    return (r_au[0] * scale, r_au[1] * scale, r_au[2] * scale)


def _unavailable_summary(log: SimulationLog) -> List[Tuple[str, int]]:
    counts: dict = {}
    for ev in log.events:
        if ev["type"] == "unavailable":
            counts[ev["body_id"]] = counts.get(ev["body_id"], 0) + 1
    return sorted(counts.items())


def build_static_figure(log: SimulationLog, scale: float = 1.0, show_sun: bool = True) -> go.Figure:
    """
    Static 3D scene:
      - Sun at the origin
      - Track for each body
      - Last available position marker for each body
      - An "unavailable" note for bodies that dropped frames
    """
    fig = go.Figure()

    if show_sun:
        fig.add_trace(go.Scatter3d(
            x=[0.0], y=[0.0], z=[0.0],
            mode="markers",
            name="Sun",
            marker=dict(size=8, color="orange"),
        ))

    for body_id, samples in log.body_positions_au.items():
        if not samples:
            continue
        pts = [to_scene(r, scale) for (_jd, r) in samples]
        xs = [p[0] for p in pts]
        ys = [p[1] for p in pts]
        zs = [p[2] for p in pts]

        fig.add_trace(go.Scatter3d(
            x=xs, y=ys, z=zs,
            mode="lines",
            name=f"{body_id} track",
        ))

        fig.add_trace(go.Scatter3d(
            x=[xs[-1]], y=[ys[-1]], z=[zs[-1]],
            mode="markers",
            name=f"{body_id} now",
            marker=dict(size=5),
        ))

    missing = _unavailable_summary(log)
    if missing:
        text = "<br>".join(f"{body_id}: unavailable for {n} tick(s)" for body_id, n in missing)
        fig.add_annotation(text=text, xref="paper", yref="paper", x=0.0, y=1.0,
                           showarrow=False, align="left", font=dict(color="red"))

    fig.update_layout(
        title="Comet Tracker (Static Scene)",
        scene=dict(
            xaxis_title="X (AU)",
            yaxis_title="Y (AU)",
            zaxis_title="Z (AU)",
            aspectmode="data",
        ),
        margin=dict(l=0, r=0, t=40, b=0),
        legend=dict(orientation="h"),
    )
    return fig


def render_static_scene(log: SimulationLog, out_html: str = "out/tracker_scene.html",
                        scale: float = 1.0, show_sun: bool = True) -> str:
    fig = build_static_figure(log, scale=scale, show_sun=show_sun)
    Path(out_html).parent.mkdir(parents=True, exist_ok=True)
    fig.write_html(out_html, auto_open=False)
    return out_html


def build_animated_figure(log: SimulationLog, body_id: str, scale: float = 1.0) -> go.Figure:
    """
    Animated 3D scene for ONE body:
      - Sun
      - Full track
      - A moving marker across ticks
    """
    if body_id not in log.body_positions_au:
        raise ValueError(f"body_id '{body_id}' not found in log.body_positions_au")

    samples = log.body_positions_au[body_id]
    times = [jd for (jd, _r) in samples]
    pts = [to_scene(r, scale) for (_jd, r) in samples]
    xs = [p[0] for p in pts]
    ys = [p[1] for p in pts]
    zs = [p[2] for p in pts]

    fig = go.Figure()
    fig.add_trace(go.Scatter3d(x=[0.0], y=[0.0], z=[0.0], mode="markers", name="Sun",
                               marker=dict(size=8, color="orange")))
    fig.add_trace(go.Scatter3d(x=xs, y=ys, z=zs, mode="lines", name=f"{body_id} track"))
    fig.add_trace(go.Scatter3d(
        x=[xs[0]], y=[ys[0]], z=[zs[0]],
        mode="markers",
        name=f"{body_id} marker",
        marker=dict(size=6),
    ))

    # Frames update the marker trace (the last trace)
    fig.frames = [
        go.Frame(
            name=str(i),
            data=[go.Scatter3d(x=[xs[i]], y=[ys[i]], z=[zs[i]], mode="markers", marker=dict(size=6))],
            traces=[2],
        )
        for i in range(len(times))
    ]

    fig.update_layout(
        title=f"Comet Tracker (Animated): {body_id}",
        scene=dict(xaxis_title="X (AU)", yaxis_title="Y (AU)", zaxis_title="Z (AU)", aspectmode="data"),
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
                        label=f"JD {times[i]:.1f}") for i in range(0, len(times), max(1, len(times)//20))],
            active=0
        )]
    )
    return fig


def render_animated_body(log: SimulationLog, body_id: str,
                         out_html: str = "out/tracker_animated.html", scale: float = 1.0) -> str:
    fig = build_animated_figure(log, body_id, scale=scale)
    Path(out_html).parent.mkdir(parents=True, exist_ok=True)
    fig.write_html(out_html, auto_open=False)
    return out_html
