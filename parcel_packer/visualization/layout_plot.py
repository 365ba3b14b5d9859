"""
Plotly-based 3D visualisation of items inside a packed box.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Sequence, Tuple

import plotly.graph_objects as go
import plotly.io as pio
from plotly.colors import qualitative

from parcel_packer.core.utils_geometry import Placement
from parcel_packer.models.solution import PackedBox

DEFAULT_COLOR_SEQUENCE = qualitative.Light24

_CUBOID_EDGES = (
    (0, 1),
    (1, 2),
    (2, 3),
    (3, 0),
    (4, 5),
    (5, 6),
    (6, 7),
    (7, 4),
    (0, 4),
    (1, 5),
    (2, 6),
    (3, 7),
)

_AXIS_STYLE = dict(
    backgroundcolor="#f2f5fb",
    gridcolor="#cbd5e0",
    zerolinecolor="#a0aec0",
)


def _prism_vertices(
    x: float, y: float, z: float, dx: float, dy: float, dz: float
) -> Tuple[List[float], List[float], List[float]]:
    xs = [x, x + dx, x + dx, x, x, x + dx, x + dx, x]
    ys = [y, y, y + dy, y + dy, y, y, y + dy, y + dy]
    zs = [z, z, z, z, z + dz, z + dz, z + dz, z + dz]
    return xs, ys, zs


def _color_for_index(index: int) -> str:
    return DEFAULT_COLOR_SEQUENCE[index % len(DEFAULT_COLOR_SEQUENCE)]


def _mesh_from_placement(placement: Placement, color: str, label: str) -> go.Mesh3d:
    xs, ys, zs = _prism_vertices(placement.x, placement.y, placement.z, *placement.orientation)
    dx, dy, dz = placement.orientation
    hover = (
        f"{label}<br>at ({placement.x:g}, {placement.y:g}, {placement.z:g})"
        f"<br>{dx:g} x {dy:g} x {dz:g} cm, {placement.item.weight:g} kg"
    )
    return go.Mesh3d(
        x=xs,
        y=ys,
        z=zs,
        i=[0, 0, 4, 4, 0, 1, 2, 3, 0, 0, 1, 2],
        j=[1, 2, 5, 6, 1, 2, 3, 0, 4, 3, 5, 6],
        k=[2, 3, 6, 7, 5, 6, 7, 4, 5, 7, 6, 7],
        color=color,
        opacity=0.85,
        name=label,
        flatshading=True,
        lighting=dict(ambient=0.7, diffuse=0.9, specular=0.1),
        hovertemplate=f"{hover}<extra></extra>",
        showscale=False,
    )


def _wireframe(
    xs: Sequence[float],
    ys: Sequence[float],
    zs: Sequence[float],
    name: str,
    color: str,
    width: float,
    showlegend: bool,
) -> go.Scatter3d:
    x_coords: List[Optional[float]] = []
    y_coords: List[Optional[float]] = []
    z_coords: List[Optional[float]] = []
    for start, end in _CUBOID_EDGES:
        x_coords.extend([xs[start], xs[end], None])
        y_coords.extend([ys[start], ys[end], None])
        z_coords.extend([zs[start], zs[end], None])

    return go.Scatter3d(
        x=x_coords,
        y=y_coords,
        z=z_coords,
        mode="lines",
        line=dict(color=color, width=width),
        name=name,
        showlegend=showlegend,
        hoverinfo="skip",
    )


def _edge_trace(placement: Placement, name: str) -> go.Scatter3d:
    xs, ys, zs = _prism_vertices(placement.x, placement.y, placement.z, *placement.orientation)
    return _wireframe(xs, ys, zs, name=name, color="#000000", width=2.5, showlegend=False)


def _container_wireframe(dx: float, dy: float, dz: float, name: str) -> go.Scatter3d:
    xs, ys, zs = _prism_vertices(0, 0, 0, dx, dy, dz)
    return _wireframe(xs, ys, zs, name=name, color="#2d3748", width=4, showlegend=True)


def packed_box_figure(packed_box: PackedBox, title: Optional[str] = None) -> go.Figure:
    """Interior wireframe of the box plus one coloured prism per placed item."""
    fig = go.Figure()
    fig.add_trace(
        _container_wireframe(
            packed_box.length,
            packed_box.width,
            packed_box.height,
            name=f"{packed_box.destination} box",
        )
    )
    for index, placement in enumerate(packed_box.placements):
        label = f"Item {placement.item.id}"
        fig.add_trace(_mesh_from_placement(placement, _color_for_index(index), label))
        fig.add_trace(_edge_trace(placement, label))

    fig.update_layout(
        title=title
        or (
            f"{packed_box.destination}: {packed_box.length:g} x {packed_box.width:g} x "
            f"{packed_box.height:g} cm, {packed_box.weight:.2f} kg"
        ),
        scene=dict(
            xaxis_title="Length (cm)",
            yaxis_title="Width (cm)",
            zaxis_title="Height (cm)",
            aspectmode="data",
            xaxis=_AXIS_STYLE,
            yaxis=_AXIS_STYLE,
            zaxis=_AXIS_STYLE,
        ),
        paper_bgcolor="#f7f9fc",
        plot_bgcolor="#f7f9fc",
        legend=dict(
            bgcolor="rgba(255,255,255,0.8)",
            bordercolor="#cbd5e0",
            borderwidth=1,
        ),
        margin=dict(l=0, r=0, t=40, b=0),
    )
    return fig


def save_figure_image(fig: go.Figure, output_path: str | Path, width: int = 900, height: int = 650) -> None:
    """
    Persist a figure to disk as a static PNG using Kaleido.
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    pio.write_image(fig, str(output_path), format="png", width=width, height=height, scale=2)
