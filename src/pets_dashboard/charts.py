"""Server-side SVG charts for the dashboard (matplotlib, no pyplot state)."""
from __future__ import annotations
import io
from typing import Sequence

import matplotlib
from matplotlib.figure import Figure

from .models import ChartPoint

COLORS = ["#0088FE", "#00C49F", "#FFBB28", "#FF8042", "#8884d8"]
BAR_COLOR = "#8884d8"
FIGSIZE = (4, 4)

# labels as <text>, not glyph paths
matplotlib.rcParams["svg.fonttype"] = "none"


def _to_svg(fig: Figure) -> str:
    buf = io.StringIO()
    fig.savefig(buf, format="svg", bbox_inches="tight")
    svg = buf.getvalue()
    # drop the XML prolog/doctype so the markup can be inlined in HTML
    start = svg.find("<svg")
    return svg[start:] if start >= 0 else svg


def _empty(fig: Figure) -> str:
    ax = fig.subplots()
    ax.axis("off")
    ax.text(0.5, 0.5, "No data", ha="center", va="center")
    return _to_svg(fig)


def pie_chart_svg(points: Sequence[ChartPoint]) -> str:
    """Pie of share per name, labelled 'Dog 60%'."""
    fig = Figure(figsize=FIGSIZE)
    total = sum(p["value"] for p in points)
    if not total:
        return _empty(fig)
    ax = fig.subplots()
    labels = [f"{p['name']} {p['value'] / total * 100:.0f}%" for p in points]
    colors = [COLORS[i % len(COLORS)] for i in range(len(points))]
    ax.pie([p["value"] for p in points], labels=labels, colors=colors)
    ax.set_aspect("equal")
    return _to_svg(fig)


def bar_chart_svg(points: Sequence[ChartPoint]) -> str:
    fig = Figure(figsize=FIGSIZE)
    if not points:
        return _empty(fig)
    ax = fig.subplots()
    ax.bar([p["name"] for p in points], [p["value"] for p in points], color=BAR_COLOR)
    ax.grid(True, linestyle="--", alpha=0.5)
    ax.set_axisbelow(True)
    ax.set_ylabel("count")
    return _to_svg(fig)
