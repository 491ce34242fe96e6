"""Linear chromosome plot: backbones, SV spans and connecting curves."""

from __future__ import annotations

import warnings
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Tuple, Union

import numpy as np
from matplotlib import rc_context
from matplotlib.collections import LineCollection
from matplotlib.figure import Figure

from syriplot.config import LINEAR_COLORS
from syriplot.registry import ChromosomeRegistry
from syriplot.svtable import ValidatedSVTable
from syriplot.viz.geometry import curve_points

try:
    import plotly.graph_objects as go
    HAS_PLOTLY = True
except ImportError:
    HAS_PLOTLY = False


TITLE = "Structural Variants (Validated Connections)"
SUBTITLE = "Red: Reference Genome | Blue: Query Genome | Purple: Links"
CURVATURE = 0.2


@dataclass
class LinearPlot:
    """Container for linear plot data and rendering."""

    registry: ChromosomeRegistry
    table: ValidatedSVTable
    colors: Dict[str, str] = field(default_factory=lambda: dict(LINEAR_COLORS))
    size: Tuple[int, int] = (2000, 1200)
    dpi: int = 300

    @property
    def x_max(self) -> float:
        return max(entry.length for entry in self.registry)

    def backbones(self) -> List[List[Tuple[float, float]]]:
        return [[(0.0, i), (entry.length, i)] for i, entry in enumerate(self.registry)]

    def spans(self) -> Tuple[list, list]:
        """Reference and query segments as ``[(x0, y), (x1, y)]`` pairs."""
        codes_a, codes_b = self.table.chromosome_codes()
        reference = [[(r.start_a, ya), (r.end_a, ya)] for r, ya in zip(self.table, codes_a)]
        query = [[(r.start_b, yb), (r.end_b, yb)] for r, yb in zip(self.table, codes_b)]
        return reference, query

    def curves(self, n: int = 50) -> List[np.ndarray]:
        """Connector polylines from each reference start to its query start."""
        codes_a, codes_b = self.table.chromosome_codes()
        y_scale = max(1, len(self.registry) - 1)
        out = []
        for record, ya, yb in zip(self.table, codes_a, codes_b):
            xs, ys = curve_points(
                record.start_a, ya, record.start_b, yb,
                curvature=CURVATURE, n=n, x_scale=self.x_max, y_scale=y_scale,
            )
            out.append(np.column_stack([xs, ys]))
        return out

    def to_matplotlib(self) -> Figure:
        """Draw the plot on a matplotlib figure sized to the canvas."""
        if len(self.table) == 0:
            warnings.warn("no validated SVs; drawing chromosome backbones only", UserWarning, stacklevel=2)

        width, height = self.size
        fig = Figure(figsize=(width / self.dpi, height / self.dpi), dpi=self.dpi)
        ax = fig.add_subplot()

        ax.add_collection(LineCollection(self.backbones(), linewidths=3, colors=self.colors["backbone"], zorder=1))
        ax.add_collection(LineCollection(
            self.curves(), linewidths=0.8, colors=self.colors["link"], alpha=0.8, zorder=2,
        ))
        reference, query = self.spans()
        ax.add_collection(LineCollection(reference, linewidths=1.5, colors=self.colors["reference"], zorder=3))
        ax.add_collection(LineCollection(query, linewidths=1.5, colors=self.colors["query"], zorder=3))

        n = len(self.registry)
        ax.set_xlim(0, self.x_max * 1.02)
        ax.set_ylim(-0.6, n - 0.4)
        ax.set_yticks(range(n))
        ax.set_yticklabels(self.registry.names, fontsize=4)
        ax.tick_params(axis="x", labelsize=4)
        ax.xaxis.get_offset_text().set_fontsize(4)
        ax.set_xlabel("Position (bp)", fontsize=5)
        ax.set_ylabel("Chromosome", fontsize=5)
        ax.grid(axis="y", color="#E5E5E5", linewidth=0.5)
        ax.set_axisbelow(True)
        for spine in ax.spines.values():
            spine.set_visible(False)

        fig.suptitle(TITLE, fontsize=6)
        ax.set_title(SUBTITLE, fontsize=4)
        return fig

    def save_png(self, filepath: Union[str, Path]) -> Path:
        """Render to a PNG file of exactly ``size`` pixels."""
        filepath = Path(filepath)
        fig = self.to_matplotlib()
        # pycirclize switches savefig.bbox to "tight" on import; keep the full canvas.
        with rc_context({"savefig.bbox": "standard"}):
            fig.savefig(filepath, dpi=self.dpi, format="png")
        return filepath

    def to_figure(self, title: str = TITLE) -> "go.Figure":
        """Create an interactive Plotly figure of the same content."""
        if not HAS_PLOTLY:
            raise ImportError("plotly is required for interactive plots")

        fig = go.Figure()
        fig.add_trace(go.Scatter(
            x=_join([[p[0] for p in seg] for seg in self.backbones()]),
            y=_join([[p[1] for p in seg] for seg in self.backbones()]),
            mode="lines", line=dict(width=8, color=self.colors["backbone"]),
            name="Chromosome", hoverinfo="skip",
        ))

        curves = self.curves()
        if curves:
            fig.add_trace(go.Scatter(
                x=_join([c[:, 0].tolist() for c in curves]),
                y=_join([c[:, 1].tolist() for c in curves]),
                mode="lines", line=dict(width=1, color=self.colors["link"]),
                opacity=0.8, name="Links", hoverinfo="skip",
            ))

        reference, query = self.spans()
        ref_hover = [f"{r.chr_a}:{r.start_a}-{r.end_a} ({r.sv_type.value})" for r in self.table]
        query_hover = [f"{r.chr_b}:{r.start_b}-{r.end_b} ({r.sv_type.value})" for r in self.table]
        for label, segs, color, hover in (
            ("Reference", reference, self.colors["reference"], ref_hover),
            ("Query", query, self.colors["query"], query_hover),
        ):
            if not segs:
                continue
            fig.add_trace(go.Scatter(
                x=_join([[p[0] for p in seg] for seg in segs]),
                y=_join([[p[1] for p in seg] for seg in segs]),
                text=_join([[h, h] for h in hover]),
                mode="lines", line=dict(width=4, color=color),
                name=label, hovertemplate="%{text}<extra></extra>",
            ))

        width, height = self.size
        fig.update_layout(
            title=f"{title}<br><sup>{SUBTITLE}</sup>",
            xaxis_title="Position (bp)", yaxis_title="Chromosome",
            width=width // 2, height=height // 2, template="plotly_white",
        )
        fig.update_yaxes(
            tickmode="array", tickvals=list(range(len(self.registry))),
            ticktext=self.registry.names,
        )
        return fig

    def to_html(self, filepath: Union[str, Path], **kwargs) -> None:
        """Save the plot as an interactive HTML file."""
        fig = self.to_figure(**kwargs)
        fig.write_html(str(filepath))


def _join(parts: List[list]) -> list:
    """Concatenate polylines with ``None`` breaks for a single Plotly trace."""
    out: list = []
    for part in parts:
        out.extend(part)
        out.append(None)
    return out


def render_linear_plot(
    registry: ChromosomeRegistry, table: ValidatedSVTable, filepath: Union[str, Path],
    size: Tuple[int, int] = (2000, 1200), dpi: int = 300,
) -> Path:
    """Write the linear SV plot as a PNG and return its path."""
    plot = LinearPlot(registry=registry, table=table, size=size, dpi=dpi)
    return plot.save_png(filepath)
