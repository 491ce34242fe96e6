"""Circos plot: chromosome sectors joined by one link per SV."""

from __future__ import annotations

import warnings
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Tuple, Union

from matplotlib import rc_context
from matplotlib.colors import to_rgba
from matplotlib.figure import Figure
from matplotlib.patches import Patch
from pycirclize import Circos

from syriplot.config import DEFAULT_SV_COLORS
from syriplot.registry import ChromosomeRegistry
from syriplot.svtable import SV_TYPE_ORDER, SVType, ValidatedSVTable
from syriplot.viz.geometry import GAP_DEGREES, START_DEGREES, SectorLayout

try:
    import plotly.graph_objects as go
    HAS_PLOTLY = True
except ImportError:
    HAS_PLOTLY = False


TITLE = "Circos Plot of Validated Structural Variants"
LEGEND_TITLE = "Variant Type"

FILL_ALPHA = 0.25
# R lwd 3.5 at 300 dpi; one lwd unit is 1/96 inch (0.75 pt).
LINK_LINEWIDTH = 3.5 * 0.75
HEIGHT_RATIO = 0.5

# pycirclize radii (0-100).
TRACK_RADII = (92, 100)
LINK_RADIUS = 90
LABEL_RADIUS = 108

SECTOR_PALETTE = [
    "#8DD3C7", "#FFFFB3", "#BEBADA", "#FB8072", "#80B1D3", "#FDB462",
    "#B3DE69", "#FCCDE5", "#D9D9D9", "#BC80BD", "#CCEBC5", "#FFED6F",
]


def sector_color(i: int) -> str:
    return SECTOR_PALETTE[i % len(SECTOR_PALETTE)]


@dataclass
class CircosPlot:
    """Container for circos plot data and rendering."""

    registry: ChromosomeRegistry
    table: ValidatedSVTable
    sv_colors: Dict[SVType, str] = field(default_factory=lambda: dict(DEFAULT_SV_COLORS))
    size: Tuple[int, int] = (2000, 2000)
    dpi: int = 300
    gap_degrees: float = GAP_DEGREES
    start_degrees: float = START_DEGREES

    def build_circos(self) -> Circos:
        """Lay out sectors, ideogram track, labels and links."""
        sectors = {entry.name: entry.length for entry in self.registry}
        circos = Circos(
            sectors, start=self.start_degrees, end=self.start_degrees + 360,
            space=self.gap_degrees,
        )

        for i, sector in enumerate(circos.sectors):
            track = sector.add_track(TRACK_RADII)
            track.axis(fc=sector_color(i), ec="none")
            sector.text(sector.name, r=LABEL_RADIUS, size=5)

        for record in self.table:
            color = self.sv_colors[record.sv_type]
            circos.link(
                (record.chr_a, record.start_a, record.end_a),
                (record.chr_b, record.start_b, record.end_b),
                r1=LINK_RADIUS, r2=LINK_RADIUS,
                color=to_rgba(color, FILL_ALPHA), alpha=None,
                height_ratio=HEIGHT_RATIO, ec=color, lw=LINK_LINEWIDTH,
            )
        return circos

    def legend_handles(self):
        return [
            Patch(facecolor=self.sv_colors[sv_type], edgecolor="black", label=sv_type.label)
            for sv_type in SV_TYPE_ORDER
        ]

    def to_matplotlib(self) -> Figure:
        if len(self.table) == 0:
            warnings.warn("no validated SVs; drawing sectors only", UserWarning, stacklevel=2)

        width, height = self.size
        fig = Figure(figsize=(width / self.dpi, height / self.dpi), dpi=self.dpi)
        ax = fig.add_subplot(projection="polar")
        self.build_circos().plotfig(ax=ax)

        fig.legend(
            handles=self.legend_handles(), loc="lower right", title=LEGEND_TITLE,
            frameon=False, fontsize=4, title_fontsize=5,
        )
        fig.suptitle(TITLE, fontsize=7)
        return fig

    def save_png(self, filepath: Union[str, Path]) -> Path:
        """Render to a PNG file of exactly ``size`` pixels."""
        filepath = Path(filepath)
        fig = self.to_matplotlib()
        # pycirclize switches savefig.bbox to "tight" on import; keep the full canvas.
        with rc_context({"savefig.bbox": "standard"}):
            fig.savefig(filepath, dpi=self.dpi, format="png")
        return filepath

    def to_figure(self, title: str = TITLE, radius: float = 1.0) -> "go.Figure":
        """Create an interactive Plotly rendering with the same layout."""
        if not HAS_PLOTLY:
            raise ImportError("plotly is required for interactive plots")

        layout = SectorLayout(self.registry, self.gap_degrees, self.start_degrees)
        fig = go.Figure()

        for i, entry in enumerate(self.registry):
            arc = layout.arc(entry.name, 0, entry.length, radius * 1.05, n=60)
            fig.add_trace(go.Scatter(
                x=arc[:, 0], y=arc[:, 1], mode="lines",
                line=dict(width=10, color=sector_color(i)),
                name=entry.name, showlegend=False,
                hovertemplate=f"{entry.name}<extra></extra>",
            ))
            mid = layout.arc(entry.name, entry.length / 2, entry.length / 2, radius * 1.18, n=1)[0]
            fig.add_annotation(x=mid[0], y=mid[1], text=entry.name, showarrow=False)

        shown = set()
        for record in self.table:
            color = self.sv_colors[record.sv_type]
            ribbon = layout.ribbon(
                record.chr_a, record.start_a, record.end_a,
                record.chr_b, record.start_b, record.end_b,
                radius=radius, height_ratio=HEIGHT_RATIO,
            )
            fig.add_trace(go.Scatter(
                x=ribbon[:, 0], y=ribbon[:, 1], mode="lines", fill="toself",
                fillcolor=_rgba_string(color, FILL_ALPHA), line=dict(width=1.5, color=color),
                name=record.sv_type.label, legendgroup=record.sv_type.value,
                showlegend=record.sv_type not in shown,
                hovertemplate=(
                    f"{record.sv_type.value}: {record.chr_a}:{record.start_a}-{record.end_a}"
                    f" → {record.chr_b}:{record.start_b}-{record.end_b}<extra></extra>"
                ),
            ))
            shown.add(record.sv_type)

        width, height = self.size
        fig.update_layout(
            title=title, legend_title_text=LEGEND_TITLE,
            width=width // 2, height=height // 2, template="plotly_white",
        )
        fig.update_xaxes(visible=False, range=[-1.3 * radius, 1.3 * radius])
        fig.update_yaxes(visible=False, range=[-1.3 * radius, 1.3 * radius], scaleanchor="x", scaleratio=1)
        return fig

    def to_html(self, filepath: Union[str, Path], **kwargs) -> None:
        """Save the plot as an interactive HTML file."""
        fig = self.to_figure(**kwargs)
        fig.write_html(str(filepath))


def _rgba_string(color: str, alpha: float) -> str:
    r, g, b, _ = to_rgba(color)
    return f"rgba({r * 255:.0f},{g * 255:.0f},{b * 255:.0f},{alpha})"


def render_circos_plot(
    registry: ChromosomeRegistry, table: ValidatedSVTable, filepath: Union[str, Path],
    sv_colors: Dict[SVType, str] = None, size: Tuple[int, int] = (2000, 2000), dpi: int = 300,
) -> Path:
    """Write the circos SV plot as a PNG and return its path."""
    plot = CircosPlot(
        registry=registry, table=table,
        sv_colors=dict(sv_colors or DEFAULT_SV_COLORS), size=size, dpi=dpi,
    )
    return plot.save_png(filepath)
