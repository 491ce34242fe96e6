"""syriplot visualization.

- Linear chromosome plot with SV spans and connecting curves
- Circos plot with one link per SV
"""

from syriplot.viz.linear import LinearPlot, render_linear_plot
from syriplot.viz.circos import CircosPlot, render_circos_plot
from syriplot.viz.geometry import SectorLayout, curve_points

__all__ = [
    "LinearPlot",
    "render_linear_plot",
    "CircosPlot",
    "render_circos_plot",
    "SectorLayout",
    "curve_points",
]
