"""Tests for the linear and circos renderers."""

import numpy as np
import pytest
import matplotlib
from matplotlib.image import imread

from syriplot.svtable import ValidatedSVTable
from syriplot.viz.circos import LINK_LINEWIDTH, CircosPlot, render_circos_plot
from syriplot.viz.geometry import SectorLayout, curve_points, quadratic_bezier
from syriplot.viz.linear import LinearPlot, render_linear_plot


# Check if interactive visualization dependencies are available
try:
    import plotly
    HAS_PLOTLY = True
except ImportError:
    HAS_PLOTLY = False


pytestmark = pytest.mark.viz


def _png_size(path):
    height, width = imread(path).shape[:2]
    return width, height


class TestGeometry:
    def test_bezier_endpoints(self):
        pts = quadratic_bezier((0, 0), (1, 1), (2, 0), n=11)
        assert pts.shape == (11, 2)
        np.testing.assert_allclose(pts[0], [0, 0])
        np.testing.assert_allclose(pts[-1], [2, 0])
        np.testing.assert_allclose(pts[5], [1, 0.5])

    def test_curve_bends_off_chord(self):
        xs, ys = curve_points(0, 0, 100, 0, curvature=0.2, n=21, x_scale=100)
        assert xs[0] == 0 and xs[-1] == pytest.approx(100)
        assert abs(ys[10]) > 0

    def test_straight_when_no_curvature(self):
        xs, ys = curve_points(0, 0, 10, 10, curvature=0.0, n=5)
        np.testing.assert_allclose(xs, ys)

    def test_sector_layout_spans(self, registry):
        layout = SectorLayout(registry, gap_degrees=3.0)
        total = sum(hi - lo for lo, hi in layout.spans.values())
        assert total == pytest.approx(360 - 3 * len(registry))
        assert layout.spans["CHR1"][0] == 0.0
        # clockwise: second sector starts after the first plus a gap
        assert layout.spans["CHR2"][0] == pytest.approx(layout.spans["CHR1"][1] + 3.0)

    def test_sector_layout_starts_at_top(self, registry):
        layout = SectorLayout(registry)
        pt = layout.arc("CHR1", 0, 0, 1.0, n=1)[0]
        np.testing.assert_allclose(pt, [0.0, 1.0], atol=1e-9)

    def test_ribbon_is_closed_polygon(self, registry):
        layout = SectorLayout(registry)
        poly = layout.ribbon("CHR1", 10, 100, "CHR2", 50, 60, n=10)
        assert poly.shape == (40, 2)
        np.testing.assert_allclose(poly[0], poly[-1], atol=1e-9)

    def test_gap_too_large(self, registry):
        with pytest.raises(ValueError):
            SectorLayout(registry, gap_degrees=120.0)


class TestLinearPlot:
    def test_segments(self, registry, table):
        plot = LinearPlot(registry, table)
        assert len(plot.backbones()) == len(registry)
        reference, query = plot.spans()
        assert len(reference) == len(query) == len(table)
        assert reference[0] == [(1000, 0), (5000, 0)]
        assert query[2] == [(3000, 0), (8000, 0)]

    def test_curves_connect_starts(self, registry, table):
        curves = LinearPlot(registry, table).curves(n=20)
        assert len(curves) == len(table)
        record = table[1]
        np.testing.assert_allclose(curves[1][0], [record.start_a, 1])
        np.testing.assert_allclose(curves[1][-1], [record.start_b, 2])

    def test_png_written_at_canvas_size(self, tmp_path, registry, table):
        out = render_linear_plot(registry, table, tmp_path / "linear.png")
        assert out.exists()
        width, height = _png_size(out)
        assert abs(width - 2000) <= 1
        assert abs(height - 1200) <= 1

    def test_png_size_ignores_tight_bbox_default(self, tmp_path, registry, table):
        with matplotlib.rc_context({"savefig.bbox": "tight"}):
            out = render_linear_plot(registry, table, tmp_path / "linear.png")
        assert _png_size(out) == (2000, 1200)

    def test_empty_table_warns(self, tmp_path, registry):
        empty = ValidatedSVTable([], registry)
        with pytest.warns(UserWarning, match="no validated SVs"):
            LinearPlot(registry, empty).save_png(tmp_path / "empty.png")
        assert (tmp_path / "empty.png").exists()

    @pytest.mark.skipif(not HAS_PLOTLY, reason="plotly not installed")
    def test_to_figure(self, registry, table):
        fig = LinearPlot(registry, table).to_figure()
        names = [trace.name for trace in fig.data]
        assert names == ["Chromosome", "Links", "Reference", "Query"]

    @pytest.mark.skipif(not HAS_PLOTLY, reason="plotly not installed")
    def test_to_html(self, tmp_path, registry, table):
        p = tmp_path / "linear.html"
        LinearPlot(registry, table).to_html(p)
        assert "<div" in p.read_text()


class TestCircosPlot:
    def test_legend_covers_all_types(self, registry, table):
        handles = CircosPlot(registry, table).legend_handles()
        assert [h.get_label() for h in handles] == [
            "Inversion", "Translocation", "Duplication", "Inverted Dup", "Inverted Trans",
        ]

    def test_build_circos_sectors(self, registry, table):
        circos = CircosPlot(registry, table).build_circos()
        assert [s.name for s in circos.sectors] == registry.names

    def test_png_written_at_canvas_size(self, tmp_path, registry, table):
        out = render_circos_plot(registry, table, tmp_path / "circos.png")
        assert out.exists()
        width, height = _png_size(out)
        assert abs(width - 2000) <= 1
        assert abs(height - 2000) <= 1

    def test_png_size_ignores_tight_bbox_default(self, tmp_path, registry, table):
        with matplotlib.rc_context({"savefig.bbox": "tight"}):
            out = render_circos_plot(registry, table, tmp_path / "circos.png")
        assert _png_size(out) == (2000, 2000)

    def test_link_linewidth_matches_lwd(self):
        # lwd 3.5 in points
        assert LINK_LINEWIDTH == pytest.approx(2.625)

    def test_empty_table_warns(self, tmp_path, registry):
        empty = ValidatedSVTable([], registry)
        with pytest.warns(UserWarning, match="no validated SVs"):
            CircosPlot(registry, empty).save_png(tmp_path / "empty.png")

    @pytest.mark.skipif(not HAS_PLOTLY, reason="plotly not installed")
    def test_to_figure(self, registry, table):
        fig = CircosPlot(registry, table).to_figure()
        ribbons = [trace for trace in fig.data if trace.fill == "toself"]
        assert len(ribbons) == len(table)
        legend = [trace.name for trace in ribbons if trace.showlegend]
        assert sorted(legend) == sorted({r.sv_type.label for r in table})
