"""End-to-end run: load registry, validate SVs, render both plots."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from syriplot.config import PlotConfig
from syriplot.io import write_sv_table
from syriplot.registry import ChromosomeRegistry, load_registry
from syriplot.svtable import FilterSummary, ValidatedSVTable, load_sv_table
from syriplot.viz.circos import CircosPlot
from syriplot.viz.linear import LinearPlot


@dataclass
class PipelineResult:
    """What a run produced."""

    registry: ChromosomeRegistry
    table: ValidatedSVTable
    linear_path: Optional[Path] = None
    circos_path: Optional[Path] = None
    extra_paths: List[Path] = field(default_factory=list)

    @property
    def summary(self) -> FilterSummary:
        return self.table.summary

    @property
    def written(self) -> List[Path]:
        paths = [p for p in (self.linear_path, self.circos_path) if p is not None]
        return paths + self.extra_paths


def load_inputs(config: PlotConfig) -> PipelineResult:
    """Run only the loading/validation half of the pipeline."""
    registry = load_registry(config.lengths_path, padding=config.padding)
    table = load_sv_table(
        config.sv_path, registry, bounds=config.bounds, on_malformed=config.on_malformed,
    )
    return PipelineResult(registry=registry, table=table)


def run_pipeline(config: PlotConfig) -> PipelineResult:
    """Load, validate and render.

    Both inputs are fully loaded before any file is written, so a fatal
    input error leaves the output directory untouched.
    """
    result = load_inputs(config)
    registry, table = result.registry, result.table

    Path(config.output_dir).mkdir(parents=True, exist_ok=True)

    linear = LinearPlot(registry=registry, table=table, size=config.linear_size, dpi=config.dpi)
    circos = CircosPlot(
        registry=registry, table=table, sv_colors=config.sv_colors,
        size=config.circos_size, dpi=config.dpi,
    )
    result.linear_path = linear.save_png(config.linear_path)
    result.circos_path = circos.save_png(config.circos_path)

    if config.html:
        for plot, png in ((linear, config.linear_path), (circos, config.circos_path)):
            html_path = png.with_suffix(".html")
            plot.to_html(html_path)
            result.extra_paths.append(html_path)

    if config.table_path is not None:
        write_sv_table(config.table_path, table)
        result.extra_paths.append(config.table_path)

    return result
