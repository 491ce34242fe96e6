"""syriplot: linear and circos plots of structural variants between two assemblies.

Chromosome lengths and SV caller output (SyRI-style tables) are loaded,
normalized and validated into a :class:`ValidatedSVTable`, which the
renderers in :mod:`syriplot.viz` turn into static images.
"""

__version__ = "0.1.0"

from syriplot.errors import SyriplotError, MalformedInputError, DuplicateChromosomeError
from syriplot.registry import ChromosomeEntry, ChromosomeRegistry, load_registry
from syriplot.svtable import (
    DropReason,
    FilterSummary,
    SVRecord,
    SVType,
    ValidatedSVTable,
    load_sv_table,
)
from syriplot.config import PlotConfig
from syriplot.pipeline import run_pipeline, PipelineResult

__all__ = [
    "SyriplotError",
    "MalformedInputError",
    "DuplicateChromosomeError",
    "ChromosomeEntry",
    "ChromosomeRegistry",
    "load_registry",
    "DropReason",
    "FilterSummary",
    "SVRecord",
    "SVType",
    "ValidatedSVTable",
    "load_sv_table",
    "PlotConfig",
    "run_pipeline",
    "PipelineResult",
]
