"""Run configuration: input/output paths, padding, colors and canvas sizes."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Mapping, Optional, Tuple, Union

from syriplot.registry import DEFAULT_PADDING
from syriplot.svtable import BOUNDS_MODES, MALFORMED_POLICIES, SVType

DEFAULT_SV_COLORS = {
    SVType.INV: "#FF0000",
    SVType.TRANS: "#0000FF",
    SVType.DUP: "#00AA00",
    SVType.INVDP: "#AA00AA",
    SVType.INVTR: "#FFA500",
}

# Linear plot: backbone, reference span, query span, connection.
LINEAR_COLORS = {
    "backbone": "#CCCCCC",
    "reference": "#CD0000",
    "query": "#0000CD",
    "link": "#551A8B",
}


def resolve_sv_colors(colors: Optional[Mapping]) -> Dict[SVType, str]:
    """Return a color map covering every :class:`SVType`.

    Keys may be ``SVType`` members or their names. Missing or unknown
    kinds raise ``ValueError`` so renderer lookups cannot fail later.
    """
    if colors is None:
        return dict(DEFAULT_SV_COLORS)
    resolved: Dict[SVType, str] = {}
    for key, color in colors.items():
        sv_type = key if isinstance(key, SVType) else SVType.parse(str(key))
        if sv_type is None:
            raise ValueError(f"unknown SV type in color map: {key!r}")
        resolved[sv_type] = color
    missing = [t.value for t in SVType if t not in resolved]
    if missing:
        raise ValueError(f"color map is missing SV types: {', '.join(missing)}")
    return resolved


@dataclass
class PlotConfig:
    """Everything a pipeline run needs; passed explicitly, never ambient."""

    lengths_path: str
    sv_path: str
    output_dir: str = "."
    linear_filename: str = "linear_genome_plot_connected.png"
    circos_filename: str = "circos_plot_connected.png"
    table_filename: Optional[str] = None
    html: bool = False

    padding: float = DEFAULT_PADDING
    bounds: str = "padded"
    on_malformed: str = "abort"

    sv_colors: Dict[SVType, str] = field(default_factory=lambda: dict(DEFAULT_SV_COLORS))
    linear_size: Tuple[int, int] = (2000, 1200)
    circos_size: Tuple[int, int] = (2000, 2000)
    dpi: int = 300

    def __post_init__(self):
        if self.padding <= 0:
            raise ValueError(f"padding must be positive, got {self.padding}")
        if self.bounds not in BOUNDS_MODES:
            raise ValueError(f"bounds must be one of {BOUNDS_MODES}, got {self.bounds!r}")
        if self.on_malformed not in MALFORMED_POLICIES:
            raise ValueError(
                f"on_malformed must be one of {MALFORMED_POLICIES}, got {self.on_malformed!r}"
            )
        if self.dpi <= 0:
            raise ValueError(f"dpi must be positive, got {self.dpi}")
        self.sv_colors = resolve_sv_colors(self.sv_colors)
        self.linear_size = tuple(self.linear_size)
        self.circos_size = tuple(self.circos_size)

    @property
    def linear_path(self) -> Path:
        return Path(self.output_dir) / self.linear_filename

    @property
    def circos_path(self) -> Path:
        return Path(self.output_dir) / self.circos_filename

    @property
    def table_path(self) -> Optional[Path]:
        if self.table_filename is None:
            return None
        return Path(self.output_dir) / self.table_filename

    def to_dict(self) -> Dict:
        """Convert configuration to a JSON-friendly dictionary."""
        return {
            "lengths_path": self.lengths_path,
            "sv_path": self.sv_path,
            "output_dir": self.output_dir,
            "linear_filename": self.linear_filename,
            "circos_filename": self.circos_filename,
            "table_filename": self.table_filename,
            "html": self.html,
            "padding": self.padding,
            "bounds": self.bounds,
            "on_malformed": self.on_malformed,
            "sv_colors": {t.value: c for t, c in self.sv_colors.items()},
            "linear_size": list(self.linear_size),
            "circos_size": list(self.circos_size),
            "dpi": self.dpi,
        }

    def to_json(self, filepath: Optional[str] = None) -> str:
        """Export configuration to JSON."""
        json_str = json.dumps(self.to_dict(), indent=2)
        if filepath:
            Path(filepath).write_text(json_str)
        return json_str

    @classmethod
    def from_dict(cls, data: Dict) -> "PlotConfig":
        """Create from dictionary, ignoring unknown keys."""
        return cls(**{k: v for k, v in data.items() if k in cls.__dataclass_fields__})

    @classmethod
    def from_json(cls, filepath: Union[str, Path]) -> "PlotConfig":
        with open(filepath) as f:
            return cls.from_dict(json.load(f))
