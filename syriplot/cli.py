"""CLI entry point for syriplot."""

from __future__ import annotations

import argparse
import json
import sys

from syriplot.config import PlotConfig
from syriplot.errors import SyriplotError
from syriplot.svtable import BOUNDS_MODES, MALFORMED_POLICIES


def _add_input_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("lengths", nargs="?", help="Chromosome length file (name, length)")
    p.add_argument("syri", nargs="?", help="SV caller output (tab-separated, >=13 columns)")
    p.add_argument("--config", type=str, help="JSON configuration file; flags override it")
    p.add_argument("--padding", type=float, help="Display padding factor (default 1.10)")
    p.add_argument("--bounds", choices=BOUNDS_MODES,
                   help="Length checked against SV coordinates (default padded)")
    p.add_argument("--on-malformed", choices=MALFORMED_POLICIES,
                   help="Abort on, or skip, rows that cannot be parsed (default abort)")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="syriplot",
        description="syriplot – linear and circos plots of structural variants between two assemblies",
    )
    sub = parser.add_subparsers(dest="command")

    # plot sub-command
    plot_p = sub.add_parser("plot", help="Validate SVs and write the linear and circos plots")
    _add_input_args(plot_p)
    plot_p.add_argument("--outdir", type=str, help="Output directory (default .)")
    plot_p.add_argument("--dpi", type=int, help="Raster resolution (default 300)")
    plot_p.add_argument("--html", action="store_true", help="Also write interactive HTML plots")
    plot_p.add_argument("--table", type=str, help="Also write the validated SV table (TSV) to this file, relative to --outdir")

    # validate sub-command
    val_p = sub.add_parser("validate", help="Validate SVs and report what would be plotted")
    _add_input_args(val_p)
    val_p.add_argument("--output", type=str, help="Write the validated SV table (TSV) to this file")
    val_p.add_argument("--json", action="store_true", help="Print the summary as JSON")

    return parser


def main(argv: list[str] | None = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    try:
        config = _config_from_args(args)
        if args.command == "plot":
            _cmd_plot(config)
        elif args.command == "validate":
            _cmd_validate(config, args)
    except (ValueError, FileNotFoundError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


def _config_from_args(args) -> PlotConfig:
    data = {}
    if args.config:
        with open(args.config) as f:
            data = json.load(f)

    overrides = {
        "lengths_path": args.lengths,
        "sv_path": args.syri,
        "padding": args.padding,
        "bounds": args.bounds,
        "on_malformed": args.on_malformed,
    }
    if args.command == "plot":
        overrides.update({
            "output_dir": args.outdir,
            "dpi": args.dpi,
            "table_filename": args.table,
        })
        if args.html:
            overrides["html"] = True
    data.update({k: v for k, v in overrides.items() if v is not None})

    for key in ("lengths_path", "sv_path"):
        if not data.get(key):
            raise SyriplotError(f"missing input file: pass it on the command line or set {key} in --config")
    return PlotConfig.from_dict(data)


def _cmd_plot(config: PlotConfig) -> None:
    from syriplot.pipeline import run_pipeline

    result = run_pipeline(config)
    print(f"SyRI structural variants loaded: {result.summary.kept} valid SVs")
    print("Plots created successfully:")
    for path in result.written:
        print(f"  {path}")


def _cmd_validate(config: PlotConfig, args) -> None:
    from syriplot.io import write_sv_table
    from syriplot.pipeline import load_inputs

    result = load_inputs(config)
    summary = result.summary

    if args.json:
        data = summary.to_dict()
        data["by_type"] = {t.value: n for t, n in result.table.count_by_type().items()}
        data["chromosomes"] = len(result.registry)
        print(json.dumps(data, indent=2))
    else:
        print(f"Chromosomes:        {len(result.registry)}")
        print(summary.to_text())
        for sv_type, count in result.table.count_by_type().items():
            print(f"  {sv_type.value:<6} {count}")

    if args.output:
        write_sv_table(args.output, result.table)
        print(f"\nTable saved to: {args.output}", file=sys.stderr if args.json else sys.stdout)
