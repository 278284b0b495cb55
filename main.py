from __future__ import annotations

import argparse
import csv
import json
import logging
import math
from pathlib import Path

from funcplot import ChartConfig, InterpolationMode, chart, load_chart_config


LOGGER = logging.getLogger("funcplot.cli")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="funcplot")
    parser.add_argument("--log-level", choices=["DEBUG", "INFO", "WARNING", "ERROR"], default="WARNING")
    sub = parser.add_subparsers(dest="command", required=True)

    render = sub.add_parser("render", help="Render sampled (x, y) data to a PNG chart.")
    render.add_argument("samples", type=Path, help="JSON ([[x, y], ...], null for undefined) or CSV (x,y rows).")
    render.add_argument("--x-min", type=float, required=True)
    render.add_argument("--x-max", type=float, required=True)
    render.add_argument("--out", type=Path, required=True)
    render.add_argument("--width", type=int, default=800)
    render.add_argument("--height", type=int, default=600)
    render.add_argument("--config", type=Path, default=None, help="TOML file with a [chart] table.")
    render.add_argument("--lock-aspect", action="store_true", help="Force a 1:1 x:y visual scale.")
    render.add_argument("--smooth", action="store_true", help="Draw continuous curves with a spline.")
    render.add_argument(
        "--tangent",
        nargs=3,
        type=float,
        action="append",
        default=[],
        metavar=("X0", "FX0", "SLOPE"),
    )
    render.add_argument(
        "--integral",
        nargs=4,
        action="append",
        default=[],
        metavar=("A", "B", "AREA", "LABEL"),
    )

    args = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")

    if args.command == "render":
        return _render(args)
    parser.error(f"unknown command: {args.command}")
    return 2


def _render(args: argparse.Namespace) -> int:
    config = load_chart_config(args.config) if args.config is not None else ChartConfig()
    overrides: dict[str, object] = {}
    if args.lock_aspect:
        overrides["aspect_locked"] = True
    if args.smooth:
        overrides["interpolation"] = InterpolationMode.SMOOTHED
    if overrides:
        config = config.with_overrides(**overrides)

    samples = load_samples(args.samples)
    c = chart(args.width, args.height, config=config)
    if not c.plot(samples, args.x_min, args.x_max):
        LOGGER.error("surface %dx%d is too small to draw on", args.width, args.height)
        return 1
    for x0, fx0, slope in args.tangent:
        c.add_tangent(x0, fx0, slope, args.x_min, args.x_max)
    for a, b, area, label in args.integral:
        lo, hi = sorted((float(a), float(b)))
        c.add_integral_area(samples, lo, hi, float(area), label)

    out = c.surface.save_png(args.out)
    LOGGER.info(
        "wrote %s (%d segments, discontinuity=%s, bounds=%s)",
        out,
        len(c.segments),
        c.has_discontinuity,
        c.bounds,
    )
    return 0


def load_samples(path: Path) -> list[tuple[float, float]]:
    if not path.exists():
        raise FileNotFoundError(f"samples file not found: {path}")
    if path.suffix.lower() == ".json":
        raw = json.loads(path.read_text(encoding="utf-8"))
        if not isinstance(raw, list):
            raise ValueError("JSON samples must be a list of [x, y] pairs")
        return [(float(x), math.nan if y is None else float(y)) for x, y in raw]

    out: list[tuple[float, float]] = []
    with path.open(newline="", encoding="utf-8") as f:
        for row in csv.reader(f):
            if not row or row[0].strip().startswith("#"):
                continue
            try:
                x, y = float(row[0]), float(row[1])
            except (ValueError, IndexError):
                # header row
                if not out:
                    continue
                raise
            out.append((x, y))
    return out


if __name__ == "__main__":
    raise SystemExit(main())
