"""CLI: render a chart configuration to an image file.

    python -m chartkit render config.json chart.png --width 600 --height 400
"""
from __future__ import annotations

import argparse
import json
import logging
import os
import sys

from .errors import ChartError


def parse_args(argv=None) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="chartkit", description="Render chart configurations offscreen")
    sub = p.add_subparsers(dest="command", required=True)
    r = sub.add_parser("render", help="Render a JSON chart configuration to an image")
    r.add_argument("config", help="Path to a JSON chart configuration")
    r.add_argument("output", help="Destination image path (.png, .jpg, .bmp)")
    r.add_argument("--width", type=int, default=400)
    r.add_argument("--height", type=int, default=300)
    r.add_argument("--dpr", type=float, default=1.0, help="Device pixel ratio")
    r.add_argument("--progress", type=float, default=1.0, help="Animation progress to paint (0..1)")
    r.add_argument("--verbose", action="store_true")
    return p.parse_args(argv)


def render_to_file(config: dict, output: str, *, width: int, height: int, dpr: float, progress: float) -> None:
    from PyQt6.QtGui import QGuiApplication

    from .controller import Chart
    from .export import export_chart
    from .helpers import clamp
    from .qt_surface import ImageSurface
    from .scheduler import ManualFrameScheduler

    _app = QGuiApplication.instance() or QGuiApplication(sys.argv[:1])  # noqa: F841 - fonts need an app
    options = dict(config.get("options") or {})
    options["animation"] = {**(options.get("animation") or {}), "duration": 0}
    surface = ImageSurface(width, height, dpr)
    chart = Chart(surface, {**config, "options": options}, scheduler=ManualFrameScheduler())
    try:
        chart.render_frame(clamp(progress, 0.0, 1.0))
        fmt = os.path.splitext(output)[1].lstrip(".").lower() or "png"
        export_chart(chart, output, format="jpg" if fmt == "jpeg" else fmt)
    finally:
        chart.destroy()


def main(argv=None) -> int:
    args = parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
    with open(args.config, "r", encoding="utf-8") as fh:
        config = json.load(fh)
    try:
        render_to_file(
            config, args.output, width=args.width, height=args.height, dpr=args.dpr, progress=args.progress
        )
    except ChartError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
    print(args.output)
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
