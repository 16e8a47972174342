#!/usr/bin/env python3
"""Interactive airline price chart.

Usage:
    python airfares.py                          # open the chart window
    python airfares.py --data prices.csv        # custom dataset
    python airfares.py --png chart.png          # render to PNG and exit
    python airfares.py --seed 7 --points 20     # reproducible reference points
"""

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path

import numpy as np

from trendline.load_csv import DataLoadError, load_series
from trendline.render_png import save_png
from trendline.settings import CONFIG_PATH, load_config, save_config, setup_logging
from trendline.ui_state import ChartModel, start_session


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Plot airline ticket prices over time.")
    parser.add_argument("--data", type=str, default=None, help="CSV with date,price,airline columns")
    parser.add_argument("--config", type=str, default=None, help=f"Settings JSON (default {CONFIG_PATH})")
    parser.add_argument("--points", type=int, default=None, help="Number of random reference points")
    parser.add_argument("--seed", type=int, default=None, help="Seed for the random reference points")
    parser.add_argument("--png", type=str, default=None, help="Render the chart to this PNG and exit")
    parser.add_argument("--save-config", action="store_true", help="Persist the effective settings")
    parser.add_argument("--log-level", type=str, default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    log = setup_logging(getattr(logging, args.log_level))

    config_path = Path(args.config) if args.config else CONFIG_PATH
    settings = load_config(config_path)
    overrides = {}
    if args.data:
        overrides["data_path"] = args.data
    if args.points is not None:
        overrides["n_points"] = args.points
    if args.seed is not None:
        overrides["seed"] = args.seed
    if overrides:
        settings = replace(settings, **overrides)

    try:
        settings.validate()
    except (TypeError, ValueError) as e:
        log.error("Invalid settings: %s", e)
        return 2

    if args.save_config:
        log.info("Settings saved to %s", save_config(settings, config_path))

    rng = np.random.default_rng(settings.seed)

    if args.png:
        try:
            series = load_series(settings.data_path, settings.date_fmt)
        except DataLoadError as e:
            log.error("Data load failed: %s", e)
            return 1
        model = ChartModel.build(series, settings.plot_width, settings.plot_height)
        session, _ = start_session(model, settings.n_points, rng)
        save_png(args.png, model, settings, session)
        return 0

    # Tk is only needed for the interactive window
    from trendline.ui_window import ChartWindow

    app = ChartWindow(settings, rng=rng)
    app.mainloop()
    return 0


if __name__ == "__main__":
    sys.exit(main())
