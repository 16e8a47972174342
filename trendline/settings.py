"""Chart settings: defaults, JSON persistence, environment overrides, logging setup."""
from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path
from typing import Optional

log = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parent.parent

# Env vars:
# - TRENDLINE_CONFIG -> settings JSON file (default ~/.trendline_config.json)
# - TRENDLINE_DATA   -> CSV dataset (overrides data_path from the settings file)
CONFIG_PATH = Path(os.getenv("TRENDLINE_CONFIG", Path.home() / ".trendline_config.json"))
DEFAULT_DATA_PATH = PROJECT_ROOT / "data" / "airlines.csv"


@dataclass(frozen=True)
class ChartSettings:
    data_path: str = str(DEFAULT_DATA_PATH)
    date_fmt: str = "%m/%d/%y"

    # full surface size in px; the plot area is this minus the margins
    width: int = 1200
    height: int = 500
    margin_top: int = 70
    margin_right: int = 30
    margin_bottom: int = 60
    margin_left: int = 80

    n_points: int = 10
    seed: Optional[int] = None
    point_radius: int = 5
    fallback_color: str = "black"

    @property
    def plot_width(self) -> int:
        return self.width - self.margin_left - self.margin_right

    @property
    def plot_height(self) -> int:
        return self.height - self.margin_top - self.margin_bottom

    def validate(self) -> None:
        if self.plot_width <= 0 or self.plot_height <= 0:
            raise ValueError(f"Margins leave no plot area ({self.plot_width}x{self.plot_height}).")
        if self.n_points < 1:
            raise ValueError("n_points must be at least 1.")


def _check_types(values: dict) -> None:
    defaults = ChartSettings()
    for key, value in values.items():
        if key == "seed":
            ok = value is None or (isinstance(value, int) and not isinstance(value, bool))
        else:
            expected = type(getattr(defaults, key))
            ok = isinstance(value, expected) and not (expected is int and isinstance(value, bool))
        if not ok:
            raise TypeError(f"{key} has wrong type ({type(value).__name__})")


def load_config(path: Optional[Path] = None) -> ChartSettings:
    """
    Read settings from JSON, merged over defaults. Unknown keys are ignored;
    a corrupt file falls back to defaults. TRENDLINE_DATA wins over the file.
    """
    path = Path(path) if path is not None else CONFIG_PATH
    settings = ChartSettings()

    if path.exists():
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
            if not isinstance(data, dict):
                raise ValueError("top-level JSON value is not an object")
            known = {f.name for f in fields(ChartSettings)}
            unknown = sorted(set(data) - known)
            if unknown:
                log.warning("Ignoring unknown settings in %s: %s", path, ", ".join(unknown))
            user = {k: v for k, v in data.items() if k in known}
            _check_types(user)
            settings = replace(settings, **user)
        except (OSError, ValueError, TypeError) as e:
            log.warning("Could not read settings from %s (%s); using defaults", path, e)
            settings = ChartSettings()

    env_data = os.getenv("TRENDLINE_DATA", "").strip()
    if env_data:
        settings = replace(settings, data_path=env_data)
    return settings


def save_config(settings: ChartSettings, path: Optional[Path] = None) -> Path:
    path = Path(path) if path is not None else CONFIG_PATH
    path.write_text(json.dumps(asdict(settings), indent=2), encoding="utf-8")
    return path


def setup_logging(level=logging.INFO):
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    return logging.getLogger("trendline")
