from __future__ import annotations

import logging
import tkinter as tk
from tkinter import ttk, messagebox
from typing import Optional

import numpy as np

from .load_csv import DataLoadError, load_series
from .settings import ChartSettings
from .ui_panel_canvas import CanvasPanel, CanvasActor
from .ui_panel_toolbar import ToolbarPanel
from .ui_state import Advance, ChartModel, ChartSession, Event, Retreat, dispatch, start_session

log = logging.getLogger(__name__)


class ChartWindow(tk.Tk):
    def __init__(self, settings: ChartSettings, *, rng: Optional[np.random.Generator] = None):
        super().__init__()
        self.title("Airline Prices")
        self.resizable(False, False)
        self.settings = settings
        self._rng = rng

        # both stay None until the dataset has loaded
        self.model: Optional[ChartModel] = None
        self.session: Optional[ChartSession] = None

        self.status_var = tk.StringVar(value="Loading…")
        self.canvas_actor = CanvasActor(self)

        self._build_ui()
        self.after(0, self._load)

    # ---------- UI ----------
    def _build_ui(self):
        root = ttk.Frame(self, padding=8)
        root.pack(fill="both", expand=True)

        self.toolbar_panel = ToolbarPanel(self, root, on_back=self._on_back, on_next=self._on_next)
        self.canvas_panel = CanvasPanel(self, root, actor=self.canvas_actor)

        self.bind("<Left>", lambda _e: self._on_back())
        self.bind("<Right>", lambda _e: self._on_next())

    def set_status(self, msg: str):
        self.status_var.set(msg)

    # ---------- data ----------
    def _load(self):
        s = self.settings
        try:
            series = load_series(s.data_path, s.date_fmt)
        except DataLoadError as e:
            log.error("Data load failed: %s", e)
            self.canvas_actor._draw_load_failure(str(e))
            self.set_status("Load failed.")
            self._show_error("Could not load data", str(e))
            return

        self.model = ChartModel.build(series, s.plot_width, s.plot_height)
        self.session, effects = start_session(self.model, s.n_points, self._rng)
        self.canvas_actor._render_chart()
        if self.model.calibration is None:
            self.canvas_actor._draw_empty()
        self.canvas_actor._apply_effects(effects)
        self.toolbar_panel.set_enabled(True)
        self.set_status(f"{sum(len(x) for x in series)} prices, {len(series)} airlines")

    # ---------- events ----------
    def _dispatch(self, event: Event) -> None:
        if self.session is None or self.model is None:
            return
        self.session, effects = dispatch(self.session, event, self.model)
        self.canvas_actor._apply_effects(effects)

    def _on_next(self):
        self._dispatch(Advance())

    def _on_back(self):
        self._dispatch(Retreat())

    def _show_error(self, title: str, message: str) -> None:
        messagebox.showerror(title, message, parent=self)
