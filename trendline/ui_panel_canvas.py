from __future__ import annotations

import tkinter as tk
from tkinter import ttk
from typing import List, Tuple

from .data_model import color_for
from .render_png import ACTIVE_POINT_COLOR, POINT_COLOR, X_LABEL, Y_LABEL
from .search import plotted_px
from .ui_state import (
    CLICK_MARKER,
    DATA_MARKER,
    Click,
    Effect,
    HighlightPoint,
    MoveMarker,
    ShowTooltip,
)


class CanvasPanel:
    def __init__(self, owner, parent: tk.Widget, *, actor) -> None:
        self.owner = owner
        self.actor = actor
        settings = owner.settings

        frame = ttk.Frame(parent)
        self.frame = frame
        frame.pack(side="top", fill="both", expand=True)

        owner.canvas = tk.Canvas(
            frame,
            width=settings.width,
            height=settings.height,
            background="white",
            highlightthickness=0,
        )
        owner.canvas.configure(takefocus=1)
        owner.canvas.pack(side="top")
        owner.canvas.bind("<Button-1>", actor._on_click)


class CanvasActor:
    def __init__(self, owner) -> None:
        object.__setattr__(self, "owner", owner)

    def __getattr__(self, name):
        return getattr(self.owner, name)

    def __setattr__(self, name, value) -> None:
        if name == "owner":
            object.__setattr__(self, name, value)
            return
        setattr(self.owner, name, value)

    # ---------- coordinates ----------

    def _to_canvas(self, x: float, y: float) -> Tuple[float, float]:
        return x + self.settings.margin_left, y + self.settings.margin_top

    def _to_plot(self, cx: float, cy: float) -> Tuple[float, float]:
        return cx - self.settings.margin_left, cy - self.settings.margin_top

    # ---------- drawing ----------

    def _render_chart(self):
        self.canvas.delete("all")
        self._draw_axes()
        self._draw_series()
        self._draw_points()
        self._create_markers()
        self._create_tooltip()

    def _draw_axes(self):
        cal = self.model.calibration
        w, h = self.settings.plot_width, self.settings.plot_height
        x0, y0 = self._to_canvas(0, 0)
        x1, y1 = self._to_canvas(w, h)
        self.canvas.create_line(x0, y1, x1, y1, fill="black", tags=("axis",))
        self.canvas.create_line(x0, y0, x0, y1, fill="black", tags=("axis",))
        if cal is None:
            return

        for xpx, label in cal.x_ticks():
            cx, cy = self._to_canvas(xpx, h)
            self.canvas.create_line(cx, cy, cx, cy + 6, fill="black", tags=("axis",))
            self.canvas.create_text(cx, cy + 9, text=label, anchor="n", font=("TkDefaultFont", 8), tags=("axis",))
        for ypx, label in cal.y_ticks():
            cx, cy = self._to_canvas(0, ypx)
            self.canvas.create_line(cx - 6, cy, cx, cy, fill="black", tags=("axis",))
            self.canvas.create_text(cx - 9, cy, text=label, anchor="e", font=("TkDefaultFont", 8), tags=("axis",))

        self.canvas.create_text(x0 + w / 2, y1 + 45, text=X_LABEL, anchor="center", tags=("axis",))
        self.canvas.create_text(x0 - 60, y0 + h / 2, text=Y_LABEL, angle=90, anchor="center", tags=("axis",))

    def _draw_series(self):
        cal = self.model.calibration
        if cal is None:
            return
        for s in self.model.series:
            pts = [self._to_canvas(*plotted_px(cal, r)) for r in s.records]
            color = color_for(s.category, self.settings.fallback_color)
            if len(pts) >= 2:
                flat = [v for xy in pts for v in xy]
                self.canvas.create_line(*flat, fill=color, width=1.5, tags=("series", f"series_{s.category}"))
            else:
                cx, cy = pts[0]
                self.canvas.create_oval(cx - 1, cy - 1, cx + 1, cy + 1, fill=color, outline="", tags=("series",))

    def _draw_points(self):
        r = self.settings.point_radius
        for i, p in enumerate(self.session.points):
            cx, cy = self._to_canvas(p.x, p.y)
            self.canvas.create_oval(
                cx - r, cy - r, cx + r, cy + r,
                fill=POINT_COLOR, outline="",
                tags=("qpoint", f"qpoint_{i}"),
            )

    def _create_markers(self):
        # hidden until the first click
        self.canvas.create_oval(
            0, 0, 0, 0, fill="black", outline="white", stipple="gray50",
            state="hidden", tags=(f"marker_{CLICK_MARKER}",),
        )
        self.canvas.create_oval(
            0, 0, 0, 0, fill="red", outline="white",
            state="hidden", tags=(f"marker_{DATA_MARKER}",),
        )

    def _create_tooltip(self):
        self.canvas.create_rectangle(0, 0, 0, 0, fill="steelblue", outline="white", state="hidden", tags=("tooltip", "tooltip_bg"))
        self.canvas.create_text(0, 0, text="", fill="white", anchor="nw", justify="left", state="hidden", tags=("tooltip", "tooltip_text"))

    def _draw_load_failure(self, message: str):
        self.canvas.delete("all")
        s = self.settings
        self.canvas.create_text(
            s.width / 2, s.height / 2,
            text=f"Could not load data\n\n{message}",
            fill="firebrick", justify="center", width=s.width - 80,
            tags=("error",),
        )

    def _draw_empty(self):
        s = self.settings
        self.canvas.create_text(s.width / 2, s.height / 2, text="No data to display", fill="#666", tags=("empty",))

    # ---------- effects ----------

    def _apply_effects(self, effects: List[Effect]) -> None:
        for eff in effects:
            if isinstance(eff, HighlightPoint):
                self._highlight_point(eff.index)
            elif isinstance(eff, MoveMarker):
                self._move_marker(eff)
            elif isinstance(eff, ShowTooltip):
                self._show_tooltip(eff.text, eff.x, eff.y)

    def _highlight_point(self, index: int) -> None:
        self.canvas.itemconfigure("qpoint", fill=POINT_COLOR)
        self.canvas.itemconfigure(f"qpoint_{index}", fill=ACTIVE_POINT_COLOR)
        self.canvas.tag_raise(f"qpoint_{index}", "qpoint")

    def _move_marker(self, eff: MoveMarker) -> None:
        tag = f"marker_{eff.name}"
        if not eff.visible:
            self.canvas.itemconfigure(tag, state="hidden")
            return
        r = self.settings.point_radius
        cx, cy = self._to_canvas(eff.x, eff.y)
        self.canvas.coords(tag, cx - r, cy - r, cx + r, cy + r)
        self.canvas.itemconfigure(tag, state="normal")
        self.canvas.tag_raise(tag)

    def _show_tooltip(self, text: str, x: float, y: float) -> None:
        pad = 10
        cx, cy = self._to_canvas(x, y)
        self.canvas.itemconfigure("tooltip_text", text=text, state="normal")
        self.canvas.coords("tooltip_text", cx + pad, cy + pad)
        bx0, by0, bx1, by1 = self.canvas.bbox("tooltip_text")
        self.canvas.coords("tooltip_bg", bx0 - pad, by0 - pad, bx1 + pad, by1 + pad)
        self.canvas.itemconfigure("tooltip_bg", state="normal")
        self.canvas.tag_raise("tooltip_bg")
        self.canvas.tag_raise("tooltip_text")

    # ---------- events ----------

    def _on_click(self, event):
        self.canvas.focus_set()
        if self.session is None or self.model is None:
            return
        x, y = self._to_plot(event.x, event.y)
        self._dispatch(Click(x, y))
