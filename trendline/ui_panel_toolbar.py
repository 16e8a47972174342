from __future__ import annotations

import tkinter as tk
from tkinter import ttk
from typing import Callable


class ToolbarPanel:
    def __init__(
        self,
        owner,
        parent: tk.Widget,
        *,
        on_back: Callable[[], None],
        on_next: Callable[[], None],
    ) -> None:
        self.owner = owner
        self.frame = ttk.Frame(parent)
        self.frame.pack(side="top", fill="x")

        ttk.Label(self.frame, text="Random points:").pack(side="left")
        self.btn_back = ttk.Button(self.frame, text="Back", command=on_back, state="disabled")
        self.btn_back.pack(side="left", padx=(8, 0))
        self.btn_next = ttk.Button(self.frame, text="Next", command=on_next, state="disabled")
        self.btn_next.pack(side="left", padx=(8, 0))

        ttk.Separator(self.frame, orient="vertical").pack(side="left", fill="y", padx=10)
        ttk.Label(self.frame, text="Click the chart to find the nearest price.").pack(side="left")

        ttk.Label(self.frame, textvariable=owner.status_var).pack(side="right")

    def set_enabled(self, enabled: bool) -> None:
        state = "normal" if enabled else "disabled"
        self.btn_back.configure(state=state)
        self.btn_next.configure(state=state)
