from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Sequence, Tuple, TYPE_CHECKING

from .date_utils import format_date, month_ticks

if TYPE_CHECKING:
    from .data_model import Series


@dataclass(frozen=True)
class AxisCalibration:
    # pixel anchors
    p0: float
    p1: float
    # value anchors (stored numeric; the time axis uses unix seconds)
    v0: float
    v1: float

    def px_to_value(self, p: float) -> float:
        if self.v0 == self.v1 or self.p0 == self.p1:
            return self.v0
        t = (p - self.p0) / (self.p1 - self.p0)
        return self.v0 + t * (self.v1 - self.v0)

    def value_to_px(self, v: float) -> float:
        if self.v0 == self.v1:
            # degenerate domain: everything sits mid-range
            return (self.p0 + self.p1) / 2.0
        t = (v - self.v0) / (self.v1 - self.v0)
        return self.p0 + t * (self.p1 - self.p0)


@dataclass(frozen=True)
class ChartCalibration:
    x: AxisCalibration
    y: AxisCalibration
    width: float
    height: float

    @classmethod
    def from_series(cls, series: Sequence["Series"], width: float, height: float) -> "ChartCalibration":
        """
        Time axis spans the full timestamp extent onto [0, width]; the price
        axis spans [0, max price] onto [height, 0] so larger prices plot higher.
        """
        stamps = [r.timestamp for s in series for r in s.records]
        prices = [r.price for s in series for r in s.records]
        if not stamps:
            raise ValueError("Cannot calibrate a chart without records.")
        x = AxisCalibration(p0=0.0, p1=float(width), v0=min(stamps), v1=max(stamps))
        y = AxisCalibration(p0=float(height), p1=0.0, v0=0.0, v1=max(0.0, max(prices)))
        return cls(x=x, y=y, width=float(width), height=float(height))

    def x_data_to_px(self, ts: float) -> float:
        return self.x.value_to_px(ts)

    def y_data_to_px(self, price: float) -> float:
        return self.y.value_to_px(price)

    def x_px_to_data(self, xpx: float) -> float:
        return self.x.px_to_value(xpx)

    def x_ticks(self, fmt: str = "%b %Y") -> List[Tuple[float, str]]:
        # one tick per calendar month
        return [(self.x_data_to_px(ts), format_date(ts, fmt)) for ts in month_ticks(self.x.v0, self.x.v1)]

    def y_ticks(self, count: int = 10) -> List[Tuple[float, str]]:
        return [(self.y_data_to_px(v), f"{v:g}") for v in nice_ticks(self.y.v0, self.y.v1, count)]


def _tick_step(lo: float, hi: float, count: int) -> float:
    raw = (hi - lo) / max(1, int(count))
    power = math.floor(math.log10(raw))
    err = raw / (10 ** power)
    if err >= math.sqrt(50):
        factor = 10
    elif err >= math.sqrt(10):
        factor = 5
    elif err >= math.sqrt(2):
        factor = 2
    else:
        factor = 1
    return factor * (10 ** power)


def nice_ticks(lo: float, hi: float, count: int = 10) -> List[float]:
    """Round-numbered ticks covering [lo, hi], roughly `count` of them."""
    if hi < lo:
        lo, hi = hi, lo
    if hi == lo:
        return [lo]
    step = _tick_step(lo, hi, count)
    i0 = math.ceil(lo / step)
    i1 = math.floor(hi / step)
    return [round(i * step, 10) for i in range(i0, i1 + 1)]
