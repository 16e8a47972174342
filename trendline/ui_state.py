"""
Interaction state for the chart, kept free of Tk.

Handlers are pure: ``dispatch(session, event, model)`` returns the next
session plus a list of effects for the view to apply. All coordinates here
are plot-area pixels (origin at the top-left of the drawable area).
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import List, Optional, Sequence, Tuple, Union

import numpy as np

from .calibration import ChartCalibration
from .data_model import LookupResult, QueryPoint, Series
from .date_utils import format_long_date, format_short_date
from .search import nearest_by_endpoint, nearest_by_time, plotted_px

log = logging.getLogger(__name__)

TOOLTIP_POINT_OFFSET = (20, -10)
TOOLTIP_CLICK_OFFSET = (20, -40)

CLICK_MARKER = "click"
DATA_MARKER = "data"


@dataclass(frozen=True)
class ChartModel:
    series: Tuple[Series, ...]
    calibration: Optional[ChartCalibration]
    width: float
    height: float

    @classmethod
    def build(cls, series: Sequence[Series], width: float, height: float) -> "ChartModel":
        cal = ChartCalibration.from_series(series, width, height) if series else None
        return cls(series=tuple(series), calibration=cal, width=float(width), height=float(height))

    def contains(self, x: float, y: float) -> bool:
        return 0 <= x <= self.width and 0 <= y <= self.height


# ---------- events ----------

@dataclass(frozen=True)
class Advance:
    pass


@dataclass(frozen=True)
class Retreat:
    pass


@dataclass(frozen=True)
class Click:
    x: float
    y: float


Event = Union[Advance, Retreat, Click]


# ---------- effects ----------

@dataclass(frozen=True)
class HighlightPoint:
    index: int


@dataclass(frozen=True)
class MoveMarker:
    name: str
    x: float
    y: float
    visible: bool = True


@dataclass(frozen=True)
class ShowTooltip:
    text: str
    x: float
    y: float


Effect = Union[HighlightPoint, MoveMarker, ShowTooltip]


# ---------- session ----------

@dataclass(frozen=True)
class Marker:
    x: float = 0.0
    y: float = 0.0
    visible: bool = False


@dataclass(frozen=True)
class Tooltip:
    text: str = ""
    x: float = 0.0
    y: float = 0.0
    visible: bool = False


@dataclass(frozen=True)
class ChartSession:
    points: Tuple[QueryPoint, ...]
    cursor: int = 0
    click_marker: Marker = Marker()
    data_marker: Marker = Marker()
    tooltip: Tooltip = Tooltip()

    def __post_init__(self) -> None:
        if not self.points:
            raise ValueError("A session needs at least one query point.")
        if not 0 <= self.cursor < len(self.points):
            raise ValueError(f"cursor {self.cursor} out of range for {len(self.points)} points")

    @property
    def current_point(self) -> QueryPoint:
        return self.points[self.cursor]


def generate_points(n: int, width: float, height: float, rng: Optional[np.random.Generator] = None) -> Tuple[QueryPoint, ...]:
    rng = rng if rng is not None else np.random.default_rng()
    xs = rng.random(n) * width
    ys = rng.random(n) * height
    return tuple(QueryPoint(float(x), float(y)) for x, y in zip(xs, ys))


def point_summary(index: int, result: Optional[LookupResult]) -> str:
    if result is None:
        return f"Point Index: {index + 1}\nNo nearby line"
    r = result.record
    return (
        f"Point Index: {index + 1}\n"
        f"Nearest Airline: {result.category}\n"
        f"Closest Date: {format_long_date(r.timestamp)}\n"
        f"Closest Price: ${r.price:.2f}\n"
        f"Distance: {result.distance:.2f} pixels"
    )


def click_summary(result: Optional[LookupResult]) -> str:
    if result is None:
        return "No data near this point"
    r = result.record
    return f"Date: {format_short_date(r.timestamp)}\nPrice: {r.price:.2f}\nAirline: {result.category}"


def _goto(session: ChartSession, cursor: int, model: ChartModel) -> Tuple[ChartSession, List[Effect]]:
    p = session.points[cursor]
    result = None
    if model.calibration is not None:
        result = nearest_by_endpoint(model.series, model.calibration, p)
    tip = Tooltip(
        text=point_summary(cursor, result),
        x=p.x + TOOLTIP_POINT_OFFSET[0],
        y=p.y + TOOLTIP_POINT_OFFSET[1],
        visible=True,
    )
    effects: List[Effect] = [HighlightPoint(cursor), ShowTooltip(tip.text, tip.x, tip.y)]
    return replace(session, cursor=cursor, tooltip=tip), effects


def _click(session: ChartSession, ev: Click, model: ChartModel) -> Tuple[ChartSession, List[Effect]]:
    if not model.contains(ev.x, ev.y):
        return session, []

    result = None
    if model.calibration is not None:
        result = nearest_by_time(model.series, model.calibration, ev.x, ev.y)
    log.debug("click at (%.1f, %.1f) -> %s", ev.x, ev.y, result)

    click_marker = Marker(ev.x, ev.y, True)
    if result is not None:
        dx, dy = plotted_px(model.calibration, result.record)
        data_marker = Marker(dx, dy, True)
    else:
        data_marker = replace(session.data_marker, visible=False)
    tip = Tooltip(
        text=click_summary(result),
        x=ev.x + TOOLTIP_CLICK_OFFSET[0],
        y=ev.y + TOOLTIP_CLICK_OFFSET[1],
        visible=True,
    )
    effects: List[Effect] = [
        MoveMarker(CLICK_MARKER, click_marker.x, click_marker.y, True),
        MoveMarker(DATA_MARKER, data_marker.x, data_marker.y, data_marker.visible),
        ShowTooltip(tip.text, tip.x, tip.y),
    ]
    return replace(session, click_marker=click_marker, data_marker=data_marker, tooltip=tip), effects


def start_session(
    model: ChartModel,
    n_points: int = 10,
    rng: Optional[np.random.Generator] = None,
) -> Tuple[ChartSession, List[Effect]]:
    session = ChartSession(points=generate_points(n_points, model.width, model.height, rng))
    return _goto(session, 0, model)


def dispatch(session: ChartSession, event: Event, model: ChartModel) -> Tuple[ChartSession, List[Effect]]:
    n = len(session.points)
    if isinstance(event, Advance):
        return _goto(session, (session.cursor + 1) % n, model)
    if isinstance(event, Retreat):
        return _goto(session, (session.cursor - 1 + n) % n, model)
    if isinstance(event, Click):
        return _click(session, event, model)
    raise TypeError(f"Unsupported event: {event!r}")
