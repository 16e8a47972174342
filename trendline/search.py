"""
Nearest-point lookups used by the chart tooltips.

Two flavours:

* ``nearest_by_endpoint`` scores every segment of every series by the pixel
  distance from the query point to the segment's *end* record. This is not a
  point-to-segment distance; the first record of a series is never a
  candidate.
* ``nearest_by_time`` inverts the query x to a timestamp, bisects each series
  for the bracketing records, keeps the temporally closer one and scores it by
  true pixel distance.

Both scan all series and keep the first strict minimum, so ties resolve to the
earliest candidate in category-then-index order. Series with fewer than two
records cannot form a segment and are skipped; if nothing is eligible the
result is ``None``.
"""
from __future__ import annotations

import bisect
import logging
import math
from typing import Optional, Sequence, Tuple

import numpy as np

from .calibration import ChartCalibration
from .data_model import LookupResult, QueryPoint, Record, Series

log = logging.getLogger(__name__)


def plotted_px(cal: ChartCalibration, r: Record) -> Tuple[float, float]:
    return cal.x_data_to_px(r.timestamp), cal.y_data_to_px(r.price)


def _eligible(s: Series) -> bool:
    if len(s) < 2:
        log.debug("skipping series %s: %d record(s), no segment", s.category, len(s))
        return False
    return True


def nearest_by_endpoint(
    series: Sequence[Series],
    cal: ChartCalibration,
    point: QueryPoint,
) -> Optional[LookupResult]:
    best: Optional[LookupResult] = None
    best_d = math.inf
    for s in series:
        if not _eligible(s):
            continue
        ends = s.records[1:]
        xs = np.array([cal.x_data_to_px(r.timestamp) for r in ends], dtype=float)
        ys = np.array([cal.y_data_to_px(r.price) for r in ends], dtype=float)
        dist = np.sqrt((xs - point.x) ** 2 + (ys - point.y) ** 2)
        # argmin returns the first minimum, matching a left-to-right scan
        i = int(np.argmin(dist))
        d = float(dist[i])
        if d < best_d:
            best_d = d
            best = LookupResult(category=s.category, record=ends[i], distance=d)
    return best


def bisect_index(s: Series, ts: float) -> int:
    """
    Insertion index of `ts` among the series timestamps, clamped to
    [1, len-1] so that records[i-1] and records[i] always exist.
    """
    n = len(s)
    if n < 2:
        raise ValueError(f"Series {s.category!r} needs at least two records to bisect.")
    return bisect.bisect_left(s.timestamps, ts, 1, n - 1)


def closest_in_time(s: Series, ts: float) -> Record:
    i = bisect_index(s, ts)
    d0 = s.records[i - 1]
    d1 = s.records[i]
    # exact midpoint keeps the earlier record
    return d1 if ts - d0.timestamp > d1.timestamp - ts else d0


def nearest_by_time(
    series: Sequence[Series],
    cal: ChartCalibration,
    xpx: float,
    ypx: float,
) -> Optional[LookupResult]:
    ts = cal.x_px_to_data(xpx)
    best: Optional[LookupResult] = None
    best_d = math.inf
    for s in series:
        if not _eligible(s):
            continue
        r = closest_in_time(s, ts)
        rx, ry = plotted_px(cal, r)
        d = math.hypot(xpx - rx, ypx - ry)
        if d < best_d:
            best_d = d
            best = LookupResult(category=s.category, record=r, distance=d)
    return best
