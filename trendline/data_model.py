from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, List, Optional, Tuple

FALLBACK_COLOR = "black"


class Category(Enum):
    AAL = ("AAL", "gray")
    UAL = ("UAL", "steelblue")
    DAL = ("DAL", "firebrick")

    def __init__(self, code: str, color: str) -> None:
        self.code = code
        self.color = color

    @classmethod
    def lookup(cls, code: str) -> Optional["Category"]:
        for c in cls:
            if c.code == code:
                return c
        return None


def color_for(code: str, fallback: str = FALLBACK_COLOR) -> str:
    cat = Category.lookup(code)
    return cat.color if cat is not None else fallback


@dataclass(frozen=True)
class Record:
    timestamp: float  # unix seconds, UTC
    price: float
    category: str


@dataclass(frozen=True)
class Series:
    category: str
    records: Tuple[Record, ...]
    # parallel to records; used for bisection
    timestamps: Tuple[float, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not self.records:
            raise ValueError(f"Series {self.category!r} has no records.")
        ordered = tuple(sorted(self.records, key=lambda r: r.timestamp))
        object.__setattr__(self, "records", ordered)
        object.__setattr__(self, "timestamps", tuple(r.timestamp for r in ordered))

    def __len__(self) -> int:
        return len(self.records)


@dataclass(frozen=True)
class QueryPoint:
    x: float
    y: float


@dataclass(frozen=True)
class LookupResult:
    category: str
    record: Record
    distance: float


def group_series(records: Iterable[Record]) -> List[Series]:
    """
    Group records by category, keeping categories in order of first appearance.
    Each series is sorted by timestamp (stable for equal stamps).
    """
    buckets: Dict[str, List[Record]] = {}
    for r in records:
        buckets.setdefault(r.category, []).append(r)
    return [Series(category=cat, records=tuple(rs)) for cat, rs in buckets.items()]
