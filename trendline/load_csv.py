from __future__ import annotations

import csv
import io
import logging
from pathlib import Path
from typing import List, TextIO, Union

from .data_model import Record, Series, group_series
from .date_utils import parse_date

log = logging.getLogger(__name__)

REQUIRED_COLUMNS = ("date", "price", "airline")
DEFAULT_DATE_FMT = "%m/%d/%y"


class DataLoadError(ValueError):
    """The dataset could not be read or contains a malformed row."""


def parse_row(row: dict, line_no: int, date_fmt: str = DEFAULT_DATE_FMT) -> Record:
    try:
        ts = parse_date(row["date"] or "", date_fmt)
    except ValueError as e:
        raise DataLoadError(f"line {line_no}: bad date {row.get('date')!r} ({e})") from e
    try:
        price = float((row["price"] or "").replace(",", ""))
    except ValueError as e:
        raise DataLoadError(f"line {line_no}: bad price {row.get('price')!r}") from e
    category = (row["airline"] or "").strip()
    if not category:
        raise DataLoadError(f"line {line_no}: missing airline code")
    return Record(timestamp=ts, price=price, category=category)


def read_records(f: TextIO, date_fmt: str = DEFAULT_DATE_FMT) -> List[Record]:
    reader = csv.DictReader(f)
    fields = [c.strip().lower() for c in (reader.fieldnames or [])]
    missing = [c for c in REQUIRED_COLUMNS if c not in fields]
    if missing:
        raise DataLoadError(f"missing column(s): {', '.join(missing)}")
    reader.fieldnames = fields

    records: List[Record] = []
    # header is line 1
    for line_no, row in enumerate(reader, start=2):
        if not any((v or "").strip() for v in row.values() if isinstance(v, str)):
            continue
        records.append(parse_row(row, line_no, date_fmt))
    return records


def load_series(source: Union[str, Path], date_fmt: str = DEFAULT_DATE_FMT) -> List[Series]:
    path = Path(source)
    try:
        # utf-8-sig drops a leading byte-order mark
        with open(path, "r", newline="", encoding="utf-8-sig") as f:
            records = read_records(f, date_fmt)
    except (OSError, UnicodeDecodeError, csv.Error) as e:
        raise DataLoadError(f"cannot read {path}: {e}") from e
    series = group_series(records)
    log.info("Loaded %d rows in %d series from %s", len(records), len(series), path)
    return series


def series_from_string(text: str, date_fmt: str = DEFAULT_DATE_FMT) -> List[Series]:
    return group_series(read_records(io.StringIO(text), date_fmt))
