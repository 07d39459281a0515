# bikeflow/trips/ingest.py
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Iterable, List, Mapping, Optional

import pandas as pd
from colorama import Fore, Style
from tqdm import tqdm

from bikeflow.index.minute_buckets import MINUTES_PER_DAY, MinuteBucketIndex
from bikeflow.trips.types import Trip

REQUIRED_COLUMNS = ("started_at", "ended_at", "start_station_id", "end_station_id")

# Fallbacks for exports that are not ISO 8601 (e.g. "09/01/2024 00:00")
TIME_FORMATS = ("%m/%d/%Y %H:%M", "%m/%d/%Y %H:%M:%S")

MAX_REPORTED_ERRORS = 5


class TripParseError(ValueError):
    """Trip record whose timestamps do not resolve to a minute of day."""


@dataclass
class IngestReport:
    index: MinuteBucketIndex
    ingested: int = 0
    skipped: int = 0
    errors: List[str] = field(default_factory=list)

    def reject(self, record_number: int, err: Exception) -> None:
        self.skipped += 1
        if len(self.errors) < MAX_REPORTED_ERRORS:
            self.errors.append(f"record {record_number}: {err}")


def minutes_since_midnight(dt: datetime) -> int:
    return dt.hour * 60 + dt.minute


def _parse_dt(value) -> datetime:
    if value is None or (not isinstance(value, str) and pd.isna(value)):
        raise TripParseError("missing timestamp")

    # pd.Timestamp is a datetime subclass
    if isinstance(value, datetime):
        return value

    s = str(value).strip()
    if not s:
        raise TripParseError("missing timestamp")

    try:
        return datetime.fromisoformat(s)
    except ValueError:
        pass

    for fmt in TIME_FORMATS:
        try:
            return datetime.strptime(s, fmt)
        except ValueError:
            continue

    raise TripParseError(f"unparseable timestamp {s!r}")


def _to_minute(name: str, value) -> int:
    minute = minutes_since_midnight(_parse_dt(value))
    if not (0 <= minute < MINUTES_PER_DAY):
        raise TripParseError(f"{name} resolves to minute {minute}, outside [0, {MINUTES_PER_DAY})")
    return minute


def _station_id(value) -> str:
    if value is None or (not isinstance(value, str) and pd.isna(value)):
        return ""
    return str(value).strip()


def parse_trip(row: Mapping) -> Trip:
    """
    Normalize one raw trip record.

    Reads started_at / ended_at (ISO 8601 strings, the %m/%d/%Y export
    format, or datetime objects) and the two station id columns.
    Raises TripParseError when a timestamp is missing or malformed.
    """
    try:
        started_raw = row["started_at"]
        ended_raw = row["ended_at"]
    except KeyError as e:
        raise TripParseError(f"missing column {e.args[0]!r}") from e

    return Trip(
        start_station_id=_station_id(row.get("start_station_id")),
        end_station_id=_station_id(row.get("end_station_id")),
        started_at_minute=_to_minute("started_at", started_raw),
        ended_at_minute=_to_minute("ended_at", ended_raw),
    )


def ingest_trips(
    rows: Iterable[Mapping],
    index: Optional[MinuteBucketIndex] = None,
    *,
    total: Optional[int] = None,
    progress: bool = True,
) -> IngestReport:
    """
    Parse trips and bucket them in the same pass.

    Every parsed trip lands in departures[start minute] and
    arrivals[end minute]. Malformed rows are skipped, counted on the report
    and announced; they never reach the index. The index is frozen once the
    pass completes.
    """
    if index is None:
        index = MinuteBucketIndex()

    report = IngestReport(index=index)

    it = rows
    if progress:
        it = tqdm(rows, total=total, desc="Indexing trips")

    for i, row in enumerate(it, start=1):
        try:
            trip = parse_trip(row)
        except TripParseError as e:
            report.reject(i, e)
            continue

        index.add(trip)
        report.ingested += 1

    index.freeze()

    if report.skipped:
        print(
            f"{Fore.YELLOW}Skipped {report.skipped} malformed trip(s): "
            f"{'; '.join(report.errors)}{Style.RESET_ALL}"
        )
    print(f"{Fore.GREEN}Indexed {report.ingested:,} trips.{Style.RESET_ALL}")

    return report


def load_trips_csv(
    trips_csv: str | Path,
    index: Optional[MinuteBucketIndex] = None,
    *,
    progress: bool = True,
) -> IngestReport:
    """
    Load a trips CSV (started_at, ended_at, start_station_id, end_station_id)
    into a MinuteBucketIndex.
    """
    print(f"{Fore.CYAN}Loading trips from {trips_csv}…{Style.RESET_ALL}")

    df = pd.read_csv(trips_csv, dtype=str, keep_default_na=False)
    df.columns = [str(c).strip() for c in df.columns]

    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"Trips CSV missing columns: {', '.join(missing)}")

    df = df[list(REQUIRED_COLUMNS)].copy()

    # unparseable values become NaT and are rejected by parse_trip
    for col in ("started_at", "ended_at"):
        df[col] = pd.to_datetime(df[col], errors="coerce", format="mixed")

    return ingest_trips(
        df.to_dict("records"),
        index,
        total=len(df),
        progress=progress,
    )
