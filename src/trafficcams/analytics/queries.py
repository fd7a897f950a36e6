from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

import pandas as pd

from trafficcams.ingestion.schemas import CameraRecord, RecordSource, records_of

RAW_COLUMNS = [
    "city_name",
    "region_name",
    "address",
    "dept_name",
    "branch_name",
    "longitude",
    "latitude",
    "direction",
    "speed_limit",
]
FRAME_COLUMNS = RAW_COLUMNS + ["lat", "lon", "limit_kph"]


@dataclass(frozen=True)
class CameraStatistics:
    total_cameras: int = 0
    unique_cities: int = 0
    # None when no record carries a positive speed limit.
    average_speed_limit: Optional[float] = None
    max_speed_limit: Optional[int] = None
    min_speed_limit: Optional[int] = None
    direction_counts: dict[str, int] = field(default_factory=dict)

    def __str__(self) -> str:
        average = "n/a" if self.average_speed_limit is None else f"{self.average_speed_limit:.1f}km/h"
        return (
            f"total cameras: {self.total_cameras}, cities: {self.unique_cities}, "
            f"average limit: {average}"
        )


def _contains(haystack: str, needle: str) -> bool:
    return needle.casefold() in haystack.casefold()


def records_frame(records: RecordSource) -> pd.DataFrame:
    """Tabular view of records: raw text columns plus parsed `lat`, `lon`, `limit_kph`."""

    rows = []
    for record in records_of(records):
        row = record.model_dump()
        row["lat"] = record.numeric_latitude()
        row["lon"] = record.numeric_longitude()
        row["limit_kph"] = record.numeric_speed_limit()
        rows.append(row)
    if not rows:
        return pd.DataFrame(columns=FRAME_COLUMNS)
    return pd.DataFrame(rows, columns=FRAME_COLUMNS)


def filter_by_city(source: RecordSource, city_name: str) -> list[CameraRecord]:
    return [record for record in records_of(source) if _contains(record.city_name, city_name)]


def filter_by_speed_limit(source: RecordSource, speed_limit: int) -> list[CameraRecord]:
    return [record for record in records_of(source) if record.numeric_speed_limit() == speed_limit]


def filter_by_direction(source: RecordSource, direction: str) -> list[CameraRecord]:
    return [record for record in records_of(source) if _contains(record.direction, direction)]


def unique_cities(source: RecordSource) -> list[str]:
    return sorted({record.city_name for record in records_of(source) if record.city_name.strip()})


def city_counts(source: RecordSource) -> dict[str, int]:
    df = records_frame(source)
    if df.empty:
        return {}
    cities = df.loc[df["city_name"].str.strip() != "", "city_name"]
    counts = cities.value_counts().sort_index()
    return {str(city): int(count) for city, count in counts.items()}


def speed_limit_distribution(source: RecordSource) -> dict[int, int]:
    df = records_frame(source)
    if df.empty:
        return {}
    limits = df.loc[df["limit_kph"] > 0, "limit_kph"]
    counts = limits.value_counts().sort_index()
    return {int(limit): int(count) for limit, count in counts.items()}


def statistics(source: RecordSource) -> CameraStatistics:
    records = records_of(source)
    df = records_frame(records)
    if df.empty:
        return CameraStatistics()

    positive = df.loc[df["limit_kph"] > 0, "limit_kph"]
    if positive.empty:
        average_speed_limit = max_speed_limit = min_speed_limit = None
    else:
        average_speed_limit = float(positive.mean())
        max_speed_limit = int(positive.max())
        min_speed_limit = int(positive.min())

    # Group on the literal text; blank directions form their own group.
    directions = df["direction"].value_counts(sort=False, dropna=False)

    return CameraStatistics(
        total_cameras=int(len(df)),
        unique_cities=len(unique_cities(records)),
        average_speed_limit=average_speed_limit,
        max_speed_limit=max_speed_limit,
        min_speed_limit=min_speed_limit,
        direction_counts={str(direction): int(count) for direction, count in directions.items()},
    )
