"""Console report over a camera dataset.

`build_report` turns a loaded dataset into printable lines; `run_report` wraps loading, the
optional re-export and error reporting, so a bad file or a failed write produces a message
and an exit code rather than a traceback.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Optional

from trafficcams.analytics.geo import bounds, find_nearby
from trafficcams.analytics.queries import (
    city_counts,
    filter_by_city,
    filter_by_direction,
    filter_by_speed_limit,
    speed_limit_distribution,
    statistics,
)
from trafficcams.ingestion.errors import DatasetError, classify_dataset_error
from trafficcams.ingestion.schemas import Dataset
from trafficcams.settings import ReportSection
from trafficcams.storage.datasets import DEFAULT_OPTIONS, SerializationOptions, load, save


logger = logging.getLogger(__name__)

EXAMPLE_ROWS = 5

EXIT_OK = 0
EXIT_LOAD_FAILED = 1
EXIT_NOT_LOADED = 2
EXIT_EXPORT_FAILED = 3


def _limit_text(value: Optional[int]) -> str:
    return "n/a" if value is None else f"{value}km/h"


def build_report(dataset: Dataset, options: Optional[ReportSection] = None) -> list[str]:
    opts = options or ReportSection()
    result = dataset.result
    records = dataset.records
    lines: list[str] = []

    lines.append(f"Resource ID: {result.resource_id if result is not None else ''}")
    lines.append(f"Declared total: {result.total if result is not None else 0}")
    lines.append(f"Cameras loaded: {len(records)}")
    lines.append("")

    stats = statistics(dataset)
    lines.append("=== Statistics ===")
    lines.append(str(stats))
    lines.append(f"Max speed limit: {_limit_text(stats.max_speed_limit)}")
    lines.append(f"Min speed limit: {_limit_text(stats.min_speed_limit)}")
    lines.append("")

    lines.append("=== Directions ===")
    for direction, count in sorted(stats.direction_counts.items(), key=lambda item: -item[1]):
        lines.append(f"{direction or '(blank)'}: {count}")
    lines.append("")

    lines.append("=== Speed limits ===")
    for limit, count in speed_limit_distribution(dataset).items():
        lines.append(f"{limit}km/h: {count}")
    lines.append("")

    per_city = city_counts(dataset)
    lines.append(f"=== Cities ({len(per_city)}) ===")
    for city, count in list(per_city.items())[: opts.top_n]:
        lines.append(f"{city}: {count}")
    if len(per_city) > opts.top_n:
        lines.append(f"... {len(per_city) - opts.top_n} more")
    lines.append("")

    lines.append(f"=== City matching '{opts.city_keyword}' (first {EXAMPLE_ROWS}) ===")
    for camera in filter_by_city(dataset, opts.city_keyword)[:EXAMPLE_ROWS]:
        lines.append(f"{camera.address} - {camera.direction} (limit: {camera.speed_limit}km/h)")
        lines.append(f"  coordinates: ({camera.numeric_longitude()}, {camera.numeric_latitude()})")
        lines.append(f"  unit: {camera.dept_name} {camera.branch_name}")
    lines.append("")

    lines.append(f"=== Speed limit {opts.speed_limit}km/h (first {EXAMPLE_ROWS}) ===")
    for camera in filter_by_speed_limit(dataset, opts.speed_limit)[:EXAMPLE_ROWS]:
        lines.append(str(camera))
    lines.append("")

    lines.append(f"=== Direction matching '{opts.direction_keyword}' (first {EXAMPLE_ROWS}) ===")
    for camera in filter_by_direction(dataset, opts.direction_keyword)[:EXAMPLE_ROWS]:
        lines.append(str(camera))
    lines.append("")

    nearby = find_nearby(records, opts.center_lat, opts.center_lon, opts.radius_km)
    lines.append(
        f"=== Within {opts.radius_km}km of ({opts.center_lat}, {opts.center_lon}): {len(nearby)} ==="
    )
    for item in nearby[:EXAMPLE_ROWS]:
        lines.append(str(item))
    lines.append("")

    lines.append("=== Bounds ===")
    lines.append(str(bounds(records)))
    return lines


def _report_error(stage: str, exc: DatasetError, echo: Callable[[str], None]) -> None:
    info = classify_dataset_error(exc)
    logger.error("Dataset %s failed (%s): %s", stage, info.code, info.message)
    echo(f"Error [{info.code}]: {info.message}")


def run_report(
    path: Path | str,
    options: Optional[ReportSection] = None,
    serialization: SerializationOptions = DEFAULT_OPTIONS,
    echo: Callable[[str], None] = print,
    export_path: Path | str | None = None,
) -> int:
    try:
        dataset = load(path, serialization)
    except DatasetError as exc:
        _report_error("load", exc, echo)
        return EXIT_LOAD_FAILED

    if not dataset.is_loaded():
        echo("Dataset reported failure or has no result envelope.")
        return EXIT_NOT_LOADED

    for line in build_report(dataset, options):
        echo(line)

    if export_path is not None:
        try:
            out = save(dataset, export_path, serialization)
        except DatasetError as exc:
            _report_error("export", exc, echo)
            return EXIT_EXPORT_FAILED
        echo(f"Dataset saved to: {out}")
    return EXIT_OK
