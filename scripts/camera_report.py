from __future__ import annotations

import argparse
from pathlib import Path

from trafficcams.logging_config import configure_logging
from trafficcams.report import run_report
from trafficcams.settings import get_config
from trafficcams.storage.datasets import serialization_options_from_config


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Print a summary report for a traffic camera dataset.")
    parser.add_argument(
        "--data-file",
        default=None,
        help="Dataset JSON file (default: config.paths.data_file).",
    )
    parser.add_argument("--city", default=None, help="City keyword for the example filter.")
    parser.add_argument("--speed-limit", type=int, default=None, help="Speed limit for the example filter.")
    parser.add_argument("--direction", default=None, help="Direction keyword for the example filter.")
    parser.add_argument("--lat", type=float, default=None, help="Latitude of the nearby-search center.")
    parser.add_argument("--lon", type=float, default=None, help="Longitude of the nearby-search center.")
    parser.add_argument("--radius-km", type=float, default=None, help="Nearby-search radius in km.")
    parser.add_argument(
        "--export",
        default=None,
        help="Re-serialize the loaded dataset to this path after reporting (relative to config.paths.output_dir).",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Root log level override (e.g. DEBUG, WARNING).",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    configure_logging(level=args.log_level)
    config = get_config()

    data_file = Path(args.data_file) if args.data_file else config.paths.data_file
    overrides = {
        "city_keyword": args.city,
        "speed_limit": args.speed_limit,
        "direction_keyword": args.direction,
        "center_lat": args.lat,
        "center_lon": args.lon,
        "radius_km": args.radius_km,
    }
    report_options = config.report.model_copy(
        update={key: value for key, value in overrides.items() if value is not None}
    )
    serialization = serialization_options_from_config(config)

    export_path = None
    if args.export:
        export_path = Path(args.export)
        if not export_path.is_absolute():
            export_path = config.paths.output_dir / export_path

    raise SystemExit(run_report(data_file, report_options, serialization, export_path=export_path))


if __name__ == "__main__":
    main()
