from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from ..config.loader import DEFAULT_CONFIG_PATH, ConfigError, apply_env_overrides, load_config
from ..constants import ACTIVITY_CODES, ACTIVITY_LABELS, ICON_COLORS
from ..geocoding.provider import ProviderError, build_geocoder
from ..logging.error_log import ErrorLogBuffer
from ..logging.init import log_summary, setup_logging
from ..models.config_models import MapperConfig
from ..services.aggregate import filter_by_neighborhood
from ..services.coordinates import load_coordinate_markers
from ..services.session import MapperSession
from ..services.summary import failed_geocode_message, render_summary_line
from ..sheets.fields import (
    ACTIVITIES_HEADER_CANONICAL,
    COORDINATES_HEADER_CANONICAL,
    INDIVIDUALS_HEADER_CANONICAL,
)
from ..sheets.header import find_header_row
from ..sheets.reader import SheetReadError, build_records, load_records, read_raw_rows

"""CLI entrypoint.

Batch rendition of the upload flow:
- individuals file -> geocoded individuals
- optional activities file -> facilitator markers
- optional coordinates file -> markers read straight from lat/lng columns
The resulting JSON document goes to --output or stdout; log lines go to stderr.

Exit codes: 0 all addresses resolved, 2 some addresses failed, 1 fatal.
"""

EXIT_SUCCESS_ALL = 0
EXIT_FATAL = 1
EXIT_PARTIAL_FAILURE = 2


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Geocode individuals and map activities to facilitator homes")
    p.add_argument("--individuals", type=Path, required=True, help="Individuals spreadsheet (.csv/.xlsx)")
    p.add_argument("--activities", type=Path, help="Activities spreadsheet (.csv/.xlsx)")
    p.add_argument("--coordinates", type=Path, help="Latitude/longitude spreadsheet (.csv/.xlsx)")
    p.add_argument("--config", type=Path, help=f"Config YAML (default: {DEFAULT_CONFIG_PATH} if present)")
    p.add_argument("--output", type=Path, help="Write the JSON result here instead of stdout")
    p.add_argument("--neighborhood", help="Only output individuals in this neighborhood ('Other' = blank)")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument("--inspect-data", action="store_true", help="Print detected headers & first rows then exit")
    return p.parse_args(argv)


def _resolve_config(path: Path | None) -> MapperConfig:
    if path is not None:
        return load_config(path)
    if DEFAULT_CONFIG_PATH.exists():
        return load_config(DEFAULT_CONFIG_PATH)
    return MapperConfig()


def _inspect_data(args: argparse.Namespace, cfg: MapperConfig) -> int:
    targets = [
        ("individuals", args.individuals, INDIVIDUALS_HEADER_CANONICAL),
        ("activities", args.activities, ACTIVITIES_HEADER_CANONICAL),
        ("coordinates", args.coordinates, COORDINATES_HEADER_CANONICAL),
    ]
    for kind, path, canonical in targets:
        if path is None:
            continue
        print(f"FILE: {path.name} ({kind})")
        try:
            raw = read_raw_rows(path)
        except SheetReadError as e:
            print(f"  read_error: {e}")
            continue
        index = find_header_row(raw, canonical, cfg.header_min_matches)
        columns, records = build_records(raw, index)
        print(f"  header_row={index} cols={columns}")
        print("    sample_rows=", records[:3])
    return EXIT_SUCCESS_ALL


def _build_document(session: MapperSession, coordinate_markers: list[Any], neighborhood: str | None) -> dict[str, Any]:
    individuals = session.individuals
    if neighborhood:
        individuals = filter_by_neighborhood(individuals, neighborhood)
    activities = session.activities
    return {
        "individuals": [ind.to_dict() for ind in individuals],
        "failedCount": session.failed_count,
        "neighborhoods": session.neighborhoods,
        "markers": [m.to_dict() for m in activities.markers],
        "coordinateMarkers": [m.to_dict() for m in coordinate_markers],
        "typeCounts": activities.type_counts,
        "noFacilitators": activities.no_facilitators,
        "facilitatorNotFound": activities.facilitator_not_found,
        "legend": [
            {"code": code, "label": ACTIVITY_LABELS[code], "color": ICON_COLORS[code]}
            for code in ACTIVITY_CODES
        ],
    }


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # None のときのみシステム引数を読む (テストで main([]) を呼ぶため)
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    load_dotenv(dotenv_path=Path(".env"), override=False)

    if args.debug:
        for h in logger.handlers:
            h.setLevel(logging.DEBUG)
        logger.setLevel(logging.DEBUG)
        logger.debug("debug mode enabled")

    try:
        cfg = apply_env_overrides(_resolve_config(args.config))
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    if args.inspect_data:
        return _inspect_data(args, cfg)

    try:
        individuals_sheet = load_records(args.individuals, INDIVIDUALS_HEADER_CANONICAL, cfg.header_min_matches)
        activities_sheet = (
            load_records(args.activities, ACTIVITIES_HEADER_CANONICAL, cfg.header_min_matches)
            if args.activities is not None
            else None
        )
        coordinate_records = (
            load_records(args.coordinates, COORDINATES_HEADER_CANONICAL, cfg.header_min_matches).records
            if args.coordinates is not None
            else []
        )
    except SheetReadError as e:
        logger.error(f"read: {e}")
        return EXIT_FATAL

    try:
        geocoder = build_geocoder(cfg.geocoder)
    except ProviderError as e:
        logger.error(f"geocoder: {e}")
        return EXIT_FATAL

    session = MapperSession(geocoder, cfg, show_progress=True)
    logger.info(f"Geocoding individuals from: {args.individuals}")
    addresses = session.load_individuals(individuals_sheet.records)
    if activities_sheet is not None:
        logger.info(f"Resolving activities from: {args.activities}")
        session.load_activities(activities_sheet.records)
    coordinate_markers = load_coordinate_markers(coordinate_records)

    error_log = ErrorLogBuffer(cfg.logs_directory)
    error_log.add_address_failures(args.individuals.name, addresses)
    if args.activities is not None:
        error_log.add_activity_issues(args.activities.name, session.activities)
    log_path = error_log.flush()
    if log_path is not None:
        logger.info(f"error log written: {log_path}")

    document = _build_document(session, coordinate_markers, args.neighborhood)
    text = json.dumps(document, ensure_ascii=False, indent=2, default=str)
    if args.output is not None:
        args.output.write_text(text + "\n", encoding="utf-8")
        logger.info(f"result written: {args.output}")
    else:
        print(text)

    log_summary(render_summary_line(session.address_resolution, session.activities)[len("SUMMARY "):])
    message = failed_geocode_message(session.failed_count)
    if message:
        logger.warning(message)
        return EXIT_PARTIAL_FAILURE
    return EXIT_SUCCESS_ALL
