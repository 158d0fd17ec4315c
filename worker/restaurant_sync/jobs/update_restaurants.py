"""CLI job that rebuilds restaurants.json from the published sheet and Google Places."""

import argparse
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from restaurant_sync.core.config import ConfigError, get_settings
from restaurant_sync.core.snapshot import build_snapshot, write_snapshot
from restaurant_sync.etl.csv_parser import parse_csv
from restaurant_sync.etl.transform import (
    CsvSchemaError,
    build_header_map,
    to_base_record,
    to_enriched_record,
    to_failed_record,
    to_passthrough_record,
)
from restaurant_sync.vendors import google_places, published_sheet

logger = logging.getLogger(__name__)


def run_update_job(
    *,
    csv_url: Optional[str] = None,
    output_path: Optional[str] = None,
    now: Optional[datetime] = None,
) -> Dict[str, Any]:
    """Fetch, enrich and write the snapshot. Returns the snapshot that was written.

    Any exception raised here is fatal and happens before the output file is
    touched; per-place Places failures are recorded in the snapshot instead.
    """
    settings = get_settings()
    csv_url = csv_url or settings.sheet_csv_url
    output_path = output_path or settings.output_path
    now = now or datetime.now(timezone.utc)

    logger.info("Fetching sheet CSV from %s", csv_url)
    csv_text = published_sheet.fetch_csv(csv_url, timeout=settings.http_timeout)
    rows = parse_csv(csv_text)
    if not rows:
        raise CsvSchemaError("CSV appears empty.")

    header_map = build_header_map(rows[0])
    logger.info("Parsed %d data rows", len(rows) - 1)

    restaurants: List[Dict[str, Any]] = []
    places_ok = 0
    places_failed = 0

    for row in rows[1:]:
        if not row:
            continue
        base = to_base_record(row, header_map)
        if base is None:
            continue

        if not base.place_id:
            restaurants.append(to_passthrough_record(base))
            continue

        try:
            result = google_places.place_details(
                place_id=base.place_id,
                api_key=settings.google_maps_api_key,
                timeout=settings.http_timeout,
            )
        except google_places.GooglePlacesError as exc:
            places_failed += 1
            logger.warning("Place details failed (%s): %s %s", base.place_id, exc.status, exc.message or "")
            restaurants.append(to_failed_record(base, exc.status, exc.message))
            continue

        places_ok += 1
        restaurants.append(to_enriched_record(base, result, now))

    snapshot = build_snapshot(
        restaurants=restaurants,
        source_csv=csv_url,
        places_ok=places_ok,
        places_failed=places_failed,
        generated_at=now,
    )
    write_snapshot(output_path, snapshot)
    logger.info(
        "Wrote %s with %d places (ok=%d failed=%d)",
        output_path,
        len(restaurants),
        places_ok,
        places_failed,
    )
    return snapshot


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Rebuild restaurants.json from the published sheet")
    parser.add_argument("--csv-url", dest="csv_url", help="Published CSV URL (defaults to SHEET_CSV_URL)")
    parser.add_argument(
        "--output",
        dest="output_path",
        help="Snapshot path (defaults to RESTAURANTS_OUTPUT_PATH or restaurants.json)",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s - %(message)s")
    args = build_parser().parse_args(argv)

    try:
        run_update_job(csv_url=args.csv_url, output_path=args.output_path)
    except ConfigError as exc:
        logger.error("Configuration error: %s", exc)
        raise SystemExit(2) from exc
    except Exception as exc:  # noqa: BLE001
        logger.error("Restaurant update failed: %s", exc, exc_info=True)
        raise SystemExit(1) from exc


if __name__ == "__main__":
    main()
