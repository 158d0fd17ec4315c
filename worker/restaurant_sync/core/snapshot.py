"""Snapshot assembly and persistence for restaurants.json."""

import json
import logging
import os
import tempfile
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Union

from restaurant_sync.etl.closing_time import format_iso_utc

logger = logging.getLogger(__name__)


def build_snapshot(
    *,
    restaurants: List[Dict[str, Any]],
    source_csv: str,
    places_ok: int,
    places_failed: int,
    generated_at: datetime,
) -> Dict[str, Any]:
    return {
        "generated_at": format_iso_utc(generated_at),
        "source_csv": source_csv,
        "counts": {
            "total_rows": len(restaurants),
            "places_ok": places_ok,
            "places_failed": places_failed,
        },
        "restaurants": restaurants,
    }


def write_snapshot(path: Union[str, Path], snapshot: Dict[str, Any]) -> Path:
    """Write the snapshot in full via a temp file, atomically replacing any previous one."""
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(prefix=f".{target.name}.", suffix=".tmp", dir=str(target.parent))
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            json.dump(snapshot, fh, ensure_ascii=False, indent=2)
        os.replace(tmp_name, target)
    except BaseException:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise

    logger.debug("Snapshot written to %s", target)
    return target
