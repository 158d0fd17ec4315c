"""Core data models shared by the restaurant snapshot pipeline."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict

REQUIRED_COLUMNS = (
    "name",
    "category",
    "google_maps_url",
    "place_id",
    "notes",
    "speed",
    "price",
)


@dataclass(frozen=True, slots=True)
class BaseRecord:
    """Normalized sheet row, before any Places data is merged in."""

    name: str = ""
    category: str = ""
    google_maps_url: str = ""
    place_id: str = ""
    notes: str = ""
    speed: str = ""
    price: str = ""

    def is_blank(self) -> bool:
        return not any(self.to_dict().values())

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
