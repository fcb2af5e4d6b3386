"""
home_finder/data_gathering/features/data_normalizer/data_normalizer.py

ResponseNormalizer turns the raw search response into Property records:
  1. Extracts the `props` listing array (anything else counts as empty).
  2. Applies field-by-field defaults for missing or mistyped values, so a
     malformed record never stops processing of the others.
  3. Optionally drops properties whose price falls outside a PriceRange,
     since the search service does not reliably honour its price filters.

Records without a `zpid` get a best-effort identifier that is not stable
across calls.
"""

import logging
import math
import uuid
from typing import Any, Dict, List, Optional, Union

from home_finder.models import UNKNOWN_CITY, PriceRange, Property

logger = logging.getLogger(__name__)

PLACEHOLDER_IMAGE = "https://via.placeholder.com/800x500?text=No+Image"


def _text(value: Any) -> Optional[str]:
    """Return a stripped, non-empty string or None."""
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def _number(value: Any) -> Optional[float]:
    """Parse ints, floats and numeric strings; None for anything else."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        num = float(value)
    elif isinstance(value, str):
        try:
            num = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    if math.isnan(num) or math.isinf(num):
        return None
    return num


def _compact(num: Optional[float]) -> Optional[Union[int, float]]:
    if num is None:
        return None
    return int(num) if num.is_integer() else num


def _first_number(record: Dict[str, Any], *keys: str) -> Optional[Union[int, float]]:
    for key in keys:
        num = _number(record.get(key))
        if num is not None:
            return _compact(num)
    return None


class ResponseNormalizer:
    """
    Maps raw listing records into Property objects, applying defaults for
    missing or mistyped fields.
    """

    def __init__(self, placeholder_image: str = PLACEHOLDER_IMAGE):
        self.placeholder_image = placeholder_image

    @staticmethod
    def extract_listings(raw_json: Any) -> List[Any]:
        """Return the `props` array of the response, or [] if absent or mistyped."""
        if isinstance(raw_json, dict) and isinstance(raw_json.get("props"), list):
            return raw_json["props"]
        return []

    @staticmethod
    def _derive_id(record: Dict[str, Any]) -> Union[int, str]:
        """
        Prefer the external zpid; otherwise compose one from coordinates and
        lot size, or fall back to a random value.
        """
        zpid = record.get("zpid")
        if zpid is not None:
            return zpid

        lat = _number(record.get("latitude"))
        lon = _number(record.get("longitude"))
        if lat is not None and lon is not None:
            parts = [f"{lat}", f"{lon}"]
            lot = _number(record.get("lotAreaValue"))
            if lot is not None:
                parts.append(f"{lot}")
            return "geo-" + ",".join(parts)

        return f"fallback-{uuid.uuid4().hex}"

    def normalize_one(self, record: Any) -> Property:
        """Normalize a single raw record. Never raises on malformed input."""
        if not isinstance(record, dict):
            logger.debug(f"Treating non-object listing as empty: {record!r}")
            record_fields: Dict[str, Any] = {}
        else:
            record_fields = record

        raw_city = _text(record_fields.get("city"))
        raw_state = _text(record_fields.get("state"))

        price = _number(record_fields.get("price"))
        if price is None or price < 0:
            price = 0.0

        neighborhood = (
            _text(record_fields.get("address"))
            or _text(record_fields.get("streetAddress"))
            or ", ".join(p for p in (raw_city, raw_state) if p)
        )

        price_change = record_fields.get("priceChangeText")

        return Property(
            id=self._derive_id(record_fields),
            city=raw_city or UNKNOWN_CITY,
            state=raw_state or "",
            median_price=_compact(price),
            image=_text(record_fields.get("imgSrc")) or self.placeholder_image,
            neighborhood=neighborhood,
            price_change=price_change if isinstance(price_change, str) else None,
            bedrooms=_first_number(record_fields, "bedrooms", "beds"),
            bathrooms=_first_number(record_fields, "bathrooms", "baths"),
            living_area=_first_number(record_fields, "livingArea", "sqft"),
            raw_data=record,
        )

    def normalize(self, raw_json: Any, price_range: Optional[PriceRange] = None) -> List[Property]:
        """
        Normalize a raw search response, preserving source order.

        Args:
            raw_json:    Decoded response body from the search API.
            price_range: Optional backstop; when bounded, properties priced
                         outside it are dropped.

        Returns:
            A list of Property records.
        """
        listings = self.extract_listings(raw_json)
        properties = [self.normalize_one(rec) for rec in listings]
        logger.info(f"Normalized {len(properties)} listings.")

        if price_range is not None and price_range.is_bounded:
            kept = [p for p in properties if price_range.contains(p.median_price)]
            dropped = len(properties) - len(kept)
            if dropped:
                logger.info(
                    f"Dropped {dropped} listings outside price range "
                    f"[{price_range.min}, {price_range.max}]."
                )
            properties = kept

        return properties
