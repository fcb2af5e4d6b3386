"""
home_finder/models.py

Data shapes shared across the home-finder pipeline:
  - Preferences: the questionnaire answers, validated against
    user_interaction/schemas/preferences.json.
  - PriceRange:  optional min/max bounds resolved from a budget token.
  - Property:    a normalized listing, ready for scoring and display.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from jsonschema import validate, ValidationError

PREFERENCES_SCHEMA_PATH = Path(__file__).parent / "user_interaction" / "schemas" / "preferences.json"

# Location used when the user leaves the location question blank
DEFAULT_LOCATION = "Austin, TX"

# City given to listings whose record has none
UNKNOWN_CITY = "Unknown"

_preferences_schema: Optional[Dict[str, Any]] = None


class InvalidPreferencesError(ValueError):
    """Raised when questionnaire answers do not match the preferences schema."""
    pass


def _load_preferences_schema() -> Dict[str, Any]:
    global _preferences_schema
    if _preferences_schema is None:
        _preferences_schema = json.loads(PREFERENCES_SCHEMA_PATH.read_text(encoding="utf-8"))
    return _preferences_schema


@dataclass(frozen=True)
class PriceRange:
    """Price bounds in dollars. None means unbounded on that side."""
    min: Optional[int] = None
    max: Optional[int] = None

    @property
    def is_bounded(self) -> bool:
        return self.min is not None or self.max is not None

    def contains(self, price: float) -> bool:
        if self.min is not None and price < self.min:
            return False
        if self.max is not None and price > self.max:
            return False
        return True


@dataclass(frozen=True)
class Preferences:
    """
    Answers collected by the questionnaire.

    Only `location` and `budget` drive the search; the remaining answers are
    kept for display.
    """
    location: Union[str, Mapping[str, str], None] = None
    budget: Optional[str] = None
    experience: Optional[str] = None
    lifestyle: Tuple[str, ...] = ()
    dealbreakers: Tuple[str, ...] = ()

    @property
    def location_text(self) -> str:
        """
        Location as free text, joining structured city/state pairs and
        falling back to DEFAULT_LOCATION when nothing usable was given.
        """
        loc = self.location
        if isinstance(loc, Mapping):
            parts = [loc.get("city"), loc.get("state")]
            loc = ", ".join(p.strip() for p in parts if isinstance(p, str) and p.strip())
        if isinstance(loc, str) and loc.strip():
            return loc.strip()
        return DEFAULT_LOCATION

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Preferences":
        """
        Build Preferences from a raw answers mapping.

        Raises:
            InvalidPreferencesError: If the answers fail schema validation.
        """
        try:
            validate(instance=dict(data), schema=_load_preferences_schema())
        except ValidationError as e:
            raise InvalidPreferencesError(f"Invalid preferences: {e.message}") from e

        return cls(
            location=data.get("location"),
            budget=data.get("budget"),
            experience=data.get("experience"),
            lifestyle=tuple(data.get("lifestyle") or ()),
            dealbreakers=tuple(data.get("dealbreakers") or ()),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "location": dict(self.location) if isinstance(self.location, Mapping) else self.location,
            "budget": self.budget,
            "experience": self.experience,
            "lifestyle": list(self.lifestyle),
            "dealbreakers": list(self.dealbreakers),
        }


@dataclass
class Property:
    """A listing in the fixed internal shape used for scoring and display."""
    id: Union[int, str]
    city: str = UNKNOWN_CITY
    state: str = ""
    median_price: float = 0
    image: str = ""
    neighborhood: str = ""
    price_change: Optional[str] = None
    bedrooms: Optional[float] = None
    bathrooms: Optional[float] = None
    living_area: Optional[float] = None
    match_score: Optional[int] = None
    raw_data: Any = None
    unique_id: Optional[str] = None
    enrichments: Dict[str, Optional[str]] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Display shape, with the camelCase keys the results view expects."""
        return {
            "id": self.id,
            "city": self.city,
            "state": self.state,
            "medianPrice": self.median_price,
            "image": self.image,
            "neighborhood": self.neighborhood,
            "priceChange": self.price_change,
            "bedrooms": self.bedrooms,
            "bathrooms": self.bathrooms,
            "livingArea": self.living_area,
            "matchScore": self.match_score,
            "uniqueId": self.unique_id,
            "enrichments": dict(self.enrichments),
        }
