"""
home_finder/data_gathering/features/budget_range/budget_range.py

Maps a questionnaire budget bucket (e.g. '200k-400k') to a numeric PriceRange.

Unknown or missing buckets resolve to an unbounded range, leaving the full
price range to the search service.
"""

from typing import Dict, Optional

from home_finder.models import PriceRange

BUDGET_RANGES: Dict[str, PriceRange] = {
    "under-200k": PriceRange(max=200_000),
    "200k-400k":  PriceRange(min=200_000, max=400_000),
    "400k-600k":  PriceRange(min=400_000, max=600_000),
    "600k-1m":    PriceRange(min=600_000, max=1_000_000),
    "over-1m":    PriceRange(min=1_000_000),
}


def map_budget_to_price_range(budget: Optional[str]) -> PriceRange:
    """Return the price bounds for a budget bucket, or an unbounded range."""
    if not isinstance(budget, str):
        return PriceRange()
    return BUDGET_RANGES.get(budget, PriceRange())
