"""
home_finder/match_reasoning/features/matcher.py

MatchScorer rates how well a listing's price fits the user's budget bucket:

  - Inside the bucket: 95 at the midpoint, dropping linearly to 90 at the edges.
  - Below the bucket:  88 (a bargain may still be relevant).
  - Above the bucket:  86.

The score always uses the bucket chosen in the questionnaire, closed on both
sides (see SCORING_RANGES), never the search backstop range.
"""

import logging
import math
from typing import Dict, Iterable, Optional, Tuple

from home_finder.models import Property

logger = logging.getLogger(__name__)

SCORING_RANGES: Dict[str, Tuple[int, int]] = {
    "under-200k": (0, 200_000),
    "200k-400k":  (200_000, 400_000),
    "400k-600k":  (400_000, 600_000),
    "600k-1m":    (600_000, 1_000_000),
    "over-1m":    (1_000_000, 10_000_000),
}
DEFAULT_SCORING_RANGE: Tuple[int, int] = (0, 10_000_000)

MIDPOINT_SCORE = 95
EDGE_PENALTY = 10
BELOW_RANGE_SCORE = 88
ABOVE_RANGE_SCORE = 86


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


class MatchScorer:
    """
    Scores properties against a budget bucket.

    Methods:
      - score:     score a single price.
      - score_all: set match_score on every property in place.
    """

    def __init__(self, ranges: Optional[Dict[str, Tuple[int, int]]] = None):
        self.ranges = ranges if ranges is not None else SCORING_RANGES

    def scoring_range(self, budget: Optional[str]) -> Tuple[int, int]:
        if isinstance(budget, str) and budget in self.ranges:
            return self.ranges[budget]
        return DEFAULT_SCORING_RANGE

    def score(self, price: float, budget: Optional[str]) -> int:
        low, high = self.scoring_range(budget)

        if low <= price <= high:
            midpoint = (low + high) / 2
            deviation = abs(price - midpoint) / (high - low)
            return _round_half_up(MIDPOINT_SCORE - deviation * EDGE_PENALTY)
        if price < low:
            return BELOW_RANGE_SCORE
        return ABOVE_RANGE_SCORE

    def score_all(self, properties: Iterable[Property], budget: Optional[str]) -> None:
        for prop in properties:
            prop.match_score = self.score(prop.median_price, budget)
            logger.debug(f"Scored property {prop.id}: {prop.match_score}")
