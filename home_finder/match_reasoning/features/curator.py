"""
home_finder/match_reasoning/features/curator.py

ResultCurator picks the listings to display: it derives a unique_id for each
property, keeps the first occurrence of each, and caps the list. Order is
preserved; nothing is re-sorted by score or price.
"""

import logging
from typing import Iterable, List

from home_finder.models import Property

logger = logging.getLogger(__name__)

MAX_RESULTS = 3


def derive_unique_id(prop: Property) -> str:
    return str(prop.id)


class ResultCurator:
    def __init__(self, limit: int = MAX_RESULTS):
        self.limit = limit

    def curate(self, properties: Iterable[Property]) -> List[Property]:
        seen = set()
        curated: List[Property] = []

        for prop in properties:
            if len(curated) >= self.limit:
                break
            prop.unique_id = derive_unique_id(prop)
            if prop.unique_id in seen:
                logger.debug(f"Dropping duplicate property {prop.unique_id}")
                continue
            seen.add(prop.unique_id)
            curated.append(prop)

        return curated
