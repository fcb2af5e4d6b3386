"""
home_finder/enrichment/agents.py

Registry helpers for optional enrichment agents.

An agent takes a city name and returns an AgentResult carrying narrative text
(or an error). Agents run independently: one agent failing never affects the
others, and never fails the property search.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Protocol, Sequence

from home_finder.models import UNKNOWN_CITY, Property

logger = logging.getLogger(__name__)


@dataclass
class AgentResult:
    type: str
    data: Optional[str]
    error: Optional[str] = None


class EnrichmentAgent(Protocol):
    type: str

    def fetch(self, city: str) -> AgentResult: ...


def _safe_fetch(agent: EnrichmentAgent, city: str) -> AgentResult:
    try:
        return agent.fetch(city)
    except Exception as e:
        # Agents are expected to capture their own errors; keep misbehaving ones isolated.
        logger.warning(f"{agent.type} agent failed for {city}: {e}")
        return AgentResult(type=agent.type, data=None, error=str(e))


def gather_city_data(city: str, agents: Sequence[EnrichmentAgent]) -> List[AgentResult]:
    """Run every agent for a city and return all results, failures included."""
    return [_safe_fetch(agent, city) for agent in agents]


def enrich_properties(properties: Iterable[Property], agents: Sequence[EnrichmentAgent]) -> None:
    """
    Attach agent output to each property's `enrichments`, keyed by agent type.

    Each agent is called at most once per distinct city. Properties without
    a known city are left unenriched.
    """
    cache: Dict[str, List[AgentResult]] = {}

    for prop in properties:
        if not prop.city or prop.city == UNKNOWN_CITY:
            logger.debug(f"Skipping enrichment for property {prop.id}: no city")
            continue
        if prop.city not in cache:
            cache[prop.city] = gather_city_data(prop.city, agents)
        for result in cache[prop.city]:
            if result.error:
                logger.warning(f"Enrichment '{result.type}' unavailable for {prop.city}: {result.error}")
            prop.enrichments[result.type] = result.data
