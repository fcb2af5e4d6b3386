#!/usr/bin/env python3
"""
home_finder/orchestrator.py

End-to-end home search pipeline:
  1. Resolve the budget bucket into a price range.
  2. Build the search query (location + optional price bounds).
  3. Execute the single search request.
  4. Normalize the listings (optionally re-filtering by price).
  5. Score each listing against the budget and curate the top results.
  6. Optionally enrich the results with per-city narrative agents.

Usage:
  home-finder --budget 200k-400k --location "Austin, TX"
  home-finder --interactive --with-crime
  python -m home_finder.orchestrator --json
"""

import argparse
import json
import logging
import sys
from typing import Any, Dict, List, Optional, Sequence

from home_finder.data_gathering.features.budget_range.budget_range import map_budget_to_price_range
from home_finder.data_gathering.features.data_normalizer.data_normalizer import ResponseNormalizer
from home_finder.data_gathering.features.fetch_executor.fetch_executor import SearchClient, TransportError
from home_finder.data_gathering.features.query_builder.query_builder import build_search_query
from home_finder.data_gathering.providers.zillow_api import ConfigurationError, SearchConfig
from home_finder.enrichment.agents import EnrichmentAgent, enrich_properties
from home_finder.match_reasoning.features.curator import ResultCurator
from home_finder.match_reasoning.features.matcher import MatchScorer
from home_finder.models import InvalidPreferencesError, Preferences, Property
from home_finder.user_interaction.features.questions import QUESTIONS

logger = logging.getLogger(__name__)

NOT_SPECIFIED = "Not specified"


def run(
    preferences: Preferences,
    client: SearchClient,
    agents: Sequence[EnrichmentAgent] = (),
    price_backstop: bool = False,
) -> Dict[str, Any]:
    """
    Run the search pipeline for one questionnaire submission.

    Args:
        preferences:    Validated questionnaire answers.
        client:         SearchClient used for the single outbound request.
                        Credentials come from its SearchConfig; the
                        environment is never read here.
        agents:         Optional enrichment agents applied to the curated results.
        price_backstop: Drop listings priced outside the budget bucket.

    Returns:
        {"data": [Property, ...]} on success, or
        {"data": [], "error": "<message>"} when the search request fails.
    """
    price_range = map_budget_to_price_range(preferences.budget)
    endpoint, params = build_search_query(preferences, price_range, client.config)

    try:
        raw = client.search(endpoint, params)
    except TransportError as e:
        logger.error(f"Search failed: {e}")
        return {"data": [], "error": str(e) or e.__class__.__name__}

    properties = ResponseNormalizer().normalize(raw, price_range if price_backstop else None)
    MatchScorer().score_all(properties, preferences.budget)
    curated = ResultCurator().curate(properties)
    logger.info(f"Curated {len(curated)} of {len(properties)} listings.")

    if agents:
        enrich_properties(curated, agents)

    return {"data": curated}


def format_card(prop: Property) -> str:
    """Render one result as a plain-text card."""
    lines = [
        f"{prop.city}, {prop.state}".rstrip(", ") + f"  ({prop.match_score}% Match)",
        f"  {prop.neighborhood}",
        f"  ${prop.median_price:,.0f}",
    ]
    if prop.price_change:
        arrow = "▲" if prop.price_change.startswith("+") else "▼"
        lines[-1] += f"  {arrow} {prop.price_change}"

    details = []
    if prop.bedrooms is not None:
        details.append(f"{prop.bedrooms:g} bd")
    if prop.bathrooms is not None:
        details.append(f"{prop.bathrooms:g} ba")
    if prop.living_area is not None:
        details.append(f"{prop.living_area:,.0f} sqft")
    if details:
        lines.append("  " + " | ".join(details))

    for kind, text in prop.enrichments.items():
        lines.append(f"  [{kind}] {text if text else 'N/A'}")
    return "\n".join(lines)


def _budget_label(budget: Optional[str]) -> str:
    if not budget:
        return NOT_SPECIFIED
    for question in QUESTIONS:
        if question["id"] != "budget":
            continue
        for option in question.get("options", []):
            if option["value"] == budget:
                return option["label"]
    return budget


def summarize_preferences(preferences: Preferences) -> Dict[str, Any]:
    """The answers shown alongside the results, with display labels."""
    return {
        "budgetRange": _budget_label(preferences.budget),
        "topPriorities": len(preferences.lifestyle),
        "dealBreakers": len(preferences.dealbreakers),
        "experience": preferences.experience.replace("-", " ") if preferences.experience else NOT_SPECIFIED,
    }


def render_preferences_summary(preferences: Preferences) -> str:
    summary = summarize_preferences(preferences)
    return "\n".join([
        "Based on Your Preferences",
        f"  Budget Range:   {summary['budgetRange']}",
        f"  Top Priorities: {summary['topPriorities']} selected",
        f"  Deal Breakers:  {summary['dealBreakers']} selected",
        f"  Experience:     {summary['experience']}",
    ])


def render_results(properties: List[Property], preferences: Optional[Preferences] = None) -> str:
    if not properties:
        body = (
            "No Results Found\n"
            "We couldn't find any properties matching your criteria. "
            "Try adjusting your preferences and searching again."
        )
    else:
        body = "\n\n".join(format_card(p) for p in properties)
    if preferences is not None:
        body += "\n\n" + render_preferences_summary(preferences)
    return body


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Find homes matching your budget and location.")
    parser.add_argument("--budget", help="Budget bucket: under-200k, 200k-400k, 400k-600k, 600k-1m, over-1m")
    parser.add_argument("--location", help="City and state to search, e.g. 'Austin, TX'")
    parser.add_argument("--interactive", action="store_true", help="Answer the questionnaire in the terminal")
    parser.add_argument("--strict-budget", action="store_true", help="Drop listings priced outside the budget")
    parser.add_argument("--with-crime", action="store_true", help="Add crime/safety summaries (needs OPENAI_API_KEY)")
    parser.add_argument("--json", action="store_true", help="Print results as JSON")
    parser.add_argument("--timeout", type=float, help="Search request timeout in seconds")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(message)s",
    )

    try:
        if args.interactive:
            from home_finder.user_interaction.features.questionnaire.questionnaire import Questionnaire
            preferences = Questionnaire().run()
        else:
            preferences = Preferences.from_dict({"budget": args.budget, "location": args.location})
    except InvalidPreferencesError as e:
        logger.error(str(e))
        return 2

    try:
        config = SearchConfig.from_env(timeout=args.timeout)
    except ConfigurationError as e:
        logger.error(str(e))
        return 2

    agents: List[EnrichmentAgent] = []
    if args.with_crime:
        from home_finder.enrichment.features.crime_agent.crime_agent import CrimeAgent
        agents.append(CrimeAgent())

    with SearchClient(config) as client:
        result = run(preferences, client, agents=agents, price_backstop=args.strict_budget)

    if args.json:
        payload: Dict[str, Any] = {
            "data": [p.to_dict() for p in result["data"]],
            "preferences": summarize_preferences(preferences),
        }
        if result.get("error"):
            payload["error"] = result["error"]
        print(json.dumps(payload, indent=2))
    else:
        print(render_results(result["data"], preferences))

    return 1 if result.get("error") else 0


if __name__ == "__main__":
    sys.exit(main())
