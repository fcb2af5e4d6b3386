"""
home_finder/data_gathering/features/query_builder/query_builder.py

This module maps user Preferences and a resolved PriceRange to search API
parameters and builds the search endpoint.

Key functions:
  - build_params(preferences, price_range) -> params: dict
  - encode_query(params) -> str
  - build_search_query(preferences, price_range, config) -> (endpoint: str, params: dict)

Note: price bounds are only sent when truthy, so a bound of exactly 0 is
treated the same as an unset bound.
"""

import logging
from typing import Any, Dict, Tuple
from urllib.parse import quote, urlencode

from home_finder.data_gathering.providers.zillow_api import SearchConfig
from home_finder.models import Preferences, PriceRange

logger = logging.getLogger(__name__)


def build_params(preferences: Preferences, price_range: PriceRange) -> Dict[str, Any]:
    """
    Convert preferences into search query parameters.

    Returns:
        params (dict): Always holds 'location'; 'price_min' / 'price_max'
        only when the matching bound is set and non-zero.
    """
    params: Dict[str, Any] = {"location": preferences.location_text}

    if price_range.min:
        params["price_min"] = int(price_range.min)
    if price_range.max:
        params["price_max"] = int(price_range.max)

    return params


def encode_query(params: Dict[str, Any]) -> str:
    """Percent-encode params, spaces as %20 (e.g. location=Austin%2C%20TX)."""
    return urlencode(params, quote_via=quote)


def build_search_query(
    preferences: Preferences,
    price_range: PriceRange,
    config: SearchConfig,
) -> Tuple[str, Dict[str, Any]]:
    """
    Build the search endpoint and parameters.

    Returns:
        endpoint (str), params (dict)
    """
    params = build_params(preferences, price_range)
    logger.info(f"Built query parameters: {params}")
    return config.endpoint, params
