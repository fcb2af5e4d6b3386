"""
home_finder/data_gathering/features/fetch_executor/fetch_executor.py

This module executes the property search request:
  1. Sends exactly one GET to the search endpoint with the RapidAPI headers.
  2. Buffers the whole body and decodes it as JSON.
  3. Converts any failure (network, timeout, non-2xx status, undecodable body)
     into a TransportError. There is no retry.

Classes:
  - SearchClient(config: SearchConfig, session=None)
      .search(endpoint: str, params: dict) -> Any
      .close()  (also usable as a context manager)

Usage:
  from home_finder.data_gathering.features.fetch_executor.fetch_executor import SearchClient
  with SearchClient(config) as client:
      raw = client.search(endpoint, params)
"""

import logging
from typing import Any, Dict, Optional

import requests

from home_finder.data_gathering.features.query_builder.query_builder import encode_query
from home_finder.data_gathering.providers.zillow_api import SearchConfig

logger = logging.getLogger(__name__)


class TransportError(Exception):
    """Raised when the search request fails or returns an unusable body."""
    pass


class SearchTimeoutError(TransportError):
    """Raised when the search request exceeds the configured timeout."""
    pass


class SearchClient:
    """
    Issues single search requests against the property-search API.
    """

    def __init__(self, config: SearchConfig, session: Optional[requests.Session] = None):
        """
        Args:
            config:  Credentials, endpoint and timeout settings.
            session: Optional requests session (injected by tests). An injected
                     session is left open by close().
        """
        self.config = config
        self._owns_session = session is None
        self.session = session if session is not None else requests.Session()

    def close(self) -> None:
        if self._owns_session:
            self.session.close()

    def __enter__(self) -> "SearchClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def search(self, endpoint: str, params: Dict[str, Any]) -> Any:
        """
        Execute the search and return the decoded JSON payload.

        Args:
            endpoint: Full API URL for the search endpoint.
            params:   Query parameters.

        Returns:
            The decoded JSON body.

        Raises:
            SearchTimeoutError: If the request times out.
            TransportError:     On any other network, status or decoding failure.
        """
        url = f"{endpoint}?{encode_query(params)}"

        try:
            logger.info(f"Fetching search results from {endpoint}...")
            response = self.session.get(
                url,
                headers=self.config.headers,
                timeout=self.config.timeout,
            )
            response.raise_for_status()
        except requests.Timeout as e:
            logger.error(f"Search request timed out after {self.config.timeout}s: {e}")
            raise SearchTimeoutError(f"Search request timed out after {self.config.timeout}s") from e
        except requests.RequestException as e:
            logger.error(f"Search request failed: {e}")
            raise TransportError(str(e)) from e

        try:
            data = response.json()
        except ValueError as e:
            logger.error(f"Search response was not valid JSON: {e}")
            raise TransportError(f"Invalid JSON in search response: {e}") from e

        logger.info(f"Search response received (status {response.status_code}).")
        return data
