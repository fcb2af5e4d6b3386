"""
home_finder/data_gathering/providers/zillow_api.py

This module describes the Zillow property-search API as exposed through RapidAPI:
  1. Endpoint constants (host, search path).
  2. The SearchConfig object carrying credentials and the request timeout.
  3. Loading that config from the environment / .env file.

Environment Variables (in .env file):
  - RAPIDAPI_KEY:           Your RapidAPI key (required).
  - RAPIDAPI_HOST:          API host (default: zillow-com1.p.rapidapi.com).
  - SEARCH_TIMEOUT_SECONDS: Request timeout in seconds (default: 15).

Usage:
  from home_finder.data_gathering.providers.zillow_api import SearchConfig
  config = SearchConfig.from_env()
"""

import math
import os
from dataclasses import dataclass
from typing import Dict, Optional

from dotenv import load_dotenv

DEFAULT_HOST = "zillow-com1.p.rapidapi.com"
SEARCH_PATH = "/propertyExtendedSearch"
DEFAULT_TIMEOUT_SECONDS = 15.0


class ConfigurationError(EnvironmentError):
    """Raised when API credentials or connection settings are missing or invalid."""
    pass


@dataclass(frozen=True)
class SearchConfig:
    """
    Credentials and connection settings for the property-search API.

    Components receive this object explicitly; nothing reads credentials
    from global state.
    """
    api_key: str
    host: str = DEFAULT_HOST
    base_url: Optional[str] = None
    search_path: str = SEARCH_PATH
    timeout: float = DEFAULT_TIMEOUT_SECONDS

    def __post_init__(self):
        if not isinstance(self.timeout, (int, float)) or isinstance(self.timeout, bool) \
                or not math.isfinite(self.timeout) or self.timeout <= 0:
            raise ConfigurationError(
                f"Search timeout must be a positive number of seconds, got {self.timeout!r}."
            )

    @property
    def endpoint(self) -> str:
        base = (self.base_url or f"https://{self.host}").rstrip("/")
        return f"{base}{self.search_path}"

    @property
    def headers(self) -> Dict[str, str]:
        return {
            "X-RapidAPI-Key": self.api_key,
            "X-RapidAPI-Host": self.host,
        }

    @classmethod
    def from_env(cls, timeout: Optional[float] = None) -> "SearchConfig":
        """
        Build a SearchConfig from environment variables (loading .env first).

        Raises:
            ConfigurationError: If RAPIDAPI_KEY is missing or the timeout is invalid.
        """
        load_dotenv()
        api_key = os.getenv("RAPIDAPI_KEY")
        if not api_key:
            raise ConfigurationError(
                "Missing RapidAPI key. Set RAPIDAPI_KEY in your environment or .env file."
            )
        if timeout is None:
            raw_timeout = os.getenv("SEARCH_TIMEOUT_SECONDS", str(DEFAULT_TIMEOUT_SECONDS))
            try:
                timeout = float(raw_timeout)
            except ValueError as e:
                raise ConfigurationError(
                    f"SEARCH_TIMEOUT_SECONDS must be a number, got {raw_timeout!r}."
                ) from e
        return cls(
            api_key=api_key,
            host=os.getenv("RAPIDAPI_HOST", DEFAULT_HOST),
            timeout=timeout,
        )


# End of zillow_api.py
