"""
home_finder/enrichment/features/crime_agent/crime_agent.py

CrimeAgent asks an OpenAI chat model for a short crime and safety summary of
a city. It is a best-effort enrichment: every failure (missing API key, API
error, empty reply) is returned inside the AgentResult instead of raised.
"""

import logging
import os
from typing import Any, Optional

from dotenv import load_dotenv
from openai import OpenAI

from home_finder.enrichment.agents import AgentResult
from .prompts import SYSTEM_PROMPT, USER_PROMPT_TEMPLATE

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gpt-4o-mini"


class CrimeAgent:
    """
    Enrichment agent producing narrative crime/safety text for a city.
    """

    type = "crime"

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        temperature: float = 0.3,
        client: Optional[Any] = None,
    ):
        """
        Args:
            api_key:     OpenAI API key; falls back to OPENAI_API_KEY.
            model:       Chat model name; falls back to OPENAI_MODEL, then DEFAULT_MODEL.
            temperature: Sampling temperature.
            client:      Pre-built OpenAI-compatible client (used by tests).
        """
        load_dotenv()
        self.api_key = api_key or os.getenv("OPENAI_API_KEY")
        self.model = model or os.getenv("OPENAI_MODEL", DEFAULT_MODEL)
        self.temperature = temperature
        self.client = client

    def _get_client(self) -> Any:
        if self.client is None:
            if not self.api_key:
                raise ValueError("OpenAI API key must be provided or set in OPENAI_API_KEY.")
            self.client = OpenAI(api_key=self.api_key)
        return self.client

    def fetch(self, city: str) -> AgentResult:
        try:
            response = self._get_client().chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": USER_PROMPT_TEMPLATE.format(city=city)},
                ],
                temperature=self.temperature,
            )
            text = response.choices[0].message.content
            if not text:
                raise ValueError("Empty response from model")
            return AgentResult(type=self.type, data=text.strip())
        except Exception as e:
            logger.error(f"CrimeAgent error for {city}: {e}")
            return AgentResult(type=self.type, data=None, error=str(e))
