import json

import pytest
import requests

from home_finder import orchestrator
from home_finder.data_gathering.providers import zillow_api
from home_finder.enrichment.agents import AgentResult
from home_finder.models import Preferences, Property


AUSTIN_LISTING = {
    "zpid": 123,
    "city": "Austin",
    "state": "TX",
    "price": 300000,
    "imgSrc": "http://x/1.jpg",
    "address": "1 Main St",
}


class StubAgent:
    def __init__(self, type_, data=None, error=None, raises=None):
        self.type = type_
        self.data = data
        self.error = error
        self.raises = raises
        self.cities = []

    def fetch(self, city):
        self.cities.append(city)
        if self.raises:
            raise self.raises
        return AgentResult(type=self.type, data=self.data, error=self.error)


def test_scenario_b_full_pipeline(make_client):
    client, session = make_client(payload={"props": [AUSTIN_LISTING]})

    result = orchestrator.run(Preferences(location="Austin, TX", budget="200k-400k"), client)

    assert "error" not in result
    [prop] = result["data"]
    assert prop.id == 123
    assert prop.city == "Austin"
    assert prop.state == "TX"
    assert prop.median_price == 300000
    assert prop.neighborhood == "1 Main St"
    assert prop.match_score == 95
    assert "price_min=200000" in session.calls[0]["url"]
    assert "location=Austin%2C%20TX" in session.calls[0]["url"]


def test_scenarios_c_and_d_out_of_range_scores(make_client):
    client, _ = make_client(payload={"props": [
        {"zpid": 1, "price": 150000},
        {"zpid": 2, "price": 450000},
    ]})

    result = orchestrator.run(Preferences(budget="200k-400k"), client)

    assert [p.match_score for p in result["data"]] == [88, 86]


def test_scenario_e_duplicates_collapse(make_client):
    client, _ = make_client(payload={"props": [
        {"zpid": 999, "price": 300000},
        {"zpid": 999, "price": 310000},
    ]})

    result = orchestrator.run(Preferences(budget="200k-400k"), client)

    assert len(result["data"]) == 1
    assert result["data"][0].unique_id == "999"


def test_scenario_f_network_error(make_client):
    client, _ = make_client(exc=requests.ConnectionError("network down"))

    result = orchestrator.run(Preferences(budget="200k-400k"), client)

    assert result == {"data": [], "error": "network down"}


def test_results_are_capped_at_three(make_client):
    client, _ = make_client(payload={"props": [{"zpid": i, "price": 300000} for i in range(6)]})

    result = orchestrator.run(Preferences(budget="200k-400k"), client)

    assert [p.id for p in result["data"]] == [0, 1, 2]


def test_price_backstop_drops_out_of_range(make_client):
    client, _ = make_client(payload={"props": [
        {"zpid": 1, "price": 150000},
        {"zpid": 2, "price": 300000},
    ]})

    result = orchestrator.run(Preferences(budget="200k-400k"), client, price_backstop=True)

    assert [p.id for p in result["data"]] == [2]


def test_enrichment_failures_do_not_fail_the_search(make_client):
    client, _ = make_client(payload={"props": [
        {"zpid": 1, "city": "Austin", "price": 300000},
        {"zpid": 2, "city": "Austin", "price": 300000},
        {"zpid": 3, "city": "Dallas", "price": 300000},
    ]})
    crime = StubAgent("crime", data="Low crime.")
    broken = StubAgent("schools", raises=RuntimeError("boom"))
    quiet = StubAgent("walk", error="quota exceeded")

    result = orchestrator.run(Preferences(budget="200k-400k"), client, agents=[crime, broken, quiet])

    assert "error" not in result
    assert len(result["data"]) == 3
    first = result["data"][0]
    assert first.enrichments == {"crime": "Low crime.", "schools": None, "walk": None}
    assert crime.cities == ["Austin", "Dallas"]


def test_format_card_and_empty_results():
    prop = Property(
        id=1, city="Austin", state="TX", median_price=300000,
        neighborhood="1 Main St", price_change="+$2,000", match_score=95, bedrooms=3,
    )

    card = orchestrator.format_card(prop)

    assert "Austin, TX" in card
    assert "95% Match" in card
    assert "$300,000" in card
    assert "▲ +$2,000" in card
    assert "3 bd" in card
    assert orchestrator.render_results([]).startswith("No Results Found")


def test_main_prints_json(monkeypatch, capsys, make_client):
    client, session = make_client(payload={"props": [AUSTIN_LISTING]})
    monkeypatch.setenv("RAPIDAPI_KEY", "env-key")
    monkeypatch.setattr(orchestrator, "SearchClient", lambda config: client)

    code = orchestrator.main(["--budget", "200k-400k", "--location", "Austin, TX", "--json"])

    assert code == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["data"][0]["matchScore"] == 95
    assert payload["data"][0]["uniqueId"] == "123"
    assert payload["preferences"] == {
        "budgetRange": "$200K - $400K",
        "topPriorities": 0,
        "dealBreakers": 0,
        "experience": "Not specified",
    }


def test_main_rejects_missing_api_key(monkeypatch):
    monkeypatch.delenv("RAPIDAPI_KEY", raising=False)
    monkeypatch.setattr(orchestrator.SearchConfig, "from_env", classmethod(_raise_config_error))

    assert orchestrator.main(["--budget", "200k-400k"]) == 2


def _raise_config_error(cls, timeout=None):
    raise orchestrator.ConfigurationError("Missing RapidAPI key.")


def test_main_rejects_non_numeric_timeout_env(monkeypatch):
    monkeypatch.setattr(zillow_api, "load_dotenv", lambda *args, **kwargs: False)
    monkeypatch.setenv("RAPIDAPI_KEY", "env-key")
    monkeypatch.setenv("SEARCH_TIMEOUT_SECONDS", "fifteen")

    assert orchestrator.main(["--budget", "200k-400k"]) == 2


def test_main_rejects_non_positive_timeout_flag(monkeypatch):
    monkeypatch.setattr(zillow_api, "load_dotenv", lambda *args, **kwargs: False)
    monkeypatch.setenv("RAPIDAPI_KEY", "env-key")

    assert orchestrator.main(["--budget", "200k-400k", "--timeout", "0"]) == 2


def test_run_never_reads_the_environment(monkeypatch, make_client):
    client, session = make_client(payload={"props": [AUSTIN_LISTING]})
    monkeypatch.delenv("RAPIDAPI_KEY", raising=False)
    monkeypatch.setattr(orchestrator.SearchConfig, "from_env", classmethod(_raise_config_error))

    result = orchestrator.run(Preferences(budget="200k-400k"), client)

    assert [p.id for p in result["data"]] == [123]
    assert session.calls[0]["headers"]["X-RapidAPI-Key"] == "test-key"


def test_run_requires_a_client():
    with pytest.raises(TypeError):
        orchestrator.run(Preferences(budget="200k-400k"))


def test_main_closes_its_search_client(monkeypatch, make_client):
    client, _ = make_client(payload={"props": [AUSTIN_LISTING]})
    exits = []
    monkeypatch.setenv("RAPIDAPI_KEY", "env-key")
    monkeypatch.setattr(client, "close", lambda: exits.append(True))
    monkeypatch.setattr(orchestrator, "SearchClient", lambda config: client)

    assert orchestrator.main(["--budget", "200k-400k", "--json"]) == 0
    assert exits == [True]


def test_render_results_includes_preferences_summary():
    preferences = Preferences(
        budget="400k-600k",
        experience="first-time",
        lifestyle=("schools", "safety"),
        dealbreakers=("high-crime",),
    )
    prop = Property(id=1, city="Austin", state="TX", median_price=500000, match_score=95)

    text = orchestrator.render_results([prop], preferences)

    assert "Based on Your Preferences" in text
    assert "Budget Range:   $400K - $600K" in text
    assert "Top Priorities: 2 selected" in text
    assert "Deal Breakers:  1 selected" in text
    assert "Experience:     first time" in text


def test_preferences_summary_defaults_to_not_specified():
    summary = orchestrator.summarize_preferences(Preferences())

    assert summary == {
        "budgetRange": "Not specified",
        "topPriorities": 0,
        "dealBreakers": 0,
        "experience": "Not specified",
    }
    text = orchestrator.render_results([], Preferences())
    assert text.startswith("No Results Found")
    assert "Budget Range:   Not specified" in text


def test_enrichment_skips_listings_without_a_city(make_client):
    client, _ = make_client(payload={"props": [
        {"zpid": 1, "price": 300000},
        {"zpid": 2, "city": "Austin", "price": 300000},
    ]})
    crime = StubAgent("crime", data="Low crime.")

    result = orchestrator.run(Preferences(budget="200k-400k"), client, agents=[crime])

    no_city, austin = result["data"]
    assert no_city.city == "Unknown"
    assert no_city.enrichments == {}
    assert austin.enrichments == {"crime": "Low crime."}
    assert crime.cities == ["Austin"]
