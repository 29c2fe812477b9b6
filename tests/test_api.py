import json
import random

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from skillflow.api import routes
from skillflow.config import get_settings
from skillflow.main import create_application
from skillflow.store.loader import get_topic_registry
from skillflow.store.provider import DemoProfileProvider, get_profile_provider


@pytest.fixture(scope="module")
def test_app():
    app = create_application()
    app.dependency_overrides[get_profile_provider] = lambda: DemoProfileProvider(
        get_topic_registry(), get_settings(), rng=random.Random(3), current_year=2025
    )
    return app


@pytest.fixture
def no_stream_delay():
    settings = get_settings()
    original_delay = settings.streaming_chunk_delay_ms
    settings.streaming_chunk_delay_ms = 0
    try:
        yield settings
    finally:
        settings.streaming_chunk_delay_ms = original_delay


@pytest.fixture
def remote_profiles(monkeypatch):
    real_client = httpx.AsyncClient

    def install(handler):
        transport = httpx.MockTransport(handler)
        monkeypatch.setattr(
            routes.httpx,
            "AsyncClient",
            lambda **kwargs: real_client(transport=transport, **kwargs),
        )

    return install


def _client(app):
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver")


@pytest.mark.anyio
async def test_healthz_endpoint(test_app):
    async with _client(test_app) as client:
        response = await client.get("/healthz")
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "ok"
    assert body["version"]
    assert set(body["topics"]) == {"python", "javascript", "react"}


@pytest.mark.anyio
async def test_search_info_lists_queries(test_app):
    async with _client(test_app) as client:
        response = await client.get("/v1/search")
    assert response.status_code == 200
    body = response.json()
    assert body["is_demo"] is True
    assert any(query.startswith("python") for query in body["available_queries"])


@pytest.mark.anyio
async def test_search_returns_analytics(test_app):
    async with _client(test_app) as client:
        response = await client.post("/v1/search", json={"query": "python"})
    assert response.status_code == 200
    body = response.json()

    assert body["total_profiles"] == 5
    assert body["is_demo"] is True
    assert body["demo_message"]
    assert len(body["profiles"]) == 5
    for profile in body["profiles"]:
        assert len(profile["top_skills"]) == 5

    skills = body["skill_analytics"]
    assert len(skills) == 10
    for skill in skills:
        assert skill["frequency"] == 5
        assert sum(skill["proficiency_histogram"].values()) == skill["frequency"]
        assert 1.0 <= skill["average_proficiency"] <= 4.0
        assert len(skill["industries"]) <= 5
    by_name = {skill["skill_name"]: skill for skill in skills}
    assert by_name["Python"]["trend"] == "rising"
    assert by_name["Django"]["trend"] == "stable"

    locations = body["location_distribution"]
    assert sum(location["count"] for location in locations) == 5
    assert {location["country"] for location in locations} == {
        "Spain",
        "CA",
        "Germany",
        "Mexico",
        "Nigeria",
    }
    assert body["analysis_stats"]["profiles_analyzed"] == 5


@pytest.mark.anyio
async def test_search_without_results(test_app):
    async with _client(test_app) as client:
        response = await client.post("/v1/search", json={"query": "cobol wizard"})
    assert response.status_code == 200
    body = response.json()
    assert body["total_profiles"] == 0
    assert body["skill_analytics"] == []
    assert body["location_distribution"] == []
    assert "cobol wizard" in body["message"]


@pytest.mark.anyio
async def test_search_requires_query(test_app):
    async with _client(test_app) as client:
        response = await client.post("/v1/search", json={"query": "   "})
    assert response.status_code == 400
    assert response.json()["error"] == "validation_error"


@pytest.mark.anyio
async def test_invalid_json_body_structured(test_app):
    async with _client(test_app) as client:
        response = await client.post(
            "/v1/search",
            content="not valid json",
            headers={"Content-Type": "application/json"},
        )
    assert response.status_code == 400
    assert response.json()["error"] in {"invalid_json", "validation_error"}


@pytest.mark.anyio
async def test_search_streaming_emits_phase_objects(test_app, no_stream_delay):
    async with _client(test_app) as client:
        async with client.stream(
            "POST", "/v1/search", json={"query": "react", "stream": True}
        ) as response:
            assert response.status_code == 200
            events = []
            async for line in response.aiter_lines():
                if not line or not line.startswith("data: "):
                    continue
                events.append(json.loads(line[len("data: ") :]))

    assert events, "Expected SSE events"
    for event in events[:-1]:
        assert event["phase"] == "skill"
        assert event["skill"]["frequency"] == 2
    final_event = events[-1]
    assert final_event["phase"] == "complete"
    assert final_event["total_profiles"] == 2
    assert sum(item["count"] for item in final_event["location_distribution"]) == 2


@pytest.mark.anyio
async def test_analyze_end_to_end(test_app):
    payload = {
        "profiles": [
            {
                "name": "Sofia Rodriguez",
                "username": "sofia-rodriguez",
                "location": "Madrid, Spain",
                "skills": [
                    {"name": "Python", "proficiency": "expert"},
                    {"name": "Django", "proficiency": "advanced"},
                ],
                "experiences": [
                    {"organizations": [{"name": "Stripe"}], "fromYear": "2019", "toYear": "2024"}
                ],
                "languages": [{"language": "Spanish", "fluency": "Native"}],
            },
            {
                "name": "Elena Petrov",
                "username": "elena-petrov",
                "location": {"name": "Berlin, Germany", "country": "Germany"},
                "skills": [{"name": "Python", "proficiency": "intermediate"}],
            },
        ]
    }
    async with _client(test_app) as client:
        response = await client.post("/v1/analyze", json=payload)
    assert response.status_code == 200
    body = response.json()

    python, django = body["skill_stats"]
    assert (python["skill_name"], python["frequency"]) == ("Python", 2)
    assert python["average_proficiency"] == 3.0
    assert python["industries"] == ["Stripe"]
    assert (django["skill_name"], django["frequency"]) == ("Django", 1)
    assert django["average_proficiency"] == 3.0
    assert body["location_stats"] == [
        {"country": "Spain", "count": 1},
        {"country": "Germany", "count": 1},
    ]
    assert body["experience_distribution"] == [
        {"bracket": "5-10 years", "count": 1},
        {"bracket": "0-2 years", "count": 1},
    ]
    assert body["top_organizations"] == [{"organization": "Stripe", "count": 1}]
    assert body["language_distribution"] == [{"language": "Spanish", "count": 1}]
    assert body["analysis_stats"]["distinct_skills"] == 2


@pytest.mark.anyio
async def test_analyze_rejects_unknown_proficiency(test_app):
    payload = {
        "profiles": [
            {
                "name": "X",
                "username": "x",
                "skills": [{"name": "Python", "proficiency": "wizard"}],
            }
        ]
    }
    async with _client(test_app) as client:
        response = await client.post("/v1/analyze", json=payload)
    assert response.status_code == 400
    assert response.json()["error"] == "validation_error"


@pytest.mark.anyio
async def test_analyze_requires_profile_source(test_app):
    async with _client(test_app) as client:
        response = await client.post("/v1/analyze", json={})
    assert response.status_code == 400
    assert response.json()["error"] == "validation_error"


@pytest.mark.anyio
async def test_too_many_profiles_error_structured(test_app):
    settings = get_settings()
    original_limit = settings.max_profiles_per_request
    settings.max_profiles_per_request = 1
    try:
        payload = {
            "profiles": [
                {"name": "A", "username": "a"},
                {"name": "B", "username": "b"},
            ]
        }
        async with _client(test_app) as client:
            response = await client.post("/v1/analyze", json=payload)
        assert response.status_code == 413
        body = response.json()
        assert body["error"] == "too_many_profiles"
        assert body["limit"] == 1
    finally:
        settings.max_profiles_per_request = original_limit


@pytest.mark.anyio
async def test_payload_too_large_error_structured(test_app):
    settings = get_settings()
    original_limit = settings.max_payload_bytes
    settings.max_payload_bytes = 10
    try:
        async with _client(test_app) as client:
            response = await client.post("/v1/search", json={"query": "x" * 64})
        assert response.status_code == 413
        body = response.json()
        assert body["error"] == "payload_too_large"
        assert body["limit_bytes"] == 10
    finally:
        settings.max_payload_bytes = original_limit


@pytest.mark.anyio
async def test_profile_lookup(test_app):
    async with _client(test_app) as client:
        found = await client.get("/v1/profiles/jennifer-wu")
        missing = await client.get("/v1/profiles/nobody")

    assert found.status_code == 200
    profile = found.json()
    assert profile["location"]["country"] == "Canada"
    assert profile["headline"] == "React Frontend Lead"
    assert profile["skills"][0]["name"] == "React"

    assert missing.status_code == 404
    assert missing.json() == {"error": "profile_not_found", "username": "nobody"}


@pytest.mark.anyio
async def test_insight_endpoints(test_app):
    async with _client(test_app) as client:
        correlations = await client.get("/v1/skills/Python/correlations")
        demand = await client.get("/v1/skills/React/demand", params={"timeframe": "long"})
        paths = await client.post("/v1/career-paths", json={"skills": ["AWS"]})
        gaps = await client.post(
            "/v1/skill-gaps",
            json={"skills": ["Leadership"], "target_role": "Senior Software Engineer"},
        )
        insights = await client.post("/v1/market-insights", json={"skills": ["Python"]})

    assert correlations.status_code == 200
    assert correlations.json()[0]["skill"] == "PostgreSQL"

    assert demand.status_code == 200
    assert demand.json()["predicted_demand"] == 100

    assert paths.status_code == 200
    assert paths.json() == [
        {
            "title": "Platform Engineering Lead",
            "probability": 0.68,
            "timeframe": "15-24 months",
            "required_skills": ["Kubernetes", "Terraform", "Monitoring", "Security"],
            "salary_range": {"min": 140000, "max": 220000},
        }
    ]

    assert gaps.status_code == 200
    assert [gap["skill"] for gap in gaps.json()] == [
        "System Design",
        "Cloud Architecture",
        "Performance Optimization",
    ]

    assert insights.status_code == 200
    assert insights.json()[0]["average_salary"] == 120000


@pytest.mark.anyio
async def test_demand_rejects_unknown_timeframe(test_app):
    async with _client(test_app) as client:
        response = await client.get("/v1/skills/React/demand", params={"timeframe": "decade"})
    assert response.status_code == 400
    assert response.json()["error"] == "validation_error"


LIMA_PROFILE = {
    "name": "Lucia Flores",
    "username": "lucia-flores",
    "location": "Lima, Peru",
    "skills": [{"name": "Go", "proficiency": "advanced"}],
}


@pytest.mark.anyio
async def test_analyze_fetches_remote_profile_list(test_app, remote_profiles):
    requested = []

    def handler(request):
        requested.append(str(request.url))
        return httpx.Response(200, json=[LIMA_PROFILE])

    remote_profiles(handler)
    async with _client(test_app) as client:
        response = await client.post(
            "/v1/analyze", json={"profiles_url": "https://data.example.com/profiles"}
        )

    assert response.status_code == 200
    assert requested == ["https://data.example.com/profiles"]
    body = response.json()
    assert body["location_stats"] == [{"country": "Peru", "count": 1}]
    assert body["skill_stats"][0]["skill_name"] == "Go"


@pytest.mark.anyio
async def test_analyze_unwraps_remote_profiles_key(test_app, remote_profiles):
    remote_profiles(lambda request: httpx.Response(200, json={"profiles": [LIMA_PROFILE]}))
    async with _client(test_app) as client:
        response = await client.post(
            "/v1/analyze", json={"url": "https://data.example.com/p.json"}
        )

    assert response.status_code == 200
    body = response.json()
    assert body["location_stats"] == [{"country": "Peru", "count": 1}]
    assert body["analysis_stats"]["profiles_analyzed"] == 1


@pytest.mark.anyio
async def test_analyze_remote_server_error_structured(test_app, remote_profiles):
    remote_profiles(lambda request: httpx.Response(500, text="upstream down"))
    async with _client(test_app) as client:
        response = await client.post(
            "/v1/analyze", json={"url": "https://data.example.com/p.json"}
        )

    assert response.status_code == 502
    assert response.json()["error"] == "profile_source_error"


@pytest.mark.anyio
async def test_analyze_treats_blank_years_as_absent(test_app):
    payload = {
        "profiles": [
            {
                "name": "A",
                "username": "a",
                "experiences": [
                    {"organizations": [{"name": "Acme"}], "fromYear": "2023", "toYear": ""}
                ],
            }
        ]
    }
    async with _client(test_app) as client:
        response = await client.post("/v1/analyze", json=payload)

    assert response.status_code == 200
    assert response.json()["top_organizations"] == [{"organization": "Acme", "count": 1}]


@pytest.mark.anyio
async def test_search_ignores_unknown_body_keys(test_app):
    async with _client(test_app) as client:
        response = await client.post(
            "/v1/search", json={"query": "react", "page": 2, "sort": "relevance"}
        )
    assert response.status_code == 200
    assert response.json()["total_profiles"] == 2


class _FailingProvider:
    async def search_people(self, query, limit=None):
        raise RuntimeError("registry unavailable")


@pytest.mark.anyio
async def test_search_failure_error_structured():
    app = create_application()
    app.dependency_overrides[get_profile_provider] = _FailingProvider
    async with _client(app) as client:
        response = await client.post("/v1/search", json={"query": "python"})

    assert response.status_code == 500
    assert response.json() == {
        "error": "search_failed",
        "details": "registry unavailable",
        "is_demo": True,
    }
