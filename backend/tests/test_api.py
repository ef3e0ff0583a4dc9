"""
API tests for the FastAPI app, using the keyword router so no API key is needed.
"""

import random

import pytest
from fastapi.testclient import TestClient

from estate_assistant.main import app
from estate_assistant.services.performance_monitor import PerformanceMonitor
from estate_assistant.services.session_service import SessionService
from estate_assistant.workflow.graph import AssistantWorkflow


CHAT_PAYLOAD = {
    "message": "Find 2 bedroom condos in Austin under $600k",
    "brokerData": {"id": "b1", "name": "Dana Reyes", "years_of_experience": 8},
    "clientData": {"id": "c1", "name": "Sam Lee", "rent_or_buy": "buy"},
    "selectedProperties": [],
}


@pytest.fixture
def client(monkeypatch):
    monkeypatch.setattr(
        "estate_assistant.workflow.graph._workflow",
        AssistantWorkflow(use_llm=False, rng=random.Random(0)),
    )
    monkeypatch.setattr("estate_assistant.services.session_service._session_service", SessionService())
    monkeypatch.setattr(
        "estate_assistant.services.performance_monitor._performance_monitor", PerformanceMonitor()
    )
    with TestClient(app) as test_client:
        yield test_client


class TestInfoEndpoints:

    def test_root(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert response.json()["name"] == "Broker Assistant API"

    def test_health(self, client):
        body = client.get("/health").json()
        assert body["status"] in ("healthy", "degraded")
        assert body["router_mode"] in ("llm", "rules")
        assert isinstance(body["llm_configured"], bool)


class TestLeadScoring:

    def test_score_lead(self, client):
        response = client.post("/leads/score", json={
            "budget_min": 500000,
            "budget_max": 550000,
            "rent_or_buy": "buy",
            "bedrooms": 3,
            "bathrooms": 2,
            "location": "Downtown Loft",
            "amenities": ["Parking", "Gym", "Pool", "Balcony", "Garden"],
        })

        assert response.status_code == 200
        body = response.json()
        assert body["totalScore"] == 105
        assert body["qualification"] == "Hot"
        assert body["scoreBreakdown"]["budget"] == 30

    def test_fractional_bedrooms(self, client):
        response = client.post("/leads/score", json={
            "budget_min": 300000, "budget_max": 400000, "rent_or_buy": "rent",
            "bedrooms": 2.5, "bathrooms": 1.5, "location": "Suburbs",
        })
        assert response.status_code == 200
        assert response.json()["scoreBreakdown"]["preferences"] == 12

    def test_invalid_preferences_are_rejected(self, client):
        response = client.post("/leads/score", json={
            "budget_min": 1, "budget_max": 2, "rent_or_buy": "lease",
            "bedrooms": 1, "bathrooms": 1, "location": "x",
        })
        assert response.status_code == 422


class TestChat:

    def test_empty_message_is_rejected(self, client):
        response = client.post("/chat", json={**CHAT_PAYLOAD, "message": "   "})
        assert response.status_code == 400

    def test_search(self, client):
        response = client.post("/chat", json=CHAT_PAYLOAD)

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["tool_used"] == "search_properties"
        assert body["session_id"] == "b1:c1"

        criteria = body["tool_result"]["search_criteria"]
        assert criteria["location"] == "Austin"
        assert criteria["bedrooms"] == 2
        assert criteria["budget_max"] == 600000
        for prop in body["tool_result"]["properties"]:
            assert prop["property_type"] == "condo"
            assert prop["price"] < 600000

    def test_general_help(self, client):
        body = client.post("/chat", json={**CHAT_PAYLOAD, "message": "Hi"}).json()
        assert body["tool_used"] == "general_help"
        assert body["tool_result"] is None

    def test_compare_needs_two_properties(self, client):
        body = client.post("/chat", json={**CHAT_PAYLOAD, "message": "compare prop_aa1"}).json()
        assert body["tool_used"] == "compare_properties"
        assert body["tool_result"]["success"] is False


class TestSessions:

    def test_history_stats_and_delete(self, client):
        client.post("/chat", json={**CHAT_PAYLOAD, "session_id": "s-1"})

        history = client.get("/history/s-1").json()
        assert history["count"] == 2
        assert history["history"][0]["content"] == CHAT_PAYLOAD["message"]

        stats = client.get("/stats").json()
        assert stats["active_sessions"] == 1
        assert stats["performance"]["total_requests"] == 1

        assert client.delete("/session/s-1").json()["success"] is True
        assert client.delete("/session/s-1").json()["success"] is False
        assert client.get("/history/s-1").json()["count"] == 0

    def test_reset_stats(self, client):
        client.post("/chat", json=CHAT_PAYLOAD)
        assert client.get("/stats").json()["performance"]["total_requests"] == 1

        body = client.post("/stats/reset").json()

        assert body["success"] is True
        assert body["performance"]["total_requests"] == 0
        assert client.get("/stats").json()["performance"]["total_requests"] == 0

    def test_chat_with_fractional_client_bedrooms(self, client):
        payload = {
            **CHAT_PAYLOAD,
            "clientData": {
                "id": "c2", "name": "Ana", "rent_or_buy": "buy", "budget_min": 300000,
                "budget_max": 400000, "bedrooms": 2.5, "bathrooms": 1.5, "location": "Austin",
            },
        }
        response = client.post("/chat", json=payload)

        assert response.status_code == 200
        assert response.json()["tool_used"] == "search_properties"
