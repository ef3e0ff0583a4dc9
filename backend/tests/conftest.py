"""
Shared fixtures for the Broker Assistant tests.
"""

import random
from typing import List, Optional

import pytest

from estate_assistant.models.schemas import (
    AgentContext,
    BrokerProfile,
    ClientProfile,
    ToolDecision,
)
from estate_assistant.services.performance_monitor import PerformanceMonitor
from estate_assistant.services.response_cache import ResponseCache
from estate_assistant.services.session_service import ChatSession
from estate_assistant.workflow.assistant import RealEstateAssistant
from estate_assistant.workflow.graph import AssistantWorkflow


class StubLLM:
    """Stands in for LLMService, returning queued decisions in order."""

    def __init__(self, decisions: Optional[List] = None):
        self.decisions = list(decisions or [])
        self.calls = []

    def queue(self, tool: str, parameters: Optional[dict] = None, response: str = "OK"):
        self.decisions.append(
            ToolDecision(tool=tool, parameters=parameters or {}, response=response)
        )

    def classify_tool(self, message, system_prompt, history=None, temperature=None):
        self.calls.append({
            "message": message,
            "system_prompt": system_prompt,
            "history": list(history or []),
        })
        decision = self.decisions.pop(0)
        if isinstance(decision, Exception):
            raise decision
        return decision


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


@pytest.fixture
def broker():
    return BrokerProfile(
        id="broker-1",
        name="Dana Reyes",
        years_experience=8,
        service_area="downtown condos",
    )


@pytest.fixture
def client_profile():
    return ClientProfile(
        id="client-1",
        name="Sam Lee",
        phone="555-0100",
        email="sam@example.com",
        broker_id="broker-1",
        rent_or_buy="buy",
        budget_min=400_000,
        budget_max=500_000,
        bedrooms=3,
        bathrooms=2,
        location="Downtown",
        amenities=["Parking", "Gym"],
    )


@pytest.fixture
def context(broker, client_profile):
    return AgentContext(broker_profile=broker, client_profile=client_profile)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def session(clock):
    return ChatSession(
        session_id="broker-1:client-1",
        history_limit=10,
        cache=ResponseCache(max_entries=32, ttl_seconds=300, clock=clock),
    )


@pytest.fixture
def stub_llm():
    return StubLLM()


@pytest.fixture
def monitor():
    return PerformanceMonitor()


@pytest.fixture
def assistant(context, session, stub_llm, monitor):
    workflow = AssistantWorkflow(llm=stub_llm, use_llm=True, rng=random.Random(42))
    return RealEstateAssistant(
        context=context,
        session=session,
        workflow=workflow,
        monitor=monitor,
    )
