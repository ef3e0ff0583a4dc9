"""
Base agent class providing common functionality for all tool agents.
"""

import random
from abc import ABC, abstractmethod
from typing import Dict, Any, List, Optional

from ..config import get_settings
from ..models.schemas import AgentContext, BrokerProfile, ClientProfile
from ..models.state import AssistantState, ToolName


class BaseAgent(ABC):
    """
    Abstract base class for the tool agents.

    Provides access to the caller's context and a random source for the
    mock data generators. Pass a seeded ``random.Random`` for reproducible
    output.
    """

    tool: ToolName

    def __init__(self, rng: Optional[random.Random] = None):
        self._settings = get_settings()
        self.rng = rng or random.Random(self._settings.MOCK_SEED)

    @staticmethod
    def broker(state: AssistantState) -> BrokerProfile:
        context: Optional[AgentContext] = state.get("context")
        return (context.broker_profile if context else None) or BrokerProfile()

    @staticmethod
    def client(state: AssistantState) -> ClientProfile:
        context: Optional[AgentContext] = state.get("context")
        return (context.client_profile if context else None) or ClientProfile()

    @staticmethod
    def known_listings(state: AssistantState) -> Dict[str, Dict[str, Any]]:
        return state.get("known_listings") or {}

    @staticmethod
    def selected_ids(state: AssistantState) -> List[str]:
        return list(state.get("selected_property_ids") or [])

    @abstractmethod
    def run(self, params, state: AssistantState):
        """
        Execute the tool.

        Args:
            params: The validated parameter variant for this tool
            state: Current workflow state

        Returns:
            A tool result model
        """
        pass

    def process(self, state: AssistantState) -> AssistantState:
        """Run the tool and return the state update."""
        return {"tool_result": self.run(state.get("parameters"), state)}

    def __call__(self, state: AssistantState) -> AssistantState:
        """Allow agents to be used directly as graph nodes."""
        return self.process(state)
