"""
Data models for the Broker Assistant application.
"""

from .schemas import (
    AgentContext,
    BrokerProfile,
    ChatRequest,
    ChatResponse,
    ChatResult,
    ClientPreferences,
    ClientProfile,
    HealthResponse,
    LeadScore,
    ScoreBreakdown,
    ToolDecision,
    ToolFailure,
    parse_tool_parameters,
)
from .state import AssistantState, ConversationEntry, ToolName

__all__ = [
    "AgentContext",
    "BrokerProfile",
    "ChatRequest",
    "ChatResponse",
    "ChatResult",
    "ClientPreferences",
    "ClientProfile",
    "HealthResponse",
    "LeadScore",
    "ScoreBreakdown",
    "ToolDecision",
    "ToolFailure",
    "parse_tool_parameters",
    "AssistantState",
    "ConversationEntry",
    "ToolName",
]
