"""
LangGraph workflow and chat assistant for the Broker Assistant.
"""

from .graph import (
    AssistantWorkflow,
    get_workflow,
)
from .assistant import RealEstateAssistant, FALLBACK_RESPONSE

__all__ = [
    "AssistantWorkflow",
    "get_workflow",
    "RealEstateAssistant",
    "FALLBACK_RESPONSE",
]
