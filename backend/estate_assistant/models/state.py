"""
LangGraph state definitions for the Broker Assistant workflow.
"""

from typing import TypedDict, List, Optional, Dict, Any
from enum import Enum


class ToolName(str, Enum):
    """Enumeration of the tools the assistant can dispatch to."""

    SEARCH_PROPERTIES = "search_properties"
    ANALYZE_PROPERTY = "analyze_property"
    COMPARE_PROPERTIES = "compare_properties"
    ANALYZE_MARKET = "analyze_market"
    SETUP_SHOWING = "setup_showing"
    GENERAL_HELP = "general_help"


class ConversationEntry(TypedDict):
    """Type definition for a conversation history entry."""

    role: str  # 'user' or 'assistant'
    content: str


class AssistantState(TypedDict, total=False):
    """
    Main state object passed through the LangGraph workflow.

    Carries the message, the caller's context and the routing decision
    from the router node to the selected tool node.
    """

    # Input
    message: str
    selected_property_ids: List[str]
    context: Any  # AgentContext
    history: List[ConversationEntry]
    known_listings: Dict[str, Dict[str, Any]]

    # Routing
    tool: str  # One of ToolName values
    parameters: Any  # One of the ToolParameters variants
    response: str

    # Output
    tool_result: Optional[Any]


def create_initial_state(
    message: str,
    context: Any,
    selected_property_ids: Optional[List[str]] = None,
    history: Optional[List[ConversationEntry]] = None,
    known_listings: Optional[Dict[str, Dict[str, Any]]] = None
) -> AssistantState:
    """
    Create an initial state object for a new chat message.

    Args:
        message: The user's message text
        context: Broker and client context for the exchange
        selected_property_ids: Property ids the user selected in the UI
        history: Trailing conversation history
        known_listings: Listings returned by the last search, keyed by id

    Returns:
        Initialized AssistantState
    """
    return AssistantState(
        message=message,
        selected_property_ids=selected_property_ids or [],
        context=context,
        history=history or [],
        known_listings=known_listings or {},
        tool="",
        parameters=None,
        response="",
        tool_result=None,
    )


def get_tool_name(tool_string: str) -> ToolName:
    """
    Convert a tool string to ToolName enum.

    Unknown labels map to general help.
    """
    tool_map = {
        "search_properties": ToolName.SEARCH_PROPERTIES,
        "search": ToolName.SEARCH_PROPERTIES,
        "analyze_property": ToolName.ANALYZE_PROPERTY,
        "analysis": ToolName.ANALYZE_PROPERTY,
        "compare_properties": ToolName.COMPARE_PROPERTIES,
        "compare": ToolName.COMPARE_PROPERTIES,
        "comparison": ToolName.COMPARE_PROPERTIES,
        "analyze_market": ToolName.ANALYZE_MARKET,
        "market": ToolName.ANALYZE_MARKET,
        "setup_showing": ToolName.SETUP_SHOWING,
        "showing": ToolName.SETUP_SHOWING,
        "general_help": ToolName.GENERAL_HELP,
    }

    normalized = (tool_string or "").lower().strip()
    return tool_map.get(normalized, ToolName.GENERAL_HELP)
