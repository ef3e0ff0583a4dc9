"""
Router Agent - Classifies a chat message into one of the assistant's tools.
"""

import logging
import re
from typing import Dict, Any, Optional

from ..config import load_system_prompt, get_settings
from ..models.schemas import AgentContext, ToolDecision, parse_tool_parameters
from ..models.state import AssistantState, ToolName
from ..services import get_llm_service
from ..utils.helpers import extract_property_ids, format_price, parse_price_string

logger = logging.getLogger(__name__)


# Canned replies used by the keyword router
RULE_RESPONSES = {
    ToolName.SEARCH_PROPERTIES: "Here are some properties that match what you're looking for.",
    ToolName.ANALYZE_PROPERTY: "Here's my analysis of that property.",
    ToolName.COMPARE_PROPERTIES: "Here's how those properties compare.",
    ToolName.ANALYZE_MARKET: "Here's an overview of current market conditions.",
    ToolName.SETUP_SHOWING: "I can set up a showing. Here are the available times.",
    ToolName.GENERAL_HELP: (
        "I can search for properties, analyze or compare listings, review the "
        "market, or schedule a showing. What would you like to do?"
    ),
}


class RouterAgent:
    """
    Router Agent that classifies the message and determines the workflow path.

    Can use either LLM-based classification or rule-based classification.
    LLM failures are raised to the caller, not retried through the rules.
    """

    agent_name = "router_agent"

    def __init__(self, llm=None, use_llm: Optional[bool] = None):
        """
        Initialize the Router Agent.

        Args:
            llm: LLM service to classify with (defaults to the shared service)
            use_llm: Whether to use the LLM (defaults to USE_LLM_ROUTER)
        """
        self._llm = llm
        self.use_llm = get_settings().USE_LLM_ROUTER if use_llm is None else use_llm

        # Keywords for rule-based classification, checked in this order
        self.tool_keywords = {
            ToolName.SETUP_SHOWING: [
                "showing", "viewing", "visit", "tour", "schedule", "book", "appointment"
            ],
            ToolName.COMPARE_PROPERTIES: [
                "compare", "comparison", "versus", "vs", "difference", "which one",
                "better", "pros and cons"
            ],
            ToolName.ANALYZE_MARKET: [
                "market", "trend", "trends", "inventory", "forecast", "days on market"
            ],
            ToolName.ANALYZE_PROPERTY: [
                "analyze", "analysis", "worth", "value", "investment", "tell me about",
                "details on", "more about"
            ],
            ToolName.SEARCH_PROPERTIES: [
                "find", "search", "look for", "looking for", "show me", "listings",
                "homes", "houses", "apartments", "condos"
            ],
        }

    @property
    def llm(self):
        """Get the LLM service."""
        if self._llm is None:
            self._llm = get_llm_service()
        return self._llm

    def process(self, state: AssistantState) -> AssistantState:
        """
        Classify the message and return the routing update.

        Args:
            state: Current workflow state

        Returns:
            State update with tool, validated parameters and reply text
        """
        message = state.get("message", "")

        if self.use_llm:
            decision = self.llm.classify_tool(
                message=message,
                system_prompt=self.build_system_prompt(state.get("context")),
                history=state.get("history", []),
            )
        else:
            decision = self._classify_with_rules(message)

        logger.info(f"Routing message to {decision.tool.value}")

        return {
            "tool": decision.tool.value,
            "parameters": parse_tool_parameters(decision.tool, decision.parameters),
            "response": decision.response,
        }

    def __call__(self, state: AssistantState) -> AssistantState:
        return self.process(state)

    def build_system_prompt(self, context: Optional[AgentContext]) -> str:
        """
        Render the router prompt with the broker's and client's details.
        """
        broker = context.broker_profile if context else None
        client = context.client_profile if context else None

        if client is not None and client.has_preferences():
            amenities = ", ".join(client.amenities) if client.amenities else "None specified"
            client_context = (
                f"Your client {client.name or 'your client'} is looking for:\n"
                f"- Type: {client.rent_or_buy}\n"
                f"- Budget: {format_price(client.budget_min)} - {format_price(client.budget_max)}\n"
                f"- Bedrooms: {client.bedrooms:g}\n"
                f"- Bathrooms: {client.bathrooms:g}\n"
                f"- Location: {client.location}\n"
                f"- Amenities: {amenities}\n\n"
                f"Use this context to provide personalized recommendations and responses."
            )
        else:
            client_context = "This is a new client without specific preferences yet."

        template = load_system_prompt(self.agent_name)
        return template.format(
            broker_name=(broker.name if broker else None) or "a professional real estate agent",
            years_experience=(broker.years_experience if broker else None) or 5,
            service_area=(broker.service_area if broker else None) or "residential properties",
            client_context=client_context,
        )

    def _classify_with_rules(self, message: str) -> ToolDecision:
        """
        Rule-based classification using keywords.

        Args:
            message: User message

        Returns:
            ToolDecision with extracted parameters and a canned reply
        """
        message_lower = message.lower()
        tool = ToolName.GENERAL_HELP

        for candidate, keywords in self.tool_keywords.items():
            if any(re.search(rf"\b{re.escape(k)}\b", message_lower) for k in keywords):
                tool = candidate
                break

        # A bare listing id with no other cue is a request for details
        property_ids = extract_property_ids(message)
        if tool == ToolName.GENERAL_HELP and property_ids:
            tool = ToolName.ANALYZE_PROPERTY

        return ToolDecision(
            tool=tool,
            parameters=self._extract_parameters(tool, message, property_ids),
            response=RULE_RESPONSES[tool],
        )

    def _extract_parameters(self, tool: ToolName, message: str, property_ids) -> Dict[str, Any]:
        """Pull the parameters the keyword router can recognise."""
        if tool == ToolName.COMPARE_PROPERTIES:
            return {"property_ids": property_ids}

        if tool in (ToolName.ANALYZE_PROPERTY, ToolName.SETUP_SHOWING):
            return {"property_id": property_ids[0]} if property_ids else {}

        if tool == ToolName.ANALYZE_MARKET:
            location = self._extract_location(message)
            return {"location": location} if location else {}

        if tool == ToolName.SEARCH_PROPERTIES:
            return self._extract_search_filters(message)

        return {}

    def _extract_search_filters(self, message: str) -> Dict[str, Any]:
        filters: Dict[str, Any] = {}
        message_lower = message.lower()

        bed_match = re.search(r"(\d+)\s*[-\s]?(?:bed|beds|bedroom|bedrooms|br)\b", message_lower)
        if bed_match:
            filters["bedrooms"] = int(bed_match.group(1))

        bath_match = re.search(r"(\d+)\s*[-\s]?(?:bath|baths|bathroom|bathrooms|ba)\b", message_lower)
        if bath_match:
            filters["bathrooms"] = int(bath_match.group(1))

        max_match = re.search(r"(?:under|below|less than|max)\s*\$?([\d,.]+\s*[km]?)\b", message_lower)
        if max_match:
            budget_max = parse_price_string(max_match.group(1))
            if budget_max:
                filters["budget_max"] = budget_max

        min_match = re.search(r"(?:over|above|more than|at least)\s*\$?([\d,.]+\s*[km]?)\b", message_lower)
        if min_match:
            budget_min = parse_price_string(min_match.group(1))
            if budget_min:
                filters["budget_min"] = budget_min

        for property_type in ("house", "apartment", "condo", "townhouse"):
            if re.search(rf"\b{property_type}s?\b", message_lower):
                filters["property_type"] = property_type
                break

        location = self._extract_location(message)
        if location:
            filters["location"] = location

        return filters

    @staticmethod
    def _extract_location(message: str) -> Optional[str]:
        """Location named after 'in', e.g. 'homes in Austin under $500k'."""
        match = re.search(
            r"\bin\s+([A-Za-z][A-Za-z\s]*?)(?=\s+(?:under|below|over|above|with|for|near)\b|[?.!,]|$)",
            message,
        )
        if not match:
            return None

        location = re.sub(r"\b(the|market)\b", "", match.group(1), flags=re.IGNORECASE).strip()
        return location.title() if len(location) > 1 else None
