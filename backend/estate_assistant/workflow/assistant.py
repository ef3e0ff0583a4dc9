"""
Chat assistant that answers one broker/client conversation.
"""

import logging
import time
from typing import List, Optional

from ..config import get_settings
from ..models.schemas import AgentContext, ChatResult, PropertySearchResult
from ..models.state import ToolName, create_initial_state
from ..services.performance_monitor import PerformanceMonitor, get_performance_monitor
from ..services.response_cache import make_cache_key
from ..services.session_service import ChatSession
from .graph import AssistantWorkflow, get_workflow

logger = logging.getLogger(__name__)

FALLBACK_RESPONSE = (
    "I apologize, but I'm having trouble processing your request right now. "
    "Please try again in a moment."
)
EMPTY_RESPONSE = "Here's what I found."


class RealEstateAssistant:
    """
    Answers chat messages for one broker/client pair.

    The caller owns the ChatSession (history, response cache and the
    listings from the last search) and passes it in, so separate
    conversations never share state.
    """

    def __init__(
        self,
        context: AgentContext,
        session: ChatSession,
        workflow: Optional[AssistantWorkflow] = None,
        monitor: Optional[PerformanceMonitor] = None
    ):
        self.context = context
        self.session = session
        self.workflow = workflow or get_workflow()
        self.monitor = monitor or get_performance_monitor()
        self._settings = get_settings()

    def chat(self, message: str, selected_property_ids: Optional[List[str]] = None) -> ChatResult:
        """
        Answer a chat message.

        Args:
            message: The user's message
            selected_property_ids: Property ids selected in the UI

        Returns:
            ChatResult with the reply text, the tool used and its result.
            Never raises; failures produce a fixed apology.
        """
        start_time = time.perf_counter()
        selected = list(selected_property_ids or [])

        cache_key = make_cache_key(
            message, self.context.broker_id, self.context.client_id, selected
        )
        cached = self.session.cache.get(cache_key)
        if cached is not None:
            logger.info(f"Cache hit for session {self.session.session_id}")
            self._remember_search(cached)
            self.monitor.track_request(start_time, time.perf_counter(), cache_hit=True)
            return cached

        try:
            state = create_initial_state(
                message=message,
                context=self.context,
                selected_property_ids=selected,
                history=self.session.recent_history(self._settings.CLASSIFIER_HISTORY_WINDOW),
                known_listings=self.session.known_listings,
            )
            final_state = self.workflow.run(state)

            result = ChatResult(
                response=final_state.get("response") or EMPTY_RESPONSE,
                tool_used=ToolName(final_state["tool"]),
                tool_result=final_state.get("tool_result"),
            )

        except Exception as e:
            logger.error(f"Chat error for session {self.session.session_id}: {e}", exc_info=True)
            self.monitor.track_error()
            self.monitor.track_request(start_time, time.perf_counter())
            return ChatResult(
                response=FALLBACK_RESPONSE,
                tool_used=ToolName.GENERAL_HELP,
                tool_result=None,
            )

        self._remember_search(result)

        self.session.cache.set(cache_key, result)
        self.session.add_turn(message, result.response)
        self.monitor.track_request(start_time, time.perf_counter())

        logger.info(
            f"Chat handled for session {self.session.session_id}, tool: {result.tool_used.value}"
        )
        return result

    def _remember_search(self, result: ChatResult):
        """Make a search's listings the ones later tools look up by id."""
        if isinstance(result.tool_result, PropertySearchResult):
            self.session.remember_listings(
                [listing.model_dump() for listing in result.tool_result.properties]
            )
