"""
Services for the Broker Assistant application.

- LLMService: Tool classification via OpenAI
- SessionService: Per-conversation chat state
- ResponseCache: Bounded TTL cache for chat responses
- PerformanceMonitor: Request metrics
- calculate_lead_score: Rule-based lead scoring
"""

from .llm_service import LLMService, get_llm_service
from .session_service import ChatSession, SessionService, get_session_service, session_key
from .response_cache import ResponseCache, make_cache_key
from .performance_monitor import PerformanceMonitor, PerformanceMetrics, get_performance_monitor
from .lead_scoring import calculate_lead_score

__all__ = [
    "LLMService",
    "get_llm_service",
    "ChatSession",
    "SessionService",
    "get_session_service",
    "session_key",
    "ResponseCache",
    "make_cache_key",
    "PerformanceMonitor",
    "PerformanceMetrics",
    "get_performance_monitor",
    "calculate_lead_score",
]
