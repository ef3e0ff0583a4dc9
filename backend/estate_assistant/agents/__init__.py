"""
Agent modules for the Broker Assistant.

The router picks a tool for each message; each tool agent handles one kind
of request.
"""

from .router_agent import RouterAgent
from .search_agent import PropertySearchAgent
from .analysis_agent import PropertyAnalysisAgent
from .comparison_agent import ComparisonAgent, score_property_fit
from .market_insights_agent import MarketInsightsAgent
from .showing_agent import ShowingAgent

__all__ = [
    "RouterAgent",
    "PropertySearchAgent",
    "PropertyAnalysisAgent",
    "ComparisonAgent",
    "score_property_fit",
    "MarketInsightsAgent",
    "ShowingAgent",
]
