"""
LangGraph workflow definition for the Broker Assistant.
"""

import random
from typing import Optional

from langgraph.graph import StateGraph, END

from ..models.state import AssistantState, ToolName
from ..agents import (
    RouterAgent,
    PropertySearchAgent,
    PropertyAnalysisAgent,
    ComparisonAgent,
    MarketInsightsAgent,
    ShowingAgent,
)


TOOL_TO_NODE = {
    ToolName.SEARCH_PROPERTIES.value: "search",
    ToolName.ANALYZE_PROPERTY.value: "analysis",
    ToolName.COMPARE_PROPERTIES.value: "comparison",
    ToolName.ANALYZE_MARKET.value: "market_insights",
    ToolName.SETUP_SHOWING.value: "showing",
}


class AssistantWorkflow:
    """
    Routes a message to one tool.

    Uses LangGraph to define a directed graph with the router as entry
    point and a conditional edge to the selected tool node. General help
    ends right after routing.
    """

    def __init__(
        self,
        llm=None,
        use_llm: Optional[bool] = None,
        rng: Optional[random.Random] = None
    ):
        """
        Args:
            llm: LLM service for the router (defaults to the shared service)
            use_llm: Whether the router uses the LLM (defaults to settings)
            rng: Random source shared by the mock data generators
        """
        self.router = RouterAgent(llm=llm, use_llm=use_llm)
        self.tools = {
            "search": PropertySearchAgent(rng=rng),
            "analysis": PropertyAnalysisAgent(rng=rng),
            "comparison": ComparisonAgent(rng=rng),
            "market_insights": MarketInsightsAgent(rng=rng),
            "showing": ShowingAgent(rng=rng),
        }
        self._graph = None
        self._compiled_app = None
        self._build_graph()

    def _build_graph(self):
        """Build the LangGraph workflow graph."""
        self._graph = StateGraph(AssistantState)

        self._graph.add_node("router", self.router.process)
        for name, agent in self.tools.items():
            self._graph.add_node(name, agent.process)

        self._graph.set_entry_point("router")

        path_map = {node: node for node in self.tools}
        path_map[END] = END
        self._graph.add_conditional_edges("router", self._route_by_tool, path_map)

        for name in self.tools:
            self._graph.add_edge(name, END)

        self._compiled_app = self._graph.compile()

    def _route_by_tool(self, state: AssistantState) -> str:
        """
        Route to the node for the classified tool.

        Returns:
            Name of the next node, or END for general help
        """
        return TOOL_TO_NODE.get(state.get("tool", ""), END)

    def run(self, state: AssistantState) -> AssistantState:
        """
        Run the workflow with a pre-built state.

        Args:
            state: Initial state from create_initial_state

        Returns:
            Final state after workflow execution
        """
        return self._compiled_app.invoke(state)


# Singleton workflow instance
_workflow: Optional[AssistantWorkflow] = None


def get_workflow() -> AssistantWorkflow:
    """
    Get or create the singleton workflow instance.

    Returns:
        AssistantWorkflow singleton
    """
    global _workflow

    if _workflow is None:
        _workflow = AssistantWorkflow()

    return _workflow
