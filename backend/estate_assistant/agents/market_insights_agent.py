"""
Market Insights Agent - Provides mock market trend figures for a location.
"""

from .base_agent import BaseAgent
from ..models.schemas import AnalyzeMarketParams, MarketAnalysis, MarketAnalysisResult
from ..models.state import AssistantState, ToolName


class MarketInsightsAgent(BaseAgent):
    """
    Market Insights Agent.

    Uses the requested location, then the client's preferred location.
    """

    tool = ToolName.ANALYZE_MARKET

    def run(self, params: AnalyzeMarketParams, state: AssistantState) -> MarketAnalysisResult:
        params = params or AnalyzeMarketParams()
        location = params.location or self.client(state).location or "your area"

        return MarketAnalysisResult(
            location=location,
            market_analysis=self._generate_market_analysis(location),
            analysis_type=params.analysis_type,
        )

    def _generate_market_analysis(self, location: str) -> MarketAnalysis:
        rng = self.rng
        outlook = "strong" if rng.random() > 0.5 else "stable"

        return MarketAnalysis(
            average_price=rng.randint(400_000, 599_999),
            price_trend="increasing" if rng.random() > 0.5 else "decreasing",
            days_on_market=rng.randint(15, 44),
            inventory_level="low" if rng.random() > 0.5 else "high",
            market_activity="active" if rng.random() > 0.5 else "slow",
            forecast=f"The {location} market is expected to remain {outlook} in the coming months.",
        )
