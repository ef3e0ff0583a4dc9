"""
Property Analysis Agent - Produces valuation and investment figures for one property.
"""

from .base_agent import BaseAgent
from ..models.schemas import AnalyzePropertyParams, PropertyAnalysis, PropertyAnalysisResult
from ..models.state import AssistantState, ToolName


class PropertyAnalysisAgent(BaseAgent):
    """
    Property Analysis Agent.

    When the property came from the last search, its address and listed
    price anchor the estimate; otherwise the figures are generated freely.
    """

    tool = ToolName.ANALYZE_PROPERTY

    def run(self, params: AnalyzePropertyParams, state: AssistantState) -> PropertyAnalysisResult:
        params = params or AnalyzePropertyParams()

        property_id = params.property_id
        if not property_id:
            selected = self.selected_ids(state)
            property_id = selected[0] if selected else None

        listing = self.known_listings(state).get(property_id) if property_id else None

        return PropertyAnalysisResult(
            property_id=property_id,
            analysis=self._generate_analysis(listing),
            analysis_type=params.analysis_type,
        )

    def _generate_analysis(self, listing) -> PropertyAnalysis:
        rng = self.rng

        if listing:
            listed_price = int(listing["price"])
            market_value = int(listed_price * rng.uniform(0.9, 1.1))
            price_per_sqft = round(listed_price / listing["sqft"]) if listing.get("sqft") else rng.randint(150, 349)
            address = listing.get("address")
        else:
            listed_price = None
            market_value = rng.randint(300_000, 499_999)
            price_per_sqft = rng.randint(150, 349)
            address = None

        return PropertyAnalysis(
            market_value=market_value,
            estimated_rent=rng.randint(1_500, 4_499),
            property_taxes=rng.randint(2_000, 6_999),
            neighborhood_rating=round(rng.uniform(3.0, 5.0), 1),
            investment_score=rng.randint(60, 99),
            days_on_market=rng.randint(5, 34),
            price_per_sqft=price_per_sqft,
            address=address,
            listed_price=listed_price,
        )
