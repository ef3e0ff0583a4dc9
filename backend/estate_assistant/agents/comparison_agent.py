"""
Comparison Agent - Compares listings side by side and recommends the best fit.
"""

import logging
from typing import Dict, Any, List, Optional

from .base_agent import BaseAgent
from ..models.schemas import (
    ClientProfile,
    ComparePropertiesParams,
    FeatureComparisonEntry,
    PriceComparisonEntry,
    PropertyComparison,
    PropertyComparisonResult,
    ToolFailure,
)
from ..models.state import AssistantState, ToolName

logger = logging.getLogger(__name__)

FALLBACK_STREETS = ["Oak", "Maple", "Pine", "Cedar", "Elm"]
DEFAULT_CRITERIA = ["price", "features", "value"]

BUDGET_POINTS = 40
UNDER_BUDGET_POINTS = 20
BEDROOM_POINTS = 30
BATHROOM_POINTS = 20
VALUE_POINTS = 10


def score_property_fit(
    candidate: Dict[str, Any],
    client: ClientProfile,
    min_price_per_sqft: int,
    max_price_per_sqft: int
) -> int:
    """
    Score how well a listing fits the client's budget, bedrooms and bathrooms.

    Criteria the client has not filled in contribute nothing. Up to
    VALUE_POINTS are added for a lower price per sqft than the other
    candidates.
    """
    score = 0

    if client.budget_min is not None and client.budget_max is not None:
        if client.budget_min <= candidate["price"] <= client.budget_max:
            score += BUDGET_POINTS
        elif candidate["price"] < client.budget_min:
            score += UNDER_BUDGET_POINTS

    if client.bedrooms is not None:
        missing = max(0, client.bedrooms - candidate["bedrooms"])
        score += max(0, int(BEDROOM_POINTS - 15 * missing))

    if client.bathrooms is not None:
        missing = max(0, client.bathrooms - candidate["bathrooms"])
        score += max(0, int(BATHROOM_POINTS - 10 * missing))

    spread = max_price_per_sqft - min_price_per_sqft
    if spread > 0:
        score += round(VALUE_POINTS * (max_price_per_sqft - candidate["price_per_sqft"]) / spread)
    else:
        score += VALUE_POINTS

    return score


class ComparisonAgent(BaseAgent):
    """
    Comparison Agent for property comparisons.

    Listings from the last search are compared with their real figures.
    Ids that were never returned get fabricated figures and a warning.
    """

    tool = ToolName.COMPARE_PROPERTIES

    def run(self, params: ComparePropertiesParams, state: AssistantState):
        params = params or ComparePropertiesParams()

        # Properties selected in the UI win over ids the classifier picked out
        property_ids = self.selected_ids(state) or list(params.property_ids)

        if len(property_ids) < 2:
            logger.info(f"Comparison requested with {len(property_ids)} property id(s)")
            return ToolFailure(tool=self.tool, error="Need at least 2 property IDs to compare")

        known = self.known_listings(state)
        candidates = []
        warnings = []

        for property_id in property_ids:
            listing = known.get(property_id)
            if listing is None:
                message = f"Property {property_id} was not in the last search; using estimated figures"
                logger.warning(message)
                warnings.append(message)
                candidates.append(self._fabricate_candidate(property_id))
            else:
                candidates.append(self._candidate_from_listing(listing))

        comparison = self._compare(candidates, self.client(state))

        return PropertyComparisonResult(
            comparison=comparison,
            property_ids=property_ids,
            criteria=list(params.comparison_criteria) or list(DEFAULT_CRITERIA),
            warnings=warnings,
        )

    def _candidate_from_listing(self, listing: Dict[str, Any]) -> Dict[str, Any]:
        sqft = listing.get("sqft") or 1
        return {
            "id": listing["id"],
            "address": listing["address"],
            "price": int(listing["price"]),
            "price_per_sqft": round(listing["price"] / sqft),
            "bedrooms": int(listing["bedrooms"]),
            "bathrooms": int(listing["bathrooms"]),
            "sqft": int(sqft),
        }

    def _fabricate_candidate(self, property_id: str) -> Dict[str, Any]:
        rng = self.rng
        return {
            "id": property_id,
            "address": f"{rng.randint(1, 9999)} {rng.choice(FALLBACK_STREETS)} St, Downtown",
            "price": rng.randint(300_000, 499_999),
            "price_per_sqft": rng.randint(150, 349),
            "bedrooms": rng.randint(1, 4),
            "bathrooms": rng.randint(1, 3),
            "sqft": rng.randint(800, 2799),
        }

    def _compare(self, candidates: List[Dict[str, Any]], client: ClientProfile) -> PropertyComparison:
        prices_per_sqft = [c["price_per_sqft"] for c in candidates]
        low, high = min(prices_per_sqft), max(prices_per_sqft)

        fit_scores = {
            c["id"]: score_property_fit(c, client, low, high) for c in candidates
        }

        # max() keeps the earliest candidate on ties
        best = max(candidates, key=lambda c: fit_scores[c["id"]])

        return PropertyComparison(
            price_comparison=[
                PriceComparisonEntry(
                    property_id=c["id"],
                    property_address=c["address"],
                    price=c["price"],
                    price_per_sqft=c["price_per_sqft"],
                )
                for c in candidates
            ],
            feature_comparison=[
                FeatureComparisonEntry(
                    property_id=c["id"],
                    property_address=c["address"],
                    bedrooms=c["bedrooms"],
                    bathrooms=c["bathrooms"],
                    sqft=c["sqft"],
                )
                for c in candidates
            ],
            fit_scores=fit_scores,
            recommended_property_id=best["id"],
            recommendation=self._recommendation_text(best, client),
        )

    @staticmethod
    def _recommendation_text(best: Dict[str, Any], client: Optional[ClientProfile]) -> str:
        if client and client.has_preferences():
            return (
                f"Based on your preferences, I recommend {best['address']} "
                f"as it offers the best value for your budget."
            )
        return (
            f"I recommend {best['address']} as it offers the best value "
            f"per square foot of the properties compared."
        )
