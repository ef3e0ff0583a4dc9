"""
Property Search Agent - Generates mock listings matching the client's criteria.
"""

import logging
from typing import Dict, Any, List

from .base_agent import BaseAgent
from ..models.schemas import (
    ClientProfile,
    PropertyListing,
    PropertySearchResult,
    SearchPropertiesParams,
)
from ..models.state import AssistantState, ToolName
from ..utils.helpers import generate_property_id

logger = logging.getLogger(__name__)

DEFAULT_LOCATION = "Downtown"
DEFAULT_BUDGET_MIN = 300_000
DEFAULT_BUDGET_MAX = 800_000
DEFAULT_BEDROOMS = 2
DEFAULT_BATHROOMS = 2

STREET_NAMES = ["Oak", "Maple", "Pine", "Cedar", "Elm", "Birch", "Willow", "Cherry"]
PROPERTY_TYPES = ["house", "apartment", "condo"]
FALLBACK_AMENITIES = ["Parking", "Gym", "Pool"]


class PropertySearchAgent(BaseAgent):
    """
    Property Search Agent.

    Missing search parameters are filled from the client's preferences and
    then from fixed defaults. Listings vary by at most one bedroom and one
    bathroom around the request and are priced within the budget.
    """

    tool = ToolName.SEARCH_PROPERTIES

    def run(self, params: SearchPropertiesParams, state: AssistantState) -> PropertySearchResult:
        criteria = self.resolve_criteria(params or SearchPropertiesParams(), self.client(state))
        logger.info(f"Searching properties with criteria: {criteria}")

        listings = self.generate_listings(criteria, self._settings.MOCK_LISTING_COUNT)

        return PropertySearchResult(
            properties=listings,
            total=len(listings),
            search_criteria=criteria,
        )

    @staticmethod
    def resolve_criteria(params: SearchPropertiesParams, client: ClientProfile) -> Dict[str, Any]:
        """Merge search parameters with client preferences and defaults."""
        return {
            "location": params.location or client.location or DEFAULT_LOCATION,
            "budget_min": params.budget_min or client.budget_min or DEFAULT_BUDGET_MIN,
            "budget_max": params.budget_max or client.budget_max or DEFAULT_BUDGET_MAX,
            "bedrooms": int(params.bedrooms or client.bedrooms or DEFAULT_BEDROOMS),
            "bathrooms": int(params.bathrooms or client.bathrooms or DEFAULT_BATHROOMS),
            "property_type": params.property_type or "any",
            "amenities": list(params.amenities or client.amenities or []),
            "rent_or_buy": client.rent_or_buy or "buy",
        }

    def generate_listings(self, criteria: Dict[str, Any], count: int) -> List[PropertyListing]:
        """
        Generate mock listings for the resolved criteria.

        Args:
            criteria: Output of resolve_criteria
            count: Number of listings to generate

        Returns:
            List of PropertyListing
        """
        low = int(criteria["budget_min"])
        high = int(criteria["budget_max"])
        location = criteria["location"]
        requested_type = criteria["property_type"]
        amenities = criteria["amenities"]
        purpose = "buying" if criteria["rent_or_buy"] == "buy" else "renting"

        listings = []
        for i in range(1, count + 1):
            price = self.rng.randint(low, high - 1) if high > low else low

            bedrooms = max(1, criteria["bedrooms"] + self.rng.randint(-1, 1))
            bathrooms = max(1, criteria["bathrooms"] + self.rng.randint(-1, 1))

            property_type = (
                self.rng.choice(PROPERTY_TYPES) if requested_type == "any" else requested_type
            )
            listing_amenities = (
                amenities[:3] if amenities
                else FALLBACK_AMENITIES[:self.rng.randint(1, len(FALLBACK_AMENITIES))]
            )

            street = self.rng.choice(STREET_NAMES)
            number = self.rng.randint(1, 9999)

            listings.append(PropertyListing(
                id=generate_property_id(),
                address=f"{number} {street} St, {location}",
                price=price,
                bedrooms=bedrooms,
                bathrooms=bathrooms,
                sqft=self.rng.randint(800, 2799),
                property_type=property_type,
                amenities=listing_amenities,
                images=[f"/api/property-image/{i}"],
                description=(
                    f"Beautiful {property_type} in {location} with {bedrooms} bedrooms "
                    f"and {bathrooms} bathrooms. Perfect for {purpose}."
                ),
            ))

        return listings
