"""
Unit tests for the tool agents.
"""

import random

import pytest

from estate_assistant.agents import (
    ComparisonAgent,
    MarketInsightsAgent,
    PropertyAnalysisAgent,
    PropertySearchAgent,
    ShowingAgent,
    score_property_fit,
)
from estate_assistant.agents.search_agent import (
    DEFAULT_BATHROOMS,
    DEFAULT_BEDROOMS,
    DEFAULT_BUDGET_MAX,
    DEFAULT_BUDGET_MIN,
    DEFAULT_LOCATION,
)
from estate_assistant.agents.showing_agent import AVAILABLE_SLOTS
from estate_assistant.models.schemas import (
    AgentContext,
    ClientProfile,
    ComparePropertiesParams,
    PropertyComparisonResult,
    SearchPropertiesParams,
    SetupShowingParams,
    ToolFailure,
)
from estate_assistant.models.state import create_initial_state


def make_state(context=None, selected=None, known=None):
    return create_initial_state(
        message="",
        context=context,
        selected_property_ids=selected,
        known_listings=known,
    )


def listing(property_id, price, sqft, bedrooms=3, bathrooms=2):
    return {
        "id": property_id,
        "address": f"1 {property_id} St, Downtown",
        "price": price,
        "bedrooms": bedrooms,
        "bathrooms": bathrooms,
        "sqft": sqft,
    }


class TestPropertySearchAgent:

    def test_listings_respect_client_preferences(self, context):
        agent = PropertySearchAgent(rng=random.Random(7))
        result = agent.run(SearchPropertiesParams(), make_state(context))

        assert result.success is True
        assert result.total == len(result.properties) == 5
        for prop in result.properties:
            assert 400_000 <= prop.price < 500_000
            assert 2 <= prop.bedrooms <= 4
            assert 1 <= prop.bathrooms <= 3
            assert 800 <= prop.sqft <= 2799
            assert prop.id.startswith("prop_")
            assert prop.address.endswith("Downtown")
            assert prop.amenities == ["Parking", "Gym"]

    def test_explicit_parameters_win_over_client(self, context):
        criteria = PropertySearchAgent.resolve_criteria(
            SearchPropertiesParams(location="Austin", bedrooms=1, property_type="condo"),
            context.client_profile,
        )
        assert criteria["location"] == "Austin"
        assert criteria["bedrooms"] == 1
        assert criteria["budget_min"] == 400_000
        assert criteria["property_type"] == "condo"

    def test_defaults_without_client_or_parameters(self):
        criteria = PropertySearchAgent.resolve_criteria(SearchPropertiesParams(), ClientProfile())
        assert criteria["location"] == DEFAULT_LOCATION
        assert criteria["budget_min"] == DEFAULT_BUDGET_MIN
        assert criteria["budget_max"] == DEFAULT_BUDGET_MAX
        assert criteria["bedrooms"] == DEFAULT_BEDROOMS
        assert criteria["bathrooms"] == DEFAULT_BATHROOMS
        assert criteria["property_type"] == "any"
        assert criteria["rent_or_buy"] == "buy"

    def test_bedrooms_never_drop_below_one(self):
        agent = PropertySearchAgent(rng=random.Random(3))
        criteria = PropertySearchAgent.resolve_criteria(
            SearchPropertiesParams(bedrooms=1, bathrooms=1), ClientProfile()
        )
        for prop in agent.generate_listings(criteria, 20):
            assert prop.bedrooms >= 1
            assert prop.bathrooms >= 1

    def test_same_seed_gives_same_prices(self, context):
        first = PropertySearchAgent(rng=random.Random(11)).run(None, make_state(context))
        second = PropertySearchAgent(rng=random.Random(11)).run(None, make_state(context))
        assert [p.price for p in first.properties] == [p.price for p in second.properties]


class TestPropertyAnalysisAgent:

    def test_known_listing_anchors_the_estimate(self):
        known = {"prop_a": listing("prop_a", 500_000, 2000)}
        agent = PropertyAnalysisAgent(rng=random.Random(1))

        result = agent.run(None, make_state(selected=["prop_a"], known=known))

        assert result.property_id == "prop_a"
        assert result.analysis.listed_price == 500_000
        assert 450_000 <= result.analysis.market_value <= 550_000
        assert result.analysis.price_per_sqft == 250

    def test_unknown_property_gets_generated_figures(self):
        agent = PropertyAnalysisAgent(rng=random.Random(1))
        result = agent.run(None, make_state())

        analysis = result.analysis
        assert result.property_id is None
        assert 300_000 <= analysis.market_value <= 499_999
        assert 3.0 <= analysis.neighborhood_rating <= 5.0
        assert 60 <= analysis.investment_score <= 99


class TestScorePropertyFit:

    def test_matching_listing_scores_full_marks(self, client_profile):
        good = {"price": 450_000, "bedrooms": 3, "bathrooms": 2, "price_per_sqft": 200}
        assert score_property_fit(good, client_profile, 200, 300) == 100

    def test_over_budget_and_short_on_rooms(self, client_profile):
        poor = {"price": 600_000, "bedrooms": 2, "bathrooms": 1, "price_per_sqft": 300}
        assert score_property_fit(poor, client_profile, 200, 300) == 25

    def test_under_budget_gets_partial_credit(self, client_profile):
        cheap = {"price": 350_000, "bedrooms": 5, "bathrooms": 3, "price_per_sqft": 250}
        assert score_property_fit(cheap, client_profile, 250, 250) == 20 + 30 + 20 + 10

    def test_empty_profile_only_scores_value(self):
        candidate = {"price": 1, "bedrooms": 1, "bathrooms": 1, "price_per_sqft": 150}
        assert score_property_fit(candidate, ClientProfile(), 150, 350) == 10


class TestComparisonAgent:

    def test_fewer_than_two_ids_fails(self, context):
        agent = ComparisonAgent(rng=random.Random(1))
        result = agent.run(
            ComparePropertiesParams(property_ids=["prop_a"]), make_state(context)
        )

        assert isinstance(result, ToolFailure)
        assert result.success is False
        assert result.error == "Need at least 2 property IDs to compare"

    def test_best_fit_can_be_a_later_candidate(self, context):
        known = {
            "prop_a": listing("prop_a", 650_000, 2000, bedrooms=2, bathrooms=1),
            "prop_b": listing("prop_b", 450_000, 2000, bedrooms=3, bathrooms=2),
        }
        agent = ComparisonAgent(rng=random.Random(1))
        result = agent.run(None, make_state(context, selected=["prop_a", "prop_b"], known=known))

        comparison = result.comparison
        assert comparison.recommended_property_id == "prop_b"
        assert comparison.fit_scores["prop_b"] > comparison.fit_scores["prop_a"]
        assert "prop_b" in comparison.recommendation
        assert result.warnings == []

    def test_ties_go_to_the_first_candidate(self):
        known = {
            "prop_a": listing("prop_a", 400_000, 2000),
            "prop_b": listing("prop_b", 400_000, 2000),
        }
        agent = ComparisonAgent(rng=random.Random(1))
        result = agent.run(
            ComparePropertiesParams(property_ids=["prop_a", "prop_b"]),
            make_state(known=known),
        )

        assert result.comparison.recommended_property_id == "prop_a"

    def test_unseen_ids_are_estimated_with_warnings(self, context, caplog):
        agent = ComparisonAgent(rng=random.Random(5))

        with caplog.at_level("WARNING"):
            result = agent.run(
                ComparePropertiesParams(property_ids=["prop_x", "prop_y"]),
                make_state(context),
            )

        assert isinstance(result, PropertyComparisonResult)
        assert result.success is True
        assert result.comparison.recommendation
        assert result.comparison.recommended_property_id in ("prop_x", "prop_y")
        assert len(result.warnings) == 2
        assert "prop_x" in caplog.text

    def test_selected_ids_win_over_parameters(self):
        known = {
            "prop_a": listing("prop_a", 400_000, 2000),
            "prop_b": listing("prop_b", 410_000, 2100),
        }
        agent = ComparisonAgent(rng=random.Random(1))
        result = agent.run(
            ComparePropertiesParams(property_ids=["prop_q"]),
            make_state(selected=["prop_a", "prop_b"], known=known),
        )

        assert result.property_ids == ["prop_a", "prop_b"]
        assert result.criteria == ["price", "features", "value"]

    def test_recommendation_without_preferences(self):
        known = {
            "prop_a": listing("prop_a", 400_000, 1000),
            "prop_b": listing("prop_b", 400_000, 2000),
        }
        agent = ComparisonAgent(rng=random.Random(1))
        result = agent.run(None, make_state(selected=["prop_a", "prop_b"], known=known))

        assert result.comparison.recommended_property_id == "prop_b"
        assert "per square foot" in result.comparison.recommendation


class TestMarketInsightsAgent:

    def test_location_falls_back_to_client(self, context):
        result = MarketInsightsAgent(rng=random.Random(2)).run(None, make_state(context))

        assert result.location == "Downtown"
        assert 400_000 <= result.market_analysis.average_price <= 599_999
        assert 15 <= result.market_analysis.days_on_market <= 44
        assert "Downtown" in result.market_analysis.forecast

    def test_without_any_location(self):
        result = MarketInsightsAgent(rng=random.Random(2)).run(None, make_state())
        assert result.location == "your area"


class TestShowingAgent:

    def test_requested_slot_is_honored(self, context):
        params = SetupShowingParams(property_id="prop_a", preferred_time="friday at 11:00 am")
        result = ShowingAgent(rng=random.Random(1)).run(params, make_state(context))

        showing = result.showing
        assert showing.preferred_time == "Friday at 11:00 AM"
        assert showing.available_slots == AVAILABLE_SLOTS
        assert showing.duration == "45 minutes"
        assert showing.contact_info == "555-0100"
        assert showing.property_id == "prop_a"
        assert result.client_name == "Sam Lee"
        assert result.broker_name == "Dana Reyes"

    def test_unknown_slot_falls_back_to_an_open_one(self):
        params = SetupShowingParams(preferred_time="midnight")
        result = ShowingAgent(rng=random.Random(1)).run(params, make_state(selected=["prop_z"]))

        assert result.showing.preferred_time in AVAILABLE_SLOTS
        assert result.showing.property_id == "prop_z"
        assert result.showing.contact_info is None

    def test_email_is_used_without_phone(self):
        context = AgentContext(client_profile=ClientProfile(email="a@b.co"))
        result = ShowingAgent(rng=random.Random(1)).run(None, make_state(context))
        assert result.showing.contact_info == "a@b.co"
