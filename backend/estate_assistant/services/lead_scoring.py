"""
Rule-based lead scoring.

Five independent sub-scores are computed from fixed thresholds and summed.
The total is not clamped.
"""

from typing import List

from ..models.schemas import ClientPreferences, LeadScore, ScoreBreakdown

HOT_THRESHOLD = 80
WARM_THRESHOLD = 60

QUALIFICATION_RECOMMENDATIONS = {
    "Hot": [
        "High priority lead - follow up within 24 hours",
        "Schedule property viewings immediately",
    ],
    "Warm": [
        "Good potential - follow up within 48 hours",
        "Send personalized property recommendations",
    ],
    "Cold": [
        "Low priority - nurture with content marketing",
        "Focus on building relationship over time",
    ],
}

LOW_BUDGET_RECOMMENDATION = "Consider showing properties in lower price ranges"
LOW_URGENCY_RECOMMENDATION = "Focus on relationship building before pushing for decisions"
VAGUE_LOCATION_RECOMMENDATION = "Help clarify location preferences with market overview"


def score_budget(budget_min: float, budget_max: float) -> int:
    """Tier on the average budget plus a bonus for a tight range (0-30)."""
    average = (budget_min + budget_max) / 2

    if average >= 500_000:
        score = 25
    elif average >= 300_000:
        score = 20
    elif average >= 200_000:
        score = 15
    elif average >= 100_000:
        score = 10
    else:
        score = 5

    spread = budget_max - budget_min
    if spread <= 50_000:
        score += 5
    elif spread <= 100_000:
        score += 3
    else:
        score += 1

    return score


def score_urgency(rent_or_buy: str) -> int:
    return 20 if rent_or_buy == "buy" else 10


def score_commitment(amenities: List[str]) -> int:
    count = len(amenities)
    if count >= 5:
        return 20
    if count >= 3:
        return 15
    if count >= 1:
        return 10
    return 5


def score_location(location: str) -> int:
    """Keyword match on the lowercased location (0-20)."""
    location = location.lower()

    if "downtown" in location or "city center" in location:
        return 20
    if "suburb" in location or "neighborhood" in location:
        return 15
    if "area" in location or "district" in location:
        return 10
    return 5


def score_preferences(bedrooms: float, bathrooms: float) -> int:
    if bedrooms >= 3 and bathrooms >= 2:
        return 15
    if bedrooms >= 2 and bathrooms >= 1:
        return 12
    if bedrooms >= 1 and bathrooms >= 1:
        return 8
    return 5


def qualify(total_score: int) -> str:
    if total_score >= HOT_THRESHOLD:
        return "Hot"
    if total_score >= WARM_THRESHOLD:
        return "Warm"
    return "Cold"


def calculate_lead_score(preferences: ClientPreferences) -> LeadScore:
    """
    Score a lead from the client's preferences.

    Args:
        preferences: The client's submitted preferences

    Returns:
        LeadScore with the breakdown, qualification tier and an ordered
        list of recommendations (tier messages first, then budget, urgency
        and location follow-ups)
    """
    breakdown = ScoreBreakdown(
        budget=score_budget(preferences.budget_min, preferences.budget_max),
        urgency=score_urgency(preferences.rent_or_buy),
        commitment=score_commitment(preferences.amenities),
        location=score_location(preferences.location),
        preferences=score_preferences(preferences.bedrooms, preferences.bathrooms),
    )

    total_score = (
        breakdown.budget
        + breakdown.urgency
        + breakdown.commitment
        + breakdown.location
        + breakdown.preferences
    )
    qualification = qualify(total_score)

    recommendations = list(QUALIFICATION_RECOMMENDATIONS[qualification])
    if breakdown.budget < 15:
        recommendations.append(LOW_BUDGET_RECOMMENDATION)
    if breakdown.urgency < 15:
        recommendations.append(LOW_URGENCY_RECOMMENDATION)
    if breakdown.location < 10:
        recommendations.append(VAGUE_LOCATION_RECOMMENDATION)

    return LeadScore(
        total_score=total_score,
        score_breakdown=breakdown,
        qualification=qualification,
        recommendations=recommendations,
    )
