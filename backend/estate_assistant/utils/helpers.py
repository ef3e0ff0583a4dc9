"""
Helper utility functions.
"""

import json
import re
import uuid
from typing import Dict, Any, Optional


def generate_property_id() -> str:
    """
    Generate a unique id for a mock listing.

    Returns:
        Identifier such as ``prop_1a2b3c4d``
    """
    return f"prop_{uuid.uuid4().hex[:8]}"


def format_price(price: Optional[float]) -> str:
    """
    Format a price value for display.

    Args:
        price: Price value (can be None)

    Returns:
        Formatted price string
    """
    if price is None:
        return "N/A"

    return f"${price:,.0f}"


def parse_price_string(price_str: str) -> Optional[int]:
    """
    Parse a price string into an integer value.

    Handles formats like:
    - $500,000
    - 500k
    - 500K
    - $1.5M
    - 1500000

    Args:
        price_str: Price string to parse

    Returns:
        Integer price value or None if unparseable
    """
    if not price_str:
        return None

    # Clean the string
    price_str = price_str.strip().lower()
    price_str = price_str.replace('$', '').replace(',', '').replace(' ', '')

    try:
        # Check for millions (M)
        if 'm' in price_str:
            price_str = price_str.replace('m', '')
            return int(float(price_str) * 1_000_000)

        # Check for thousands (K)
        if 'k' in price_str:
            price_str = price_str.replace('k', '')
            return int(float(price_str) * 1_000)

        # Plain number
        value = float(price_str)

        # If value is small, assume it's in thousands
        if value < 10000:
            return int(value * 1000)

        return int(value)

    except (ValueError, TypeError):
        return None


def extract_json_object(text: str) -> Dict[str, Any]:
    """
    Parse the first JSON object in an LLM response.

    Handles responses wrapped in markdown code fences or surrounded by
    stray prose.

    Raises:
        ValueError: If no JSON object can be found
    """
    if not text:
        raise ValueError("Empty LLM response")

    cleaned = text.strip()
    fence = re.match(r"^```(?:json)?\s*(.*?)\s*```$", cleaned, re.DOTALL)
    if fence:
        cleaned = fence.group(1)

    try:
        parsed = json.loads(cleaned)
    except json.JSONDecodeError:
        start = cleaned.find("{")
        end = cleaned.rfind("}")
        if start == -1 or end <= start:
            raise ValueError(f"No JSON object in LLM response: {text[:100]}")
        parsed = json.loads(cleaned[start:end + 1])

    if not isinstance(parsed, dict):
        raise ValueError("LLM response is not a JSON object")

    return parsed


def extract_property_ids(text: str) -> list:
    """
    Extract listing ids (``prop_...``) mentioned in a message, in order.
    """
    seen = []
    for match in re.findall(r"\bprop_[A-Za-z0-9]+\b", text or ""):
        if match not in seen:
            seen.append(match)
    return seen
