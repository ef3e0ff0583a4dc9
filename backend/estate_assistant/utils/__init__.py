"""
Utility functions for the Broker Assistant.
"""

from .helpers import (
    generate_property_id,
    format_price,
    extract_json_object,
    parse_price_string,
    extract_property_ids,
)

__all__ = [
    "generate_property_id",
    "format_price",
    "extract_json_object",
    "parse_price_string",
    "extract_property_ids",
]
