"""Itinerary export utilities."""

from .itinerary_formatter import format_duration, itinerary_to_csv, itinerary_to_json, itinerary_to_text

__all__ = [
    "format_duration",
    "itinerary_to_csv",
    "itinerary_to_json",
    "itinerary_to_text",
]
