"""Serializers for rendered itineraries."""

from __future__ import annotations

import csv
import io
import math
from dataclasses import asdict

from ...models.domain import Itinerary, StepKind

SECONDS_PER_DAY = 86400
SECONDS_PER_HOUR = 3600


def format_duration(seconds: float) -> str:
    """Readable duration such as ``"1 days 1 hours 1 minutes"``.

    Seconds are rounded half-up first and never shown. Days and hours only
    appear when strictly more than one full unit remains.
    """
    remaining = math.floor(seconds + 0.5)
    parts: list[str] = []

    if remaining > SECONDS_PER_DAY:
        days = remaining // SECONDS_PER_DAY
        parts.append(f"{days} days")
        remaining -= days * SECONDS_PER_DAY

    if remaining > SECONDS_PER_HOUR:
        hours = remaining // SECONDS_PER_HOUR
        parts.append(f"{hours} hours")
        remaining -= hours * SECONDS_PER_HOUR

    parts.append(f"{remaining // 60} minutes")
    return " ".join(parts)


def itinerary_to_json(itinerary: Itinerary) -> dict:
    return {
        "designated_end": itinerary.designated_end,
        "total_seconds": itinerary.total_seconds,
        "total_time": format_duration(itinerary.total_seconds),
        "legs_total_seconds": itinerary.legs_total_seconds,
        "total_mismatch": itinerary.total_mismatch,
        "steps": [
            {
                **asdict(step),
                "kind": step.kind.value,
                "leg_duration": format_duration(step.leg_seconds_to_next)
                if step.leg_seconds_to_next is not None
                else None,
            }
            for step in itinerary.steps
        ],
    }


def itinerary_to_text(itinerary: Itinerary) -> str:
    lines = []
    for number, step in enumerate(itinerary.steps, start=1):
        prefix = ""
        if step.kind is StepKind.START:
            prefix = "Start: "
        elif step.kind is StepKind.END:
            prefix = "End: "
        lines.append(f"{number}. {prefix}{step.location}")
        if step.leg_seconds_to_next is not None:
            lines.append(f"   ↓ {format_duration(step.leg_seconds_to_next)}")
    lines.append(f"Total Time: {format_duration(itinerary.total_seconds)}")
    return "\n".join(lines) + "\n"


def itinerary_to_csv(itinerary: Itinerary) -> str:
    buffer = io.StringIO()
    fieldnames = [
        "sequence",
        "kind",
        "location_index",
        "location",
        "leg_seconds_to_next",
        "leg_duration",
    ]
    writer = csv.DictWriter(buffer, fieldnames=fieldnames)
    writer.writeheader()
    for sequence, step in enumerate(itinerary.steps, start=1):
        writer.writerow(
            {
                "sequence": sequence,
                "kind": step.kind.value,
                "location_index": step.location_index,
                "location": step.location,
                "leg_seconds_to_next": "" if step.leg_seconds_to_next is None else step.leg_seconds_to_next,
                "leg_duration": "" if step.leg_seconds_to_next is None else format_duration(step.leg_seconds_to_next),
            }
        )
    return buffer.getvalue()
