"""Domain models for the location form and rendered itineraries."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class CountStatus(str, Enum):
    OK = "ok"
    WARNING = "warning"
    AT_LIMIT = "at-limit"


class SessionState(str, Enum):
    EDITING = "editing"
    SUBMITTING = "submitting"


class StepKind(str, Enum):
    START = "start"
    WAYPOINT = "waypoint"
    END = "end"


@dataclass(frozen=True, slots=True)
class SubmissionPayload:
    """Validated locations ready to be sent to the optimizer."""

    locations: tuple[str, ...]
    designated_end: bool = False


@dataclass(slots=True)
class RouteStep:
    """One entry of the rendered itinerary."""

    kind: StepKind
    location_index: int
    location: str
    leg_seconds_to_next: Optional[float] = None


@dataclass(slots=True)
class Itinerary:
    designated_end: bool
    total_seconds: float
    steps: List[RouteStep] = field(default_factory=list)
    legs_total_seconds: float = 0.0
    total_mismatch: bool = False
