"""Planner form request/response schemas."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from ..models.domain import CountStatus, SessionState, StepKind


class LocationUpdate(BaseModel):
    value: str = Field(..., description="Text typed into the location field.")


class DesignatedEndUpdate(BaseModel):
    enabled: bool = Field(..., description="Use the last location as the end point instead of returning to the start.")


class RouteStepModel(BaseModel):
    kind: StepKind
    location_index: int
    location: str
    leg_seconds_to_next: Optional[float] = None
    leg_duration: Optional[str] = None


class ItineraryModel(BaseModel):
    designated_end: bool
    total_seconds: float
    total_time: str
    legs_total_seconds: float
    total_mismatch: bool
    steps: List[RouteStepModel]


class PlannerSnapshot(BaseModel):
    locations: List[str]
    designated_end: bool
    end_point: Optional[str] = None
    valid_count: int
    count_status: CountStatus
    max_locations: int
    can_add: bool
    can_remove: bool
    supports_designated_end: bool
    loading: bool
    state: SessionState
    error: Optional[str] = None
    itinerary: Optional[ItineraryModel] = None
