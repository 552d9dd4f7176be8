"""Optimizer request/response schemas."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field


class OptimizationRequest(BaseModel):
    locations: List[str] = Field(..., min_length=2)
    designated_end: Optional[bool] = Field(
        default=None,
        description="If True, the last location is the end of the route instead of a return to the start.",
    )


class OptimizationResult(BaseModel):
    optimal_route: List[int] = Field(..., description="Visiting order as indices into the submitted locations.")
    distance_matrix: List[List[float]] = Field(..., description="Pairwise travel time in seconds.")
    total_time: float = Field(..., ge=0, description="Total route time in seconds.")


class OptimizerError(BaseModel):
    error: str
