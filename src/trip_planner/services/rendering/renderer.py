"""Turn optimizer results into ordered itinerary steps."""

from __future__ import annotations

import logging
import math
from typing import Sequence

from ...errors import MalformedResult
from ...models.domain import Itinerary, RouteStep, StepKind
from ...schemas.optimization import OptimizationResult

# Allowed gap between the reported total and the sum of rendered legs.
TOTAL_TOLERANCE_SECONDS = 1.0

logger = logging.getLogger(__name__)


class ResultRenderer:
    """Builds an :class:`Itinerary` from an optimizer result.

    Loop mode (``designated_end=False``) treats the route as a closed tour and
    appends the start location again as the final END step, with the closing
    leg carried by the last visited location. Open mode ends at the last
    entry of ``optimal_route`` with no return leg.
    """

    def validate(self, result: OptimizationResult, locations: Sequence[str]) -> None:
        count = len(locations)
        route = result.optimal_route
        if not route:
            raise MalformedResult("the route is empty")
        if len(route) != count or sorted(route) != list(range(count)):
            raise MalformedResult(
                f"the route {route} is not a visiting order of the {count} submitted locations"
            )
        matrix = result.distance_matrix
        for index in route:
            if index >= len(matrix) or len(matrix[index]) < count:
                raise MalformedResult(f"travel times for location {index} are missing")
            if not all(math.isfinite(seconds) for seconds in matrix[index][:count]):
                raise MalformedResult(f"travel times for location {index} are not finite numbers")
        if not math.isfinite(result.total_time):
            raise MalformedResult("the total time is not a finite number")

    def render(
        self, result: OptimizationResult, locations: Sequence[str], designated_end: bool
    ) -> Itinerary:
        self.validate(result, locations)

        route = result.optimal_route
        matrix = result.distance_matrix
        closes_loop = not designated_end and len(route) > 1
        last_position = len(route) - 1

        steps: list[RouteStep] = []
        for position, index in enumerate(route):
            if position == 0:
                kind = StepKind.START
            elif position == last_position and not closes_loop:
                kind = StepKind.END
            else:
                kind = StepKind.WAYPOINT

            leg = None
            if position < last_position:
                leg = matrix[index][route[position + 1]]
            elif closes_loop:
                leg = matrix[index][route[0]]
            steps.append(RouteStep(kind=kind, location_index=index, location=locations[index], leg_seconds_to_next=leg))

        if closes_loop:
            steps.append(RouteStep(kind=StepKind.END, location_index=route[0], location=locations[route[0]]))

        legs_total = sum(step.leg_seconds_to_next or 0.0 for step in steps)
        mismatch = abs(legs_total - result.total_time) > TOTAL_TOLERANCE_SECONDS
        if mismatch:
            logger.warning(
                f"Reported total time {result.total_time:.0f}s differs from the sum of legs {legs_total:.0f}s"
            )

        return Itinerary(
            designated_end=designated_end,
            total_seconds=result.total_time,
            steps=steps,
            legs_total_seconds=legs_total,
            total_mismatch=mismatch,
        )
