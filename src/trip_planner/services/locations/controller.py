"""Mutations and validation of the ordered location list."""

from __future__ import annotations

import logging
from typing import Sequence

from ...config import PlannerConfig
from ...errors import LimitReached
from ...models.domain import CountStatus

MIN_LOCATIONS = 2

logger = logging.getLogger(__name__)


class LocationListController:
    """Returns new lists for every mutation; the caller's list is never modified.

    Index 0 is the start point. The list never shrinks below two slots and
    never grows past ``config.max_locations``.
    """

    def __init__(self, config: PlannerConfig | None = None) -> None:
        self.config = config or PlannerConfig()

    def initialize(self) -> list[str]:
        return [""] * MIN_LOCATIONS

    def set_at(self, locations: Sequence[str], index: int, value: str) -> list[str]:
        updated = list(locations)
        if 0 <= index < len(updated):
            updated[index] = value
        return updated

    def add(self, locations: Sequence[str]) -> list[str]:
        if len(locations) >= self.config.max_locations:
            logger.debug(f"Refusing to add location: limit of {self.config.max_locations} reached")
            raise LimitReached(self.config.max_locations)
        return [*locations, ""]

    def remove(self, locations: Sequence[str], index: int) -> list[str]:
        if len(locations) <= MIN_LOCATIONS or not 0 <= index < len(locations):
            return list(locations)
        return [value for position, value in enumerate(locations) if position != index]

    def can_add(self, locations: Sequence[str]) -> bool:
        return len(locations) < self.config.max_locations

    def can_remove(self, locations: Sequence[str]) -> bool:
        return len(locations) > MIN_LOCATIONS

    @staticmethod
    def valid_count(locations: Sequence[str]) -> int:
        return sum(1 for value in locations if value.strip())

    def count_status(self, locations: Sequence[str]) -> CountStatus:
        count = self.valid_count(locations)
        if count >= self.config.max_locations:
            return CountStatus.AT_LIMIT
        if count >= self.config.warning_threshold:
            return CountStatus.WARNING
        return CountStatus.OK

    def end_point(self, locations: Sequence[str], designated_end: bool) -> str | None:
        """Label of the pinned end point, or None when the route is a loop."""
        if not designated_end or not self.config.supports_designated_end or len(locations) < MIN_LOCATIONS:
            return None
        return locations[-1].strip() or "empty"
