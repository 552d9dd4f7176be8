"""Per-process planner session: the form state and the last rendered route."""

from __future__ import annotations

import logging

from ..config import PlannerConfig
from ..errors import LimitReached, PlannerError, SubmissionInProgress
from ..models.domain import Itinerary, SessionState
from .locations.controller import LocationListController
from .rendering.renderer import ResultRenderer
from .submission.builder import SubmissionBuilder
from .submission.client import OptimizerClient

logger = logging.getLogger(__name__)


class PlannerSession:
    """Holds what the form shows and recovers every planner error into ``error``.

    The itinerary is only ever replaced by a successful submission; failures
    leave the previous one in place.
    """

    def __init__(
        self,
        client: OptimizerClient | None,
        config: PlannerConfig | None = None,
        renderer: ResultRenderer | None = None,
    ) -> None:
        self.config = config or PlannerConfig()
        self.controller = LocationListController(self.config)
        self.builder = SubmissionBuilder(client, self.config)
        self.renderer = renderer or ResultRenderer()
        self.locations: list[str] = self.controller.initialize()
        self.designated_end = False
        self.itinerary: Itinerary | None = None
        self.submitted_locations: tuple[str, ...] = ()
        self.error: str | None = None

    @property
    def loading(self) -> bool:
        return self.builder.loading

    @property
    def state(self) -> SessionState:
        return SessionState.SUBMITTING if self.builder.loading else SessionState.EDITING

    def set_location(self, index: int, value: str) -> None:
        self.locations = self.controller.set_at(self.locations, index, value)

    def add_location(self) -> bool:
        try:
            self.locations = self.controller.add(self.locations)
        except LimitReached as exc:
            self.error = exc.user_message
            return False
        self._clear_limit_error()
        return True

    def remove_location(self, index: int) -> None:
        before = len(self.locations)
        self.locations = self.controller.remove(self.locations, index)
        if len(self.locations) < before:
            self._clear_limit_error()

    def _clear_limit_error(self) -> None:
        if self.error == LimitReached(self.config.max_locations).user_message:
            self.error = None

    def set_designated_end(self, enabled: bool) -> None:
        self.designated_end = enabled and self.config.supports_designated_end

    async def submit(self) -> bool:
        """Submit the current list. Returns True when a new itinerary was rendered.

        SubmissionInProgress propagates untouched so callers can reject the
        duplicate request without disturbing the one in flight.
        """
        try:
            payload = self.builder.build_payload(self.locations, self.designated_end)
            result = await self.builder.submit(payload)
            itinerary = self.renderer.render(result, payload.locations, payload.designated_end)
        except SubmissionInProgress:
            raise
        except PlannerError as exc:
            logger.warning(f"Route submission failed: {exc.user_message}")
            self.error = exc.user_message
            return False

        self.itinerary = itinerary
        self.submitted_locations = payload.locations
        self.error = None
        return True

    def reset(self) -> None:
        self.locations = self.controller.initialize()
        self.designated_end = False
        self.itinerary = None
        self.submitted_locations = ()
        self.error = None
