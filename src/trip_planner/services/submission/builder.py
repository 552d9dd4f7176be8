"""Payload validation and single in-flight submission."""

from __future__ import annotations

import logging
import time
from typing import Sequence

from ...config import PlannerConfig
from ...errors import InsufficientLocations, SubmissionInProgress, TransportError
from ...models.domain import SubmissionPayload
from ...schemas.optimization import OptimizationResult
from .client import OptimizerClient

logger = logging.getLogger(__name__)


class SubmissionBuilder:
    """Turns the raw location list into a payload and sends it.

    ``loading`` is True exactly while a request is outstanding. A second
    ``submit`` during that window is rejected with SubmissionInProgress.
    """

    def __init__(self, client: OptimizerClient | None, config: PlannerConfig | None = None) -> None:
        self.client = client
        self.config = config or PlannerConfig()
        self.loading = False

    def build_payload(self, locations: Sequence[str], designated_end: bool) -> SubmissionPayload:
        cleaned = tuple(value.strip() for value in locations if value.strip())
        if len(cleaned) < 2:
            raise InsufficientLocations(found=len(cleaned))
        return SubmissionPayload(
            locations=cleaned,
            designated_end=designated_end and self.config.supports_designated_end,
        )

    async def submit(self, payload: SubmissionPayload) -> OptimizationResult:
        if self.loading:
            raise SubmissionInProgress()
        if self.client is None:
            raise TransportError("The route optimizer endpoint is not configured")

        self.loading = True
        start_time = time.perf_counter()
        try:
            logger.info(
                f"Submitting {len(payload.locations)} locations "
                f"({'open path' if payload.designated_end else 'loop'})"
            )
            result = await self.client.optimize(
                payload, include_designated_end=self.config.supports_designated_end
            )
        finally:
            self.loading = False

        logger.info(f"Optimizer answered in {time.perf_counter() - start_time:.2f}s")
        return result
