"""HTTP client for the remote route optimizer."""

from __future__ import annotations

import asyncio
import logging

import httpx
from pydantic import ValidationError

from ...errors import MalformedResult, RequestTimedOut, ServerReportedError, TransportError
from ...models.domain import SubmissionPayload
from ...schemas.optimization import OptimizationRequest, OptimizationResult

DEFAULT_TIMEOUT_SECONDS = 30.0

logger = logging.getLogger(__name__)


def _server_error_message(response: httpx.Response) -> str | None:
    """Return the ``error`` field of a JSON body, if the server sent one."""
    try:
        data = response.json()
    except ValueError:
        return None
    if isinstance(data, dict) and data.get("error"):
        return str(data["error"])
    return None


class OptimizerClient:
    def __init__(
        self,
        endpoint: str | None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        max_retries: int = 0,
        backoff_seconds: float = 1.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if not endpoint:
            raise ValueError("Route optimizer endpoint is not configured.")
        self.endpoint = endpoint
        self.timeout = timeout
        self.max_retries = max_retries
        self.backoff_seconds = backoff_seconds
        self._transport = transport

    def retry_delay(self, attempt: int) -> float:
        """Exponential backoff shared by every retry path."""
        return self.backoff_seconds * (2 ** (attempt - 1))

    def _get_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout, connect=min(self.timeout, 10.0)),
            transport=self._transport,
        )

    async def optimize(self, payload: SubmissionPayload, include_designated_end: bool = True) -> OptimizationResult:
        """Send one optimization request and parse the answer.

        Raises ServerReportedError when the body carries an ``error`` field,
        RequestTimedOut / TransportError for network and decoding failures, and
        MalformedResult when expected fields are missing.
        """
        request = OptimizationRequest(
            locations=list(payload.locations),
            designated_end=payload.designated_end if include_designated_end else None,
        )
        data = await self._post(request.model_dump(exclude_none=True))

        if isinstance(data, dict) and data.get("error"):
            raise ServerReportedError(str(data["error"]))
        try:
            return OptimizationResult.model_validate(data)
        except ValidationError as exc:
            fields = ", ".join(".".join(str(part) for part in error["loc"]) or "body" for error in exc.errors())
            raise MalformedResult(f"missing or invalid fields ({fields})") from exc

    async def _post(self, body: dict):
        async with self._get_client() as client:
            attempt = 0
            while True:
                try:
                    response = await client.post(self.endpoint, json=body)
                    response.raise_for_status()
                    return response.json()
                except httpx.HTTPStatusError as exc:
                    message = _server_error_message(exc.response)
                    if message:
                        raise ServerReportedError(message) from exc
                    attempt += 1
                    if attempt > self.max_retries or exc.response.status_code < 500:
                        raise TransportError(
                            f"The route optimizer answered with HTTP {exc.response.status_code}"
                        ) from exc
                    wait_time = self.retry_delay(attempt)
                    logger.debug(f"Optimizer returned {exc.response.status_code}, retrying in {wait_time:.1f}s (attempt {attempt}/{self.max_retries})")
                    await asyncio.sleep(wait_time)
                except httpx.TimeoutException as exc:
                    attempt += 1
                    if attempt > self.max_retries:
                        logger.warning(f"Optimizer request timed out after {attempt} attempt(s): {exc}")
                        raise RequestTimedOut(self.timeout) from exc
                    wait_time = self.retry_delay(attempt)
                    logger.debug(f"Optimizer timeout, retrying in {wait_time:.1f}s (attempt {attempt}/{self.max_retries})")
                    await asyncio.sleep(wait_time)
                except httpx.HTTPError as exc:
                    attempt += 1
                    if attempt > self.max_retries:
                        raise TransportError(str(exc) or None) from exc
                    wait_time = self.retry_delay(attempt)
                    logger.debug(f"Optimizer network error, retrying in {wait_time:.1f}s (attempt {attempt}/{self.max_retries}): {exc}")
                    await asyncio.sleep(wait_time)
                except ValueError as exc:
                    raise TransportError("The route optimizer returned an unreadable response") from exc
