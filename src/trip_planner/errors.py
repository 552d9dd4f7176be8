"""Error kinds raised by the planner services.

Every error carries a ``user_message`` that is safe to show in the form. The
session layer catches :class:`PlannerError` and keeps the form editable.
"""

from __future__ import annotations


GENERIC_FAILURE_MESSAGE = "Something went wrong while calculating the route. Please try again."


class PlannerError(Exception):
    """Base class for recoverable planner failures."""

    default_message = GENERIC_FAILURE_MESSAGE

    def __init__(self, message: str | None = None) -> None:
        self.user_message = message or self.default_message
        super().__init__(self.user_message)


class InsufficientLocations(PlannerError):
    default_message = "Please enter at least 2 valid locations"

    def __init__(self, found: int, message: str | None = None) -> None:
        self.found = found
        super().__init__(message)


class LimitReached(PlannerError):
    def __init__(self, limit: int) -> None:
        self.limit = limit
        super().__init__(f"Maximum of {limit} locations reached")


class SubmissionInProgress(PlannerError):
    default_message = "A route is already being calculated"


class ServerReportedError(PlannerError):
    """The optimizer answered with an ``error`` field."""


class TransportError(PlannerError):
    """Network failure or an unreadable response body."""


class RequestTimedOut(TransportError):
    def __init__(self, timeout: float) -> None:
        self.timeout = timeout
        super().__init__(f"The route optimizer did not answer within {timeout:g} seconds")


class MalformedResult(PlannerError):
    """The optimizer answered, but the result cannot be rendered safely."""

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"Received an invalid route from the optimizer: {detail}")
