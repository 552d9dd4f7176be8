import httpx
import pytest

from trip_planner.services.submission.client import OptimizerClient

OPTIMIZER_URL = "http://optimizer.test/optimize"


@pytest.fixture
def make_client():
    def _make(handler, **kwargs) -> OptimizerClient:
        kwargs.setdefault("backoff_seconds", 0.0)
        return OptimizerClient(OPTIMIZER_URL, transport=httpx.MockTransport(handler), **kwargs)

    return _make
