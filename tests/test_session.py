import asyncio

import httpx
import pytest

from trip_planner.config import PlannerConfig
from trip_planner.errors import SubmissionInProgress
from trip_planner.models.domain import SessionState, StepKind
from trip_planner.services.session import PlannerSession

MATRIX = [
    [0, 600, 1200],
    [600, 0, 300],
    [1200, 300, 0],
]


def _fill(session: PlannerSession, *names: str) -> None:
    while len(session.locations) < len(names):
        session.add_location()
    for index, name in enumerate(names):
        session.set_location(index, name)


def test_new_session_starts_editing_with_two_slots():
    session = PlannerSession(client=None)

    assert session.locations == ["", ""]
    assert session.state is SessionState.EDITING
    assert session.itinerary is None


def test_successful_submit_renders_itinerary(make_client):
    session = PlannerSession(
        make_client(lambda request: httpx.Response(
            200, json={"optimal_route": [0, 2, 1], "distance_matrix": MATRIX, "total_time": 2100}
        ))
    )
    _fill(session, "A", "B", "C")

    assert asyncio.run(session.submit()) is True
    assert session.error is None
    assert session.submitted_locations == ("A", "B", "C")
    assert [step.location for step in session.itinerary.steps] == ["A", "C", "B", "A"]
    assert session.state is SessionState.EDITING


def test_indices_refer_to_filtered_locations(make_client):
    session = PlannerSession(
        make_client(lambda request: httpx.Response(
            200, json={"optimal_route": [0, 1, 2], "distance_matrix": MATRIX, "total_time": 1500}
        ))
    )
    _fill(session, "A", "", "B", "  ", "C")
    session.set_designated_end(True)

    asyncio.run(session.submit())

    assert [step.location for step in session.itinerary.steps] == ["A", "B", "C"]
    assert session.itinerary.steps[-1].kind is StepKind.END


def test_insufficient_locations_sends_no_request(make_client):
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(200, json={})

    session = PlannerSession(make_client(handler))
    session.set_location(0, "Paris")

    assert asyncio.run(session.submit()) is False
    assert session.error == "Please enter at least 2 valid locations"
    assert calls == []


def test_server_error_keeps_previous_itinerary(make_client):
    responses = iter([
        httpx.Response(200, json={"optimal_route": [0, 1], "distance_matrix": MATRIX, "total_time": 1200}),
        httpx.Response(200, json={"error": "Could not geocode Atlantis"}),
    ])
    session = PlannerSession(make_client(lambda request: next(responses)))
    _fill(session, "A", "B")
    asyncio.run(session.submit())
    previous = session.itinerary

    session.set_location(1, "Atlantis")
    assert asyncio.run(session.submit()) is False

    assert session.itinerary is previous
    assert session.error == "Could not geocode Atlantis"
    assert session.loading is False


def test_malformed_result_is_surfaced_not_rendered(make_client):
    session = PlannerSession(
        make_client(lambda request: httpx.Response(
            200, json={"optimal_route": [0, 5], "distance_matrix": MATRIX, "total_time": 1200}
        ))
    )
    _fill(session, "A", "B")

    assert asyncio.run(session.submit()) is False
    assert session.itinerary is None
    assert session.error.startswith("Received an invalid route")


def test_add_past_limit_surfaces_message():
    session = PlannerSession(client=None, config=PlannerConfig(max_locations=3, warning_threshold=2))

    assert session.add_location() is True
    assert session.add_location() is False
    assert len(session.locations) == 3
    assert session.error == "Maximum of 3 locations reached"


def test_designated_end_ignored_when_unsupported():
    session = PlannerSession(client=None, config=PlannerConfig(supports_designated_end=False))
    session.set_designated_end(True)

    assert session.designated_end is False


def test_reset_clears_everything():
    session = PlannerSession(client=None)
    _fill(session, "A", "B", "C")
    session.set_designated_end(True)
    session.error = "boom"

    session.reset()

    assert session.locations == ["", ""]
    assert session.designated_end is False
    assert session.error is None


@pytest.mark.parametrize(
    "body",
    [
        b'{"optimal_route": [0, 1], "distance_matrix": [[0, NaN], [600, 0]], "total_time": 600}',
        b'{"optimal_route": [0, 1], "distance_matrix": [[0, 600], [600, 0]], "total_time": Infinity}',
        b'{"optimal_route": [0, 1], "distance_matrix": [[0, 600], [600, 0]], "total_time": NaN}',
    ],
)
def test_non_finite_numbers_are_surfaced_not_rendered(make_client, body):
    session = PlannerSession(make_client(lambda request: httpx.Response(200, content=body)))
    _fill(session, "A", "B")

    assert asyncio.run(session.submit()) is False
    assert session.itinerary is None
    assert session.error.startswith("Received an invalid route")
    assert session.state is SessionState.EDITING


def test_duplicate_submit_does_not_disturb_the_pending_one(make_client):
    calls = []

    async def scenario():
        release = asyncio.Event()

        async def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            await release.wait()
            return httpx.Response(
                200, json={"optimal_route": [0, 2, 1], "distance_matrix": MATRIX, "total_time": 2100}
            )

        session = PlannerSession(make_client(handler))
        _fill(session, "A", "B", "C")
        first = asyncio.create_task(session.submit())
        while not calls:
            await asyncio.sleep(0)

        assert session.state is SessionState.SUBMITTING
        with pytest.raises(SubmissionInProgress):
            await session.submit()
        assert session.error is None
        assert session.itinerary is None

        release.set()
        assert await first is True
        return session

    session = asyncio.run(scenario())

    assert len(calls) == 1
    assert session.state is SessionState.EDITING
    assert [step.location for step in session.itinerary.steps] == ["A", "C", "B", "A"]


def test_limit_message_clears_after_remove():
    session = PlannerSession(client=None, config=PlannerConfig(max_locations=3, warning_threshold=2))
    session.add_location()
    session.add_location()
    assert session.error == "Maximum of 3 locations reached"

    session.remove_location(2)

    assert session.error is None
    assert session.add_location() is True
    assert session.error is None


def test_remove_keeps_submission_error():
    session = PlannerSession(client=None)
    _fill(session, "A", "B", "C")
    session.error = "Could not geocode Atlantis"

    session.remove_location(2)

    assert session.error == "Could not geocode Atlantis"
