"""Planner form endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import PlainTextResponse

from ...errors import SubmissionInProgress
from ...schemas.planner import DesignatedEndUpdate, ItineraryModel, LocationUpdate, PlannerSnapshot
from ...services.outputs.itinerary_formatter import itinerary_to_csv, itinerary_to_json, itinerary_to_text
from ...services.session import PlannerSession

router = APIRouter(prefix="/planner", tags=["planner"])


def get_session(request: Request) -> PlannerSession:
    return request.app.state.planner_session


def _snapshot(session: PlannerSession) -> PlannerSnapshot:
    controller = session.controller
    return PlannerSnapshot(
        locations=session.locations,
        designated_end=session.designated_end,
        end_point=controller.end_point(session.locations, session.designated_end),
        valid_count=controller.valid_count(session.locations),
        count_status=controller.count_status(session.locations),
        max_locations=session.config.max_locations,
        can_add=controller.can_add(session.locations),
        can_remove=controller.can_remove(session.locations),
        supports_designated_end=session.config.supports_designated_end,
        loading=session.loading,
        state=session.state,
        error=session.error,
        itinerary=ItineraryModel(**itinerary_to_json(session.itinerary)) if session.itinerary else None,
    )


@router.get("", response_model=PlannerSnapshot, status_code=status.HTTP_200_OK)
async def get_planner(session: PlannerSession = Depends(get_session)) -> PlannerSnapshot:
    return _snapshot(session)


@router.put("/locations/{index}", response_model=PlannerSnapshot, status_code=status.HTTP_200_OK)
async def update_location(
    index: int, payload: LocationUpdate, session: PlannerSession = Depends(get_session)
) -> PlannerSnapshot:
    session.set_location(index, payload.value)
    return _snapshot(session)


@router.post("/locations", response_model=PlannerSnapshot, status_code=status.HTTP_200_OK)
async def add_location(session: PlannerSession = Depends(get_session)) -> PlannerSnapshot:
    if not session.add_location():
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=session.error)
    return _snapshot(session)


@router.delete("/locations/{index}", response_model=PlannerSnapshot, status_code=status.HTTP_200_OK)
async def remove_location(index: int, session: PlannerSession = Depends(get_session)) -> PlannerSnapshot:
    session.remove_location(index)
    return _snapshot(session)


@router.put("/designated-end", response_model=PlannerSnapshot, status_code=status.HTTP_200_OK)
async def set_designated_end(
    payload: DesignatedEndUpdate, session: PlannerSession = Depends(get_session)
) -> PlannerSnapshot:
    session.set_designated_end(payload.enabled)
    return _snapshot(session)


@router.post("/submit", response_model=PlannerSnapshot, status_code=status.HTTP_200_OK)
async def submit(session: PlannerSession = Depends(get_session)) -> PlannerSnapshot:
    """Send the current locations to the optimizer.

    Planner failures come back in the snapshot's ``error`` field; only a
    duplicate submission is rejected outright.
    """
    try:
        await session.submit()
    except SubmissionInProgress as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=exc.user_message) from exc
    except Exception as exc:
        logging.exception(f"Unexpected error while submitting route: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to calculate route: {str(exc)}",
        ) from exc
    return _snapshot(session)


@router.get("/itinerary.txt", response_class=PlainTextResponse, status_code=status.HTTP_200_OK)
async def export_text(session: PlannerSession = Depends(get_session)) -> str:
    if session.itinerary is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No route has been calculated yet")
    return itinerary_to_text(session.itinerary)


@router.get("/itinerary.csv", response_class=PlainTextResponse, status_code=status.HTTP_200_OK)
async def export_csv(session: PlannerSession = Depends(get_session)) -> PlainTextResponse:
    if session.itinerary is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No route has been calculated yet")
    return PlainTextResponse(itinerary_to_csv(session.itinerary), media_type="text/csv")


@router.post("/reset", response_model=PlannerSnapshot, status_code=status.HTTP_200_OK)
async def reset(session: PlannerSession = Depends(get_session)) -> PlannerSnapshot:
    session.reset()
    return _snapshot(session)
