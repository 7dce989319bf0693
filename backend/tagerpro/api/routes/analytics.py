from typing import Any

from fastapi import APIRouter

from tagerpro import crud
from tagerpro.api.deps import SessionDep, storage_errors
from tagerpro.models import AnalyticsEventCreate, AnalyticsSummary, TrackResult

router = APIRouter()


@router.get("", response_model=AnalyticsSummary)
def read_analytics(session: SessionDep) -> Any:
    """Dashboard counters, conversion rate and the most recent leads."""
    with storage_errors(session, "fetch analytics"):
        return crud.get_analytics_summary(session=session)


@router.post("/track", response_model=TrackResult, status_code=201)
def track_event(*, session: SessionDep, event_in: AnalyticsEventCreate) -> Any:
    with storage_errors(session, "track event"):
        crud.track_event(session=session, event_in=event_in)
    return TrackResult()
