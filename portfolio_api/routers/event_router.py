from fastapi import APIRouter, Depends, Request, status

from ..config import settings
from ..dependencies import get_db_pool
from ..exceptions import EventValidationError
from ..limiter import limiter
from ..repositories.interaction_repository import InteractionRepository
from ..schemas.event import EventCreatedResponse
from ..services.event_service import EventService

router = APIRouter()


async def get_event_service(db=Depends(get_db_pool)) -> EventService:
    return EventService(InteractionRepository(db))


async def read_event_payload(request: Request):
    # Any JSON value is accepted here; validate_event decides what is an event
    try:
        return await request.json()
    except ValueError:
        raise EventValidationError("body", "Request body must be valid JSON")


@router.post("/api/stats", response_model=EventCreatedResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(settings.EVENTS_RATE_LIMIT)
async def track_event(
    request: Request,  # Required for limiter
    payload=Depends(read_event_payload),
    service: EventService = Depends(get_event_service)
):
    """
    Record one interaction event. Public: visitors are anonymous.
    """
    event = await service.track_event(payload)
    return {"message": "Interaction stat created successfully", "data": event}
