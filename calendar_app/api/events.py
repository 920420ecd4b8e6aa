from fastapi import APIRouter, Depends, Request, status

from calendar_app.domain.schemas.event import EventCreate, EventOut, EventUpdate
from calendar_app.services.events.service import EventService

router = APIRouter(prefix="/api/events", tags=["events"])


def get_event_service(request: Request) -> EventService:
    return request.app.state.event_service


@router.get("", response_model=list[EventOut])
async def list_events(service: EventService = Depends(get_event_service)) -> list[EventOut]:
    return await service.list_events()


@router.get("/{event_id}", response_model=EventOut)
async def get_event(event_id: str, service: EventService = Depends(get_event_service)) -> EventOut:
    return await service.get_event(event_id)


@router.post("", response_model=EventOut, status_code=status.HTTP_201_CREATED)
async def create_event(payload: EventCreate, service: EventService = Depends(get_event_service)) -> EventOut:
    return await service.create_event(payload)


@router.put("/{event_id}", response_model=EventOut)
async def update_event(
    event_id: str,
    payload: EventUpdate,
    service: EventService = Depends(get_event_service),
) -> EventOut:
    return await service.update_event(event_id, payload)


@router.delete("/{event_id}")
async def delete_event(event_id: str, service: EventService = Depends(get_event_service)) -> dict[str, str]:
    return await service.delete_event(event_id)
