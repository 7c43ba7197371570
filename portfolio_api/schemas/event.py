from datetime import datetime
from enum import Enum
from typing import Annotated, Any, Dict, Literal, Optional, Union
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ..config import settings


class EventType(str, Enum):
    PAGE_VISIT = "PAGE_VISIT"
    TAPE_INSERTED = "TAPE_INSERTED"
    LAUNCH_CLICKED = "LAUNCH_CLICKED"
    ITEM_INSPECTED = "ITEM_INSPECTED"


class ItemType(str, Enum):
    POLAROID = "Polaroid"
    ENVELOPE = "Envelope"
    PCB = "PCB"
    STICKY_NOTE = "Sticky Note"


# Event types that refer to a project (a cassette)
PROJECT_EVENT_TYPES = (EventType.TAPE_INSERTED, EventType.LAUNCH_CLICKED)


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class _EventBase(CamelModel):
    # visitorId, userAgent, language, screenWidth, screenHeight, referrer, ...
    metadata: Dict[str, Any] = Field(default_factory=dict)


class PageVisitEvent(_EventBase):
    event_type: Literal["PAGE_VISIT"]


class TapeInsertedEvent(_EventBase):
    event_type: Literal["TAPE_INSERTED"]
    project_id: UUID


class LaunchClickedEvent(_EventBase):
    event_type: Literal["LAUNCH_CLICKED"]
    project_id: UUID


class ItemInspectedEvent(_EventBase):
    event_type: Literal["ITEM_INSPECTED"]
    item_type: ItemType


# One variant per event type; each carries only the fields its type needs
InteractionEvent = Annotated[
    Union[PageVisitEvent, TapeInsertedEvent, LaunchClickedEvent, ItemInspectedEvent],
    Field(discriminator="event_type"),
]


class InteractionEventRecord(CamelModel):
    """A persisted event as returned by the API"""
    id: UUID
    event_type: EventType
    timestamp: datetime
    project_id: Optional[UUID] = None
    # Resolved at read time; None when the project no longer exists
    project_name: Optional[str] = None
    item_type: Optional[ItemType] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)


class EventCreatedResponse(BaseModel):
    message: str
    data: InteractionEventRecord


class EventFilters(CamelModel):
    """Filters accepted by the raw event listing"""
    event_type: Optional[EventType] = None
    project_id: Optional[UUID] = None
    item_type: Optional[ItemType] = None
    limit: int = Field(settings.STATS_PAGE_SIZE, ge=1, le=1000)
    skip: int = Field(0, ge=0)
