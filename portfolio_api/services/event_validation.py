"""
Validation of incoming interaction events.

Rules are checked in a fixed order and only the first failure is reported.
Once the rules pass, the payload is narrowed into the tagged variant for its
event type; fields that do not belong to that variant are dropped.
"""
import math
from typing import Any
from uuid import UUID

from pydantic import TypeAdapter, ValidationError

from ..exceptions import EventValidationError
from ..schemas.event import EventType, InteractionEvent, ItemType, PROJECT_EVENT_TYPES

VALID_EVENT_TYPES = [e.value for e in EventType]
VALID_ITEM_TYPES = [i.value for i in ItemType]

_event_adapter = TypeAdapter(InteractionEvent)
# The variants parse projectId with this same parser
_uuid_adapter = TypeAdapter(UUID)


def _is_valid_uuid(value: Any) -> bool:
    if not isinstance(value, str):
        return False
    try:
        _uuid_adapter.validate_python(value)
    except ValidationError:
        return False
    return True


def _is_storable(value: Any) -> bool:
    """False for values JSONB rejects: NaN/Infinity and NUL characters."""
    if isinstance(value, float):
        return math.isfinite(value)
    if isinstance(value, str):
        return "\x00" not in value
    if isinstance(value, dict):
        return all(_is_storable(k) and _is_storable(v) for k, v in value.items())
    if isinstance(value, list):
        return all(_is_storable(v) for v in value)
    return True


def validate_event(payload: Any) -> InteractionEvent:
    """
    Turn a raw request body into an InteractionEvent variant.

    A body that is not a JSON object carries no event type and is rejected
    as such. Raises EventValidationError naming the first offending field.
    """
    if not isinstance(payload, dict):
        payload = {}

    event_type = payload.get("eventType")
    project_id = payload.get("projectId")
    item_type = payload.get("itemType")
    metadata = payload.get("metadata")

    if not event_type:
        raise EventValidationError("eventType", "Event type is required")

    if event_type not in VALID_EVENT_TYPES:
        raise EventValidationError(
            "eventType", f"Event type must be one of: {', '.join(VALID_EVENT_TYPES)}"
        )

    if event_type in PROJECT_EVENT_TYPES and not project_id:
        raise EventValidationError("projectId", "Project ID is required for this event type")

    if event_type == EventType.ITEM_INSPECTED and not item_type:
        raise EventValidationError("itemType", "Item type is required for ITEM_INSPECTED events")

    # Format only; whether the project still exists is not checked here
    if project_id and not _is_valid_uuid(project_id):
        raise EventValidationError("projectId", "Invalid project ID format")

    if event_type == EventType.ITEM_INSPECTED and item_type not in VALID_ITEM_TYPES:
        raise EventValidationError(
            "itemType", f"Item type must be one of: {', '.join(VALID_ITEM_TYPES)}"
        )

    if metadata is not None and not isinstance(metadata, dict):
        raise EventValidationError("metadata", "Metadata must be an object")

    if metadata and not _is_storable(metadata):
        raise EventValidationError(
            "metadata", "Metadata must not contain NaN, Infinity or NUL characters"
        )

    candidate = {"eventType": event_type, "metadata": metadata or {}}
    if event_type in PROJECT_EVENT_TYPES:
        candidate["projectId"] = project_id
    if event_type == EventType.ITEM_INSPECTED:
        candidate["itemType"] = item_type

    try:
        return _event_adapter.validate_python(candidate)
    except ValidationError as exc:
        raise EventValidationError(errors=[
            {"field": ".".join(str(p) for p in err["loc"][1:]) or "body", "message": err["msg"]}
            for err in exc.errors()
        ]) from exc
