import logging
from typing import Any

from ..repositories.interaction_repository import InteractionRepository
from ..schemas.event import InteractionEventRecord
from .event_validation import validate_event

logger = logging.getLogger(__name__)


class EventService:
    def __init__(self, interaction_repo: InteractionRepository):
        self.interaction_repo = interaction_repo

    async def track_event(self, payload: Any) -> InteractionEventRecord:
        """
        Validate and store one interaction event.

        Raises EventValidationError before anything is written. The timestamp
        is always assigned by the database, never taken from the payload.
        """
        event = validate_event(payload)
        item_type = getattr(event, "item_type", None)

        row = await self.interaction_repo.create_event(
            event_type=event.event_type,
            project_id=getattr(event, "project_id", None),
            item_type=item_type.value if item_type else None,
            metadata=event.metadata,
        )
        logger.debug("Interaction event stored", extra={"event_type": event.event_type, "event_id": str(row["id"])})
        return InteractionEventRecord.model_validate(row)
