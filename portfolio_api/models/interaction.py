from sqlalchemy import CheckConstraint, Column, DateTime, Index, String, text
from sqlalchemy.dialects.postgresql import JSONB, UUID

from .base import Base

EVENT_TYPES = ("PAGE_VISIT", "TAPE_INSERTED", "LAUNCH_CLICKED", "ITEM_INSPECTED")
PROJECT_EVENT_TYPES = ("TAPE_INSERTED", "LAUNCH_CLICKED")
ITEM_TYPES = ("Polaroid", "Envelope", "PCB", "Sticky Note")


def _sql_list(values):
    return ", ".join(f"'{v}'" for v in values)


class InteractionStatDB(Base):
    """
    Append-only interaction log. Rows are inserted once and never updated.

    project_id is not a foreign key: rows outlive the project they point at,
    and aggregation labels those rows "Unknown".
    """
    __tablename__ = "interaction_stats"
    __table_args__ = (
        CheckConstraint(f"event_type IN ({_sql_list(EVENT_TYPES)})", name="ck_interaction_event_type"),
        CheckConstraint(f"item_type IS NULL OR item_type IN ({_sql_list(ITEM_TYPES)})", name="ck_interaction_item_type"),
        CheckConstraint(
            f"(event_type IN ({_sql_list(PROJECT_EVENT_TYPES)})) = (project_id IS NOT NULL)",
            name="ck_interaction_project_id",
        ),
        CheckConstraint(
            "(event_type = 'ITEM_INSPECTED') = (item_type IS NOT NULL)",
            name="ck_interaction_item_required",
        ),
        Index("ix_interaction_event_type_timestamp", "event_type", "timestamp"),
        Index("ix_interaction_project_id", "project_id"),
        Index("ix_interaction_item_type", "item_type"),
    )

    id = Column(UUID(as_uuid=True), primary_key=True, server_default=text("gen_random_uuid()"))
    event_type = Column(String(32), nullable=False)
    timestamp = Column(DateTime(timezone=True), nullable=False, server_default=text("now()"))
    project_id = Column(UUID(as_uuid=True), nullable=True)
    item_type = Column(String(32), nullable=True)
    # "metadata" is reserved on declarative classes
    metadata_ = Column("metadata", JSONB, nullable=False, server_default=text("'{}'::jsonb"))
