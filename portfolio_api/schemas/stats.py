from typing import List
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from .event import CamelModel, InteractionEventRecord


class CountBucket(BaseModel):
    """One group of a grouped count, keyed the way the dashboard expects ("_id")"""
    model_config = ConfigDict(populate_by_name=True)

    key: str = Field(alias="_id")
    count: int


class ProjectPopularity(CamelModel):
    project_id: UUID
    project_name: str
    tape_inserted: int
    launch_clicked: int
    total: int


class VisitorStats(CamelModel):
    total_visits: int = 0
    # Distinct client-generated visitorIds: best-effort, trivially reset or spoofed
    unique_visitors: int = 0
    daily_visits: List[CountBucket] = Field(default_factory=list)


class StatsSummary(CamelModel):
    event_counts: List[CountBucket]
    project_popularity: List[ProjectPopularity]
    contact_item_stats: List[CountBucket]
    visitor_stats: VisitorStats


class StatsData(BaseModel):
    stats: List[InteractionEventRecord]
    summary: StatsSummary


class StatsResponse(BaseModel):
    message: str
    data: StatsData
