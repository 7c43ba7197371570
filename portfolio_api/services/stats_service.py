from datetime import datetime, timedelta, timezone
from typing import List, Optional

from ..config import settings
from ..repositories.interaction_repository import InteractionRepository
from ..repositories.project_repository import ProjectRepository
from ..schemas.event import EventFilters, InteractionEventRecord
from ..schemas.stats import (
    CountBucket,
    ProjectPopularity,
    StatsData,
    StatsSummary,
    VisitorStats,
)

UNKNOWN_PROJECT = "Unknown"


def _buckets(rows) -> List[CountBucket]:
    return [CountBucket(_id=row["key"], count=row["count"]) for row in rows]


class StatsService:
    """
    Read-time aggregation over the interaction log.

    Nothing is cached or materialized: every call recomputes from raw events.
    Callers are expected to hand in repositories bound to one read-only
    transaction so the pieces of a summary describe the same snapshot.
    """

    def __init__(self, interaction_repo: InteractionRepository, project_repo: ProjectRepository):
        self.interaction_repo = interaction_repo
        self.project_repo = project_repo

    async def get_event_counts(self) -> List[CountBucket]:
        return _buckets(await self.interaction_repo.count_by_event_type())

    async def get_project_popularity(self) -> List[ProjectPopularity]:
        rows = await self.interaction_repo.get_project_popularity(settings.POPULAR_PROJECTS_LIMIT)
        names = await self.project_repo.get_names(row["project_id"] for row in rows)

        return [
            ProjectPopularity(
                project_id=row["project_id"],
                # Deleted projects keep their history
                project_name=names.get(row["project_id"], UNKNOWN_PROJECT),
                tape_inserted=row["tape_inserted"],
                launch_clicked=row["launch_clicked"],
                total=row["total"],
            )
            for row in rows
        ]

    async def get_contact_item_stats(self) -> List[CountBucket]:
        return _buckets(await self.interaction_repo.count_by_item_type())

    async def get_daily_visits(self, now: Optional[datetime] = None) -> List[CountBucket]:
        now = now or datetime.now(timezone.utc)
        since = now - timedelta(days=settings.DAILY_VISITS_WINDOW_DAYS)
        return _buckets(await self.interaction_repo.get_daily_visits(since))

    async def get_visitor_stats(self, now: Optional[datetime] = None) -> VisitorStats:
        totals = await self.interaction_repo.get_visitor_totals()
        return VisitorStats(
            total_visits=totals["total_visits"],
            unique_visitors=totals["unique_visitors"],
            daily_visits=await self.get_daily_visits(now),
        )

    async def list_events(self, filters: EventFilters) -> List[InteractionEventRecord]:
        rows = await self.interaction_repo.list_events(
            limit=filters.limit,
            offset=filters.skip,
            event_type=filters.event_type.value if filters.event_type else None,
            project_id=filters.project_id,
            item_type=filters.item_type.value if filters.item_type else None,
        )
        return [InteractionEventRecord.model_validate(row) for row in rows]

    async def get_summary(self, now: Optional[datetime] = None) -> StatsSummary:
        return StatsSummary(
            event_counts=await self.get_event_counts(),
            project_popularity=await self.get_project_popularity(),
            contact_item_stats=await self.get_contact_item_stats(),
            visitor_stats=await self.get_visitor_stats(now),
        )

    async def get_stats(self, filters: EventFilters, now: Optional[datetime] = None) -> StatsData:
        """Raw listing plus summary; any failure aborts the whole response."""
        return StatsData(
            stats=await self.list_events(filters),
            summary=await self.get_summary(now),
        )
