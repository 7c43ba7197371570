import logging

from ..repositories.site_config_repository import SiteConfigRepository
from ..schemas.site_config import DEFAULT_SITE_CONFIG, SiteConfigDetail, SiteConfigUpdate

logger = logging.getLogger(__name__)


def _detail(row) -> SiteConfigDetail:
    return SiteConfigDetail.model_validate({**row["content"], "updatedAt": row["updated_at"]})


class SiteConfigService:
    def __init__(self, site_config_repo: SiteConfigRepository):
        self.site_config_repo = site_config_repo

    async def get_config(self) -> SiteConfigDetail:
        row = await self.site_config_repo.get()
        if row is None:
            row = await self.site_config_repo.seed(DEFAULT_SITE_CONFIG.model_dump(by_alias=True))
            logger.info("Site config seeded with defaults")
        return _detail(row)

    async def update_config(self, data: SiteConfigUpdate) -> SiteConfigDetail:
        # Top-level keys sent by the client replace the stored ones wholesale
        changes = data.model_dump(by_alias=True, include=data.model_fields_set)
        row = await self.site_config_repo.merge(changes, DEFAULT_SITE_CONFIG.model_dump(by_alias=True))
        logger.info("Site config updated", extra={"keys": sorted(changes)})
        return _detail(row)
