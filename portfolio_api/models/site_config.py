from sqlalchemy import CheckConstraint, Column, DateTime, Integer, text
from sqlalchemy.dialects.postgresql import JSONB

from .base import Base

SITE_CONFIG_ID = 1


class SiteConfigDB(Base):
    """
    Single-row table. The fixed primary key makes a second row impossible.
    """
    __tablename__ = "site_config"
    __table_args__ = (
        CheckConstraint(f"id = {SITE_CONFIG_ID}", name="ck_site_config_singleton"),
    )

    id = Column(Integer, primary_key=True, autoincrement=False)
    content = Column(JSONB, nullable=False, server_default=text("'{}'::jsonb"))
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=text("now()"))
