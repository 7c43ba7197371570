from sqlalchemy import Column, Integer, String, DateTime, text
from sqlalchemy.dialects.postgresql import UUID

from .base import Base


class ProjectDB(Base):
    """
    A video project shown as a cassette in the VCR station.
    """
    __tablename__ = "projects"

    id = Column(UUID(as_uuid=True), primary_key=True, server_default=text("gen_random_uuid()"))
    name = Column(String(255), nullable=False)
    youtube_url = Column(String(500), nullable=False)
    display_order = Column(Integer, nullable=False, server_default=text("0"))
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=text("now()"))
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=text("now()"))
