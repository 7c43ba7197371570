from sqlalchemy import CheckConstraint, Column, String, DateTime, text
from sqlalchemy.dialects.postgresql import UUID

from .base import Base


class AdminDB(Base):
    __tablename__ = "admins"
    __table_args__ = (
        CheckConstraint("role IN ('admin', 'superadmin')", name="ck_admin_role"),
    )

    id = Column(UUID(as_uuid=True), primary_key=True, server_default=text("gen_random_uuid()"))
    email = Column(String(320), unique=True, index=True, nullable=False)
    role = Column(String(20), nullable=False, server_default=text("'admin'"))
    hashed_password = Column(String, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=text("now()"))
