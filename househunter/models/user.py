import enum
import uuid

from sqlalchemy import Column, DateTime, String, Uuid
from sqlalchemy.sql import func

from househunter.db.base import Base


class UserRole(str, enum.Enum):
    SEEKER = "seeker"
    OWNER = "owner"


# =====================================================
# USERS
# =====================================================

class User(Base):
    __tablename__ = "users"

    id = Column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4
    )
    # stored lowercased, see services.credential_store.normalize_email
    email = Column(String(320), unique=True, nullable=False, index=True)
    full_name = Column(String)
    role = Column(String(20), nullable=False)
    phone_number = Column(String(32))
    password_hash = Column(String, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
