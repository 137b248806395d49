from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import Column, DateTime, ForeignKey, String
from sqlalchemy.orm import relationship

from teamkeys.db.base import Base
from teamkeys.models.team import generate_uuid, utcnow


class ApiKey(Base):
    """
    ApiKey model for user-owned programmatic access keys.

    Only the sha256 hash of the secret is stored. The raw secret is attached
    as the transient ``value`` attribute on the instance returned at creation.
    """

    __tablename__ = "api_keys"

    id = Column(String, primary_key=True, default=generate_uuid)
    name = Column(String(255), nullable=False)
    user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    hash = Column(String(64), nullable=False, unique=True, index=True)
    last4 = Column(String(4), nullable=False)
    expires_at = Column(DateTime(timezone=True), nullable=True)
    last_active_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, index=True)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    # Relationships
    user = relationship("User", back_populates="api_keys", lazy="joined", innerjoin=True)

    # Not persisted
    value = None

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        if self.expires_at is None:
            return False
        now = now or datetime.now(timezone.utc)
        expires_at = self.expires_at
        # SQLite hands back naive datetimes
        if expires_at.tzinfo is None:
            expires_at = expires_at.replace(tzinfo=timezone.utc)
        return expires_at <= now
