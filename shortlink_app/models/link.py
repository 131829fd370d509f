import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import Column, DateTime, Integer, String
from sqlalchemy.orm import relationship

from shortlink_app.database.connection import Base
from shortlink_app.utils.timeutils import as_utc, utcnow


def _new_link_id() -> str:
    return uuid.uuid4().hex


class Link(Base):
    """
    A short key (short_id, optionally an alias) mapped to a destination URL.

    When the caller supplies an alias it is stored in both alias and
    short_id, so the two lookup namespaces can never disagree about
    which link a key belongs to.
    """
    __tablename__ = "links"

    id = Column(String(32), primary_key=True, default=_new_link_id)
    # Note: unique=True automatically creates an index in SQLAlchemy
    short_id = Column(String(32), unique=True, nullable=False, index=True)
    original_url = Column(String, nullable=False)
    alias = Column(String(20), unique=True, nullable=True, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    expires_at = Column(DateTime(timezone=True), nullable=True)
    click_count = Column(Integer, nullable=False, default=0)

    clicks = relationship(
        "Click",
        back_populates="link",
        cascade="all, delete-orphan",
    )

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        """Lazy expiration: expired only once expires_at is strictly in the past"""
        if self.expires_at is None:
            return False
        return as_utc(self.expires_at) < (now or utcnow())

    def __repr__(self):
        return f"<Link {self.short_id} -> {self.original_url}>"
