from sqlalchemy import Column, DateTime, ForeignKey, Index, Integer, String
from sqlalchemy.orm import relationship

from shortlink_app.database.connection import Base
from shortlink_app.utils.timeutils import utcnow

UNKNOWN_IP = "unknown"


class Click(Base):
    """One recorded redirect of a Link. Never updated after insert."""
    __tablename__ = "clicks"

    id = Column(Integer, primary_key=True, autoincrement=True)
    link_id = Column(String(32), ForeignKey("links.id", ondelete="CASCADE"), nullable=False)
    ip_address = Column(String(45), nullable=False, default=UNKNOWN_IP)  # IPv4 or IPv6
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    link = relationship("Link", back_populates="clicks")

    # Serves "most recent clicks of a link" lookups
    __table_args__ = (
        Index("ix_clicks_link_id_created_at", "link_id", "created_at"),
    )

    def __repr__(self):
        return f"<Click {self.id} for link {self.link_id}>"
