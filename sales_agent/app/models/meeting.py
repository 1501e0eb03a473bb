"""Meeting table."""

from sqlalchemy import Column, DateTime, Integer, String, Text

from sales_agent.app.db.base_class import Base


class MeetingRow(Base):
    __tablename__ = "meetings"

    id = Column(String(64), primary_key=True)
    lead_id = Column(String(64), nullable=False, index=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    scheduled_at = Column(DateTime(timezone=True), nullable=False, index=True)
    duration = Column(Integer, nullable=False, default=30)
    location = Column(String, nullable=True)
    meeting_link = Column(String, nullable=True)
    status = Column(String(16), nullable=False, default="scheduled")
    outcome = Column(Text, nullable=True)
