"""Follow-up table."""

from sqlalchemy import Boolean, Column, DateTime, String, Text

from sales_agent.app.db.base_class import Base


class FollowUpRow(Base):
    __tablename__ = "follow_ups"

    id = Column(String(64), primary_key=True)
    lead_id = Column(String(64), nullable=False, index=True)
    type = Column(String(16), nullable=False, default="task")
    scheduled_at = Column(DateTime(timezone=True), nullable=False, index=True)
    description = Column(Text, nullable=False)
    completed = Column(Boolean, nullable=False, default=False)
    completed_at = Column(DateTime(timezone=True), nullable=True)
