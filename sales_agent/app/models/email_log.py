"""Email log table. lead_id and template_id are plain references, not foreign keys."""

from sqlalchemy import Column, DateTime, String, Text

from sales_agent.app.db.base_class import Base


class EmailLogRow(Base):
    __tablename__ = "email_logs"

    id = Column(String(64), primary_key=True)
    lead_id = Column(String(64), nullable=False, index=True)
    template_id = Column(String(64), nullable=True)
    subject = Column(String, nullable=False)
    body = Column(Text, nullable=False)
    sent_at = Column(DateTime(timezone=True), nullable=False)
    opened_at = Column(DateTime(timezone=True), nullable=True)
    clicked_at = Column(DateTime(timezone=True), nullable=True)
    status = Column(String(16), nullable=False, default="sent")
