"""Lead table."""

from sqlalchemy import Column, DateTime, Float, String, Text

from sales_agent.app.db.base_class import Base


class LeadRow(Base):
    __tablename__ = "leads"

    id = Column(String(64), primary_key=True)
    name = Column(String, nullable=False)
    email = Column(String, nullable=False)
    phone = Column(String, nullable=True)
    company = Column(String, nullable=False)
    title = Column(String, nullable=True)
    status = Column(String(32), nullable=False, default="new", index=True)
    source = Column(String, nullable=False)
    # JSON array text, see storage.codec
    notes = Column(Text, nullable=False, default="[]")
    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)
    last_contacted_at = Column(DateTime(timezone=True), nullable=True)
    estimated_value = Column(Float, nullable=True)
    priority = Column(String(16), nullable=False, default="medium")
    tags = Column(Text, nullable=False, default="[]")
