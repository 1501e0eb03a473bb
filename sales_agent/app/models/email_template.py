"""Email template table."""

from sqlalchemy import Column, String, Text

from sales_agent.app.db.base_class import Base


class EmailTemplateRow(Base):
    __tablename__ = "email_templates"

    id = Column(String(64), primary_key=True)
    name = Column(String, nullable=False)
    subject = Column(String, nullable=False)
    body = Column(Text, nullable=False)
    category = Column(String(32), nullable=False, default="custom")
    variables = Column(Text, nullable=False, default="[]")
