"""SQLAlchemy-backed store for SQLite files and PostgreSQL servers."""

import logging
from typing import Any, Optional

from sqlalchemy import case, func, select

from sales_agent.app.core.time import ensure_utc
from sales_agent.app.db.base import Base
from sales_agent.app.db.session import create_db_engine, create_session_factory, session_scope
from sales_agent.app.models.email_log import EmailLogRow
from sales_agent.app.models.email_template import EmailTemplateRow
from sales_agent.app.models.follow_up import FollowUpRow
from sales_agent.app.models.lead import LeadRow
from sales_agent.app.models.meeting import MeetingRow
from sales_agent.app.schemas.email import EmailLog, EmailTemplate
from sales_agent.app.schemas.follow_up import FollowUp, FollowUpFilters
from sales_agent.app.schemas.lead import Lead, LeadFilters
from sales_agent.app.schemas.meeting import Meeting, MeetingFilters
from sales_agent.app.storage import query
from sales_agent.app.storage.base import SalesStore
from sales_agent.app.storage.codec import encode_list

logger = logging.getLogger(__name__)

# Columns holding JSON array text.
LIST_COLUMNS = {"notes", "tags", "variables"}


def _column_values(changes: dict[str, Any]) -> dict[str, Any]:
    values = {}
    for key, value in changes.items():
        if key in LIST_COLUMNS:
            value = encode_list(value)
        elif hasattr(value, "tzinfo"):
            value = ensure_utc(value)
        values[key] = value
    return values


class SqlStore(SalesStore):
    """One table per collection; every call runs in its own short transaction."""

    def __init__(self, database_url: str) -> None:
        self.engine = create_db_engine(database_url)
        self.SessionLocal = create_session_factory(self.engine)
        dialect = self.engine.dialect.name
        self.backend_name = "postgres" if dialect.startswith("postgres") else dialect

    def initialize(self) -> None:
        with self.engine.begin() as conn:
            Base.metadata.create_all(bind=conn)
        logger.info("Tables ready on %s", self.engine.url.render_as_string(hide_password=True))
        super().initialize()

    def close(self) -> None:
        self.engine.dispose()

    # Generic row helpers
    def _insert(self, row_type, model, record):
        with session_scope(self.SessionLocal) as db:
            row = row_type(**_column_values(record.model_dump()))
            db.add(row)
            db.flush()
            return model.model_validate(row)

    def _get(self, row_type, model, record_id: str):
        with session_scope(self.SessionLocal) as db:
            row = db.get(row_type, record_id)
            return model.model_validate(row) if row is not None else None

    def _update(self, row_type, model, record_id: str, changes: dict[str, Any]):
        with session_scope(self.SessionLocal) as db:
            row = db.get(row_type, record_id)
            if row is None:
                return None
            for key, value in _column_values(changes).items():
                setattr(row, key, value)
            db.flush()
            return model.model_validate(row)

    def _delete(self, row_type, record_id: str) -> bool:
        with session_scope(self.SessionLocal) as db:
            row = db.get(row_type, record_id)
            if row is None:
                return False
            db.delete(row)
            return True

    def _select(self, model, statement) -> list:
        with session_scope(self.SessionLocal) as db:
            return [model.model_validate(row) for row in db.scalars(statement).all()]

    # Leads
    def create_lead(self, lead: Lead) -> Lead:
        return self._insert(LeadRow, Lead, lead)

    def get_lead(self, lead_id: str) -> Optional[Lead]:
        return self._get(LeadRow, Lead, lead_id)

    def list_leads(self, filters: Optional[LeadFilters] = None) -> list[Lead]:
        rank = case(query.PRIORITY_RANK, value=LeadRow.priority, else_=query.LOWEST_PRIORITY_RANK)
        stmt = select(LeadRow).order_by(rank, LeadRow.created_at.desc())
        if filters is not None:
            if filters.status:
                stmt = stmt.where(LeadRow.status == filters.status)
            if filters.priority:
                stmt = stmt.where(LeadRow.priority == filters.priority)
            if filters.source:
                stmt = stmt.where(LeadRow.source == filters.source)
        leads = self._select(Lead, stmt)
        if filters is not None and filters.tag:
            # tag membership needs the decoded list
            leads = [lead for lead in leads if filters.tag in lead.tags]
        return leads

    def update_lead(self, lead_id: str, changes: dict[str, Any]) -> Optional[Lead]:
        return self._update(LeadRow, Lead, lead_id, changes)

    def delete_lead(self, lead_id: str) -> bool:
        return self._delete(LeadRow, lead_id)

    def search_leads(self, text: str) -> list[Lead]:
        # matched in Python: SQLite LIKE only folds ASCII case
        stmt = select(LeadRow).order_by(LeadRow.created_at.desc())
        return [lead for lead in self._select(Lead, stmt) if query.search_match(lead, text)]

    # Email templates
    def create_template(self, template: EmailTemplate) -> EmailTemplate:
        return self._insert(EmailTemplateRow, EmailTemplate, template)

    def get_template(self, template_id: str) -> Optional[EmailTemplate]:
        return self._get(EmailTemplateRow, EmailTemplate, template_id)

    def list_templates(self) -> list[EmailTemplate]:
        return self._select(EmailTemplate, select(EmailTemplateRow).order_by(EmailTemplateRow.id))

    def update_template(self, template_id: str, changes: dict[str, Any]) -> Optional[EmailTemplate]:
        return self._update(EmailTemplateRow, EmailTemplate, template_id, changes)

    def delete_template(self, template_id: str) -> bool:
        return self._delete(EmailTemplateRow, template_id)

    def count_templates(self) -> int:
        with session_scope(self.SessionLocal) as db:
            return db.scalar(select(func.count()).select_from(EmailTemplateRow)) or 0

    # Email logs
    def create_email_log(self, email: EmailLog) -> EmailLog:
        return self._insert(EmailLogRow, EmailLog, email)

    def list_email_logs(self, lead_id: Optional[str] = None) -> list[EmailLog]:
        stmt = select(EmailLogRow).order_by(EmailLogRow.sent_at.desc())
        if lead_id:
            stmt = stmt.where(EmailLogRow.lead_id == lead_id)
        return self._select(EmailLog, stmt)

    # Meetings
    def create_meeting(self, meeting: Meeting) -> Meeting:
        return self._insert(MeetingRow, Meeting, meeting)

    def get_meeting(self, meeting_id: str) -> Optional[Meeting]:
        return self._get(MeetingRow, Meeting, meeting_id)

    def list_meetings(self, filters: Optional[MeetingFilters] = None) -> list[Meeting]:
        stmt = select(MeetingRow).order_by(MeetingRow.scheduled_at.asc())
        if filters is not None:
            if filters.lead_id:
                stmt = stmt.where(MeetingRow.lead_id == filters.lead_id)
            if filters.status:
                stmt = stmt.where(MeetingRow.status == filters.status)
            if filters.from_date:
                stmt = stmt.where(MeetingRow.scheduled_at >= ensure_utc(filters.from_date))
            if filters.to_date:
                stmt = stmt.where(MeetingRow.scheduled_at <= ensure_utc(filters.to_date))
        return self._select(Meeting, stmt)

    def update_meeting(self, meeting_id: str, changes: dict[str, Any]) -> Optional[Meeting]:
        return self._update(MeetingRow, Meeting, meeting_id, changes)

    def delete_meeting(self, meeting_id: str) -> bool:
        return self._delete(MeetingRow, meeting_id)

    # Follow-ups
    def create_follow_up(self, follow_up: FollowUp) -> FollowUp:
        return self._insert(FollowUpRow, FollowUp, follow_up)

    def get_follow_up(self, follow_up_id: str) -> Optional[FollowUp]:
        return self._get(FollowUpRow, FollowUp, follow_up_id)

    def list_follow_ups(self, filters: Optional[FollowUpFilters] = None) -> list[FollowUp]:
        stmt = select(FollowUpRow).order_by(FollowUpRow.scheduled_at.asc())
        if filters is not None:
            if filters.lead_id:
                stmt = stmt.where(FollowUpRow.lead_id == filters.lead_id)
            if filters.completed is not None:
                stmt = stmt.where(FollowUpRow.completed == filters.completed)
            if filters.from_date:
                stmt = stmt.where(FollowUpRow.scheduled_at >= ensure_utc(filters.from_date))
        return self._select(FollowUp, stmt)

    def update_follow_up(self, follow_up_id: str, changes: dict[str, Any]) -> Optional[FollowUp]:
        return self._update(FollowUpRow, FollowUp, follow_up_id, changes)

    def delete_follow_up(self, follow_up_id: str) -> bool:
        return self._delete(FollowUpRow, follow_up_id)
