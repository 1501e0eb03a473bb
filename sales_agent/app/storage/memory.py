"""In-memory store. State lives for as long as the store object does."""

import threading
from typing import Any, Optional

from sales_agent.app.schemas.email import EmailLog, EmailTemplate
from sales_agent.app.schemas.follow_up import FollowUp, FollowUpFilters
from sales_agent.app.schemas.lead import Lead, LeadFilters
from sales_agent.app.schemas.meeting import Meeting, MeetingFilters
from sales_agent.app.storage import query
from sales_agent.app.storage.base import SalesStore


def _copy(record):
    return record.model_copy(deep=True) if record is not None else None


class MemoryStore(SalesStore):
    """Dict-per-collection store.

    Requests are dispatched on worker threads, so mutations, the `_changed`
    hook and collection scans all hold one re-entrant lock.
    """

    backend_name = "memory"

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self.leads: dict[str, Lead] = {}
        self.templates: dict[str, EmailTemplate] = {}
        self.email_logs: dict[str, EmailLog] = {}
        self.meetings: dict[str, Meeting] = {}
        self.follow_ups: dict[str, FollowUp] = {}

    def _changed(self) -> None:
        """Hook called after every mutation."""

    def _values(self, collection: dict) -> list:
        with self._lock:
            return list(collection.values())

    def _insert(self, collection: dict, record):
        with self._lock:
            collection[record.id] = _copy(record)
            self._changed()
        return _copy(record)

    def _update(self, collection: dict, record_id: str, changes: dict[str, Any]):
        with self._lock:
            current = collection.get(record_id)
            if current is None:
                return None
            updated = current.model_copy(update=changes, deep=True)
            collection[record_id] = updated
            self._changed()
        return _copy(updated)

    def _delete(self, collection: dict, record_id: str) -> bool:
        with self._lock:
            if collection.pop(record_id, None) is None:
                return False
            self._changed()
        return True

    # Leads
    def create_lead(self, lead: Lead) -> Lead:
        return self._insert(self.leads, lead)

    def get_lead(self, lead_id: str) -> Optional[Lead]:
        return _copy(self.leads.get(lead_id))

    def list_leads(self, filters: Optional[LeadFilters] = None) -> list[Lead]:
        matches = [_copy(lead) for lead in self._values(self.leads) if query.lead_filter(lead, filters)]
        return query.sort_leads(matches)

    def update_lead(self, lead_id: str, changes: dict[str, Any]) -> Optional[Lead]:
        return self._update(self.leads, lead_id, changes)

    def delete_lead(self, lead_id: str) -> bool:
        return self._delete(self.leads, lead_id)

    def search_leads(self, text: str) -> list[Lead]:
        matches = [_copy(lead) for lead in self._values(self.leads) if query.search_match(lead, text)]
        return query.newest_first(matches)

    # Email templates
    def create_template(self, template: EmailTemplate) -> EmailTemplate:
        return self._insert(self.templates, template)

    def get_template(self, template_id: str) -> Optional[EmailTemplate]:
        return _copy(self.templates.get(template_id))

    def list_templates(self) -> list[EmailTemplate]:
        return [_copy(t) for t in self._values(self.templates)]

    def update_template(self, template_id: str, changes: dict[str, Any]) -> Optional[EmailTemplate]:
        return self._update(self.templates, template_id, changes)

    def delete_template(self, template_id: str) -> bool:
        return self._delete(self.templates, template_id)

    def count_templates(self) -> int:
        return len(self.templates)

    # Email logs
    def create_email_log(self, email: EmailLog) -> EmailLog:
        return self._insert(self.email_logs, email)

    def list_email_logs(self, lead_id: Optional[str] = None) -> list[EmailLog]:
        logs = [_copy(e) for e in self._values(self.email_logs) if not lead_id or e.lead_id == lead_id]
        return query.emails_newest_first(logs)

    # Meetings
    def create_meeting(self, meeting: Meeting) -> Meeting:
        return self._insert(self.meetings, meeting)

    def get_meeting(self, meeting_id: str) -> Optional[Meeting]:
        return _copy(self.meetings.get(meeting_id))

    def list_meetings(self, filters: Optional[MeetingFilters] = None) -> list[Meeting]:
        matches = [_copy(m) for m in self._values(self.meetings) if query.meeting_filter(m, filters)]
        return query.by_schedule(matches)

    def update_meeting(self, meeting_id: str, changes: dict[str, Any]) -> Optional[Meeting]:
        return self._update(self.meetings, meeting_id, changes)

    def delete_meeting(self, meeting_id: str) -> bool:
        return self._delete(self.meetings, meeting_id)

    # Follow-ups
    def create_follow_up(self, follow_up: FollowUp) -> FollowUp:
        return self._insert(self.follow_ups, follow_up)

    def get_follow_up(self, follow_up_id: str) -> Optional[FollowUp]:
        return _copy(self.follow_ups.get(follow_up_id))

    def list_follow_ups(self, filters: Optional[FollowUpFilters] = None) -> list[FollowUp]:
        matches = [_copy(f) for f in self._values(self.follow_ups) if query.follow_up_filter(f, filters)]
        return query.by_schedule(matches)

    def update_follow_up(self, follow_up_id: str, changes: dict[str, Any]) -> Optional[FollowUp]:
        return self._update(self.follow_ups, follow_up_id, changes)

    def delete_follow_up(self, follow_up_id: str) -> bool:
        return self._delete(self.follow_ups, follow_up_id)
