"""Storage contract shared by every backend.

Each backend persists five collections (leads, email templates, email logs,
meetings, follow-ups) and must answer queries identically:

* leads list by priority rank (high, medium, low) then newest first;
* lead search returns newest first;
* meetings and follow-ups list by ``scheduled_at`` ascending;
* email logs list by ``sent_at`` descending.

``update_*`` methods receive only the fields to change, keyed by attribute
name, and return the stored record afterwards (``None`` when the id is
unknown). Deletes are hard deletes and never cascade.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional

from sales_agent.app.schemas.email import EmailLog, EmailTemplate
from sales_agent.app.schemas.follow_up import FollowUp, FollowUpFilters
from sales_agent.app.schemas.lead import Lead, LeadFilters
from sales_agent.app.schemas.meeting import Meeting, MeetingFilters
from sales_agent.app.storage.seed import seed_default_templates


class SalesStore(ABC):
    backend_name: str = "abstract"

    def initialize(self) -> None:
        """Prepare the backing storage and seed default templates."""
        seed_default_templates(self)

    def close(self) -> None:
        pass

    # Leads
    @abstractmethod
    def create_lead(self, lead: Lead) -> Lead: ...

    @abstractmethod
    def get_lead(self, lead_id: str) -> Optional[Lead]: ...

    @abstractmethod
    def list_leads(self, filters: Optional[LeadFilters] = None) -> list[Lead]: ...

    @abstractmethod
    def update_lead(self, lead_id: str, changes: dict[str, Any]) -> Optional[Lead]: ...

    @abstractmethod
    def delete_lead(self, lead_id: str) -> bool: ...

    @abstractmethod
    def search_leads(self, text: str) -> list[Lead]: ...

    # Email templates
    @abstractmethod
    def create_template(self, template: EmailTemplate) -> EmailTemplate: ...

    @abstractmethod
    def get_template(self, template_id: str) -> Optional[EmailTemplate]: ...

    @abstractmethod
    def list_templates(self) -> list[EmailTemplate]: ...

    @abstractmethod
    def update_template(self, template_id: str, changes: dict[str, Any]) -> Optional[EmailTemplate]: ...

    @abstractmethod
    def delete_template(self, template_id: str) -> bool: ...

    def count_templates(self) -> int:
        return len(self.list_templates())

    # Email logs
    @abstractmethod
    def create_email_log(self, email: EmailLog) -> EmailLog: ...

    @abstractmethod
    def list_email_logs(self, lead_id: Optional[str] = None) -> list[EmailLog]: ...

    # Meetings
    @abstractmethod
    def create_meeting(self, meeting: Meeting) -> Meeting: ...

    @abstractmethod
    def get_meeting(self, meeting_id: str) -> Optional[Meeting]: ...

    @abstractmethod
    def list_meetings(self, filters: Optional[MeetingFilters] = None) -> list[Meeting]: ...

    @abstractmethod
    def update_meeting(self, meeting_id: str, changes: dict[str, Any]) -> Optional[Meeting]: ...

    @abstractmethod
    def delete_meeting(self, meeting_id: str) -> bool: ...

    # Follow-ups
    @abstractmethod
    def create_follow_up(self, follow_up: FollowUp) -> FollowUp: ...

    @abstractmethod
    def get_follow_up(self, follow_up_id: str) -> Optional[FollowUp]: ...

    @abstractmethod
    def list_follow_ups(self, filters: Optional[FollowUpFilters] = None) -> list[FollowUp]: ...

    @abstractmethod
    def update_follow_up(self, follow_up_id: str, changes: dict[str, Any]) -> Optional[FollowUp]: ...

    @abstractmethod
    def delete_follow_up(self, follow_up_id: str) -> bool: ...
