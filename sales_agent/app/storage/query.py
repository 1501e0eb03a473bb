"""Filtering and ordering rules shared by all storage backends.

The in-memory and JSON backends evaluate these directly; the SQL backend
pushes the equivalent clauses into the database and reuses the predicates
where SQL cannot express them exactly (tag membership, search over tags).
"""

from datetime import datetime
from typing import Optional

from sales_agent.app.core.time import ensure_utc
from sales_agent.app.schemas.email import EmailLog
from sales_agent.app.schemas.follow_up import FollowUp, FollowUpFilters
from sales_agent.app.schemas.lead import Lead, LeadFilters
from sales_agent.app.schemas.meeting import Meeting, MeetingFilters

PRIORITY_RANK = {"high": 0, "medium": 1, "low": 2}
LOWEST_PRIORITY_RANK = 2


def priority_rank(priority: str) -> int:
    return PRIORITY_RANK.get(priority, LOWEST_PRIORITY_RANK)


def _ts(value: datetime) -> float:
    return ensure_utc(value).timestamp()


def lead_filter(lead: Lead, filters: Optional[LeadFilters]) -> bool:
    if filters is None:
        return True
    if filters.status and lead.status != filters.status:
        return False
    if filters.priority and lead.priority != filters.priority:
        return False
    if filters.source and lead.source != filters.source:
        return False
    if filters.tag and filters.tag not in lead.tags:
        return False
    return True


def sort_leads(leads: list[Lead]) -> list[Lead]:
    """Priority rank ascending, then newest first."""
    return sorted(leads, key=lambda lead: (priority_rank(lead.priority), -_ts(lead.created_at)))


def search_match(lead: Lead, query: str) -> bool:
    needle = query.lower()
    if needle in lead.name.lower() or needle in lead.company.lower() or needle in lead.email.lower():
        return True
    return any(needle in tag.lower() for tag in lead.tags)


def newest_first(leads: list[Lead]) -> list[Lead]:
    return sorted(leads, key=lambda lead: -_ts(lead.created_at))


def meeting_filter(meeting: Meeting, filters: Optional[MeetingFilters]) -> bool:
    if filters is None:
        return True
    if filters.lead_id and meeting.lead_id != filters.lead_id:
        return False
    if filters.status and meeting.status != filters.status:
        return False
    if filters.from_date and meeting.scheduled_at < filters.from_date:
        return False
    if filters.to_date and meeting.scheduled_at > filters.to_date:
        return False
    return True


def follow_up_filter(follow_up: FollowUp, filters: Optional[FollowUpFilters]) -> bool:
    if filters is None:
        return True
    if filters.lead_id and follow_up.lead_id != filters.lead_id:
        return False
    if filters.completed is not None and follow_up.completed != filters.completed:
        return False
    if filters.from_date and follow_up.scheduled_at < filters.from_date:
        return False
    return True


def by_schedule(items: list) -> list:
    """Meetings and follow-ups: soonest first."""
    return sorted(items, key=lambda item: _ts(item.scheduled_at))


def emails_newest_first(emails: list[EmailLog]) -> list[EmailLog]:
    return sorted(emails, key=lambda email: -_ts(email.sent_at))
