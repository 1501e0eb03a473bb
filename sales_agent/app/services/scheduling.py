"""Meetings and follow-up tasks attached to leads."""

import logging

from sales_agent.app.core.errors import NotFoundError
from sales_agent.app.core.ids import new_id
from sales_agent.app.core.time import utc_now
from sales_agent.app.schemas.follow_up import (
    FollowUp,
    FollowUpCreate,
    FollowUpFilters,
    FollowUpIdArgs,
    UpdateFollowUpArgs,
)
from sales_agent.app.schemas.meeting import (
    Meeting,
    MeetingFilters,
    MeetingIdArgs,
    ScheduleMeetingArgs,
    UpdateMeetingArgs,
)
from sales_agent.app.services.leads import touch_lead
from sales_agent.app.storage.base import SalesStore

logger = logging.getLogger(__name__)


def _get_meeting_or_raise(store: SalesStore, meeting_id: str) -> Meeting:
    meeting = store.get_meeting(meeting_id)
    if meeting is None:
        raise NotFoundError("Meeting")
    return meeting


def _get_follow_up_or_raise(store: SalesStore, follow_up_id: str) -> FollowUp:
    follow_up = store.get_follow_up(follow_up_id)
    if follow_up is None:
        raise NotFoundError("Follow-up")
    return follow_up


def _completion_changes(current: FollowUp, completed: bool) -> dict:
    """completed_at is stamped on false->true and cleared on true->false."""
    if completed == current.completed:
        return {}
    if completed:
        return {"completed": True, "completed_at": current.completed_at or utc_now()}
    return {"completed": False, "completed_at": None}


# Meetings
def schedule_meeting(store: SalesStore, args: ScheduleMeetingArgs) -> dict:
    meeting = Meeting(id=new_id(), status="scheduled", **args.model_dump(exclude={"create_follow_up"}))
    store.create_meeting(meeting)

    if args.create_follow_up:
        store.create_follow_up(
            FollowUp(
                id=new_id(),
                lead_id=meeting.lead_id,
                type="task",
                scheduled_at=meeting.scheduled_at,
                description=f"Meeting: {meeting.title}",
                completed=False,
            )
        )

    touch_lead(store, meeting.lead_id, utc_now())
    logger.info("Scheduled meeting %s for lead %s", meeting.id, meeting.lead_id)
    return {"success": True, "message": "Meeting scheduled successfully", "meeting": meeting.to_wire()}


def update_meeting(store: SalesStore, args: UpdateMeetingArgs) -> dict:
    _get_meeting_or_raise(store, args.meeting_id)
    updated = store.update_meeting(args.meeting_id, args.updates.model_dump(exclude_unset=True))
    return {"success": True, "message": "Meeting updated successfully", "meeting": updated.to_wire()}


def delete_meeting(store: SalesStore, args: MeetingIdArgs) -> dict:
    _get_meeting_or_raise(store, args.meeting_id)
    store.delete_meeting(args.meeting_id)
    return {"success": True, "message": "Meeting deleted successfully"}


def list_meetings(store: SalesStore, args: MeetingFilters) -> dict:
    meetings = store.list_meetings(args)
    return {"success": True, "count": len(meetings), "meetings": [m.to_wire() for m in meetings]}


# Follow-ups
def create_follow_up(store: SalesStore, args: FollowUpCreate) -> dict:
    follow_up = FollowUp(id=new_id(), completed=False, **args.model_dump())
    store.create_follow_up(follow_up)
    return {"success": True, "message": "Follow-up created successfully", "followUp": follow_up.to_wire()}


def get_follow_up(store: SalesStore, args: FollowUpIdArgs) -> dict:
    follow_up = _get_follow_up_or_raise(store, args.follow_up_id)
    return {"success": True, "followUp": follow_up.to_wire()}


def update_follow_up(store: SalesStore, args: UpdateFollowUpArgs) -> dict:
    current = _get_follow_up_or_raise(store, args.follow_up_id)
    changes = args.updates.model_dump(exclude_unset=True)
    if "completed" in changes:
        changes.update(_completion_changes(current, changes.pop("completed")))
    updated = store.update_follow_up(args.follow_up_id, changes)
    return {"success": True, "message": "Follow-up updated successfully", "followUp": updated.to_wire()}


def delete_follow_up(store: SalesStore, args: FollowUpIdArgs) -> dict:
    _get_follow_up_or_raise(store, args.follow_up_id)
    store.delete_follow_up(args.follow_up_id)
    return {"success": True, "message": "Follow-up deleted successfully"}


def complete_follow_up(store: SalesStore, args: FollowUpIdArgs) -> dict:
    current = _get_follow_up_or_raise(store, args.follow_up_id)
    updated = store.update_follow_up(args.follow_up_id, _completion_changes(current, True)) or current
    return {"success": True, "message": "Follow-up marked as complete", "followUp": updated.to_wire()}


def get_follow_ups(store: SalesStore, args: FollowUpFilters) -> dict:
    follow_ups = store.list_follow_ups(args)
    return {"success": True, "count": len(follow_ups), "followUps": [f.to_wire() for f in follow_ups]}
