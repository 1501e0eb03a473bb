from datetime import timedelta

import pytest

from sales_agent.app.core.time import format_timestamp, parse_timestamp, utc_now
from sales_agent.app.services.tools import dispatch
from sales_agent.app.storage.memory import MemoryStore


@pytest.fixture(autouse=True)
def store():
    store = MemoryStore()
    store.initialize()
    yield store


def create_lead(store) -> str:
    result = dispatch(
        store,
        "create_lead",
        {"name": "Ada Lovelace", "email": "ada@x.com", "company": "Analytical Engines", "source": "Referral"},
    )
    return result["lead"]["id"]


def in_days(days: float) -> str:
    return format_timestamp(utc_now() + timedelta(days=days))


def test_schedule_meeting_with_follow_up(store):
    lead_id = create_lead(store)
    before = utc_now()

    result = dispatch(
        store,
        "schedule_meeting",
        {"leadId": lead_id, "title": "Demo", "scheduledAt": "2030-01-15T14:00:00Z", "createFollowUp": True},
    )
    assert result["success"] is True
    meeting = result["meeting"]
    assert meeting["duration"] == 30
    assert meeting["status"] == "scheduled"

    follow_ups = dispatch(store, "get_follow_ups", {"leadId": lead_id})["followUps"]
    assert len(follow_ups) == 1
    assert follow_ups[0]["type"] == "task"
    assert "Demo" in follow_ups[0]["description"]
    assert follow_ups[0]["completed"] is False
    assert parse_timestamp(follow_ups[0]["scheduledAt"]) == parse_timestamp(meeting["scheduledAt"])

    lead = dispatch(store, "get_lead", {"leadId": lead_id})["lead"]
    assert parse_timestamp(lead["lastContactedAt"]) >= before


def test_schedule_meeting_without_follow_up(store):
    lead_id = create_lead(store)
    dispatch(store, "schedule_meeting", {"leadId": lead_id, "title": "Call", "scheduledAt": in_days(1), "duration": 45})
    assert dispatch(store, "get_follow_ups", {})["count"] == 0
    assert dispatch(store, "list_meetings", {"leadId": lead_id})["meetings"][0]["duration"] == 45


def test_schedule_meeting_validates_arguments(store):
    assert dispatch(store, "schedule_meeting", {"leadId": "l1", "title": "x"}) == {
        "success": False,
        "error": "Missing required field: scheduledAt",
    }
    result = dispatch(store, "schedule_meeting", {"leadId": "l1", "title": "x", "scheduledAt": "soon"})
    assert result["success"] is False
    assert result["error"].startswith("Invalid value for 'scheduledAt'")


def test_list_meetings_filters_and_order(store):
    lead_id = create_lead(store)
    for title, when in [("Later", "2030-03-01T10:00:00Z"), ("Sooner", "2030-01-01T10:00:00Z"), ("Mid", "2030-02-01")]:
        dispatch(store, "schedule_meeting", {"leadId": lead_id, "title": title, "scheduledAt": when})

    listed = dispatch(store, "list_meetings", {})
    assert [m["title"] for m in listed["meetings"]] == ["Sooner", "Mid", "Later"]

    window = dispatch(store, "list_meetings", {"fromDate": "2030-01-15", "toDate": "2030-02-15"})
    assert [m["title"] for m in window["meetings"]] == ["Mid"]


def test_update_and_delete_meeting(store):
    lead_id = create_lead(store)
    meeting_id = dispatch(
        store, "schedule_meeting", {"leadId": lead_id, "title": "Demo", "scheduledAt": in_days(2)}
    )["meeting"]["id"]

    result = dispatch(
        store,
        "update_meeting",
        {"meetingId": meeting_id, "updates": {"status": "completed", "outcome": "Signed"}},
    )
    assert result["meeting"]["status"] == "completed"
    assert result["meeting"]["outcome"] == "Signed"
    assert result["meeting"]["title"] == "Demo"

    assert dispatch(store, "update_meeting", {"meetingId": meeting_id, "updates": {"title": None}}) == {
        "success": False,
        "error": "Field 'title' cannot be cleared",
    }

    assert dispatch(store, "delete_meeting", {"meetingId": meeting_id})["success"] is True
    assert dispatch(store, "list_meetings", {})["count"] == 0


def test_unknown_meeting(store):
    assert dispatch(store, "update_meeting", {"meetingId": "nope", "updates": {}}) == {
        "success": False,
        "error": "Meeting not found",
    }
    assert dispatch(store, "delete_meeting", {"meetingId": "nope"}) == {"success": False, "error": "Meeting not found"}


def test_complete_follow_up(store):
    lead_id = create_lead(store)
    created = dispatch(
        store,
        "create_follow_up",
        {"leadId": lead_id, "type": "call", "scheduledAt": in_days(1), "description": "Check budget"},
    )
    follow_up_id = created["followUp"]["id"]
    assert created["followUp"]["completed"] is False
    assert created["followUp"]["completedAt"] is None

    done = dispatch(store, "complete_follow_up", {"followUpId": follow_up_id})
    assert done["message"] == "Follow-up marked as complete"
    completed_at = done["followUp"]["completedAt"]
    assert done["followUp"]["completed"] is True
    assert completed_at is not None

    again = dispatch(store, "complete_follow_up", {"followUpId": follow_up_id})
    assert again["followUp"]["completedAt"] == completed_at

    assert dispatch(store, "get_follow_ups", {"completed": False})["count"] == 0
    assert dispatch(store, "get_follow_ups", {"completed": True})["count"] == 1


def test_update_follow_up_reopens_and_reschedules(store):
    lead_id = create_lead(store)
    follow_up_id = dispatch(
        store,
        "create_follow_up",
        {"leadId": lead_id, "type": "email", "scheduledAt": in_days(1), "description": "Send deck"},
    )["followUp"]["id"]

    done = dispatch(store, "update_follow_up", {"followUpId": follow_up_id, "updates": {"completed": True}})
    assert done["followUp"]["completedAt"] is not None

    reopened = dispatch(
        store,
        "update_follow_up",
        {"followUpId": follow_up_id, "updates": {"completed": False, "scheduledAt": "2031-01-01T09:00:00Z"}},
    )
    assert reopened["followUp"]["completed"] is False
    assert reopened["followUp"]["completedAt"] is None
    assert parse_timestamp(reopened["followUp"]["scheduledAt"]).year == 2031

    fetched = dispatch(store, "get_follow_up", {"followUpId": follow_up_id})["followUp"]
    assert fetched == reopened["followUp"]


def test_follow_up_requires_type(store):
    result = dispatch(store, "create_follow_up", {"leadId": "l1", "scheduledAt": in_days(1), "description": "x"})
    assert result == {"success": False, "error": "Missing required field: type"}


def test_unknown_follow_up(store):
    for name, args in [
        ("get_follow_up", {"followUpId": "nope"}),
        ("update_follow_up", {"followUpId": "nope", "updates": {"completed": True}}),
        ("delete_follow_up", {"followUpId": "nope"}),
        ("complete_follow_up", {"followUpId": "nope"}),
    ]:
        assert dispatch(store, name, args) == {"success": False, "error": "Follow-up not found"}
