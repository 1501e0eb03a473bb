"""Pipeline, period report, per-lead activity and dashboard aggregates."""

from datetime import timedelta
from decimal import ROUND_HALF_UP, Decimal

from sales_agent.app.core.time import day_key, utc_now
from sales_agent.app.schemas.common import CLOSED_STAGES, PIPELINE_STAGES, EmptyArgs
from sales_agent.app.schemas.follow_up import FollowUpFilters
from sales_agent.app.schemas.lead import LeadIdArgs
from sales_agent.app.schemas.meeting import MeetingFilters
from sales_agent.app.schemas.reports import SalesReportArgs
from sales_agent.app.services.leads import get_lead_or_raise
from sales_agent.app.storage import query
from sales_agent.app.storage.base import SalesStore

REPORT_WINDOW = timedelta(days=30)


def win_rate(won: int, lost: int) -> str:
    """Percentage of closed deals that were won, one decimal place, "0" when none closed."""
    closed = won + lost
    if closed == 0:
        return "0"
    rate = Decimal(won * 100) / Decimal(closed)
    return str(rate.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def _value(lead) -> float:
    return lead.estimated_value or 0


def _histogram(timestamps) -> dict[str, int]:
    counts: dict[str, int] = {}
    for ts in timestamps:
        key = day_key(ts)
        counts[key] = counts.get(key, 0) + 1
    return counts


def build_pipeline(leads) -> dict:
    pipeline = {stage: {"count": 0, "value": 0, "leads": []} for stage in PIPELINE_STAGES}
    for lead in leads:
        stage = pipeline.get(lead.status)
        if stage is None:
            continue
        stage["count"] += 1
        stage["value"] += _value(lead)
        stage["leads"].append(lead.to_wire())
    return pipeline


def get_stats(store: SalesStore, leads=None) -> dict:
    if leads is None:
        leads = store.list_leads()
    won = sum(1 for lead in leads if lead.status == "closed_won")
    lost = sum(1 for lead in leads if lead.status == "closed_lost")
    return {
        "totalLeads": len(leads),
        "activeLeads": sum(1 for lead in leads if lead.status not in CLOSED_STAGES),
        "totalPipelineValue": sum(_value(lead) for lead in leads),
        "totalMeetings": len(store.list_meetings()),
        "totalEmails": len(store.list_email_logs()),
        "pendingFollowUps": sum(1 for f in store.list_follow_ups() if not f.completed),
        "winRate": f"{win_rate(won, lost)}%",
    }


def get_pipeline(store: SalesStore, args: EmptyArgs) -> dict:
    leads = store.list_leads()
    stats = get_stats(store, leads)
    return {
        "success": True,
        "summary": {
            "totalLeads": stats["totalLeads"],
            "activeLeads": stats["activeLeads"],
            "totalPipelineValue": stats["totalPipelineValue"],
            "winRate": stats["winRate"],
        },
        "pipeline": build_pipeline(leads),
    }


def get_sales_report(store: SalesStore, args: SalesReportArgs) -> dict:
    now = utc_now()
    to_date = args.to_date or now
    from_date = args.from_date or (now - REPORT_WINDOW)

    def in_window(ts) -> bool:
        return from_date <= ts <= to_date

    leads = [lead for lead in store.list_leads() if in_window(lead.created_at)]
    emails = [e for e in store.list_email_logs() if in_window(e.sent_at)]
    meetings = [m for m in store.list_meetings() if in_window(m.scheduled_at)]

    by_status = {stage: 0 for stage in PIPELINE_STAGES}
    for lead in leads:
        if lead.status in by_status:
            by_status[lead.status] += 1

    won = [lead for lead in leads if lead.status == "closed_won"]
    revenue = sum(_value(lead) for lead in won)

    return {
        "success": True,
        "period": {"from": day_key(from_date), "to": day_key(to_date)},
        "leads": by_status,
        "activity": {
            "emailsSent": len(emails),
            "meetingsScheduled": len(meetings),
            "emailsByDay": _histogram(e.sent_at for e in emails),
            "leadsByDay": _histogram(lead.created_at for lead in leads),
        },
        "revenue": {
            "total": revenue,
            "averageDealSize": revenue / len(won) if won else 0,
            # no "%" suffix here, unlike the pipeline summary
            "winRate": win_rate(len(won), by_status["closed_lost"]),
        },
    }


def get_lead_activity(store: SalesStore, args: LeadIdArgs) -> dict:
    lead = get_lead_or_raise(store, args.lead_id)
    now = utc_now()
    emails = store.list_email_logs(lead.id)
    meetings = store.list_meetings(MeetingFilters(lead_id=lead.id))
    follow_ups = store.list_follow_ups(FollowUpFilters(lead_id=lead.id))
    upcoming = [m for m in meetings if m.status == "scheduled" and m.scheduled_at > now]

    return {
        "success": True,
        "lead": lead.to_wire(),
        "activity": {
            "totalEmails": len(emails),
            "totalMeetings": len(meetings),
            "totalFollowUps": len(follow_ups),
            "lastContact": lead.to_wire()["lastContactedAt"],
            "notes": len(lead.notes),
        },
        "recentEmails": [
            {"subject": e.subject, "sentAt": e.to_wire()["sentAt"], "status": e.status} for e in emails[:5]
        ],
        "upcomingMeetings": [{"title": m.title, "scheduledAt": m.to_wire()["scheduledAt"]} for m in upcoming[:3]],
        "pendingFollowUps": sum(1 for f in follow_ups if not f.completed),
    }


def get_dashboard(store: SalesStore, args: EmptyArgs) -> dict:
    now = utc_now()
    leads = store.list_leads()
    pipeline = build_pipeline(leads)
    upcoming = store.list_meetings(MeetingFilters(from_date=now))
    pending = store.list_follow_ups(FollowUpFilters(completed=False))
    recent = query.newest_first(leads)

    return {
        "success": True,
        "stats": get_stats(store, leads),
        "pipeline": {stage: pipeline[stage]["count"] for stage in PIPELINE_STAGES},
        "upcomingMeetings": [m.to_wire() for m in upcoming[:5]],
        "pendingFollowUps": [f.to_wire() for f in pending[:5]],
        "recentLeads": [lead.to_wire() for lead in recent[:5]],
    }
