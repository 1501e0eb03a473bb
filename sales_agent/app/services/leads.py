"""Lead management operations."""

import logging

from sales_agent.app.core.errors import NotFoundError
from sales_agent.app.core.ids import new_id
from sales_agent.app.core.time import format_timestamp, later_than, utc_now
from sales_agent.app.schemas.lead import (
    AddLeadNoteArgs,
    Lead,
    LeadCreate,
    LeadIdArgs,
    ListLeadsArgs,
    SearchLeadsArgs,
    UpdateLeadArgs,
)
from sales_agent.app.storage.base import SalesStore

logger = logging.getLogger(__name__)


def get_lead_or_raise(store: SalesStore, lead_id: str) -> Lead:
    lead = store.get_lead(lead_id)
    if lead is None:
        raise NotFoundError("Lead")
    return lead


def touch_lead(store: SalesStore, lead_id: str, contacted_at) -> None:
    """Record contact with a lead; unknown ids are ignored."""
    lead = store.get_lead(lead_id)
    if lead is None:
        return
    store.update_lead(
        lead_id,
        {"last_contacted_at": contacted_at, "updated_at": later_than(lead.updated_at, contacted_at)},
    )


def create_lead(store: SalesStore, args: LeadCreate) -> dict:
    now = utc_now()
    data = args.model_dump(exclude={"notes"})
    lead = Lead(
        id=new_id(),
        notes=[args.notes] if args.notes else [],
        created_at=now,
        updated_at=now,
        **data,
    )
    store.create_lead(lead)
    logger.info("Created lead %s (%s)", lead.id, lead.company)
    return {
        "success": True,
        "message": f"Lead created successfully: {lead.name} from {lead.company}",
        "lead": {
            "id": lead.id,
            "name": lead.name,
            "company": lead.company,
            "status": lead.status,
            "priority": lead.priority,
        },
    }


def get_lead(store: SalesStore, args: LeadIdArgs) -> dict:
    lead = get_lead_or_raise(store, args.lead_id)
    return {"success": True, "lead": lead.to_wire()}


def list_leads(store: SalesStore, args: ListLeadsArgs) -> dict:
    leads = store.list_leads(args)
    start = (args.page - 1) * args.limit
    page = leads[start : start + args.limit]
    return {
        "success": True,
        "total": len(leads),
        "page": args.page,
        "limit": args.limit,
        "leads": [lead.to_wire() for lead in page],
    }


def update_lead(store: SalesStore, args: UpdateLeadArgs) -> dict:
    lead = get_lead_or_raise(store, args.lead_id)
    changes = args.updates.model_dump(exclude_unset=True)

    # notes are append-only
    note = changes.pop("notes", None)
    if note:
        changes["notes"] = lead.notes + [note]
    if "tags" in changes and changes["tags"] is None:
        changes["tags"] = []
    changes["updated_at"] = later_than(lead.updated_at)

    updated = store.update_lead(args.lead_id, changes)
    return {"success": True, "message": "Lead updated successfully", "lead": updated.to_wire()}


def add_lead_note(store: SalesStore, args: AddLeadNoteArgs) -> dict:
    lead = get_lead_or_raise(store, args.lead_id)
    now = utc_now()
    notes = lead.notes + [f"[{format_timestamp(now)}] {args.note}"]
    store.update_lead(args.lead_id, {"notes": notes, "updated_at": later_than(lead.updated_at, now)})
    return {"success": True, "message": "Note added successfully", "totalNotes": len(notes)}


def search_leads(store: SalesStore, args: SearchLeadsArgs) -> dict:
    leads = store.search_leads(args.query)
    return {"success": True, "count": len(leads), "leads": [lead.to_wire() for lead in leads]}


def delete_lead(store: SalesStore, args: LeadIdArgs) -> dict:
    get_lead_or_raise(store, args.lead_id)
    store.delete_lead(args.lead_id)
    logger.info("Deleted lead %s", args.lead_id)
    return {"success": True, "message": "Lead deleted successfully"}
