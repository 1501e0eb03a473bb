"""Named-operation catalog and dispatcher shared by both HTTP surfaces."""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional

from pydantic import ValidationError

from sales_agent.app.core.errors import (
    DomainError,
    InvalidArgumentError,
    MissingFieldError,
    UnknownOperationError,
)
from sales_agent.app.schemas.common import ArgsModel, EmptyArgs
from sales_agent.app.schemas.email import (
    ComposeEmailArgs,
    EmailHistoryArgs,
    EmailTemplateCreate,
    LogEmailArgs,
    TemplateIdArgs,
    UpdateTemplateArgs,
)
from sales_agent.app.schemas.follow_up import FollowUpCreate, FollowUpFilters, FollowUpIdArgs, UpdateFollowUpArgs
from sales_agent.app.schemas.lead import (
    AddLeadNoteArgs,
    LeadCreate,
    LeadIdArgs,
    ListLeadsArgs,
    SearchLeadsArgs,
    UpdateLeadArgs,
)
from sales_agent.app.schemas.meeting import MeetingFilters, MeetingIdArgs, ScheduleMeetingArgs, UpdateMeetingArgs
from sales_agent.app.schemas.reports import SalesReportArgs
from sales_agent.app.services import analytics, emails, leads, scheduling
from sales_agent.app.storage.base import SalesStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Tool:
    name: str
    description: str
    args_model: type[ArgsModel]
    handler: Callable[[SalesStore, Any], dict]

    def input_schema(self) -> dict:
        return self.args_model.model_json_schema(by_alias=True)

    def describe(self) -> dict:
        return {"name": self.name, "description": self.description, "inputSchema": self.input_schema()}


TOOLS = [
    # Leads
    Tool("create_lead", "Create a new sales lead", LeadCreate, leads.create_lead),
    Tool("get_lead", "Get details of a specific lead", LeadIdArgs, leads.get_lead),
    Tool("list_leads", "List all leads with optional filtering", ListLeadsArgs, leads.list_leads),
    Tool("update_lead", "Update lead information or status", UpdateLeadArgs, leads.update_lead),
    Tool("add_lead_note", "Add a timestamped note to a lead", AddLeadNoteArgs, leads.add_lead_note),
    Tool("search_leads", "Search leads by name, company, email, or tags", SearchLeadsArgs, leads.search_leads),
    Tool("delete_lead", "Delete a lead", LeadIdArgs, leads.delete_lead),
    # Email
    Tool("list_email_templates", "List all email templates", EmptyArgs, emails.list_email_templates),
    Tool("get_email_template", "Get a specific email template", TemplateIdArgs, emails.get_email_template),
    Tool("create_email_template", "Create a new email template", EmailTemplateCreate, emails.create_email_template),
    Tool("update_email_template", "Update an email template", UpdateTemplateArgs, emails.update_email_template),
    Tool("delete_email_template", "Delete an email template", TemplateIdArgs, emails.delete_email_template),
    Tool(
        "compose_email",
        "Compose an email using a template or custom content",
        ComposeEmailArgs,
        emails.compose_email,
    ),
    Tool("log_email", "Log a sent email for tracking", LogEmailArgs, emails.log_email),
    Tool("get_email_history", "Get email history for a lead", EmailHistoryArgs, emails.get_email_history),
    # Scheduling
    Tool("schedule_meeting", "Schedule a meeting with a lead", ScheduleMeetingArgs, scheduling.schedule_meeting),
    Tool("update_meeting", "Update a meeting", UpdateMeetingArgs, scheduling.update_meeting),
    Tool("delete_meeting", "Delete a meeting", MeetingIdArgs, scheduling.delete_meeting),
    Tool("list_meetings", "List meetings with optional filters", MeetingFilters, scheduling.list_meetings),
    Tool("create_follow_up", "Create a follow-up task for a lead", FollowUpCreate, scheduling.create_follow_up),
    Tool("get_follow_up", "Get a specific follow-up task", FollowUpIdArgs, scheduling.get_follow_up),
    Tool("update_follow_up", "Update a follow-up task", UpdateFollowUpArgs, scheduling.update_follow_up),
    Tool("delete_follow_up", "Delete a follow-up task", FollowUpIdArgs, scheduling.delete_follow_up),
    Tool("complete_follow_up", "Mark a follow-up as complete", FollowUpIdArgs, scheduling.complete_follow_up),
    Tool("get_follow_ups", "Get follow-up tasks", FollowUpFilters, scheduling.get_follow_ups),
    # Analytics
    Tool("get_pipeline", "Get sales pipeline overview with stage breakdown", EmptyArgs, analytics.get_pipeline),
    Tool("get_sales_report", "Get detailed sales report for a period", SalesReportArgs, analytics.get_sales_report),
    Tool("get_lead_activity", "Get activity summary for a specific lead", LeadIdArgs, analytics.get_lead_activity),
    Tool(
        "get_dashboard",
        "Get dashboard snapshot: stats, stage counts, upcoming work and recent leads",
        EmptyArgs,
        analytics.get_dashboard,
    ),
]

TOOLS_BY_NAME = {tool.name: tool for tool in TOOLS}


def get_tool(name: str) -> Tool:
    tool = TOOLS_BY_NAME.get(name)
    if tool is None:
        raise UnknownOperationError(name)
    return tool


def format_validation_error(exc: ValidationError) -> DomainError:
    """Reduce a pydantic error to the first problem, as a domain error."""
    error = exc.errors()[0]
    field = ".".join(str(part) for part in error["loc"]) or "arguments"
    if error["type"] == "missing":
        return MissingFieldError(field)
    if error["type"] == "field_cleared":
        cleared = error.get("ctx", {}).get("field", field)
        return MissingFieldError(cleared, error["msg"])
    return InvalidArgumentError(field, error["msg"])


def parse_arguments(tool: Tool, arguments: Optional[dict]) -> ArgsModel:
    try:
        return tool.args_model.model_validate(arguments or {})
    except ValidationError as exc:
        raise format_validation_error(exc) from exc


def dispatch(store: SalesStore, name: str, arguments: Optional[dict] = None) -> dict:
    """Run one named operation and return its envelope.

    Expected failures come back as ``{"success": False, "error": ...}``.
    ``UnknownOperationError`` and storage failures propagate to the caller.
    """
    tool = get_tool(name)
    logger.debug("Dispatching %s", name)
    try:
        args = parse_arguments(tool, arguments)
        return tool.handler(store, args)
    except DomainError as exc:
        logger.info("%s failed: %s", name, exc.message)
        return {"success": False, "error": exc.message}
