"""Email templates, composition and the sent-email log."""

import logging
import re
from typing import Any, Mapping

from sales_agent.app.core.errors import MissingFieldError, NotFoundError
from sales_agent.app.core.ids import new_id
from sales_agent.app.core.time import utc_now
from sales_agent.app.schemas.common import EmptyArgs
from sales_agent.app.schemas.email import (
    ComposeEmailArgs,
    EmailHistoryArgs,
    EmailLog,
    EmailTemplate,
    EmailTemplateCreate,
    LogEmailArgs,
    TemplateIdArgs,
    UpdateTemplateArgs,
)
from sales_agent.app.services.leads import touch_lead
from sales_agent.app.storage.base import SalesStore

logger = logging.getLogger(__name__)

PLACEHOLDER = re.compile(r"\{\{(\w+)\}\}")


def interpolate_template(text: str, variables: Mapping[str, Any]) -> str:
    """Replace ``{{key}}`` placeholders; unknown keys are left as written."""

    def replace(match: re.Match) -> str:
        value = variables.get(match.group(1))
        if value is None:
            return match.group(0)
        return str(value)

    return PLACEHOLDER.sub(replace, text)


def get_template_or_raise(store: SalesStore, template_id: str) -> EmailTemplate:
    template = store.get_template(template_id)
    if template is None:
        raise NotFoundError("Template")
    return template


def list_email_templates(store: SalesStore, args: EmptyArgs) -> dict:
    return {"success": True, "templates": [t.to_wire() for t in store.list_templates()]}


def get_email_template(store: SalesStore, args: TemplateIdArgs) -> dict:
    template = get_template_or_raise(store, args.template_id)
    return {"success": True, "template": template.to_wire()}


def create_email_template(store: SalesStore, args: EmailTemplateCreate) -> dict:
    template = EmailTemplate(id=new_id(), **args.model_dump())
    store.create_template(template)
    return {
        "success": True,
        "message": f"Email template created: {template.name}",
        "templateId": template.id,
    }


def update_email_template(store: SalesStore, args: UpdateTemplateArgs) -> dict:
    get_template_or_raise(store, args.template_id)
    changes = args.updates.model_dump(exclude_unset=True)
    if "variables" in changes and changes["variables"] is None:
        changes["variables"] = []
    updated = store.update_template(args.template_id, changes)
    return {"success": True, "message": "Template updated successfully", "template": updated.to_wire()}


def delete_email_template(store: SalesStore, args: TemplateIdArgs) -> dict:
    get_template_or_raise(store, args.template_id)
    store.delete_template(args.template_id)
    return {"success": True, "message": "Template deleted successfully"}


def compose_email(store: SalesStore, args: ComposeEmailArgs) -> dict:
    """Draft an email. Nothing is stored; use log_email once it has been sent."""
    if args.template_id:
        template = get_template_or_raise(store, args.template_id)
        subject = interpolate_template(template.subject, args.variables)
        body = interpolate_template(template.body, args.variables)
    else:
        if args.subject is None:
            raise MissingFieldError("subject")
        if args.body is None:
            raise MissingFieldError("body")
        subject, body = args.subject, args.body

    recipient = None
    if args.lead_id:
        lead = store.get_lead(args.lead_id)
        if lead is not None:
            recipient = {"name": lead.name, "email": lead.email, "company": lead.company}

    return {
        "success": True,
        "email": {"subject": subject, "body": body, "recipient": recipient},
        "readyToSend": True,
    }


def log_email(store: SalesStore, args: LogEmailArgs) -> dict:
    email = EmailLog(id=new_id(), sent_at=utc_now(), **args.model_dump())
    store.create_email_log(email)
    touch_lead(store, email.lead_id, email.sent_at)
    logger.info("Logged %s email %s for lead %s", email.status, email.id, email.lead_id)
    return {"success": True, "message": "Email logged successfully", "emailId": email.id}


def get_email_history(store: SalesStore, args: EmailHistoryArgs) -> dict:
    emails = store.list_email_logs(args.lead_id)
    return {"success": True, "count": len(emails), "emails": [e.to_wire() for e in emails]}
