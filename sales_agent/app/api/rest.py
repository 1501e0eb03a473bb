"""Path-based REST surface mapping ``/api/<path>`` onto the named operations."""

import json
import logging

from fastapi import APIRouter, Depends, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from sales_agent.app.dependencies.store import get_store
from sales_agent.app.services.tools import dispatch
from sales_agent.app.storage.base import SalesStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["api"])

ENDPOINTS = {
    "leads": "list_leads",
    "leads/create": "create_lead",
    "leads/get": "get_lead",
    "leads/update": "update_lead",
    "leads/delete": "delete_lead",
    "leads/search": "search_leads",
    "leads/note": "add_lead_note",
    "templates": "list_email_templates",
    "templates/get": "get_email_template",
    "templates/create": "create_email_template",
    "templates/update": "update_email_template",
    "templates/delete": "delete_email_template",
    "emails/compose": "compose_email",
    "emails/log": "log_email",
    "emails/history": "get_email_history",
    "meetings": "list_meetings",
    "meetings/create": "schedule_meeting",
    "meetings/update": "update_meeting",
    "meetings/delete": "delete_meeting",
    "followups": "get_follow_ups",
    "followups/get": "get_follow_up",
    "followups/create": "create_follow_up",
    "followups/update": "update_follow_up",
    "followups/delete": "delete_follow_up",
    "followups/complete": "complete_follow_up",
    "pipeline": "get_pipeline",
    "reports/sales": "get_sales_report",
    "activity": "get_lead_activity",
    "dashboard": "get_dashboard",
}


async def _request_arguments(request: Request) -> dict:
    """JSON body merged with query parameters; the query string wins."""
    args = {}
    raw = await request.body()
    if raw:
        try:
            body = json.loads(raw)
        except ValueError:
            # GET requests may carry junk bodies
            logger.debug("Ignoring unparsable request body on %s", request.url.path)
            body = None
        if isinstance(body, dict):
            args.update(body)
    args.update(request.query_params)
    return args


@router.api_route("/{path:path}", methods=["GET", "POST", "PUT", "PATCH", "DELETE"])
async def call_endpoint(path: str, request: Request, store: SalesStore = Depends(get_store)):
    path = path.strip("/")
    operation = ENDPOINTS.get(path)
    if operation is None:
        return JSONResponse(status_code=404, content={"error": "API endpoint not found", "path": path})

    args = await _request_arguments(request)
    try:
        return await run_in_threadpool(dispatch, store, operation, args)
    except Exception as exc:
        logger.exception("REST call %s failed", path)
        return JSONResponse(status_code=500, content={"success": False, "error": str(exc) or "Unknown error"})
