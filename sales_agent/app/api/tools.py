"""Tool-invocation surface: operation catalog plus a single call endpoint."""

import json
import logging
from typing import Any, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from sales_agent.app.core.errors import UnknownOperationError
from sales_agent.app.dependencies.store import get_store
from sales_agent.app.services.tools import TOOLS, dispatch
from sales_agent.app.storage.base import SalesStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/tools", tags=["tools"])


class ToolCall(BaseModel):
    name: str
    arguments: Optional[dict[str, Any]] = None


def _text_result(envelope: dict, is_error: bool) -> dict:
    return {
        "content": [{"type": "text", "text": json.dumps(envelope, indent=2)}],
        "isError": is_error,
    }


@router.get("")
def list_tools():
    return {"tools": [tool.describe() for tool in TOOLS]}


@router.post("/call")
def call_tool(call: ToolCall, store: SalesStore = Depends(get_store)):
    try:
        envelope = dispatch(store, call.name, call.arguments)
    except UnknownOperationError as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    except Exception as exc:
        logger.exception("Tool %s failed", call.name)
        return _text_result({"success": False, "error": str(exc) or "Unknown error"}, True)
    return _text_result(envelope, False)
