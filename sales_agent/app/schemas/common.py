"""Shared schema building blocks: wire casing, timestamps and enums."""

from datetime import datetime
from typing import Annotated, Literal, get_args

from pydantic import BaseModel, BeforeValidator, ConfigDict
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

from sales_agent.app.core.time import ensure_utc, parse_timestamp

LeadStatus = Literal["new", "contacted", "qualified", "proposal", "negotiation", "closed_won", "closed_lost"]
LeadPriority = Literal["low", "medium", "high"]
TemplateCategory = Literal["introduction", "follow_up", "proposal", "reminder", "custom"]
EmailStatus = Literal["draft", "sent", "delivered", "failed"]
MeetingStatus = Literal["scheduled", "completed", "cancelled", "no_show"]
FollowUpType = Literal["email", "call", "meeting", "task"]

PIPELINE_STAGES: tuple[str, ...] = get_args(LeadStatus)
CLOSED_STAGES = ("closed_won", "closed_lost")


def _to_utc(value):
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return ensure_utc(value)
    return parse_timestamp(value)


# Accepts ISO-8601 datetimes or bare dates; always yields an aware UTC datetime.
Timestamp = Annotated[datetime, BeforeValidator(_to_utc)]


class CamelModel(BaseModel):
    """camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    def to_wire(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class ArgsModel(CamelModel):
    """Operation arguments; unknown keys (e.g. stray query parameters) are ignored."""

    model_config = ConfigDict(extra="ignore")


class EmptyArgs(ArgsModel):
    pass


def reject_nulls(model: BaseModel, fields: tuple[str, ...]) -> None:
    """Refuse updates that explicitly set a required field to null."""
    for name in fields:
        if name in model.model_fields_set and getattr(model, name) is None:
            raise PydanticCustomError(
                "field_cleared",
                "Field '{field}' cannot be cleared",
                {"field": to_camel(name)},
            )
