"""Email template and email log schemas."""

from typing import Any, Optional

from pydantic import Field, field_validator, model_validator

from sales_agent.app.schemas.common import (
    ArgsModel,
    CamelModel,
    EmailStatus,
    TemplateCategory,
    Timestamp,
    reject_nulls,
)
from sales_agent.app.storage.codec import decode_list


class EmailTemplate(CamelModel):
    id: str
    name: str
    subject: str
    body: str
    category: TemplateCategory = "custom"
    # Informational only; never checked against the placeholders in subject/body.
    variables: list[str] = Field(default_factory=list)

    @field_validator("variables", mode="before")
    @classmethod
    def decode_variables(cls, v):
        return decode_list(v)


class EmailTemplateCreate(ArgsModel):
    name: str = Field(description="Template name")
    subject: str = Field(description="Email subject line")
    body: str = Field(description="Email body content")
    category: TemplateCategory = Field(description="Template category")
    variables: list[str] = Field(default_factory=list, description="Variable names used in template")


class EmailTemplateUpdate(ArgsModel):
    name: Optional[str] = None
    subject: Optional[str] = None
    body: Optional[str] = None
    category: Optional[TemplateCategory] = None
    variables: Optional[list[str]] = None

    @model_validator(mode="after")
    def required_fields_stay_set(self):
        reject_nulls(self, ("name", "subject", "body", "category"))
        return self


class TemplateIdArgs(ArgsModel):
    template_id: str = Field(description="Template ID")


class UpdateTemplateArgs(TemplateIdArgs):
    updates: EmailTemplateUpdate


class ComposeEmailArgs(ArgsModel):
    lead_id: Optional[str] = Field(default=None, description="Lead ID to personalize for")
    template_id: Optional[str] = Field(default=None, description="Template ID to use")
    subject: Optional[str] = Field(default=None, description="Custom subject (if not using template)")
    body: Optional[str] = Field(default=None, description="Custom body (if not using template)")
    variables: dict[str, Any] = Field(default_factory=dict, description="Variables to substitute in template")


class EmailLog(CamelModel):
    id: str
    lead_id: str
    template_id: Optional[str] = None
    subject: str
    body: str
    sent_at: Timestamp
    opened_at: Optional[Timestamp] = None
    clicked_at: Optional[Timestamp] = None
    status: EmailStatus = "sent"


class LogEmailArgs(ArgsModel):
    lead_id: str = Field(description="Lead ID")
    template_id: Optional[str] = Field(default=None, description="Template used (optional)")
    subject: str = Field(description="Email subject")
    body: str = Field(description="Email body")
    status: EmailStatus = Field(default="sent", description="Email status")


class EmailHistoryArgs(ArgsModel):
    lead_id: Optional[str] = Field(default=None, description="Lead ID (omit for every lead)")
