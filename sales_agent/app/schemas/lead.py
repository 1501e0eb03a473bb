"""Lead schemas for records, filters and operation arguments."""

from typing import Optional

from pydantic import Field, field_validator, model_validator

from sales_agent.app.schemas.common import (
    ArgsModel,
    CamelModel,
    LeadPriority,
    LeadStatus,
    Timestamp,
    reject_nulls,
)
from sales_agent.app.storage.codec import decode_list


class Lead(CamelModel):
    """A stored lead, with list fields already decoded."""

    id: str
    name: str
    email: str
    phone: Optional[str] = None
    company: str
    title: Optional[str] = None
    status: LeadStatus = "new"
    source: str
    notes: list[str] = Field(default_factory=list)
    created_at: Timestamp
    updated_at: Timestamp
    last_contacted_at: Optional[Timestamp] = None
    estimated_value: Optional[float] = None
    priority: LeadPriority = "medium"
    tags: list[str] = Field(default_factory=list)

    @field_validator("notes", "tags", mode="before")
    @classmethod
    def decode_lists(cls, v):
        return decode_list(v)


class LeadFilters(ArgsModel):
    status: Optional[LeadStatus] = None
    priority: Optional[LeadPriority] = None
    source: Optional[str] = None
    tag: Optional[str] = None


class LeadCreate(ArgsModel):
    """Arguments for create_lead; ``notes`` is an optional first note."""

    name: str = Field(description="Full name of the lead")
    email: str = Field(description="Email address")
    phone: Optional[str] = Field(default=None, description="Phone number (optional)")
    company: str = Field(description="Company name")
    title: Optional[str] = Field(default=None, description="Job title (optional)")
    status: LeadStatus = Field(default="new", description="Initial status (default: new)")
    source: str = Field(description="Lead source (e.g., 'Website', 'Referral', 'LinkedIn')")
    notes: Optional[str] = Field(default=None, description="Initial notes about the lead")
    estimated_value: Optional[float] = Field(default=None, ge=0, description="Estimated deal value")
    priority: LeadPriority = Field(default="medium", description="Lead priority")
    tags: list[str] = Field(default_factory=list, description="Tags for categorization")


class LeadUpdate(ArgsModel):
    """Partial lead update. Omitted fields are untouched; ``notes`` is appended."""

    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    company: Optional[str] = None
    title: Optional[str] = None
    status: Optional[LeadStatus] = None
    source: Optional[str] = None
    priority: Optional[LeadPriority] = None
    estimated_value: Optional[float] = Field(default=None, ge=0)
    notes: Optional[str] = None
    tags: Optional[list[str]] = None

    @model_validator(mode="after")
    def required_fields_stay_set(self):
        reject_nulls(self, ("name", "email", "company", "status", "source", "priority"))
        return self


class ListLeadsArgs(LeadFilters):
    limit: int = Field(default=50, ge=1, description="Number of results per page (default: 50)")
    page: int = Field(default=1, ge=1, description="Page number (default: 1)")


class LeadIdArgs(ArgsModel):
    lead_id: str = Field(description="The lead ID")


class UpdateLeadArgs(LeadIdArgs):
    updates: LeadUpdate


class AddLeadNoteArgs(LeadIdArgs):
    note: str = Field(description="The note text")


class SearchLeadsArgs(ArgsModel):
    query: str = Field(description="Search query")
