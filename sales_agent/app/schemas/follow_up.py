"""Follow-up schemas for lead action items."""

from typing import Optional

from pydantic import Field, model_validator

from sales_agent.app.schemas.common import ArgsModel, CamelModel, FollowUpType, Timestamp, reject_nulls


class FollowUp(CamelModel):
    id: str
    lead_id: str
    type: FollowUpType = "task"
    scheduled_at: Timestamp
    description: str
    completed: bool = False
    completed_at: Optional[Timestamp] = None


class FollowUpFilters(ArgsModel):
    lead_id: Optional[str] = Field(default=None, description="Filter by lead")
    completed: Optional[bool] = Field(default=None, description="Filter by completion status")
    from_date: Optional[Timestamp] = Field(default=None, description="Filter from date")


class FollowUpCreate(ArgsModel):
    lead_id: str = Field(description="Lead ID")
    type: FollowUpType = Field(description="Follow-up type")
    scheduled_at: Timestamp = Field(description="When to follow up (ISO datetime)")
    description: str = Field(description="Follow-up description")


class FollowUpUpdate(ArgsModel):
    type: Optional[FollowUpType] = None
    scheduled_at: Optional[Timestamp] = None
    description: Optional[str] = None
    completed: Optional[bool] = None

    @model_validator(mode="after")
    def required_fields_stay_set(self):
        reject_nulls(self, ("type", "scheduled_at", "description", "completed"))
        return self


class FollowUpIdArgs(ArgsModel):
    follow_up_id: str = Field(description="Follow-up ID")


class UpdateFollowUpArgs(FollowUpIdArgs):
    updates: FollowUpUpdate
