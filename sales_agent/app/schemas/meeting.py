"""Meeting schemas."""

from typing import Optional

from pydantic import Field, model_validator

from sales_agent.app.schemas.common import ArgsModel, CamelModel, MeetingStatus, Timestamp, reject_nulls


class Meeting(CamelModel):
    id: str
    lead_id: str
    title: str
    description: Optional[str] = None
    scheduled_at: Timestamp
    duration: int = 30
    location: Optional[str] = None
    meeting_link: Optional[str] = None
    status: MeetingStatus = "scheduled"
    outcome: Optional[str] = None


class MeetingFilters(ArgsModel):
    lead_id: Optional[str] = Field(default=None, description="Filter by lead ID")
    status: Optional[MeetingStatus] = None
    from_date: Optional[Timestamp] = Field(default=None, description="Filter from date (ISO)")
    to_date: Optional[Timestamp] = Field(default=None, description="Filter to date (ISO)")


class ScheduleMeetingArgs(ArgsModel):
    lead_id: str = Field(description="Lead ID")
    title: str = Field(description="Meeting title")
    description: Optional[str] = Field(default=None, description="Meeting description")
    scheduled_at: Timestamp = Field(description="ISO datetime string (e.g., 2024-01-15T14:00:00Z)")
    duration: int = Field(default=30, gt=0, description="Duration in minutes (default: 30)")
    location: Optional[str] = Field(default=None, description="Physical location")
    meeting_link: Optional[str] = Field(default=None, description="Video call link")
    create_follow_up: bool = Field(default=False, description="Create a follow-up task")


class MeetingUpdate(ArgsModel):
    title: Optional[str] = None
    description: Optional[str] = None
    scheduled_at: Optional[Timestamp] = None
    duration: Optional[int] = Field(default=None, gt=0)
    location: Optional[str] = None
    meeting_link: Optional[str] = None
    status: Optional[MeetingStatus] = None
    outcome: Optional[str] = None

    @model_validator(mode="after")
    def required_fields_stay_set(self):
        reject_nulls(self, ("title", "scheduled_at", "duration", "status"))
        return self


class MeetingIdArgs(ArgsModel):
    meeting_id: str = Field(description="Meeting ID")


class UpdateMeetingArgs(MeetingIdArgs):
    updates: MeetingUpdate
