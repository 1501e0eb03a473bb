"""Report arguments."""

from typing import Optional

from pydantic import Field

from sales_agent.app.schemas.common import ArgsModel, Timestamp


class SalesReportArgs(ArgsModel):
    from_date: Optional[Timestamp] = Field(default=None, description="Start date (ISO, default: 30 days ago)")
    to_date: Optional[Timestamp] = Field(default=None, description="End date (ISO, default: today)")
