from sales_agent.app.db.base_class import Base

# Import models to register metadata for Base.metadata.create_all
from sales_agent.app.models.lead import LeadRow  # noqa: F401
from sales_agent.app.models.email_template import EmailTemplateRow  # noqa: F401
from sales_agent.app.models.email_log import EmailLogRow  # noqa: F401
from sales_agent.app.models.meeting import MeetingRow  # noqa: F401
from sales_agent.app.models.follow_up import FollowUpRow  # noqa: F401
