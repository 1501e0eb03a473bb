"""Default email templates installed on first initialization of any backend."""

import logging

from sales_agent.app.schemas.email import EmailTemplate

logger = logging.getLogger(__name__)


DEFAULT_TEMPLATES = [
    EmailTemplate(
        id="template-1",
        name="Introduction Email",
        subject="Introduction - {{company}} & {{senderCompany}}",
        body="""Hi {{name}},

I hope this email finds you well. My name is {{senderName}} from {{senderCompany}}.

I came across {{company}} and was impressed by {{achievement}}. I believe there might be a great opportunity for us to collaborate.

Would you be open to a brief 15-minute call next week to explore how we can help {{company}} achieve {{goal}}?

Looking forward to hearing from you.

Best regards,
{{senderName}}
{{senderTitle}}
{{senderCompany}}""",
        category="introduction",
        variables=["name", "company", "senderName", "senderCompany", "achievement", "goal", "senderTitle"],
    ),
    EmailTemplate(
        id="template-2",
        name="Follow-Up After No Response",
        subject="Re: {{previousSubject}}",
        body="""Hi {{name}},

I wanted to follow up on my previous email about {{topic}}.

I understand you're busy, so I'll keep this brief. {{valueProposition}}

If this isn't a priority right now, I completely understand. Just let me know if you'd like me to check back in a few months.

Best,
{{senderName}}""",
        category="follow_up",
        variables=["name", "previousSubject", "topic", "valueProposition", "senderName"],
    ),
    EmailTemplate(
        id="template-3",
        name="Meeting Proposal",
        subject="Proposal Discussion - {{company}}",
        body="""Hi {{name}},

Thank you for taking the time to speak with me {{meetingDate}}.

As discussed, I've prepared a tailored proposal for {{company}} that addresses:
{{keyPoints}}

The estimated value for {{company}} would be approximately {{estimatedValue}}.

Would you be available for a 30-minute call this week to review the details and answer any questions?

Best regards,
{{senderName}}""",
        category="proposal",
        variables=["name", "company", "meetingDate", "keyPoints", "estimatedValue", "senderName"],
    ),
]


def seed_default_templates(store) -> int:
    """Install the default templates unless any template already exists.

    Returns the number of templates created.
    """
    if store.count_templates() > 0:
        return 0
    for template in DEFAULT_TEMPLATES:
        store.create_template(template.model_copy(deep=True))
    logger.info("Seeded %d default email templates", len(DEFAULT_TEMPLATES))
    return len(DEFAULT_TEMPLATES)
