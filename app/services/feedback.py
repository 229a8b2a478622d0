import html
import logging

from app.models.feedback import FeedbackRequest
from app.services import mailer
from app.services.mailer import MailMessage

logger = logging.getLogger(__name__)

SUBJECT_PREFIX = "[MyAutoSound] Feedback"


def _label(value: str | None) -> str:
    return value if value else "n/a"


def compose_feedback_email(feedback: FeedbackRequest) -> MailMessage:
    """Build the plain-text and HTML bodies for a feedback submission."""
    rows = [
        ("Useful", _label(feedback.useful)),
        ("Category", _label(feedback.category)),
        ("Email", _label(feedback.email)),
        ("Consent to contact", "yes" if feedback.consent else "no"),
    ]

    text_lines = [f"{key}: {value}" for key, value in rows]
    text_lines += ["", "Message:", feedback.message or "(empty)"]
    if feedback.context:
        text_lines += ["", "Context:", feedback.context]

    html_rows = "".join(
        f"<tr><th align=\"left\">{html.escape(key)}</th><td>{html.escape(value)}</td></tr>"
        for key, value in rows
    )
    html_body = (
        f"<h2>MyAutoSound feedback</h2><table>{html_rows}</table>"
        f"<h3>Message</h3><p>{html.escape(feedback.message or '(empty)')}</p>"
    )
    if feedback.context:
        html_body += f"<h3>Context</h3><pre>{html.escape(feedback.context)}</pre>"

    subject = SUBJECT_PREFIX
    if feedback.category:
        subject += f" ({feedback.category})"
    if feedback.useful:
        subject += f" - useful: {feedback.useful}"

    return MailMessage(
        subject=subject,
        text="\n".join(text_lines),
        html=html_body,
        to=mailer.default_recipients(),
        reply_to=feedback.email if feedback.consent and feedback.email else None,
    )


async def submit_feedback(feedback: FeedbackRequest) -> str:
    """Email a feedback submission to the team inbox."""
    message = compose_feedback_email(feedback)
    message_id = await mailer.send_email(message)
    logger.info("Feedback delivered (category=%s, useful=%s)", feedback.category, feedback.useful)
    return message_id
