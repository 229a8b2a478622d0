"""Feedback form endpoint.

Normalizes the submission, emails it to the team inbox and reports a plain
ok/error flag back to the browser. Nothing is stored or retried.
"""

import logging

import httpx
from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from app.models.feedback import FeedbackRequest, FeedbackResponse
from app.services import mailer
from app.services.feedback import submit_feedback

logger = logging.getLogger(__name__)
router = APIRouter(tags=["feedback"])


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=FeedbackResponse(ok=False, error=message).model_dump(exclude_none=True),
    )


@router.post("/feedback", response_model=FeedbackResponse, response_model_exclude_none=True)
async def feedback(request: Request):
    content_type = request.headers.get("content-type", "")
    try:
        if content_type.startswith("application/json"):
            payload = await request.json()
        else:
            payload = dict(await request.form())
    except Exception:
        logger.error("Failed to parse feedback payload")
        return _error(400, "Invalid feedback payload.")

    if not isinstance(payload, dict):
        return _error(400, "Invalid feedback payload.")

    try:
        body = FeedbackRequest.model_validate(payload)
    except ValidationError as e:
        logger.warning("Rejected feedback: %s", e)
        return _error(400, "Invalid feedback payload.")

    if body.is_empty():
        return _error(400, "Feedback is empty.")

    if not mailer.is_configured():
        logger.error("Feedback email is not configured (RESEND_API_KEY / FEEDBACK_*_EMAIL)")
        return _error(500, "Feedback email is not configured.")

    try:
        await submit_feedback(body)
    except (mailer.MailerNotConfigured, httpx.HTTPError) as e:
        logger.error("Feedback delivery failed: %s", e)
        return _error(500, "Failed to send feedback.")
    except Exception:
        logger.exception("Unexpected error sending feedback")
        return _error(500, "Failed to send feedback.")

    return FeedbackResponse(ok=True)
