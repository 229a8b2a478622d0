"""Pydantic models for the feedback form.

Every field is normalized rather than rejected: unknown values collapse to
``None`` so a sloppy form never turns into a 422.
"""

import html
import json
import re

from pydantic import BaseModel, field_validator

FEEDBACK_CATEGORIES = ("accuracy", "suggestions", "audio", "interface", "bug", "other")
USEFUL_VALUES = ("yes", "no")

MAX_MESSAGE_LENGTH = 2000
MAX_EMAIL_LENGTH = 254
MAX_CONTEXT_LENGTH = 4000

_TAG_RE = re.compile(r"<[^>]*>")
_EMAIL_RE = re.compile(r"^[^@\s<>]+@[^@\s<>]+\.[^@\s<>]+$")
_TRUE_VALUES = ("1", "true", "yes", "on")


def strip_markup(value: str) -> str:
    """Remove HTML tags and entities, collapse whitespace."""
    text = _TAG_RE.sub(" ", value)
    text = html.unescape(text)
    text = _TAG_RE.sub(" ", text)
    return " ".join(text.split())


class FeedbackRequest(BaseModel):
    useful: str | None = None
    category: str | None = None
    message: str = ""
    email: str | None = None
    consent: bool = False
    context: str | None = None

    @field_validator("useful", mode="before")
    @classmethod
    def _normalize_useful(cls, value: object) -> str | None:
        if value is None:
            return None
        text = str(value).strip().lower()
        return text if text in USEFUL_VALUES else None

    @field_validator("category", mode="before")
    @classmethod
    def _normalize_category(cls, value: object) -> str | None:
        if value is None:
            return None
        text = str(value).strip().lower()
        return text if text in FEEDBACK_CATEGORIES else None

    @field_validator("message", mode="before")
    @classmethod
    def _sanitize_message(cls, value: object) -> str:
        if value is None:
            return ""
        return strip_markup(str(value))[:MAX_MESSAGE_LENGTH]

    @field_validator("email", mode="before")
    @classmethod
    def _check_email(cls, value: object) -> str | None:
        if value is None:
            return None
        text = str(value).strip()[:MAX_EMAIL_LENGTH]
        return text if _EMAIL_RE.match(text) else None

    @field_validator("consent", mode="before")
    @classmethod
    def _coerce_consent(cls, value: object) -> bool:
        if isinstance(value, bool):
            return value
        if value is None:
            return False
        return str(value).strip().lower() in _TRUE_VALUES

    @field_validator("context", mode="before")
    @classmethod
    def _flatten_context(cls, value: object) -> str | None:
        if value is None or value == "":
            return None
        if isinstance(value, (dict, list)):
            value = json.dumps(value, ensure_ascii=False)
        return str(value)[:MAX_CONTEXT_LENGTH]

    def is_empty(self) -> bool:
        return self.useful is None and not self.message


class FeedbackResponse(BaseModel):
    ok: bool
    error: str | None = None
