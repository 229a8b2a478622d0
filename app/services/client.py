"""Python client for the diagnosis and feedback endpoints.

Follows the same contract as the browser form: validate before upload,
one timed attempt plus a single retry with exponential backoff for diagnoses
(feedback is sent once), and a capped history of results kept in a
session-scoped ``DiagnosisHistory``.
"""

import asyncio
import json
import logging

import httpx

from app.config import APP_BASE_URL
from app.models.diagnosis import AudioUpload
from app.services.history import DiagnosisHistory

logger = logging.getLogger(__name__)

MIN_DESCRIPTION_LENGTH = 4
MAX_RECORDING_BYTES = 8 * 1024 * 1024
MAX_FILE_BYTES = 10 * 1024 * 1024

DIAGNOSE_TIMEOUT = 40.0
FEEDBACK_TIMEOUT = 15.0
BACKOFF_BASE = 0.5


class SubmissionError(ValueError):
    """Input rejected before any network call; message is user-facing."""


class DiagnosisFailed(RuntimeError):
    """The server answered with an error or an unreadable body."""


def validate_submission(
    description: str | None,
    audio: AudioUpload | None = None,
    recorded: bool = False,
    notes: str | None = None,
) -> None:
    has_text = len((description or "").strip()) >= MIN_DESCRIPTION_LENGTH
    has_notes = bool((notes or "").strip())
    has_audio = audio is not None and bool(audio.data)
    if not has_text and not has_notes and not has_audio:
        raise SubmissionError(
            "Please enter a short description or attach a recording before diagnosing."
        )
    if not has_audio:
        return
    if recorded and len(audio.data) > MAX_RECORDING_BYTES:
        raise SubmissionError("Recording too large (>8MB). Try a shorter sample (≤30s).")
    if len(audio.data) > MAX_FILE_BYTES:
        raise SubmissionError("Audio file too large (>10MB).")


class AutoSoundClient:
    def __init__(
        self,
        base_url: str = APP_BASE_URL,
        history: DiagnosisHistory | None = None,
        timeout: float = DIAGNOSE_TIMEOUT,
        retries: int = 1,
        backoff_base: float = BACKOFF_BASE,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.history = history if history is not None else DiagnosisHistory()
        self.timeout = timeout
        self.retries = retries
        self.backoff_base = backoff_base
        self._transport = transport
        self.last_result: dict | None = None

    async def _post(
        self, path: str, timeout: float, retries: int | None = None, **kwargs
    ) -> httpx.Response:
        """POST with a per-attempt timeout, retrying transport failures.

        ``retries`` defaults to the client's setting; pass 0 for requests
        that must not be repeated.
        """
        retries = self.retries if retries is None else retries
        attempt = 0
        while True:
            try:
                async with httpx.AsyncClient(
                    base_url=self.base_url,
                    timeout=timeout,
                    transport=self._transport,
                ) as client:
                    return await client.post(path, **kwargs)
            except httpx.TransportError as e:
                if attempt >= retries:
                    raise
                delay = self.backoff_base * 2 ** attempt
                logger.warning("POST %s failed (%s), retrying in %.1fs", path, e, delay)
                await asyncio.sleep(delay)
                attempt += 1

    async def diagnose(
        self,
        payload: dict,
        audio: AudioUpload | None = None,
        recorded: bool = False,
    ) -> dict:
        """Submit a diagnosis form and record the result in history.

        ``payload`` uses the browser's report shape (description, location,
        primarySituation, vehicle.makeModel, notes, ...).
        """
        validate_submission(
            payload.get("description"), audio, recorded, notes=payload.get("notes")
        )

        vehicle = payload.get("vehicle") or {}
        data = {
            "description": payload.get("description") or "",
            "location": payload.get("location") or "",
            "situation": payload.get("primarySituation") or "",
            "makeModel": vehicle.get("makeModel") or "",
            "notes": payload.get("notes") or "",
            "report": json.dumps(payload),
        }
        # (None, value) parts keep the body multipart even without audio
        files = [(name, (None, value)) for name, value in data.items()]
        if audio is not None and audio.data:
            files.append(("audio", (audio.filename, audio.data, audio.content_type)))

        resp = await self._post("/diagnose", self.timeout, files=files)
        try:
            body = resp.json()
        except ValueError:
            raise DiagnosisFailed("Invalid JSON response from server.") from None
        if resp.is_error:
            error = body.get("error") if isinstance(body, dict) else None
            raise DiagnosisFailed(error or f"Server error ({resp.status_code})")

        self.last_result = {"response": body, "payload": payload}
        self.history.record(body, payload)
        return body

    async def send_feedback(self, feedback: dict) -> dict:
        # a timed-out send may still have been delivered
        resp = await self._post("/feedback", FEEDBACK_TIMEOUT, retries=0, json=feedback)
        try:
            return resp.json()
        except ValueError:
            return {"ok": False, "error": f"Server error ({resp.status_code})"}
