import json
import logging

from fastapi import APIRouter, File, Form, UploadFile
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from app.config import MAX_AUDIO_BYTES
from app.models.diagnosis import AudioUpload, DiagnosisReport, DiagnosisRequest, DiagnosisResult
from app.services.diagnosis import run_diagnosis

logger = logging.getLogger(__name__)

router = APIRouter(tags=["diagnosis"])

GENERIC_ERROR = "Failed to process diagnosis."


def _parse_report(raw: str) -> DiagnosisReport | None:
    """Parse the structured ``report`` field; bad input is ignored, not rejected."""
    if not raw or not raw.strip():
        return None
    try:
        return DiagnosisReport.model_validate(json.loads(raw))
    except (json.JSONDecodeError, ValidationError) as e:
        logger.warning("Ignoring malformed report payload: %s", e)
        return None


@router.post(
    "/diagnose",
    response_model=DiagnosisResult,
    responses={413: {"description": "Audio too large"}, 500: {"description": "Upstream failure"}},
)
async def diagnose(
    description: str = Form(""),
    location: str = Form(""),
    situation: str = Form(""),
    makeModel: str = Form(""),
    notes: str = Form(""),
    report: str = Form(""),
    audio: UploadFile | None = File(None),
):
    """Diagnose a car noise from form fields and an optional recording."""
    logger.info(
        "Diagnosis request: location=%s, situation=%s, vehicle=%s, audio=%s",
        location or "-", situation or "-", makeModel or "-",
        audio.filename if audio else None,
    )

    request = DiagnosisRequest(
        description=description,
        location=location,
        situation=situation,
        makeModel=makeModel,
        notes=notes,
        report=_parse_report(report),
    )

    upload = None
    if audio is not None:
        data = await audio.read(MAX_AUDIO_BYTES + 1)
        if len(data) > MAX_AUDIO_BYTES:
            logger.warning("Rejected audio upload over %d bytes", MAX_AUDIO_BYTES)
            return JSONResponse(status_code=413, content={"error": "Audio file too large."})
        if data:
            upload = AudioUpload(
                filename=audio.filename or "recording.webm",
                content_type=audio.content_type or "audio/webm",
                data=data,
            )

    try:
        return await run_diagnosis(request, upload)
    except Exception as e:
        logger.error("Diagnosis failed: %s", e)
        return JSONResponse(status_code=500, content={"error": GENERIC_ERROR})
