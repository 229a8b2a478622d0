"""Diagnosis pipeline: transcript -> prompt -> completion -> blocks + links.

Each request runs the steps once, in order. The completion depends on the
transcript, so the two upstream calls are sequential. Any upstream error
propagates to the caller; there are no retries and no partial results.
"""

import logging

from app.config import DUMMY_MODE
from app.models.diagnosis import AudioUpload, DiagnosisRequest, DiagnosisResult
from app.services.extractor import extract_blocks
from app.services.llm import get_llm_client
from app.services.prompts import SYSTEM_PROMPT, build_diagnosis_prompt
from app.services.suggestions import match_suggestions
from app.services.transcription import transcribe_audio

logger = logging.getLogger(__name__)

DUMMY_REPLY = """1. Provide a diagnosis: Worn brake pads causing a grinding noise when braking.
2. Add a personalized message: This is a common wear item; you can inspect the pad thickness through the wheel spokes.
3. Include a GRAVITY level: Medium
4. Include a DANGER level: Moderate
5. Provide a ROUGH COST ESTIMATE: $100 - $250 per axle
6. End with a next recommended step: Check the pads this week and book a brake service if they are under 3 mm."""


def build_result(reply: str, transcript: str = "") -> DiagnosisResult:
    """Turn a raw completion reply into the response bundle."""
    return DiagnosisResult(
        **extract_blocks(reply),
        transcript=transcript,
        suggestions=match_suggestions(reply),
    )


async def run_diagnosis(
    request: DiagnosisRequest,
    audio: AudioUpload | None = None,
) -> DiagnosisResult:
    if DUMMY_MODE:
        logger.info("DUMMY_MODE on, returning canned diagnosis")
        return build_result(DUMMY_REPLY)

    transcript = ""
    if audio is not None and audio.data:
        transcript = await transcribe_audio(audio)

    prompt = build_diagnosis_prompt(request, transcript)
    reply = await get_llm_client().generate_text(system=SYSTEM_PROMPT, user=prompt)
    logger.info("Completion reply: %s", reply[:200])

    return build_result(reply, transcript)
