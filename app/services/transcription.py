import logging
import os
import tempfile
from pathlib import Path

from openai import AsyncOpenAI

from app.config import OPENAI_API_KEY, TRANSCRIPTION_MODEL, UPLOAD_DIR
from app.models.diagnosis import AudioUpload

logger = logging.getLogger(__name__)

client = AsyncOpenAI(api_key=OPENAI_API_KEY) if OPENAI_API_KEY else None

DEFAULT_SUFFIX = ".webm"


def _suffix_for(filename: str) -> str:
    suffix = Path(filename or "").suffix.lower()
    return suffix if suffix else DEFAULT_SUFFIX


async def transcribe_audio(audio: AudioUpload) -> str:
    """Transcribe a recorded car noise with the OpenAI speech-to-text API.

    The upload is written to a temporary file so the SDK can infer the format
    from its extension. The file is removed whether or not the call succeeds.
    """
    if client is None:
        raise RuntimeError("Transcription unavailable: set OPENAI_API_KEY")

    os.makedirs(UPLOAD_DIR, exist_ok=True)
    fd, path = tempfile.mkstemp(suffix=_suffix_for(audio.filename), dir=UPLOAD_DIR)
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(audio.data)

        logger.info("Transcribing %s (%d bytes)", audio.filename, len(audio.data))
        with open(path, "rb") as f:
            transcription = await client.audio.transcriptions.create(
                model=TRANSCRIPTION_MODEL,
                file=f,
            )
        text = (transcription.text or "").strip()
        logger.info("Transcript: %s", text[:80])
        return text
    finally:
        try:
            os.unlink(path)
        except FileNotFoundError:
            pass
