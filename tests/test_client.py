"""Tests for the Python client - validation, retry, history."""

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from app.main import app
from app.models.diagnosis import AudioUpload
from app.services import diagnosis
from app.services.client import (
    MAX_FILE_BYTES,
    MAX_RECORDING_BYTES,
    AutoSoundClient,
    DiagnosisFailed,
    SubmissionError,
    validate_submission,
)

# --- Validation ---


class TestValidateSubmission:
    def test_requires_description_or_audio(self):
        with pytest.raises(SubmissionError, match="short description"):
            validate_submission("abc")

    def test_description_long_enough(self):
        validate_submission("clunk")

    def test_audio_alone_is_enough(self):
        validate_submission("", AudioUpload(data=b"x"))

    def test_notes_alone_is_enough(self):
        validate_submission("", notes="Only after a cold start")

    def test_blank_notes_do_not_count(self):
        with pytest.raises(SubmissionError):
            validate_submission("", notes="   ")

    def test_empty_audio_does_not_count(self):
        with pytest.raises(SubmissionError):
            validate_submission(None, AudioUpload(data=b""))

    def test_recording_over_8mb(self):
        audio = AudioUpload(data=b"x" * (MAX_RECORDING_BYTES + 1))
        with pytest.raises(SubmissionError, match="Recording too large"):
            validate_submission("", audio, recorded=True)

    def test_file_may_exceed_recording_cap(self):
        validate_submission("", AudioUpload(data=b"x" * (MAX_RECORDING_BYTES + 1)))

    def test_file_over_10mb(self):
        audio = AudioUpload(data=b"x" * (MAX_FILE_BYTES + 1))
        with pytest.raises(SubmissionError, match="Audio file too large"):
            validate_submission("", audio)


# --- Network ---


def _asgi_client(**kwargs) -> AutoSoundClient:
    return AutoSoundClient(
        base_url="http://test",
        transport=httpx.ASGITransport(app=app),
        backoff_base=0,
        **kwargs,
    )


def _mock_llm(reply):
    client = MagicMock()
    client.generate_text = AsyncMock(return_value=reply)
    return client


async def test_diagnose_records_history(reply_text):
    client = _asgi_client()
    payload = {
        "description": "grinding when braking",
        "location": "Front",
        "primarySituation": "Braking",
        "vehicle": {"makeModel": "Clio"},
        "soundProfile": {"labels": ["grinding"]},
    }
    with patch.object(diagnosis, "get_llm_client", return_value=_mock_llm(reply_text)):
        result = await client.diagnose(payload)

    assert result["diagnosis"] == "Worn brake pads"
    assert len(client.history) == 1
    entry = client.history.entries[0]
    assert entry.diagnosis == "Worn brake pads"
    assert entry.payloadSummary.soundLabels == ["grinding"]
    assert client.last_result["payload"] is payload


async def test_diagnose_server_error_raises_and_skips_history():
    client = _asgi_client()
    failing = MagicMock()
    failing.generate_text = AsyncMock(side_effect=RuntimeError("down"))
    with patch.object(diagnosis, "get_llm_client", return_value=failing):
        with pytest.raises(DiagnosisFailed, match="Failed to process diagnosis."):
            await client.diagnose({"description": "clunk clunk"})
    assert len(client.history) == 0


async def test_invalid_input_never_hits_network():
    handler = MagicMock()
    client = AutoSoundClient(base_url="http://test", transport=httpx.MockTransport(handler))
    with pytest.raises(SubmissionError):
        await client.diagnose({"description": ""})
    handler.assert_not_called()


async def test_retries_once_then_succeeds():
    calls = []

    def handler(request):
        calls.append(request)
        if len(calls) == 1:
            raise httpx.ConnectTimeout("timed out", request=request)
        return httpx.Response(200, json={"diagnosis": "Belt", "severity": "Low", "dangerLevel": "Low"})

    client = AutoSoundClient(
        base_url="http://test", transport=httpx.MockTransport(handler), backoff_base=0
    )
    result = await client.diagnose({"description": "squeal"})
    assert result["diagnosis"] == "Belt"
    assert len(calls) == 2


async def test_gives_up_after_one_retry():
    calls = []

    def handler(request):
        calls.append(request)
        raise httpx.ConnectError("refused", request=request)

    client = AutoSoundClient(
        base_url="http://test", transport=httpx.MockTransport(handler), backoff_base=0
    )
    with pytest.raises(httpx.ConnectError):
        await client.diagnose({"description": "squeal"})
    assert len(calls) == 2


async def test_backoff_is_exponential():
    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    client = AutoSoundClient(
        base_url="http://test", transport=httpx.MockTransport(handler), retries=2
    )
    with patch("app.services.client.asyncio.sleep", AsyncMock()) as mock_sleep:
        with pytest.raises(httpx.ConnectError):
            await client.diagnose({"description": "squeal"})
    assert [c.args[0] for c in mock_sleep.call_args_list] == [0.5, 1.0]


async def test_invalid_json_response():
    client = AutoSoundClient(
        base_url="http://test",
        transport=httpx.MockTransport(lambda request: httpx.Response(502, text="<html>")),
    )
    with pytest.raises(DiagnosisFailed, match="Invalid JSON"):
        await client.diagnose({"description": "squeal"})


async def test_multipart_fields_sent():
    seen = {}

    def handler(request):
        seen["body"] = request.content
        seen["content_type"] = request.headers["content-type"]
        return httpx.Response(200, json={"diagnosis": "ok"})

    client = AutoSoundClient(base_url="http://test", transport=httpx.MockTransport(handler))
    await client.diagnose(
        {"description": "tick", "vehicle": {"makeModel": "Corolla"}},
        AudioUpload(filename="recording.webm", data=b"AUDIO"),
        recorded=True,
    )
    assert seen["content_type"].startswith("multipart/form-data")
    assert b'name="makeModel"' in seen["body"]
    assert b"Corolla" in seen["body"]
    assert b'filename="recording.webm"' in seen["body"]


async def test_send_feedback():
    def handler(request):
        return httpx.Response(200, json={"ok": True})

    client = AutoSoundClient(base_url="http://test", transport=httpx.MockTransport(handler))
    assert await client.send_feedback({"useful": "yes"}) == {"ok": True}


async def test_multipart_without_audio():
    seen = {}

    def handler(request):
        seen["body"] = request.content
        seen["content_type"] = request.headers["content-type"]
        return httpx.Response(200, json={"diagnosis": "ok"})

    client = AutoSoundClient(base_url="http://test", transport=httpx.MockTransport(handler))
    await client.diagnose({"description": "tick", "notes": "worse in the rain"})
    assert seen["content_type"].startswith("multipart/form-data")
    assert b'name="notes"' in seen["body"]
    assert b"worse in the rain" in seen["body"]
    assert b"filename=" not in seen["body"]


async def test_notes_only_submission_reaches_server():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(200, json={"diagnosis": "ok"})

    client = AutoSoundClient(base_url="http://test", transport=httpx.MockTransport(handler))
    await client.diagnose({"description": "", "notes": "rattle over bumps"})
    assert len(calls) == 1


async def test_feedback_timeout_is_not_retried():
    calls = []

    def handler(request):
        calls.append(request)
        raise httpx.ReadTimeout("timed out", request=request)

    client = AutoSoundClient(
        base_url="http://test", transport=httpx.MockTransport(handler), backoff_base=0
    )
    with pytest.raises(httpx.ReadTimeout):
        await client.send_feedback({"useful": "yes", "message": "great"})
    assert len(calls) == 1
