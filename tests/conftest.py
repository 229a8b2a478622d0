import os

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from httpx import ASGITransport, AsyncClient

# No external API keys for tests
os.environ["OPENAI_API_KEY"] = ""
os.environ["ANTHROPIC_API_KEY"] = ""
os.environ["RESEND_API_KEY"] = ""
os.environ["DUMMY_MODE"] = "false"
os.environ["LLM_PROVIDER"] = "auto"

from app.main import app

import app.services.llm as _llm_mod

WELL_FORMED_REPLY = (
    "1. Provide a diagnosis: Worn brake pads\n"
    "2. Add a personalized message: Replace soon\n"
    "3. Include a GRAVITY level: Medium\n"
    "4. Include a DANGER level: Low\n"
    "5. Provide a ROUGH COST ESTIMATE: $150\n"
    "6. End with a next recommended step: Visit a mechanic"
)


@pytest.fixture
def reply_text():
    """The canonical six-block reply used across tests."""
    return WELL_FORMED_REPLY


@pytest.fixture(autouse=True)
def reset_llm_client():
    """Drop the cached LLM client so each test sees its own patches."""
    _llm_mod._client = None
    yield
    _llm_mod._client = None


@pytest.fixture
def upload_dir(tmp_path, monkeypatch):
    """Point temporary audio files at a per-test directory."""
    import app.services.transcription as transcription_mod

    monkeypatch.setattr(transcription_mod, "UPLOAD_DIR", str(tmp_path))
    return tmp_path


@pytest.fixture
def client():
    """Provide a synchronous TestClient for HTTP endpoint tests."""
    return TestClient(app)


@pytest_asyncio.fixture
async def async_client():
    """Provide an async httpx client for async HTTP tests."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
