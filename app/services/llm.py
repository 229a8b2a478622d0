import logging

from anthropic import AsyncAnthropic
from openai import AsyncOpenAI

from app.config import (
    ANTHROPIC_API_KEY,
    LLM_MAX_TOKENS,
    LLM_MODEL,
    LLM_PROVIDER,
    OPENAI_API_KEY,
)

logger = logging.getLogger(__name__)

EMPTY_REPLY = "No diagnosis received."

_DEFAULT_MODELS = {
    "anthropic": "claude-3-5-sonnet-20240620",
    "openai": "gpt-4o",
}


class LLMClient:
    def __init__(self) -> None:
        provider = (LLM_PROVIDER or "auto").lower()
        if provider == "auto":
            if OPENAI_API_KEY:
                provider = "openai"
            elif ANTHROPIC_API_KEY:
                provider = "anthropic"
            else:
                provider = "none"
        self.provider = provider

        self._anthropic = AsyncAnthropic(api_key=ANTHROPIC_API_KEY) if ANTHROPIC_API_KEY else None
        self._openai = AsyncOpenAI(api_key=OPENAI_API_KEY) if OPENAI_API_KEY else None

    def available(self) -> bool:
        if self.provider == "anthropic":
            return self._anthropic is not None
        if self.provider == "openai":
            return self._openai is not None
        return False

    def model_name(self) -> str:
        return LLM_MODEL or _DEFAULT_MODELS.get(self.provider, _DEFAULT_MODELS["openai"])

    async def generate_text(
        self,
        *,
        system: str,
        user: str,
        max_tokens: int = LLM_MAX_TOKENS,
    ) -> str:
        """Send a system + user prompt and return the reply as plain text.

        No schema is requested from the provider; callers parse the text.
        """
        if not self.available():
            raise RuntimeError("LLM provider unavailable")

        model = self.model_name()
        logger.info("Requesting completion from %s (%s)", self.provider, model)

        if self.provider == "anthropic":
            message = await self._anthropic.messages.create(
                model=model,
                max_tokens=max_tokens,
                system=system,
                messages=[{"role": "user", "content": user}],
            )
            raw = ""
            for block in message.content:
                if hasattr(block, "text"):
                    raw += block.text
            return raw.strip() or EMPTY_REPLY

        response = await self._openai.chat.completions.create(
            model=model,
            max_tokens=max_tokens,
            messages=[
                {"role": "system", "content": system},
                {"role": "user", "content": user},
            ],
        )
        if not response.choices:
            return EMPTY_REPLY
        content = response.choices[0].message.content or ""
        return content.strip() or EMPTY_REPLY


_client: LLMClient | None = None


def get_llm_client() -> LLMClient:
    global _client
    if _client is None:
        _client = LLMClient()
    return _client
