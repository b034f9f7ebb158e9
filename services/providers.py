"""
Provider clients for the upstream chat-completion APIs.
Each client talks to exactly one provider and raises on failure; there are no retries.
"""
import base64
from pathlib import Path
from typing import Any, Optional

import httpx

from config import Config
from services.exceptions import ConfigurationError, ProviderError
from utils.constants import (
    EMPTY_COMPLETION_TEXT,
    IMAGE_MIME_TYPES,
    DEFAULT_IMAGE_MIME_TYPE,
    DEFAULT_IMAGE_ANALYSIS_PROMPT,
)
from utils.logger import app_logger


class BaseProviderClient:
    """Shared HTTP plumbing for provider clients."""

    PROVIDER_NAME = "provider"

    def __init__(
        self,
        api_key: str,
        http_client: httpx.AsyncClient,
        max_tokens: int = Config.AI_MAX_TOKENS,
        temperature: float = Config.AI_TEMPERATURE,
    ):
        self.api_key = api_key
        self.http_client = http_client
        self.max_tokens = max_tokens
        self.temperature = temperature

    def _require_api_key(self) -> None:
        if not self.api_key:
            raise ConfigurationError(f"{self.PROVIDER_NAME} API key not found")

    async def _post_json(self, url: str, headers: dict, payload: dict) -> Any:
        """
        POST a JSON payload and return the decoded body.

        Raises:
            ProviderError: on transport failure, non-OK status or an undecodable body
        """
        try:
            response = await self.http_client.post(url, headers=headers, json=payload)
        except httpx.TimeoutException as e:
            raise ProviderError(self.PROVIDER_NAME, f"request timed out ({e})") from e
        except httpx.RequestError as e:
            raise ProviderError(self.PROVIDER_NAME, f"request failed ({e})") from e

        if not response.is_success:
            raise ProviderError(
                self.PROVIDER_NAME,
                f"{response.status_code} {response.reason_phrase}",
                status_code=response.status_code
            )

        try:
            return response.json()
        except ValueError as e:
            raise ProviderError(self.PROVIDER_NAME, "response body is not valid JSON", response.status_code) from e

    async def generate(self, model_id: str, prompt: str) -> str:
        raise NotImplementedError


class OpenAICompatibleClient(BaseProviderClient):
    """Client for providers exposing an OpenAI-style /chat/completions endpoint."""

    URL = ""

    def _headers(self) -> dict:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

    def _extract_text(self, body: Any) -> str:
        """First completion's content, or the empty-completion literal."""
        choices = body.get("choices") if isinstance(body, dict) else None
        if not isinstance(choices, list):
            raise ProviderError(self.PROVIDER_NAME, "malformed response: missing choices")

        if not choices:
            return EMPTY_COMPLETION_TEXT

        first = choices[0]
        if not isinstance(first, dict):
            raise ProviderError(self.PROVIDER_NAME, "malformed response: choice is not an object")

        message = first.get("message") or {}
        if not isinstance(message, dict):
            raise ProviderError(self.PROVIDER_NAME, "malformed response: message is not an object")

        content = message.get("content")
        if content is not None and not isinstance(content, str):
            raise ProviderError(self.PROVIDER_NAME, "malformed response: content is not text")
        return content or EMPTY_COMPLETION_TEXT

    async def generate(self, model_id: str, prompt: str) -> str:
        """Single-turn completion."""
        self._require_api_key()

        payload = {
            "model": model_id,
            "messages": [{"role": "user", "content": prompt}],
            "max_tokens": self.max_tokens,
            "temperature": self.temperature,
        }

        app_logger.debug(f"{self.PROVIDER_NAME} request: model={model_id}, prompt_chars={len(prompt)}")
        body = await self._post_json(self.URL, self._headers(), payload)
        return self._extract_text(body)


class MistralClient(OpenAICompatibleClient):
    """Secondary provider: Mistral AI."""

    PROVIDER_NAME = "Mistral"
    URL = Config.MISTRAL_URL


class OpenRouterClient(OpenAICompatibleClient):
    """Tertiary provider: OpenRouter multi-model aggregator."""

    PROVIDER_NAME = "OpenRouter"
    URL = Config.OPENROUTER_URL

    def __init__(
        self,
        api_key: str,
        http_client: httpx.AsyncClient,
        referer: str = Config.OPENROUTER_REFERER,
        app_title: str = Config.OPENROUTER_APP_TITLE,
        **kwargs
    ):
        super().__init__(api_key, http_client, **kwargs)
        self.referer = referer
        self.app_title = app_title

    def _headers(self) -> dict:
        headers = super()._headers()
        headers["HTTP-Referer"] = self.referer
        headers["X-Title"] = self.app_title
        return headers


class GeminiClient(BaseProviderClient):
    """Primary provider: Google Gemini generateContent REST API."""

    PROVIDER_NAME = "Gemini"
    BASE_URL = Config.GEMINI_BASE_URL

    @staticmethod
    def get_image_mime_type(filename: str) -> str:
        """MIME type for an image file by extension; unknown extensions are treated as JPEG."""
        return IMAGE_MIME_TYPES.get(Path(filename).suffix.lower(), DEFAULT_IMAGE_MIME_TYPE)

    @staticmethod
    def to_gemini_contents(messages: list[dict]) -> list[dict]:
        """Convert {role, content} messages to Gemini contents (assistant becomes "model")."""
        return [
            {
                "role": "model" if msg.get("role") == "assistant" else "user",
                "parts": [{"text": msg.get("content", "")}],
            }
            for msg in messages
        ]

    def _url(self, model_id: str) -> str:
        return f"{self.BASE_URL}/{model_id}:generateContent"

    def _headers(self) -> dict:
        return {
            "x-goog-api-key": self.api_key,
            "Content-Type": "application/json",
        }

    def _generation_config(self) -> dict:
        return {
            "maxOutputTokens": self.max_tokens,
            "temperature": self.temperature,
        }

    def _extract_text(self, body: Any) -> str:
        """Concatenate the text parts of the first candidate."""
        if not isinstance(body, dict):
            raise ProviderError(self.PROVIDER_NAME, "malformed response: expected a JSON object")

        candidates = body.get("candidates") or []
        if not isinstance(candidates, list):
            raise ProviderError(self.PROVIDER_NAME, "malformed response: candidates is not a list")
        if not candidates:
            feedback: Optional[dict] = body.get("promptFeedback")
            if feedback:
                app_logger.warning(f"Gemini returned no candidates: {feedback}")
            return EMPTY_COMPLETION_TEXT

        candidate = candidates[0]
        if not isinstance(candidate, dict):
            raise ProviderError(self.PROVIDER_NAME, "malformed response: candidate is not an object")

        content = candidate.get("content") or {}
        parts = (content.get("parts") or []) if isinstance(content, dict) else None
        if not isinstance(parts, list) or not all(isinstance(part, dict) for part in parts):
            raise ProviderError(self.PROVIDER_NAME, "malformed response: unexpected content parts")

        texts = [part.get("text") or "" for part in parts]
        if not all(isinstance(text, str) for text in texts):
            raise ProviderError(self.PROVIDER_NAME, "malformed response: part text is not a string")
        return "".join(texts) or EMPTY_COMPLETION_TEXT

    async def _generate_contents(self, model_id: str, contents: list[dict]) -> str:
        self._require_api_key()

        payload = {
            "contents": contents,
            "generationConfig": self._generation_config(),
        }
        body = await self._post_json(self._url(model_id), self._headers(), payload)
        return self._extract_text(body)

    async def generate(self, model_id: str, prompt: str) -> str:
        """Single-turn completion."""
        app_logger.debug(f"Gemini request: model={model_id}, prompt_chars={len(prompt)}")
        return await self._generate_contents(
            model_id,
            [{"role": "user", "parts": [{"text": prompt}]}]
        )

    async def generate_with_context(self, messages: list[dict], model_id: str = "gemini-2.5-flash") -> str:
        """Multi-turn completion from a {role, content} history."""
        app_logger.debug(f"Gemini context request: model={model_id}, turns={len(messages)}")
        return await self._generate_contents(model_id, self.to_gemini_contents(messages))

    async def analyze_image(
        self,
        image_path: str | Path,
        prompt: str = DEFAULT_IMAGE_ANALYSIS_PROMPT,
        model_id: str = "gemini-2.5-flash"
    ) -> str:
        """Describe an image stored on disk. The file is small and read synchronously."""
        self._require_api_key()

        path = Path(image_path)
        try:
            raw = path.read_bytes()
        except OSError as e:
            raise ProviderError(self.PROVIDER_NAME, f"cannot read image {path.name}: {e.strerror or e}") from e
        image_data = base64.b64encode(raw).decode("ascii")
        contents = [{
            "role": "user",
            "parts": [
                {"inline_data": {"mime_type": self.get_image_mime_type(path.name), "data": image_data}},
                {"text": prompt},
            ],
        }]

        app_logger.debug(f"Gemini image analysis: model={model_id}, file={path.name}")
        return await self._generate_contents(model_id, contents)
