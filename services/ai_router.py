"""
Unified AI router.
Dispatches a display model name to the right provider client and owns the
single recovery boundary that turns provider failures into fallback replies.
"""
import time
from typing import Optional

from config import Config
from models.chat_models import AIResult, ProviderFamily
from services.fallback import pick_fallback_response
from services.model_mapper import ModelNameMapper
from services.providers import GeminiClient, MistralClient, OpenRouterClient
from utils.constants import TITLE_PROMPT_TEMPLATE
from utils.http_client import HTTPClientManager
from utils.logger import app_logger, log_ai_event
from utils.prompt_sanitizer import PromptSanitizer


class AIRouter:
    """Routes prompts to Gemini, Mistral or OpenRouter."""

    TITLE_MAX_LENGTH = 60

    def __init__(
        self,
        primary: GeminiClient,
        secondary: MistralClient,
        tertiary: OpenRouterClient,
        mapper: type[ModelNameMapper] = ModelNameMapper,
    ):
        self.primary = primary
        self.secondary = secondary
        self.tertiary = tertiary
        self.mapper = mapper

    @classmethod
    def from_config(cls) -> "AIRouter":
        """Build the router and its provider clients once, from process configuration."""
        http_client = HTTPClientManager.get_provider_client()
        return cls(
            primary=GeminiClient(Config.GEMINI_API_KEY, http_client),
            secondary=MistralClient(Config.MISTRAL_API_KEY, http_client),
            tertiary=OpenRouterClient(Config.OPENROUTER_API_KEY, http_client),
        )

    async def query_ai(self, display_model_name: str, prompt: str) -> str:
        """
        Send a prompt to the provider behind a display model name.

        Unrecognized names go to the primary provider's default model.
        Provider errors propagate to the caller.
        """
        route = self.mapper.resolve(display_model_name)
        app_logger.info(f"queryAI: '{display_model_name}' -> {route.family.value}/{route.model_id}")

        if route.family == ProviderFamily.PRIMARY:
            return await self.primary.generate(route.model_id, prompt)
        elif route.family == ProviderFamily.SECONDARY:
            return await self.secondary.generate(route.model_id, prompt)
        elif route.family == ProviderFamily.TERTIARY:
            return await self.tertiary.generate(route.model_id, prompt)
        elif route.family == ProviderFamily.UNKNOWN:
            app_logger.info(f"Using default Gemini model for: {display_model_name}")
            return await self.primary.generate(route.model_id, prompt)

        raise AssertionError(f"Unhandled provider family: {route.family}")

    async def run(
        self,
        display_model_name: str,
        enriched_prompt: str,
        user_id: Optional[str] = None,
        memory_context: Optional[str] = None,
    ) -> AIResult:
        """
        Sanitize, dispatch and time one AI call. Never raises.

        Args:
            display_model_name: Model chosen in the UI
            enriched_prompt: Prompt built by the enricher
            user_id: Caller identity, for logging only
            memory_context: Already embedded in the enriched prompt by the enricher

        Returns:
            AIResult whose text is the provider answer or a fallback message
        """
        prompt = PromptSanitizer.sanitize_prompt(enriched_prompt)
        started = time.perf_counter()

        try:
            text = await self.query_ai(display_model_name, prompt)
        except Exception as e:
            duration_ms = int((time.perf_counter() - started) * 1000)
            log_ai_event(
                "ai_error",
                model=display_model_name,
                userId=user_id,
                promptLength=len(prompt),
                durationMs=duration_ms,
                errorMessage=str(e),
            )
            return AIResult(
                text=pick_fallback_response(),
                model=display_model_name,
                used_fallback=True,
                duration_ms=duration_ms,
                error=str(e),
            )

        duration_ms = int((time.perf_counter() - started) * 1000)
        log_ai_event(
            "ai_response",
            model=display_model_name,
            userId=user_id,
            promptLength=len(prompt),
            responseLength=len(text),
            durationMs=duration_ms,
        )
        return AIResult(text=text, model=display_model_name, duration_ms=duration_ms)

    async def query_ai_with_fallback(
        self,
        display_model_name: str,
        enriched_prompt: str,
        user_id: Optional[str] = None,
        memory_context: Optional[str] = None,
    ) -> str:
        """Same as run() but returns only the text."""
        result = await self.run(display_model_name, enriched_prompt, user_id, memory_context)
        return result.text

    async def generate_title(self, first_message: str) -> str:
        """
        Ask the primary provider for a short conversation title.
        Errors propagate; there is no fallback here.
        """
        prompt = TITLE_PROMPT_TEMPLATE.format(message=PromptSanitizer.sanitize_prompt(first_message))
        model_id = self.mapper.DEFAULT_MODEL_IDS[ProviderFamily.PRIMARY]
        title = await self.primary.generate(model_id, prompt)
        return self.clean_title(title)

    @classmethod
    def clean_title(cls, title: str) -> str:
        """Strip quotes, trailing punctuation and excess length from a generated title."""
        cleaned = title.strip().splitlines()[0] if title.strip() else ""
        cleaned = cleaned.strip().strip('"\'').rstrip('.').strip()
        if len(cleaned) > cls.TITLE_MAX_LENGTH:
            cleaned = cleaned[:cls.TITLE_MAX_LENGTH].rstrip() + "..."
        return cleaned or "Nueva conversación"
