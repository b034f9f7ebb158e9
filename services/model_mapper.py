"""
Model name mapping between UI display names and provider model identifiers.
"""
from models.chat_models import ProviderFamily, ModelRoute


class ModelNameMapper:
    """Classifies display names into provider families and maps them to model ids."""

    # Checked in this order; the first family whose prefix matches wins
    FAMILY_PREFIXES = [
        (ProviderFamily.PRIMARY, ("Gemini",)),
        (ProviderFamily.SECONDARY, ("Mistral", "Mixtral")),
        (ProviderFamily.TERTIARY, ("OpenRouter",)),
    ]

    MODEL_TABLES = {
        ProviderFamily.PRIMARY: {
            "Gemini 2.5 Flash": "gemini-2.5-flash",
            "Gemini 2.5 Pro": "gemini-2.5-pro",
            "Gemini 1.5 Flash": "gemini-1.5-flash",
            "Gemini 1.5 Pro": "gemini-1.5-pro",
            "Gemini 1.0 Pro": "gemini-1.0-pro",
        },
        ProviderFamily.SECONDARY: {
            "Mistral Large": "mistral-large-latest",
            "Mistral Small": "mistral-small-latest",
            "Mistral 7B": "mistral-7b-instruct",
            "Mixtral 8x7B": "mixtral-8x7b-instruct",
            "Mixtral 8x22B": "mixtral-8x22b-instruct",
        },
        ProviderFamily.TERTIARY: {
            "OpenRouter GPT-4o": "openai/gpt-4o",
            "OpenRouter GPT-4o Mini": "openai/gpt-4o-mini",
            "OpenRouter Claude 3.5": "anthropic/claude-3.5-sonnet",
            "OpenRouter Llama 3.1 70B": "meta-llama/llama-3.1-70b-instruct",
            "OpenRouter Qwen 2.5 72B": "qwen/qwen-2.5-72b-instruct",
            "OpenRouter DeepSeek V3": "deepseek/deepseek-chat",
            "OpenRouter Gemma 2 27B": "google/gemma-2-27b-it",
            "OpenRouter Mistral Nemo": "mistralai/mistral-nemo",
        },
    }

    DEFAULT_MODEL_IDS = {
        ProviderFamily.PRIMARY: "gemini-2.5-flash",
        ProviderFamily.SECONDARY: "mistral-large-latest",
        ProviderFamily.TERTIARY: "openai/gpt-4o",
    }

    DEFAULT_DISPLAY_NAME = "Gemini 2.5 Flash"

    @classmethod
    def classify(cls, display_name: str) -> ProviderFamily:
        """Return the provider family a display name belongs to."""
        for family, prefixes in cls.FAMILY_PREFIXES:
            if display_name.startswith(prefixes):
                return family
        return ProviderFamily.UNKNOWN

    @classmethod
    def map_display_name(cls, family: ProviderFamily, display_name: str) -> str:
        """
        Translate a display name into the provider-specific model id.
        Unknown names, and the UNKNOWN family, fall back to a default model id.
        """
        if family == ProviderFamily.UNKNOWN:
            return cls.DEFAULT_MODEL_IDS[ProviderFamily.PRIMARY]
        return cls.MODEL_TABLES[family].get(display_name, cls.DEFAULT_MODEL_IDS[family])

    @classmethod
    def resolve(cls, display_name: str) -> ModelRoute:
        """Classify and map in one step."""
        family = cls.classify(display_name)
        return ModelRoute(family=family, model_id=cls.map_display_name(family, display_name))

    @classmethod
    def available_models(cls) -> dict[str, list[str]]:
        """Display names grouped by provider family."""
        return {family.value: list(table.keys()) for family, table in cls.MODEL_TABLES.items()}
