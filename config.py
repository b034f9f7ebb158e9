"""
Configuration module for the Stelluna chat router.
Handles environment variables and application settings.
"""
import os
from dotenv import load_dotenv

load_dotenv()


class Config:
    """Application configuration class."""

    # AI provider keys
    GEMINI_API_KEY: str = os.getenv("GEMINI_API_KEY", "")
    MISTRAL_API_KEY: str = os.getenv("MISTRAL_API_KEY", "")
    OPENROUTER_API_KEY: str = os.getenv("OPENROUTER_API_KEY", "")

    # Search keys
    GOOGLE_API_KEY: str = os.getenv("GOOGLE_API_KEY", "")
    GOOGLE_SEARCH_ENGINE_ID: str = os.getenv("GOOGLE_SEARCH_ENGINE_ID", "")
    YOUTUBE_API_KEY: str = os.getenv("YOUTUBE_API_KEY", "") or os.getenv("GOOGLE_API_KEY", "")

    # Provider endpoints
    GEMINI_BASE_URL: str = "https://generativelanguage.googleapis.com/v1beta/models"
    MISTRAL_URL: str = "https://api.mistral.ai/v1/chat/completions"
    OPENROUTER_URL: str = "https://openrouter.ai/api/v1/chat/completions"

    # OpenRouter attribution headers
    OPENROUTER_REFERER: str = os.getenv("OPENROUTER_REFERER", "https://localhost:5000")
    OPENROUTER_APP_TITLE: str = os.getenv("OPENROUTER_APP_TITLE", "AI Chat Assistant")

    # Search endpoints
    GOOGLE_SEARCH_URL: str = "https://www.googleapis.com/customsearch/v1"
    YOUTUBE_SEARCH_URL: str = "https://www.googleapis.com/youtube/v3/search"

    # Application Settings
    APP_TITLE: str = "Stelluna Chat Router"
    MAX_PROMPT_LENGTH: int = 8000
    SEARCH_RESULTS_COUNT: int = 5
    ENRICHMENT_MAX_RESULTS: int = 3

    # Sampling parameters shared by every provider
    AI_MAX_TOKENS: int = 1000
    AI_TEMPERATURE: float = 0.7

    # Timeouts (in seconds)
    AI_TIMEOUT: float = 60.0
    SEARCH_TIMEOUT: float = 15.0

    # Search cache
    SEARCH_CACHE_TTL: int = 60 * 60
    SEARCH_CACHE_MAX_SIZE: int = 500
    SEARCH_CACHE_PATH: str = os.getenv("SEARCH_CACHE_PATH", "data/search_cache.db")

    @classmethod
    def has_google_search(cls) -> bool:
        """Check whether both Google Custom Search credentials are present."""
        return bool(cls.GOOGLE_API_KEY and cls.GOOGLE_SEARCH_ENGINE_ID)

    @classmethod
    def validate(cls) -> None:
        """Validate configuration and print warnings for missing API keys."""
        if not cls.GEMINI_API_KEY:
            print("   WARNING: GEMINI_API_KEY not found in .env file")
            print("   Gemini models and the default route will answer with fallback messages.")

        if not cls.MISTRAL_API_KEY:
            print("   WARNING: MISTRAL_API_KEY not found in .env file")
            print("   Mistral and Mixtral models will answer with fallback messages.")

        if not cls.OPENROUTER_API_KEY:
            print("   WARNING: OPENROUTER_API_KEY not found in .env file")
            print("   OpenRouter models will answer with fallback messages.")

        if not cls.has_google_search():
            print("   WARNING: GOOGLE_API_KEY or GOOGLE_SEARCH_ENGINE_ID not found in .env file")
            print("   Web and image search enrichment will be skipped.")


Config.validate()
