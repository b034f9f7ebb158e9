import pytest

from models.chat_models import ProviderFamily
from services.model_mapper import ModelNameMapper


@pytest.mark.parametrize("display_name, expected_family", [
    ("Gemini 2.5 Flash", ProviderFamily.PRIMARY),
    ("Gemini Ultra 9000", ProviderFamily.PRIMARY),
    ("Mistral Large", ProviderFamily.SECONDARY),
    ("Mixtral 8x7B", ProviderFamily.SECONDARY),
    ("OpenRouter GPT-4o", ProviderFamily.TERTIARY),
    ("Unknown-Model-XYZ", ProviderFamily.UNKNOWN),
    ("gemini 2.5 flash", ProviderFamily.UNKNOWN),
    ("", ProviderFamily.UNKNOWN),
])
def test_classify_by_family_prefix(display_name, expected_family):
    """Given a display name, classify should pick the family from its prefix (case-sensitive)."""
    assert ModelNameMapper.classify(display_name) == expected_family


@pytest.mark.parametrize("family, display_name, expected_id", [
    (ProviderFamily.PRIMARY, "Gemini 2.5 Flash", "gemini-2.5-flash"),
    (ProviderFamily.PRIMARY, "Gemini 1.5 Pro", "gemini-1.5-pro"),
    (ProviderFamily.SECONDARY, "Mistral Large", "mistral-large-latest"),
    (ProviderFamily.SECONDARY, "Mixtral 8x22B", "mixtral-8x22b-instruct"),
    (ProviderFamily.TERTIARY, "OpenRouter Claude 3.5", "anthropic/claude-3.5-sonnet"),
    (ProviderFamily.TERTIARY, "OpenRouter DeepSeek V3", "deepseek/deepseek-chat"),
])
def test_map_known_display_names(family, display_name, expected_id):
    """Given a known display name, map_display_name should return its provider model id."""
    assert ModelNameMapper.map_display_name(family, display_name) == expected_id


@pytest.mark.parametrize("family, display_name, expected_default", [
    (ProviderFamily.PRIMARY, "Gemini 3.0 Hyper", "gemini-2.5-flash"),
    (ProviderFamily.SECONDARY, "Mistral Tiny", "mistral-large-latest"),
    (ProviderFamily.TERTIARY, "OpenRouter Something New", "openai/gpt-4o"),
    (ProviderFamily.UNKNOWN, "Unknown-Model-XYZ", "gemini-2.5-flash"),
])
def test_map_unknown_names_to_family_default(family, display_name, expected_default):
    """Given an unmapped display name, map_display_name should return the family default and never raise."""
    assert ModelNameMapper.map_display_name(family, display_name) == expected_default


def test_mapping_table_sizes():
    """Each family ships its full table of display names."""
    models = ModelNameMapper.available_models()
    assert len(models["gemini"]) == 5
    assert len(models["mistral"]) == 5
    assert len(models["openrouter"]) == 8


def test_every_table_entry_classifies_into_its_own_family():
    """Every display name listed for a family must also carry that family's prefix."""
    for family, table in ModelNameMapper.MODEL_TABLES.items():
        for display_name in table:
            assert ModelNameMapper.classify(display_name) == family


def test_resolve_unknown_routes_to_primary_default():
    route = ModelNameMapper.resolve("Unknown-Model-XYZ")
    assert route.family == ProviderFamily.UNKNOWN
    assert route.model_id == "gemini-2.5-flash"
