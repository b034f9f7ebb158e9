"""
Data models for chat processing.
Contains routing decisions, attachment records and orchestration results.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from models.api_models import SearchResults


class ProviderFamily(Enum):
    """Upstream provider a display model name belongs to."""
    PRIMARY = "gemini"
    SECONDARY = "mistral"
    TERTIARY = "openrouter"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class ModelRoute:
    """Resolved destination for a display model name."""
    family: ProviderFamily
    model_id: str


@dataclass
class Attachment:
    """Uploaded file as seen by the enricher. Metadata is owned by the analysis process."""
    id: str
    original_name: str
    mime_type: str
    metadata: dict = field(default_factory=dict)

    @property
    def analysis_status(self) -> Optional[str]:
        return self.metadata.get("analysisStatus")

    @property
    def ai_analysis(self) -> Optional[str]:
        return self.metadata.get("aiAnalysis")


@dataclass
class EnrichmentResult:
    """Enriched prompt plus the search results that went into it."""
    prompt: str
    search_results: SearchResults
    file_summaries: list[str] = field(default_factory=list)


@dataclass
class AIResult:
    """
    Outcome of the orchestration boundary.
    ``text`` is always populated, with a fallback message when the call failed.
    """
    text: str
    model: str
    used_fallback: bool = False
    duration_ms: int = 0
    error: Optional[str] = None
