"""
Pydantic data models for API requests and responses.
"""
from typing import List, Optional
from pydantic import BaseModel, Field, field_validator

from config import Config


class WebResult(BaseModel):
    """Single web search hit."""
    title: str
    link: str
    snippet: str = ""


class VideoResult(BaseModel):
    """Single YouTube search hit."""
    title: str
    description: str = ""
    url: str
    id: Optional[str] = None
    thumbnail: Optional[str] = None


class ImageResult(BaseModel):
    """Single image search hit."""
    title: str
    link: str
    display_link: str = ""


class SearchResults(BaseModel):
    """Search results grouped by source."""
    web: Optional[List[WebResult]] = None
    youtube: Optional[List[VideoResult]] = None
    images: Optional[List[ImageResult]] = None

    def is_empty(self) -> bool:
        return not (self.web or self.youtube or self.images)


class ChatRequest(BaseModel):
    """Chat request for a single user message."""
    model: str = Field(..., min_length=1, description="Display model name chosen in the UI")
    prompt: str = Field(..., max_length=Config.MAX_PROMPT_LENGTH)
    user_id: Optional[str] = None
    memory_context: Optional[str] = Field(None, description="What the assistant remembers about this user")
    search_results: Optional[SearchResults] = None
    include_web_search: bool = False
    include_youtube_search: bool = False
    include_image_search: bool = False
    attachment_ids: List[str] = Field(default_factory=list)
    file_summaries: List[str] = Field(default_factory=list)

    @field_validator("prompt")
    @classmethod
    def prompt_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Prompt must not be empty")
        return value


class ChatResponse(BaseModel):
    """Assistant turn returned to the client for persistence and display."""
    response: str
    model: str
    search_results: SearchResults
    original_prompt: str


class TitleRequest(BaseModel):
    """Request for a conversation title."""
    message: str = Field(..., min_length=1, max_length=Config.MAX_PROMPT_LENGTH)


class SearchRequest(BaseModel):
    """Direct search request."""
    query: str = Field(..., min_length=1, max_length=500)
