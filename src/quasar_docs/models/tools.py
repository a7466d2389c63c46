from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, field_validator

from quasar_docs.models.index import SearchResult

MAX_SEARCH_LIMIT = 50


class ResponseFormat(StrEnum):
    MARKDOWN = "markdown"
    JSON = "json"


class _ToolInput(BaseModel):
    model_config = ConfigDict(extra="forbid")

    response_format: ResponseFormat = ResponseFormat.MARKDOWN


def _bounded(v: str, field: str, max_len: int) -> str:
    v = v.strip()
    if not v:
        raise ValueError(f"{field} must not be empty")
    if len(v) > max_len:
        raise ValueError(f"{field} must not exceed {max_len} characters")
    return v


def _optional_section(v: str | None) -> str | None:
    if v is None:
        return None
    v = v.strip()
    if len(v) > 100:
        raise ValueError("section must not exceed 100 characters")
    return v or None


# ---------------------------------------------------------------------------
# Inputs
# ---------------------------------------------------------------------------


class GetComponentInput(_ToolInput):
    component: str

    @field_validator("component")
    @classmethod
    def validate_component(cls, v: str) -> str:
        return _bounded(v, "component", 100)


class GetPageInput(_ToolInput):
    path: str

    @field_validator("path")
    @classmethod
    def validate_path(cls, v: str) -> str:
        return _bounded(v, "path", 500)


class SearchDocsInput(_ToolInput):
    query: str
    section: str | None = None
    limit: int = 10
    offset: int = 0
    include_content: bool = False

    @field_validator("query")
    @classmethod
    def validate_query(cls, v: str) -> str:
        return _bounded(v, "query", 200)

    @field_validator("section")
    @classmethod
    def validate_section(cls, v: str | None) -> str | None:
        return _optional_section(v)

    @field_validator("limit")
    @classmethod
    def validate_limit(cls, v: int) -> int:
        if not 1 <= v <= MAX_SEARCH_LIMIT:
            raise ValueError(f"limit must be between 1 and {MAX_SEARCH_LIMIT}")
        return v

    @field_validator("offset")
    @classmethod
    def validate_offset(cls, v: int) -> int:
        if v < 0:
            raise ValueError("offset must be >= 0")
        return v


class ListSectionsInput(_ToolInput):
    section: str | None = None

    @field_validator("section")
    @classmethod
    def validate_section(cls, v: str | None) -> str | None:
        return _optional_section(v)


# ---------------------------------------------------------------------------
# Outputs
# ---------------------------------------------------------------------------


class GetComponentOutput(BaseModel):
    component: str  # Original input
    normalized_name: str
    path: str
    url: str
    content: str
    truncated: bool = False
    truncation_message: str | None = None


class GetPageOutput(BaseModel):
    requested_path: str
    resolved_path: str
    url: str
    content: str
    truncated: bool = False
    truncation_message: str | None = None


class SectionNotFoundOutput(BaseModel):
    """Returned (not raised) when a section filter matches nothing."""

    section: str
    found: bool = False
    message: str
    available_sections: list[str]


class SearchDocsOutput(BaseModel):
    query: str
    section: str | None = None
    total: int  # Merged candidates gathered, including the over-fetch margin
    count: int
    offset: int
    results: list[SearchResult]
    has_more: bool
    next_offset: int | None = None
    truncated: bool = False
    truncation_message: str | None = None
    message: str | None = None


class SectionSummary(BaseModel):
    name: str
    title: str
    path: str
    description: str
    page_count: int


class ListSectionsOutput(BaseModel):
    total: int
    sections: list[SectionSummary]


class PageSummary(BaseModel):
    title: str
    path: str
    url: str


class SectionPagesOutput(BaseModel):
    section: str
    title: str
    count: int
    pages: list[PageSummary]
