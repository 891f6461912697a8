"""Typed builders for vendor tool definitions.

Tools travel as opaque JSON in the request; these models only help build
well-formed entries.
"""

from typing import Any, Literal

from pydantic import BaseModel, Field


class WebSearchFilters(BaseModel):
    """Domain allow/deny lists for web search."""

    allowed_domains: list[str] | None = Field(default=None, description="e.g. ['ft.com', 'wsj.com']")
    excluded_domains: list[str] | None = None


class UserLocationApproximate(BaseModel):
    country: str | None = Field(default=None, description="ISO-3166 alpha-2, e.g. US")
    city: str | None = None
    region: str | None = None
    timezone: str | None = Field(default=None, description="IANA tz, e.g. America/Bogota")


class UserLocation(BaseModel):
    type: Literal["approximate"] = "approximate"
    approximate: UserLocationApproximate | None = None


class WebSearchTool(BaseModel):
    """The ``{"type": "web_search", ...}`` tool.

    Cannot be combined with ``minimal`` reasoning effort.
    """

    type: Literal["web_search"] = "web_search"
    filters: WebSearchFilters | None = None
    user_location: UserLocation | None = None
    search_context_size: Literal["low", "medium", "high"] | None = "medium"

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)


def web_search_tool(
    allowed_domains: list[str] | None = None,
    search_context_size: Literal["low", "medium", "high"] = "medium",
) -> dict[str, Any]:
    """Web search tool entry, optionally restricted to ``allowed_domains``."""
    tool = WebSearchTool(search_context_size=search_context_size)
    if allowed_domains:
        tool.filters = WebSearchFilters(allowed_domains=allowed_domains)
    return tool.to_wire()
