"""Strict JSON-schema construction and text format options."""

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


def strict_object(properties: dict[str, Any] | None) -> dict[str, Any]:
    """Build a strict JSON-schema object from a property map.

    Every top-level property becomes required (sorted, so the same logical
    schema always serializes identically) and no additional properties are
    allowed.

    Args:
        properties: Field name to JSON-schema fragment. None means no fields.

    Returns:
        The object schema.
    """
    if properties is None:
        properties = {}
    return {
        "type": "object",
        "properties": properties,
        "additionalProperties": False,
        "required": sorted(properties),
    }


class TextVerbosity(StrEnum):
    """Optional output length hint."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class TextFormatType(StrEnum):
    """Supported output formats."""
    TEXT = "text"
    JSON_OBJECT = "json_object"
    JSON_SCHEMA = "json_schema"


class TextFormat(BaseModel):
    """Output format selector.

    For ``json_schema`` the vendor requires ``name`` and ``schema``.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    type: TextFormatType = Field(..., description="Output format")
    name: str | None = Field(default=None, description="Schema name (json_schema only)")
    json_schema: dict[str, Any] | None = Field(default=None, alias="schema", description="Raw schema object")
    strict: bool | None = Field(default=None, description="Enforce exact schema adherence")


class TextOptions(BaseModel):
    """The ``text`` block of a request."""

    model_config = ConfigDict(frozen=True)

    format: TextFormat
    verbosity: TextVerbosity | None = None


def text_as_plain(verbosity: TextVerbosity | None = None) -> TextOptions:
    return TextOptions(format=TextFormat(type=TextFormatType.TEXT), verbosity=verbosity)


def text_as_json_object() -> TextOptions:
    return TextOptions(format=TextFormat(type=TextFormatType.JSON_OBJECT))


def text_as_json_schema(name: str, schema: dict[str, Any], strict: bool = True) -> TextOptions:
    """Request structured output matching ``schema``."""
    return TextOptions(
        format=TextFormat(
            type=TextFormatType.JSON_SCHEMA,
            name=name,
            json_schema=schema,
            strict=strict,
        )
    )
