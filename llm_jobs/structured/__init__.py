"""Structured output module - strict schemas and output decoding."""

from .schema import (
    strict_object,
    TextVerbosity,
    TextFormatType,
    TextFormat,
    TextOptions,
    text_as_plain,
    text_as_json_object,
    text_as_json_schema,
)
from .decode import decode_output


__all__ = [
    "strict_object",
    "TextVerbosity",
    "TextFormatType",
    "TextFormat",
    "TextOptions",
    "text_as_plain",
    "text_as_json_object",
    "text_as_json_schema",
    "decode_output",
]
