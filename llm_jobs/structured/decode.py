"""Decoding of model output text into caller types."""

from typing import Any, TypeVar

from pydantic import TypeAdapter, ValidationError

from llm_jobs.exceptions import OutputDecodeError

T = TypeVar("T")


def decode_output(text: str, target: type[T] | Any) -> T:
    """Decode concatenated output text as JSON into ``target``.

    ``target`` may be a pydantic model, a dataclass, a TypedDict or any other
    type pydantic can validate (``dict`` for an untyped mapping).

    Raises:
        OutputDecodeError: If the text is not valid JSON for ``target``.
    """
    try:
        return TypeAdapter(target).validate_json(text)
    except ValidationError as e:
        raise OutputDecodeError(raw_text=text, reason=str(e)) from e
