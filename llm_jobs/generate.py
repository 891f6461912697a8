"""Structured generation: prompt in, typed result plus run metadata out."""

import base64
from typing import Any, Generic, NamedTuple, TypeVar

import structlog
from pydantic import BaseModel, ConfigDict, Field

from llm_jobs.config import get_settings
from llm_jobs.exceptions import OutputDecodeError
from llm_jobs.responses import (
    ImagePart,
    JobRequest,
    ReasoningEffort,
    RunMetadata,
    TextPart,
    run_job,
)
from llm_jobs.structured import decode_output, strict_object, text_as_json_schema
from llm_jobs.transport import ResponsesTransport

logger = structlog.get_logger("generate")

T = TypeVar("T")

DEFAULT_SCHEMA_NAME = "schema-name"


class Prompt(BaseModel):
    """What the caller wants to ask.

    Attributes:
        instructions: System-level instructions.
        developer_message: Developer message (usually output format rules).
        user_message: The user text.
        image_url: Optional image, as a remote URL or ``data:`` URL.
    """

    model_config = ConfigDict(frozen=True)

    instructions: str = Field(default="", description="System-level instructions")
    developer_message: str = Field(default="", description="Developer message")
    user_message: str = Field(..., description="User text")
    image_url: str | None = Field(default=None, description="Image URL or data URL")

    def user_content(self) -> str | list[TextPart | ImagePart]:
        """Plain text, or a text+image composite when an image is set."""
        if not self.image_url:
            return self.user_message
        return [
            TextPart(text=self.user_message),
            ImagePart(image_url=self.image_url),
        ]


class StructuredResult(NamedTuple, Generic[T]):
    """Decoded output with the run metadata that produced it."""

    value: T
    metadata: RunMetadata


def image_data_url(data: bytes, mime_type: str = "image/png") -> str:
    """Encode image bytes as a base64 ``data:`` URL for ``input_image``."""
    encoded = base64.b64encode(data).decode("ascii")
    return f"data:{mime_type};base64,{encoded}"


async def generate_structured(
    transport: ResponsesTransport,
    prompt: Prompt,
    output_type: type[T] | Any,
    schema_properties: dict[str, Any] | None,
    max_output_tokens: int,
    *,
    model: str | None = None,
    reasoning_effort: ReasoningEffort = ReasoningEffort.LOW,
    tools: list[dict[str, Any]] | None = None,
    tool_choice: Any | None = "auto",
    previous_response_id: str | None = None,
    schema_name: str = DEFAULT_SCHEMA_NAME,
    poll_interval: float | None = None,
    poll_timeout: float | None = None,
) -> StructuredResult[T]:
    """Run a strict structured-output job and decode its result.

    The property map is turned into a strict object schema (every property
    required, nothing extra) so the output can be decoded into
    ``output_type`` directly.

    Args:
        transport: Configured transport.
        prompt: Instructions, messages and optional image.
        output_type: Type to decode the output into (pydantic model, dict...).
        schema_properties: Top-level property map of the output schema.
        max_output_tokens: Output token budget.
        model: Model id; defaults to ``DEFAULT_MODEL`` from settings.
        reasoning_effort: Reasoning effort.
        tools: Opaque tool definitions (e.g. ``web_search_tool()``).
        tool_choice: Tool-choice directive; the vendor default is "auto".
        previous_response_id: Chain onto an earlier job.
        schema_name: Name sent with the schema.
        poll_interval: Seconds between status polls; defaults to
            ``POLL_INTERVAL_SECONDS``.
        poll_timeout: Polling deadline in seconds, ``<= 0`` polls forever;
            defaults to ``POLL_DEADLINE_SECONDS``.

    Returns:
        StructuredResult with the decoded value and run metadata.

    Raises:
        OutputDecodeError: If the output does not match ``output_type``;
            ``metadata`` is attached.
        LLMJobError: Any other encode, transport, decode, job or timeout error.
    """
    settings = get_settings()
    if poll_interval is None:
        poll_interval = settings.POLL_INTERVAL_SECONDS
    if poll_timeout is None:
        poll_timeout = settings.POLL_DEADLINE_SECONDS

    schema = strict_object(schema_properties)

    request = JobRequest(
        model=model or settings.DEFAULT_MODEL,
        reasoning_effort=reasoning_effort,
        instructions=prompt.instructions,
        developer_message=prompt.developer_message,
        user_content=prompt.user_content(),
        # GPT-5 family only accepts 1.0
        temperature=1.0,
        max_output_tokens=max_output_tokens,
        text=text_as_json_schema(schema_name, schema, strict=True),
        previous_response_id=previous_response_id,
        tools=tools or None,
        tool_choice=tool_choice,
    )

    result = await run_job(
        transport,
        request,
        poll_interval=poll_interval,
        poll_timeout=poll_timeout,
    )
    logger.debug("output_text", job_id=result.metadata.response_id, text=result.text)

    try:
        value = decode_output(result.text, output_type)
    except OutputDecodeError as e:
        e.metadata = result.metadata
        logger.error(
            "output_schema_violation",
            job_id=result.metadata.response_id,
            raw_text=e.raw_text,
        )
        raise

    return StructuredResult(value=value, metadata=result.metadata)
