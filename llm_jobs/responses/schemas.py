"""Pydantic schemas for the Responses API wire format."""

from enum import StrEnum
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from llm_jobs.structured import TextOptions


class ReasoningEffort(StrEnum):
    """How much reasoning the model may spend."""
    MINIMAL = "minimal"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class InputRole(StrEnum):
    """Author of an input item."""
    DEVELOPER = "developer"
    USER = "user"
    ASSISTANT = "assistant"
    TOOL = "tool"


class JobStatus(StrEnum):
    """Known job statuses, plus the local ``timeout`` pseudo-status."""
    QUEUED = "queued"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    INCOMPLETE = "incomplete"
    FAILED = "failed"
    CANCELLED = "cancelled"
    EXPIRED = "expired"
    TIMEOUT = "timeout"


# An empty status means the API answered synchronously
TERMINAL_SUCCESS_STATUSES = frozenset({"", JobStatus.COMPLETED, JobStatus.INCOMPLETE})
TERMINAL_FAILURE_STATUSES = frozenset({JobStatus.FAILED, JobStatus.CANCELLED, JobStatus.EXPIRED})


class Reasoning(BaseModel):
    """Reasoning configuration, sent and echoed back.

    Attributes:
        effort: Reasoning effort. Kept as a plain string on the way back in
            case the vendor echoes a value this client doesn't know.
        summary: Reasoning summary mode (requires a verified organization).
    """

    effort: str | None = None
    summary: str | None = None


# ----- Request types we send -----

class TextPart(BaseModel):
    """Text fragment of a multi-part user message."""

    model_config = ConfigDict(frozen=True)

    type: Literal["input_text"] = "input_text"
    text: str


class ImagePart(BaseModel):
    """Image fragment of a multi-part user message.

    Attributes:
        image_url: Remote URL or ``data:`` URL of the image.
        detail: Optional fidelity hint (low/high/auto).
    """

    model_config = ConfigDict(frozen=True)

    type: Literal["input_image"] = "input_image"
    image_url: str
    detail: str | None = None


ContentPart = Annotated[TextPart | ImagePart, Field(discriminator="type")]

# Either plain text or a list of text/image parts
MessageContent = str | list[ContentPart]


class InputItem(BaseModel):
    """One message in the request ``input`` list."""

    model_config = ConfigDict(frozen=True)

    role: InputRole
    content: MessageContent


class JobRequest(BaseModel):
    """Immutable description of one generation attempt.

    Background execution and storage are always requested so every job can be
    polled and retrieved by id; they are not caller options.

    Attributes:
        model: Model identifier.
        reasoning_effort: Reasoning effort for the job.
        instructions: System-level instructions.
        developer_message: Developer message sent before the user content.
        user_content: Plain text or text+image composite.
        temperature: Sampling temperature (1.0 for models that reject others).
        max_output_tokens: Output token budget.
        text: Output format options (strict schema for structured output).
        previous_response_id: Chains the job onto an earlier one.
        tools: Opaque tool definitions.
        tool_choice: Opaque tool-choice directive.
    """

    model_config = ConfigDict(frozen=True)

    model: str
    reasoning_effort: ReasoningEffort = ReasoningEffort.LOW
    instructions: str = ""
    developer_message: str = ""
    user_content: MessageContent = ""
    temperature: float | None = 1.0
    max_output_tokens: int | None = None
    text: TextOptions | None = None
    previous_response_id: str | None = None
    tools: list[dict[str, Any]] | None = None
    tool_choice: Any | None = None

    def input_items(self) -> list[InputItem]:
        """Developer message followed by the user content."""
        return [
            InputItem(role=InputRole.DEVELOPER, content=self.developer_message),
            InputItem(role=InputRole.USER, content=self.user_content),
        ]

    def to_payload(self) -> dict[str, Any]:
        """Build the POST /responses body. Unset optional fields are omitted."""
        payload: dict[str, Any] = {
            "model": self.model,
            "instructions": self.instructions,
            "input": [
                item.model_dump(mode="json", exclude_none=True)
                for item in self.input_items()
            ],
            "reasoning": {"effort": self.reasoning_effort.value},
            "background": True,
            "store": True,
        }
        if self.temperature is not None:
            payload["temperature"] = self.temperature
        if self.max_output_tokens is not None:
            payload["max_output_tokens"] = self.max_output_tokens
        if self.text is not None:
            payload["text"] = self.text.model_dump(mode="json", by_alias=True, exclude_none=True)
        if self.tools:
            payload["tools"] = self.tools
        if self.tool_choice is not None:
            payload["tool_choice"] = self.tool_choice
        if self.previous_response_id:
            payload["previous_response_id"] = self.previous_response_id
        return payload


# ----- Response types we parse -----

class ContentItem(BaseModel):
    """Content fragment of an output message."""

    model_config = ConfigDict(extra="ignore")

    type: str
    text: str | None = None


class OutputItem(BaseModel):
    """Output item: a message, or a tool/reasoning event."""

    model_config = ConfigDict(extra="ignore")

    id: str = ""
    type: str
    role: str | None = None
    content: list[ContentItem] | None = None


class InputTokensDetails(BaseModel):
    cached_tokens: int = 0


class OutputTokensDetails(BaseModel):
    reasoning_tokens: int = 0


class Usage(BaseModel):
    """Token accounting block."""

    model_config = ConfigDict(extra="ignore")

    input_tokens: int = 0
    input_tokens_details: InputTokensDetails | None = None
    output_tokens: int = 0
    output_tokens_details: OutputTokensDetails | None = None
    total_tokens: int = 0


class JobResponse(BaseModel):
    """Response envelope returned by both POST and GET.

    Only the fields this client reads are typed; ``error`` stays opaque since
    its shape is open-ended.
    """

    model_config = ConfigDict(extra="ignore")

    id: str = ""
    object: str = ""
    created_at: int | None = None
    background: bool | None = None
    model: str = ""
    status: str = ""
    output: list[OutputItem] = Field(default_factory=list)
    usage: Usage | None = None
    previous_response_id: str | None = None
    error: Any | None = None
    temperature: float | None = None
    reasoning: Reasoning | None = None

    @property
    def is_terminal_success(self) -> bool:
        return self.status in TERMINAL_SUCCESS_STATUSES

    @property
    def is_terminal_failure(self) -> bool:
        return self.status in TERMINAL_FAILURE_STATUSES

    @property
    def error_message(self) -> str | None:
        """Vendor error message, read from the opaque error payload."""
        if self.error is None:
            return None
        if isinstance(self.error, dict):
            message = self.error.get("message")
            if message:
                return str(message)
        return str(self.error)

    @property
    def error_code(self) -> str | None:
        """Vendor error code, read from the opaque error payload."""
        if isinstance(self.error, dict) and self.error.get("code"):
            return str(self.error["code"])
        return None
