"""Output text and run metadata extraction from terminal responses."""

import re
from datetime import date, datetime, timezone

import structlog
from pydantic import BaseModel, ConfigDict, Field

from llm_jobs.config import Settings

from .schemas import JobResponse

logger = structlog.get_logger("responses")


DEFAULT_LOGS_URL = Settings.model_fields["OPENAI_LOGS_URL"].default
SNAPSHOT_LENGTH = len("2006-01-02")

_SNAPSHOT_RE = re.compile(r"\d{4}-\d{2}-\d{2}")


class RunMetadata(BaseModel):
    """Audit record of how a response was generated.

    Kept alongside the decoded result for cost tracking and reporting.
    Timestamps are epoch milliseconds; ``elapsed`` is in milliseconds.
    """

    model_config = ConfigDict(frozen=True, protected_namespaces=())

    # Core
    response_id: str = Field(..., description="Vendor job id")
    response_logs_url: str = Field(default="", description="Human-navigable log URL")
    model: str = Field(default="", description="Base model name, e.g. gpt-5-mini")
    model_snapshot: str = Field(default="", description="Snapshot date if present, e.g. 2025-08-07")
    status: str = Field(default="", description="Final job status")
    reasoning_effort: str | None = Field(default=None, description="Echoed reasoning effort")

    # Parameters
    temperature: float | None = None

    # Token accounting
    tokens_in: int = 0
    tokens_cached: int = 0
    tokens_out: int = 0
    tokens_reasoning: int = 0
    tokens_total: int = 0

    # Timing
    started_at: int = 0
    finished_at: int = 0
    elapsed: int = 0


def extract_output_text(response: JobResponse) -> str:
    """Concatenate all ``output_text`` fragments of message items, in order.

    Non-message items (tool calls, reasoning) are skipped. Fragments are
    joined with no separator.
    """
    parts: list[str] = []
    for item in response.output:
        if item.type != "message":
            continue
        for content in item.content or []:
            if content.type == "output_text" and content.text:
                parts.append(content.text)
    return "".join(parts)


def _is_snapshot_date(value: str) -> bool:
    if not _SNAPSHOT_RE.fullmatch(value):
        return False
    try:
        date.fromisoformat(value)
    except ValueError:
        return False
    return True


def parse_model_snapshot(model: str) -> tuple[str, str]:
    """Split a model string into ``(base, snapshot)``.

    Examples:
        "gpt-5-nano-2025-08-07" -> ("gpt-5-nano", "2025-08-07")
        "gpt-5-nano"            -> ("gpt-5-nano", "")
        "gpt-5-nano-rc1"        -> ("gpt-5-nano-rc1", "")
    """
    m = model.strip()

    # Ends with "-YYYY-MM-DD"
    if len(m) > SNAPSHOT_LENGTH:
        tail = m[-SNAPSHOT_LENGTH:]
        if m[-SNAPSHOT_LENGTH - 1] == "-" and _is_snapshot_date(tail):
            return m[:-SNAPSHOT_LENGTH - 1], tail

    # Last dash-delimited segment on its own
    base, dash, candidate = m.rpartition("-")
    if dash and len(candidate) == SNAPSHOT_LENGTH and _is_snapshot_date(candidate):
        return base, candidate

    return m, ""


def _epoch_ms(moment: datetime) -> int:
    return int(moment.timestamp() * 1000)


def build_run_metadata(
    response: JobResponse,
    started_at: datetime,
    logs_url: str = DEFAULT_LOGS_URL,
    finished_at: datetime | None = None,
) -> RunMetadata:
    """Derive a RunMetadata record from a response.

    Args:
        response: Terminal (or last known) response.
        started_at: When the caller started the job. Used instead of the
            vendor's ``created_at``, which has only second precision.
        logs_url: Base of the log URL.
        finished_at: Completion time; defaults to now.

    Returns:
        Immutable RunMetadata.
    """
    logger.debug("run_metadata_building", response_id=response.id, status=response.status)

    if finished_at is None:
        finished_at = datetime.now(timezone.utc)

    base_model, snapshot = parse_model_snapshot(response.model)

    reasoning_effort = None
    if response.reasoning is not None:
        reasoning_effort = response.reasoning.effort

    tokens = {}
    usage = response.usage
    if usage is not None:
        tokens["tokens_in"] = usage.input_tokens
        tokens["tokens_out"] = usage.output_tokens
        tokens["tokens_total"] = usage.total_tokens
        if usage.input_tokens_details is not None:
            tokens["tokens_cached"] = usage.input_tokens_details.cached_tokens
        if usage.output_tokens_details is not None:
            tokens["tokens_reasoning"] = usage.output_tokens_details.reasoning_tokens

    started_ms = _epoch_ms(started_at)
    finished_ms = _epoch_ms(finished_at)

    meta = RunMetadata(
        response_id=response.id,
        response_logs_url=f"{logs_url.rstrip('/')}/{response.id}",
        model=base_model,
        model_snapshot=snapshot,
        status=response.status,
        reasoning_effort=reasoning_effort,
        temperature=response.temperature,
        started_at=started_ms,
        finished_at=finished_ms,
        elapsed=finished_ms - started_ms,
        **tokens,
    )

    logger.debug("run_metadata_built", response_id=meta.response_id, status=meta.status)
    return meta


def log_token_usage(response: JobResponse) -> None:
    """Log token usage for a response, or note that it is unavailable."""
    usage = response.usage
    if usage is None:
        logger.info("token_usage_unavailable", response_id=response.id)
        return

    cached = usage.input_tokens_details.cached_tokens if usage.input_tokens_details else 0
    reasoning = usage.output_tokens_details.reasoning_tokens if usage.output_tokens_details else 0
    logger.info(
        "token_usage",
        response_id=response.id,
        tokens_in=usage.input_tokens,
        tokens_cached=cached,
        tokens_out=usage.output_tokens,
        tokens_reasoning=reasoning,
        tokens_total=usage.total_tokens,
    )
