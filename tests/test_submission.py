"""Tests for request building and job submission."""

import pytest
from pydantic import ValidationError

from llm_jobs.exceptions import EncodeError, ResponseDecodeError
from llm_jobs.responses import (
    ImagePart,
    JobRequest,
    ReasoningEffort,
    TextPart,
    fetch,
    submit,
    web_search_tool,
)
from llm_jobs.structured import strict_object, text_as_json_schema
from llm_jobs.transport import TransportError


def _request(**overrides) -> JobRequest:
    fields = dict(
        model="gpt-5-mini",
        reasoning_effort=ReasoningEffort.LOW,
        instructions="You need to respond to user prompt",
        developer_message='Answer in this json format: {"response": "<your response>"}',
        user_content="Hello, this is a test message",
        max_output_tokens=4096,
        text=text_as_json_schema("schema-name", strict_object({"response": {"type": "string"}})),
    )
    fields.update(overrides)
    return JobRequest(**fields)


class TestJobRequestPayload:
    """Tests for JobRequest.to_payload."""

    def test_background_and_store_always_set(self):
        """Test every job is submitted as a pollable, stored background job."""
        payload = _request().to_payload()

        assert payload["background"] is True
        assert payload["store"] is True

    def test_core_fields(self):
        """Test model, reasoning, temperature and token budget."""
        payload = _request().to_payload()

        assert payload["model"] == "gpt-5-mini"
        assert payload["instructions"] == "You need to respond to user prompt"
        assert payload["reasoning"] == {"effort": "low"}
        assert payload["temperature"] == 1.0
        assert payload["max_output_tokens"] == 4096

    def test_plain_text_user_content(self):
        """Test plain text content is sent as a string."""
        payload = _request().to_payload()

        assert payload["input"] == [
            {"role": "developer", "content": 'Answer in this json format: {"response": "<your response>"}'},
            {"role": "user", "content": "Hello, this is a test message"},
        ]

    def test_text_and_image_user_content(self):
        """Test composite content is sent as typed parts."""
        request = _request(user_content=[
            TextPart(text="OCR text"),
            ImagePart(image_url="data:image/png;base64,AAAA"),
        ])

        user = request.to_payload()["input"][1]

        assert user == {
            "role": "user",
            "content": [
                {"type": "input_text", "text": "OCR text"},
                {"type": "input_image", "image_url": "data:image/png;base64,AAAA"},
            ],
        }

    def test_content_parts_validate_from_dicts(self):
        """Test parts are discriminated by their type tag."""
        request = _request(user_content=[
            {"type": "input_text", "text": "hi"},
            {"type": "input_image", "image_url": "https://img.test/a.png", "detail": "high"},
        ])

        assert isinstance(request.user_content[0], TextPart)
        assert isinstance(request.user_content[1], ImagePart)
        assert request.user_content[1].detail == "high"

    def test_strict_schema_format(self):
        """Test the structured output format block."""
        fmt = _request().to_payload()["text"]["format"]

        assert fmt["type"] == "json_schema"
        assert fmt["name"] == "schema-name"
        assert fmt["strict"] is True
        assert fmt["schema"]["required"] == ["response"]
        assert fmt["schema"]["additionalProperties"] is False

    def test_optional_fields_omitted(self):
        """Test unset optional fields don't appear on the wire."""
        payload = _request(text=None, max_output_tokens=None, temperature=None).to_payload()

        for key in ("text", "max_output_tokens", "temperature", "tools", "tool_choice", "previous_response_id"):
            assert key not in payload

    def test_tools_and_chaining(self):
        """Test tools, tool choice and previous response id are passed through."""
        payload = _request(
            tools=[web_search_tool(["ft.com"])],
            tool_choice="auto",
            previous_response_id="resp_prev",
        ).to_payload()

        assert payload["tools"] == [{
            "type": "web_search",
            "filters": {"allowed_domains": ["ft.com"]},
            "search_context_size": "medium",
        }]
        assert payload["tool_choice"] == "auto"
        assert payload["previous_response_id"] == "resp_prev"

    def test_request_is_immutable(self):
        """Test JobRequest cannot be changed after construction."""
        request = _request()

        with pytest.raises(ValidationError):
            request.model = "gpt-5"


class TestSubmit:
    """Tests for submit and fetch."""

    @pytest.mark.asyncio
    async def test_submit_posts_payload_and_parses_response(self, fake_api, envelope):
        """Test submission sends the payload to /responses."""
        fake_api.submit_envelope = envelope(status="queued", job_id="resp_abc")

        response = await submit(fake_api.transport(), _request())

        assert response.id == "resp_abc"
        assert response.status == "queued"
        assert fake_api.post_count == 1
        assert str(fake_api.requests[0].url) == "https://api.test/v1/responses"
        body = fake_api.last_post_body()
        assert body["background"] is True
        assert body["store"] is True
        assert body["model"] == "gpt-5-mini"

    @pytest.mark.asyncio
    async def test_submit_may_complete_immediately(self, fake_api, envelope):
        """Test a synchronous completion comes back terminal."""
        fake_api.submit_envelope = envelope(status="completed", texts=['{"response": "hi"}'])

        response = await submit(fake_api.transport(), _request())

        assert response.is_terminal_success
        assert response.output[0].content[0].text == '{"response": "hi"}'

    @pytest.mark.asyncio
    async def test_submit_http_error_surfaces_body(self, mock_transport_factory, wire_response):
        """Test a rejected submission reports the vendor's body verbatim."""
        body = b'{"error": {"message": "Unsupported parameter: temperature"}}'
        transport = mock_transport_factory(lambda request: wire_response(400, body))

        with pytest.raises(TransportError) as exc_info:
            await submit(transport, _request())

        assert exc_info.value.status_code == 400
        assert "Unsupported parameter" in exc_info.value.body

    @pytest.mark.asyncio
    async def test_submit_invalid_envelope_raises_decode_error(self, mock_transport_factory, wire_response):
        """Test a non-JSON body is a decode error, not a transport error."""
        transport = mock_transport_factory(lambda request: wire_response(200, b"<html>oops</html>"))

        with pytest.raises(ResponseDecodeError) as exc_info:
            await submit(transport, _request())

        assert exc_info.value.operation == "submit"
        assert exc_info.value.raw == b"<html>oops</html>"

    @pytest.mark.asyncio
    async def test_unencodable_payload_raises_encode_error(self, fake_api):
        """Test payloads JSON cannot represent fail before any network call."""
        request = _request(temperature=float("nan"))

        with pytest.raises(EncodeError) as exc_info:
            await submit(fake_api.transport(), request)

        assert exc_info.value.operation == "submit"
        assert exc_info.value.payload["model"] == "gpt-5-mini"
        assert fake_api.requests == []

    @pytest.mark.asyncio
    async def test_fetch_gets_by_id(self, fake_api, envelope):
        """Test status reads hit /responses/{id}."""
        fake_api.poll_envelopes = [envelope(status="in_progress", job_id="resp_9")]

        response = await fetch(fake_api.transport(), "resp_9")

        assert response.status == "in_progress"
        assert fake_api.requests[0].method == "GET"
        assert str(fake_api.requests[0].url) == "https://api.test/v1/responses/resp_9"
