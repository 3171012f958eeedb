"""Tests for request and response translation"""

import pytest

from nim_proxy.core.errors import ServerError
from nim_proxy.core.translation import (
    build_upstream_request,
    parse_choice,
    parse_upstream_response,
    parse_usage,
)
from nim_proxy.models.openai import ChatCompletionRequest


class TestBuildUpstreamRequest:
    """Test client -> upstream request translation"""

    def test_defaults_applied(self):
        request = ChatCompletionRequest(
            model="gpt-4",
            messages=[{"role": "user", "content": "Hi"}],
        )
        upstream = build_upstream_request(request, "qwen/qwen3-coder-480b-a35b-instruct")

        assert upstream.model_dump() == {
            "model": "qwen/qwen3-coder-480b-a35b-instruct",
            "messages": [{"role": "user", "content": "Hi"}],
            "temperature": 0.7,
            "max_tokens": 4096,
            "stream": False,
        }

    def test_stream_always_disabled(self):
        request = ChatCompletionRequest(
            model="gpt-4",
            messages=[{"role": "user", "content": "Hi"}],
            stream=True,
        )
        assert build_upstream_request(request, "m").stream is False

    def test_messages_forwarded_verbatim(self):
        """Unknown message fields reach the upstream untouched"""
        messages = [
            {"role": "user", "content": [{"type": "text", "text": "Hi"}]},
            {"role": "tool", "content": "42", "tool_call_id": "call_1"},
        ]
        request = ChatCompletionRequest(model="gpt-4", messages=messages)
        assert build_upstream_request(request, "m").messages == messages

    def test_extra_request_fields_ignored(self):
        request = ChatCompletionRequest.model_validate({
            "model": "gpt-4",
            "messages": [],
            "top_p": 0.5,
            "user": "someone",
        })
        assert "top_p" not in build_upstream_request(request, "m").model_dump()


class TestParseUpstreamResponse:
    """Test upstream -> client response translation"""

    def test_full_reply(self):
        reply = {
            "choices": [
                {
                    "index": 1,
                    "message": {"role": "assistant", "content": "Hi there"},
                    "finish_reason": "length",
                }
            ],
            "usage": {"prompt_tokens": 3, "completion_tokens": 2, "total_tokens": 5},
        }
        response = parse_upstream_response(
            reply, "gpt-4", response_id="chatcmpl-1", created=100
        )

        assert response.model_dump() == {
            "id": "chatcmpl-1",
            "object": "chat.completion",
            "created": 100,
            "model": "gpt-4",
            "choices": [{
                "index": 1,
                "message": {"role": "assistant", "content": "Hi there"},
                "finish_reason": "length",
            }],
            "usage": {"prompt_tokens": 3, "completion_tokens": 2, "total_tokens": 5},
        }

    def test_generated_id_and_timestamp(self):
        response = parse_upstream_response({"choices": []}, "gpt-4")
        assert response.id.startswith("chatcmpl-")
        assert response.created > 0
        assert response.choices == []

    def test_public_model_echoed(self):
        reply = {"model": "deepseek-ai/deepseek-v3.1", "choices": []}
        assert parse_upstream_response(reply, "gpt-4o").model == "gpt-4o"

    def test_multiple_choices_keep_order(self):
        reply = {"choices": [
            {"index": 0, "message": {"content": "a"}},
            {"index": 1, "message": {"content": "b"}},
        ]}
        response = parse_upstream_response(reply, "gpt-4")
        assert [c.message.content for c in response.choices] == ["a", "b"]

    @pytest.mark.parametrize("reply", [
        None,
        [],
        "text",
        {},
        {"choices": None},
        {"choices": ["not-a-dict"]},
    ])
    def test_unusable_reply(self, reply):
        with pytest.raises(ServerError) as exc_info:
            parse_upstream_response(reply, "gpt-4")
        assert exc_info.value.status_code == 500


class TestParseDefaults:
    """Test defaulting of missing fields"""

    def test_empty_choice(self):
        choice = parse_choice({})
        assert choice.index == 0
        assert choice.message.role == "assistant"
        assert choice.message.content == ""
        assert choice.finish_reason == "stop"

    def test_null_fields(self):
        choice = parse_choice({
            "index": None,
            "message": {"role": None, "content": None},
            "finish_reason": None,
        })
        assert choice.message.role == "assistant"
        assert choice.message.content == ""
        assert choice.finish_reason == "stop"

    def test_message_not_an_object(self):
        assert parse_choice({"message": "hi"}).message.content == ""

    def test_missing_usage(self):
        usage = parse_usage(None)
        assert (usage.prompt_tokens, usage.completion_tokens, usage.total_tokens) == (0, 0, 0)

    def test_partial_usage(self):
        usage = parse_usage({"prompt_tokens": 7})
        assert usage.prompt_tokens == 7
        assert usage.completion_tokens == 0
        assert usage.total_tokens == 0


class TestContentPassThrough:
    """Non-empty content is returned as the upstream sent it"""

    def test_content_parts_preserved(self):
        parts = [{"type": "text", "text": "hi"}]
        reply = {"choices": [{"message": {"role": "assistant", "content": parts}}]}

        response = parse_upstream_response(reply, "gpt-4")
        assert response.choices[0].message.content == parts
        assert response.model_dump()["choices"][0]["message"]["content"] == parts
