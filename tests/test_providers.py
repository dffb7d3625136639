import json

import httpx
import pytest

from git_ai_commit.exceptions import ProviderError
from git_ai_commit.models import commit_message_schema
from git_ai_commit.providers import OllamaProvider, OpenAIProvider, create_provider

SCHEMA = commit_message_schema()
CONTENT = '{"commitTitle":"Add foo","commitDescription":""}'


def test_ollama_chat_request(monkeypatch):
    monkeypatch.delenv("OLLAMA_HOST", raising=False)
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"message": {"role": "assistant", "content": CONTENT}})

    provider = OllamaProvider(transport=httpx.MockTransport(handler))

    assert provider.complete("llama3.2", "the prompt", SCHEMA) == CONTENT
    assert seen["url"] == "http://localhost:11434/api/chat"
    assert seen["body"] == {
        "model": "llama3.2",
        "messages": [{"role": "user", "content": "the prompt"}],
        "stream": False,
        "format": SCHEMA,
    }


def test_ollama_lists_models():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/api/tags"
        return httpx.Response(
            200, json={"models": [{"name": "llama3.2:latest"}, {"name": "qwen2.5-coder:7b"}]}
        )

    provider = OllamaProvider("http://ollama:11434", transport=httpx.MockTransport(handler))
    assert provider.list_models() == ["llama3.2:latest", "qwen2.5-coder:7b"]


def test_ollama_host_from_environment(monkeypatch):
    monkeypatch.setenv("OLLAMA_HOST", "127.0.0.1:8080")
    provider = OllamaProvider(transport=httpx.MockTransport(lambda r: httpx.Response(200)))
    assert provider.base_url == "http://127.0.0.1:8080"


def test_ollama_http_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, json={"error": "model 'nope' not found"})

    provider = OllamaProvider("http://ollama:11434", transport=httpx.MockTransport(handler))
    with pytest.raises(ProviderError) as ei:
        provider.complete("nope", "prompt", SCHEMA)
    assert "404" in str(ei.value)
    assert "not found" in str(ei.value)


def test_ollama_connection_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    provider = OllamaProvider("http://ollama:11434", transport=httpx.MockTransport(handler))
    with pytest.raises(ProviderError) as ei:
        provider.list_models()
    assert "Cannot connect to Ollama" in str(ei.value)


def test_ollama_unexpected_envelope():
    provider = OllamaProvider(
        "http://ollama:11434",
        transport=httpx.MockTransport(lambda r: httpx.Response(200, json={"done": True})),
    )
    with pytest.raises(ProviderError):
        provider.complete("llama3.2", "prompt", SCHEMA)


def test_openai_chat_request():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["auth"] = request.headers["Authorization"]
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"choices": [{"message": {"content": CONTENT}}]})

    provider = OpenAIProvider(
        api_key="sk-test",
        base_url="https://api.example.com/v1",
        transport=httpx.MockTransport(handler),
    )

    assert provider.complete("gpt-4o-mini", "the prompt", SCHEMA) == CONTENT
    assert seen["url"] == "https://api.example.com/v1/chat/completions"
    assert seen["auth"] == "Bearer sk-test"
    assert seen["body"]["messages"] == [{"role": "user", "content": "the prompt"}]
    assert seen["body"]["response_format"]["type"] == "json_schema"
    assert seen["body"]["response_format"]["json_schema"]["schema"] == SCHEMA


def test_openai_lists_models():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"data": [{"id": "gpt-4o"}, {"id": "gpt-4o-mini"}]})

    provider = OpenAIProvider(api_key="sk-test", transport=httpx.MockTransport(handler))
    assert provider.list_models() == ["gpt-4o", "gpt-4o-mini"]


def test_openai_requires_api_key(monkeypatch):
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    with pytest.raises(ValueError):
        OpenAIProvider()


def test_create_provider():
    assert isinstance(create_provider("ollama"), OllamaProvider)
    assert isinstance(create_provider("OpenAI", api_key="sk-test"), OpenAIProvider)
    with pytest.raises(ValueError):
        create_provider("deepseek")
