import pytest

from inkwell.llm.net_loader import (
    NetAuthError,
    NetLLMClient,
    NetProviderError,
    NetRateLimitError,
    NetUsageError,
)


class FakeResponse:
    def __init__(self, status_code=200, payload=None, text=""):
        self.status_code = status_code
        self._payload = payload or {}
        self.text = text

    def json(self):
        return self._payload


class FakeSession:
    def __init__(self, response):
        self.response = response
        self.posts = []

    def post(self, url, headers=None, json=None, timeout=None):
        self.posts.append({"url": url, "headers": headers, "json": json, "timeout": timeout})
        return self.response


def _client(provider, response, api_key="k"):
    session = FakeSession(response)
    client = NetLLMClient(
        provider=provider, model="m", api_key=api_key, timeout=3, session=session,
    )
    return client, session


def test_anthropic_request_and_text():
    client, session = _client(
        "anthropic",
        FakeResponse(payload={"content": [{"type": "text", "text": "hello there"}]}),
    )

    assert client.complete("sys", "user msg", max_tokens=20, temperature=0.7) == "hello there"

    sent = session.posts[0]
    assert sent["timeout"] == 3
    assert sent["headers"]["x-api-key"] == "k"
    assert sent["json"]["system"] == "sys"
    assert sent["json"]["messages"] == [{"role": "user", "content": "user msg"}]
    assert sent["json"]["max_tokens"] == 20


def test_anthropic_omits_empty_system():
    client, session = _client("anthropic", FakeResponse(payload={"content": []}))

    assert client.complete("", "derive", max_tokens=80) == ""
    assert "system" not in session.posts[0]["json"]


def test_groq_request_and_text():
    client, session = _client(
        "groq",
        FakeResponse(payload={"choices": [{"message": {"content": "from groq"}}]}),
    )

    assert client.complete("sys", "hi", max_tokens=5, temperature=0.3) == "from groq"
    messages = session.posts[0]["json"]["messages"]
    assert messages[0] == {"role": "system", "content": "sys"}
    assert session.posts[0]["headers"]["Authorization"] == "Bearer k"


def test_max_tokens_is_capped():
    client, session = _client("groq", FakeResponse(payload={"choices": [{"message": {"content": ""}}]}))
    client.complete("", "hi", max_tokens=100000)
    assert session.posts[0]["json"]["max_tokens"] == 256


@pytest.mark.parametrize(
    "status, error",
    [(401, NetAuthError), (429, NetRateLimitError), (500, NetProviderError)],
)
def test_status_errors_are_typed(status, error):
    client, _ = _client("anthropic", FakeResponse(status_code=status, text="nope"))
    with pytest.raises(error):
        client.complete("sys", "hi", max_tokens=5)


def test_missing_key_and_empty_prompt(monkeypatch):
    monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)
    client, session = _client("anthropic", FakeResponse(), api_key=None)

    with pytest.raises(NetAuthError):
        client.complete("sys", "hi", max_tokens=5)
    with pytest.raises(NetUsageError):
        client.complete("sys", "   ", max_tokens=5)
    assert session.posts == []
