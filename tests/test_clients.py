# ===============================================
# tests/test_clients.py
# Transport parsing for the Ollama, OpenAI and Gemini clients,
# with the network / SDK replaced by fakes.
# ===============================================
import json
from types import SimpleNamespace

import pytest
import requests

from dummydata.errors import GenerationError
from dummydata.generate import DataGenerator
from dummydata.generate.clients import gemini_client, ollama_client
from dummydata.generate.clients.gemini_client import GeminiClient
from dummydata.generate.clients.ollama_client import OllamaClient
from dummydata.generate.clients.openai_client import OpenAIClient
from dummydata.types import DataFormat, GenerationOptions

OPTS = GenerationOptions()


def _collect(client, fmt=DataFormat.JSON):
    seen = []
    DataGenerator(model_client=client).generate("3 users", fmt, OPTS, on_chunk=seen.append)
    return seen


# -------------------------
# Ollama
# -------------------------
class FakeOllamaResponse:
    def __init__(self, lines, status_error=None):
        self.lines = lines
        self.status_error = status_error
        self.closed = False

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.closed = True
        return False

    def raise_for_status(self):
        if self.status_error:
            raise self.status_error

    def iter_lines(self, decode_unicode=False):
        yield from self.lines


def _ndjson(*objs):
    return [json.dumps(o) if isinstance(o, dict) else o for o in objs]


def test_ollama_streams_until_done(monkeypatch):
    calls = []
    resp = FakeOllamaResponse(_ndjson(
        {"message": {"content": "["}},
        "",
        {"message": {"content": "1"}},
        {"message": {"content": "]"}, "done": True},
        {"message": {"content": "after done"}},
    ))

    def fake_post(url, json=None, stream=False, timeout=None):
        calls.append((url, json, stream, timeout))
        return resp

    monkeypatch.setattr(ollama_client.requests, "post", fake_post)
    client = OllamaClient(model="llama3", host="http://ollama:11434/", timeout=5)
    assert _collect(client) == ["[", "1", "]"]

    url, payload, stream, timeout = calls[0]
    assert url == "http://ollama:11434/api/chat"
    assert stream is True and payload["stream"] is True
    assert timeout == 5
    assert [m["role"] for m in payload["messages"]] == ["system", "user"]
    assert resp.closed


def test_ollama_error_line_is_generation_error(monkeypatch):
    resp = FakeOllamaResponse(_ndjson({"message": {"content": "a"}}, {"error": "model not found"}))
    monkeypatch.setattr(ollama_client.requests, "post", lambda *a, **k: resp)
    seen = []
    with pytest.raises(GenerationError) as exc:
        DataGenerator(model_client=OllamaClient()).generate("x", DataFormat.CSV, OPTS, on_chunk=seen.append)
    assert seen == ["a"]
    assert "model not found" in str(exc.value)


def test_ollama_http_error_is_generation_error(monkeypatch):
    resp = FakeOllamaResponse([], status_error=requests.HTTPError("401 Unauthorized"))
    monkeypatch.setattr(ollama_client.requests, "post", lambda *a, **k: resp)
    with pytest.raises(GenerationError):
        _collect(OllamaClient())


# -------------------------
# OpenAI
# -------------------------
def _oa_chunk(text):
    return SimpleNamespace(choices=[SimpleNamespace(delta=SimpleNamespace(content=text))])


class FakeCompletions:
    def __init__(self, chunks=None, error=None):
        self.chunks = chunks or []
        self.error = error
        self.kwargs = None

    def create(self, **kwargs):
        self.kwargs = kwargs
        if self.error:
            raise self.error
        return iter(self.chunks)


def _openai_with(completions):
    client = OpenAIClient(api_key="test-key", model="gpt-test")
    client.client = SimpleNamespace(chat=SimpleNamespace(completions=completions))
    return client


def test_openai_skips_empty_choices_and_deltas():
    completions = FakeCompletions([
        _oa_chunk("id,"),
        SimpleNamespace(choices=[]),
        _oa_chunk(None),
        _oa_chunk("name\n"),
    ])
    assert _collect(_openai_with(completions), DataFormat.CSV) == ["id,", "name\n"]
    assert completions.kwargs["stream"] is True
    assert completions.kwargs["model"] == "gpt-test"
    assert completions.kwargs["messages"][0]["role"] == "system"


def test_openai_error_is_generation_error():
    completions = FakeCompletions(error=PermissionError("insufficient_quota"))
    with pytest.raises(GenerationError) as exc:
        _collect(_openai_with(completions))
    assert isinstance(exc.value.__cause__, PermissionError)


# -------------------------
# Gemini
# -------------------------
class FakeGenerativeModel:
    instances = []

    def __init__(self, model_name, system_instruction=None):
        self.model_name = model_name
        self.system_instruction = system_instruction
        self.call = None
        FakeGenerativeModel.instances.append(self)

    def generate_content(self, contents, generation_config=None, stream=False):
        self.call = (contents, generation_config, stream)
        yield SimpleNamespace(parts=["p"], text="<data>")
        yield SimpleNamespace(parts=[])  # blocked chunk: no text attribute at all
        yield SimpleNamespace(parts=["p"], text="</data>")


class FailingGenerativeModel(FakeGenerativeModel):
    def generate_content(self, contents, generation_config=None, stream=False):
        raise ConnectionError("API key not valid")


@pytest.fixture
def fake_genai(monkeypatch):
    FakeGenerativeModel.instances = []
    configured = {}
    fake = SimpleNamespace(
        configure=lambda api_key=None: configured.update(api_key=api_key),
        GenerativeModel=FakeGenerativeModel,
    )
    monkeypatch.setattr(gemini_client, "genai", fake)
    return fake, configured


def test_gemini_skips_chunks_without_parts(fake_genai):
    fake, configured = fake_genai
    client = GeminiClient(api_key="g-key", model="gemini-test")
    assert _collect(client, DataFormat.XML) == ["<data>", "</data>"]

    assert configured["api_key"] == "g-key"
    model = FakeGenerativeModel.instances[-1]
    assert model.model_name == "gemini-test"
    assert "dummy data generator" in model.system_instruction
    contents, config, stream = model.call
    assert stream is True
    assert contents.startswith("Generate data in XML format")
    assert config["temperature"] == 0.7


def test_gemini_error_is_generation_error(fake_genai):
    fake, _ = fake_genai
    fake.GenerativeModel = FailingGenerativeModel
    with pytest.raises(GenerationError) as exc:
        _collect(GeminiClient(api_key="bad"))
    assert "API key not valid" in str(exc.value)
