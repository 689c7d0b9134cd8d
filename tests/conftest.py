# Shared fixtures: stub model clients and an app wired to them.

import pytest
from fastapi.testclient import TestClient

from dummydata.app import create_app
from dummydata.settings import Settings


class StubClient:
    """Yields a fixed list of chunks; optionally raises after `fail_after` of them."""

    def __init__(self, chunks=None, fail_after=None, error=None):
        self.model = "stub"
        self.chunks = list(chunks or [])
        self.fail_after = fail_after
        self.error = error or ConnectionError("upstream unavailable")
        self.calls = []

    def set_model(self, model):
        self.model = model

    def stream(self, messages, params):
        self.calls.append((messages, params))
        for i, chunk in enumerate(self.chunks):
            if self.fail_after is not None and i >= self.fail_after:
                raise self.error
            yield chunk
        if self.fail_after is not None and self.fail_after >= len(self.chunks):
            raise self.error


@pytest.fixture
def test_settings():
    return Settings(LLM_PROVIDER="echo", _env_file=None)


@pytest.fixture
def stub():
    return StubClient(['{"a":1}'])


@pytest.fixture
def client(stub, test_settings):
    app = create_app(model_client=stub, app_settings=test_settings)
    with TestClient(app) as c:
        yield c


@pytest.fixture
def session_id(client):
    r = client.post("/api/sessions")
    assert r.status_code == 201
    return r.json()["id"]
