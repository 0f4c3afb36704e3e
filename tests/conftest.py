from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from memobook.main import app
from memobook.shared.db import Base, make_engine, make_session_factory
from memobook.memos.api import get_repository
from memobook.memos.repository import MemoRepository
from memobook.summarize.api import get_gateway
from memobook.summarize.service import SummaryGateway


@pytest.fixture
def session_factory():
    eng = make_engine("sqlite://")
    Base.metadata.create_all(bind=eng)
    yield make_session_factory(eng)
    eng.dispose()


@pytest.fixture
def broken_session_factory():
    # no tables -> every query fails with OperationalError
    eng = make_engine("sqlite://")
    yield make_session_factory(eng)
    eng.dispose()


@pytest.fixture
def events():
    return []


@pytest.fixture
def repo(session_factory, events):
    return MemoRepository(session_factory, notify=lambda event, data: events.append((event, data)))


@pytest.fixture
def broken_repo(broken_session_factory, events):
    return MemoRepository(broken_session_factory, notify=lambda event, data: events.append((event, data)))


class FakeCompletions:
    def __init__(self, text="- point one\n- point two\n- point three", exc=None):
        self.text = text
        self.exc = exc
        self.calls = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.exc:
            raise self.exc
        message = SimpleNamespace(content=self.text)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def fake_openai(text="- point one\n- point two\n- point three", exc=None):
    completions = FakeCompletions(text=text, exc=exc)
    return SimpleNamespace(chat=SimpleNamespace(completions=completions))


@pytest.fixture
def openai_client():
    return fake_openai()


@pytest.fixture
def gateway(openai_client):
    return SummaryGateway(api_key="test-key", client=openai_client)


@pytest.fixture
def client(repo, gateway):
    app.dependency_overrides[get_repository] = lambda: repo
    app.dependency_overrides[get_gateway] = lambda: gateway
    yield TestClient(app)
    app.dependency_overrides.clear()
