import os

# must be set before carrynote creates its engine
os.environ["DATABASE_URL"] = "sqlite://"

import pytest
import requests

from carrynote import models
from carrynote.database import engine
from carrynote.line.client import get_messenger
from carrynote.main import app


class FakeMessenger:
    """Collects replies instead of calling the LINE API."""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.replies: list[tuple[str, str]] = []

    def reply(self, reply_token: str, text: str) -> bool:
        if self.fail:
            raise requests.ConnectionError("LINE API unreachable")
        self.replies.append((reply_token, text))
        return True


@pytest.fixture(autouse=True)
def clean_db(monkeypatch):
    monkeypatch.delenv("LINE_CHANNEL_SECRET", raising=False)
    monkeypatch.delenv("LINE_CHANNEL_ACCESS_TOKEN", raising=False)
    models.Base.metadata.drop_all(bind=engine)
    models.Base.metadata.create_all(bind=engine)
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def messenger():
    fake = FakeMessenger()
    app.dependency_overrides[get_messenger] = lambda: fake
    return fake


@pytest.fixture
def failing_messenger():
    fake = FakeMessenger(fail=True)
    app.dependency_overrides[get_messenger] = lambda: fake
    return fake
