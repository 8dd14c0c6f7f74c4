import os
import tempfile
import uuid

DB_PATH = os.path.join(tempfile.gettempdir(), f"compiler-test-{uuid.uuid4().hex}.db")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{DB_PATH}"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["AI_API_KEY"] = ""

from types import SimpleNamespace

import httpx
import pytest
from sqlalchemy import create_engine

from compiler.api.deps import get_simulator
from compiler.db.enums import SubmissionStatus
from compiler.db.models import Base
from compiler.main import app
from compiler.schemas.run import ExecutionResult


# schema resets go through the sync driver so fixtures never touch an event loop
schema_engine = create_engine(f"sqlite:///{DB_PATH}")


@pytest.fixture(autouse=True)
def fresh_db():
    Base.metadata.drop_all(schema_engine)
    Base.metadata.create_all(schema_engine)
    yield


def pytest_sessionfinish(session, exitstatus):
    if os.path.exists(DB_PATH):
        os.remove(DB_PATH)


class FakeSimulator:
    """Stands in for the model-backed simulator; records every call."""

    def __init__(self, output="Hello, World!", status=SubmissionStatus.success):
        self.output = output
        self.status = status
        self.calls = []

    async def run(self, code, language, stdin=""):
        self.calls.append((code, language.key, stdin))
        ok = self.status == SubmissionStatus.success
        return ExecutionResult(
            success=ok,
            output=self.output,
            status=self.status,
            execution_time=12,
            memory=2048,
        )


@pytest.fixture
def simulator():
    fake = FakeSimulator()
    app.dependency_overrides[get_simulator] = lambda: fake
    yield fake
    app.dependency_overrides.pop(get_simulator, None)


@pytest.fixture
def client():
    return httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://test")


def make_completion(content):
    message = SimpleNamespace(content=content)
    return SimpleNamespace(choices=[SimpleNamespace(message=message)])


class FakeChatClient:
    """Mimics ``AsyncOpenAI().chat.completions.create``."""

    def __init__(self, content="", error=None):
        self.content = content
        self.error = error
        self.requests = []
        self.chat = SimpleNamespace(completions=SimpleNamespace(create=self._create))

    async def _create(self, **kwargs):
        self.requests.append(kwargs)
        if self.error is not None:
            raise self.error
        return make_completion(self.content)


async def register(ac, username="ada", email=None, password="supersecret"):
    email = email or f"{username}-{uuid.uuid4().hex[:6]}@example.com"
    r = await ac.post(
        "/api/auth/register",
        json={"username": username, "email": email, "password": password},
    )
    assert r.status_code == 201, r.text
    return r.json()["token"]


def bearer(token):
    return {"Authorization": f"Bearer {token}"}
