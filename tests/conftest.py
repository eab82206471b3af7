"""Shared test fixtures for the Procurement Intelligence test suite."""

import asyncio

import pytest
from fastapi.testclient import TestClient

from config.settings import settings
from database.connection import close_db
from pipeline import ProcurementPipeline


class ScriptedCompletion:
    """
    Completion service that replays canned responses.

    Responses are consumed in order; the last one repeats. An exception
    instance in the script is raised instead of returned.
    """

    def __init__(self, *responses):
        self.responses = list(responses) or [""]
        self.calls = []

    async def complete(self, messages, json_object=False):
        self.calls.append({"messages": messages, "json_object": json_object})
        await asyncio.sleep(0)
        response = self.responses.pop(0) if len(self.responses) > 1 else self.responses[0]
        if isinstance(response, Exception):
            raise response
        return response

    def prompt(self, index=-1):
        """Concatenated message contents of one recorded call."""
        return "\n".join(m["content"] for m in self.calls[index]["messages"])


class FakeMailService:
    def __init__(self, inbox=None):
        self.sent = []
        self.inbox = inbox or []

    async def send(self, to, subject, text=None, html=None):
        self.sent.append({"to": to, "subject": subject, "text": text, "html": html})
        return {"messageId": f"<msg-{len(self.sent)}@test>"}

    async def fetch_inbox(self, limit=5):
        return self.inbox[:limit]


@pytest.fixture
def scripted():
    """Factory for scripted completion services."""
    return ScriptedCompletion


@pytest.fixture
def database(tmp_path, monkeypatch):
    """Point the engine at a throwaway SQLite file."""
    monkeypatch.setattr(
        settings,
        "database_url",
        f"sqlite+aiosqlite:///{tmp_path / 'procurement.db'}"
    )
    asyncio.run(close_db())
    yield
    asyncio.run(close_db())


@pytest.fixture
def completion():
    return ScriptedCompletion("Score: 82. Great pricing.")


@pytest.fixture
def mail():
    return FakeMailService(inbox=[
        {"seq": 7, "subject": "Re: RFP laptops", "from": "sales@acme.test", "date": None},
        {"seq": 6, "subject": "Quote", "from": "bids@globex.test", "date": None},
    ])


@pytest.fixture
def client(database, completion, mail):
    """API client wired to the scripted completion service."""
    from api.main import create_app

    app = create_app(pipeline=ProcurementPipeline(completion), mail_service=mail)
    with TestClient(app) as test_client:
        yield test_client
