from __future__ import annotations
from typing import Any, Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

from coach.dependencies import get_llm_client
from coach.main import create_app
from coach.models import AppUser, Message, PracticeSession, Scenario
from coach.settings import Settings


WELL_FORMED_FEEDBACK = '{"summary":"ok","clarity":4,"empathy":3,"assertiveness":5,"recommendations":"• a\\n• b\\n• c"}'


class FakeChatClient:
	"""Stands in for ChatCompletionClient and records every call."""

	def __init__(self, reply: str = "Hello, I'm your interviewer today.") -> None:
		self.reply = reply
		self.error: Optional[Exception] = None
		self.calls: List[Dict[str, Any]] = []

	async def complete(self, messages, *, temperature, max_tokens):
		self.calls.append({"messages": messages, "temperature": temperature, "max_tokens": max_tokens})
		if self.error is not None:
			raise self.error
		return self.reply

	async def aclose(self) -> None:
		pass


@pytest.fixture
def settings(tmp_path):
	return Settings(
		OPENAI_API_KEY="test-key",
		DATABASE_URL=f"sqlite:///{tmp_path / 'coach.db'}",
		SEED_SCENARIOS=False,
		STALE_SESSION_SWEEP_SECONDS=0,
	)


@pytest.fixture
def fake_llm():
	return FakeChatClient()


@pytest.fixture
def app(settings, fake_llm):
	app = create_app(settings)
	app.dependency_overrides[get_llm_client] = lambda: fake_llm
	return app


@pytest.fixture
def client(app):
	with TestClient(app, raise_server_exceptions=False) as c:
		yield c


@pytest.fixture
def db(app, client):
	session = app.state.session_factory()
	try:
		yield session
	finally:
		session.close()


@pytest.fixture
def make_session(db):
	def _make(messages=(), status="active"):
		user = AppUser(email=f"user{db.query(AppUser).count()}@example.com", full_name="Test User")
		scenario = Scenario(
			title="Job Interview Practice",
			description="Practice interview questions.",
			objective="Improve clarity under pressure.",
			ai_persona="I am a seasoned HR professional.",
		)
		db.add_all([user, scenario])
		db.flush()
		row = PracticeSession(user_id=user.id, scenario_id=scenario.id, status=status)
		db.add(row)
		db.flush()
		for role, content in messages:
			db.add(Message(session_id=row.id, role=role, content=content))
			db.flush()
		db.commit()
		return row
	return _make
