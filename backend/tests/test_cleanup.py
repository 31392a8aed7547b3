from datetime import timedelta

from fastapi.testclient import TestClient

from coach.cleanup import abandon_stale_sessions
from coach.models import Message, PracticeSession, utcnow


def test_idle_sessions_are_abandoned(db, make_session):
	long_ago = utcnow() - timedelta(hours=48)
	idle = make_session()
	idle.started_at = long_ago
	busy = make_session()
	busy.started_at = long_ago
	fresh = make_session()
	done = make_session(status="completed")
	done.started_at = long_ago
	db.add(Message(session_id=busy.id, role="user", content="still here"))
	db.commit()

	assert abandon_stale_sessions(db, timedelta(hours=24)) == 1

	db.expire_all()
	assert db.get(PracticeSession, idle.id).status == "abandoned"
	assert db.get(PracticeSession, idle.id).ended_at is not None
	assert db.get(PracticeSession, busy.id).status == "active"
	assert db.get(PracticeSession, fresh.id).status == "active"
	assert db.get(PracticeSession, done.id).status == "completed"


def test_info_reports_llm_configuration(client):
	assert client.get("/info").json() == {"status": "ok", "llm_configured": True}


def test_startup_leaves_idle_sessions_alone_when_sweeper_disabled(app, db, make_session):
	idle = make_session()
	idle.started_at = utcnow() - timedelta(hours=48)
	db.commit()
	assert app.state.cleanup_task is None

	# A second startup with the sweeper off must not touch the session
	with TestClient(app):
		pass
	db.expire_all()
	assert db.get(PracticeSession, idle.id).status == "active"
