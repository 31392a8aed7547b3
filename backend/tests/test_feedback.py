from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session as OrmSession

from coach.errors import UpstreamError
from coach.evaluation import FEEDBACK_MAX_TOKENS
from coach.models import Feedback, PracticeSession
from coach.prompts import EVALUATOR_SYSTEM_PROMPT

from .conftest import WELL_FORMED_FEEDBACK


CONVERSATION = [
	("assistant", "Welcome, please introduce yourself."),
	("user", "Hi, I'm Sam and I manage support teams."),
]


def test_well_formed_reply_is_persisted_and_completes_session(client, db, make_session, fake_llm):
	session = make_session(messages=CONVERSATION)
	fake_llm.reply = WELL_FORMED_FEEDBACK

	r = client.post("/feedback", json={"session_id": session.id})
	assert r.status_code == 200
	body = r.json()
	assert body["session_id"] == session.id
	assert body["summary"] == "ok"
	assert body["scores"] == {"clarity": 4, "empathy": 3, "assertiveness": 5}
	assert body["recommendations"] == "• a\n• b\n• c"
	assert body["id"] and body["created_at"]

	db.expire_all()
	rows = db.query(Feedback).filter(Feedback.session_id == session.id).all()
	assert len(rows) == 1
	assert rows[0].scores == {"clarity": 4, "empathy": 3, "assertiveness": 5}
	refreshed = db.get(PracticeSession, session.id)
	assert refreshed.status == "completed"
	assert refreshed.ended_at is not None


def test_evaluation_prompt_contains_rendered_transcript(client, make_session, fake_llm):
	session = make_session(messages=CONVERSATION)
	fake_llm.reply = WELL_FORMED_FEEDBACK
	client.post("/feedback", json={"session_id": session.id})

	call = fake_llm.calls[0]
	assert call["max_tokens"] == FEEDBACK_MAX_TOKENS
	assert call["messages"][0] == {"role": "system", "content": EVALUATOR_SYSTEM_PROMPT}
	prompt = call["messages"][1]["content"]
	assert "Coach: Welcome, please introduce yourself.\n\nUser: Hi, I'm Sam and I manage support teams." in prompt
	assert "Scenario: Job Interview Practice" in prompt


def test_short_conversation_is_rejected_without_model_call(client, db, make_session, fake_llm):
	session = make_session(messages=[("assistant", "Hello there.")])
	r = client.post("/feedback", json={"session_id": session.id})
	assert r.status_code == 400
	assert r.json() == {"error": "Not enough conversation for feedback"}
	assert fake_llm.calls == []
	db.expire_all()
	assert db.get(PracticeSession, session.id).status == "active"


def test_unknown_session_reports_lookup_failure(client, fake_llm):
	r = client.post("/feedback", json={"session_id": "missing"})
	assert r.status_code == 404
	assert r.json() == {"error": "Session not found"}
	assert fake_llm.calls == []


def test_commentary_around_json_is_reported_not_crashed(client, db, make_session, fake_llm):
	session = make_session(messages=CONVERSATION)
	fake_llm.reply = "Here is the evaluation:\n" + WELL_FORMED_FEEDBACK + "\nHope this helps!"
	r = client.post("/feedback", json={"session_id": session.id})
	assert r.status_code == 502
	assert "not valid JSON" in r.json()["error"]

	db.expire_all()
	assert db.query(Feedback).count() == 0
	assert db.get(PracticeSession, session.id).status == "active"


def test_out_of_range_score_is_rejected(client, db, make_session, fake_llm):
	session = make_session(messages=CONVERSATION)
	fake_llm.reply = WELL_FORMED_FEEDBACK.replace('"clarity":4', '"clarity":7')
	r = client.post("/feedback", json={"session_id": session.id})
	assert r.status_code == 502
	assert "clarity" in r.json()["error"]
	assert db.query(Feedback).count() == 0


def test_upstream_failure_leaves_session_untouched(client, db, make_session, fake_llm):
	session = make_session(messages=CONVERSATION)
	fake_llm.error = UpstreamError("OpenAI API error: service unavailable")
	r = client.post("/feedback", json={"session_id": session.id})
	assert r.status_code == 502
	assert r.json() == {"error": "OpenAI API error: service unavailable"}
	db.expire_all()
	assert db.get(PracticeSession, session.id).status == "active"


def test_second_call_stores_another_feedback_row(client, db, make_session, fake_llm):
	session = make_session(messages=CONVERSATION)
	fake_llm.reply = WELL_FORMED_FEEDBACK
	first = client.post("/feedback", json={"session_id": session.id})
	second = client.post("/feedback", json={"session_id": session.id})
	assert first.status_code == 200
	assert second.status_code == 200
	assert first.json()["id"] != second.json()["id"]
	db.expire_all()
	assert db.query(Feedback).filter(Feedback.session_id == session.id).count() == 2
	assert db.get(PracticeSession, session.id).status == "completed"


def test_failed_commit_rolls_back_feedback_and_session(client, db, make_session, fake_llm, monkeypatch):
	session = make_session(messages=CONVERSATION)
	fake_llm.reply = WELL_FORMED_FEEDBACK

	def failing_commit(self):
		raise OperationalError("INSERT INTO feedback ...", {}, Exception("disk I/O error"))

	monkeypatch.setattr(OrmSession, "commit", failing_commit)
	r = client.post("/feedback", json={"session_id": session.id})
	monkeypatch.undo()

	assert r.status_code == 500
	assert r.json() == {"error": "Failed to store feedback"}
	db.expire_all()
	assert db.query(Feedback).count() == 0
	refreshed = db.get(PracticeSession, session.id)
	assert refreshed.status == "active"
	assert refreshed.ended_at is None
