from coach.models import Feedback, PracticeSession


def test_create_update_and_fetch_user(client):
	r = client.post("/users", json={"email": "Robin@Example.com", "id": "b3c1a4d2-0000-4000-8000-000000000001"})
	assert r.status_code == 201
	assert r.json()["email"] == "robin@example.com"
	user_id = r.json()["id"]
	assert user_id == "b3c1a4d2-0000-4000-8000-000000000001"

	r = client.patch(f"/users/{user_id}", json={"full_name": "  Robin Q  "})
	assert r.json()["full_name"] == "Robin Q"
	assert client.get(f"/users/{user_id}").json()["full_name"] == "Robin Q"


def test_duplicate_email_conflicts(client):
	client.post("/users", json={"email": "dup@example.com"})
	r = client.post("/users", json={"email": "dup@example.com"})
	assert r.status_code == 409
	assert r.json() == {"error": "email already registered"}


def test_unknown_user(client):
	assert client.get("/users/missing").json() == {"error": "User not found"}


def test_stats_average_feedback_scores(client, db, make_session):
	session = make_session(status="completed")
	other = PracticeSession(user_id=session.user_id, scenario_id=session.scenario_id)
	db.add(other)
	db.add_all([
		Feedback(session_id=session.id, summary="a", scores={"clarity": 4, "empathy": 2, "assertiveness": 5}, recommendations="x"),
		Feedback(session_id=session.id, summary="b", scores={"clarity": 3, "empathy": 3, "assertiveness": 4}, recommendations="x"),
	])
	db.commit()

	stats = client.get(f"/users/{session.user_id}/stats").json()
	assert stats["total_sessions"] == 2
	assert stats["completed_sessions"] == 1
	assert stats["avg_clarity"] == 3.5
	assert stats["avg_empathy"] == 2.5
	assert stats["avg_assertiveness"] == 4.5
	assert stats["last_session_date"] is not None


def test_stats_without_feedback(client, make_session):
	session = make_session()
	stats = client.get(f"/users/{session.user_id}/stats").json()
	assert stats["total_sessions"] == 1
	assert stats["avg_clarity"] is None
