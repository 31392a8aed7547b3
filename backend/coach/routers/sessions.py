from __future__ import annotations
from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy import select
from sqlalchemy.orm import Session

from ..db import get_db
from ..errors import NotFoundError, PreconditionError, SessionNotFoundError
from ..models import AppUser, Feedback, Message, PracticeSession, Scenario, utcnow
from ..queries import load_history
from ..schemas import (
	FeedbackOut,
	MessageCreate,
	MessageOut,
	RatingUpdate,
	ScenarioOut,
	SessionCreate,
	SessionDetail,
	SessionOut,
	SessionSummary,
)


router = APIRouter(prefix="/sessions", tags=["sessions"])


def _get_session(db: Session, session_id: str) -> PracticeSession:
	row = db.get(PracticeSession, session_id)
	if row is None:
		raise SessionNotFoundError()
	return row


def _require_active(row: PracticeSession) -> None:
	if row.status != "active":
		raise PreconditionError(f"Session is {row.status}")


def _feedback_for(db: Session, session_id: str) -> List[Feedback]:
	stmt = select(Feedback).where(Feedback.session_id == session_id).order_by(Feedback.created_at, Feedback.id)
	return list(db.scalars(stmt))


@router.post("", response_model=SessionOut, status_code=201)
def start_session(req: SessionCreate, db: Session = Depends(get_db)):
	if db.get(AppUser, req.user_id) is None:
		raise NotFoundError("User not found")
	scenario = db.get(Scenario, req.scenario_id)
	if scenario is None or not scenario.is_active:
		raise NotFoundError("Scenario not found")
	row = PracticeSession(user_id=req.user_id, scenario_id=scenario.id, status="active")
	db.add(row)
	db.commit()
	db.refresh(row)
	return SessionOut.model_validate(row)


@router.get("", response_model=List[SessionSummary])
def list_sessions(user_id: str = Query(...), db: Session = Depends(get_db)):
	stmt = (
		select(PracticeSession)
		.where(PracticeSession.user_id == user_id)
		.order_by(PracticeSession.started_at.desc())
	)
	out: List[SessionSummary] = []
	for row in db.scalars(stmt):
		feedback = _feedback_for(db, row.id)
		out.append(SessionSummary(
			**SessionOut.model_validate(row).model_dump(),
			scenario_title=row.scenario.title if row.scenario else None,
			scores=feedback[-1].scores if feedback else None,
		))
	return out


@router.get("/{session_id}", response_model=SessionDetail)
def get_session(session_id: str, db: Session = Depends(get_db)):
	row = _get_session(db, session_id)
	return SessionDetail(
		**SessionOut.model_validate(row).model_dump(),
		scenario=ScenarioOut.model_validate(row.scenario) if row.scenario else None,
		messages=[MessageOut.model_validate(m) for m in load_history(db, session_id)],
		feedback=[FeedbackOut.model_validate(f) for f in _feedback_for(db, session_id)],
	)


@router.post("/{session_id}/messages", response_model=MessageOut, status_code=201)
def add_message(session_id: str, req: MessageCreate, db: Session = Depends(get_db)):
	row = _get_session(db, session_id)
	_require_active(row)
	content = req.content.strip()
	if not content:
		raise PreconditionError("content is required")
	msg = Message(session_id=session_id, role=req.role, content=content)
	db.add(msg)
	db.commit()
	db.refresh(msg)
	return MessageOut.model_validate(msg)


@router.post("/{session_id}/abandon", response_model=SessionOut)
def abandon_session(session_id: str, db: Session = Depends(get_db)):
	row = _get_session(db, session_id)
	_require_active(row)
	row.status = "abandoned"
	row.ended_at = utcnow()
	db.commit()
	db.refresh(row)
	return SessionOut.model_validate(row)


@router.patch("/{session_id}/rating", response_model=SessionOut)
def rate_session(session_id: str, req: RatingUpdate, db: Session = Depends(get_db)):
	row = _get_session(db, session_id)
	row.session_rating = req.session_rating
	db.commit()
	db.refresh(row)
	return SessionOut.model_validate(row)


@router.get("/{session_id}/feedback", response_model=FeedbackOut)
def latest_feedback(session_id: str, db: Session = Depends(get_db)):
	_get_session(db, session_id)
	feedback = _feedback_for(db, session_id)
	if not feedback:
		raise NotFoundError("Feedback not found")
	return FeedbackOut.model_validate(feedback[-1])
