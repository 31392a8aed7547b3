from __future__ import annotations
from fastapi import APIRouter, Depends
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..db import get_db
from ..errors import ConflictError, NotFoundError
from ..models import AppUser, Feedback, PracticeSession
from ..schemas import UserCreate, UserOut, UserStats, UserUpdate


router = APIRouter(prefix="/users", tags=["users"])


def _get_user(db: Session, user_id: str) -> AppUser:
	row = db.get(AppUser, user_id)
	if row is None:
		raise NotFoundError("User not found")
	return row


@router.post("", response_model=UserOut, status_code=201)
def create_user(req: UserCreate, db: Session = Depends(get_db)):
	email = req.email.strip().lower()
	existing = db.scalar(select(AppUser).where(AppUser.email == email))
	if existing is not None:
		raise ConflictError("email already registered")
	fields = {"email": email, "full_name": req.full_name, "avatar_url": req.avatar_url}
	if req.id:
		fields["id"] = req.id
	row = AppUser(**fields)
	db.add(row)
	try:
		db.commit()
	except IntegrityError:
		db.rollback()
		raise ConflictError("user already exists")
	db.refresh(row)
	return UserOut.model_validate(row)


@router.get("/{user_id}", response_model=UserOut)
def get_user(user_id: str, db: Session = Depends(get_db)):
	return UserOut.model_validate(_get_user(db, user_id))


@router.patch("/{user_id}", response_model=UserOut)
def update_user(user_id: str, req: UserUpdate, db: Session = Depends(get_db)):
	row = _get_user(db, user_id)
	if req.full_name is not None:
		row.full_name = req.full_name.strip() or None
	if req.avatar_url is not None:
		row.avatar_url = req.avatar_url or None
	db.commit()
	db.refresh(row)
	return UserOut.model_validate(row)


@router.get("/{user_id}/stats", response_model=UserStats)
def user_stats(user_id: str, db: Session = Depends(get_db)):
	_get_user(db, user_id)
	sessions = list(db.scalars(select(PracticeSession).where(PracticeSession.user_id == user_id)))
	session_ids = [s.id for s in sessions]
	totals = {"clarity": [], "empathy": [], "assertiveness": []}
	if session_ids:
		for scores in db.scalars(select(Feedback.scores).where(Feedback.session_id.in_(session_ids))):
			for key, values in totals.items():
				value = (scores or {}).get(key)
				if isinstance(value, (int, float)):
					values.append(float(value))

	def _avg(values):
		return round(sum(values) / len(values), 2) if values else None

	last_started = db.scalar(
		select(func.max(PracticeSession.started_at)).where(PracticeSession.user_id == user_id)
	)
	return UserStats(
		user_id=user_id,
		total_sessions=len(sessions),
		completed_sessions=sum(1 for s in sessions if s.status == "completed"),
		avg_clarity=_avg(totals["clarity"]),
		avg_empathy=_avg(totals["empathy"]),
		avg_assertiveness=_avg(totals["assertiveness"]),
		last_session_date=last_started,
	)
