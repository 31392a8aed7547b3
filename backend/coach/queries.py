from __future__ import annotations
from typing import List, Tuple

from sqlalchemy import select
from sqlalchemy.orm import Session

from .errors import SessionNotFoundError
from .models import Message, PracticeSession, Scenario


def load_session(db: Session, session_id: str) -> Tuple[PracticeSession, Scenario]:
	"""Fetch a session and its scenario; both must exist."""
	row = db.get(PracticeSession, session_id)
	if row is None or row.scenario is None:
		raise SessionNotFoundError()
	return row, row.scenario


def load_history(db: Session, session_id: str) -> List[Message]:
	# created_at alone can tie for messages written in the same instant
	stmt = (
		select(Message)
		.where(Message.session_id == session_id)
		.order_by(Message.created_at, Message.id)
	)
	return list(db.scalars(stmt))
