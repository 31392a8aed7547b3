from __future__ import annotations
import logging
from datetime import timedelta

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from .models import Message, PracticeSession, utcnow


logger = logging.getLogger(__name__)


def abandon_stale_sessions(db: Session, older_than: timedelta) -> int:
	"""Mark idle active sessions as abandoned and return how many changed.

	A session is idle when it started before the threshold and has no message
	created after it.
	"""
	threshold = utcnow() - older_than
	recent_activity = (
		select(Message.id)
		.where(
			Message.session_id == PracticeSession.id,
			Message.created_at >= threshold,
		)
		.correlate(PracticeSession)
		.exists()
	)
	res = db.execute(
		update(PracticeSession)
		.where(
			PracticeSession.status == "active",
			PracticeSession.started_at < threshold,
			~recent_activity,
		)
		.values(status="abandoned", ended_at=utcnow())
		.execution_options(synchronize_session=False)
	)
	db.commit()
	abandoned = res.rowcount or 0
	if abandoned:
		logger.info("Marked %d idle sessions as abandoned", abandoned)
	return abandoned
