from __future__ import annotations
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .errors import NotEnoughConversationError, PersistenceError
from .feedback_schema import decode_feedback
from .llm_client import ChatCompletionClient
from .models import Feedback, utcnow
from .prompts import build_feedback_messages
from .queries import load_history, load_session


logger = logging.getLogger(__name__)

FEEDBACK_TEMPERATURE = 0.7
# Output is a compact JSON object
FEEDBACK_MAX_TOKENS = 500
# One user turn and one assistant turn
MIN_MESSAGES_FOR_FEEDBACK = 2


async def generate_feedback(db: Session, client: ChatCompletionClient, session_id: str) -> Feedback:
	"""Score a session's transcript, store the feedback and complete the session.

	The feedback insert and the session status change are committed together.
	Calling this again for the same session stores another feedback row.
	"""
	session_row, scenario = load_session(db, session_id)
	history = load_history(db, session_id)
	if len(history) < MIN_MESSAGES_FOR_FEEDBACK:
		raise NotEnoughConversationError()

	logger.info("Evaluating session %s (%d messages)", session_id, len(history))
	raw = await client.complete(
		build_feedback_messages(scenario, history),
		temperature=FEEDBACK_TEMPERATURE,
		max_tokens=FEEDBACK_MAX_TOKENS,
	)
	payload = decode_feedback(raw)

	feedback = Feedback(
		session_id=session_id,
		summary=payload.summary,
		scores=payload.scores(),
		recommendations=payload.recommendations,
	)
	try:
		db.add(feedback)
		session_row.status = "completed"
		session_row.ended_at = utcnow()
		db.commit()
	except SQLAlchemyError as err:
		db.rollback()
		logger.exception("Failed to store feedback for session %s", session_id)
		raise PersistenceError("Failed to store feedback") from err
	db.refresh(feedback)
	logger.info("Stored feedback %s for session %s", feedback.id, session_id)
	return feedback
