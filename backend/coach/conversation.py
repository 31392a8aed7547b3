from __future__ import annotations
import logging
from typing import Optional

from sqlalchemy.orm import Session

from .llm_client import ChatCompletionClient
from .prompts import build_chat_messages
from .queries import load_history, load_session


logger = logging.getLogger(__name__)

# Tuned for short, in-character replies of 2-3 sentences
CHAT_TEMPERATURE = 0.8
CHAT_MAX_TOKENS = 200


async def generate_reply(
	db: Session,
	client: ChatCompletionClient,
	session_id: str,
	user_message: Optional[str] = None,
	*,
	is_initial: bool = False,
) -> str:
	"""Produce the persona's next reply for a session.

	Nothing is written here: the caller persists both the user's turn and the
	returned reply.
	"""
	_, scenario = load_session(db, session_id)
	history = load_history(db, session_id)
	logger.info(
		"Generating reply for session %s (history=%d, initial=%s)",
		session_id, len(history), is_initial,
	)
	messages = build_chat_messages(scenario, history, user_message, is_initial=is_initial)
	return await client.complete(messages, temperature=CHAT_TEMPERATURE, max_tokens=CHAT_MAX_TOKENS)
