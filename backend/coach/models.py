from __future__ import annotations
import uuid
from datetime import datetime, timezone

from sqlalchemy import (
	JSON,
	Boolean,
	CheckConstraint,
	Column,
	DateTime,
	ForeignKey,
	Integer,
	String,
	Text,
)
from sqlalchemy.orm import relationship

from .db import Base


SESSION_STATUSES = ("active", "completed", "abandoned")
MESSAGE_ROLES = ("user", "assistant")


def utcnow() -> datetime:
	return datetime.now(timezone.utc)


def _uuid() -> str:
	return str(uuid.uuid4())


class AppUser(Base):
	__tablename__ = "app_user"
	id = Column(String(36), primary_key=True, default=_uuid)
	email = Column(String(320), unique=True, nullable=False)
	full_name = Column(String(256), nullable=True)
	avatar_url = Column(Text, nullable=True)
	created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
	updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)


class Scenario(Base):
	__tablename__ = "scenario"
	id = Column(String(36), primary_key=True, default=_uuid)
	title = Column(String(256), nullable=False)
	description = Column(Text, nullable=False)
	objective = Column(Text, nullable=False)
	# Persona injected into the system prompt to keep replies in character
	ai_persona = Column(Text, nullable=False)
	rubric = Column(JSON, default=dict, nullable=False)
	icon = Column(String(64), default="message-circle", nullable=False)
	difficulty_level = Column(String(16), default="beginner", nullable=False)
	estimated_duration = Column(Integer, default=10, nullable=False)  # minutes
	is_active = Column(Boolean, default=True, nullable=False)
	created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
	updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

	__table_args__ = (
		CheckConstraint("difficulty_level IN ('beginner', 'intermediate', 'advanced')", name="ck_scenario_difficulty"),
	)


class PracticeSession(Base):
	__tablename__ = "session"
	id = Column(String(36), primary_key=True, default=_uuid)
	user_id = Column(String(36), ForeignKey("app_user.id", ondelete="CASCADE"), index=True, nullable=True)
	scenario_id = Column(String(36), ForeignKey("scenario.id", ondelete="CASCADE"), index=True, nullable=True)
	status = Column(String(16), default="active", nullable=False, index=True)
	session_rating = Column(Integer, nullable=True)
	started_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
	ended_at = Column(DateTime(timezone=True), nullable=True)
	created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
	updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

	scenario = relationship("Scenario", lazy="joined")

	__table_args__ = (
		CheckConstraint("status IN ('active', 'completed', 'abandoned')", name="ck_session_status"),
		CheckConstraint("session_rating IS NULL OR (session_rating >= 1 AND session_rating <= 5)", name="ck_session_rating"),
	)


class Message(Base):
	__tablename__ = "message"
	id = Column(Integer, primary_key=True, autoincrement=True)
	session_id = Column(String(36), ForeignKey("session.id", ondelete="CASCADE"), index=True, nullable=False)
	role = Column(String(16), nullable=False)
	content = Column(Text, nullable=False)
	# Additional message metadata such as token usage
	meta = Column("metadata", JSON, default=dict, nullable=False)
	created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False, index=True)

	__table_args__ = (
		CheckConstraint("role IN ('user', 'assistant')", name="ck_message_role"),
	)


class Feedback(Base):
	__tablename__ = "feedback"
	id = Column(Integer, primary_key=True, autoincrement=True)
	# One per session by convention only; repeated generation inserts another row
	session_id = Column(String(36), ForeignKey("session.id", ondelete="CASCADE"), index=True, nullable=False)
	summary = Column(Text, nullable=False)
	scores = Column(JSON, nullable=False)  # {clarity, empathy, assertiveness}
	recommendations = Column(Text, nullable=False)
	detailed_analysis = Column(JSON, default=dict, nullable=True)
	created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
