from __future__ import annotations
from datetime import datetime
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class _ORMModel(BaseModel):
	model_config = ConfigDict(from_attributes=True)


# ---- chat / feedback -------------------------------------------------------

class ChatRequest(BaseModel):
	session_id: str
	user_message: Optional[str] = ""
	is_initial: bool = False


class ChatResponse(BaseModel):
	message: str


class FeedbackRequest(BaseModel):
	session_id: str


class ScoreBreakdown(BaseModel):
	clarity: float
	empathy: float
	assertiveness: float


class FeedbackOut(_ORMModel):
	id: int
	session_id: str
	summary: str
	scores: ScoreBreakdown
	recommendations: str
	created_at: datetime


# ---- scenarios -------------------------------------------------------------

class ScenarioOut(_ORMModel):
	id: str
	title: str
	description: str
	objective: str
	icon: str
	difficulty_level: str
	estimated_duration: int
	rubric: Dict[str, Any] = Field(default_factory=dict)


# ---- users -----------------------------------------------------------------

class UserCreate(BaseModel):
	email: str = Field(min_length=3, max_length=320)
	full_name: Optional[str] = None
	avatar_url: Optional[str] = None
	# Accounts are created by the identity provider; reuse its id when given
	id: Optional[str] = None


class UserUpdate(BaseModel):
	full_name: Optional[str] = None
	avatar_url: Optional[str] = None


class UserOut(_ORMModel):
	id: str
	email: str
	full_name: Optional[str] = None
	avatar_url: Optional[str] = None
	created_at: datetime


class UserStats(BaseModel):
	user_id: str
	total_sessions: int
	completed_sessions: int
	avg_clarity: Optional[float] = None
	avg_empathy: Optional[float] = None
	avg_assertiveness: Optional[float] = None
	last_session_date: Optional[datetime] = None


# ---- sessions --------------------------------------------------------------

class SessionCreate(BaseModel):
	user_id: str
	scenario_id: str


class SessionOut(_ORMModel):
	id: str
	user_id: Optional[str] = None
	scenario_id: Optional[str] = None
	status: str
	session_rating: Optional[int] = None
	started_at: datetime
	ended_at: Optional[datetime] = None


class SessionSummary(SessionOut):
	scenario_title: Optional[str] = None
	scores: Optional[ScoreBreakdown] = None


class MessageCreate(BaseModel):
	role: Literal["user", "assistant"]
	content: str


class MessageOut(_ORMModel):
	id: int
	session_id: str
	role: str
	content: str
	created_at: datetime


class SessionDetail(SessionOut):
	scenario: Optional[ScenarioOut] = None
	messages: List[MessageOut] = Field(default_factory=list)
	feedback: List[FeedbackOut] = Field(default_factory=list)


class RatingUpdate(BaseModel):
	session_rating: int = Field(ge=1, le=5)
