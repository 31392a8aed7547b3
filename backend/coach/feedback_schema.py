from __future__ import annotations
import json
import re
from typing import Any, Dict

from pydantic import BaseModel, Field, ValidationError, field_validator

from .errors import MalformedFeedbackError


# The whole reply may be wrapped in one ```json fence; nothing may surround it
_FENCE = re.compile(r"\A```(?:json)?\s*([\s\S]*?)\s*```\Z", re.IGNORECASE)


class FeedbackPayload(BaseModel):
	summary: str = Field(min_length=1)
	clarity: float = Field(ge=0, le=5)
	empathy: float = Field(ge=0, le=5)
	assertiveness: float = Field(ge=0, le=5)
	recommendations: str

	@field_validator("clarity", "empathy", "assertiveness", mode="before")
	@classmethod
	def _reject_booleans(cls, value: Any) -> Any:
		# bool is an int subclass; true/false are not scores
		if isinstance(value, bool):
			raise ValueError("score must be a number")
		return value

	@field_validator("recommendations", mode="before")
	@classmethod
	def _join_recommendation_list(cls, value: Any) -> Any:
		if isinstance(value, list) and all(isinstance(v, str) for v in value):
			return "\n".join(v if v.lstrip().startswith("•") else f"• {v}" for v in value)
		return value

	def scores(self) -> Dict[str, float]:
		return {
			"clarity": self.clarity,
			"empathy": self.empathy,
			"assertiveness": self.assertiveness,
		}


def decode_feedback(text: str) -> FeedbackPayload:
	"""Decode the evaluator's reply into a checked ``FeedbackPayload``.

	Raises:
		MalformedFeedbackError: the reply is not a single JSON object, or a
			required field is missing, non-numeric, or outside 0-5.
	"""
	candidate = (text or "").strip()
	fenced = _FENCE.match(candidate)
	if fenced:
		candidate = fenced.group(1)
	try:
		data = json.loads(candidate)
	except ValueError as err:
		raise MalformedFeedbackError(f"Feedback response was not valid JSON: {err}") from err
	if not isinstance(data, dict):
		raise MalformedFeedbackError("Feedback response was not a JSON object")
	try:
		return FeedbackPayload.model_validate(data, strict=True)
	except ValidationError as err:
		problems = ", ".join(
			f"{'.'.join(str(p) for p in e['loc'])}: {e['msg']}" for e in err.errors()
		)
		raise MalformedFeedbackError(f"Feedback response failed validation: {problems}") from err
