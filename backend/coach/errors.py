"""
Error taxonomy for the coaching API.

Every failure the orchestrators can produce is raised as a ``CoachError``
subclass. The subclasses carry the HTTP status they map to, so the routers stay
free of status-code decisions: the handlers registered by ``install_handlers``
turn any of them into the uniform ``{"error": message}`` envelope.
"""

from __future__ import annotations
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response


logger = logging.getLogger(__name__)


class CoachError(Exception):
	status_code: int = 500

	def __init__(self, message: str) -> None:
		super().__init__(message)
		self.message = message


class ConfigurationError(CoachError):
	"""A required secret (e.g. the model API key) is missing."""
	status_code = 500


class NotFoundError(CoachError):
	status_code = 404


class SessionNotFoundError(NotFoundError):
	def __init__(self, message: str = "Session not found") -> None:
		super().__init__(message)


class PreconditionError(CoachError):
	status_code = 400


class NotEnoughConversationError(PreconditionError):
	def __init__(self, message: str = "Not enough conversation for feedback") -> None:
		super().__init__(message)


class ConflictError(CoachError):
	status_code = 409


class UpstreamError(CoachError):
	"""The model-inference API failed or answered with a non-success status."""
	status_code = 502


class MalformedFeedbackError(CoachError):
	"""Model output did not decode into the expected feedback shape."""
	status_code = 502


class PersistenceError(CoachError):
	status_code = 500


def _envelope(status_code: int, message: str) -> JSONResponse:
	return JSONResponse(status_code=status_code, content={"error": message})


async def _coach_error_handler(request: Request, exc: CoachError) -> JSONResponse:
	if exc.status_code >= 500:
		logger.error("%s %s failed: %s: %s", request.method, request.url.path, type(exc).__name__, exc.message)
	else:
		logger.info("%s %s rejected: %s: %s", request.method, request.url.path, type(exc).__name__, exc.message)
	return _envelope(exc.status_code, exc.message)


async def _validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
	parts = []
	for err in exc.errors():
		loc = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
		parts.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
	return _envelope(422, "; ".join(parts) or "Invalid request")


async def catch_unhandled_errors(request: Request, call_next) -> Response:
	"""HTTP middleware turning unexpected exceptions into the error envelope.

	Registered before CORSMiddleware so the 500 still carries CORS headers.
	"""
	try:
		return await call_next(request)
	except Exception:
		logger.exception("Unhandled error on %s %s", request.method, request.url.path)
		return _envelope(500, "Internal server error")


def install_handlers(app: FastAPI) -> None:
	app.add_exception_handler(CoachError, _coach_error_handler)
	app.add_exception_handler(RequestValidationError, _validation_error_handler)
