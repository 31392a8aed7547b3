from __future__ import annotations
import asyncio
import logging
from datetime import timedelta
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .cleanup import abandon_stale_sessions
from .db import Base, build_engine, build_session_factory, ensure_schema
from .errors import catch_unhandled_errors, install_handlers
from .routers import chat, feedback, scenarios, sessions, users
from .seed import seed_scenarios
from .settings import Settings

logger = logging.getLogger(__name__)

CORS_METHODS = ["GET", "POST", "PUT", "DELETE", "OPTIONS"]
CORS_HEADERS = ["Content-Type", "Authorization", "X-Client-Info", "Apikey"]


def _sweep_once(app: FastAPI) -> None:
	settings: Settings = app.state.settings
	db = app.state.session_factory()
	try:
		abandon_stale_sessions(db, timedelta(hours=settings.stale_session_hours))
	except Exception:
		logger.exception("Stale session sweep failed")
	finally:
		db.close()


async def _cleanup_watcher(app: FastAPI, interval: int) -> None:
	while True:
		await asyncio.sleep(interval)
		_sweep_once(app)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
	settings = settings or Settings()
	logging.basicConfig(
		level=settings.log_level.upper(),
		format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
	)

	app = FastAPI(title="Communication Coach API")
	app.state.settings = settings
	app.state.engine = build_engine(settings)
	app.state.session_factory = build_session_factory(app.state.engine)
	app.state.cleanup_task = None

	# Added first so CORSMiddleware wraps it and error responses keep CORS headers
	app.middleware("http")(catch_unhandled_errors)
	app.add_middleware(
		CORSMiddleware,
		allow_origins=settings.cors_origin_list(),
		allow_methods=CORS_METHODS,
		allow_headers=CORS_HEADERS,
	)
	install_handlers(app)

	app.include_router(chat.router)
	app.include_router(feedback.router)
	app.include_router(scenarios.router)
	app.include_router(sessions.router)
	app.include_router(users.router)

	@app.get("/info")
	def info():
		return {"status": "ok", "llm_configured": bool(settings.openai_api_key)}

	@app.on_event("startup")
	async def startup_event():
		Base.metadata.create_all(bind=app.state.engine)
		ensure_schema(app.state.engine)
		if not settings.openai_api_key:
			logger.warning("OPENAI_API_KEY is not set; chat and feedback requests will fail")
		if settings.seed_scenarios:
			db = app.state.session_factory()
			try:
				seed_scenarios(db)
			finally:
				db.close()
		if settings.stale_session_sweep_seconds > 0:
			_sweep_once(app)
			app.state.cleanup_task = asyncio.create_task(
				_cleanup_watcher(app, settings.stale_session_sweep_seconds)
			)

	@app.on_event("shutdown")
	async def shutdown_event():
		task = app.state.cleanup_task
		if task is not None:
			task.cancel()
			try:
				await task
			except asyncio.CancelledError:
				pass
		app.state.engine.dispose()

	return app


app = create_app()
