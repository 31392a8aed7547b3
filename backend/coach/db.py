from __future__ import annotations
from typing import Iterator

from fastapi import Request
from sqlalchemy import create_engine, inspect
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import Session, sessionmaker, declarative_base

from .settings import Settings


Base = declarative_base()


def build_engine(settings: Settings) -> Engine:
	url = make_url(settings.database_url)
	if settings.database_password:
		url = url.set(password=settings.database_password)
	connect_args = {"check_same_thread": False} if url.drivername.startswith("sqlite") else {}
	return create_engine(url, connect_args=connect_args, future=True)


def build_session_factory(engine: Engine) -> sessionmaker:
	return sessionmaker(autocommit=False, autoflush=False, bind=engine, future=True)


def get_db(request: Request) -> Iterator[Session]:
	db = request.app.state.session_factory()
	try:
		yield db
	finally:
		db.close()


# Additive migrations for databases created before these columns existed
def ensure_schema(engine: Engine) -> None:
	inspector = inspect(engine)
	tables = set(inspector.get_table_names())
	with engine.begin() as conn:
		if "feedback" in tables:
			cols = {c["name"] for c in inspector.get_columns("feedback")}
			if "detailed_analysis" not in cols:
				conn.exec_driver_sql("ALTER TABLE feedback ADD COLUMN detailed_analysis JSON")
		if "session" in tables:
			cols = {c["name"] for c in inspector.get_columns("session")}
			if "session_rating" not in cols:
				conn.exec_driver_sql("ALTER TABLE session ADD COLUMN session_rating INTEGER")
