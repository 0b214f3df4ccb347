from __future__ import annotations
import logging

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.sql import text
from sqlalchemy.orm import sessionmaker, declarative_base
from .settings import settings


logger = logging.getLogger(__name__)

DATABASE_URL = settings.database_url or "sqlite:///./okurmen.db"


def make_engine(url: str) -> Engine:
	connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
	return create_engine(url, connect_args=connect_args, future=True, pool_pre_ping=True)


engine = make_engine(DATABASE_URL)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine, future=True)
Base = declarative_base()


def get_db():
	db = SessionLocal()
	try:
		yield db
	finally:
		db.close()


def init_db(bind: Engine | None = None) -> None:
	# Import models so every table is registered on Base.metadata
	from . import models  # noqa: F401
	Base.metadata.create_all(bind=bind or engine)


def check_health(bind: Engine | None = None) -> bool:
	"""Round-trip a trivial query against the store.

	Used by the readiness endpoint and at startup instead of tracking a
	connection flag in process state.
	"""
	try:
		with (bind or engine).connect() as conn:
			conn.execute(text("SELECT 1"))
		return True
	except SQLAlchemyError as exc:
		logger.warning("Database health check failed: %s", exc)
		return False
