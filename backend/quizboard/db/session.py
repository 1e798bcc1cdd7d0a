from __future__ import annotations

import logging
from collections.abc import Iterator

from fastapi import Request
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from quizboard.core.config import settings
from quizboard.db.base import Base

log = logging.getLogger(__name__)


class Database:
    """Process-wide database handle.

    Built once by ``create_app`` (or by a test), kept on ``app.state.database``
    and disposed on shutdown. Request handlers never touch it directly, they
    receive a session through ``get_db``.
    """

    def __init__(self, url: str | None = None, *, engine: Engine | None = None, echo: bool = False):
        if engine is None:
            engine = create_engine(url or settings.database_url, echo=echo, pool_pre_ping=True)
        self.engine = engine
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    def session(self) -> Session:
        return self.SessionLocal()

    def create_schema(self) -> None:
        # Register every table on Base.metadata before create_all.
        import quizboard.models  # noqa: F401

        Base.metadata.create_all(bind=self.engine)
        log.info("database schema ensured url=%s", self.engine.url.render_as_string(hide_password=True))

    def ping(self) -> None:
        with self.engine.connect() as conn:
            conn.execute(text("SELECT 1"))

    def close(self) -> None:
        self.engine.dispose()


def get_database(request: Request) -> Database:
    return request.app.state.database


def get_db(request: Request) -> Iterator[Session]:
    db = get_database(request).session()
    try:
        yield db
    finally:
        db.close()
