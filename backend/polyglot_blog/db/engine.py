from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from sqlalchemy import Engine, create_engine, event
from sqlalchemy.engine import make_url
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session, sessionmaker

from ..observability.logging import get_logger
from ..settings import Settings, mask_database_url
from .errors import DbUnavailable
from .models import metadata_for

log = get_logger("db")


def _enable_sqlite_foreign_keys(dbapi_conn, _record) -> None:  # type: ignore[no-untyped-def]
    cur = dbapi_conn.cursor()
    try:
        cur.execute("PRAGMA foreign_keys=ON;")
    finally:
        cur.close()


def build_engine(url: str, *, echo: bool = False) -> Engine:
    parsed = make_url(url)
    is_sqlite = parsed.get_backend_name() == "sqlite"

    kwargs: dict[str, object] = {"echo": echo, "future": True}
    if is_sqlite:
        # FastAPI runs sync endpoints in a threadpool.
        kwargs["connect_args"] = {"check_same_thread": False}
        db_path = parsed.database
        if db_path and db_path != ":memory:":
            Path(db_path).expanduser().parent.mkdir(parents=True, exist_ok=True)
    else:
        kwargs["pool_pre_ping"] = True

    engine = create_engine(url, **kwargs)
    if is_sqlite:
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    return engine


class Database:
    """
    Engine + session factory for the single translation pattern this process serves.
    """

    def __init__(self, *, url: str, pattern: str, echo: bool = False):
        self.url = url
        self.pattern = pattern
        self.engine = build_engine(url, echo=echo)
        self.session_factory: sessionmaker[Session] = sessionmaker(
            self.engine, expire_on_commit=False, autoflush=False
        )

    @classmethod
    def from_settings(cls, settings: Settings, *, pattern: str | None = None) -> "Database":
        p = pattern or settings.translation_pattern
        url = settings.database_url_for(pattern) if pattern else settings.active_database_url
        return cls(url=url, pattern=p, echo=bool(settings.database_echo))

    def create_schema(self) -> None:
        try:
            metadata_for(self.pattern).create_all(self.engine)
        except OperationalError as e:
            raise DbUnavailable(
                message="Database is unavailable", operation="create_schema", cause=e
            ) from e
        log.info("db_schema_ready", pattern=self.pattern, url=mask_database_url(self.url))

    @contextmanager
    def session(self) -> Iterator[Session]:
        """Unit of work: commit on success, roll back on error."""
        s = self.session_factory()
        try:
            yield s
            s.commit()
        except Exception:
            s.rollback()
            raise
        finally:
            s.close()

    def dispose(self) -> None:
        self.engine.dispose()
