"""Engine lifecycle and unit of work for the run-history database."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from actioncatalog.domain.ports import RunHistoryRepositories

from .mappings import create_all_tables, start_mappers
from .repositories import SqlAlchemyRunHistoryRepository

if TYPE_CHECKING:
    from types import TracebackType

    from sqlalchemy.engine import Engine

log = logging.getLogger(__name__)


class StartupError(RuntimeError):
    """Raised when the history database is used before ``startup`` or started twice."""


@dataclass(slots=True)
class _HistoryDatabase:
    engine: Engine | None = None
    sessions: sessionmaker[Session] | None = None

    def bind(self, engine: Engine | None) -> None:
        self.engine = engine
        self.sessions = (
            sessionmaker(bind=engine, expire_on_commit=False) if engine is not None else None
        )

    def new_session(self) -> Session:
        if self.sessions is None:
            raise StartupError("Run history database is not started; call startup() first")
        return self.sessions()


_DATABASE = _HistoryDatabase()


def startup(
    *,
    engine: Engine | None = None,
    database_uri: str | None = None,
    force: bool = False,
) -> Engine:
    """Bind the history database, creating its table when missing.

    Pass either a ready ``engine`` or a ``database_uri``. Rebinding an already
    started database requires ``force=True``.
    """

    if _DATABASE.engine is not None and not force:
        raise StartupError("Run history database already started; pass force=True to rebind")
    if engine is None:
        if not database_uri:
            raise StartupError("startup() needs an engine or a database URI")
        engine = create_engine(database_uri, future=True)

    start_mappers()
    create_all_tables(engine)
    _DATABASE.bind(engine)
    log.debug("Run history database bound to %s", engine.url.render_as_string(hide_password=True))
    return engine


def is_started() -> bool:
    return _DATABASE.engine is not None


def shutdown() -> None:
    """Dispose the bound engine; ``startup`` may be called again afterwards."""

    if _DATABASE.engine is not None:
        _DATABASE.engine.dispose()
    _DATABASE.bind(None)


class SqlAlchemyRunHistoryUnitOfWork:
    """One session around the run-history repository.

    Changes are persisted only by ``commit``; leaving the block closes the
    session and drops anything uncommitted.
    """

    def __init__(self) -> None:
        self._session: Session | None = None
        self._repositories: RunHistoryRepositories | None = None

    def __enter__(self) -> SqlAlchemyRunHistoryUnitOfWork:
        if self._session is not None:
            raise StartupError("Unit of work is already in use")
        self._session = _DATABASE.new_session()
        self._repositories = RunHistoryRepositories(
            runs=SqlAlchemyRunHistoryRepository(self._session)
        )
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> Literal[False]:
        session = self._active_session()
        try:
            if exc_type is not None:
                session.rollback()
        finally:
            session.close()
            self._session = None
            self._repositories = None
        return False

    @property
    def repositories(self) -> RunHistoryRepositories:
        if self._repositories is None:
            raise StartupError("Unit of work used outside a with-block")
        return self._repositories

    def commit(self) -> None:
        self._active_session().commit()

    def rollback(self) -> None:
        self._active_session().rollback()

    def _active_session(self) -> Session:
        if self._session is None:
            raise StartupError("Unit of work used outside a with-block")
        return self._session


if TYPE_CHECKING:
    from actioncatalog.domain.ports import RunHistoryUnitOfWork

    _uow_check: RunHistoryUnitOfWork = SqlAlchemyRunHistoryUnitOfWork()
