"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import select

from actioncatalog.domain.model import DiscoveryRun

from .mappings import discovery_run_table

if TYPE_CHECKING:
    from sqlalchemy.orm import Session


class SqlAlchemyRunHistoryRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, entity: DiscoveryRun) -> None:
        self.session.add(entity)

    def recent(self, limit: int = 10) -> list[DiscoveryRun]:
        stmt = (
            select(DiscoveryRun)
            .order_by(discovery_run_table.c.finished_at.desc())
            .limit(limit)
        )
        return list(self.session.execute(stmt).scalars())

    def last_successful(self) -> DiscoveryRun | None:
        stmt = (
            select(DiscoveryRun)
            .where(discovery_run_table.c.success.is_(True))
            .order_by(discovery_run_table.c.finished_at.desc())
            .limit(1)
        )
        return self.session.execute(stmt).scalar_one_or_none()
