"""SQLAlchemy implementation of the UnitOfWork port."""

import structlog
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from learnloop.application.common.unit_of_work import UnitOfWork
from learnloop.exceptions import StoreError

logger = structlog.get_logger(__name__)


class SQLAlchemyUnitOfWork(UnitOfWork):
    """Unit of work over the request-scoped SQLAlchemy session."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def commit(self) -> None:
        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("commit_failed", error=str(e), exc_info=True)
            raise StoreError("Failed to persist changes") from e

    def rollback(self) -> None:
        self.db.rollback()
