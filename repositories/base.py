"""
Shared plumbing for repositories.
Every repository receives the engine explicitly and accepts an optional
session so that several calls can share one unit of work.
"""

import logging
from typing import Callable, Optional, TypeVar

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from errors import DatabaseError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class BaseRepository:
    """Base class binding a repository to an injected engine."""

    def __init__(self, engine: Engine):
        self.engine = engine

    def _run(self, operation: Callable[[Session], T], session: Optional[Session] = None) -> T:
        """
        Run an operation in the given session, or in a fresh one.
        Any failure rolls the session back; storage faults surface as DatabaseError.

        Args:
            operation: Callable receiving the session to work in
            session: Optional existing session for transaction reuse

        Returns:
            Whatever the operation returns
        """
        def _guarded(sess: Session) -> T:
            try:
                return operation(sess)
            except SQLAlchemyError as e:
                sess.rollback()
                logger.error(f"{type(self).__name__}: database operation failed: {e}")
                raise DatabaseError(e) from e
            except Exception:
                sess.rollback()
                raise

        if session is not None:
            return _guarded(session)
        else:
            with Session(self.engine) as session:
                return _guarded(session)
