"""
Module: inventory_kernel.selectors.base
Responsibility: Base class for read-only SQL selectors.
Architecture position: Kernel > Selectors.  May import from db/ and models/.

Invariants enforced:
    - Read-only access: selectors never add, delete, flush or commit.
    - DTO return convention: selectors return frozen domain dataclasses,
      not ORM instances.
    - Session per read: each query opens its own short-lived session from
      the caller's factory, so selectors are safe to share between the
      diagnostic runner's worker threads.
    - Driver errors are translated into GatewayError subclasses.
"""

from abc import ABC
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import exc as sa_exc
from sqlalchemy.orm import Session, sessionmaker

from inventory_kernel.exceptions import GatewayQueryError, GatewayUnavailableError


class BaseSelector(ABC):
    """
    Abstract base class for SQL selectors.

    Contract:
        Subclasses run queries inside ``self._read(operation)`` and convert
        results to domain dataclasses before the session closes.
    """

    def __init__(self, session_factory: sessionmaker[Session]):
        self.session_factory = session_factory

    @contextmanager
    def _read(self, operation: str) -> Iterator[Session]:
        """Open a session for one read and translate driver failures.

        Raises:
            GatewayUnavailableError: The connection was lost or refused.
            GatewayQueryError: Any other SQLAlchemy/DBAPI failure.
        """
        try:
            with self.session_factory() as session:
                yield session
        except sa_exc.DBAPIError as exc:
            if exc.connection_invalidated:
                raise GatewayUnavailableError(str(exc.orig)) from exc
            raise GatewayQueryError(operation, str(exc.orig)) from exc
        except sa_exc.SQLAlchemyError as exc:
            raise GatewayQueryError(operation, str(exc)) from exc
