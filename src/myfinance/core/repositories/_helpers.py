"""Shared helpers for the SQL stores."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy.exc import DBAPIError, InterfaceError, OperationalError

from myfinance.core.errors import StoreUnavailableError
from myfinance.core.logging import get_logger

logger = get_logger(__name__)


@contextmanager
def translate_db_errors(operation: str) -> Iterator[None]:
    """Re-raise connectivity failures as :class:`StoreUnavailableError`.

    Anything else (including ``IntegrityError``) propagates unchanged so the
    caller can decide what it means.
    """
    try:
        yield
    except (OperationalError, InterfaceError) as e:
        logger.error("store_unavailable", operation=operation, error=str(e.orig or e))
        raise StoreUnavailableError(cause=e) from e
    except DBAPIError as e:
        if e.connection_invalidated:
            logger.error("store_connection_lost", operation=operation)
            raise StoreUnavailableError(cause=e) from e
        raise
    except OSError as e:
        # Raw socket errors and timeouts from the async driver.
        logger.error("store_unreachable", operation=operation, error=str(e))
        raise StoreUnavailableError(cause=e) from e
