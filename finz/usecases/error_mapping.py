"""Translate persistence errors into user-facing UseCaseError instances."""

from __future__ import annotations

import sqlite3
from typing import Optional

from finz.adapters.persistence_sqlite import PersistenceError
from finz.domain.ports import UseCaseError


def map_persistence_error(
    exc: Exception,
    *,
    default_code: str,
    default_message: Optional[str] = None,
) -> UseCaseError:
    """Map adapter exceptions to stable UseCaseError codes.

    Args:
        exc: Exception raised by the data-access context.
        default_code: Code used when no specific mapping applies.
        default_message: Optional message override for the fallback case.

    Returns:
        UseCaseError: Value returned to the caller.
    """
    if isinstance(exc, UseCaseError):
        return exc
    if isinstance(exc, PersistenceError):
        return UseCaseError("STORE_UNAVAILABLE", str(exc))
    if isinstance(exc, sqlite3.IntegrityError):
        return UseCaseError(default_code, f"Constraint violated: {exc}")
    if isinstance(exc, sqlite3.Error):
        return UseCaseError(default_code, f"Database error: {exc}")
    return UseCaseError(default_code, default_message or str(exc) or default_code)
