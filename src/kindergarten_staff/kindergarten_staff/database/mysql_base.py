from __future__ import annotations

import logging
from contextlib import contextmanager
from datetime import time, timedelta
from typing import Any, Dict, List, Optional

import mysql.connector

from ..core.exceptions import OutcomeUnknownError, RemoteError
from .connection import DatabaseConnection

logger = logging.getLogger(__name__)


def _server_message(exc: mysql.connector.Error) -> Optional[str]:
    msg = getattr(exc, "msg", None)
    return str(msg) if msg else None


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """Yield ``(conn, cursor)`` inside one transaction.

    Connector errors are translated: a failure while committing means the
    outcome is unknown, anything earlier is a plain ``RemoteError`` after
    rollback.
    """

    try:
        conn = conn_factory.connect()
    except mysql.connector.Error as exc:
        logger.warning("database connection failed: %s", exc)
        raise RemoteError(_server_message(exc)) from exc

    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
        except mysql.connector.Error as exc:
            conn.rollback()
            logger.warning("database statement failed: %s", exc)
            raise RemoteError(_server_message(exc)) from exc
        except Exception:
            conn.rollback()
            raise
        finally:
            cur.close()
        try:
            conn.commit()
        except mysql.connector.Error as exc:
            logger.error("commit outcome unknown: %s", exc)
            raise OutcomeUnknownError() from exc
    finally:
        try:
            conn.close()
        except mysql.connector.Error:
            logger.debug("closing connection failed", exc_info=True)


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def normalize_mysql_time(value: Any) -> Optional[time]:
    """Normalize MySQL TIME values: the connector may hand back ``time``,
    ``timedelta`` or ``'HH:MM[:SS]'`` strings."""

    if value is None or isinstance(value, time):
        return value

    if isinstance(value, timedelta):
        total_seconds = int(value.total_seconds()) % 86400
        return time(hour=total_seconds // 3600, minute=(total_seconds % 3600) // 60, second=total_seconds % 60)

    if isinstance(value, str):
        parts = value.strip().split(":")
        if len(parts) < 2:
            raise ValueError(f"Invalid time string: {value!r}")
        seconds = int(parts[2]) if len(parts) >= 3 and parts[2] else 0
        return time(hour=int(parts[0]), minute=int(parts[1]), second=seconds)

    raise TypeError(f"Unsupported MySQL TIME value type: {type(value)!r}")
