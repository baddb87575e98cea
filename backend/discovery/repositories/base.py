"""
Shared plumbing for the psycopg2 repositories
"""
import logging
from contextlib import contextmanager

import psycopg2

from discovery.core.database import get_db_connection_dict
from discovery.core.exceptions import InternalError

logger = logging.getLogger(__name__)


def escape_like(value: str) -> str:
    """Escape LIKE wildcards so user text matches literally"""
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def contains_pattern(value: str) -> str:
    return f"%{escape_like(value)}%"


class BaseRepository:
    """Opens one dict-cursor connection per call"""

    @contextmanager
    def _cursor(self):
        try:
            conn = get_db_connection_dict()
        except psycopg2.Error as e:
            logger.error(f"Could not connect to entity store: {e}")
            raise InternalError(f"Entity store unavailable: {e}") from e

        try:
            cursor = conn.cursor()
            try:
                yield cursor
            finally:
                cursor.close()
        except psycopg2.Error as e:
            logger.error(f"Entity store query failed: {e}")
            raise InternalError(f"Entity store error: {e}") from e
        finally:
            conn.close()

    @staticmethod
    def _offset(page_index: int, page_size: int) -> int:
        return page_index * page_size
