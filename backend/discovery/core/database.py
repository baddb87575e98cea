"""
PostgreSQL connection helpers (psycopg2)

All repositories obtain their connections here. Connections are opened per
call and closed by the caller; discovery never writes, so every connection
is put in read-only mode.
"""
import time
import logging

import psycopg2
from psycopg2.extras import RealDictCursor

from .config import settings
from .exceptions import InternalError

logger = logging.getLogger(__name__)

CONNECTION_TIMEOUT = settings.DB_CONNECT_TIMEOUT


def _database_url() -> str:
    database_url = settings.DATABASE_URL
    if not database_url:
        raise InternalError("DATABASE_URL not configured")
    return database_url


def get_db_connection():
    """
    Get a direct psycopg2 database connection (returns tuples)

    Raises:
        InternalError if DATABASE_URL is not configured
    """
    conn = psycopg2.connect(_database_url(), connect_timeout=CONNECTION_TIMEOUT)
    conn.set_session(readonly=True)
    return conn


def get_db_connection_dict():
    """
    Get a database connection with RealDictCursor (returns dictionaries)

    Example:
        conn = get_db_connection_dict()
        cursor = conn.cursor()
        cursor.execute("SELECT id, name FROM businesses")
        results = cursor.fetchall()  # Returns list of dicts
        cursor.close()
        conn.close()
    """
    conn = psycopg2.connect(
        _database_url(),
        cursor_factory=RealDictCursor,
        connect_timeout=CONNECTION_TIMEOUT,
    )
    conn.set_session(readonly=True)
    return conn


def get_db_connection_with_retry(max_retries=None, retry_delay=None):
    """
    Get a psycopg2 connection, retrying on connection failures

    Only opening the connection is retried; queries are never re-run.
    Used by the health probe, where a transient SSL drop should not
    report the service as down.

    Args:
        max_retries: Maximum number of connection attempts (default from settings)
        retry_delay: Initial delay between retries in seconds, doubled each attempt

    Returns:
        psycopg2 connection object

    Raises:
        psycopg2.OperationalError: If all retry attempts fail
    """
    max_retries = max_retries or settings.DB_CONNECT_MAX_RETRIES
    retry_delay = settings.DB_CONNECT_RETRY_DELAY if retry_delay is None else retry_delay

    last_error = None

    for attempt in range(1, max_retries + 1):
        try:
            logger.debug(f"Database connection attempt {attempt}/{max_retries}")
            conn = get_db_connection()

            try:
                cursor = conn.cursor()
                cursor.execute("SELECT 1")
                cursor.close()
            except psycopg2.Error:
                conn.close()
                raise

            logger.debug(f"Database connection successful on attempt {attempt}")
            return conn

        except psycopg2.OperationalError as e:
            last_error = e
            error_msg = str(e)

            if "SSL connection has been closed unexpectedly" in error_msg:
                logger.warning(f"SSL connection error on attempt {attempt}/{max_retries}: {error_msg}")
            else:
                logger.warning(f"Connection error on attempt {attempt}/{max_retries}: {error_msg}")

            if attempt < max_retries:
                delay = retry_delay * (2 ** (attempt - 1))
                logger.info(f"Retrying in {delay:.2f} seconds...")
                time.sleep(delay)
            else:
                logger.error(f"All {max_retries} connection attempts failed")

    raise last_error
