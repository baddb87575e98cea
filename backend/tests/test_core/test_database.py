"""
Unit tests for the psycopg2 connection helpers
"""
from unittest.mock import MagicMock, patch

import psycopg2
import psycopg2.extras
import pytest

from discovery.core import database
from discovery.core.exceptions import InternalError


class TestConnectionHelpers:

    @patch('discovery.core.database.settings')
    def test_missing_database_url(self, mock_settings):
        mock_settings.DATABASE_URL = ""

        with pytest.raises(InternalError) as exc_info:
            database.get_db_connection_dict()

        assert exc_info.value.message == "DATABASE_URL not configured"

    @patch('discovery.core.database.psycopg2.connect')
    @patch('discovery.core.database.settings')
    def test_dict_connection_is_read_only(self, mock_settings, mock_connect):
        mock_settings.DATABASE_URL = "postgresql://localhost/discovery"
        conn = MagicMock()
        mock_connect.return_value = conn

        assert database.get_db_connection_dict() is conn
        assert mock_connect.call_args[0][0] == "postgresql://localhost/discovery"
        assert mock_connect.call_args[1]['cursor_factory'] is psycopg2.extras.RealDictCursor
        conn.set_session.assert_called_once_with(readonly=True)


class TestConnectionRetry:

    @patch('discovery.core.database.time.sleep')
    @patch('discovery.core.database.get_db_connection')
    def test_retries_then_succeeds(self, mock_get_conn, mock_sleep):
        # Arrange
        conn = MagicMock()
        mock_get_conn.side_effect = [
            psycopg2.OperationalError("SSL connection has been closed unexpectedly"),
            conn,
        ]

        # Act
        result = database.get_db_connection_with_retry(max_retries=3, retry_delay=0.5)

        # Assert
        assert result is conn
        assert mock_get_conn.call_count == 2
        mock_sleep.assert_called_once_with(0.5)

    @patch('discovery.core.database.time.sleep')
    @patch('discovery.core.database.get_db_connection')
    def test_backoff_doubles_and_last_error_raised(self, mock_get_conn, mock_sleep):
        mock_get_conn.side_effect = psycopg2.OperationalError("connection refused")

        with pytest.raises(psycopg2.OperationalError):
            database.get_db_connection_with_retry(max_retries=3, retry_delay=1.0)

        assert mock_get_conn.call_count == 3
        assert [call[0][0] for call in mock_sleep.call_args_list] == [1.0, 2.0]

    @patch('discovery.core.database.time.sleep')
    @patch('discovery.core.database.get_db_connection')
    def test_failed_probe_query_closes_connection(self, mock_get_conn, mock_sleep):
        # Arrange
        broken = MagicMock()
        broken.cursor.return_value.execute.side_effect = psycopg2.OperationalError("SSL SYSCALL error")
        healthy = MagicMock()
        mock_get_conn.side_effect = [broken, healthy]

        # Act
        result = database.get_db_connection_with_retry(max_retries=2, retry_delay=0.1)

        # Assert
        assert result is healthy
        broken.close.assert_called_once()
        healthy.close.assert_not_called()
