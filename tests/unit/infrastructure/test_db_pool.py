"""
Name: Database Pool Tests

Responsibilities:
  - Test pool lifecycle (init, get, close)
  - Offline unit tests (no real DB)

Notes:
  - Uses mocking for ConnectionPool
  - Tests pool singleton behavior
"""

from unittest.mock import MagicMock, patch

import pytest
from task_api.crosscutting.exceptions import DatabaseError
from task_api.infrastructure.db import (
    PoolAlreadyInitializedError,
    PoolNotInitializedError,
    close_pool,
    get_pool,
    init_pool,
)


@pytest.mark.unit
class TestPoolLifecycle:
    """Test pool initialization and cleanup."""

    def setup_method(self):
        close_pool()

    def teardown_method(self):
        close_pool()

    def test_init_pool_creates_pool(self):
        with patch("task_api.infrastructure.db.pool.ConnectionPool") as MockPool:
            mock_pool = MagicMock()
            MockPool.return_value = mock_pool

            result = init_pool("postgresql://test", min_size=2, max_size=10)

            MockPool.assert_called_once()
            assert MockPool.call_args.kwargs["min_size"] == 2
            assert result is mock_pool
            assert get_pool() is mock_pool

    def test_init_pool_twice_raises_error(self):
        with patch("task_api.infrastructure.db.pool.ConnectionPool"):
            init_pool("postgresql://test", min_size=1, max_size=2)

            with pytest.raises(PoolAlreadyInitializedError, match="ya fue"):
                init_pool("postgresql://test", min_size=1, max_size=2)

    def test_get_pool_without_init_raises_error(self):
        with pytest.raises(PoolNotInitializedError):
            get_pool()

    def test_pool_errors_are_database_errors(self):
        assert issubclass(PoolNotInitializedError, DatabaseError)

    def test_close_pool_clears_singleton(self):
        with patch("task_api.infrastructure.db.pool.ConnectionPool") as MockPool:
            mock_pool = MagicMock()
            MockPool.return_value = mock_pool
            init_pool("postgresql://test", min_size=1, max_size=2)

            close_pool()

            mock_pool.close.assert_called_once()
            with pytest.raises(PoolNotInitializedError):
                get_pool()

    def test_statement_timeout_is_applied_per_connection(self):
        with patch("task_api.infrastructure.db.pool.ConnectionPool") as MockPool:
            init_pool(
                "postgresql://test", min_size=1, max_size=2, statement_timeout_ms=1500
            )
            configure = MockPool.call_args.kwargs["configure"]

        conn = MagicMock()
        configure(conn)

        conn.execute.assert_called_once_with("SET statement_timeout = 1500")
