"""Shared pytest fixtures for Apartly tests."""
import sys
sys.dont_write_bytecode = True

from unittest.mock import MagicMock  # noqa: E402

import pytest  # noqa: E402


@pytest.fixture
def cur():
    """Mocked psycopg2 cursor."""
    return MagicMock()


@pytest.fixture
def mock_txn(cur):
    """Patch infra.db.txn so route handlers receive the mocked cursor."""
    from unittest.mock import patch

    with patch("apartly.infra.db.txn") as txn:
        txn.return_value.__enter__.return_value = cur
        yield txn
