# tests/conftest.py
import logging
from datetime import datetime, timedelta, timezone

import pytest

from encoded_query import QueryBuilder


@pytest.fixture
def qb() -> QueryBuilder:
    return QueryBuilder()


@pytest.fixture
def incident_qb() -> QueryBuilder:
    """Builder with a field already selected."""
    return QueryBuilder().field("short_description")


@pytest.fixture
def utc_start() -> datetime:
    return datetime(2024, 3, 1, 8, 5, 9, tzinfo=timezone.utc)


@pytest.fixture
def utc_end() -> datetime:
    return datetime(2024, 3, 31, 23, 59, 59, tzinfo=timezone.utc)


@pytest.fixture
def plus_two() -> timezone:
    return timezone(timedelta(hours=2))


@pytest.fixture
def library_logs(caplog):
    """Routes the library's logger (which does not propagate) into caplog."""
    library_logger = logging.getLogger("encoded_query")
    library_logger.addHandler(caplog.handler)
    caplog.set_level(logging.DEBUG, logger="encoded_query")
    yield caplog
    library_logger.removeHandler(caplog.handler)
