# src/encoded_query/__init__.py

"""
Encoded Query Library Initialization.

This package provides a fluent builder for ServiceNow encoded query strings.

It initializes a logger with a NullHandler and makes the QueryBuilder, its
operator vocabulary, the request parameter model and the exceptions
available at the top level.
"""

import logging

# --------------------------------------------------------------------------
# Logging Setup
# --------------------------------------------------------------------------
# Library logs are discarded unless the consuming application configures
# logging for the "encoded_query" logger.
logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())
logger.propagate = False

# --------------------------------------------------------------------------
# Exception Exports
# --------------------------------------------------------------------------
from .base.exceptions import (
    QueryBuilderException,
    QueryEmptyException,
    QueryMissingFieldException,
    QueryTypeException,
)

# --------------------------------------------------------------------------
# Query Building Exports
# --------------------------------------------------------------------------
from .base.query import LogicalOperator, OrderDirection, QueryBuilder, QueryOperator
from .base.params import QueryParams
from .base.utils import DATETIME_FORMAT, format_datetime_utc

__all__ = [
    # Exceptions
    "QueryBuilderException",
    "QueryEmptyException",
    "QueryMissingFieldException",
    "QueryTypeException",
    # Query
    "QueryBuilder",
    "QueryOperator",
    "LogicalOperator",
    "OrderDirection",
    "QueryParams",
    # Datetime
    "DATETIME_FORMAT",
    "format_datetime_utc",
    # Logging
    "logger",
]

__version__ = "0.1.0"
