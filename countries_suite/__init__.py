# SPDX-License-Identifier: Apache-2.0
"""
Countries GraphQL conformance suite.

Harness for checking a GraphQL service over a static continents / countries /
languages / states dataset, both by in-process execution of named fixture
operations and through GraphQL-over-HTTP requests.
"""

from countries_suite.config import SuiteConfig
from countries_suite.errors import (
    ExecutionErrorsReturned,
    FixtureError,
    NoDataReturned,
    ResultExpectationError,
    ServiceLoadError,
    ShapeError,
    SuiteError,
    UnknownOperationError,
)
from countries_suite.executor import OperationRunner
from countries_suite.http_client import GraphQLHttpClient
from countries_suite.operations import OperationRegistry, load_document, load_registry
from countries_suite.service_loader import load_service

__version__ = "1.0.0"

__all__ = [
    "ExecutionErrorsReturned",
    "FixtureError",
    "GraphQLHttpClient",
    "NoDataReturned",
    "OperationRegistry",
    "OperationRunner",
    "ResultExpectationError",
    "ServiceLoadError",
    "ShapeError",
    "SuiteConfig",
    "SuiteError",
    "UnknownOperationError",
    "load_document",
    "load_registry",
    "load_service",
]
