# SPDX-License-Identifier: Apache-2.0
"""
Exception hierarchy for the countries GraphQL conformance suite.

Three families of failure are kept apart:

  - Harness usage errors (unknown operation names, bad fixtures, a service
    spec that does not resolve). These are bugs in the suite or its
    configuration, never in the service under test.
  - Result expectation errors, raised by the "expect success" helpers when
    the service answers with errors or without data.
  - Shape errors, raised by the assertion layer when returned data does not
    match the reference data model.

The last two derive from AssertionError so pytest reports them as test
failures rather than errors.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional


class SuiteError(Exception):
    """Base exception for all suite failures."""
    pass


class FixtureError(SuiteError):
    """The GraphQL fixture document could not be read or parsed."""
    pass


class UnknownOperationError(SuiteError, LookupError):
    """An operation name that the fixture document does not declare."""

    def __init__(self, name: str, known: Iterable[str]):
        self.name = name
        self.known: List[str] = sorted(known)
        listed = ", ".join(self.known) if self.known else "<none>"
        super().__init__(
            f"Unknown GraphQL operation {name!r}. Known operations: {listed}"
        )


class ServiceLoadError(SuiteError, RuntimeError):
    """The configured schema service could not be resolved or is incomplete."""
    pass


class ResultExpectationError(SuiteError, AssertionError):
    """An operation expected to succeed did not."""

    def __init__(self, message: str, operation: Optional[str] = None):
        self.operation = operation
        prefix = f"{operation}: " if operation else ""
        super().__init__(f"{prefix}{message}")


class ExecutionErrorsReturned(ResultExpectationError):
    """The execution result carried a non-empty ``errors`` list."""

    def __init__(self, operation: str, errors: Iterable[Any]):
        self.errors = list(errors)
        messages = "; ".join(_error_message(e) for e in self.errors)
        super().__init__(f"execution returned errors: {messages}", operation)


class NoDataReturned(ResultExpectationError):
    """The execution result had neither errors nor data."""

    def __init__(self, operation: str):
        super().__init__("execution returned no data", operation)


class ShapeError(SuiteError, AssertionError):
    """Returned data does not match the expected shape."""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.field = field
        self.details = details or {}
        field_info = f" (field: {field})" if field else ""
        super().__init__(f"{message}{field_info}")


def _error_message(error: Any) -> str:
    if isinstance(error, dict):
        return str(error.get("message", error))
    return str(getattr(error, "message", error))
