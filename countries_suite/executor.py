# SPDX-License-Identifier: Apache-2.0
"""
In-process executor adapter.

Runs named operations from the shared fixture document against the schema
service's enveloped ``(schema, execute)`` pair. Two tiers:

  run(name)                  -> raw result (``data`` and/or ``errors``)
  run_expect_data(name, ...) -> ``data``, or a test failure explaining
                                whether errors came back or data was missing
"""

from __future__ import annotations

import logging
from inspect import isawaitable
from typing import Any, Dict, Mapping, Optional, Type, TypeVar, Union, overload

from graphql import DocumentNode
from pydantic import BaseModel

from countries_suite.errors import ExecutionErrorsReturned, NoDataReturned
from countries_suite.operations import OperationRegistry, load_document

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def result_field(result: Any, key: str) -> Any:
    """Read ``data`` or ``errors`` from an ExecutionResult or a plain mapping."""
    if isinstance(result, Mapping):
        return result.get(key)
    return getattr(result, key, None)


class OperationRunner:
    """Execute fixture operations by name against a schema service."""

    def __init__(
        self,
        service: Any,
        document: Optional[DocumentNode] = None,
        registry: Optional[OperationRegistry] = None,
    ):
        self.service = service
        self.document = document if document is not None else load_document()
        self.registry = registry if registry is not None else OperationRegistry.from_document(self.document)

    async def run(self, name: str) -> Any:
        """
        Execute operation ``name``.

        Unknown names raise UnknownOperationError before the service is
        touched. A fresh enveloped pair is requested for every call.
        """
        self.registry.require(name)
        schema, execute = self.service.get_enveloped({})
        result = execute(schema=schema, document=self.document, operation_name=name)
        if isawaitable(result):
            result = await result
        logger.debug(
            "Executed %s: data=%s errors=%d",
            name,
            "yes" if result_field(result, "data") is not None else "no",
            len(result_field(result, "errors") or []),
        )
        return result

    @overload
    async def run_expect_data(self, name: str) -> Dict[str, Any]: ...

    @overload
    async def run_expect_data(self, name: str, model: Type[ModelT]) -> ModelT: ...

    async def run_expect_data(
        self,
        name: str,
        model: Optional[Type[ModelT]] = None,
    ) -> Union[Dict[str, Any], ModelT]:
        """Execute ``name`` and insist on a clean, data-bearing result."""
        result = await self.run(name)
        errors = result_field(result, "errors")
        if errors:
            raise ExecutionErrorsReturned(name, errors)
        data = result_field(result, "data")
        if data is None:
            raise NoDataReturned(name)
        if model is not None:
            return model.model_validate(data)
        return data
