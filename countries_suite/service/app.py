# SPDX-License-Identifier: Apache-2.0
"""
Reference schema service: in-process execution plus a GraphQL-over-HTTP
endpoint.

It exposes the two collaborator interfaces the suite talks to:

  - ``get_enveloped(config) -> Enveloped(schema, execute)``
  - ``await fetch(httpx.Request) -> httpx.Response``

``fetch`` hands the request to the Starlette app through
``httpx.ASGITransport``, so no socket is opened.

HTTP behavior:

  POST  application/json body {query, operationName?, variables?}
  GET   ?query=...&operationName=...&variables=<json>; queries only
  other methods -> 405

Malformed transport input (bad JSON, missing query, unparsable document)
answers 4xx with an ``errors`` envelope. Validation and field errors are part
of the payload and answer 200.
"""

from __future__ import annotations

import json
import logging
from inspect import isawaitable
from typing import Any, Dict, Mapping, NamedTuple, Optional

import httpx
from graphql import (
    DocumentNode,
    ExecutionResult,
    GraphQLSchema,
    GraphQLSyntaxError,
    OperationType,
    execute as graphql_execute,
    get_operation_ast,
    parse,
    validate,
)
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route

from countries_suite.service.data import CountriesData
from countries_suite.service.schema import build_countries_schema

logger = logging.getLogger(__name__)

DEFAULT_PATH = "/graphql"


class Enveloped(NamedTuple):
    schema: GraphQLSchema
    execute: Any


class BadRequest(Exception):
    """Transport-level rejection, rendered as an ``errors`` envelope."""

    def __init__(self, message: str, status_code: int = 400, headers: Optional[Dict[str, str]] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.headers = headers or {}


def _error_response(exc: BadRequest) -> JSONResponse:
    return JSONResponse(
        {"errors": [{"message": exc.message}]},
        status_code=exc.status_code,
        headers=exc.headers,
    )


def _render(result: ExecutionResult) -> Dict[str, Any]:
    """Request errors (no data, no error path) are sent without a ``data`` key."""
    payload = result.formatted
    if result.data is None and result.errors and all(e.path is None for e in result.errors):
        payload.pop("data", None)
    return payload


class CountriesService:
    """GraphQL service over the static countries dataset."""

    def __init__(self, data: Optional[CountriesData] = None, path: str = DEFAULT_PATH):
        self.data = data if data is not None else CountriesData.from_file()
        self.path = path
        self.schema = build_countries_schema(self.data)
        self.app = Starlette(
            routes=[Route(path, self._graphql_endpoint, methods=["GET", "POST"])],
        )

    # ------------------------------------------------------------------ #
    # In-process interface
    # ------------------------------------------------------------------ #

    def get_enveloped(self, config: Optional[Mapping[str, Any]] = None) -> Enveloped:
        """
        Return a fresh ``(schema, execute)`` pair.

        ``config`` becomes the base of the execution context; ``execute``
        validates the document before running it, and reports validation
        failures as an ExecutionResult without data.
        """
        base_context = dict(config or {})

        async def execute(
            *,
            schema: GraphQLSchema,
            document: DocumentNode,
            operation_name: Optional[str] = None,
            variable_values: Optional[Dict[str, Any]] = None,
            context_value: Optional[Dict[str, Any]] = None,
        ) -> ExecutionResult:
            errors = validate(schema, document)
            if errors:
                return ExecutionResult(data=None, errors=errors)
            context = {**base_context, **(context_value or {})}
            result = graphql_execute(
                schema,
                document,
                operation_name=operation_name,
                variable_values=variable_values,
                context_value=context,
            )
            if isawaitable(result):
                result = await result
            return result

        return Enveloped(schema=self.schema, execute=execute)

    # ------------------------------------------------------------------ #
    # HTTP interface
    # ------------------------------------------------------------------ #

    async def fetch(self, request: httpx.Request) -> httpx.Response:
        """Serve one request through the ASGI app and return the read response."""
        transport = httpx.ASGITransport(app=self.app)
        async with httpx.AsyncClient(transport=transport) as client:
            return await client.send(request)

    async def _graphql_endpoint(self, request: Request) -> JSONResponse:
        try:
            params = await self._read_params(request)
            document = self._parse(params["query"])
            if request.method == "GET":
                self._require_query_operation(document, params.get("operationName"))
        except BadRequest as exc:
            logger.info("Rejected %s %s: %s", request.method, request.url.path, exc.message)
            return _error_response(exc)

        enveloped = self.get_enveloped({"request": request})
        result = await enveloped.execute(
            schema=enveloped.schema,
            document=document,
            operation_name=params.get("operationName"),
            variable_values=params.get("variables"),
        )
        return JSONResponse(_render(result))

    async def _read_params(self, request: Request) -> Dict[str, Any]:
        if request.method == "GET":
            params: Dict[str, Any] = dict(request.query_params)
            raw_variables = params.get("variables")
            if raw_variables:
                try:
                    params["variables"] = json.loads(raw_variables)
                except ValueError as exc:
                    raise BadRequest("Variables are invalid JSON.") from exc
        else:
            content_type = request.headers.get("content-type", "")
            if "application/json" not in content_type.lower():
                raise BadRequest(f"Unsupported content type {content_type!r}.", status_code=415)
            body = await request.body()
            try:
                params = json.loads(body)
            except ValueError as exc:
                raise BadRequest("POST body sent invalid JSON.") from exc
            if not isinstance(params, dict):
                raise BadRequest("POST body must be a JSON object.")

        if not isinstance(params.get("query"), str) or not params["query"].strip():
            raise BadRequest("Must provide query string.")
        variables = params.get("variables")
        if variables is not None and not isinstance(variables, dict):
            raise BadRequest("Variables must be a JSON object.")
        operation_name = params.get("operationName")
        if operation_name is not None and not isinstance(operation_name, str):
            raise BadRequest("operationName must be a string.")
        return params

    @staticmethod
    def _parse(query: str) -> DocumentNode:
        try:
            return parse(query)
        except GraphQLSyntaxError as exc:
            raise BadRequest(exc.message) from exc

    @staticmethod
    def _require_query_operation(document: DocumentNode, operation_name: Optional[str]) -> None:
        operation = get_operation_ast(document, operation_name)
        if operation is not None and operation.operation != OperationType.QUERY:
            raise BadRequest(
                f"Can only perform a {operation.operation.value} operation from a POST request.",
                status_code=405,
                headers={"Allow": "POST"},
            )
