# SPDX-License-Identifier: Apache-2.0
"""
HTTP smoke client.

Builds one ``httpx.Request`` per call and either forwards it to the schema
service's ``fetch`` (in-process, the default) or sends it over the network
when the suite runs live against a deployed endpoint. No retries, no
connection reuse between calls.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Mapping, Optional, Union

import httpx

from countries_suite.config import DEFAULT_GRAPHQL_URL

logger = logging.getLogger(__name__)

Body = Union[str, bytes, None]


class GraphQLHttpClient:
    """Single-round-trip GraphQL-over-HTTP requests."""

    def __init__(self, service: Any = None, base_url: str = DEFAULT_GRAPHQL_URL, live: bool = False):
        if not live and service is None:
            raise ValueError("An in-process client needs a service; pass live=True to use the network")
        self.service = service
        self.base_url = base_url
        self.live = live

    def build_request(
        self,
        method: str = "POST",
        url: Optional[str] = None,
        headers: Optional[Mapping[str, str]] = None,
        body: Body = None,
        params: Optional[Mapping[str, str]] = None,
    ) -> httpx.Request:
        return httpx.Request(
            method,
            url or self.base_url,
            headers=dict(headers or {}),
            content=body,
            params=params,
        )

    async def request(
        self,
        method: str = "POST",
        url: Optional[str] = None,
        headers: Optional[Mapping[str, str]] = None,
        body: Body = None,
        params: Optional[Mapping[str, str]] = None,
    ) -> httpx.Response:
        req = self.build_request(method, url=url, headers=headers, body=body, params=params)
        if self.live:
            async with httpx.AsyncClient() as client:
                response = await client.send(req)
        else:
            response = await self.service.fetch(req)
        logger.debug("%s %s -> %d", req.method, req.url, response.status_code)
        return response

    async def post_json(
        self,
        payload: Mapping[str, Any],
        headers: Optional[Mapping[str, str]] = None,
    ) -> httpx.Response:
        merged: Dict[str, str] = {"Content-Type": "application/json"}
        merged.update(headers or {})
        return await self.request("POST", headers=merged, body=json.dumps(payload))

    async def get_query(self, query: str, operation_name: Optional[str] = None) -> httpx.Response:
        params = {"query": query}
        if operation_name:
            params["operationName"] = operation_name
        return await self.request("GET", params=params)
