# SPDX-License-Identifier: Apache-2.0
"""
Suite configuration, read from environment variables.

    GRAPHQL_URL             endpoint used to build HTTP requests
    GRAPHQL_LIVE            send HTTP requests over the network instead of
                            handing them to the in-process service
    COUNTRIES_SERVICE       'package.module:attribute' of the service under test
    GRAPHQL_QUERIES         path to the GraphQL fixture document
    COUNTRIES_PLAIN_OUTPUT  suppress emoji in the terminal summary
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

DEFAULT_GRAPHQL_URL = "http://localhost:8787/graphql"
DEFAULT_SERVICE_SPEC = "countries_suite.service:default_service"
DEFAULT_QUERIES_PATH = Path(__file__).resolve().parent / "queries.graphql"

URL_ENV = "GRAPHQL_URL"
LIVE_ENV = "GRAPHQL_LIVE"
SERVICE_ENV = "COUNTRIES_SERVICE"
QUERIES_ENV = "GRAPHQL_QUERIES"
PLAIN_OUTPUT_ENV = "COUNTRIES_PLAIN_OUTPUT"

_TRUTHY = {"1", "true", "yes", "on"}


def env_flag(value: Optional[str]) -> bool:
    """Interpret an environment string as a boolean flag."""
    return (value or "").strip().lower() in _TRUTHY


@dataclass(frozen=True)
class SuiteConfig:
    """Configuration for a suite run."""

    graphql_url: str = DEFAULT_GRAPHQL_URL
    live: bool = False
    service_spec: str = DEFAULT_SERVICE_SPEC
    queries_path: Path = DEFAULT_QUERIES_PATH
    plain_output: bool = False

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "SuiteConfig":
        """Create configuration from environment variables."""
        env = os.environ if environ is None else environ
        queries = env.get(QUERIES_ENV)
        return cls(
            graphql_url=env.get(URL_ENV) or DEFAULT_GRAPHQL_URL,
            live=env_flag(env.get(LIVE_ENV)),
            service_spec=env.get(SERVICE_ENV) or DEFAULT_SERVICE_SPEC,
            queries_path=Path(queries).expanduser() if queries else DEFAULT_QUERIES_PATH,
            plain_output=env_flag(env.get(PLAIN_OUTPUT_ENV)),
        )
