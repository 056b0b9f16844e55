# SPDX-License-Identifier: Apache-2.0
"""
Pytest plugin: fixtures and terminal summary for the countries GraphQL suite.

Provides:
  - session fixtures for the service under test, the parsed fixture
    document, its operation registry, the in-process runner and the HTTP
    smoke client
  - --service / --graphql-url / --live options, mirrored into the
    COUNTRIES_SERVICE / GRAPHQL_URL / GRAPHQL_LIVE environment so the CLI and
    direct pytest runs share one source of truth
  - a per-suite conformance summary at the end of the session
"""

from __future__ import annotations

import os
import time
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

import pytest

from countries_suite.config import LIVE_ENV, SERVICE_ENV, URL_ENV, SuiteConfig
from countries_suite.executor import OperationRunner
from countries_suite.http_client import GraphQLHttpClient
from countries_suite.operations import OperationRegistry, load_document
from countries_suite.service_loader import load_service


# ---------------------------------------------------------------------------
# Suite configuration
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class SuiteInfo:
    """Immutable description of one suite for reporting."""
    name: str
    display_name: str
    path_fragment: str
    quick_fix: str

    def validate(self) -> None:
        if not self.display_name:
            raise ValueError(f"Suite {self.name}: display_name cannot be empty")
        if not self.path_fragment:
            raise ValueError(f"Suite {self.name}: path_fragment cannot be empty")


SUITES: Dict[str, SuiteInfo] = {
    "schema": SuiteInfo(
        name="schema",
        display_name="Schema-level operations",
        path_fragment="tests/graphql/test_schema_queries",
        quick_fix="Check resolvers and the dataset: root lists, lookups by code, nested lists",
    ),
    "http": SuiteInfo(
        name="http",
        display_name="GraphQL-over-HTTP smoke",
        path_fragment="tests/graphql/test_http_smoke",
        quick_fix="Check the HTTP adapter: status codes, JSON content type, errors envelope",
    ),
    "unit": SuiteInfo(
        name="unit",
        display_name="Harness unit tests",
        path_fragment="tests/unit/",
        quick_fix="A harness helper regressed; these failures are not about the service",
    ),
}

for _suite in SUITES.values():
    _suite.validate()


def categorize(nodeid: str) -> str:
    normalized = (nodeid or "").replace("\\", "/").lower()
    for name, info in SUITES.items():
        if info.path_fragment in normalized:
            return name
    return "other"


# ---------------------------------------------------------------------------
# Options & markers
# ---------------------------------------------------------------------------

def pytest_addoption(parser: pytest.Parser) -> None:
    group = parser.getgroup("countries", "countries GraphQL suite")
    group.addoption("--service", default=None, help="Service spec 'package.module:attribute'")
    group.addoption("--graphql-url", default=None, help="GraphQL endpoint URL for HTTP tests")
    group.addoption(
        "--live",
        action="store_true",
        default=False,
        help="Send HTTP smoke requests over the network instead of in-process",
    )


def _apply_options(config: pytest.Config) -> None:
    """Only explicit flags override the environment."""
    option = getattr(config, "option", None)
    if option is None:
        return
    if getattr(option, "service", None):
        os.environ[SERVICE_ENV] = option.service
    if getattr(option, "graphql_url", None):
        os.environ[URL_ENV] = option.graphql_url
    if getattr(option, "live", False):
        os.environ[LIVE_ENV] = "1"


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers and mirror options into the environment."""
    markers = [
        "schema: Schema-level operation tests (in-process execution)",
        "http: GraphQL-over-HTTP smoke tests",
        "unit: Harness unit tests",
    ]
    for marker in markers:
        config.addinivalue_line("markers", marker)
    _apply_options(config)


def pytest_collection_modifyitems(config: pytest.Config, items: List[pytest.Item]) -> None:
    for item in items:
        suite = categorize(item.nodeid)
        if suite in SUITES:
            item.add_marker(getattr(pytest.mark, suite))


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture(scope="session")
def suite_config() -> SuiteConfig:
    return SuiteConfig.from_env()


@pytest.fixture(scope="session")
def service(suite_config: SuiteConfig) -> Any:
    """The schema service under test, resolved from COUNTRIES_SERVICE."""
    return load_service(suite_config.service_spec)


@pytest.fixture(scope="session")
def document(suite_config: SuiteConfig):
    return load_document(suite_config.queries_path)


@pytest.fixture(scope="session")
def registry(document) -> OperationRegistry:
    return OperationRegistry.from_document(document)


@pytest.fixture(scope="session")
def runner(service: Any, document, registry: OperationRegistry) -> OperationRunner:
    return OperationRunner(service, document=document, registry=registry)


@pytest.fixture(scope="session")
def http_client(service: Any, suite_config: SuiteConfig) -> GraphQLHttpClient:
    return GraphQLHttpClient(
        service=service,
        base_url=suite_config.graphql_url,
        live=suite_config.live,
    )


# ---------------------------------------------------------------------------
# Terminal summary
# ---------------------------------------------------------------------------

class ConformanceSummaryPlugin:
    """Per-suite pass/fail summary with a conformance level and quick fixes."""

    def __init__(self):
        self.start_time: Optional[float] = None
        self.plain_output: bool = False

    def _fmt(self, emoji: str, text: str) -> str:
        if self.plain_output or not emoji:
            return text
        return f"{emoji} {text}"

    def pytest_sessionstart(self, session: pytest.Session) -> None:
        self.start_time = time.time()
        self.plain_output = SuiteConfig.from_env().plain_output

    @staticmethod
    def level(passed: int, total: int) -> str:
        """Gold at 100%, Silver at >= 80%, Development at >= 50%."""
        if total == 0:
            return "No Tests Found"
        if passed == total:
            return "Gold"
        if passed * 100 >= total * 80:
            return "Silver"
        if passed * 100 >= total * 50:
            return "Development"
        return "Below Development"

    def _tally(self, terminalreporter) -> Tuple[Dict[str, int], Dict[str, int], List[Any]]:
        passed: Dict[str, int] = {}
        total: Dict[str, int] = {}
        failed: List[Any] = []
        for outcome in ("passed", "failed", "error", "skipped"):
            for rep in terminalreporter.stats.get(outcome, []):
                suite = categorize(getattr(rep, "nodeid", ""))
                total[suite] = total.get(suite, 0) + 1
                if outcome == "passed":
                    passed[suite] = passed.get(suite, 0) + 1
                elif outcome in ("failed", "error"):
                    failed.append(rep)
        return passed, total, failed

    def pytest_terminal_summary(self, terminalreporter, exitstatus, config) -> None:
        passed, total, failed = self._tally(terminalreporter)
        if not total:
            return
        duration = time.time() - self.start_time if self.start_time else 0.0

        title = "COUNTRIES GRAPHQL SUITE"
        if failed:
            terminalreporter.write_sep("=", self._fmt("❌", f"{title} - CONFORMANCE ANALYSIS"))
        else:
            terminalreporter.write_sep("=", self._fmt("🥇", f"{title} - ALL SUITES PASSING"))

        for name in list(SUITES) + ["other"]:
            if name not in total:
                continue
            display = SUITES[name].display_name if name in SUITES else "Other tests"
            level = self.level(passed.get(name, 0), total[name])
            terminalreporter.write_line(
                f"  {display}: {level} ({passed.get(name, 0)}/{total[name]} tests passing)"
            )

        if failed:
            terminalreporter.write_line("")
            terminalreporter.write_line("Failures by suite:")
            seen = set()
            for rep in failed:
                suite = categorize(rep.nodeid)
                terminalreporter.write_line(f"  - {rep.nodeid}")
                if suite in SUITES and suite not in seen:
                    seen.add(suite)
                    terminalreporter.write_line(f"      Quick fix: {SUITES[suite].quick_fix}")

        terminalreporter.write_line(f"{self._fmt('⏱️', 'Completed in')} {duration:.2f}s")


conformance_summary_plugin = ConformanceSummaryPlugin()


def pytest_sessionstart(session: pytest.Session) -> None:
    conformance_summary_plugin.pytest_sessionstart(session)


def pytest_terminal_summary(terminalreporter, exitstatus, config) -> None:
    conformance_summary_plugin.pytest_terminal_summary(terminalreporter, exitstatus, config)
