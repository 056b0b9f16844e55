# SPDX-License-Identifier: Apache-2.0
"""SuiteConfig.from_env and service resolution."""

from __future__ import annotations

from pathlib import Path

import pytest

from countries_suite.config import (
    DEFAULT_GRAPHQL_URL,
    DEFAULT_QUERIES_PATH,
    DEFAULT_SERVICE_SPEC,
    SuiteConfig,
    env_flag,
)
from countries_suite.errors import ServiceLoadError
from countries_suite.service import CountriesService, default_service
from countries_suite.service_loader import load_service, validate_service
from tests.mock.mock_service import MockService


def test_defaults_from_empty_environment():
    config = SuiteConfig.from_env({})
    assert config.graphql_url == DEFAULT_GRAPHQL_URL == "http://localhost:8787/graphql"
    assert config.live is False
    assert config.service_spec == DEFAULT_SERVICE_SPEC
    assert config.queries_path == DEFAULT_QUERIES_PATH
    assert config.plain_output is False


def test_environment_overrides():
    config = SuiteConfig.from_env(
        {
            "GRAPHQL_URL": "http://api.internal:9000/graphql",
            "GRAPHQL_LIVE": "yes",
            "COUNTRIES_SERVICE": "pkg.mod:svc",
            "GRAPHQL_QUERIES": "/tmp/q.graphql",
            "COUNTRIES_PLAIN_OUTPUT": "1",
        }
    )
    assert config.graphql_url == "http://api.internal:9000/graphql"
    assert config.live is True
    assert config.service_spec == "pkg.mod:svc"
    assert config.queries_path == Path("/tmp/q.graphql")
    assert config.plain_output is True


def test_empty_url_falls_back_to_default():
    assert SuiteConfig.from_env({"GRAPHQL_URL": ""}).graphql_url == DEFAULT_GRAPHQL_URL


@pytest.mark.parametrize("value,expected", [("1", True), ("TRUE", True), (" on ", True), ("0", False), ("", False), (None, False)])
def test_env_flag(value, expected):
    assert env_flag(value) is expected


def test_config_is_frozen():
    with pytest.raises(AttributeError):
        SuiteConfig().live = True  # type: ignore[misc]


# ---------------------------------------------------------------------------
# Service loader
# ---------------------------------------------------------------------------

def test_default_spec_loads_reference_service():
    service = load_service(None)
    assert isinstance(service, CountriesService)
    assert service is default_service()


def test_loads_instance_attribute():
    service = load_service("tests.mock.mock_service:ready_service")
    assert isinstance(service, MockService)


def test_class_is_instantiated():
    service = load_service("tests.mock.mock_service:MockService")
    assert isinstance(service, MockService)


def test_factory_is_called():
    service = load_service("tests.mock.mock_service:erroring_service")
    assert isinstance(service, MockService)


@pytest.mark.parametrize(
    "spec,match",
    [
        ("no_colon_here", "Invalid service spec"),
        ("tests.mock.does_not_exist:svc", "Failed to import"),
        ("tests.mock.mock_service:missing_attr", "not found in module"),
        ("tests.mock.mock_service:not_a_service", "lacks required method"),
    ],
)
def test_bad_specs_raise_service_load_error(spec, match):
    with pytest.raises(ServiceLoadError, match=match):
        load_service(spec)


def test_validate_service_reports_missing_methods():
    class HalfService:
        def fetch(self, request):
            return None

    with pytest.raises(ServiceLoadError, match="get_enveloped"):
        validate_service(HalfService(), "half")
