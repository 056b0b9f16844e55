# countries_suite/cli.py
# SPDX-License-Identifier: Apache-2.0
"""
Countries Suite CLI

Lightweight entrypoint to run the GraphQL conformance suites with one command.
"""

from __future__ import annotations

import argparse
import os
import sys
import time
from typing import Dict, List, Optional

import pytest

from countries_suite.config import LIVE_ENV, SERVICE_ENV, URL_ENV
from countries_suite.errors import FixtureError
from countries_suite.operations import load_registry, resolve_queries_path

SUITE_PATHS: Dict[str, str] = {
    "schema": "tests/graphql/test_schema_queries.py",
    "http": "tests/graphql/test_http_smoke.py",
    "unit": "tests/unit",
}

PYTEST_EXTRA_ARGS = os.environ.get("PYTEST_ARGS", "").split()


# --------------------------------------------------------------------------- #
# Internal helpers
# --------------------------------------------------------------------------- #

def _repo_root() -> str:
    """Best-effort guess of repo root."""
    here = os.path.abspath(os.path.dirname(__file__))
    return os.path.dirname(here)


def _validate_paths(paths: List[str]) -> bool:
    """Validate that each path we intend pytest to run exists."""
    ok = True
    for p in paths:
        if not (os.path.isdir(p) or os.path.isfile(p)):
            print(f"error: test path does not exist: {p}", file=sys.stderr)
            ok = False
    return ok


def _build_pytest_args(
    test_paths: List[str],
    quiet_mode: bool = False,
    verbose_mode: bool = False,
    passthrough_args: Optional[List[str]] = None,
) -> List[str]:
    """Build standardized pytest arguments."""
    args = [*test_paths, *PYTEST_EXTRA_ARGS, *(passthrough_args or [])]
    if quiet_mode:
        args.append("-q")
    elif verbose_mode:
        args.append("-vv")
    else:
        args.append("-v")
    return args


def _apply_environment(url: Optional[str], live: bool, service: Optional[str]) -> None:
    """Mirror CLI flags into the environment read by the pytest plugin."""
    if url:
        os.environ[URL_ENV] = url
    if live:
        os.environ[LIVE_ENV] = "1"
    if service:
        os.environ[SERVICE_ENV] = service


def _run_suite(
    title: str,
    test_paths: List[str],
    passthrough_args: List[str],
    quiet_mode: bool = False,
    verbose_mode: bool = False,
) -> int:
    """Run the given test paths with pytest from the repo root."""
    os.chdir(_repo_root())
    if not _validate_paths(test_paths):
        return 2

    if not quiet_mode:
        print(f"Running {title}...")
        if passthrough_args:
            print(f"   Passthrough args: {' '.join(passthrough_args)}")

    args = _build_pytest_args(
        test_paths,
        quiet_mode=quiet_mode,
        verbose_mode=verbose_mode,
        passthrough_args=passthrough_args,
    )
    start_time = time.time()
    rc = int(pytest.main(args))
    elapsed = time.time() - start_time

    if not quiet_mode:
        if rc == 0:
            print(f"All selected suites passed in {elapsed:.1f}s.")
        else:
            print("\nConformance failures detected. Inspect the failed tests above.")
    return rc


def _list_operations(queries: Optional[str]) -> int:
    try:
        registry = load_registry(queries)
    except FixtureError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    print(f"# {resolve_queries_path(queries)}")
    for name in registry:
        print(name)
    return 0


# --------------------------------------------------------------------------- #
# main
# --------------------------------------------------------------------------- #

def main(argv: Optional[List[str]] = None) -> int:
    # Manually split passthrough args
    cli_args = list(sys.argv[1:] if argv is None else argv)
    passthrough_args: List[str] = []
    if "--" in cli_args:
        split_index = cli_args.index("--")
        passthrough_args = cli_args[split_index + 1:]
        cli_args = cli_args[:split_index]

    parser = argparse.ArgumentParser(
        prog="countries-suite",
        description="Countries GraphQL conformance suite",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  countries-suite test-all
  countries-suite test-http --live --url https://staging.example.com/graphql
  countries-suite test-schema --service mypkg.server:service
  countries-suite test-all -- -x --tb=short
  countries-suite list-operations

Configuration (environment variables):
  GRAPHQL_URL            Endpoint for HTTP smoke tests
  GRAPHQL_LIVE=1         Send HTTP requests over the network
  COUNTRIES_SERVICE      Service under test ('package.module:attribute')
  GRAPHQL_QUERIES        Path to the GraphQL fixture document
  PYTEST_ARGS="-x -s"    Additional pytest arguments
        """.strip(),
    )

    parser.add_argument("-q", "--quiet", action="store_true", help="Minimal output (quiet mode)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Detailed output (-vv)")
    parser.add_argument("--url", help="GraphQL endpoint URL (sets GRAPHQL_URL)")
    parser.add_argument("--live", action="store_true", help="Send HTTP requests over the network")
    parser.add_argument("--service", help="Service spec 'package.module:attribute'")

    subparsers = parser.add_subparsers(
        dest="command",
        required=True,
        help="command to execute",
        metavar="COMMAND",
    )
    subparsers.add_parser("test-all", help="Run every suite")
    subparsers.add_parser("test-schema", help="Run schema-level operation tests")
    subparsers.add_parser("test-http", help="Run HTTP smoke tests")
    subparsers.add_parser("test-unit", help="Run harness unit tests")
    list_parser = subparsers.add_parser("list-operations", help="List fixture operation names")
    list_parser.add_argument("--queries", help="Path to a GraphQL fixture document")

    try:
        args = parser.parse_args(cli_args)
    except SystemExit as e:
        return int(e.code or 0)

    if args.command == "list-operations":
        return _list_operations(args.queries)

    _apply_environment(args.url, args.live, args.service)
    run_kwargs = {
        "passthrough_args": passthrough_args,
        "quiet_mode": args.quiet,
        "verbose_mode": args.verbose,
    }

    if args.command == "test-all":
        return _run_suite("all suites", list(SUITE_PATHS.values()), **run_kwargs)

    suite = args.command[len("test-"):]
    return _run_suite(f"{suite} suite", [SUITE_PATHS[suite]], **run_kwargs)


if __name__ == "__main__":
    raise SystemExit(main())
