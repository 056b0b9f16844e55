# SPDX-License-Identifier: Apache-2.0
"""
Countries GraphQL conformance tests.

Schema-level operation tests, GraphQL-over-HTTP smoke tests, and unit tests
for the harness itself.
"""
