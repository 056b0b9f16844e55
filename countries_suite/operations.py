# SPDX-License-Identifier: Apache-2.0
"""
Fixture loader and operation registry.

The fixture document is parsed once per process and the set of declared
operation names is derived from it, so tests refer to operations by name and
a misspelled name fails loudly instead of executing the wrong operation.
"""

from __future__ import annotations

import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import FrozenSet, Iterator, List, Optional, Union

from graphql import DocumentNode, GraphQLSyntaxError, OperationDefinitionNode, parse

from countries_suite.config import DEFAULT_QUERIES_PATH, QUERIES_ENV
from countries_suite.errors import FixtureError, UnknownOperationError

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


# ---------------------------------------------------------------------------
# Fixture loading
# ---------------------------------------------------------------------------

def resolve_queries_path(path: Optional[PathLike] = None) -> Path:
    """Explicit path first, then GRAPHQL_QUERIES, then the packaged fixture."""
    if path is not None:
        return Path(path).expanduser().resolve()
    env_path = os.environ.get(QUERIES_ENV)
    if env_path:
        return Path(env_path).expanduser().resolve()
    return DEFAULT_QUERIES_PATH


def parse_source(source: str, origin: str = "<string>") -> DocumentNode:
    """Parse GraphQL source, mapping syntax errors to FixtureError."""
    try:
        return parse(source)
    except GraphQLSyntaxError as exc:
        raise FixtureError(f"Failed to parse GraphQL fixture {origin}: {exc.message}") from exc


@lru_cache(maxsize=None)
def _load_document_cached(path: Path) -> DocumentNode:
    try:
        source = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise FixtureError(f"Cannot read GraphQL fixture {path}: {exc}") from exc
    document = parse_source(source, origin=str(path))
    logger.debug("Parsed GraphQL fixture %s (%d definitions)", path, len(document.definitions))
    return document


def load_document(path: Optional[PathLike] = None) -> DocumentNode:
    """Load and parse the fixture document; parsed once per resolved path."""
    return _load_document_cached(resolve_queries_path(path))


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

class OperationRegistry:
    """
    Read-only set of the named operations declared by a document.

    Fragments and anonymous operations are not registered: neither can be
    selected by ``operationName``.
    """

    __slots__ = ("_names",)

    def __init__(self, names: FrozenSet[str]):
        self._names = frozenset(names)

    @classmethod
    def from_document(cls, document: DocumentNode) -> "OperationRegistry":
        names = frozenset(
            definition.name.value
            for definition in document.definitions
            if isinstance(definition, OperationDefinitionNode) and definition.name is not None
        )
        return cls(names)

    @property
    def names(self) -> FrozenSet[str]:
        return self._names

    def sorted_names(self) -> List[str]:
        return sorted(self._names)

    def require(self, name: str) -> str:
        """Return ``name`` if declared; raise UnknownOperationError otherwise."""
        if name not in self._names:
            raise UnknownOperationError(name, self._names)
        return name

    def __contains__(self, name: object) -> bool:
        return name in self._names

    def __iter__(self) -> Iterator[str]:
        return iter(self.sorted_names())

    def __len__(self) -> int:
        return len(self._names)

    def __repr__(self) -> str:
        return f"OperationRegistry({self.sorted_names()!r})"


@lru_cache(maxsize=None)
def _registry_for(path: Path) -> OperationRegistry:
    return OperationRegistry.from_document(_load_document_cached(path))


def load_registry(path: Optional[PathLike] = None) -> OperationRegistry:
    """Registry for the process-wide parsed fixture document."""
    return _registry_for(resolve_queries_path(path))
