# SPDX-License-Identifier: Apache-2.0
"""
Resolve the schema service under test from a 'package.module:attribute' spec.

The attribute may be a service object or a zero-argument factory returning
one. A service must provide ``get_enveloped`` and ``fetch``.
"""

from __future__ import annotations

import importlib
import inspect
import logging
from typing import Any, Optional

from countries_suite.config import DEFAULT_SERVICE_SPEC
from countries_suite.errors import ServiceLoadError

logger = logging.getLogger(__name__)

REQUIRED_METHODS = ("get_enveloped", "fetch")


def _is_service(obj: Any) -> bool:
    return all(callable(getattr(obj, name, None)) for name in REQUIRED_METHODS)


def validate_service(obj: Any, spec: str = "<object>") -> Any:
    missing = [name for name in REQUIRED_METHODS if not callable(getattr(obj, name, None))]
    if missing:
        raise ServiceLoadError(
            f"Service '{spec}' resolved to {type(obj).__name__}, "
            f"which lacks required method(s): {', '.join(missing)}."
        )
    return obj


def load_service(spec: Optional[str] = None) -> Any:
    """Import, instantiate if needed, and validate the service named by ``spec``."""
    spec = spec or DEFAULT_SERVICE_SPEC
    module_name, _, attr = spec.partition(":")
    if not module_name or not attr:
        raise ServiceLoadError(
            f"Invalid service spec '{spec}'. Expected 'package.module:attribute'."
        )

    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        raise ServiceLoadError(
            f"Failed to import service module '{module_name}' for spec '{spec}'."
        ) from exc

    try:
        target = getattr(module, attr)
    except AttributeError as exc:
        raise ServiceLoadError(
            f"Attribute '{attr}' not found in module '{module_name}' for spec '{spec}'."
        ) from exc

    if inspect.isclass(target) or (callable(target) and not _is_service(target)):
        try:
            target = target()
        except TypeError as exc:
            raise ServiceLoadError(
                f"Service factory '{spec}' must be callable without arguments."
            ) from exc

    service = validate_service(target, spec)
    logger.debug("Loaded schema service %s (%s)", spec, type(service).__name__)
    return service
