# SPDX-License-Identifier: Apache-2.0
"""
Reference schema service for the countries dataset.

Select it (or any compatible service) with
``COUNTRIES_SERVICE=countries_suite.service:default_service``.
"""

from __future__ import annotations

from functools import lru_cache

from countries_suite.service.app import CountriesService, Enveloped
from countries_suite.service.data import CountriesData


@lru_cache(maxsize=1)
def default_service() -> CountriesService:
    """Process-wide reference service over the packaged dataset."""
    return CountriesService()


__all__ = ["CountriesData", "CountriesService", "Enveloped", "default_service"]
