# SPDX-License-Identifier: Apache-2.0
"""
Typed result models for the fixture operations.

Deserializing through these models enforces field types. Fields a query does
not select fall back to their defaults, so emptiness and presence rules are
still checked on the raw data by ``countries_suite.assertions``.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class _Entity(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)


class State(_Entity):
    code: Optional[str] = None
    name: str


class Language(_Entity):
    code: str
    name: str
    native: Optional[str] = None


class Continent(_Entity):
    code: str
    name: str
    capital: Optional[str] = None
    countries: List["Country"] = Field(default_factory=list)


class Country(_Entity):
    code: str
    name: str
    native: Optional[str] = None
    continent: Optional[Continent] = None
    languages: List[Language] = Field(default_factory=list)
    states: List[State] = Field(default_factory=list)


Continent.model_rebuild()


# ---------------------------------------------------------------------------
# Operation results
# ---------------------------------------------------------------------------

class AllRootsResult(_Entity):
    continents: List[Continent]
    countries: List[Country]
    languages: List[Language]


class SingleEntityResult(_Entity):
    continent: Continent
    country: Country
    language: Language


class NotFoundResult(_Entity):
    continent: Optional[Continent] = None
    country: Optional[Country] = None


class ContinentShapeResult(_Entity):
    continents: List[Continent]


class CountryCoreResult(_Entity):
    countries: List[Country]

    def by_code(self, code: str) -> Optional[Country]:
        return next((c for c in self.countries if c.code == code), None)
