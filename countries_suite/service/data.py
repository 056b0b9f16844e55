# SPDX-License-Identifier: Apache-2.0
"""Static reference dataset backing the reference schema service."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)

DATA_PATH = Path(__file__).resolve().parent / "countries.json"

Record = Dict[str, Any]


@dataclass
class CountriesData:
    """
    In-memory, read-only index over the dataset.

    Countries reference their continent and languages by code; states carry
    the code of their country so they can resolve back to it.
    """

    continents: List[Record] = field(default_factory=list)
    countries: List[Record] = field(default_factory=list)
    languages: List[Record] = field(default_factory=list)

    def __post_init__(self) -> None:
        self._continents = {c["code"]: c for c in self.continents}
        self._countries = {c["code"]: c for c in self.countries}
        self._languages = {lang["code"]: lang for lang in self.languages}
        for country in self.countries:
            for state in country.get("states", []):
                state.setdefault("country", country["code"])

    @classmethod
    def from_file(cls, path: Path = DATA_PATH) -> "CountriesData":
        raw = json.loads(path.read_text(encoding="utf-8"))
        data = cls(
            continents=raw.get("continents", []),
            countries=raw.get("countries", []),
            languages=raw.get("languages", []),
        )
        logger.debug(
            "Loaded dataset %s: %d continents, %d countries, %d languages",
            path, len(data.continents), len(data.countries), len(data.languages),
        )
        return data

    def continent(self, code: str) -> Optional[Record]:
        return self._continents.get(code)

    def country(self, code: str) -> Optional[Record]:
        return self._countries.get(code)

    def language(self, code: str) -> Optional[Record]:
        return self._languages.get(code)

    def countries_in(self, continent_code: str) -> List[Record]:
        return [c for c in self.countries if c.get("continent") == continent_code]

    def languages_of(self, country: Record) -> List[Record]:
        return [self._languages[code] for code in country.get("languages", []) if code in self._languages]
