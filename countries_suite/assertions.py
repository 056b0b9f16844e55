# SPDX-License-Identifier: Apache-2.0
"""
Shape assertions for countries query results.

Every helper is a pure check over plain JSON-like data (``dict``/``list``)
and raises ShapeError on the first violation. Composite checks walk every
element of the lists they are given and finish with at least one sanity
check, so an accidentally empty dataset cannot make them pass vacuously.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Mapping

from countries_suite.envelope import validate_envelope
from countries_suite.errors import ShapeError

JsonDict = Dict[str, Any]


# ---------------------------------------------------------------------------
# Primitive checks
# ---------------------------------------------------------------------------

def assert_mapping(value: Any, field: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ShapeError(f"expected an object, got {type(value).__name__}", field=field)
    return value


def assert_list(value: Any, field: str) -> List[Any]:
    if not isinstance(value, list):
        raise ShapeError(f"expected a list, got {type(value).__name__}", field=field)
    return value


def assert_non_empty_list(value: Any, field: str) -> List[Any]:
    items = assert_list(value, field)
    if not items:
        raise ShapeError("expected a non-empty list", field=field)
    return items


def assert_string_field(obj: Mapping[str, Any], key: str, where: str) -> str:
    value = obj.get(key)
    if not isinstance(value, str):
        raise ShapeError(
            f"expected string, got {type(value).__name__} ({value!r})",
            field=f"{where}.{key}",
        )
    return value


def _assert_code_and_name(obj: Any, where: str) -> str:
    entity = assert_mapping(obj, where)
    code = assert_string_field(entity, "code", where)
    assert_string_field(entity, "name", where)
    return code


# ---------------------------------------------------------------------------
# Envelope
# ---------------------------------------------------------------------------

def assert_envelope(payload: Any, expect_data: bool = True, context: str = "response") -> JsonDict:
    """
    Validate a GraphQL response envelope.

    With ``expect_data`` the envelope must carry ``data`` and no ``errors``;
    otherwise it must carry a non-empty ``errors`` list and no ``data``.
    """
    validate_envelope(payload, context=context)
    if expect_data:
        if "errors" in payload:
            raise ShapeError(f"{context}: unexpected errors {payload['errors']!r}", field="errors")
        if payload.get("data") is None:
            raise ShapeError(f"{context}: data missing", field="data")
    else:
        if "data" in payload:
            raise ShapeError(f"{context}: data must be absent, got {payload['data']!r}", field="data")
        assert_non_empty_list(payload.get("errors"), "errors")
    return payload


# ---------------------------------------------------------------------------
# Operation-level checks
# ---------------------------------------------------------------------------

def assert_all_roots(data: Mapping[str, Any]) -> Dict[str, int]:
    """AllRoots: the three root lists are non-empty. Returns their lengths."""
    counts: Dict[str, int] = {}
    for root in ("continents", "countries", "languages"):
        items = assert_non_empty_list(data.get(root), root)
        for index, item in enumerate(items):
            _assert_code_and_name(item, f"{root}[{index}]")
        counts[root] = len(items)
    return counts


def assert_single_entity(
    data: Mapping[str, Any],
    continent: str = "EU",
    country: str = "FR",
    language: str = "fr",
) -> None:
    """SingleEntity: each looked-up entity echoes the requested code."""
    expected = {"continent": continent, "country": country, "language": language}
    for field, code in expected.items():
        entity = data.get(field)
        if entity is None:
            raise ShapeError(f"lookup by code {code!r} returned null", field=field)
        actual = _assert_code_and_name(entity, field)
        if actual != code:
            raise ShapeError(f"expected code {code!r}, got {actual!r}", field=f"{field}.code")


def assert_not_found(data: Mapping[str, Any], fields: Iterable[str] = ("continent", "country")) -> None:
    """NotFoundExample: lookups by a nonexistent code resolve to null."""
    for field in fields:
        if field not in data:
            raise ShapeError("field missing from result", field=field)
        if data[field] is not None:
            raise ShapeError(f"expected null, got {data[field]!r}", field=field)


def assert_continent_shape(data: Mapping[str, Any]) -> int:
    """
    ContinentShape: every continent has a string code and name and a list of
    countries, each with a string code and name.

    Returns the number of nested countries inspected. At least one continent
    must list countries.
    """
    continents = assert_non_empty_list(data.get("continents"), "continents")
    inspected = 0
    for ci, continent in enumerate(continents):
        where = f"continents[{ci}]"
        _assert_code_and_name(continent, where)
        countries = assert_list(continent.get("countries"), f"{where}.countries")
        for ni, country in enumerate(countries):
            _assert_code_and_name(country, f"{where}.countries[{ni}]")
            inspected += 1
    if inspected == 0:
        raise ShapeError("no continent lists any country", field="continents.countries")
    return inspected


def assert_country_core(data: Mapping[str, Any], states_for: str = "US") -> int:
    """
    CountryCore: every country has a string code and name and list-valued
    ``languages`` and ``states``.

    ``languages`` may be empty for a given country (territories without an
    assigned language) but not for every country. The country coded
    ``states_for`` must list at least one state. Returns the number of states
    inspected for that country.
    """
    countries = assert_non_empty_list(data.get("countries"), "countries")
    with_languages = 0
    inspected_states = 0
    seen_target = False

    for index, country in enumerate(countries):
        where = f"countries[{index}]"
        code = _assert_code_and_name(country, where)

        languages = assert_list(country.get("languages"), f"{where}.languages")
        for li, language in enumerate(languages):
            _assert_code_and_name(language, f"{where}.languages[{li}]")
        if languages:
            with_languages += 1

        states = assert_list(country.get("states"), f"{where}.states")
        for si, state in enumerate(states):
            _assert_code_and_name(state, f"{where}.states[{si}]")

        if code == states_for:
            seen_target = True
            if not states:
                raise ShapeError(f"country {states_for!r} has no states", field=f"{where}.states")
            inspected_states += len(states)

    if with_languages == 0:
        raise ShapeError("no country has a non-empty languages list", field="countries.languages")
    if not seen_target:
        raise ShapeError(f"country {states_for!r} missing from result", field="countries")
    return inspected_states
