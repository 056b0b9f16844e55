# SPDX-License-Identifier: Apache-2.0
"""
Executable schema for the reference service.

The SDL lives in ``schema.graphql``; resolvers are attached to the built
schema for the fields that cannot be served by graphql-core's default
(dict key) resolver: root lookups and the code-to-record links.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

from graphql import GraphQLResolveInfo, GraphQLSchema, build_schema

from countries_suite.service.data import CountriesData, Record

SDL_PATH = Path(__file__).resolve().parent / "schema.graphql"


def build_countries_schema(data: CountriesData) -> GraphQLSchema:
    schema = build_schema(SDL_PATH.read_text(encoding="utf-8"))

    def resolve_continents(_root: Any, _info: GraphQLResolveInfo):
        return data.continents

    def resolve_continent(_root: Any, _info: GraphQLResolveInfo, code: str) -> Optional[Record]:
        return data.continent(code)

    def resolve_countries(_root: Any, _info: GraphQLResolveInfo):
        return data.countries

    def resolve_country(_root: Any, _info: GraphQLResolveInfo, code: str) -> Optional[Record]:
        return data.country(code)

    def resolve_languages(_root: Any, _info: GraphQLResolveInfo):
        return data.languages

    def resolve_language(_root: Any, _info: GraphQLResolveInfo, code: str) -> Optional[Record]:
        return data.language(code)

    query = schema.query_type
    query.fields["continents"].resolve = resolve_continents
    query.fields["continent"].resolve = resolve_continent
    query.fields["countries"].resolve = resolve_countries
    query.fields["country"].resolve = resolve_country
    query.fields["languages"].resolve = resolve_languages
    query.fields["language"].resolve = resolve_language

    schema.type_map["Continent"].fields["countries"].resolve = (
        lambda continent, _info: data.countries_in(continent["code"])
    )
    country_type = schema.type_map["Country"]
    country_type.fields["continent"].resolve = (
        lambda country, _info: data.continent(country["continent"])
    )
    country_type.fields["languages"].resolve = lambda country, _info: data.languages_of(country)
    schema.type_map["State"].fields["country"].resolve = (
        lambda state, _info: data.country(state["country"])
    )
    return schema
