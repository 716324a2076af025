"""Shared fixtures: a small two-locale package of places and people."""

import copy
import json

import pytest

from nomina.config import NominaConfig, configure, reset_config

PLACES_PACKAGE = {
    "format": "4.0.0",
    "package": {
        "code": "places",
        "displayName": {"en": "Places", "de": "Orte"},
        "languages": ["de", "en"],
    },
    "catalogs": {
        "cities": {
            "displayName": {"en": "Cities", "de": "Städte"},
            "items": [
                {"t": {"de": "Hamburg", "en": "Hamburg"}, "tags": ["north", "port"]},
                {"t": {"de": "Bremen", "en": "Bremen"}, "tags": ["north", "port"]},
                {"t": {"de": "München", "en": "Munich"}, "tags": ["south"]},
            ],
        },
        "rivers": {
            "items": [
                {
                    "t": {"de": "Main", "en": "Main"},
                    "gram": {"de": {"gender": "m", "article": "def"}},
                },
            ],
        },
        "persons": {
            "items": [
                {
                    "t": "Anna",
                    "tags": ["female"],
                    "attrs": {"gender": "f"},
                    "gram": {"de": {"gender": "f"}},
                },
            ],
        },
        "titles": {
            "items": [
                {"t": {"de": "Graf", "en": "Count"}, "attrs": {"titleId": "graf"}}
            ],
        },
    },
    "recipes": [
        {
            "id": "city",
            "displayName": {"en": "City", "de": "Stadt"},
            "pattern": [{"select": {"from": "catalog", "key": "cities"}, "as": "City"}],
        },
        {
            "id": "city_pair",
            "pattern": [
                {"select": {"key": "cities"}, "as": "A"},
                {"literal": " & "},
                {"select": {"key": "cities"}, "as": "B", "distinctFrom": ["A"]},
            ],
        },
        {
            "id": "frankfurt",
            "pattern": [
                {"literal": "Frankfurt"},
                {"literal": " "},
                {"pp": {"prep": "an", "ref": {"select": {"key": "rivers"}}}},
            ],
        },
        {
            "id": "citizen",
            "pattern": [{"select": {"key": "cities"}, "transform": "demonym"}],
        },
        {
            "id": "greeting",
            "pattern": [
                {"literal": {"de": "Gruß aus ", "en": "Greetings from "}},
                {"generate": {"from": "recipe", "key": "city"}},
            ],
            "post": ["TrimSpaces"],
        },
        {
            "id": "outer",
            "pattern": [
                {"literal": {"de": "Post: ", "en": "Mail: "}},
                {"generate": {"from": "recipe", "key": "greeting"}},
            ],
        },
        {
            "id": "titled",
            "pattern": [
                {"select": {"key": "persons"}, "as": "Person", "ext": {"hidden": True}},
                {"select": {"key": "titles"}, "transform": "genderAdapt"},
                {"literal": " "},
                {"ref": "Person"},
            ],
        },
        {
            "id": "any",
            "oneOf": [{"ref": "city"}, {"pattern": [{"literal": "Neustadt"}]}],
        },
        {
            "id": "town",
            "pattern": [{"generate": {"from": "places", "collection": "towns"}}],
        },
        {
            "id": "northern",
            "pattern": [
                {
                    "generate": {
                        "from": "catalog",
                        "key": "cities",
                        "collection": "towns",
                    }
                }
            ],
        },
        {
            "id": "prefixed",
            "pattern": [
                {
                    "literal": "Alt ",
                    "ext": {"optional": True, "componentKey": "prefix"},
                },
                {"select": {"key": "cities"}},
            ],
        },
        {
            "id": "broken",
            "pattern": [{"select": {"key": "nope"}}],
        },
    ],
    "collections": [
        {"key": "bare", "query": {"tags": ["north"]}},
        {"key": "towns", "query": {"tags": ["north"], "recipes": ["city"]}},
    ],
    "langRules": {
        "de": {
            "prepCase": {"an": "dat", "in": "dat"},
            "articles": {"def": {"dat": {"m": "dem", "f": "der", "n": "dem"}}},
            "contractions": {"an dem": "am", "in dem": "im"},
            "defaults": {"articleWhenNone": "omit", "defaultCase": "nom"},
            "titles": {
                "graf": {"forms": {"m": {"nom": "Graf"}, "f": {"nom": "Gräfin"}}}
            },
        }
    },
    "output": {"transforms": ["CollapseSpaces"]},
}

SHARED_PACKAGE = {
    "format": "4.0.0",
    "package": {"code": "shared", "languages": ["en"]},
    "catalogs": {"seas": {"items": [{"t": "Baltic"}, {"t": "North Sea"}]}},
    "recipes": [
        {
            "id": "coast",
            "pattern": [
                {"select": {"key": "places:cities", "where": {"tags": ["port"]}}},
                {"literal": " on the "},
                {"select": {"key": "seas"}},
            ],
        }
    ],
}


@pytest.fixture(autouse=True)
def default_config():
    """Isolate every test from the user's config file and env vars."""
    configure(NominaConfig())
    yield
    reset_config()


@pytest.fixture
def places_data():
    return copy.deepcopy(PLACES_PACKAGE)


@pytest.fixture
def shared_data():
    return copy.deepcopy(SHARED_PACKAGE)


@pytest.fixture
def places_file(tmp_path, places_data):
    path = tmp_path / "places.json"
    path.write_text(json.dumps(places_data, ensure_ascii=False), encoding="utf-8")
    return path


@pytest.fixture
def shared_file(tmp_path, shared_data):
    path = tmp_path / "shared.json"
    path.write_text(json.dumps(shared_data), encoding="utf-8")
    return path

