"""Shared fixtures for the cat API test suite."""

import json
from datetime import date

import pytest

import src.api.dispatcher as dispatcher_mod
import src.cats.factory as factory_mod
from src.api.dispatcher import CatDispatcher
from src.cats.models import Cat
from src.cats.table import InMemoryCatTable
from src.config.settings import get_settings


@pytest.fixture(autouse=True)
def reset_singletons(monkeypatch):
    """Every test starts from a cold process: no table, no dispatcher."""
    monkeypatch.setattr(factory_mod, "_table", None)
    monkeypatch.setattr(dispatcher_mod, "_dispatcher", None)
    yield
    monkeypatch.setattr(factory_mod, "_table", None)
    monkeypatch.setattr(dispatcher_mod, "_dispatcher", None)


@pytest.fixture
def override_settings(monkeypatch):
    """Factory fixture: set env vars and clear settings cache.

    Usage:
        override_settings(CAT_STORE_BACKEND="dynamodb", SEED_CATS="false")
    """
    def _override(**kwargs):
        for key, value in kwargs.items():
            monkeypatch.setenv(key.upper(), str(value))
        get_settings.cache_clear()

    yield _override

    get_settings.cache_clear()


@pytest.fixture
def table() -> InMemoryCatTable:
    return InMemoryCatTable("cats")


@pytest.fixture
def dispatcher(table) -> CatDispatcher:
    """Dispatcher bound to a fresh in-memory table, seeded on first event."""
    return CatDispatcher(table_factory=lambda: table)


@pytest.fixture
def sample_cat() -> Cat:
    return Cat(
        id=7,
        name="Mittens",
        color="Black",
        birth_date=date(2019, 11, 23),
        favourite_food="Salmon",
        owner="Jo",
    )


def make_event(method="GET", path="/api/cat/list/", path_parameters=None, body=None) -> dict:
    """Build an API Gateway REST proxy event. Dict bodies are JSON-encoded."""
    if isinstance(body, dict):
        body = json.dumps(body)
    return {
        "httpMethod": method,
        "path": path,
        "pathParameters": path_parameters,
        "body": body,
    }


def response_body(response: dict) -> dict:
    return json.loads(response["body"])
