"""Tests for src/lambda_handler.py — REST proxy and Mangum entry points."""

import pytest
from mangum import Mangum

from src.lambda_handler import handler, lambda_handler
from src.main import app
from tests.conftest import make_event, response_body


@pytest.fixture(autouse=True)
def memory_backend(override_settings):
    override_settings(CAT_STORE_BACKEND="memory", SEED_CATS="true")


class TestLambdaHandler:

    def test_list(self):
        result = lambda_handler(make_event("GET", "/api/cat/list/"), None)
        assert result["statusCode"] == 200
        assert len(response_body(result)["cat_list"]) == 2

    def test_null_event(self):
        result = lambda_handler(None, None)
        assert result["statusCode"] == 400
        assert response_body(result) == {"error": "Event is null."}

    def test_state_survives_warm_invocations(self):
        body = {"name": "Mittens", "birth_date": "2019-11-23"}
        assert lambda_handler(make_event("POST", "/api/cat/new/", body=body), None)["statusCode"] == 201

        result = lambda_handler(make_event("GET", "/api/cat/single/", {"id": "3"}), None)
        assert response_body(result)["cat"]["name"] == "Mittens"

    def test_put_not_allowed(self):
        result = lambda_handler(make_event("PUT", "/api/cat/single/", {"id": "1"}), None)
        assert result["statusCode"] == 405
        assert response_body(result) == {"error": "Invalid HTTP method PUT."}


class TestMangumHandler:

    def test_wraps_fastapi_app(self):
        assert isinstance(handler, Mangum)
        assert handler.app is app
