"""Request dispatcher for the cat API.

Takes an API Gateway proxy event ({httpMethod, path, pathParameters, body}),
routes it to list / get / create / delete, and returns a proxy response
({statusCode, headers, body}). Every failure becomes a response; nothing
is raised to the caller.
"""

import base64
import binascii
import json
from collections.abc import Callable

from src.api.validation import parse_id, validate_new_cat
from src.cats.factory import get_cat_table
from src.cats.models import SEED_CATS, Cat, CatListItem
from src.cats.table import CatTable
from src.config.settings import get_settings
from src.logging.audit import log_request, log_table_failure, request_scope

SINGLE_PATH = "/api/cat/single/"
LIST_PATH = "/api/cat/list/"

JSON_HEADERS = {"Content-Type": "application/json"}


def api_response(status_code: int, body: dict) -> dict:
    return {
        "statusCode": status_code,
        "headers": dict(JSON_HEADERS),
        "body": json.dumps(body),
    }


def error_response(status_code: int, message: str) -> dict:
    return api_response(status_code, {"error": message})


class CatDispatcher:
    """Routes proxy events to cat table operations.

    Owns the id counter. The table is created and seeded on the first
    event, then reused for the life of the process.
    """

    def __init__(
        self,
        table_factory: Callable[[], CatTable] = get_cat_table,
        seed_cats: list[Cat] | None = None,
    ):
        self._table_factory = table_factory
        self._seed_cats = seed_cats
        self._table: CatTable | None = None
        self.next_id = 1

    async def handle(self, event: dict | None) -> dict:
        with request_scope(event) as scope:
            response = await self._dispatch(event)
            log_request(event, response, scope.elapsed_ms)
        return response

    async def _setup_table(self) -> CatTable:
        if self._table is None:
            seed = self._seed_cats
            if seed is None:
                seed = SEED_CATS if get_settings().seed_cats else []

            table = self._table_factory()
            if seed:
                await table.insert_many(seed)

            self.next_id = max((cat.id for cat in seed), default=0) + 1
            self._table = table
        return self._table

    async def _dispatch(self, event: dict | None) -> dict:
        if event is None:
            return error_response(400, "Event is null.")

        try:
            table = await self._setup_table()
        except Exception as e:
            return _table_failure("setup", e)

        method = event.get("httpMethod")
        if method == "GET":
            path = event.get("path") or ""
            if SINGLE_PATH in path:
                return await self._get_cat(event, table)
            if LIST_PATH in path:
                return await self._list_cats(table)
            return error_response(400, "Invalid request.")
        if method == "POST":
            return await self._create_cat(event, table)
        if method == "DELETE":
            return await self._delete_cat(event, table)

        return error_response(405, f"Invalid HTTP method {method}.")

    async def _get_cat(self, event: dict, table: CatTable) -> dict:
        params = event.get("pathParameters")
        # API Gateway rejects a missing {id} before we are invoked
        if params is None:
            return error_response(400, "Missing id parameter in request.")

        raw_id = params.get("id")
        if raw_id is None:
            return error_response(400, "Id is null.")
        if raw_id == "":
            return error_response(400, "Id is missing.")

        cat_id = parse_id(raw_id)
        if cat_id is None:
            return error_response(400, "Id must be numeric.")

        try:
            cat = await table.one(cat_id)
        except Exception as e:
            return _table_failure("one", e)

        if cat is None:
            return error_response(404, f"Cat {raw_id} not found.")
        return api_response(200, {"cat": cat.to_dict()})

    async def _list_cats(self, table: CatTable) -> dict:
        try:
            cats = await table.many()
        except Exception as e:
            return _table_failure("many", e)

        cat_list = [CatListItem.from_cat(cat).to_dict() for cat in cats]
        return api_response(200, {"cat_list": cat_list})

    async def _create_cat(self, event: dict, table: CatTable) -> dict:
        body = event.get("body")
        if body is None:
            return error_response(400, "No body found.")

        try:
            if event.get("isBase64Encoded"):
                body = base64.b64decode(body).decode("utf-8")
            payload = json.loads(body)
        except (ValueError, TypeError, binascii.Error) as e:
            return error_response(400, str(e) or "Could not parse request body.")

        message = validate_new_cat(payload)
        if message is not None:
            return error_response(400, message)

        cat = Cat.from_payload(self.next_id, payload)
        try:
            await table.insert(cat)
        except Exception as e:
            return _table_failure("insert", e)

        self.next_id += 1
        return api_response(201, {"msg": "Cat record inserted."})

    async def _delete_cat(self, event: dict, table: CatTable) -> dict:
        params = event.get("pathParameters")
        if params is None:
            return error_response(400, "Missing id parameter in request.")

        raw_id = params.get("id")
        if raw_id is None:
            return error_response(400, "Id is null.")

        cat_id = parse_id(raw_id)
        if cat_id is None:
            return error_response(400, "Id must be numeric.")

        try:
            await table.remove(cat_id)
        except Exception as e:
            return _table_failure("remove", e)

        # Deleting an absent cat leaves the table in the same state, so it succeeds too
        return api_response(200, {"message": f"Deleted cat {cat_id}"})


def _table_failure(operation: str, error: Exception) -> dict:
    log_table_failure(operation, error)
    return error_response(400, str(error))


_dispatcher: CatDispatcher | None = None


def get_dispatcher() -> CatDispatcher:
    """Get the process-wide dispatcher, kept warm across Lambda invocations."""
    global _dispatcher
    if _dispatcher is None:
        _dispatcher = CatDispatcher()
    return _dispatcher


async def handle_event(event: dict | None) -> dict:
    return await get_dispatcher().handle(event)
