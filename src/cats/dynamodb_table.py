"""DynamoDB-backed cat table."""

import asyncio
from datetime import date
from decimal import Decimal

from src.cats.models import OPTIONAL_FIELDS, Cat
from src.cats.table import CatTable, DuplicateKeyError


class DynamoDBCatTable(CatTable):
    """Stores cats in a DynamoDB table with a numeric `id` partition key."""

    def __init__(self, table_name: str, region: str = "us-east-1"):
        self.name = table_name
        self._region = region
        self._table = None

    def _get_table(self):
        """Lazy-init boto3 Table resource."""
        if self._table is None:
            import boto3

            dynamodb = boto3.resource("dynamodb", region_name=self._region)
            self._table = dynamodb.Table(self.name)
        return self._table

    async def insert(self, cat: Cat) -> None:
        await asyncio.to_thread(self._put, cat)

    async def insert_many(self, cats: list[Cat]) -> None:
        await asyncio.to_thread(self._put_batch, cats)

    async def remove(self, cat_id: int) -> None:
        await asyncio.to_thread(self._get_table().delete_item, Key={"id": cat_id})

    async def one(self, cat_id: int) -> Cat | None:
        resp = await asyncio.to_thread(self._get_table().get_item, Key={"id": cat_id})
        item = resp.get("Item")
        if item is None:
            return None
        return _from_item(item)

    async def many(self) -> list[Cat]:
        items = await asyncio.to_thread(self._scan_all)
        # Ids are assigned in increasing order, so id order is insertion order
        return sorted((_from_item(item) for item in items), key=lambda c: c.id)

    def _put(self, cat: Cat) -> None:
        from botocore.exceptions import ClientError

        try:
            self._get_table().put_item(
                Item=_to_item(cat),
                ConditionExpression="attribute_not_exists(id)",
            )
        except ClientError as e:
            if e.response.get("Error", {}).get("Code") == "ConditionalCheckFailedException":
                raise DuplicateKeyError(self.name, cat.id) from e
            raise

    def _put_batch(self, cats: list[Cat]) -> None:
        with self._get_table().batch_writer() as batch:
            for cat in cats:
                batch.put_item(Item=_to_item(cat))

    def _scan_all(self) -> list[dict]:
        table = self._get_table()
        resp = table.scan()
        items = resp.get("Items", [])
        while "LastEvaluatedKey" in resp:
            resp = table.scan(ExclusiveStartKey=resp["LastEvaluatedKey"])
            items.extend(resp.get("Items", []))
        return items


def _to_item(cat: Cat) -> dict:
    item = {"id": cat.id, "name": cat.name, "birth_date": cat.birth_date.isoformat()}
    for field_name in OPTIONAL_FIELDS:
        value = getattr(cat, field_name)
        if value is not None:
            item[field_name] = value
    return item


def _from_item(item: dict) -> Cat:
    """DynamoDB returns numbers as Decimal; map them back to int."""
    return Cat(
        id=int(item["id"]),
        name=_plain(item.get("name")),
        birth_date=date.fromisoformat(item["birth_date"]),
        color=_plain(item.get("color")),
        favourite_food=_plain(item.get("favourite_food")),
        owner=_plain(item.get("owner")),
    )


def _plain(value):
    if isinstance(value, Decimal):
        return int(value) if value == value.to_integral_value() else float(value)
    return value
