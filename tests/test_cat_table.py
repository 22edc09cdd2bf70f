"""Tests for src/cats/table.py — InMemoryCatTable."""

from dataclasses import replace

import pytest

from src.cats.models import SEED_CATS
from src.cats.table import DuplicateKeyError, InMemoryCatTable, TableError


class TestInsert:

    async def test_insert_then_one(self, table, sample_cat):
        await table.insert(sample_cat)
        assert await table.one(7) is sample_cat

    async def test_duplicate_id_rejected(self, table, sample_cat):
        await table.insert(sample_cat)
        with pytest.raises(DuplicateKeyError) as exc_info:
            await table.insert(replace(sample_cat, name="Other"))
        assert isinstance(exc_info.value, TableError)
        assert str(exc_info.value) == "Duplicate primary key 7 in table cats"
        assert (await table.one(7)).name == "Mittens"

    async def test_insert_many_keeps_order(self, table):
        await table.insert_many(SEED_CATS)
        assert [c.id for c in await table.many()] == [1, 2]

    async def test_insert_many_conflict_is_atomic(self, table, sample_cat):
        await table.insert(SEED_CATS[0])
        with pytest.raises(DuplicateKeyError):
            await table.insert_many([sample_cat, SEED_CATS[0]])
        assert await table.one(sample_cat.id) is None


class TestRemove:

    async def test_remove_existing(self, table, sample_cat):
        await table.insert(sample_cat)
        await table.remove(7)
        assert await table.one(7) is None

    async def test_remove_missing_is_noop(self, table):
        await table.remove(42)
        assert await table.many() == []


class TestQueries:

    async def test_one_missing(self, table):
        assert await table.one(1) is None

    async def test_many_empty(self):
        assert await InMemoryCatTable().many() == []

    async def test_many_insertion_order_after_removal(self, table, sample_cat):
        await table.insert_many(SEED_CATS)
        await table.insert(sample_cat)
        await table.remove(1)
        assert [c.id for c in await table.many()] == [2, 7]
