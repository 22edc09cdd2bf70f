"""Cat table abstraction + in-memory implementation."""

from abc import ABC, abstractmethod

from src.cats.models import Cat


class TableError(Exception):
    """Base class for table constraint failures."""


class DuplicateKeyError(TableError):
    def __init__(self, table_name: str, cat_id: int):
        super().__init__(f"Duplicate primary key {cat_id} in table {table_name}")
        self.table_name = table_name
        self.cat_id = cat_id


class CatTable(ABC):
    """Abstract base for cat storage keyed by integer id."""

    name: str

    @abstractmethod
    async def insert(self, cat: Cat) -> None:
        """Insert a cat. Raises DuplicateKeyError if the id is taken."""
        ...

    @abstractmethod
    async def insert_many(self, cats: list[Cat]) -> None:
        ...

    @abstractmethod
    async def remove(self, cat_id: int) -> None:
        """Remove the cat with this id. A missing id is not an error."""
        ...

    @abstractmethod
    async def one(self, cat_id: int) -> Cat | None:
        """Look up a cat by id. Returns None if not found."""
        ...

    @abstractmethod
    async def many(self) -> list[Cat]:
        """All cats, in insertion order."""
        ...


class InMemoryCatTable(CatTable):
    """Process-local table. Contents live as long as the Lambda container."""

    def __init__(self, name: str = "cats"):
        self.name = name
        self._rows: dict[int, Cat] = {}

    async def insert(self, cat: Cat) -> None:
        if cat.id in self._rows:
            raise DuplicateKeyError(self.name, cat.id)
        self._rows[cat.id] = cat

    async def insert_many(self, cats: list[Cat]) -> None:
        # Check the whole batch first so a conflict leaves the table untouched
        seen: set[int] = set()
        for cat in cats:
            if cat.id in self._rows or cat.id in seen:
                raise DuplicateKeyError(self.name, cat.id)
            seen.add(cat.id)
        for cat in cats:
            self._rows[cat.id] = cat

    async def remove(self, cat_id: int) -> None:
        self._rows.pop(cat_id, None)

    async def one(self, cat_id: int) -> Cat | None:
        return self._rows.get(cat_id)

    async def many(self) -> list[Cat]:
        return list(self._rows.values())
