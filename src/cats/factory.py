"""Factory for cat table backends."""

from src.cats.table import CatTable, InMemoryCatTable
from src.config.settings import get_settings

_table: CatTable | None = None


def get_cat_table() -> CatTable:
    """Get the cat table singleton, creating it from settings on first use."""
    global _table
    if _table is not None:
        return _table

    settings = get_settings()
    backend = settings.cat_store_backend

    if backend == "memory":
        _table = InMemoryCatTable(settings.cat_table_name)
    elif backend == "dynamodb":
        # Lazy import to avoid boto3 dependency when not needed
        from src.cats.dynamodb_table import DynamoDBCatTable
        _table = DynamoDBCatTable(
            table_name=settings.dynamodb_table_name,
            region=settings.aws_region,
        )
    else:
        raise ValueError(f"Unknown cat store backend: {backend}")

    return _table
