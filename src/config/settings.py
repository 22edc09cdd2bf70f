"""Application settings loaded from environment variables."""

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Cat table
    cat_store_backend: str = "memory"  # "memory" | "dynamodb"
    cat_table_name: str = "cats"
    seed_cats: bool = True  # insert the two sample cats on first use

    # DynamoDB backend
    dynamodb_table_name: str = "cats"
    aws_region: str = "us-east-1"

    # Logging
    log_level: str = "INFO"
    audit_log_file: str = ""  # Empty = stdout only

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


@lru_cache
def get_settings() -> Settings:
    return Settings()
