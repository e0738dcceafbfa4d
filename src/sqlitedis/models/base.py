"""Base models for sqlitedis."""

from pydantic import BaseModel, ConfigDict


class SqlitedisBaseModel(BaseModel):
    """Base model for value objects returned by the store."""

    model_config = ConfigDict(
        populate_by_name=True,
        frozen=True,
        extra="forbid",
    )
