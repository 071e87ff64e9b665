"""
Shared write-result schemas.

Field names on the wire follow the camelCase keys existing clients read
(``insertedId``, ``deletedCount``, ...).
"""

from pydantic import BaseModel, Field
from typing import Union


class InsertResult(BaseModel):
    """Result of a single insert."""
    acknowledged: bool = True
    inserted_id: int = Field(..., alias="insertedId")

    class Config:
        populate_by_name = True


class DeleteResult(BaseModel):
    """Result of a single delete."""
    acknowledged: bool = True
    deleted_count: int = Field(..., alias="deletedCount")

    class Config:
        populate_by_name = True


class UpsertResult(BaseModel):
    """Result of an insert that is skipped when the record already exists."""
    message: str
    inserted_id: Union[int, bool] = Field(..., alias="insertedId")

    class Config:
        populate_by_name = True
