from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class BindingOptions(BaseModel):
    """Per-binding options as declared by the bound object.

    `maxCollectionLength` keeps only the last N items of a collection
    snapshot; ``False``, ``0`` or None mean no limit.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    reload: bool = False
    max_collection_length: Optional[int] = Field(default=None, alias="maxCollectionLength", ge=1)

    @field_validator("max_collection_length", mode="before")
    @classmethod
    def _no_limit(cls, value: Any) -> Any:
        if value is True:
            raise ValueError("maxCollectionLength must be a positive integer or false")
        if value is None or value is False or value == 0:
            return None
        return value
