"""Request payload schemas for the collections and prompts API."""
import json
from typing import List, Optional

from pydantic import BaseModel, Field, StrictInt, ValidationError, field_validator


# ================= Collection Schemas =================

class CollectionCreate(BaseModel):
    """Schema for creating a collection"""
    title: str = Field(min_length=1)
    description: Optional[str] = None


class CollectionUpdate(BaseModel):
    """Partial update of a collection, only the fields sent are applied"""
    title: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None

    @field_validator("title")
    @classmethod
    def title_not_null(cls, value):
        # may be omitted on PATCH but never cleared
        if value is None:
            raise ValueError("title may not be null")
        return value


# ================= Prompt Schemas =================

class PromptCreate(BaseModel):
    """Schema for creating a prompt

    `order` left out (or null) appends the prompt to the collection.
    """
    content: str = Field(min_length=1)
    order: Optional[int] = Field(default=None, ge=0)


class PromptUpdate(BaseModel):
    """Partial update of a prompt's content and/or position"""
    content: Optional[str] = Field(default=None, min_length=1)
    order: Optional[int] = Field(default=None, ge=0)

    @field_validator("content", "order")
    @classmethod
    def not_null(cls, value, info):
        if value is None:
            raise ValueError(f"{info.field_name} may not be null")
        return value


class ReorderRequest(BaseModel):
    """New order of a collection, first id gets order 0"""
    promptIds: List[StrictInt]


def parse_payload(schema, payload):
    """Validate `payload` against `schema`. Non-object bodies fail like an empty object."""
    if not isinstance(payload, dict):
        payload = {}
    return schema.model_validate(payload)


def validation_errors(exc: ValidationError) -> list:
    """Machine-readable error list that is always JSON serializable."""
    return json.loads(exc.json(include_url=False))
