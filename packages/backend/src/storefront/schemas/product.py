"""Pydantic schemas for products.

Learn: Pydantic v2 models validate request/response data. Separate
"Create" schemas (input) from "Read" schemas (output) for clean APIs.
PUT is a full replace, so the update body is the same shape as create.
"""

from pydantic import BaseModel, Field


class ProductCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    price: float = Field(..., ge=0)
    description: str = ""
    categories: list[str] = Field(default_factory=list)


class ProductUpdate(ProductCreate):
    pass


class ProductRead(BaseModel):
    id: int
    name: str
    price: float
    description: str
    categories: list[str]

    model_config = {"from_attributes": True}


class MessageResponse(BaseModel):
    message: str
