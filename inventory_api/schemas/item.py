"""Item request/response schemas - REST API contract."""

from datetime import datetime

from pydantic import BaseModel, Field

from inventory_api.domain.models import Item


class ItemWrite(BaseModel):
    """Body for create and full-replace update. Any `status` sent by clients is ignored."""

    code: str
    title: str
    description: str
    price: int
    stock: int = 0

    def to_entity(self) -> Item:
        return Item(
            code=self.code,
            title=self.title,
            description=self.description,
            price=self.price,
            stock=self.stock,
        )


class ItemResponse(BaseModel):
    id: int
    code: str
    title: str
    description: str
    price: int
    stock: int
    status: str
    # Omitted from the payload when unset (routes use response_model_exclude_none)
    created_at: datetime | None = None
    updated_at: datetime | None = None
    created_by: int
    updated_by: int

    model_config = {"from_attributes": True}


class ItemListResponse(BaseModel):
    total_pages: int = Field(serialization_alias="totalPages")
    data: list[ItemResponse]
