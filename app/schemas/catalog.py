from datetime import datetime
from decimal import Decimal
from app.schemas.common import CamelModel

class CategoryIn(CamelModel):
    name: str | None = None
    parent_id: str | None = None
    sort_order: int | None = None
    is_active: bool | None = None

class CategoryOut(CamelModel):
    id: str
    name: str
    slug: str
    parent_id: str | None = None
    sort_order: int
    is_active: bool
    created_at: datetime
    updated_at: datetime

class MaterialIn(CamelModel):
    name: str | None = None
    category_id: str | None = None
    unit: str | None = None
    unit_cost: Decimal | None = None
    texture_url: str | None = None
    model_url: str | None = None
    description: str | None = None
    is_active: bool | None = None

class MaterialOut(CamelModel):
    id: str
    name: str
    category_id: str
    unit: str
    unit_cost: float
    texture_url: str | None = None
    model_url: str | None = None
    description: str | None = None
    is_active: bool
    created_at: datetime
    updated_at: datetime
