from datetime import date, datetime
from decimal import Decimal
from typing import Any, List, Optional

from pydantic import BaseModel, Field, model_validator

from src.platform.types import UtilsUUID7
from src.service.marketplace.domain.entity.product_entity import (
    Product,
    ProductCategory,
    ProductUnit,
)


class ProductCreateRequest(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    description: str = Field(min_length=1)
    category: ProductCategory
    unit: ProductUnit
    price: Decimal = Field(ge=0, max_digits=12, decimal_places=2)
    available_quantity: int = Field(ge=0)
    is_organic: bool = False
    harvest_date: Optional[date] = None

    model_config = {
        'json_schema_extra': {
            'example': {
                'name': 'Basmati Rice',
                'description': 'Aged long grain rice, this season harvest',
                'category': 'Grains',
                'unit': 'kg',
                'price': '85.00',
                'available_quantity': 500,
                'is_organic': True,
                'harvest_date': '2025-01-05',
            }
        }
    }


# May be omitted from a PATCH but never set to null
NON_NULLABLE_FIELDS = frozenset(
    {
        'name',
        'description',
        'category',
        'unit',
        'price',
        'is_organic',
        'is_active',
        'available_quantity',
    }
)


class ProductUpdateRequest(BaseModel):
    """
    Partial update; omitted fields are left unchanged.

    Only harvest_date may be cleared with an explicit null.
    """

    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = Field(default=None, min_length=1)
    category: Optional[ProductCategory] = None
    unit: Optional[ProductUnit] = None
    price: Optional[Decimal] = Field(default=None, ge=0, max_digits=12, decimal_places=2)
    is_organic: Optional[bool] = None
    harvest_date: Optional[date] = None
    is_active: Optional[bool] = None
    available_quantity: Optional[int] = Field(default=None, ge=0)

    model_config = {'json_schema_extra': {'example': {'price': '90.00', 'available_quantity': 450}}}

    @model_validator(mode='before')
    @classmethod
    def reject_explicit_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            if nulls := sorted(
                field
                for field, value in data.items()
                if value is None and field in NON_NULLABLE_FIELDS
            ):
                raise ValueError(f'Fields cannot be null: {", ".join(nulls)}')
        return data


class ProductResponse(BaseModel):
    model_config = {
        'json_schema_extra': {
            'example': {
                'id': '01936d8f-5e73-7c4e-a9c5-123456789abc',  # UUID7
                'owner_id': 1,
                'name': 'Basmati Rice',
                'description': 'Aged long grain rice, this season harvest',
                'category': 'Grains',
                'unit': 'kg',
                'price': '85.00',
                'available_quantity': 500,
                'is_organic': True,
                'harvest_date': '2025-01-05',
                'is_active': True,
                'status': 'active',
                'views': 0,
                'created_at': '2025-01-10T10:30:00',
                'updated_at': '2025-01-10T10:30:00',
            }
        },
    }

    id: UtilsUUID7  # UUID7
    owner_id: int
    name: str
    description: str
    category: str
    unit: str
    price: Decimal
    available_quantity: int
    is_organic: bool
    harvest_date: Optional[date] = None
    is_active: bool
    status: str
    views: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, product: Product) -> 'ProductResponse':
        return cls(
            id=product.id,
            owner_id=product.owner_id,
            name=product.name,
            description=product.description,
            category=product.category.value,
            unit=product.unit.value,
            price=product.price,
            available_quantity=product.available_quantity,
            is_organic=product.is_organic,
            harvest_date=product.harvest_date,
            is_active=product.is_active,
            status=product.status.value,
            views=product.views,
            created_at=product.created_at,
            updated_at=product.updated_at,
        )


class ProductListResponse(BaseModel):
    products: List[ProductResponse]
    total: int
