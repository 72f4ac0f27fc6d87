# backend/schemas/product.py
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional, Union

from pydantic import Field, ValidationError
from pydantic.alias_generators import to_camel

from models.product import ProductType
from schemas.base import ORMBase
from utils.wholesale import normalize_wholesale_rules

WholesaleTier = Dict[str, Union[int, float]]

# Fields that arrive as text in multipart requests and are coerced to numbers
NUMERIC_FIELDS = (
    "unitId", "categoryId",
    "standardWeightGrams", "netWeight",
    "stock", "minStock",
    "price", "distributorPrice", "taxRate",
)
BOOLEAN_FIELDS = ("isActive", "clearImage")
# Empty strings on these fields mean "no value"
NULLABLE_TEXT_FIELDS = ("sku", "barcode", "primaryImageUrl")
# NOT NULL columns: a blank or null value means "not sent"
REQUIRED_NUMERIC_FIELDS = ("stock",)


class ProductPayloadError(ValueError):
    """Product fields that could not be converted to their declared types."""


class CategoryRef(ORMBase):
    id: int
    name: str


class UnitRef(ORMBase):
    id: int
    name: str
    abbreviation: str


# Typed command built from a create/update request before any business logic runs.
# Only the fields present in the request are "set" (see model_fields_set).
class ProductPayload(ORMBase):
    name: Optional[str] = None
    description: Optional[str] = None
    type: Optional[ProductType] = None
    unit_id: Optional[int] = None
    category_id: Optional[int] = None
    standard_weight_grams: Optional[float] = None
    net_weight: Optional[float] = None
    stock: Optional[float] = None
    min_stock: Optional[float] = None
    price: Optional[float] = Field(default=None, ge=0)
    distributor_price: Optional[float] = Field(default=None, ge=0)
    tax_rate: Optional[float] = Field(default=None, ge=0, le=100)
    wholesale_rules: Optional[List[WholesaleTier]] = None
    sku: Optional[str] = None
    barcode: Optional[str] = None
    is_active: Optional[bool] = None
    primary_image_url: Optional[str] = None
    clear_image: bool = False

    def column_values(self) -> Dict[str, Any]:
        """Values to assign on the Product row, limited to the fields sent."""
        return self.model_dump(exclude_unset=True, exclude={"clear_image"})


class ProductOut(ORMBase):
    id: int
    name: str
    description: Optional[str] = None
    type: ProductType
    unit_id: int
    category_id: Optional[int] = None
    standard_weight_grams: Optional[float] = None
    net_weight: Optional[float] = None
    stock: float
    min_stock: Optional[float] = None
    price: Optional[float] = None
    distributor_price: Optional[float] = None
    tax_rate: Optional[float] = None
    wholesale_rules: Optional[List[WholesaleTier]] = None
    sku: Optional[str] = None
    barcode: Optional[str] = None
    is_active: bool
    primary_image_url: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    category: Optional[CategoryRef] = None
    unit: Optional[UnitRef] = None


def _as_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() == "true"


def _wire_name(key: str) -> str:
    if key == "desc":
        return "description"
    return to_camel(key) if "_" in key else key


def _format_errors(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors():
        field = ".".join(str(x) for x in error["loc"])
        parts.append(f"{field}: {error['msg']}")
    return "; ".join(parts)


def parse_product_payload(raw: Mapping[str, Any]) -> ProductPayload:
    """
    Convert a raw request body (multipart form or JSON) into a ProductPayload.

    Raises WholesaleRulesError for malformed wholesale rules and
    ProductPayloadError for any other field that fails conversion.
    """
    data = {_wire_name(k): v for k, v in raw.items()}

    for key in NUMERIC_FIELDS:
        if key in data and data[key] == "":
            data[key] = None

    for key in REQUIRED_NUMERIC_FIELDS:
        if key in data and data[key] is None:
            del data[key]

    for key in BOOLEAN_FIELDS:
        if key in data:
            data[key] = _as_bool(data[key])

    for key in NULLABLE_TEXT_FIELDS:
        if key in data and not data[key]:
            data[key] = None

    if data.get("type") in ("", None):
        data.pop("type", None)

    # Structured rules take precedence over the free-text form field
    text_rules = data.pop("wholesaleRulesText", None)
    if "wholesaleRules" in data:
        data["wholesaleRules"] = normalize_wholesale_rules(data["wholesaleRules"])
    elif text_rules is not None:
        data["wholesaleRules"] = normalize_wholesale_rules(text_rules, field="wholesaleRulesText")

    try:
        return ProductPayload.model_validate(data)
    except ValidationError as e:
        raise ProductPayloadError(_format_errors(e))
