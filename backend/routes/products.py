# backend/routes/products.py
import logging
from typing import Any, Dict, List, Optional, Tuple

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session, joinedload
from starlette.datastructures import UploadFile

from database import get_db
from models.category import Category
from models.product import Product, ProductType
from models.unit import Unit
from schemas.base import DetailResponse
from schemas.product import (
    ProductOut, ProductPayload, ProductPayloadError, parse_product_payload,
)
from utils.audit import write_log
from utils.errors import storage_errors
from utils.images import ImageCleanup, safe_unlink, save_upload
from utils.wholesale import WholesaleRulesError

router = APIRouter(tags=["Products"])
logger = logging.getLogger(__name__)

# Multipart field carrying the optional product image
IMAGE_FIELD = "image"


# ---- HELPERS ----
def _product_query(db: Session):
    return db.query(Product).options(joinedload(Product.category), joinedload(Product.unit))


def _client_ip(request: Request) -> Optional[str]:
    return request.client.host if request.client else None


def order_by_type(products: List[Product]) -> List[Product]:
    """Stable partition: final products first, then intermediate, then raw."""
    finals, intermediates, raws = [], [], []
    for p in products:
        if p.type == ProductType.FINAL:
            finals.append(p)
        elif p.type == ProductType.INTERMEDIATE:
            intermediates.append(p)
        else:
            raws.append(p)
    return finals + intermediates + raws


async def _read_payload(request: Request) -> Tuple[Dict[str, Any], Optional[UploadFile]]:
    """Split a JSON or multipart request into plain fields and the optional image."""
    content_type = request.headers.get("content-type", "")
    if content_type.startswith("application/json"):
        try:
            body = await request.json()
        except ValueError:
            raise HTTPException(status_code=400, detail="Invalid JSON body")
        if not isinstance(body, dict):
            raise HTTPException(status_code=400, detail="Request body must be a JSON object")
        return body, None

    form = await request.form()
    fields: Dict[str, Any] = {}
    image = None
    for key, value in form.multi_items():
        if isinstance(value, UploadFile):
            if key == IMAGE_FIELD and value.filename:
                image = value
            continue
        fields[key] = value
    return fields, image


def _parse_or_400(fields: Dict[str, Any]) -> ProductPayload:
    try:
        return parse_product_payload(fields)
    except (WholesaleRulesError, ProductPayloadError) as e:
        raise HTTPException(status_code=400, detail=str(e))


def _check_references(db: Session, payload: ProductPayload) -> None:
    fields = payload.model_fields_set
    if "unit_id" in fields:
        if payload.unit_id is None:
            raise HTTPException(status_code=400, detail="unitId is required")
        if not db.query(Unit.id).filter(Unit.id == payload.unit_id).first():
            raise HTTPException(status_code=400, detail="unitId must reference an existing unit")
    if "category_id" in fields and payload.category_id is not None:
        if not db.query(Category.id).filter(Category.id == payload.category_id).first():
            raise HTTPException(status_code=400, detail="categoryId must reference an existing category")


def _get_product_or_404(db: Session, product_id: int) -> Product:
    product = _product_query(db).filter(Product.id == product_id).first()
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return product


# =========================
# LIST
# =========================
@router.get("/products", response_model=List[ProductOut])
def list_products(db: Session = Depends(get_db)):
    with storage_errors(db, "Error fetching products"):
        products = _product_query(db).order_by(Product.id.asc()).all()
    return order_by_type(products)


# =========================
# SINGLE PRODUCT
# =========================
@router.get("/products/{product_id}", response_model=ProductOut)
def get_product(product_id: int, db: Session = Depends(get_db)):
    with storage_errors(db, "Error fetching product"):
        product = _product_query(db).filter(Product.id == product_id).first()
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return product


# =========================
# CREATE (multipart with optional "image" or JSON)
# =========================
@router.post("/products", response_model=ProductOut, status_code=201)
async def create_product(request: Request, db: Session = Depends(get_db)):
    fields, image = await _read_payload(request)
    payload = _parse_or_400(fields)

    if not payload.name:
        raise HTTPException(status_code=400, detail="name is required")
    if payload.unit_id is None:
        raise HTTPException(status_code=400, detail="unitId is required")
    _check_references(db, payload)

    values = payload.column_values()
    saved_filename = None
    try:
        if image is not None:
            saved_filename = save_upload(image)
            values["primary_image_url"] = saved_filename

        with storage_errors(db, "Error creating product"):
            product = Product(**values)
            db.add(product)
            db.commit()
            product_id = product.id
    except Exception:
        # Do not leave an orphaned upload behind
        if saved_filename:
            safe_unlink(saved_filename)
        raise

    write_log(
        db, action="PRODUCT_CREATE", resource="products", ip=_client_ip(request),
        meta={"id": product_id, "image": saved_filename},
    )
    return _get_product_or_404(db, product_id)


# =========================
# UPDATE (multipart with optional "image" / "clearImage", or JSON)
# =========================
@router.put("/products/{product_id}", response_model=ProductOut)
async def update_product(product_id: int, request: Request, db: Session = Depends(get_db)):
    product = db.query(Product).filter(Product.id == product_id).first()
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")

    fields, image = await _read_payload(request)
    payload = _parse_or_400(fields)
    if "name" in payload.model_fields_set and not payload.name:
        raise HTTPException(status_code=400, detail="name is required")
    _check_references(db, payload)

    values = payload.column_values()
    values.pop("primary_image_url", None)

    old_filename = product.primary_image_url
    cleanup = ImageCleanup(db, product.id)

    if payload.clear_image and old_filename:
        values["primary_image_url"] = None

    saved_filename = None
    try:
        if image is not None:
            saved_filename = save_upload(image)
            values["primary_image_url"] = saved_filename
        elif "primary_image_url" in payload.model_fields_set:
            # Explicit reference sent without a file is taken verbatim
            values["primary_image_url"] = payload.primary_image_url

        new_filename = values.get("primary_image_url", old_filename)
        if old_filename and new_filename != old_filename:
            cleanup.schedule(old_filename)

        with storage_errors(db, "Error updating product"):
            for key, value in values.items():
                setattr(product, key, value)
            db.commit()
    except Exception:
        if saved_filename:
            safe_unlink(saved_filename)
        raise

    deleted = cleanup.run()

    write_log(
        db, action="PRODUCT_UPDATE", resource="products", ip=_client_ip(request),
        meta={"id": product_id, "deleted_images": deleted},
    )
    return _get_product_or_404(db, product_id)


# =========================
# DELETE
# =========================
@router.delete("/products/{product_id}", response_model=DetailResponse)
def delete_product(product_id: int, request: Request, db: Session = Depends(get_db)):
    product = db.query(Product).filter(Product.id == product_id).first()
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")

    pname = product.name
    cleanup = ImageCleanup(db, product.id)
    cleanup.schedule(product.primary_image_url)

    with storage_errors(db, "Error deleting product"):
        db.delete(product)
        db.commit()

    deleted = cleanup.run()

    write_log(
        db, action="PRODUCT_DELETE", resource="products", ip=_client_ip(request),
        meta={"id": product_id, "deleted_images": deleted},
    )
    return {"detail": f"Product '{pname}' deleted"}
