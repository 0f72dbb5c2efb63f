import logging
import re
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Query
from pydantic import Field, model_validator
from pymongo import ReturnDocument
from pymongo.database import Database
from pymongo.errors import PyMongoError

from database import get_db, id_filter, to_dict, utcnow
from errors import bad_request, envelope, not_found, require_db
from fallback import fallback_products
from product_import import generate_products
from schemas import CamelModel, Product, reconcile_stock
from seed import ensure_products

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/products", tags=["Products"])


class ProductUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    price: Optional[float] = Field(None, ge=0)
    original_price: Optional[float] = Field(None, ge=0)
    discount: Optional[float] = Field(None, ge=0, le=100)
    category: Optional[str] = Field(None, min_length=1)
    subcategory: Optional[str] = None
    brand: Optional[str] = None
    image: Optional[str] = None
    images: Optional[List[str]] = None
    in_stock: Optional[bool] = None
    stock_count: Optional[int] = Field(None, ge=0)
    rating: Optional[float] = Field(None, ge=0, le=5)
    review_count: Optional[int] = Field(None, ge=0)
    tags: Optional[List[str]] = None
    is_active: Optional[bool] = None
    ingredients: Optional[List[str]] = None
    benefits: Optional[List[str]] = None
    how_to_use: Optional[str] = None
    skin_type: Optional[List[str]] = None
    size: Optional[str] = None
    shade: Optional[str] = None

    @model_validator(mode="after")
    def stock_consistent(self):
        return reconcile_stock(self)


class ImportRequest(CamelModel):
    source: str = "generator"
    count: int = Field(50, ge=1, le=500)
    categories: Optional[List[str]] = None


def serialize(doc: Dict[str, Any]) -> Dict[str, Any]:
    item = to_dict(doc)
    # null when stock is not tracked; inStock is then authoritative
    item.setdefault("stockCount", None)
    item["reviewCount"] = item.get("reviewCount") or item.get("reviews") or 0
    return item


def _filter(category: Optional[str], subcategory: Optional[str], search: Optional[str]) -> Dict[str, Any]:
    filt: Dict[str, Any] = {}
    if category:
        filt["category"] = category
    if subcategory:
        filt["subcategory"] = subcategory
    if search:
        pattern = {"$regex": re.escape(search), "$options": "i"}
        filt["$or"] = [{"name": pattern}, {"brand": pattern}, {"description": pattern}]
    return filt


def _fallback(category, subcategory, search) -> List[Dict[str, Any]]:
    needle = (search or "").lower()
    out = []
    for p in fallback_products():
        if category and p["category"] != category:
            continue
        if subcategory and p.get("subcategory") != subcategory:
            continue
        if needle and not any(needle in (p.get(k) or "").lower() for k in ("name", "brand", "description")):
            continue
        out.append(serialize(p))
    return out


@router.get("")
def list_products(
    category: Optional[str] = Query(None),
    subcategory: Optional[str] = Query(None),
    search: Optional[str] = Query(None),
    db: Optional[Database] = Depends(get_db),
):
    """Every product, inactive and out-of-stock ones included."""
    if db is None:
        return envelope(_fallback(category, subcategory, search))
    try:
        ensure_products(db)
        docs = db["product"].find(_filter(category, subcategory, search)).sort("createdAt", -1)
        return envelope([serialize(d) for d in docs])
    except PyMongoError:
        logger.exception("Database error, falling back to static products")
        return envelope(_fallback(category, subcategory, search))


@router.post("/import", status_code=201)
def import_products(payload: ImportRequest, db: Optional[Database] = Depends(get_db)):
    db = require_db(db)
    logger.info("Importing %d products from %s", payload.count, payload.source)
    try:
        products = generate_products(payload.count, categories=payload.categories)
    except ValueError as e:
        raise bad_request(str(e))
    if products:
        db["product"].insert_many(products)
    total = db["product"].count_documents({})
    return envelope(
        {
            "imported": len(products),
            "total": total,
            "source": payload.source,
            "products": [serialize(p) for p in products[:5]],
        },
        message=f"Successfully imported {len(products)} products",
    )


@router.post("", status_code=201)
def create_product(payload: Product, db: Optional[Database] = Depends(get_db)):
    db = require_db(db)
    doc = payload.model_dump(by_alias=True, exclude_none=True)
    now = utcnow()
    doc["createdAt"] = now
    doc["updatedAt"] = now
    doc["_id"] = db["product"].insert_one(doc).inserted_id
    return envelope(serialize(doc), message="Product created successfully")


@router.get("/{product_id}")
def get_product(product_id: str, db: Optional[Database] = Depends(get_db)):
    if db is None:
        for p in fallback_products():
            if p["_id"] == product_id:
                return envelope(serialize(p))
        raise not_found("Product")
    doc = db["product"].find_one({"_id": id_filter(product_id)})
    if not doc:
        raise not_found("Product")
    return envelope(serialize(doc))


@router.put("/{product_id}")
def update_product(product_id: str, payload: ProductUpdate, db: Optional[Database] = Depends(get_db)):
    db = require_db(db)
    current = db["product"].find_one({"_id": id_filter(product_id)})
    if not current:
        raise not_found("Product")
    updates = payload.model_dump(by_alias=True, exclude_unset=True)
    updates = {k: v for k, v in updates.items() if v is not None}
    stored_count = current.get("stockCount")
    if "inStock" in updates and "stockCount" not in updates and stored_count is not None:
        # the stored count still decides availability
        if updates["inStock"] != (stored_count > 0):
            raise bad_request("inStock must match stockCount")
    updates["updatedAt"] = utcnow()
    doc = db["product"].find_one_and_update(
        {"_id": current["_id"]},
        {"$set": updates},
        return_document=ReturnDocument.AFTER,
    )
    if not doc:
        raise not_found("Product")
    return envelope(serialize(doc), message="Product updated successfully")


@router.delete("/{product_id}")
def delete_product(product_id: str, db: Optional[Database] = Depends(get_db)):
    db = require_db(db)
    doc = db["product"].find_one_and_delete({"_id": id_filter(product_id)})
    if not doc:
        raise not_found("Product")
    return envelope(serialize(doc), message="Product deleted successfully")
