import logging
import re
from typing import Any, Dict, List, Literal, Optional

from fastapi import APIRouter, Depends, Query
from pydantic import ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from pymongo import UpdateOne
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError, PyMongoError

from category_tree import (
    CATEGORY_SORT,
    annotate,
    check_parent,
    count_products,
    find_subcategories,
    is_top_level,
    resolve_parents,
    slugify,
    unique_by_name,
)
from database import get_db, id_filter, to_dict, utcnow
from errors import bad_request, envelope, not_found, require_db
from fallback import fallback_categories, fallback_products
from pagination import page_info, skip_for
from schemas import CamelModel
from seed import ensure_categories

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/categories", tags=["Categories"])

DUPLICATE_NAME = "Category with this name already exists"
DUPLICATE_KEY = "Category with this name or slug already exists"


def _check_image(v: Optional[str]) -> Optional[str]:
    if v and not re.match(r"^https?://[^\s/$.?#].[^\s]*$", v, re.IGNORECASE):
        raise ValueError("Image must be a valid URL")
    return v


class CategoryIn(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, str_strip_whitespace=True)

    name: str
    description: str
    slug: Optional[str] = None
    image: Optional[str] = None
    is_active: bool = True
    sort_order: int = 0
    parent_id: Optional[str] = None

    @field_validator("name")
    @classmethod
    def name_required(cls, v):
        if not v:
            raise ValueError("Category name is required")
        return v

    @field_validator("description")
    @classmethod
    def description_required(cls, v):
        if not v:
            raise ValueError("Category description is required")
        return v

    @field_validator("image")
    @classmethod
    def valid_image(cls, v):
        return _check_image(v)


class CategoryUpdate(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, str_strip_whitespace=True)

    name: Optional[str] = None
    description: Optional[str] = None
    slug: Optional[str] = None
    image: Optional[str] = None
    is_active: Optional[bool] = None
    sort_order: Optional[int] = None
    parent_id: Optional[str] = None

    @field_validator("name")
    @classmethod
    def name_not_empty(cls, v):
        if v is not None and not v:
            raise ValueError("Category name cannot be empty")
        return v

    @field_validator("description")
    @classmethod
    def description_not_empty(cls, v):
        if v is not None and not v:
            raise ValueError("Category description cannot be empty")
        return v

    @field_validator("image")
    @classmethod
    def valid_image(cls, v):
        return _check_image(v)


class BulkStatusRequest(CamelModel):
    category_ids: List[str] = Field(..., min_length=1)
    is_active: bool


class CategoryOrder(CamelModel):
    id: str = Field(..., min_length=1)
    sort_order: int
    # present (even as null) only for cross-parent moves
    parent_id: Optional[str] = None


class BulkOrderRequest(CamelModel):
    categories: List[CategoryOrder] = Field(..., min_length=1)


class BulkDeleteRequest(CamelModel):
    category_ids: List[str] = Field(..., min_length=1)


class MoveRequest(CamelModel):
    parent_id: Optional[str] = None


# Helpers

def _search_filter(search: Optional[str]) -> Dict[str, Any]:
    if not search:
        return {}
    pattern = {"$regex": re.escape(search), "$options": "i"}
    return {"$or": [{"name": pattern}, {"description": pattern}]}


def _name_taken(db: Database, name: str, exclude_id: Any = None) -> bool:
    query: Dict[str, Any] = {"name": {"$regex": f"^{re.escape(name)}$", "$options": "i"}}
    if exclude_id is not None:
        query["_id"] = {"$ne": exclude_id}
    return db["category"].find_one(query) is not None


def _get_or_404(db: Database, category_id: str) -> Dict[str, Any]:
    category = db["category"].find_one({"_id": id_filter(category_id)})
    if not category:
        raise not_found("Category")
    return category


def _with_count(db: Database, category: Dict[str, Any]) -> Dict[str, Any]:
    item = to_dict(category)
    item["productCount"] = count_products(db, category["name"])
    return item


def _fallback_listing(active: Optional[bool], search: Optional[str]) -> List[Dict[str, Any]]:
    """Filter the static categories the way the store query would."""
    products = fallback_products()
    needle = (search or "").lower()
    items = []
    for category in sorted(fallback_categories(), key=lambda c: c.get("sortOrder", 0)):
        if active is not None and category["isActive"] != active:
            continue
        if needle and needle not in category["name"].lower() and needle not in category["description"].lower():
            continue
        item = to_dict(category)
        item["productCount"] = sum(1 for p in products if p["category"] == category["name"])
        item["subcategories"] = []
        items.append(item)
    return items


def _paged_fallback(active, search, page, limit) -> Dict[str, Any]:
    items = _fallback_listing(active, search)
    return envelope(items[skip_for(page, limit):skip_for(page, limit) + limit],
                    pagination=page_info(len(items), page, limit))


# Collection routes. Fixed paths are declared before /{category_id}.

@router.get("")
def list_categories(
    active: Optional[bool] = Query(None),
    search: Optional[str] = Query(None),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    db: Optional[Database] = Depends(get_db),
):
    if db is None:
        return _paged_fallback(active, search, page, limit)
    try:
        ensure_categories(db)
        filt = _search_filter(search)
        if active is not None:
            filt["isActive"] = active
        total = db["category"].count_documents(filt)
        docs = db["category"].find(filt).sort(CATEGORY_SORT).skip(skip_for(page, limit)).limit(limit)
        data = annotate(db, list(docs))
    except PyMongoError:
        logger.exception("Category listing failed, serving fallback categories")
        return _paged_fallback(active, search, page, limit)
    return envelope(data, pagination=page_info(total, page, limit))


@router.get("/public")
def list_public_categories(
    search: Optional[str] = Query(None),
    limit: int = Query(20, ge=1, le=100),
    db: Optional[Database] = Depends(get_db),
):
    """Active categories for the storefront menu."""
    if db is None:
        return envelope(_fallback_listing(True, search)[:limit])
    try:
        ensure_categories(db)
        filt = _search_filter(search)
        filt["isActive"] = True
        docs = db["category"].find(filt).sort(CATEGORY_SORT).limit(limit)
        data = annotate(db, list(docs), active_subcategories=True)
    except PyMongoError:
        logger.exception("Public category listing failed, serving fallback categories")
        return envelope(_fallback_listing(True, search)[:limit])
    return envelope(data)


@router.get("/admin/all")
def list_admin_categories(
    status: Optional[Literal["active", "inactive"]] = Query(None),
    search: Optional[str] = Query(None),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    db: Optional[Database] = Depends(get_db),
):
    """All categories including inactive ones, with total and active product counts."""
    active = None if status is None else status == "active"
    if db is None:
        return _paged_fallback(active, search, page, limit)
    filt = _search_filter(search)
    if active is not None:
        filt["isActive"] = active
    total = db["category"].count_documents(filt)
    docs = db["category"].find(filt).sort(CATEGORY_SORT).skip(skip_for(page, limit)).limit(limit)
    data = annotate(db, list(docs), include_totals=True)
    return envelope(data, pagination=page_info(total, page, limit))


@router.get("/meta/stats")
def category_stats(db: Optional[Database] = Depends(get_db)):
    if db is None:
        categories, products = fallback_categories(), fallback_products()
        names = {c["name"] for c in categories}
        total = len(categories)
        active = sum(1 for c in categories if c["isActive"])
        in_categories = [p for p in products if p["category"] in names]
        total_products = len(in_categories)
        total_active_products = sum(1 for p in in_categories if p.get("isActive", True))
    else:
        total = db["category"].count_documents({})
        active = db["category"].count_documents({"isActive": True})
        names = db["category"].distinct("name")
        total_products = db["product"].count_documents({"category": {"$in": names}})
        total_active_products = db["product"].count_documents(
            {"category": {"$in": names}, "isActive": {"$ne": False}})
    return envelope({
        "totalCategories": total,
        "activeCategories": active,
        "inactiveCategories": total - active,
        "totalProducts": total_products,
        "totalActiveProducts": total_active_products,
    })


@router.patch("/bulk/status")
def bulk_update_status(payload: BulkStatusRequest, db: Optional[Database] = Depends(get_db)):
    db = require_db(db)
    ids = [id_filter(i) for i in payload.category_ids]
    result = db["category"].update_many(
        {"_id": {"$in": ids}},
        {"$set": {"isActive": payload.is_active, "updatedAt": utcnow()}},
    )
    state = "activated" if payload.is_active else "deactivated"
    return envelope(
        {"matchedCount": result.matched_count, "modifiedCount": result.modified_count},
        message=f"{result.modified_count} categories {state} successfully",
    )


@router.patch("/bulk/order")
def bulk_update_order(payload: BulkOrderRequest, db: Optional[Database] = Depends(get_db)):
    """Persist sortOrder (and parentId for cross-parent moves) from a drag-and-drop."""
    db = require_db(db)
    parents = resolve_parents(db, {
        id_filter(item.id): item.parent_id
        for item in payload.categories if "parent_id" in item.model_fields_set
    })
    now = utcnow()
    operations = []
    for item in payload.categories:
        key = id_filter(item.id)
        changes: Dict[str, Any] = {"sortOrder": item.sort_order, "updatedAt": now}
        if key in parents:
            changes["parentId"] = parents[key]
        operations.append(UpdateOne({"_id": key}, {"$set": changes}))

    result = db["category"].bulk_write(operations)
    logger.info("Updated categories order: %d", result.modified_count)
    return envelope(
        {"matchedCount": result.matched_count, "modifiedCount": result.modified_count},
        message="Category order updated successfully",
    )


@router.delete("/bulk")
def bulk_delete(payload: BulkDeleteRequest, db: Optional[Database] = Depends(get_db)):
    db = require_db(db)
    ids = [id_filter(i) for i in payload.category_ids]
    targets = list(db["category"].find({"_id": {"$in": ids}}, {"name": 1}))

    blocked = []
    for category in targets:
        product_count = count_products(db, category["name"], active_only=False)
        if product_count:
            blocked.append({"_id": str(category["_id"]), "name": category["name"], "productCount": product_count})
    if blocked:
        raise bad_request(
            f"Cannot delete categories that contain products. Found {len(blocked)} categories with products.",
            data=blocked,
        )

    result = db["category"].delete_many({"_id": {"$in": ids}})
    return envelope({"deletedCount": result.deleted_count},
                    message=f"{result.deleted_count} categories deleted successfully")


@router.post("", status_code=201)
def create_category(payload: CategoryIn, db: Optional[Database] = Depends(get_db)):
    db = require_db(db)
    if _name_taken(db, payload.name):
        raise bad_request(DUPLICATE_NAME)

    doc = payload.model_dump(by_alias=True)
    doc["slug"] = payload.slug or slugify(payload.name)
    doc["parentId"] = check_parent(db, None, payload.parent_id)
    now = utcnow()
    doc["createdAt"] = now
    doc["updatedAt"] = now
    try:
        doc["_id"] = db["category"].insert_one(doc).inserted_id
    except DuplicateKeyError:
        raise bad_request(DUPLICATE_KEY)
    return envelope(to_dict(doc), message="Category created successfully")


# Single-category routes

@router.get("/{category_id}")
def get_category(category_id: str, db: Optional[Database] = Depends(get_db)):
    if db is None:
        for item in _fallback_listing(None, None):
            if item["id"] == category_id:
                return envelope(item)
        raise not_found("Category")
    category = _get_or_404(db, category_id)
    item = _with_count(db, category)
    if is_top_level(category):
        item["subcategories"] = find_subcategories(db, category["_id"])
    return envelope(item)


@router.get("/{category_id}/subcategories")
def get_subcategories(category_id: str, db: Optional[Database] = Depends(get_db)):
    if db is None:
        return envelope([])
    docs = db["category"].find({"parentId": id_filter(category_id), "isActive": True}).sort(
        [("sortOrder", 1), ("name", 1)])
    return envelope([to_dict(d) for d in unique_by_name(docs)])


@router.put("/{category_id}")
def update_category(category_id: str, payload: CategoryUpdate, db: Optional[Database] = Depends(get_db)):
    db = require_db(db)
    category = _get_or_404(db, category_id)

    updates = payload.model_dump(by_alias=True, exclude_unset=True)
    # only image and parentId may be cleared with null
    updates = {k: v for k, v in updates.items() if v is not None or k in ("image", "parentId")}
    if "name" in updates and _name_taken(db, updates["name"], exclude_id=category["_id"]):
        raise bad_request(DUPLICATE_NAME)
    if "parentId" in updates:
        updates["parentId"] = check_parent(db, category["_id"], updates["parentId"])
    updates["updatedAt"] = utcnow()

    try:
        db["category"].update_one({"_id": category["_id"]}, {"$set": updates})
    except DuplicateKeyError:
        raise bad_request(DUPLICATE_KEY)
    category.update(updates)
    return envelope(_with_count(db, category), message="Category updated successfully")


@router.patch("/{category_id}/toggle-status")
def toggle_status(category_id: str, db: Optional[Database] = Depends(get_db)):
    db = require_db(db)
    category = _get_or_404(db, category_id)
    category["isActive"] = not category.get("isActive", True)
    category["updatedAt"] = utcnow()
    db["category"].update_one(
        {"_id": category["_id"]},
        {"$set": {"isActive": category["isActive"], "updatedAt": category["updatedAt"]}},
    )
    state = "activated" if category["isActive"] else "deactivated"
    return envelope(_with_count(db, category), message=f"Category {state} successfully")


@router.patch("/{category_id}/move")
def move_category(category_id: str, payload: MoveRequest, db: Optional[Database] = Depends(get_db)):
    """Reassign a subcategory to another parent, appending it to the new siblings."""
    db = require_db(db)
    category = _get_or_404(db, category_id)
    parent_id = check_parent(db, category["_id"], payload.parent_id)

    last = list(db["category"].find({"parentId": parent_id, "_id": {"$ne": category["_id"]}})
                .sort("sortOrder", -1).limit(1))
    changes = {
        "parentId": parent_id,
        "sortOrder": (last[0].get("sortOrder", 0) + 1) if last else 1,
        "updatedAt": utcnow(),
    }
    db["category"].update_one({"_id": category["_id"]}, {"$set": changes})
    category.update(changes)
    return envelope(_with_count(db, category), message="Category moved successfully")


@router.delete("/{category_id}")
def delete_category(category_id: str, db: Optional[Database] = Depends(get_db)):
    db = require_db(db)
    category = _get_or_404(db, category_id)

    product_count = count_products(db, category["name"], active_only=False)
    if product_count > 0:
        raise bad_request(
            f"Cannot delete category. It contains {product_count} products. "
            "Please move or delete the products first."
        )

    db["category"].delete_one({"_id": category["_id"]})
    return envelope(message="Category deleted successfully")
