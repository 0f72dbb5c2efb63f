"""
Get-or-seed helpers: populate empty collections from the fallback dataset so
a fresh deployment never serves an empty catalog.
"""

import logging
from typing import Any, Dict, List

from pymongo.database import Database
from pymongo.errors import BulkWriteError, DuplicateKeyError

from category_tree import slugify
from database import utcnow
from fallback import (
    CATEGORY_TREE,
    SETTINGS_ID,
    default_settings,
    fallback_categories,
    fallback_orders,
    fallback_products,
)

logger = logging.getLogger(__name__)

ORPHAN_SORT_ORDER = 999


def seed_collection(db: Database, collection_name: str, docs: List[Dict[str, Any]]) -> bool:
    """Insert `docs` when the collection is empty. Returns True if it seeded."""
    collection = db[collection_name]
    if collection.count_documents({}) > 0:
        return False
    try:
        collection.insert_many(docs, ordered=False)
    except BulkWriteError:
        # a concurrent request seeded the same fixed ids first
        logger.info("Collection %s already seeded by another request", collection_name)
        return False
    logger.info("Seeded %d documents into %s", len(docs), collection_name)
    return True


def ensure_products(db: Database) -> bool:
    return seed_collection(db, "product", fallback_products())


def ensure_categories(db: Database) -> bool:
    return seed_collection(db, "category", fallback_categories())


def ensure_orders(db: Database) -> bool:
    return seed_collection(db, "order", fallback_orders())


def ensure_settings(db: Database) -> Dict[str, Any]:
    doc = db["settings"].find_one({"_id": SETTINGS_ID})
    if doc:
        return doc
    doc = dict(default_settings(), _id=SETTINGS_ID, updatedAt=utcnow())
    try:
        db["settings"].insert_one(doc)
    except DuplicateKeyError:
        return db["settings"].find_one({"_id": SETTINGS_ID})
    return doc


def seed_category_tree(db: Database, tree: Dict[str, Dict[str, Any]] = CATEGORY_TREE) -> Dict[str, int]:
    """Create missing top-level categories and their subcategories.

    Existing categories are matched by name and only get a missing image or
    description filled in.
    """
    created = updated = subcategories = skipped = 0
    for position, (name, definition) in enumerate(tree.items(), start=1):
        parent = db["category"].find_one({"name": name, "parentId": None})
        if parent is None:
            now = utcnow()
            doc = {
                "name": name,
                "slug": slugify(name),
                "description": definition["description"],
                "image": definition.get("image"),
                "isActive": True,
                "sortOrder": position,
                "parentId": None,
                "createdAt": now,
                "updatedAt": now,
            }
            doc["_id"] = db["category"].insert_one(doc).inserted_id
            parent = doc
            created += 1
            logger.info("Created main category: %s", name)
        elif not parent.get("image") or not parent.get("description"):
            db["category"].update_one(
                {"_id": parent["_id"]},
                {"$set": {"description": definition["description"], "image": definition.get("image"),
                          "updatedAt": utcnow()}},
            )
            updated += 1
            logger.info("Updated main category: %s", name)

        existing = {d["name"] for d in db["category"].find({"parentId": parent["_id"]}, {"name": 1})}
        for sub_position, sub_name in enumerate(definition.get("subcategories", []), start=1):
            if sub_name in existing:
                continue
            other = db["category"].find_one({"name": sub_name})
            if other:
                # names are unique across the whole tree
                logger.warning("Skipped subcategory %s under %s: name already used by category %s",
                               sub_name, name, other["_id"])
                skipped += 1
                continue
            now = utcnow()
            db["category"].insert_one({
                "name": sub_name,
                "slug": slugify(sub_name),
                "description": f"{sub_name} products in {name}",
                "isActive": True,
                "sortOrder": sub_position,
                "parentId": parent["_id"],
                "createdAt": now,
                "updatedAt": now,
            })
            subcategories += 1
            logger.info("Created subcategory: %s under %s", sub_name, name)

    created += create_orphan_categories(db)
    return {"created": created, "updated": updated, "subcategories": subcategories, "skipped": skipped}


def create_orphan_categories(db: Database) -> int:
    """Create a top-level category for every product category name that has none."""
    created = 0
    for name in db["product"].distinct("category"):
        if not name or db["category"].find_one({"name": name}):
            continue
        now = utcnow()
        try:
            db["category"].insert_one({
                "name": name,
                "slug": slugify(name),
                "description": f"{name} products and accessories",
                "isActive": True,
                "sortOrder": ORPHAN_SORT_ORDER,
                "parentId": None,
                "createdAt": now,
                "updatedAt": now,
            })
        except DuplicateKeyError:
            logger.warning("Could not create category for products in %s: slug already taken", name)
            continue
        created += 1
        logger.info("Created category for existing products: %s", name)
    return created


def cleanup_duplicate_subcategories(db: Database) -> int:
    """Delete repeated subcategories sharing a name and parent, keeping the oldest."""
    duplicates = db["category"].aggregate([
        {"$match": {"parentId": {"$ne": None}}},
        {"$sort": {"createdAt": 1, "_id": 1}},
        {"$group": {
            "_id": {"name": "$name", "parentId": "$parentId"},
            "count": {"$sum": 1},
            "docs": {"$push": "$_id"},
        }},
        {"$match": {"count": {"$gt": 1}}},
    ])
    removed = 0
    for duplicate in duplicates:
        extra = duplicate["docs"][1:]
        db["category"].delete_many({"_id": {"$in": extra}})
        removed += len(extra)
        logger.info("Removed %d duplicate subcategories for: %s", len(extra), duplicate["_id"]["name"])
    return removed
