import logging
from datetime import datetime, timedelta

import mongomock

from fallback import CATEGORY_TREE
from seed import (
    ORPHAN_SORT_ORDER,
    cleanup_duplicate_subcategories,
    create_orphan_categories,
    ensure_categories,
    ensure_products,
    ensure_settings,
    seed_category_tree,
)


def test_seed_only_when_empty(db):
    assert ensure_products(db) is True
    assert ensure_products(db) is False
    assert db["product"].count_documents({}) == 6


def test_existing_data_is_not_seeded_over(db):
    db["category"].insert_one({"name": "Only", "slug": "only"})
    assert ensure_categories(db) is False
    assert db["category"].count_documents({}) == 1


def test_ensure_settings_is_idempotent(db):
    first = ensure_settings(db)
    second = ensure_settings(db)
    assert first["_id"] == second["_id"] == "site"
    assert db["settings"].count_documents({}) == 1


def test_seed_category_tree(db):
    result = seed_category_tree(db)
    expected_subs = sum(len(d["subcategories"]) for d in CATEGORY_TREE.values())
    assert result == {"created": len(CATEGORY_TREE), "updated": 0, "subcategories": expected_subs, "skipped": 0}

    skincare = db["category"].find_one({"name": "Skincare"})
    serum = db["category"].find_one({"name": "Serum"})
    assert serum["parentId"] == skincare["_id"]

    again = seed_category_tree(db)
    assert again == {"created": 0, "updated": 0, "subcategories": 0, "skipped": 0}


def test_seed_category_tree_fills_missing_details(db):
    db["category"].insert_one({"name": "Makeup", "slug": "makeup", "description": "", "parentId": None})
    result = seed_category_tree(db, {"Makeup": CATEGORY_TREE["Makeup"]})
    assert result["created"] == 0
    assert result["updated"] == 1
    assert db["category"].find_one({"name": "Makeup"})["image"] == CATEGORY_TREE["Makeup"]["image"]


def test_seed_creates_categories_for_product_names(db):
    db["product"].insert_many([
        {"name": "Gel Polish", "category": "Nail Art"},
        {"name": "Toner", "category": "Skincare"},
    ])
    result = seed_category_tree(db)
    assert result["created"] == len(CATEGORY_TREE) + 1

    nail_art = db["category"].find_one({"name": "Nail Art"})
    assert nail_art["slug"] == "nail-art"
    assert nail_art["sortOrder"] == ORPHAN_SORT_ORDER
    assert nail_art["parentId"] is None
    assert db["category"].count_documents({"name": "Skincare"}) == 1


def test_orphan_categories_are_created_once(db):
    db["product"].insert_one({"name": "Gel Polish", "category": "Nail Art"})
    assert create_orphan_categories(db) == 1
    assert create_orphan_categories(db) == 0


def test_subcategories_are_checked_per_parent(db, caplog):
    other = db["category"].insert_one({"name": "Gifts", "slug": "gifts", "parentId": None}).inserted_id
    db["category"].insert_one({"name": "Perfume", "slug": "perfume", "parentId": other})

    with caplog.at_level(logging.WARNING, logger="seed"):
        result = seed_category_tree(db, {"Fragrance": CATEGORY_TREE["Fragrance"]})

    assert result["skipped"] == 1
    assert result["subcategories"] == len(CATEGORY_TREE["Fragrance"]["subcategories"]) - 1
    assert "Skipped subcategory Perfume under Fragrance" in caplog.text
    fragrance = db["category"].find_one({"name": "Fragrance"})
    assert db["category"].find_one({"name": "Perfume"})["parentId"] == other
    assert db["category"].count_documents({"parentId": fragrance["_id"]}) == 3

    again = seed_category_tree(db, {"Fragrance": CATEGORY_TREE["Fragrance"]})
    assert again["subcategories"] == 0


def test_cleanup_duplicate_subcategories():
    # no unique indexes, as in a database filled before they existed
    db = mongomock.MongoClient()["kaaya_legacy"]
    parent = db["category"].insert_one({"name": "Skincare", "parentId": None}).inserted_id
    other = db["category"].insert_one({"name": "Haircare", "parentId": None}).inserted_id
    start = datetime(2024, 1, 1)
    ids = [
        db["category"].insert_one({"name": "Serum", "parentId": parent,
                                   "createdAt": start + timedelta(days=n)}).inserted_id
        for n in (2, 0, 1)
    ]
    db["category"].insert_one({"name": "Serum", "parentId": other, "createdAt": start})

    assert cleanup_duplicate_subcategories(db) == 2
    remaining = list(db["category"].find({"name": "Serum", "parentId": parent}))
    assert [d["_id"] for d in remaining] == [ids[1]]
    assert db["category"].count_documents({"name": "Serum", "parentId": other}) == 1
    assert cleanup_duplicate_subcategories(db) == 0
