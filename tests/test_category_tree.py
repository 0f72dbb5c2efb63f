import pytest

from category_tree import (
    build_tree,
    check_parent,
    move_subcategory,
    order_updates,
    reorder_categories,
    reorder_subcategories,
    resolve_parents,
    slugify,
    unique_by_name,
)
from errors import ApiError

FLAT = [
    {"_id": "1", "name": "Skincare", "sortOrder": 1, "parentId": None},
    {"_id": "2", "name": "Makeup", "sortOrder": 2, "parentId": None},
    {"_id": "3", "name": "Hair Care", "sortOrder": 3, "parentId": None},
    {"_id": "11", "name": "Serum", "sortOrder": 2, "parentId": "1"},
    {"_id": "12", "name": "Toner", "sortOrder": 1, "parentId": "1"},
    {"_id": "21", "name": "Lipstick", "sortOrder": 1, "parentId": "2"},
]


def ids(items):
    return [i["_id"] for i in items]


def test_slugify():
    assert slugify("Hair Care & Oils") == "hair-care-oils"
    assert slugify("  Face--Wash ") == "face-wash"


def test_unique_by_name():
    docs = [{"name": "Serum", "_id": "a"}, {"name": "Serum", "_id": "b"}, {"name": "Toner", "_id": "c"}]
    assert ids(unique_by_name(docs)) == ["a", "c"]


def test_build_tree():
    tree = build_tree(FLAT)
    assert ids(tree) == ["1", "2", "3"]
    assert ids(tree[0]["subcategories"]) == ["12", "11"]
    assert tree[2]["subcategories"] == []


def test_orphans_are_promoted():
    tree = build_tree([{"_id": "9", "name": "Lost", "parentId": "missing"}])
    assert ids(tree) == ["9"]


def test_reorder_categories():
    tree = reorder_categories(build_tree(FLAT), "3", "1")
    assert ids(tree) == ["3", "1", "2"]
    # unknown ids leave the tree alone
    assert ids(reorder_categories(tree, "3", "404")) == ["3", "1", "2"]


def test_reorder_subcategories():
    tree = reorder_subcategories(build_tree(FLAT), "1", "12", "11")
    assert ids(tree[0]["subcategories"]) == ["11", "12"]


def test_move_subcategory():
    tree = move_subcategory(build_tree(FLAT), "11", "3")
    assert ids(tree[0]["subcategories"]) == ["12"]
    assert ids(tree[2]["subcategories"]) == ["11"]
    assert tree[2]["subcategories"][0]["parentId"] == "3"


def test_move_to_same_parent_is_noop():
    tree = build_tree(FLAT)
    assert move_subcategory(tree, "11", "1") is tree


def test_order_updates():
    updates = order_updates(reorder_categories(build_tree(FLAT), "2", "1"))
    assert updates[:3] == [
        {"id": "2", "sortOrder": 1, "parentId": None},
        {"id": "21", "sortOrder": 1, "parentId": "2"},
        {"id": "1", "sortOrder": 2, "parentId": None},
    ]
    assert len(updates) == len(FLAT)


def test_check_parent(db):
    db["category"].insert_many([dict(c) for c in FLAT])
    assert check_parent(db, "3", None) is None
    assert check_parent(db, "3", "1") == "1"
    with pytest.raises(ApiError) as err:
        check_parent(db, "3", "11")
    assert err.value.message == "Subcategories cannot have subcategories"
    with pytest.raises(ApiError) as err:
        check_parent(db, "1", "2")
    assert err.value.message == "A category with subcategories cannot become a subcategory"
    with pytest.raises(ApiError) as err:
        check_parent(db, "2", "2")
    assert err.value.status_code == 400
    with pytest.raises(ApiError) as err:
        check_parent(db, "3", "404")
    assert err.value.status_code == 404


def test_resolve_parents_overlays_batch(db):
    db["category"].insert_many([dict(c) for c in FLAT])
    assert resolve_parents(db, {"3": "2", "21": None}) == {"3": "2", "21": None}
    with pytest.raises(ApiError):
        resolve_parents(db, {"3": "2", "2": "1"})
    with pytest.raises(ApiError):
        resolve_parents(db, {"2": "3", "3": "2"})
    with pytest.raises(ApiError) as err:
        resolve_parents(db, {"3": "404"})
    assert err.value.status_code == 404
