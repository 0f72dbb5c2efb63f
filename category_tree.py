"""
Category tree: two levels only, top-level categories and their subcategories.

The read side annotates category documents with product counts and child
lists. The reorder side mirrors what the admin menu manager does on drop:
move items inside a sibling list, move a subcategory under another parent,
then derive the `{id, sortOrder, parentId}` updates sent to
`PATCH /api/categories/bulk/order`.
"""

import re
from typing import Any, Dict, Iterable, List, Optional

from pymongo import ASCENDING
from pymongo.database import Database

from database import id_filter, to_dict
from errors import bad_request, not_found

CATEGORY_SORT = [("sortOrder", ASCENDING), ("createdAt", -1)]
SUBCATEGORY_SORT = [("sortOrder", ASCENDING), ("name", ASCENDING)]
SUBCATEGORY_FIELDS = {"name": 1, "slug": 1, "isActive": 1, "sortOrder": 1, "parentId": 1}


def slugify(name: str) -> str:
    slug = re.sub(r"[^a-z0-9\s-]", "", name.strip().lower())
    return re.sub(r"[\s-]+", "-", slug).strip("-")


def unique_by_name(docs: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Keep the first document for each name, preserving order."""
    seen = set()
    out = []
    for doc in docs:
        if doc.get("name") in seen:
            continue
        seen.add(doc.get("name"))
        out.append(doc)
    return out


def is_top_level(doc: Dict[str, Any]) -> bool:
    return not doc.get("parentId")


# Read side

def count_products(db: Database, category_name: str, active_only: bool = True) -> int:
    query: Dict[str, Any] = {"category": category_name}
    if active_only:
        # products without the flag are treated as active
        query["isActive"] = {"$ne": False}
    return db["product"].count_documents(query)


def find_subcategories(db: Database, parent_id: Any, active_only: bool = False) -> List[Dict[str, Any]]:
    query: Dict[str, Any] = {"parentId": parent_id}
    if active_only:
        query["isActive"] = True
    docs = db["category"].find(query, SUBCATEGORY_FIELDS).sort(SUBCATEGORY_SORT)
    return [to_dict(d) for d in unique_by_name(docs)]


def annotate(db: Database, categories: Iterable[Dict[str, Any]], active_subcategories: bool = False,
             include_totals: bool = False) -> List[Dict[str, Any]]:
    """Attach productCount (and subcategories for top-level categories)."""
    out = []
    for category in categories:
        item = to_dict(category)
        item["productCount"] = count_products(db, category["name"], active_only=not include_totals)
        if include_totals:
            item["activeProductCount"] = count_products(db, category["name"])
        if is_top_level(category):
            item["subcategories"] = find_subcategories(db, category["_id"], active_only=active_subcategories)
        else:
            item["subcategories"] = []
        out.append(item)
    return out


def check_parent(db: Database, category_id: Optional[Any], parent_id: Optional[str]) -> Optional[Any]:
    """Validate a parent assignment and return the stored parentId value.

    Enforces the two-level depth: the parent must exist and be top-level, and
    a category that has subcategories cannot itself become a subcategory.
    """
    if not parent_id:
        return None
    parent_key = id_filter(parent_id)
    if category_id is not None and parent_key == category_id:
        raise bad_request("A category cannot be its own parent")
    parent = db["category"].find_one({"_id": parent_key})
    if not parent:
        raise not_found("Parent category")
    if not is_top_level(parent):
        raise bad_request("Subcategories cannot have subcategories")
    if category_id is not None and db["category"].find_one({"parentId": category_id}):
        raise bad_request("A category with subcategories cannot become a subcategory")
    return parent["_id"]


def resolve_parents(db: Database, assignments: Dict[Any, Optional[str]]) -> Dict[Any, Any]:
    """Validate a batch of parent assignments against the tree it produces.

    `assignments` maps a category _id to its requested parentId (None for top
    level). The stored parents are overlaid with the whole batch before any
    rule is checked, so moves inside one request cannot chain into a third
    level or a cycle. Returns the stored parentId value for each key.
    """
    parents = {d["_id"]: d.get("parentId") for d in db["category"].find({}, {"parentId": 1})}
    resolved = {}
    for key, parent_id in assignments.items():
        if not parent_id:
            resolved[key] = None
            continue
        parent_key = id_filter(parent_id)
        if parent_key == key:
            raise bad_request("A category cannot be its own parent")
        if parent_key not in parents:
            raise not_found("Parent category")
        resolved[key] = parent_key
    parents.update(resolved)

    for key, parent_key in resolved.items():
        if parent_key is None:
            continue
        if parents.get(parent_key):
            raise bad_request("Subcategories cannot have subcategories")
        if any(p == key for p in parents.values()):
            raise bad_request("A category with subcategories cannot become a subcategory")
    return resolved


# Reorder side

def build_tree(categories: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Nest flat category dicts into top-level items with `subcategories`.

    Both levels are ordered by sortOrder then name. Orphans (parent missing)
    are promoted to the top level.
    """
    flat = [dict(c) for c in categories]
    by_id = {str(c.get("_id", c.get("id"))): c for c in flat}
    top, children = [], {}
    for c in flat:
        parent = c.get("parentId")
        if parent and str(parent) in by_id:
            children.setdefault(str(parent), []).append(c)
        else:
            top.append(c)

    def order(items):
        return sorted(items, key=lambda c: (c.get("sortOrder", 0), c.get("name", "")))

    tree = []
    for c in order(top):
        node = dict(c)
        node["subcategories"] = unique_by_name(order(children.get(str(c.get("_id", c.get("id"))), [])))
        tree.append(node)
    return tree


def _key(item: Dict[str, Any]) -> str:
    return str(item.get("_id", item.get("id")))


def move_item(items: List[Any], old_index: int, new_index: int) -> List[Any]:
    """Return a copy with the element at old_index moved to new_index."""
    result = list(items)
    result.insert(new_index, result.pop(old_index))
    return result


def reorder_categories(tree: List[Dict[str, Any]], active_id: str, over_id: str) -> List[Dict[str, Any]]:
    """Drop a top-level category onto another one."""
    ids = [_key(c) for c in tree]
    if active_id not in ids or over_id not in ids or active_id == over_id:
        return tree
    return move_item(tree, ids.index(active_id), ids.index(over_id))


def reorder_subcategories(tree: List[Dict[str, Any]], parent_id: str, active_id: str,
                          over_id: str) -> List[Dict[str, Any]]:
    """Drop a subcategory onto a sibling under the same parent."""
    out = []
    for category in tree:
        if _key(category) == parent_id:
            subs = category.get("subcategories") or []
            ids = [_key(s) for s in subs]
            if active_id in ids and over_id in ids and active_id != over_id:
                category = dict(category, subcategories=move_item(subs, ids.index(active_id), ids.index(over_id)))
        out.append(category)
    return out


def move_subcategory(tree: List[Dict[str, Any]], subcategory_id: str, new_parent_id: str) -> List[Dict[str, Any]]:
    """Drop a subcategory onto a different top-level category.

    The subcategory leaves its old parent's list and is appended to the new
    parent's list with its parentId rewritten.
    """
    moving = None
    old_parent = None
    for category in tree:
        for sub in category.get("subcategories") or []:
            if _key(sub) == subcategory_id:
                moving, old_parent = sub, _key(category)
    if moving is None or old_parent == new_parent_id or new_parent_id not in {_key(c) for c in tree}:
        return tree

    out = []
    for category in tree:
        subs = category.get("subcategories") or []
        if _key(category) == old_parent:
            category = dict(category, subcategories=[s for s in subs if _key(s) != subcategory_id])
        elif _key(category) == new_parent_id:
            category = dict(category, subcategories=subs + [dict(moving, parentId=new_parent_id)])
        out.append(category)
    return out


def order_updates(tree: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Flatten a tree into 1-based sortOrder/parentId updates."""
    updates = []
    for position, category in enumerate(tree, start=1):
        updates.append({"id": _key(category), "sortOrder": position, "parentId": None})
        for sub_position, sub in enumerate(category.get("subcategories") or [], start=1):
            updates.append({"id": _key(sub), "sortOrder": sub_position, "parentId": _key(category)})
    return updates
