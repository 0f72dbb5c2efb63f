import pytest
from bson import ObjectId
from pymongo.errors import DuplicateKeyError

import database
from config import Config
from database import create_document, get_db, id_filter, to_dict


def test_id_filter():
    oid = ObjectId()
    assert id_filter(str(oid)) == oid
    assert id_filter(oid) is oid
    assert id_filter("1") == "1"


def test_to_dict():
    oid, parent = ObjectId(), ObjectId()
    d = to_dict({"_id": oid, "parentId": parent, "name": "Serum", "__v": 0})
    assert d == {"_id": str(oid), "id": str(oid), "parentId": str(parent), "name": "Serum"}
    assert to_dict(None) is None


def test_create_document_stamps_times(db):
    doc_id = create_document(db, "product", {"name": "Kajal"})
    stored = db["product"].find_one({"_id": ObjectId(doc_id)})
    assert stored["name"] == "Kajal"
    assert stored["createdAt"] is not None
    assert stored["updatedAt"] is not None


def test_get_db_without_uri(monkeypatch):
    monkeypatch.setattr(Config, "MONGODB_URI", None)
    monkeypatch.setattr(database, "_client", None)
    assert get_db() is None


def test_unique_indexes(db):
    db["category"].insert_one({"name": "Skincare", "slug": "skincare"})
    with pytest.raises(DuplicateKeyError):
        db["category"].insert_one({"name": "Skin care", "slug": "skincare"})
