import mongomock
import pytest

import manage


@pytest.fixture
def run(db, monkeypatch):
    monkeypatch.setattr(manage, "get_db", lambda: db)
    return manage.main


def test_create_admin(run, db, capsys):
    assert run(["create-admin"]) == 0
    assert "Admin user created successfully" in capsys.readouterr().out
    assert db["user"].find_one({"email": "admin@kaayalife.com"})["role"] == "admin"

    assert run(["create-admin"]) == 0
    assert "already exists" in capsys.readouterr().out


def test_reset_admin_and_login(run, capsys):
    run(["create-admin"])
    assert run(["reset-admin", "--email", "admin@kaayalife.com", "--password", "s3cret"]) == 0
    assert run(["check-login", "--email", "admin@kaayalife.com", "--password", "s3cret"]) == 0
    assert run(["check-login", "--email", "admin@kaayalife.com", "--password", "admin123"]) == 1


def test_reset_admin_creates_missing(run, db):
    assert run(["reset-admin", "--name", "Ops", "--email", "ops@kaayalife.com", "--password", "pw"]) == 0
    assert db["user"].find_one({"email": "ops@kaayalife.com"})["role"] == "admin"


def test_list_users(run, capsys):
    run(["create-admin"])
    capsys.readouterr()
    assert run(["list-users"]) == 0
    out = capsys.readouterr().out
    assert "Email: admin@kaayalife.com, Role: admin, Active: True" in out


def test_seed_categories(run, db):
    assert run(["seed-categories"]) == 0
    assert db["category"].count_documents({"parentId": None}) == 5


def test_cleanup_subcategories_then_indexes(monkeypatch, capsys):
    db = mongomock.MongoClient()["kaaya_legacy"]
    parent = db["category"].insert_one({"name": "Makeup", "slug": "makeup", "parentId": None}).inserted_id
    for _ in range(3):
        db["category"].insert_one({"name": "Blush", "slug": "blush", "parentId": parent})
    monkeypatch.setattr(manage, "get_db", lambda: db)

    assert manage.main(["cleanup-subcategories"]) == 0
    assert "Removed 2 duplicate subcategories" in capsys.readouterr().out
    assert db["category"].count_documents({"name": "Blush"}) == 1
    assert "name_1" in db["category"].index_information()


def test_import_products(run, db):
    assert run(["import-products", "--count", "8", "--category", "Nail Care"]) == 0
    assert db["product"].count_documents({"category": "Nail Care"}) == 8


def test_no_database(monkeypatch, capsys):
    monkeypatch.setattr(manage, "get_db", lambda: None)
    assert manage.main(["list-users"]) == 1
    assert "MONGODB_URI" in capsys.readouterr().err
