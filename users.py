"""Admin account management. Users are only touched by manage.py scripts."""

import logging
from typing import Any, Dict, List, Optional

from passlib.context import CryptContext
from pymongo.database import Database

from database import create_document, utcnow
from schemas import User

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def find_user(db: Database, email: str) -> Optional[Dict[str, Any]]:
    return db["user"].find_one({"email": email.lower()})


def create_user(db: Database, name: str, email: str, password: str, role: str = "customer") -> Optional[str]:
    """Create a user and return its id, or None if the email is taken."""
    if find_user(db, email):
        logger.info("User %s already exists", email)
        return None
    user = User(name=name, email=email.lower(), password=hash_password(password), role=role)
    user_id = create_document(db, "user", user)
    logger.info("Created %s user %s", role, email)
    return user_id


def reset_password(db: Database, email: str, password: str) -> bool:
    result = db["user"].update_one(
        {"email": email.lower()},
        {"$set": {"password": hash_password(password), "isActive": True, "updatedAt": utcnow()}},
    )
    return result.matched_count > 0


def authenticate(db: Database, email: str, password: str) -> Optional[Dict[str, Any]]:
    user = find_user(db, email)
    if not user or not user.get("isActive", True):
        return None
    if not verify_password(password, user["password"]):
        return None
    return user


def list_users(db: Database) -> List[Dict[str, Any]]:
    projection = {"password": 0}
    return list(db["user"].find({}, projection).sort("createdAt", 1))
