from typing import Optional

from fastapi import APIRouter, Depends
from pymongo.database import Database

from database import get_db, to_dict, utcnow
from errors import bad_request, envelope, require_db
from fallback import SETTINGS_ID, default_settings
from schemas import (
    CamelModel,
    GeneralSettings,
    NotificationSettings,
    PaymentSettings,
    SecuritySettings,
    ShippingSettings,
)
from seed import ensure_settings

router = APIRouter(prefix="/settings", tags=["Settings"])


class SettingsUpdate(CamelModel):
    """Only the fields sent are changed; lists such as shipping zones are replaced."""
    general: Optional[GeneralSettings] = None
    notifications: Optional[NotificationSettings] = None
    payment: Optional[PaymentSettings] = None
    shipping: Optional[ShippingSettings] = None
    security: Optional[SecuritySettings] = None


def _dotted(prefix, value, out):
    if isinstance(value, dict):
        for key, inner in value.items():
            _dotted(f"{prefix}.{key}", inner, out)
    else:
        out[prefix] = value
    return out


def _public(doc):
    d = to_dict(doc)
    for key in ("_id", "id"):
        d.pop(key, None)
    return d


@router.get("")
def get_settings(db: Optional[Database] = Depends(get_db)):
    if db is None:
        return envelope(default_settings())
    return envelope(_public(ensure_settings(db)))


@router.put("")
def update_settings(payload: SettingsUpdate, db: Optional[Database] = Depends(get_db)):
    db = require_db(db)
    sections = payload.model_dump(by_alias=True, exclude_unset=True)
    changes = {}
    for name, section in sections.items():
        if section is not None:
            _dotted(name, section, changes)
    if not changes:
        raise bad_request("No settings supplied")
    ensure_settings(db)
    changes["updatedAt"] = utcnow()
    db["settings"].update_one({"_id": SETTINGS_ID}, {"$set": changes})
    return envelope(_public(db["settings"].find_one({"_id": SETTINGS_ID})),
                    message="Settings updated successfully")
