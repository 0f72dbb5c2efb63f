import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Query
from pydantic import Field
from pymongo import ReturnDocument
from pymongo.database import Database
from pymongo.errors import PyMongoError

from database import get_db, id_filter, to_dict, utcnow
from errors import bad_request, envelope, not_found, require_db
from fallback import fallback_orders
from schemas import CamelModel, OrderStatus, PaymentStatus
from seed import ensure_orders

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/orders", tags=["Orders"])


class OrderUpdate(CamelModel):
    id: str = Field(..., min_length=1)
    status: Optional[OrderStatus] = None
    payment_status: Optional[PaymentStatus] = None


def _matches(order: Dict[str, Any], status: Optional[str], payment_status: Optional[str]) -> bool:
    if status and order.get("status") != status:
        return False
    if payment_status and order.get("paymentStatus") != payment_status:
        return False
    return True


@router.get("")
def list_orders(
    status: Optional[OrderStatus] = Query(None),
    payment_status: Optional[PaymentStatus] = Query(None, alias="paymentStatus"),
    db: Optional[Database] = Depends(get_db),
):
    if db is None:
        orders = [to_dict(o) for o in fallback_orders() if _matches(o, status, payment_status)]
        return envelope(sorted(orders, key=lambda o: o["orderDate"], reverse=True))
    filt: Dict[str, Any] = {}
    if status:
        filt["status"] = status
    if payment_status:
        filt["paymentStatus"] = payment_status
    try:
        ensure_orders(db)
        orders = [to_dict(o) for o in db["order"].find(filt).sort("orderDate", -1)]
    except PyMongoError:
        logger.exception("Order listing failed, serving fallback orders")
        orders = [to_dict(o) for o in fallback_orders() if _matches(o, status, payment_status)]
    return envelope(orders)


@router.get("/{order_id}")
def get_order(order_id: str, db: Optional[Database] = Depends(get_db)):
    if db is None:
        for order in fallback_orders():
            if order["_id"] == order_id:
                return envelope(to_dict(order))
        raise not_found("Order")
    ensure_orders(db)
    order = db["order"].find_one({"_id": id_filter(order_id)})
    if not order:
        raise not_found("Order")
    return envelope(to_dict(order))


@router.put("")
def update_order(payload: OrderUpdate, db: Optional[Database] = Depends(get_db)):
    """Change an order's status and/or payment status. Any transition is allowed."""
    db = require_db(db)
    changes = payload.model_dump(by_alias=True, exclude={"id"}, exclude_none=True)
    if not changes:
        raise bad_request("Nothing to update: send status or paymentStatus")
    changes["updatedAt"] = utcnow()

    ensure_orders(db)
    order = db["order"].find_one_and_update(
        {"_id": id_filter(payload.id)},
        {"$set": changes},
        return_document=ReturnDocument.AFTER,
    )
    if not order:
        raise not_found("Order")
    logger.info("Order %s updated: %s", order.get("orderNumber"), changes)
    return envelope(to_dict(order))
