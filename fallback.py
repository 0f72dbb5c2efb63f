"""
Static fallback dataset.

Served when MONGODB_URI is not configured or the store cannot be reached, and
used to seed empty collections on first access.
"""

from copy import deepcopy
from datetime import datetime, timezone
from typing import Any, Dict, List

from schemas import Order, Settings

_CREATED = datetime(2024, 1, 1, tzinfo=timezone.utc)

PRODUCTS: List[Dict[str, Any]] = [
    {
        "_id": "1",
        "name": "MAC Lipstick - Ruby Woo",
        "description": "Iconic vivid blue-red matte lipstick with long-lasting colour.",
        "price": 1950,
        "category": "Makeup",
        "subcategory": "Lipstick",
        "brand": "MAC",
        "image": "https://images.unsplash.com/photo-1586495777744-4413f21062fa?w=400",
        "images": ["https://images.unsplash.com/photo-1586495777744-4413f21062fa?w=400"],
        "inStock": True,
        "stockCount": 45,
        "rating": 4.8,
        "reviewCount": 1240,
        "tags": ["makeup", "lipstick", "mac", "matte"],
        "isActive": True,
        "shade": "Ruby Woo",
    },
    {
        "_id": "2",
        "name": "The Ordinary Niacinamide 10% + Zinc 1%",
        "description": "High-strength vitamin and mineral blemish formula.",
        "price": 700,
        "originalPrice": 875,
        "discount": 20,
        "category": "Skincare",
        "subcategory": "Serum",
        "brand": "The Ordinary",
        "image": "https://images.unsplash.com/photo-1620916566398-39f1143ab7be?w=400",
        "images": ["https://images.unsplash.com/photo-1620916566398-39f1143ab7be?w=400"],
        "inStock": True,
        "stockCount": 120,
        "rating": 4.6,
        "reviewCount": 3210,
        "tags": ["skincare", "serum", "theordinary", "oil-control"],
        "isActive": True,
        "skinType": ["Oily", "Combination"],
        "size": "30ml",
    },
    {
        "_id": "3",
        "name": "Urban Decay Naked3 Eyeshadow Palette",
        "description": "Twelve rose-hued neutral eyeshadows in matte and shimmer finishes.",
        "price": 3200,
        "category": "Makeup",
        "subcategory": "Eyeshadow",
        "brand": "Urban Decay",
        "image": "https://images.unsplash.com/photo-1512496015851-a90fb38ba796?w=400",
        "images": ["https://images.unsplash.com/photo-1512496015851-a90fb38ba796?w=400"],
        "inStock": True,
        "stockCount": 18,
        "rating": 4.7,
        "reviewCount": 860,
        "tags": ["makeup", "eyeshadow", "urbandecay"],
        "isActive": True,
    },
    {
        "_id": "4",
        "name": "Lakme Perfect Radiance Facewash",
        "description": "Gentle brightening face wash for everyday cleansing.",
        "price": 175,
        "category": "Skincare",
        "subcategory": "Face Wash",
        "brand": "Lakme",
        "image": "https://images.unsplash.com/photo-1571019613454-1cb2f99b2d8b?w=400",
        "images": ["https://images.unsplash.com/photo-1571019613454-1cb2f99b2d8b?w=400"],
        "inStock": True,
        "stockCount": 200,
        "rating": 4.2,
        "reviewCount": 540,
        "tags": ["skincare", "face-wash", "lakme"],
        "isActive": True,
    },
    {
        "_id": "5",
        "name": "Maybelline Fit Me Foundation",
        "description": "Lightweight matte foundation that refines pores.",
        "price": 599,
        "category": "Makeup",
        "subcategory": "Foundation",
        "brand": "Maybelline",
        "image": "https://images.unsplash.com/photo-1522335789203-aabd1fc54bc9?w=400",
        "images": ["https://images.unsplash.com/photo-1522335789203-aabd1fc54bc9?w=400"],
        "inStock": True,
        "stockCount": 75,
        "rating": 4.4,
        "reviewCount": 2100,
        "tags": ["makeup", "foundation", "maybelline"],
        "isActive": True,
    },
    {
        "_id": "6",
        "name": "Olaplex No.3 Hair Perfector",
        "description": "At-home bond building treatment for damaged hair.",
        "price": 2600,
        "category": "Hair Care",
        "subcategory": "Hair Mask",
        "brand": "Olaplex",
        "image": "https://images.unsplash.com/photo-1556228578-8c89e6adf883?w=400",
        "images": ["https://images.unsplash.com/photo-1556228578-8c89e6adf883?w=400"],
        "inStock": False,
        "stockCount": 0,
        "rating": 4.5,
        "reviewCount": 410,
        "tags": ["hair-care", "hair-mask", "olaplex"],
        "isActive": True,
    },
]

CATEGORIES: List[Dict[str, Any]] = [
    {
        "_id": "1",
        "name": "Skincare",
        "slug": "skincare",
        "description": "Complete skincare solutions for all skin types",
        "image": "https://images.unsplash.com/photo-1556228578-8c89e6adf883?w=400&h=400&fit=crop",
        "isActive": True,
        "sortOrder": 1,
        "parentId": None,
    },
    {
        "_id": "2",
        "name": "Makeup",
        "slug": "makeup",
        "description": "Premium makeup products for every occasion",
        "image": "https://images.unsplash.com/photo-1586495777744-4413f21062fa?w=400&h=400&fit=crop",
        "isActive": True,
        "sortOrder": 2,
        "parentId": None,
    },
    {
        "_id": "3",
        "name": "Hair Care",
        "slug": "hair-care",
        "description": "Professional hair care products for healthy hair",
        "image": "https://images.unsplash.com/photo-1519014816548-bf5fe059798b?w=400&h=400&fit=crop",
        "isActive": True,
        "sortOrder": 3,
        "parentId": None,
    },
    {
        "_id": "4",
        "name": "Fragrance",
        "slug": "fragrance",
        "description": "Luxury fragrances and perfumes",
        "image": "https://images.unsplash.com/photo-1541643600914-78b084683601?w=400&h=400&fit=crop",
        "isActive": True,
        "sortOrder": 4,
        "parentId": None,
    },
    {
        "_id": "5",
        "name": "Personal Care",
        "slug": "personal-care",
        "description": "Essential personal care products",
        "image": "https://images.unsplash.com/photo-1571019613454-1cb2f99b2d8b?w=400&h=400&fit=crop",
        "isActive": True,
        "sortOrder": 5,
        "parentId": None,
    },
]


def _order(number, customer, item, total, status, payment_status, address, order_date, updated_at):
    order = Order(
        order_number=f"ORD{number:03d}",
        customer=customer,
        items=[item],
        total=total,
        status=status,
        payment_status=payment_status,
        shipping_address=address,
        order_date=order_date,
        updated_at=updated_at,
    )
    return dict(order.model_dump(by_alias=True), _id=str(number))


ORDERS: List[Dict[str, Any]] = [
    _order(
        1,
        {"name": "Sarah Johnson", "email": "sarah.johnson@email.com", "phone": "+91 9876543210"},
        {"id": "1", "name": "MAC Lipstick - Ruby Woo",
         "image": "https://images.unsplash.com/photo-1586495777744-4413f21062fa?w=400",
         "price": 1950, "quantity": 1},
        1950, "delivered", "paid",
        {"street": "123 Beauty Street", "city": "Mumbai", "state": "Maharashtra",
         "zipCode": "400001", "country": "India"},
        datetime(2024, 2, 20, 10, 30, tzinfo=timezone.utc),
        datetime(2024, 2, 22, 14, 15, tzinfo=timezone.utc),
    ),
    _order(
        2,
        {"name": "Emily Chen", "email": "emily.chen@email.com", "phone": "+91 9876543211"},
        {"id": "2", "name": "The Ordinary Niacinamide 10% + Zinc 1%",
         "image": "https://images.unsplash.com/photo-1620916566398-39f1143ab7be?w=400",
         "price": 700, "quantity": 2},
        1400, "shipped", "paid",
        {"street": "456 Skincare Ave", "city": "Delhi", "state": "Delhi",
         "zipCode": "110001", "country": "India"},
        datetime(2024, 2, 19, 9, 45, tzinfo=timezone.utc),
        datetime(2024, 2, 21, 16, 20, tzinfo=timezone.utc),
    ),
    _order(
        3,
        {"name": "Priya Sharma", "email": "priya.sharma@email.com", "phone": "+91 9876543212"},
        {"id": "3", "name": "Urban Decay Naked3 Eyeshadow Palette",
         "image": "https://images.unsplash.com/photo-1512496015851-a90fb38ba796?w=400",
         "price": 3200, "quantity": 1},
        3200, "processing", "paid",
        {"street": "789 Makeup Lane", "city": "Bangalore", "state": "Karnataka",
         "zipCode": "560001", "country": "India"},
        datetime(2024, 2, 18, 11, 15, tzinfo=timezone.utc),
        datetime(2024, 2, 20, 13, 30, tzinfo=timezone.utc),
    ),
    _order(
        4,
        {"name": "Jessica Wilson", "email": "jessica.wilson@email.com", "phone": "+91 9876543213"},
        {"id": "4", "name": "Lakme Perfect Radiance Facewash",
         "image": "https://images.unsplash.com/photo-1571019613454-1cb2f99b2d8b?w=400",
         "price": 175, "quantity": 3},
        525, "confirmed", "paid",
        {"street": "321 Beauty Plaza", "city": "Chennai", "state": "Tamil Nadu",
         "zipCode": "600001", "country": "India"},
        datetime(2024, 2, 17, 8, 20, tzinfo=timezone.utc),
        datetime(2024, 2, 19, 12, 45, tzinfo=timezone.utc),
    ),
    _order(
        5,
        {"name": "Ariana Patel", "email": "ariana.patel@email.com", "phone": "+91 9876543214"},
        {"id": "5", "name": "Maybelline Fit Me Foundation",
         "image": "https://images.unsplash.com/photo-1522335789203-aabd1fc54bc9?w=400",
         "price": 599, "quantity": 1},
        599, "cancelled", "refunded",
        {"street": "654 Fashion St", "city": "Pune", "state": "Maharashtra",
         "zipCode": "411001", "country": "India"},
        datetime(2024, 2, 16, 15, 10, tzinfo=timezone.utc),
        datetime(2024, 2, 18, 10, 25, tzinfo=timezone.utc),
    ),
]

# Category tree used by `manage.py seed-categories`
CATEGORY_TREE: Dict[str, Dict[str, Any]] = {
    "Skincare": {
        "description": "Complete skincare solutions for all skin types",
        "image": "https://images.unsplash.com/photo-1556228578-8c89e6adf883?w=400&h=400&fit=crop",
        "subcategories": ["Face Wash", "Moisturizer", "Serum", "Sunscreen", "Toner", "Face Mask"],
    },
    "Makeup": {
        "description": "Premium makeup products for every occasion",
        "image": "https://images.unsplash.com/photo-1586495777744-4413f21062fa?w=400&h=400&fit=crop",
        "subcategories": ["Foundation", "Lipstick", "Eyeshadow", "Mascara", "Blush", "Concealer"],
    },
    "Hair Care": {
        "description": "Professional hair care products for healthy hair",
        "image": "https://images.unsplash.com/photo-1519014816548-bf5fe059798b?w=400&h=400&fit=crop",
        "subcategories": ["Shampoo", "Conditioner", "Hair Oil", "Hair Mask", "Hair Serum", "Styling"],
    },
    "Fragrance": {
        "description": "Luxury fragrances and perfumes from top brands",
        "image": "https://images.unsplash.com/photo-1541643600914-78b084683601?w=400&h=400&fit=crop",
        "subcategories": ["Perfume", "Body Spray", "Deodorant", "Cologne"],
    },
    "Personal Care": {
        "description": "Essential personal care products for daily wellness",
        "image": "https://images.unsplash.com/photo-1571019613454-1cb2f99b2d8b?w=400&h=400&fit=crop",
        "subcategories": ["Body Wash", "Body Lotion", "Hand Cream", "Foot Care", "Oral Care"],
    },
}

SETTINGS_ID = "site"


def fallback_products() -> List[Dict[str, Any]]:
    return [dict(deepcopy(p), createdAt=_CREATED, updatedAt=_CREATED) for p in PRODUCTS]


def fallback_categories() -> List[Dict[str, Any]]:
    return [dict(deepcopy(c), createdAt=_CREATED, updatedAt=_CREATED) for c in CATEGORIES]


def fallback_orders() -> List[Dict[str, Any]]:
    return deepcopy(ORDERS)


def default_settings() -> Dict[str, Any]:
    return Settings().model_dump(by_alias=True)
