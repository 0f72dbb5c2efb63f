"""
Synthetic beauty catalog generator used by `POST /api/products/import` and
`manage.py import-products`.

Products are spread across the category templates below; brand, subcategory
and feature are drawn at random and combined into a plausible name and
description. Output is random unless a seeded `random.Random` is passed.
"""

import math
import random
import re
from typing import Any, Dict, List, Optional

from database import utcnow

TEMPLATES: Dict[str, Dict[str, Any]] = {
    "Skincare": {
        "brands": ["The Ordinary", "CeraVe", "Neutrogena", "Olay", "L'Oreal Paris", "Garnier", "Plum",
                   "Minimalist", "Dot & Key", "Mamaearth"],
        "subcategories": ["Face Serum", "Night Cream", "Day Cream", "Sunscreen", "Face Wash", "Cleanser",
                          "Toner", "Face Mask", "Eye Cream", "Moisturizer"],
        "features": ["Anti-aging", "Hydrating", "Brightening", "Oil-free", "Non-comedogenic",
                     "Dermatologist tested", "For sensitive skin", "SPF protection"],
        "base_price": 399,
        "images": [
            "https://images.unsplash.com/photo-1556228720-195a672e8a03?w=400",
            "https://images.unsplash.com/photo-1608248543803-ba4f8c70ae0b?w=400",
            "https://images.unsplash.com/photo-1571019613454-1cb2f99b2d8b?w=400",
            "https://images.unsplash.com/photo-1620916566398-39f1143ab7be?w=400",
        ],
    },
    "Makeup": {
        "brands": ["Maybelline", "L'Oreal Paris", "Lakme", "Revlon", "Colorbar", "NYX", "Sugar Cosmetics",
                   "Faces Canada", "Blue Heaven", "Insight Cosmetics"],
        "subcategories": ["Lipstick", "Foundation", "Concealer", "Mascara", "Eyeliner", "Eyeshadow Palette",
                          "Blush", "Compact Powder", "Lip Gloss", "Kajal"],
        "features": ["Long-lasting", "Waterproof", "Smudge-proof", "High pigment", "Matte finish",
                     "Glossy finish", "Transfer-proof", "Easy to blend"],
        "base_price": 299,
        "images": [
            "https://images.unsplash.com/photo-1522335789203-aabd1fc54bc9?w=400",
            "https://images.unsplash.com/photo-1512496015851-a90fb38ba796?w=400",
            "https://images.unsplash.com/photo-1586495777744-4413f21062fa?w=400",
            "https://images.unsplash.com/photo-1596462502278-27bfdc403348?w=400",
        ],
    },
    "Hair Care": {
        "brands": ["L'Oreal Paris", "Head & Shoulders", "Pantene", "Herbal Essences", "Dove", "Matrix",
                   "Schwarzkopf", "Tresemme", "Sunsilk", "WOW"],
        "subcategories": ["Shampoo", "Conditioner", "Hair Oil", "Hair Serum", "Hair Mask", "Hair Spray",
                          "Hair Gel", "Leave-in Conditioner", "Dry Shampoo", "Hair Color"],
        "features": ["Anti-dandruff", "For dry hair", "For oily hair", "Strengthening", "Shine enhancing",
                     "Frizz control", "Color protection", "Damage repair"],
        "base_price": 249,
        "images": [
            "https://images.unsplash.com/photo-1571019613454-1cb2f99b2d8b?w=400",
            "https://images.unsplash.com/photo-1556228578-8c89e6adf883?w=400",
            "https://images.unsplash.com/photo-1608248543803-ba4f8c70ae0b?w=400",
        ],
    },
    "Fragrance": {
        "brands": ["Fogg", "Wild Stone", "Engage", "Axe", "Denver", "Park Avenue", "Set Wet", "Bella Vita",
                   "Bombay Shaving Company", "The Man Company"],
        "subcategories": ["Body Spray", "Deodorant", "Perfume", "Eau de Toilette", "Body Mist", "Cologne",
                          "Aftershave", "Roll-on"],
        "features": ["Long-lasting", "24-hour protection", "Fresh scent", "Masculine", "Feminine", "Unisex",
                     "Alcohol-free", "Skin-friendly"],
        "base_price": 199,
        "images": [
            "https://images.unsplash.com/photo-1556228578-8c89e6adf883?w=400",
            "https://images.unsplash.com/photo-1522337360788-8b13dee7a37e?w=400",
        ],
    },
    "Personal Care": {
        "brands": ["Nivea", "Dove", "Johnson's", "Vaseline", "Ponds", "Himalaya", "Biotique", "Lotus", "Vicco",
                   "Mamaearth"],
        "subcategories": ["Body Lotion", "Face Cream", "Hand Cream", "Body Wash", "Soap", "Face Wash", "Scrub",
                          "Body Oil", "Talcum Powder", "Cold Cream"],
        "features": ["For all skin types", "Natural ingredients", "Gentle formula", "Quick absorption",
                     "Non-greasy", "Dermatologist recommended", "Ayurvedic", "Herbal"],
        "base_price": 149,
        "images": [
            "https://images.unsplash.com/photo-1571019613454-1cb2f99b2d8b?w=400",
            "https://images.unsplash.com/photo-1556228720-195a672e8a03?w=400",
        ],
    },
    "Men's Grooming": {
        "brands": ["Gillette", "Bombay Shaving Company", "The Man Company", "Ustraa", "Beardo", "Park Avenue",
                   "Old Spice", "Axe", "Wild Stone", "Set Wet"],
        "subcategories": ["Beard Oil", "Aftershave", "Shaving Cream", "Face Wash", "Hair Wax",
                          "Face Moisturizer", "Beard Wash", "Hair Gel", "Cologne", "Body Spray"],
        "features": ["For sensitive skin", "Quick-drying", "Non-sticky", "Strong hold", "Natural finish",
                     "Alcohol-free", "Paraben-free", "Dermatologist tested"],
        "base_price": 299,
        "images": [
            "https://images.unsplash.com/photo-1556228578-8c89e6adf883?w=400",
            "https://images.unsplash.com/photo-1522337360788-8b13dee7a37e?w=400",
        ],
    },
    "Nail Care": {
        "brands": ["Colorbar", "Lakme", "Maybelline", "Sugar Cosmetics", "Faces Canada", "Elle 18", "Insight",
                   "Blue Heaven", "Lotus", "Revlon"],
        "subcategories": ["Nail Polish", "Nail Art Kit", "Base Coat", "Top Coat", "Nail Remover", "Cuticle Oil",
                          "Nail File", "French Manicure Kit"],
        "features": ["Chip-resistant", "Quick-dry", "High shine", "Long-lasting", "Easy application",
                     "Salon quality", "Vibrant color", "Streak-free"],
        "base_price": 99,
        "images": [
            "https://images.unsplash.com/photo-1522335789203-aabd1fc54bc9?w=400",
            "https://images.unsplash.com/photo-1586495777744-4413f21062fa?w=400",
        ],
    },
    "Baby Care": {
        "brands": ["Johnson's Baby", "Himalaya Baby", "Sebamed Baby", "Chicco", "Mamaearth", "Pigeon",
                   "Cetaphil Baby", "Aveeno Baby", "Mustela", "Dabur Baby"],
        "subcategories": ["Baby Oil", "Baby Lotion", "Baby Shampoo", "Baby Soap", "Baby Powder",
                          "Diaper Rash Cream", "Baby Wipes", "Baby Sunscreen"],
        "features": ["Tear-free", "Hypoallergenic", "Clinically proven", "Pediatrician tested",
                     "No harmful chemicals", "Gentle formula", "Natural ingredients", "pH balanced"],
        "base_price": 199,
        "images": [
            "https://images.unsplash.com/photo-1571019613454-1cb2f99b2d8b?w=400",
            "https://images.unsplash.com/photo-1608248543803-ba4f8c70ae0b?w=400",
        ],
    },
}

NAME_PATTERNS = [
    "{brand} {feature} {sub}",
    "{brand} {sub} - {feature}",
    "{brand} Professional {sub}",
    "{brand} {sub} for Daily Use",
    "{brand} Advanced {sub}",
]

DESCRIPTION_PATTERNS = [
    "Premium {sub_l} with {feature_l} properties. Perfect for daily use with visible results.",
    "{feature} {sub_l} formulated with advanced ingredients for optimal performance and comfort.",
    "Professional-grade {sub_l} that delivers long-lasting {feature_l} benefits for healthy skin.",
    "Clinically tested {sub_l} with {feature_l} formula, suitable for all skin types.",
]

DISCOUNT_CHANCE = 0.4


def _tags(category: str, subcategory: str, brand: str, feature: str) -> List[str]:
    tags = [
        category.lower(),
        re.sub(r"\s+", "-", subcategory.lower()),
        re.sub(r"[^a-z0-9]", "", brand.lower()),
        re.sub(r"\s+", "-", feature.lower()),
        "beauty",
        "cosmetics",
    ]
    return list(dict.fromkeys(tags))


def generate_product(category: str, rng: random.Random) -> Dict[str, Any]:
    template = TEMPLATES[category]
    brand = rng.choice(template["brands"])
    subcategory = rng.choice(template["subcategories"])
    feature = rng.choice(template["features"])
    words = {"brand": brand, "sub": subcategory, "feature": feature,
             "sub_l": subcategory.lower(), "feature_l": feature.lower()}

    price = round(template["base_price"] * rng.uniform(0.6, 1.4))
    product: Dict[str, Any] = {
        "name": rng.choice(NAME_PATTERNS).format(**words),
        "description": rng.choice(DESCRIPTION_PATTERNS).format(**words),
        "price": price,
    }
    if rng.random() < DISCOUNT_CHANCE:
        discount = rng.randint(10, 39)
        product["originalPrice"] = round(price / (1 - discount / 100))
        product["discount"] = discount

    main_image = rng.choice(template["images"])
    stock_count = rng.randint(20, 219)
    now = utcnow()
    product.update({
        "category": category,
        "subcategory": subcategory,
        "brand": brand,
        "image": main_image,
        "images": [main_image] + [img for img in template["images"] if img != main_image][:2],
        "inStock": stock_count > 0,
        "stockCount": stock_count,
        "rating": round(rng.uniform(3.5, 5.0), 1),
        "reviewCount": rng.randint(50, 1049),
        "tags": _tags(category, subcategory, brand, feature),
        "isActive": True,
        "createdAt": now,
        "updatedAt": now,
    })
    return product


def generate_products(count: int, rng: Optional[random.Random] = None,
                      categories: Optional[List[str]] = None) -> List[Dict[str, Any]]:
    """Generate `count` products, filling categories in template order."""
    rng = rng or random.Random()
    names = categories or list(TEMPLATES)
    unknown = [name for name in names if name not in TEMPLATES]
    if unknown:
        raise ValueError(f"Unknown categories: {', '.join(unknown)}")
    if count <= 0:
        return []
    per_category = math.ceil(count / len(names))
    products: List[Dict[str, Any]] = []
    for name in names:
        for _ in range(per_category):
            if len(products) >= count:
                return products
            products.append(generate_product(name, rng))
    return products
