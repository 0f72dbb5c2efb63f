import math
from typing import Any, Dict, List, Sequence


def page_info(total: int, page: int, limit: int, total_key: str = "totalCategories") -> Dict[str, Any]:
    """Pagination block returned by list endpoints."""
    total_pages = math.ceil(total / limit) if limit else 0
    return {
        "currentPage": page,
        "totalPages": total_pages,
        total_key: total,
        "hasNextPage": page < total_pages,
        "hasPrevPage": page > 1,
    }


def skip_for(page: int, limit: int) -> int:
    return (page - 1) * limit


def paginate(items: Sequence[Any], page: int = 1, per_page: int = 12) -> Dict[str, Any]:
    """Slice an in-memory list the way the storefront grid does.

    Out-of-range pages are clamped to the last page and an empty list still
    reports one page.
    """
    total = len(items)
    total_pages = max(1, math.ceil(total / per_page))
    current = 1 if total == 0 else min(max(1, page), total_pages)
    start = (current - 1) * per_page
    data: List[Any] = list(items[start:start + per_page])
    return {
        "data": data,
        "pagination": {
            "currentPage": current,
            "totalPages": total_pages,
            "totalItems": total,
            "itemsPerPage": per_page,
            "hasNext": current < total_pages and total > 0,
            "hasPrev": current > 1 and total > 0,
        },
    }
