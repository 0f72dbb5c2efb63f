from pagination import page_info, paginate, skip_for


def test_page_info():
    assert page_info(25, 3, 10) == {
        "currentPage": 3,
        "totalPages": 3,
        "totalCategories": 25,
        "hasNextPage": False,
        "hasPrevPage": True,
    }
    info = page_info(0, 1, 20)
    assert info["totalPages"] == 0
    assert info["hasNextPage"] is False


def test_skip_for():
    assert skip_for(1, 20) == 0
    assert skip_for(3, 10) == 20


def test_paginate():
    result = paginate(list(range(30)), page=2, per_page=12)
    assert result["data"] == list(range(12, 24))
    assert result["pagination"] == {
        "currentPage": 2,
        "totalPages": 3,
        "totalItems": 30,
        "itemsPerPage": 12,
        "hasNext": True,
        "hasPrev": True,
    }


def test_paginate_clamps_page():
    result = paginate(list(range(30)), page=9, per_page=12)
    assert result["pagination"]["currentPage"] == 3
    assert result["data"] == list(range(24, 30))
    assert paginate(list(range(5)), page=0)["pagination"]["currentPage"] == 1


def test_paginate_empty():
    result = paginate([], page=4)
    assert result["data"] == []
    assert result["pagination"]["totalPages"] == 1
    assert result["pagination"]["currentPage"] == 1
    assert result["pagination"]["hasNext"] is False
    assert result["pagination"]["hasPrev"] is False
