import pytest

from registry_api.catalog.query import MAX_OFFSET, CatalogQuery, max_page, pagination


def test_defaults():
    query = CatalogQuery.from_params("package")
    assert query.page == 1
    assert query.limit == 20
    assert query.sort == "relevance"
    assert query.verified == "all"
    assert query.category == "all"
    assert query.offset == 0


@pytest.mark.parametrize(
    "page, limit, expected",
    [
        ("0", "0", (1, 1)),
        ("-3", "500", (1, 100)),
        ("abc", "xyz", (1, 20)),
        ("3", "10", (3, 10)),
    ],
)
def test_paging_input_is_clamped(page, limit, expected):
    query = CatalogQuery.from_params("service", page=page, limit=limit)
    assert (query.page, query.limit) == expected


def test_huge_page_is_clamped_to_store_range():
    query = CatalogQuery.from_params("package", page="100000000000000000000", limit="50")
    assert query.page == max_page(50)
    assert query.offset + query.limit <= MAX_OFFSET


def test_unknown_enum_values_fall_back():
    query = CatalogQuery.from_params("package", sort="popularity", verified="maybe", category="widget")
    assert query.sort == "relevance"
    assert query.verified == "all"
    assert query.category == "all"


def test_blank_text_filters_are_dropped():
    query = CatalogQuery.from_params("package", q="   ", owner="", contributor=" bob ")
    assert query.text is None
    assert query.owner is None
    assert query.contributor == "bob"


def test_unknown_kind_is_rejected():
    with pytest.raises(ValueError):
        CatalogQuery.from_params("plugin")


def test_echo_reports_normalized_filters():
    query = CatalogQuery.from_params("service", q=" weather ", category="Hook", verified="VERIFIED")
    assert query.echo() == {
        "query": "weather",
        "sort": "relevance",
        "verified": "verified",
        "type": "hook",
        "owner": None,
        "contributor": None,
    }


def test_pagination_block():
    query = CatalogQuery.from_params("package", page="2", limit="2")
    assert pagination(query, 5) == {
        "page": 2,
        "limit": 2,
        "total": 5,
        "totalPages": 3,
        "hasNextPage": True,
        "hasPrevPage": True,
    }
    empty = pagination(CatalogQuery.from_params("package"), 0)
    assert empty["totalPages"] == 0
    assert empty["hasNextPage"] is False
