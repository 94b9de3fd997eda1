"""Unit tests for the catalog query engine."""

import math

import pytest

from storefront.domain.exceptions import ValidationError
from storefront.domain.service.product_query import (
    MAX_LIMIT,
    PriceSort,
    ProductQuery,
    parse_flag,
    query_products,
)
from tests.fakes import make_product


def _ids(page) -> list[str]:
    return [p.id for p in page.items]


@pytest.fixture
def catalog():
    return [
        make_product("1", price="10", category="a"),
        make_product("2", price="20", category="b"),
        make_product("3", price="5", category="a"),
    ]


class TestQueryExamples:

    def test_category_filter_sorted_ascending(self, catalog):
        page = query_products(catalog, ProductQuery(category="a", sort="asc", limit=10, page=1))
        assert _ids(page) == ["3", "1"]
        assert page.total_pages == 1
        assert page.total_docs == 2

    def test_descending_sort(self, catalog):
        page = query_products(catalog, ProductQuery(sort="desc"))
        assert _ids(page) == ["2", "1", "3"]

    def test_no_sort_keeps_store_order(self, catalog):
        assert _ids(query_products(catalog, ProductQuery())) == ["1", "2", "3"]

    def test_invalid_sort_is_ignored(self, catalog):
        page = query_products(catalog, ProductQuery(sort="price"))
        assert _ids(page) == ["1", "2", "3"]

    def test_sort_is_stable_for_equal_prices(self):
        products = [make_product(str(i), price="7") for i in range(1, 5)]
        assert _ids(query_products(products, ProductQuery(sort="desc"))) == ["1", "2", "3", "4"]


class TestQueryFilters:

    def test_text_matches_title_or_description(self):
        products = [
            make_product("1", title="Red Mug", description="ceramic"),
            make_product("2", title="Plate", description="goes with the RED mug"),
            make_product("3", title="Spoon", description="steel"),
        ]
        page = query_products(products, ProductQuery(text="red"))
        assert _ids(page) == ["1", "2"]

    def test_category_is_case_insensitive_substring(self):
        products = [
            make_product("1", category="Electrónica"),
            make_product("2", category="Home electronics"),
            make_product("3", category="Garden"),
        ]
        page = query_products(products, ProductQuery(category="ELECTR"))
        assert _ids(page) == ["1", "2"]

    def test_status_filter(self):
        products = [
            make_product("1", status=True),
            make_product("2", status=False),
        ]
        assert _ids(query_products(products, ProductQuery(status=False))) == ["2"]
        assert _ids(query_products(products, ProductQuery(status=True))) == ["1"]

    def test_in_stock_filter(self):
        products = [make_product("1", stock=0), make_product("2", stock=3)]
        assert _ids(query_products(products, ProductQuery(in_stock=True))) == ["2"]

    def test_filters_are_anded(self):
        products = [
            make_product("1", title="Lamp", category="home", status=True),
            make_product("2", title="Lamp", category="office", status=True),
            make_product("3", title="Lamp", category="home", status=False),
        ]
        page = query_products(products, ProductQuery(text="lamp", category="home", status=True))
        assert _ids(page) == ["1"]

    def test_blank_text_means_no_filter(self, catalog):
        assert query_products(catalog, ProductQuery(text="  ")).total_docs == 3


class TestQueryPagination:

    @pytest.fixture
    def many(self):
        return [make_product(str(i), price=str(i), category="even" if i % 2 == 0 else "odd")
                for i in range(1, 24)]

    @pytest.mark.parametrize("limit", [1, 4, 5, 10, 23, 50])
    def test_every_page_is_the_exact_slice(self, many, limit):
        query_all = ProductQuery(category="odd", limit=MAX_LIMIT)
        expected = [p.id for p in many if query_all.matches(p)]
        pages = math.ceil(len(expected) / limit)
        for page_no in range(1, pages + 2):
            page = query_products(many, ProductQuery(category="odd", limit=limit, page=page_no))
            assert len(page.items) <= limit
            assert _ids(page) == expected[(page_no - 1) * limit:page_no * limit]
            assert page.total_docs == len(expected)
            assert page.total_pages == pages
            assert page.has_next_page == (page_no < page.total_pages)
            assert page.has_prev_page == (page_no > 1)

    def test_middle_page_navigation(self, many):
        page = query_products(many, ProductQuery(limit=5, page=2))
        assert page.prev_page == 1
        assert page.next_page == 3

    def test_first_and_last_page(self, many):
        first = query_products(many, ProductQuery(limit=10, page=1))
        last = query_products(many, ProductQuery(limit=10, page=3))
        assert first.prev_page is None
        assert last.next_page is None
        assert len(last.items) == 3

    def test_page_past_the_end_is_empty(self, many):
        page = query_products(many, ProductQuery(limit=10, page=9))
        assert page.items == []
        assert page.has_prev_page
        assert not page.has_next_page

    def test_empty_result(self):
        page = query_products([], ProductQuery())
        assert page.items == []
        assert page.total_pages == 0
        assert not page.has_next_page
        assert not page.has_prev_page


class TestProductQueryValidation:

    @pytest.mark.parametrize("field", ["limit", "page"])
    @pytest.mark.parametrize("value", [0, -1])
    def test_below_one_rejected(self, field, value):
        with pytest.raises(ValidationError, match=f"{field} must be at least 1"):
            ProductQuery(**{field: value})

    def test_non_integer_rejected(self):
        with pytest.raises(ValidationError, match="limit must be an integer"):
            ProductQuery(limit="10")

    def test_limit_clamped_to_maximum(self):
        assert ProductQuery(limit=500).limit == MAX_LIMIT

    def test_price_sort_parsing(self):
        assert ProductQuery(sort="ASC").price_sort is PriceSort.ASC
        assert ProductQuery(sort="desc").price_sort is PriceSort.DESC
        assert ProductQuery(sort="az").price_sort is None
        assert ProductQuery().price_sort is None


class TestLinkParams:

    def test_carries_filters_and_replaces_page(self):
        query = ProductQuery(limit=5, page=2, sort="asc", text="mug",
                             category="home", status=True, in_stock=True)
        assert query.link_params(3) == {
            "limit": "5",
            "sort": "asc",
            "query": "mug",
            "category": "home",
            "status": "true",
            "stock": "true",
            "page": "3",
        }

    def test_omits_unset_and_invalid_values(self):
        assert ProductQuery(sort="bogus").link_params(1) == {"limit": "10", "page": "1"}

    def test_text_filters_are_carried_stripped(self):
        params = ProductQuery(text="  mug ", category=" home ").link_params(2)
        assert params["query"] == "mug"
        assert params["category"] == "home"


class TestParseFlag:

    @pytest.mark.parametrize("raw", ["true", "1", "on", "TRUE", " On "])
    def test_truthy(self, raw):
        assert parse_flag(raw) is True

    @pytest.mark.parametrize("raw", ["false", "0", "off", "yes", ""])
    def test_falsy(self, raw):
        assert parse_flag(raw) is False

    def test_missing(self):
        assert parse_flag(None) is None
