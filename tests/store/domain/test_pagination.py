"""Domain tests for page requests, pages and product search criteria."""

import pytest
from protean.exceptions import ValidationError
from store.pagination import Page, PageRequest
from store.product.search import SORTABLE_FIELDS, ProductSearchCriteria


class TestPageRequest:
    def test_defaults(self):
        request = PageRequest()
        assert request.page == 0
        assert request.size == 10
        assert request.offset == 0
        assert request.order_by == "id"

    def test_offset_is_page_times_size(self):
        assert PageRequest(page=3, size=20).offset == 60

    def test_descending_order_is_prefixed(self):
        assert PageRequest(sort_by="price", sort_dir="DESC").order_by == "-price"

    def test_unknown_sort_field_is_rejected(self):
        with pytest.raises(ValidationError) as exc:
            PageRequest(sort_by="password").checked(SORTABLE_FIELDS)
        assert "sort_by" in exc.value.messages

    def test_unknown_direction_is_rejected(self):
        with pytest.raises(ValidationError):
            PageRequest(sort_dir="sideways").checked(SORTABLE_FIELDS)

    def test_negative_page_is_rejected(self):
        with pytest.raises(ValidationError):
            PageRequest(page=-1).checked(SORTABLE_FIELDS)


class TestPage:
    def test_total_pages_rounds_up(self):
        assert Page(items=[], total=21, page=0, size=10).total_pages == 3

    def test_empty_page(self):
        assert Page(items=[], total=0, page=0, size=10).total_pages == 0


class TestSearchCriteria:
    def test_no_filters_only_excludes_deleted(self):
        assert ProductSearchCriteria().to_lookups() == {"deleted": False}

    def test_every_filter_is_combined(self):
        lookups = ProductSearchCriteria(
            name="phone",
            category="cat-1",
            brand="Acme",
            min_price=10.0,
            max_price=100.0,
            available=True,
            min_rating=4.0,
        ).to_lookups()
        assert lookups == {
            "deleted": False,
            "name__icontains": "phone",
            "category_id": "cat-1",
            "brand": "Acme",
            "price__gte": 10.0,
            "price__lte": 100.0,
            "active": True,
            "quantity__gt": 0,
            "rating__gte": 4.0,
        }

    def test_available_false_does_not_filter(self):
        assert "quantity__gt" not in ProductSearchCriteria(available=False).to_lookups()

    def test_zero_min_price_is_still_applied(self):
        assert ProductSearchCriteria(min_price=0.0).to_lookups()["price__gte"] == 0.0
