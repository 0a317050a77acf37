"""Unit tests for ProductFilter."""

from datetime import datetime, timezone

import pytest

from storefront.domain.product import (
    InvalidDateError,
    InvalidStockError,
    ProductFilter,
)


class TestProductFilterFromQuery:
    def test_empty_query_has_no_criteria(self):
        criteria = ProductFilter.from_query()

        assert criteria == ProductFilter()

    def test_name_is_kept_as_given(self):
        assert ProductFilter.from_query(productname="Lamp").name_contains == "Lamp"

    def test_date_only_is_midnight_utc(self):
        criteria = ProductFilter.from_query(created_date="2024-05-01")

        assert criteria.created_since == datetime(2024, 5, 1, tzinfo=timezone.utc)

    def test_datetime_with_offset_is_kept_aware(self):
        criteria = ProductFilter.from_query(created_date="2024-05-01T10:00:00+02:00")

        assert criteria.created_since.utcoffset().total_seconds() == 7200

    def test_invalid_date_raises(self):
        with pytest.raises(InvalidDateError, match="Invalid date format"):
            ProductFilter.from_query(created_date="yesterday")

    def test_stock_zero_is_a_criterion(self):
        assert ProductFilter.from_query(stock="0").stock == 0

    def test_non_integer_stock_raises(self):
        with pytest.raises(InvalidStockError, match="Invalid stock value"):
            ProductFilter.from_query(stock="abc")

    def test_empty_stock_raises(self):
        with pytest.raises(InvalidStockError):
            ProductFilter.from_query(stock="")

    def test_absent_stock_is_no_criterion(self):
        assert ProductFilter.from_query(productname="lamp").stock is None
