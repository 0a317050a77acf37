"""Product filter value object."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from storefront.domain.product.exceptions import InvalidDateError, InvalidStockError
from storefront.domain.shared.time import ensure_tz_aware


@dataclass(frozen=True)
class ProductFilter:
    """Criteria for filtering the catalog.

    All criteria are optional and combined with AND. ``name_contains`` is a
    case-insensitive substring match, ``created_since`` is inclusive and
    ``stock`` is an exact match.
    """

    name_contains: Optional[str] = None
    created_since: Optional[datetime] = None
    stock: Optional[int] = None

    @classmethod
    def from_query(
        cls,
        productname: Optional[str] = None,
        created_date: Optional[str] = None,
        stock: Optional[str] = None,
    ) -> "ProductFilter":
        """Build a filter from raw query-string values.

        Raises
        ------
        InvalidDateError
            If created_date is not an ISO-8601 date or datetime
        InvalidStockError
            If stock is not an integer
        """
        created_since = None
        if created_date:
            try:
                created_since = ensure_tz_aware(
                    datetime.fromisoformat(created_date.strip())
                )
            except ValueError as e:
                raise InvalidDateError(created_date) from e

        stock_level = None
        if stock is not None:
            try:
                stock_level = int(stock.strip())
            except ValueError as e:
                raise InvalidStockError(stock) from e

        return cls(
            name_contains=productname or None,
            created_since=created_since,
            stock=stock_level,
        )
