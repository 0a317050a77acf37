from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from storefront.domain.product.exceptions import (
    InvalidPriceError,
    InvalidStockError,
    NoImagesError,
)
from storefront.domain.shared.time import utc_now


class Product:
    """
    Product aggregate root.

    A catalog entry. Products have no owner: any authenticated user may
    change any product. ``images`` holds stored-file references
    (``uploads/<filename>``), never file contents.
    """

    def __init__(  # NOQA: PLR0913
        self,
        productname: str,
        description: str,
        price: float,
        stock: int,
        images: list[str],
        id: Optional[UUID] = None,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None,
    ):
        self._id = id if id is not None else uuid4()
        self._productname = productname
        self._description = description
        self._price = self._validate_price(price)
        self._stock = self._validate_stock(stock)
        self._images = list(images)
        self._created_at = created_at or utc_now()
        self._updated_at = updated_at or self._created_at

    @property
    def id(self) -> UUID:
        return self._id

    @property
    def productname(self) -> str:
        return self._productname

    @property
    def description(self) -> str:
        return self._description

    @property
    def price(self) -> float:
        return self._price

    @property
    def stock(self) -> int:
        return self._stock

    @property
    def images(self) -> list[str]:
        return list(self._images)

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        return self._updated_at

    def update(
        self,
        images: list[str],
        productname: Optional[str] = None,
        description: Optional[str] = None,
        price: Optional[float] = None,
        stock: Optional[int] = None,
    ) -> None:
        """Replace the image list and any provided scalar fields.

        Fields passed as None keep their current value. The image list is
        always replaced and may not be empty.
        """
        if not images:
            raise NoImagesError
        if productname is not None:
            self._productname = productname
        if description is not None:
            self._description = description
        if price is not None:
            self._price = self._validate_price(price)
        if stock is not None:
            self._stock = self._validate_stock(stock)
        self._images = list(images)
        self._updated_at = utc_now()

    @staticmethod
    def _validate_price(price: float) -> float:
        if price < 0:
            raise InvalidPriceError(price)
        return float(price)

    @staticmethod
    def _validate_stock(stock: int) -> int:
        if isinstance(stock, bool) or not isinstance(stock, int):
            raise InvalidStockError(stock)
        return stock

    @classmethod
    def create(
        cls,
        productname: str,
        description: str,
        price: float,
        stock: int,
        images: list[str],
    ) -> "Product":
        return cls(
            productname=productname,
            description=description,
            price=price,
            stock=stock,
            images=images,
        )

    @classmethod
    def reconstitute(  # noqa: PLR0913
        cls,
        id: UUID,
        productname: str,
        description: str,
        price: float,
        stock: int,
        images: list[str],
        created_at: datetime,
        updated_at: datetime,
    ) -> "Product":
        return cls(
            id=id,
            productname=productname,
            description=description,
            price=price,
            stock=stock,
            images=images,
            created_at=created_at,
            updated_at=updated_at,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Product):
            return NotImplemented
        return self._id == other._id

    def __hash__(self) -> int:
        return hash(self._id)

    def __repr__(self) -> str:
        return f"Product(id={self._id}, productname={self._productname!r})"
