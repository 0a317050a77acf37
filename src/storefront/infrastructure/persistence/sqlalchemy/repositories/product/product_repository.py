"""SQLAlchemy implementation of ProductRepository."""

from __future__ import annotations

import logging
from datetime import timezone
from typing import Optional
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.domain.product import Product, ProductFilter, ProductRepository
from storefront.domain.shared.time import ensure_tz_aware
from storefront.infrastructure.persistence.sqlalchemy.models import ProductModel

logger = logging.getLogger(__name__)


class ProductRepositorySQLAlchemy(ProductRepository):
    """SQLAlchemy implementation of the ProductRepository interface."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def find_by_id(self, product_id: UUID) -> Optional[Product]:
        model = await self._find_model_by_id(product_id)
        if model is None:
            return None
        return self._map_to_domain(model)

    async def find_all(self) -> list[Product]:
        stmt = select(ProductModel).order_by(ProductModel.created_at)
        result = await self._session.execute(stmt)
        return [self._map_to_domain(m) for m in result.scalars().all()]

    async def find_matching(self, criteria: ProductFilter) -> list[Product]:
        stmt = select(ProductModel)

        if criteria.name_contains:
            stmt = stmt.where(
                ProductModel.productname.icontains(
                    criteria.name_contains,
                    autoescape=True,
                ),
            )
        if criteria.created_since is not None:
            # Timestamps are stored in UTC
            since = ensure_tz_aware(criteria.created_since).astimezone(timezone.utc)
            stmt = stmt.where(ProductModel.created_at >= since)
        if criteria.stock is not None:
            stmt = stmt.where(ProductModel.stock == criteria.stock)

        stmt = stmt.order_by(ProductModel.created_at)
        result = await self._session.execute(stmt)
        return [self._map_to_domain(m) for m in result.scalars().all()]

    async def save(self, product: Product) -> None:
        existing = await self._find_model_by_id(product.id)

        if existing:
            self._update_model(existing, product)
            logger.debug("Updated product: %s", product.id)
        else:
            self._session.add(self._map_to_model(product))
            logger.debug("Created product: %s", product.id)

        await self._session.flush()

    async def delete(self, product_id: UUID) -> bool:
        stmt = delete(ProductModel).where(ProductModel.id == product_id)
        result = await self._session.execute(stmt)
        await self._session.flush()
        return result.rowcount > 0

    async def _find_model_by_id(self, product_id: UUID) -> Optional[ProductModel]:
        stmt = select(ProductModel).where(ProductModel.id == product_id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    def _map_to_domain(self, model: ProductModel) -> Product:
        return Product.reconstitute(
            id=model.id,
            productname=model.productname,
            description=model.description,
            price=model.price,
            stock=model.stock,
            images=list(model.images or []),
            created_at=ensure_tz_aware(model.created_at),
            updated_at=ensure_tz_aware(model.updated_at),
        )

    def _map_to_model(self, product: Product) -> ProductModel:
        return ProductModel(
            id=product.id,
            productname=product.productname,
            description=product.description,
            price=product.price,
            stock=product.stock,
            images=product.images,
            created_at=product.created_at,
            updated_at=product.updated_at,
        )

    def _update_model(self, model: ProductModel, product: Product) -> None:
        model.productname = product.productname
        model.description = product.description
        model.price = product.price
        model.stock = product.stock
        model.images = product.images
        model.updated_at = product.updated_at
