from storefront.domain.product.aggregates.product import Product

__all__ = ["Product"]
