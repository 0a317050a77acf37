from storefront.domain.product.value_objects.product_filter import ProductFilter

__all__ = ["ProductFilter"]
