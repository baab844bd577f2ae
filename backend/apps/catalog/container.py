from __future__ import annotations

from .repositories import CategoryRepository, ProductRepository
from .services import CategoryService, ProductService


def build_category_service() -> CategoryService:
    return CategoryService(categories=CategoryRepository())


def build_product_service() -> ProductService:
    return ProductService(
        products=ProductRepository(),
        categories=CategoryRepository(),
    )
