from __future__ import annotations

from typing import Iterable, List, Optional

from django.core.exceptions import ObjectDoesNotExist
from django.db import IntegrityError, transaction
from django.db.models import ProtectedError

from apps.api.exceptions import DatabaseIntegrityError, ResourceNotFoundError
from apps.common import get_logger
from apps.common.paging import Page, PageRequest
from .dtos import CategoryDTO, ProductDTO
from .mappers import CategoryMapper, ProductMapper
from .models import Category
from .protocols import CategoryRepositoryProtocol, ProductRepositoryProtocol

logger = get_logger(__name__).bind(component="catalog", layer="service")


class CategoryService:
    def __init__(self, categories: CategoryRepositoryProtocol):
        self.categories = categories
        self.logger = logger.bind(service="CategoryService")

    def find_all(self) -> List[CategoryDTO]:
        self.logger.debug("Listing all categories")
        return CategoryMapper.many_to_dto(self.categories.find_all())

    def find_all_paged(self, page_request: PageRequest) -> Page[CategoryDTO]:
        self.logger.debug(
            "Listing categories", page=page_request.page, size=page_request.size
        )
        return self.categories.find_all_paged(page_request).map(CategoryMapper.to_dto)

    def find_by_id(self, category_id: int) -> CategoryDTO:
        self.logger.debug("Fetching category", category_id=category_id)
        category = self.categories.find_by_id(category_id)
        if category is None:
            self.logger.info("Category not found", category_id=category_id)
            raise ResourceNotFoundError(
                "Category not found", details={"id": str(category_id)}
            )
        return CategoryMapper.to_dto(category)

    def insert(self, dto: CategoryDTO) -> CategoryDTO:
        self.logger.info("Creating category", name=dto.name)
        with transaction.atomic():
            category = CategoryMapper.copy_to_entity(dto, self.categories.new())
            category = self.categories.save(category)
        self.logger.info("Category created", category_id=category.id)
        return CategoryMapper.to_dto(category)

    def update(self, category_id: int, dto: CategoryDTO) -> CategoryDTO:
        self.logger.info("Updating category", category_id=category_id)
        with transaction.atomic():
            category = self.categories.find_by_id(category_id)
            if category is None:
                self.logger.warning(
                    "Category update failed: not found", category_id=category_id
                )
                raise ResourceNotFoundError(
                    "Category not found", details={"id": str(category_id)}
                )
            CategoryMapper.copy_to_entity(dto, category)
            category = self.categories.save(category)
        self.logger.info("Category updated", category_id=category_id)
        return CategoryMapper.to_dto(category)

    def delete(self, category_id: int) -> None:
        self.logger.info("Deleting category", category_id=category_id)
        try:
            with transaction.atomic():
                self.categories.delete_by_id(category_id)
        except ObjectDoesNotExist:
            self.logger.warning(
                "Category deletion failed: not found", category_id=category_id
            )
            raise ResourceNotFoundError(
                "Category not found", details={"id": str(category_id)}
            )
        except (ProtectedError, IntegrityError) as exc:
            self.logger.warning(
                "Category deletion blocked by references",
                category_id=category_id,
                error=str(exc),
            )
            raise DatabaseIntegrityError(
                "Integrity violation: category is referenced by products",
                details={"id": str(category_id)},
            )
        self.logger.info("Category deleted", category_id=category_id)


class ProductService:
    def __init__(
        self,
        products: ProductRepositoryProtocol,
        categories: CategoryRepositoryProtocol,
    ):
        self.products = products
        self.categories = categories
        self.logger = logger.bind(service="ProductService")

    def find_all_paged(
        self,
        page_request: PageRequest,
        *,
        category_id: Optional[int] = None,
        name: Optional[str] = None,
    ) -> Page[ProductDTO]:
        self.logger.debug(
            "Listing products",
            page=page_request.page,
            size=page_request.size,
            category_id=category_id,
            name=name or None,
        )
        page = self.products.find_all_paged(
            page_request, category_id=category_id, name=name
        )
        return page.map(ProductMapper.to_dto)

    def find_by_id(self, product_id: int) -> ProductDTO:
        self.logger.debug("Fetching product", product_id=product_id)
        product = self.products.find_by_id(product_id)
        if product is None:
            self.logger.info("Product not found", product_id=product_id)
            raise ResourceNotFoundError(
                "Product not found", details={"id": str(product_id)}
            )
        return ProductMapper.to_dto(product)

    def insert(self, dto: ProductDTO) -> ProductDTO:
        self.logger.info("Creating product", name=dto.name)
        with transaction.atomic():
            categories = self._resolve_categories(dto.categories)
            product = ProductMapper.copy_to_entity(dto, self.products.new())
            product = self.products.save(product)
            self.products.set_categories(product, categories)
        self.logger.info("Product created", product_id=product.id)
        return ProductMapper.to_dto(product)

    def update(self, product_id: int, dto: ProductDTO) -> ProductDTO:
        self.logger.info("Updating product", product_id=product_id)
        with transaction.atomic():
            product = self.products.find_by_id(product_id)
            if product is None:
                self.logger.warning(
                    "Product update failed: not found", product_id=product_id
                )
                raise ResourceNotFoundError(
                    "Product not found", details={"id": str(product_id)}
                )
            categories = self._resolve_categories(dto.categories)
            ProductMapper.copy_to_entity(dto, product)
            product = self.products.save(product)
            self.products.set_categories(product, categories)
        self.logger.info("Product updated", product_id=product_id)
        return ProductMapper.to_dto(product)

    def delete(self, product_id: int) -> None:
        self.logger.info("Deleting product", product_id=product_id)
        try:
            with transaction.atomic():
                self.products.delete_by_id(product_id)
        except ObjectDoesNotExist:
            self.logger.warning(
                "Product deletion failed: not found", product_id=product_id
            )
            raise ResourceNotFoundError(
                "Product not found", details={"id": str(product_id)}
            )
        except (ProtectedError, IntegrityError) as exc:
            self.logger.warning(
                "Product deletion blocked by references",
                product_id=product_id,
                error=str(exc),
            )
            raise DatabaseIntegrityError(
                "Integrity violation", details={"id": str(product_id)}
            )
        self.logger.info("Product deleted", product_id=product_id)

    def _resolve_categories(self, refs: Iterable[CategoryDTO]) -> List[Category]:
        resolved: List[Category] = []
        seen = set()
        for ref in refs or []:
            if ref.id in seen:
                continue
            category = self.categories.find_by_id(ref.id)
            if category is None:
                self.logger.warning("Referenced category not found", category_id=ref.id)
                raise ResourceNotFoundError(
                    "Category not found", details={"categoryId": str(ref.id)}
                )
            seen.add(ref.id)
            resolved.append(category)
        return resolved
