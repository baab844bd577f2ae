from typing import Any, Iterable, List, Mapping

from .dtos import CategoryDTO, ProductDTO
from .models import Category, Product


class CategoryMapper:
    @staticmethod
    def to_dto(cat: Category) -> CategoryDTO:
        return CategoryDTO(id=cat.id, name=cat.name)

    @staticmethod
    def many_to_dto(categories: Iterable[Category]) -> List[CategoryDTO]:
        return [CategoryMapper.to_dto(c) for c in categories]

    @staticmethod
    def from_payload(data: Mapping[str, Any]) -> CategoryDTO:
        return CategoryDTO(id=None, name=data["name"])

    @staticmethod
    def copy_to_entity(dto: CategoryDTO, cat: Category) -> Category:
        # id is store-assigned and never copied from a DTO
        cat.name = dto.name
        return cat


class ProductMapper:
    @staticmethod
    def to_dto(product: Product) -> ProductDTO:
        return ProductDTO(
            id=product.id,
            name=product.name,
            description=product.description,
            price=product.price,
            img_url=product.img_url,
            date=product.date,
            categories=CategoryMapper.many_to_dto(product.categories.all()),
        )

    @staticmethod
    def many_to_dto(products: Iterable[Product]) -> List[ProductDTO]:
        return [ProductMapper.to_dto(p) for p in products]

    @staticmethod
    def copy_to_entity(dto: ProductDTO, product: Product) -> Product:
        """Copy scalar fields; categories are resolved and linked by the service."""
        product.name = dto.name
        product.description = dto.description
        product.price = dto.price
        product.img_url = dto.img_url or ""
        if dto.date is not None:
            product.date = dto.date
        return product

    @staticmethod
    def from_payload(data: Mapping[str, Any]) -> ProductDTO:
        """Build a DTO from validated request data; any client id is dropped."""
        return ProductDTO(
            id=None,
            name=data["name"],
            description=data["description"],
            price=data["price"],
            img_url=data.get("img_url") or "",
            date=data.get("date"),
            categories=[
                CategoryDTO(id=ref["id"], name=ref.get("name", ""))
                for ref in data.get("categories") or []
            ],
        )
