from __future__ import annotations

from typing import Iterable, List, Optional, Protocol, TYPE_CHECKING

if TYPE_CHECKING:
    from apps.catalog.models import Category, Product
    from apps.common.paging import Page, PageRequest


class CategoryRepositoryProtocol(Protocol):
    def new(self, **fields) -> "Category": ...

    def find_all(self) -> List["Category"]: ...

    def find_all_paged(self, page_request: "PageRequest") -> "Page[Category]": ...

    def find_by_id(self, pk: int) -> Optional["Category"]: ...

    def save(self, category: "Category") -> "Category": ...

    def delete_by_id(self, pk: int) -> None: ...


class ProductRepositoryProtocol(Protocol):
    def new(self, **fields) -> "Product": ...

    def find_all_paged(
        self,
        page_request: "PageRequest",
        *,
        category_id: Optional[int] = None,
        name: Optional[str] = None,
    ) -> "Page[Product]": ...

    def find_by_id(self, pk: int) -> Optional["Product"]: ...

    def save(self, product: "Product") -> "Product": ...

    def set_categories(
        self, product: "Product", categories: Iterable["Category"]
    ) -> None: ...

    def delete_by_id(self, pk: int) -> None: ...
