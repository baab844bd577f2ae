from typing import Iterable, Optional

from apps.common.paging import Page, PageRequest
from apps.common.repository import GenericRepository
from .models import Category, Product


class CategoryRepository(GenericRepository[Category]):
    def __init__(self):
        super().__init__(Category)


class ProductRepository(GenericRepository[Product]):
    def __init__(self):
        super().__init__(Product)

    def queryset(self):
        """Products with categories prefetched to avoid N+1 during DTO mapping."""
        return self.model.objects.prefetch_related("categories")

    def find_all_paged(  # type: ignore[override]
        self,
        page_request: PageRequest,
        *,
        category_id: Optional[int] = None,
        name: Optional[str] = None,
    ) -> Page[Product]:
        qs = self.queryset()
        if category_id is not None:
            qs = qs.filter(categories__id=category_id).distinct()
        if name:
            qs = qs.filter(name__icontains=name)
        return super().find_all_paged(page_request, queryset=qs)

    def set_categories(self, product: Product, categories: Iterable[Category]):
        product.categories.set(list(categories))
