from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Generic, List, Sequence, Tuple, TypeVar

from django.core.paginator import EmptyPage, Paginator

T = TypeVar("T")
U = TypeVar("U")

ASC = "ASC"
DESC = "DESC"


@dataclass(frozen=True)
class SortOrder:
    # ``property`` is the model field name, already translated from the wire name
    property: str
    direction: str = ASC

    @property
    def ordering(self) -> str:
        return f"-{self.property}" if self.direction == DESC else self.property


@dataclass(frozen=True)
class PageRequest:
    page: int = 0
    size: int = 20
    sort: Tuple[SortOrder, ...] = ()

    def __post_init__(self):
        if self.page < 0:
            raise ValueError("page index must not be negative")
        if self.size < 1:
            raise ValueError("page size must be at least 1")

    def ordering(self) -> List[str]:
        """Django ``order_by`` arguments, always ending with an ``id`` tie-breaker."""
        fields = [order.ordering for order in self.sort]
        if not any(order.property in ("id", "pk") for order in self.sort):
            fields.append("id")
        return fields


@dataclass
class Page(Generic[T]):
    content: List[T]
    number: int
    size: int
    total_elements: int
    total_pages: int
    sort: Sequence[SortOrder] = field(default_factory=tuple)

    @classmethod
    def of(cls, object_list, request: PageRequest) -> "Page[T]":
        """Slice ``object_list`` (a queryset or sequence) with Django's ``Paginator``.

        ``request.page`` is zero-based; a page past the end comes back empty.
        """
        paginator = Paginator(object_list, request.size)
        try:
            content = list(paginator.page(request.page + 1).object_list)
        except EmptyPage:
            content = []
        total = paginator.count
        return cls(
            content=content,
            number=request.page,
            size=request.size,
            total_elements=total,
            # Paginator reports one (empty) page for an empty result set
            total_pages=paginator.num_pages if total else 0,
            sort=request.sort,
        )

    @property
    def number_of_elements(self) -> int:
        return len(self.content)

    @property
    def first(self) -> bool:
        return self.number == 0

    @property
    def last(self) -> bool:
        return self.number + 1 >= self.total_pages

    @property
    def empty(self) -> bool:
        return not self.content

    def map(self, fn: Callable[[T], U]) -> "Page[U]":
        return Page(
            content=[fn(item) for item in self.content],
            number=self.number,
            size=self.size,
            total_elements=self.total_elements,
            total_pages=self.total_pages,
            sort=self.sort,
        )
