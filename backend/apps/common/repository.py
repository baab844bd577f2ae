from typing import Generic, List, Optional, Type, TypeVar

from django.db import models

from .paging import Page, PageRequest

T = TypeVar("T", bound=models.Model)


class GenericRepository(Generic[T]):
    """find_all / find_all_paged / find_by_id / save / delete_by_id over one model."""

    def __init__(self, model: Type[T]):
        self.model = model

    def queryset(self):
        return self.model.objects.all()

    def new(self, **fields) -> T:
        """Unsaved instance; becomes a row on :meth:`save`."""
        return self.model(**fields)

    def find_all(self) -> List[T]:
        return list(self.queryset().order_by("id"))

    def find_all_paged(self, page_request: PageRequest, queryset=None) -> Page[T]:
        qs = self.queryset() if queryset is None else queryset
        qs = qs.order_by(*page_request.ordering())
        return Page.of(qs, page_request)

    def find_by_id(self, pk) -> Optional[T]:
        return self.queryset().filter(pk=pk).first()

    def save(self, obj: T) -> T:
        obj.save()
        return obj

    def delete_by_id(self, pk) -> None:
        """Delete the row or raise ``DoesNotExist``.

        ``ProtectedError`` / ``IntegrityError`` propagate when other rows reference it.
        """
        obj = self.model.objects.filter(pk=pk).first()
        if obj is None:
            raise self.model.DoesNotExist(
                f"{self.model.__name__} with id {pk} does not exist"
            )
        obj.delete()
