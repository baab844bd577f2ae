from apps.api.paging import PageRequestPagination


class CategoryPagination(PageRequestPagination):
    sort_fields = {"id": "id", "name": "name"}


class ProductPagination(PageRequestPagination):
    sort_fields = {"id": "id", "name": "name", "price": "price", "date": "date"}
