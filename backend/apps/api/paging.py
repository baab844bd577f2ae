from typing import Mapping, Optional

from django.conf import settings
from rest_framework import serializers
from rest_framework.pagination import PageNumberPagination
from rest_framework.response import Response

from apps.common.paging import ASC, DESC, Page, PageRequest, SortOrder


def _default_size() -> int:
    return int(getattr(settings, "PAGE_SIZE_DEFAULT", 20))


def _max_size() -> int:
    return int(getattr(settings, "PAGE_SIZE_MAX", 100))


class PageQuerySerializer(serializers.Serializer):
    """Parses ``?page=&size=&sort=field,dir`` into a :class:`PageRequest`.

    ``sort_fields`` (passed through the serializer context) maps the wire name a
    client may sort by to the model field it orders on.
    """

    page = serializers.IntegerField(min_value=0, required=False, default=0)
    size = serializers.IntegerField(min_value=1, required=False)
    sort = serializers.ListField(child=serializers.CharField(), required=False)

    def validate_size(self, value):
        limit = _max_size()
        if value > limit:
            raise serializers.ValidationError(
                f"Ensure this value is less than or equal to {limit}."
            )
        return value

    def validate_sort(self, value):
        allowed: Mapping[str, str] = self.context.get("sort_fields", {})
        orders = []
        for raw in value:
            prop, _, direction = raw.partition(",")
            prop = prop.strip()
            direction = (direction.strip() or ASC).upper()
            if prop not in allowed:
                raise serializers.ValidationError(
                    f"Cannot sort by '{prop}'. Allowed: {', '.join(sorted(allowed))}"
                )
            if direction not in (ASC, DESC):
                raise serializers.ValidationError(
                    f"Sort direction must be ASC or DESC, got '{direction}'"
                )
            orders.append(SortOrder(allowed[prop], direction))
        return orders

    def to_page_request(self) -> PageRequest:
        data = self.validated_data
        return PageRequest(
            page=data.get("page", 0),
            size=data.get("size") or _default_size(),
            sort=tuple(data.get("sort") or ()),
        )


class PageRequestPagination(PageNumberPagination):
    """``PageNumberPagination`` speaking zero-based ``?page``, ``?size`` and ``?sort``.

    Subclasses set ``sort_fields`` (wire name -> model field). Views build a
    :class:`PageRequest` with :meth:`get_page_request`, hand the service's
    :class:`Page` to :meth:`paginate_page`, then serialize its content and call
    :meth:`get_paginated_response`.
    """

    page_query_param = "page"
    page_size_query_param = "size"
    sort_query_param = "sort"
    sort_fields: Mapping[str, str] = {}

    def __init__(self):
        self.page_size = _default_size()
        self.max_page_size = _max_size()
        self.result_page: Optional[Page] = None

    def get_page_request(self, request) -> PageRequest:
        """Raises ``ValidationError`` on a bad page, size or sort parameter."""
        query_params = request.query_params
        data = {}
        if self.page_query_param in query_params:
            data["page"] = query_params.get(self.page_query_param)
        if self.page_size_query_param in query_params:
            data["size"] = query_params.get(self.page_size_query_param)
        sort = [item for item in query_params.getlist(self.sort_query_param) if item]
        if sort:
            data["sort"] = sort
        serializer = PageQuerySerializer(
            data=data, context={"sort_fields": dict(self.sort_fields)}
        )
        serializer.is_valid(raise_exception=True)
        return serializer.to_page_request()

    def paginate_page(self, page: Page) -> list:
        self.result_page = page
        return page.content

    def get_paginated_response(self, data):
        page = self.result_page
        reverse_names = {field: wire for wire, field in self.sort_fields.items()}
        return Response(
            {
                "content": data,
                "totalElements": page.total_elements,
                "totalPages": page.total_pages,
                "number": page.number,
                "size": page.size,
                "numberOfElements": page.number_of_elements,
                "first": page.first,
                "last": page.last,
                "empty": page.empty,
                "sort": [
                    {
                        "property": reverse_names.get(order.property, order.property),
                        "direction": order.direction,
                    }
                    for order in page.sort
                ],
            }
        )
