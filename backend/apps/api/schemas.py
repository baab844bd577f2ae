from drf_spectacular.utils import OpenApiParameter, inline_serializer
from rest_framework import serializers


class ErrorDetailSerializer(serializers.Serializer):
    code = serializers.CharField()
    message = serializers.CharField()
    status = serializers.IntegerField()
    details = serializers.JSONField(required=False)


class ErrorResponseSerializer(serializers.Serializer):
    error = ErrorDetailSerializer()


def paged_response(
    item_serializer_class: type[serializers.Serializer],
) -> type[serializers.Serializer]:
    """Inline serializer describing a page of ``item_serializer_class`` items.

    Fields: content, totalElements, totalPages, number, size, numberOfElements,
    first, last, empty and sort.
    """
    name = getattr(item_serializer_class, "__name__", "Items")
    return inline_serializer(
        name=f"Page{name}",
        fields={
            "content": item_serializer_class(many=True),
            "totalElements": serializers.IntegerField(),
            "totalPages": serializers.IntegerField(),
            "number": serializers.IntegerField(),
            "size": serializers.IntegerField(),
            "numberOfElements": serializers.IntegerField(),
            "first": serializers.BooleanField(),
            "last": serializers.BooleanField(),
            "empty": serializers.BooleanField(),
            "sort": inline_serializer(
                name="SortOrder",
                fields={
                    "property": serializers.CharField(),
                    "direction": serializers.ChoiceField(choices=["ASC", "DESC"]),
                },
                many=True,
            ),
        },
    )


def paging_parameters(sort_fields) -> list:
    allowed = ", ".join(sorted(sort_fields))
    return [
        OpenApiParameter("page", int, description="Zero-based page index"),
        OpenApiParameter("size", int, description="Page size"),
        OpenApiParameter(
            "sort",
            str,
            many=True,
            description=f"field[,asc|desc]; repeatable. Fields: {allowed}",
        ),
    ]
