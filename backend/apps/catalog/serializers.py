from decimal import Decimal

from rest_framework import serializers


class CategorySerializer(serializers.Serializer):
    # 'id' is server-assigned; a client-supplied value is ignored on write.
    id = serializers.IntegerField(read_only=True)
    name = serializers.CharField(max_length=255)


class CategoryRefSerializer(serializers.Serializer):
    """Category summary nested in products; on write only ``id`` is used."""

    id = serializers.IntegerField(min_value=1)
    name = serializers.CharField(required=False, allow_blank=True)


class ProductSerializer(serializers.Serializer):
    id = serializers.IntegerField(read_only=True)
    name = serializers.CharField(max_length=255)
    description = serializers.CharField(allow_blank=True)
    price = serializers.DecimalField(
        max_digits=12, decimal_places=2, min_value=Decimal("0")
    )
    imgUrl = serializers.CharField(source="img_url", allow_blank=True, default="")
    date = serializers.DateTimeField(required=False, allow_null=True)
    categories = CategoryRefSerializer(many=True, default=list)


class ProductFilterSerializer(serializers.Serializer):
    categoryId = serializers.IntegerField(min_value=1, required=False)
    name = serializers.CharField(required=False, allow_blank=True)
