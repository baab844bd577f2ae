from rest_framework import serializers

from .validators import validate_password


class RoleSerializer(serializers.Serializer):
    """Role reference; on write only ``id`` is used."""

    id = serializers.IntegerField(min_value=1)
    authority = serializers.CharField(required=False, allow_blank=True)


class UserSerializer(serializers.Serializer):
    id = serializers.IntegerField(read_only=True)
    firstName = serializers.CharField(source="first_name", max_length=150)
    lastName = serializers.CharField(source="last_name", max_length=150)
    email = serializers.EmailField(max_length=254)
    roles = RoleSerializer(many=True, default=list)


class UserInsertSerializer(UserSerializer):
    password = serializers.CharField(
        write_only=True, trim_whitespace=False, validators=[validate_password]
    )
