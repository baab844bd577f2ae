from rest_framework import serializers


def validate_password(value: str) -> str:
    """
    Ensures that the password meets the complexity requirements:
    - minimum length of 6 characters
    - at least one letter
    - at least one number
    """
    if value is None:
        raise serializers.ValidationError("Password is required.")
    if len(value) < 6:
        raise serializers.ValidationError(
            "Password must be at least 6 characters long."
        )
    if not any(ch.isalpha() for ch in value):
        raise serializers.ValidationError(
            "Password must include at least one letter."
        )
    if not any(ch.isdigit() for ch in value):
        raise serializers.ValidationError(
            "Password must include at least one number."
        )
    return value
