import pytest
from django.contrib.auth.hashers import check_password

from apps.users.models import Role, User
from apps.users.repositories import RoleRepository


@pytest.mark.django_db
def test_create_user_hashes_password_and_normalizes_domain():
    user = User.objects.create_user(
        "bob@GMAIL.COM", "secret1", first_name="Bob", last_name="Brown"
    )
    assert user.pk is not None
    assert user.email == "bob@gmail.com"
    assert user.password != "secret1"
    assert check_password("secret1", user.password)


def test_create_user_requires_email():
    with pytest.raises(ValueError):
        User.objects.create_user("", "secret1")


@pytest.mark.django_db
def test_find_by_authority():
    role = Role.objects.create(authority="ROLE_OPERATOR")
    repo = RoleRepository()
    assert repo.find_by_authority("ROLE_OPERATOR").pk == role.pk
    assert repo.find_by_authority("ROLE_MISSING") is None
