from typing import Iterable, Optional

from apps.common.repository import GenericRepository
from .models import Role, User


class RoleRepository(GenericRepository[Role]):
    def __init__(self):
        super().__init__(Role)

    def find_by_authority(self, authority: str) -> Optional[Role]:
        return self.model.objects.filter(authority=authority).first()


class UserRepository(GenericRepository[User]):
    def __init__(self):
        super().__init__(User)

    def queryset(self):
        return self.model.objects.prefetch_related("roles")

    def email_exists(self, email: str, exclude_id: Optional[int] = None) -> bool:
        qs = self.model.objects.filter(email__iexact=email)
        if exclude_id is not None:
            qs = qs.exclude(pk=exclude_id)
        return qs.exists()

    def set_roles(self, user: User, roles: Iterable[Role]):
        user.roles.set(list(roles))
