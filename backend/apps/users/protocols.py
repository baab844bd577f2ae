from __future__ import annotations

from typing import Iterable, List, Optional, Protocol, TYPE_CHECKING

if TYPE_CHECKING:
    from apps.common.paging import Page, PageRequest
    from apps.users.models import Role, User


class RoleRepositoryProtocol(Protocol):
    def find_all(self) -> List["Role"]: ...

    def find_by_id(self, pk: int) -> Optional["Role"]: ...


class UserRepositoryProtocol(Protocol):
    def new(self, **fields) -> "User": ...

    def find_all_paged(self, page_request: "PageRequest") -> "Page[User]": ...

    def find_by_id(self, pk: int) -> Optional["User"]: ...

    def email_exists(self, email: str, exclude_id: Optional[int] = None) -> bool: ...

    def save(self, user: "User") -> "User": ...

    def set_roles(self, user: "User", roles: Iterable["Role"]) -> None: ...

    def delete_by_id(self, pk: int) -> None: ...
