from __future__ import annotations

from typing import Iterable, List

from django.core.exceptions import ObjectDoesNotExist
from django.db import IntegrityError, transaction
from django.db.models import ProtectedError

from apps.api.exceptions import DatabaseIntegrityError, ResourceNotFoundError
from apps.common import get_logger
from apps.common.paging import Page, PageRequest
from .dtos import RoleDTO, UserDTO, UserInsertDTO
from .mappers import copy_dto_to_entity, user_to_dto
from .models import Role
from .protocols import RoleRepositoryProtocol, UserRepositoryProtocol

logger = get_logger(__name__).bind(component="users", layer="service")


class UserService:
    def __init__(self, users: UserRepositoryProtocol, roles: RoleRepositoryProtocol):
        self.users = users
        self.roles = roles
        self.logger = logger.bind(service="UserService")

    def find_all_paged(self, page_request: PageRequest) -> Page[UserDTO]:
        self.logger.debug(
            "Listing users", page=page_request.page, size=page_request.size
        )
        return self.users.find_all_paged(page_request).map(user_to_dto)

    def find_by_id(self, user_id: int) -> UserDTO:
        self.logger.debug("Fetching user", user_id=user_id)
        user = self.users.find_by_id(user_id)
        if user is None:
            self.logger.info("User not found", user_id=user_id)
            raise ResourceNotFoundError("User not found", details={"id": str(user_id)})
        return user_to_dto(user)

    def insert(self, dto: UserInsertDTO) -> UserDTO:
        self.logger.info("Creating user", email=dto.email)
        try:
            with transaction.atomic():
                self._ensure_email_available(dto.email)
                roles = self._resolve_roles(dto.roles)
                user = copy_dto_to_entity(dto, self.users.new())
                user.set_password(dto.password)
                user = self.users.save(user)
                self.users.set_roles(user, roles)
        except IntegrityError as exc:
            self.logger.warning(
                "User creation failed due to integrity error",
                email=dto.email,
                error=str(exc),
            )
            raise DatabaseIntegrityError(
                "Email already in use", details={"email": dto.email}
            )
        self.logger.info("User created", user_id=user.id)
        return user_to_dto(user)

    def update(self, user_id: int, dto: UserDTO) -> UserDTO:
        self.logger.info("Updating user", user_id=user_id)
        try:
            with transaction.atomic():
                user = self.users.find_by_id(user_id)
                if user is None:
                    self.logger.warning("User update failed: not found", user_id=user_id)
                    raise ResourceNotFoundError(
                        "User not found", details={"id": str(user_id)}
                    )
                self._ensure_email_available(dto.email, exclude_id=user_id)
                roles = self._resolve_roles(dto.roles)
                copy_dto_to_entity(dto, user)
                user = self.users.save(user)
                self.users.set_roles(user, roles)
        except IntegrityError as exc:
            self.logger.warning(
                "User update failed due to integrity error",
                user_id=user_id,
                error=str(exc),
            )
            raise DatabaseIntegrityError(
                "Email already in use", details={"email": dto.email}
            )
        self.logger.info("User updated", user_id=user_id)
        return user_to_dto(user)

    def delete(self, user_id: int) -> None:
        self.logger.info("Deleting user", user_id=user_id)
        try:
            with transaction.atomic():
                self.users.delete_by_id(user_id)
        except ObjectDoesNotExist:
            self.logger.warning("User deletion failed: not found", user_id=user_id)
            raise ResourceNotFoundError("User not found", details={"id": str(user_id)})
        except (ProtectedError, IntegrityError) as exc:
            self.logger.warning(
                "User deletion blocked by references", user_id=user_id, error=str(exc)
            )
            raise DatabaseIntegrityError(
                "Integrity violation", details={"id": str(user_id)}
            )
        self.logger.info("User deleted", user_id=user_id)

    def _ensure_email_available(self, email: str, exclude_id=None) -> None:
        if self.users.email_exists(email, exclude_id=exclude_id):
            self.logger.warning("Email already in use", email=email, user_id=exclude_id)
            raise DatabaseIntegrityError(
                "Email already in use", details={"email": email}
            )

    def _resolve_roles(self, refs: Iterable[RoleDTO]) -> List[Role]:
        resolved: List[Role] = []
        seen = set()
        for ref in refs or []:
            if ref.id in seen:
                continue
            role = self.roles.find_by_id(ref.id)
            if role is None:
                self.logger.warning("Referenced role not found", role_id=ref.id)
                raise ResourceNotFoundError(
                    "Role not found", details={"roleId": str(ref.id)}
                )
            seen.add(ref.id)
            resolved.append(role)
        return resolved
