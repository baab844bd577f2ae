from typing import Any, List, Mapping

from .dtos import RoleDTO, UserDTO, UserInsertDTO
from .models import Role, User


def role_to_dto(role: Role) -> RoleDTO:
    return RoleDTO(id=role.id, authority=role.authority)


def user_to_dto(user: User) -> UserDTO:
    return UserDTO(
        id=user.id,
        first_name=user.first_name,
        last_name=user.last_name,
        email=user.email,
        roles=[role_to_dto(r) for r in user.roles.all()],
    )


def copy_dto_to_entity(dto: UserDTO, user: User) -> User:
    """Copy profile fields. Password and roles are handled by the service."""
    user.first_name = dto.first_name
    user.last_name = dto.last_name
    user.email = dto.email
    return user


def _role_refs(data: Mapping[str, Any]) -> List[RoleDTO]:
    return [
        RoleDTO(id=ref["id"], authority=ref.get("authority", ""))
        for ref in data.get("roles") or []
    ]


def user_from_payload(data: Mapping[str, Any]) -> UserDTO:
    return UserDTO(
        id=None,
        first_name=data["first_name"],
        last_name=data["last_name"],
        email=data["email"],
        roles=_role_refs(data),
    )


def user_insert_from_payload(data: Mapping[str, Any]) -> UserInsertDTO:
    return UserInsertDTO(
        id=None,
        first_name=data["first_name"],
        last_name=data["last_name"],
        email=data["email"],
        roles=_role_refs(data),
        password=data["password"],
    )
