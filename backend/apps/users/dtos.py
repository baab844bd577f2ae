from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class RoleDTO:
    id: Optional[int]
    authority: str = ""


@dataclass
class UserDTO:
    id: Optional[int]
    first_name: str
    last_name: str
    email: str
    roles: List[RoleDTO] = field(default_factory=list)


@dataclass
class UserInsertDTO(UserDTO):
    # plaintext; only read by UserService.insert
    password: str = ""
