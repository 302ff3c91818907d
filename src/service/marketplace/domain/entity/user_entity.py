from enum import StrEnum

import attrs


class UserRole(StrEnum):
    FARMER = 'farmer'
    BUYER = 'buyer'
    ADMIN = 'admin'


@attrs.define(frozen=True)
class UserEntity:
    """Caller identity decoded from the upstream auth token (no local user table)."""

    id: int
    role: UserRole
    name: str = ''
    email: str = ''

    @property
    def is_farmer(self) -> bool:
        return self.role == UserRole.FARMER

    @property
    def is_buyer(self) -> bool:
        return self.role == UserRole.BUYER
