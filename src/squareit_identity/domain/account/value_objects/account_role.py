from enum import Enum


class AccountRole(str, Enum):
    """Roles an account can hold."""

    USER = "USER"
    ADMIN = "ADMIN"
    MASTER_ADMIN = "MASTER_ADMIN"
