"""Security utilities."""

from .jwt import (
    blacklist_token,
    create_access_token,
    decode_access_token,
    get_user_id_from_token,
)
from .password import burn_verification, hash_password, verify_password

__all__ = [
    "hash_password",
    "verify_password",
    "burn_verification",
    "create_access_token",
    "decode_access_token",
    "get_user_id_from_token",
    "blacklist_token",
]
