"""Password hashing utilities backed by passlib."""

from functools import lru_cache

from passlib.context import CryptContext

# bcrypt_sha256 pre-hashes with SHA-256 so passwords longer than bcrypt's
# 72-byte limit are not silently truncated.
pwd_context = CryptContext(schemes=["bcrypt_sha256"], deprecated="auto")


def hash_password(password: str) -> str:
    """Hash a password."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return pwd_context.verify(plain_password, hashed_password)


@lru_cache(maxsize=1)
def _dummy_hash() -> str:
    return pwd_context.hash("notevault-timing-equalizer")


def burn_verification(plain_password: str) -> bool:
    """Spend one hash verification and report failure.

    Used when the account does not exist, so unknown emails cost the same
    as wrong passwords.
    """
    pwd_context.verify(plain_password, _dummy_hash())
    return False
