"""Argon2id password hashing.

Every call to ``hash_password`` draws a fresh random salt, so hashing the same
password twice yields two different encoded strings. Verification is delegated
to argon2, which compares digests in constant time.
"""

from functools import cache

from argon2 import PasswordHasher, Type
from argon2.exceptions import InvalidHashError, VerificationError

from notebox.errors import ValidationError

# 19 MiB, 2 iterations: the OWASP baseline for argon2id
_hasher = PasswordHasher(time_cost=2, memory_cost=19456, parallelism=1, type=Type.ID)


def hash_password(password: str) -> str:
    """Hash a password, raising ValidationError for an empty one."""
    if not password:
        raise ValidationError("Password cannot be empty")
    return _hasher.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    """Check a password against an encoded hash. Never raises on mismatch or a malformed hash."""
    try:
        return _hasher.verify(password_hash, password)
    except (VerificationError, InvalidHashError):
        return False


@cache
def dummy_password_hash() -> str:
    """Hash used to burn the same verification time when no user matches."""
    return _hasher.hash("notebox-dummy-password")
