# slatecms/services/passwords.py
# Hashing for user passwords and API key secrets. Swap algorithms by editing
# the CryptContext schemes; existing hashes keep verifying ("deprecated=auto").
from __future__ import annotations

from passlib.context import CryptContext

_pwd = CryptContext(
    schemes=["pbkdf2_sha256"],
    deprecated="auto",
)

# API key secrets
_secrets = CryptContext(
    schemes=["pbkdf2_sha256"],
    deprecated="auto",
)


def hash_password(plain: str) -> str:
    """Hash a plaintext password."""
    return _pwd.hash(plain)


def verify_password(plain: str, hashed: str) -> bool:
    """Verify a plaintext password against a stored hash."""
    if not hashed:
        return False
    return _pwd.verify(plain, hashed)


def hash_secret(plain: str) -> str:
    return _secrets.hash(plain)


def verify_secret(plain: str, hashed: str) -> bool:
    if not hashed or not plain:
        return False
    return _secrets.verify(plain, hashed)
