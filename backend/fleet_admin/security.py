"""Password hashing and bearer token helpers."""

import hashlib
import hmac
import secrets
from typing import Optional

from fleet_admin.config import get_settings

ALGORITHM = "pbkdf2_sha256"
SALT_BYTES = 16
TOKEN_BYTES = 32


def hash_password(password: str, iterations: Optional[int] = None) -> str:
    if iterations is None:
        iterations = get_settings().password_hash_iterations
    salt = secrets.token_hex(SALT_BYTES)
    digest = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt.encode("utf-8"), iterations)
    return f"{ALGORITHM}${iterations}${salt}${digest.hex()}"


def verify_password(password: str, password_hash: str) -> bool:
    try:
        algorithm, iterations, salt, expected = password_hash.split("$")
        iterations = int(iterations)
    except ValueError:
        return False
    if algorithm != ALGORITHM:
        return False
    digest = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt.encode("utf-8"), iterations)
    return hmac.compare_digest(digest.hex(), expected)


def generate_token() -> str:
    return secrets.token_urlsafe(TOKEN_BYTES)


def hash_token(token: str) -> str:
    """Sessions store only the sha256 of the bearer token."""
    return hashlib.sha256(token.encode("utf-8")).hexdigest()
