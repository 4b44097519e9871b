"""Password hashing.

Hashes are produced and checked through a passlib `CryptContext`, so the
scheme can be rotated later by adding it to `schemes` and marking the old
one deprecated.
"""

from passlib.context import CryptContext

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, hashed_password: str | None) -> bool:
    if not password or not hashed_password:
        return False
    return pwd_context.verify(password, hashed_password)
