"""Salted password hashing for the admins table."""

from passlib.context import CryptContext

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def hash_password(password: str) -> str:
    """Return a salted hash suitable for ``admins.password_hash``.

    Raises:
        ValueError: If the password is empty
    """
    if not password:
        raise ValueError("Admin password must not be empty")
    return pwd_context.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    """Check a plaintext password against a stored hash.

    Values that are not recognised hashes (for example a plaintext password
    left over from an older seed) never verify.
    """
    if not password or not is_password_hash(password_hash):
        return False
    return pwd_context.verify(password, password_hash)


def is_password_hash(value: str | None) -> bool:
    """Return True when ``value`` is a hash produced by a known scheme."""
    if not value:
        return False
    return pwd_context.identify(value) is not None
