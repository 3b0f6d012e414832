"""Password hashing backed by Passlib."""

from passlib.context import CryptContext


class PasslibHasher:
    """Hashes with pbkdf2_sha256; any verification error counts as a mismatch."""

    def __init__(self) -> None:
        self._context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")

    def hash(self, password: str) -> str:
        return self._context.hash(password)

    def verify(self, password: str, password_hash: str) -> bool:
        try:
            return self._context.verify(password, password_hash)
        except (ValueError, TypeError):
            return False
