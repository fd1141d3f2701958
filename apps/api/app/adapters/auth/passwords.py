"""Salted adaptive password hashing."""

from passlib.context import CryptContext
from starlette.concurrency import run_in_threadpool

BCRYPT_ROUNDS = 10


class PasswordHasher:
    def __init__(self, *, rounds: int = BCRYPT_ROUNDS) -> None:
        self._context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)

    async def hash(self, password: str) -> str:
        if not password:
            raise ValueError("password_blank")
        return await run_in_threadpool(self._context.hash, password)

    async def verify(self, password: str, password_hash: str | None) -> bool:
        if not password or not password_hash:
            return False
        try:
            return await run_in_threadpool(self._context.verify, password, password_hash)
        except ValueError:
            # Unrecognised or corrupt hash.
            return False


__all__ = ["BCRYPT_ROUNDS", "PasswordHasher"]
