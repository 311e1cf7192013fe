"""Password hashing backed by Argon2id.

Hashing and verification are CPU-bound, so the async helpers push them onto a
worker thread and the event loop keeps serving other requests meanwhile.
"""

from __future__ import annotations

import asyncio

from argon2 import PasswordHasher
from argon2 import exceptions as argon_exc

PASSWORD_HASHER = PasswordHasher(
	time_cost=3,
	memory_cost=65536,  # 64 MB in KB
	parallelism=4,
	hash_len=32,
	salt_len=16,
)


def hash_password(password: str, *, hasher: PasswordHasher = PASSWORD_HASHER) -> str:
	return hasher.hash(password)


def verify_password(hash: str, password: str, *, hasher: PasswordHasher = PASSWORD_HASHER) -> bool:
	"""Return True if ``password`` matches ``hash``."""
	try:
		return hasher.verify(hash, password)
	except (argon_exc.VerifyMismatchError, argon_exc.VerificationError, argon_exc.InvalidHashError):
		return False


async def hash_password_async(password: str, *, hasher: PasswordHasher = PASSWORD_HASHER) -> str:
	return await asyncio.to_thread(hash_password, password, hasher=hasher)


async def verify_password_async(hash: str, password: str, *, hasher: PasswordHasher = PASSWORD_HASHER) -> bool:
	return await asyncio.to_thread(verify_password, hash, password, hasher=hasher)
