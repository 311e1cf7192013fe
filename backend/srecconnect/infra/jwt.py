"""JWT helpers for the credentials the API issues.

HS256 with the application's secret key. Every token carries the issuer and
an audience naming its credential class; decoding demands the audience the
caller expects, so a token minted for one purpose fails to decode for any
other.
"""

from __future__ import annotations

import time
from typing import Any, Dict, Iterable

import jwt
from jwt import InvalidTokenError

ISSUER = "srec-connect-api"


def encode(payload: Dict[str, Any], *, secret: str, audience: str, ttl_seconds: int) -> str:
	now = int(time.time())
	body: Dict[str, Any] = {"iss": ISSUER, "aud": audience, "iat": now, "exp": now + ttl_seconds}
	body.update(payload)
	return jwt.encode(body, secret, algorithm="HS256")


def decode(token: str, *, secret: str, audience: str, required: Iterable[str] = ()) -> Dict[str, Any]:
	"""Decode and validate a token for ``audience``.

	Raises jwt.InvalidTokenError subclasses on failure.
	"""
	options = {"require": ["exp", "iat", "iss", "aud"]}
	payload = jwt.decode(
		token,
		secret,
		algorithms=["HS256"],
		audience=audience,
		issuer=ISSUER,
		leeway=5,
		options=options,
	)
	for claim in required:
		if not payload.get(claim):
			raise InvalidTokenError(f"missing_claim:{claim}")
	return payload
