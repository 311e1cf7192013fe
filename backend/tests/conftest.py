import sys
from pathlib import Path
from typing import Optional
from uuid import uuid4

import pytest
import pytest_asyncio
from argon2 import PasswordHasher
from httpx import ASGITransport, AsyncClient

# Ensure backend package is importable when tests run from repo root
BACKEND_ROOT = Path(__file__).resolve().parents[1]
if str(BACKEND_ROOT) not in sys.path:
	sys.path.insert(0, str(BACKEND_ROOT))

from srecconnect.domain.container import build_container
from srecconnect.domain.identity.models import Role
from srecconnect.main import create_app
from srecconnect.settings import settings

# Cheap parameters so registration/login tests stay fast.
FAST_HASHER = PasswordHasher(time_cost=1, memory_cost=8, parallelism=1, hash_len=16, salt_len=8)
DEFAULT_PASSWORD = "secret123"


class RecordingMailer:
	def __init__(self) -> None:
		self.sent: list[tuple[str, str]] = []

	async def send_verification(self, email: str, token: str) -> None:
		self.sent.append((email, token))

	def last_token_for(self, email: str) -> Optional[str]:
		for sent_to, token in reversed(self.sent):
			if sent_to == email:
				return token
		return None


@pytest.fixture
def test_settings():
	return settings.model_copy(
		update={
			"secret_key": "test-secret",
			"environment": "test",
			"allowed_email_domain": "srec.ac.in",
			"seed_default_clubs": True,
		}
	)


@pytest.fixture
def mailer():
	return RecordingMailer()


@pytest.fixture
def container(test_settings, mailer):
	return build_container(test_settings, mailer=mailer, hasher=FAST_HASHER)


@pytest.fixture
def store(container):
	return container.store


@pytest.fixture
def make_user(container):
	"""Create a user directly in the store and return (user, auth headers)."""

	def _make(role: Role = Role.STUDENT, *, name: str = "Test User", email: Optional[str] = None, verified: bool = True):
		user = container.store.create_user(
			name=name,
			email=email or f"user-{uuid4().hex[:8]}@srec.ac.in",
			password_hash=FAST_HASHER.hash(DEFAULT_PASSWORD),
			role=role,
			is_verified=verified,
		)
		token = container.credentials.issue_session(user.id)
		return user, {"Authorization": f"Bearer {token}"}

	return _make


@pytest_asyncio.fixture
async def api_client(container):
	app = create_app(container)
	transport = ASGITransport(app=app)
	async with AsyncClient(transport=transport, base_url="http://testserver") as client:
		yield client
