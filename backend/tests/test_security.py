import base64
import json
from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt
from pydantic import ValidationError

from okurmen.enums import Role
from okurmen.errors import Unauthenticated
from okurmen.security import hash_password, issue_token, verify_password, verify_token
from okurmen.settings import Settings


def _b64(data: dict) -> str:
	raw = json.dumps(data, separators=(",", ":")).encode()
	return base64.urlsafe_b64encode(raw).rstrip(b"=").decode()


def test_issued_token_verifies():
	claims = verify_token(issue_token(42, Role.USER))
	assert claims.subject_id == 42
	assert claims.role is Role.USER


def test_token_lifetime_is_seven_days():
	token = issue_token(1, Role.ADMIN)
	payload = jwt.get_unverified_claims(token)
	assert payload["exp"] - payload["iat"] == 7 * 24 * 60 * 60
	assert payload["role"] == "admin"


def test_tampered_payload_is_rejected():
	header, _, signature = issue_token(1, Role.USER).split(".")
	forged = f"{header}.{_b64({'sub': '1', 'role': 'admin', 'exp': 9999999999})}.{signature}"
	with pytest.raises(Unauthenticated):
		verify_token(forged)


def test_token_signed_with_other_key_is_rejected():
	token = jwt.encode({"sub": "1", "role": "user", "exp": 9999999999}, "another-secret", algorithm="HS256")
	with pytest.raises(Unauthenticated):
		verify_token(token)


def test_expired_token_is_rejected():
	issued_at = datetime.now(timezone.utc) - timedelta(days=8)
	token = issue_token(1, Role.USER, now=issued_at)
	with pytest.raises(Unauthenticated):
		verify_token(token)


@pytest.mark.parametrize("payload", [
	{"role": "user", "exp": 9999999999},
	{"sub": "abc", "role": "user", "exp": 9999999999},
	{"sub": "1", "role": "student", "exp": 9999999999},
])
def test_malformed_claims_are_rejected(payload):
	from okurmen.settings import settings
	token = jwt.encode(payload, settings.jwt_secret_key, algorithm="HS256")
	with pytest.raises(Unauthenticated) as info:
		verify_token(token)
	assert info.value.message == "Could not validate credentials"


def test_garbage_and_empty_tokens_are_rejected():
	for token in ("", "not-a-jwt", "a.b.c"):
		with pytest.raises(Unauthenticated):
			verify_token(token)


def test_password_hashing():
	hashed = hash_password("okurmen123")
	assert hashed != "okurmen123"
	assert verify_password("okurmen123", hashed)
	assert not verify_password("wrong", hashed)
	assert not verify_password("okurmen123", "not-a-hash")


def test_missing_signing_secret_is_fatal(monkeypatch):
	monkeypatch.delenv("JWT_SECRET_KEY", raising=False)
	with pytest.raises(ValidationError):
		Settings(_env_file=None)


def test_blank_signing_secret_is_fatal(monkeypatch):
	monkeypatch.setenv("JWT_SECRET_KEY", "   ")
	with pytest.raises(ValidationError):
		Settings(_env_file=None)
