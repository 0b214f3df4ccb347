from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional
import logging

from jose import JWTError, jwt
from passlib.context import CryptContext

from .enums import Role
from .errors import Unauthenticated
from .settings import settings


logger = logging.getLogger(__name__)

logging.getLogger('passlib').setLevel(logging.ERROR)
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


@dataclass(frozen=True)
class TokenClaims:
	subject_id: int
	role: Role


def hash_password(password: str) -> str:
	# bcrypt only looks at the first 72 bytes
	password_bytes = password.encode('utf-8')
	if len(password_bytes) > 72:
		password = password_bytes[:72].decode('utf-8', errors='ignore')
	return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
	password_bytes = plain_password.encode('utf-8')
	if len(password_bytes) > 72:
		plain_password = password_bytes[:72].decode('utf-8', errors='ignore')
	try:
		return pwd_context.verify(plain_password, hashed_password)
	except (ValueError, TypeError):
		# Malformed stored hash
		return False


def _resolve_expiry(now: datetime, expires_delta: Optional[timedelta]) -> datetime:
	delta = expires_delta
	if delta is None:
		days = settings.access_token_expire_days
		delta = timedelta(days=days if days > 0 else 7)
	try:
		return now + delta
	except OverflowError:
		return datetime.max.replace(tzinfo=timezone.utc)


def issue_token(subject_id: int, role: Role, expires_delta: Optional[timedelta] = None, *, now: Optional[datetime] = None) -> str:
	now = now or datetime.now(timezone.utc)
	expire = _resolve_expiry(now, expires_delta)
	payload = {
		"sub": str(subject_id),
		"role": Role(role).value,
		"iat": int(now.timestamp()),
		"exp": int(expire.timestamp()),
	}
	return jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def verify_token(token: str) -> TokenClaims:
	"""Decode and validate a token issued by :func:`issue_token`.

	Signature, expiry and payload shape failures all surface as the same
	``Unauthenticated`` error so callers learn nothing about which check failed.
	"""
	if not token:
		raise Unauthenticated()
	try:
		payload = jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
	except JWTError as exc:
		logger.debug("Token rejected: %s", exc)
		raise Unauthenticated() from None
	sub = payload.get("sub")
	role = payload.get("role")
	try:
		return TokenClaims(subject_id=int(sub), role=Role(role))
	except (TypeError, ValueError):
		logger.debug("Token rejected: malformed payload")
		raise Unauthenticated() from None
