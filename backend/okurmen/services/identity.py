from __future__ import annotations
import logging
from typing import Optional, Tuple, Union

from ..enums import Role
from ..errors import Conflict, Forbidden, Unauthenticated, ValidationFailed
from ..models import Admin, User
from ..schemas import AdminIdentity, UserIdentity
from ..security import hash_password, issue_token, verify_password, verify_token
from ..stores import CredentialStore


logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Неверные учетные данные"
ADMIN_CANNOT_TAKE_TEST = "Админ тест тапшыра албайт"

IdentityT = Union[UserIdentity, AdminIdentity]


def user_identity(row: User) -> UserIdentity:
	return UserIdentity(id=row.id, full_name=row.full_name, phone_number=row.phone_number, age=row.age)


def admin_identity(row: Admin) -> AdminIdentity:
	return AdminIdentity(id=row.id, email=row.email)


def authenticate(credentials: CredentialStore, token: Optional[str]) -> IdentityT:
	"""Resolve a bearer token into the identity it was issued for.

	A token whose subject no longer exists is treated like an invalid token.
	"""
	if not token:
		raise Unauthenticated("No token provided")
	claims = verify_token(token)
	if claims.role is Role.ADMIN:
		admin = credentials.get_admin(claims.subject_id)
		if admin is None:
			raise Unauthenticated()
		return admin_identity(admin)
	user = credentials.get_user(claims.subject_id)
	if user is None:
		raise Unauthenticated()
	return user_identity(user)


def require_role(identity: IdentityT, role: Role, message: Optional[str] = None) -> None:
	if identity.role != Role(role).value:
		raise Forbidden(message or "Access denied")


def _clean(value: Optional[str]) -> str:
	return (value or "").strip()


def _parse_age(value) -> int:
	if value is None or (isinstance(value, str) and not value.strip()):
		raise ValidationFailed("Age is required")
	if isinstance(value, bool):
		raise ValidationFailed("Age must be a valid number between 1 and 150")
	try:
		age = int(str(value).strip())
	except ValueError:
		raise ValidationFailed("Age must be a valid number between 1 and 150") from None
	if age < 1 or age > 150:
		raise ValidationFailed("Age must be a valid number between 1 and 150")
	return age


def register_user(credentials: CredentialStore, full_name: Optional[str], phone_number: Optional[str], age) -> Tuple[User, str]:
	full_name = _clean(full_name)
	phone_number = _clean(phone_number)
	if not full_name:
		raise ValidationFailed("Full name is required")
	if len(full_name) > 255:
		raise ValidationFailed("Full name cannot exceed 255 characters")
	if not phone_number:
		raise ValidationFailed("Phone number is required")
	age_value = _parse_age(age)

	logger.info("Registration attempt for phone %s", phone_number)
	if credentials.find_user_by_phone(phone_number) is not None:
		logger.info("Registration rejected, phone %s already registered", phone_number)
		raise Conflict("Пользователь уже существует")
	user = credentials.create_user(full_name, phone_number, age_value)
	logger.info("User %s registered", user.id)
	return user, issue_token(user.id, Role.USER)


def login_user(credentials: CredentialStore, phone_number: Optional[str]) -> Tuple[User, str]:
	phone_number = _clean(phone_number)
	if not phone_number:
		raise ValidationFailed("Phone number is required")
	user = credentials.find_user_by_phone(phone_number)
	if user is None:
		logger.info("Login failed for phone %s", phone_number)
		raise ValidationFailed(INVALID_CREDENTIALS)
	logger.info("User %s logged in", user.id)
	return user, issue_token(user.id, Role.USER)


def login_admin(credentials: CredentialStore, email: str, password: str) -> Tuple[Admin, str]:
	admin = credentials.find_admin_by_email(_clean(email))
	if admin is None or not verify_password(password or "", admin.password_hash):
		logger.info("Admin login failed for %s", _clean(email))
		raise ValidationFailed(INVALID_CREDENTIALS)
	return admin, issue_token(admin.id, Role.ADMIN)


def ensure_admin(credentials: CredentialStore, email: str, password: str) -> Admin:
	"""Create the admin account unless one with this email already exists."""
	email = _clean(email)
	if not email or not password:
		raise ValidationFailed("email and password are required")
	existing = credentials.find_admin_by_email(email)
	if existing is not None:
		return existing
	admin = credentials.create_admin(email, hash_password(password))
	logger.info("Admin %s created", email)
	return admin
