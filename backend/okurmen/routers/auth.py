from typing import Optional, Union

from fastapi import APIRouter, Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ..deps import get_credentials
from ..enums import Role
from ..schemas import AdminIdentity, AuthResponse, LoginRequest, RegisterRequest, UserIdentity, UserOut
from ..services import identity
from ..stores import CredentialStore

router = APIRouter(prefix="/auth", tags=["auth"])

bearer_scheme = HTTPBearer(auto_error=False)


def get_current_identity(
	creds: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
	credentials: CredentialStore = Depends(get_credentials),
) -> Union[UserIdentity, AdminIdentity]:
	token = creds.credentials if creds else None
	return identity.authenticate(credentials, token)


def require_user(current: Union[UserIdentity, AdminIdentity] = Depends(get_current_identity)) -> UserIdentity:
	identity.require_role(current, Role.USER, identity.ADMIN_CANNOT_TAKE_TEST)
	return current


def require_admin(current: Union[UserIdentity, AdminIdentity] = Depends(get_current_identity)) -> AdminIdentity:
	identity.require_role(current, Role.ADMIN, "Admin access required")
	return current


@router.post("/register", response_model=AuthResponse, status_code=201)
async def register(req: RegisterRequest, credentials: CredentialStore = Depends(get_credentials)):
	user, token = identity.register_user(credentials, req.full_name, req.phone_number, req.age)
	return AuthResponse(message="Registration successful", token=token, user=UserOut.model_validate(user))


@router.post("/login", response_model=AuthResponse)
async def login(req: LoginRequest, credentials: CredentialStore = Depends(get_credentials)):
	user, token = identity.login_user(credentials, req.phone_number)
	return AuthResponse(message="Login successful", token=token, user=UserOut.model_validate(user))


@router.get("/me", response_model=Union[UserIdentity, AdminIdentity])
async def me(current: Union[UserIdentity, AdminIdentity] = Depends(get_current_identity)):
	return current
