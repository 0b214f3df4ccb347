from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import OperationalError

from .db import SessionLocal, check_health, init_db
from .errors import AppError, StoreUnavailable
from .services.identity import ensure_admin
from .settings import settings
from .stores import CredentialStore
from .routers import admin, auth, health, questions, test

logging.basicConfig(
	level=getattr(logging, settings.log_level.upper(), logging.INFO),
	format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def _seed_admin() -> None:
	email = settings.seed_admin_email
	password = settings.seed_admin_password
	if not email or not password:
		return
	db = SessionLocal()
	try:
		ensure_admin(CredentialStore(db), email, password)
	finally:
		db.close()


@asynccontextmanager
async def lifespan(app: FastAPI):
	logger.info("Starting Okurmen placement API (%s)", settings.environment)
	if not check_health():
		if settings.is_production():
			raise RuntimeError("Database is unreachable; refusing to start in production")
		logger.warning("Database is unreachable; continuing in %s mode", settings.environment)
	else:
		init_db()
		_seed_admin()
		logger.info("Database initialized")
	yield
	logger.info("Shutdown complete")


app = FastAPI(title="Okurmen Placement API", lifespan=lifespan)

origins = settings.cors_origins()
app.add_middleware(
	CORSMiddleware,
	allow_origins=origins if origins != ["*"] else [],
	# Echo any origin back so credentialed requests still work with "*"
	allow_origin_regex=".*" if origins == ["*"] else None,
	allow_credentials=True,
	allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
	allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(auth.router)
app.include_router(test.router)
app.include_router(admin.router)
app.include_router(questions.router)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
	return JSONResponse(status_code=exc.status_code, content=exc.to_payload())


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
	details = [
		{"loc": list(err.get("loc", ())), "msg": err.get("msg", "")}
		for err in exc.errors()
	]
	return JSONResponse(
		status_code=status.HTTP_400_BAD_REQUEST,
		content={"error": "Validation error", "details": details},
	)


@app.exception_handler(OperationalError)
async def store_error_handler(request: Request, exc: OperationalError):
	logger.error("Database unavailable: %s", exc, exc_info=True)
	err = StoreUnavailable()
	return JSONResponse(status_code=err.status_code, content=err.to_payload())


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
	logger.error("Unhandled exception on %s %s", request.method, request.url.path, exc_info=True)
	return JSONResponse(
		status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
		content={"error": "Server error"},
	)

