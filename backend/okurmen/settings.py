from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator

class Settings(BaseSettings):
	# Auth configuration; the signing secret has no default so the process refuses to start without it
	jwt_secret_key: str = Field(validation_alias="JWT_SECRET_KEY")
	jwt_algorithm: str = Field(default="HS256", validation_alias="JWT_ALGORITHM")
	access_token_expire_days: int = Field(default=7, validation_alias="ACCESS_TOKEN_EXPIRE_DAYS")

	# Optional admin seeded at startup
	seed_admin_email: str | None = Field(default=None, validation_alias="SEED_ADMIN_EMAIL")
	seed_admin_password: str | None = Field(default=None, validation_alias="SEED_ADMIN_PASSWORD")

	# Database
	database_url: str | None = Field(default=None, validation_alias="DATABASE_URL")

	# Runtime
	environment: str = Field(default="development", validation_alias="ENVIRONMENT")
	log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
	# "*" (or "all") echoes any origin; otherwise a comma separated list
	allowed_origins: str = Field(default="*", validation_alias="ALLOWED_ORIGINS")

	# Test rules
	default_time_minutes: int = Field(default=20, validation_alias="DEFAULT_TIME_MINUTES")
	max_image_bytes: int = Field(default=5 * 1024 * 1024, validation_alias="MAX_IMAGE_BYTES")

	# pydantic-settings v2 style config
	model_config = SettingsConfigDict(env_file=".env", extra="ignore")

	@field_validator("jwt_secret_key")
	@classmethod
	def _secret_not_blank(cls, value: str) -> str:
		if not value or not value.strip():
			raise ValueError("JWT_SECRET_KEY must not be empty")
		return value

	def is_production(self) -> bool:
		return self.environment.lower() == "production"

	def cors_origins(self) -> list[str]:
		raw = (self.allowed_origins or "").strip()
		if not raw or raw in ("*", "all"):
			return ["*"]
		return [o.strip() for o in raw.split(",") if o.strip()]

settings = Settings()
