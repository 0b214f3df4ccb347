from __future__ import annotations
from typing import Any, Optional


class AppError(Exception):
	"""Base for every error that maps onto an HTTP response.

	The message is meant for the client; internal detail belongs in the log.
	"""

	status_code = 500
	default_message = "Server error"

	def __init__(self, message: Optional[str] = None, *, details: Any = None) -> None:
		self.message = message or self.default_message
		self.details = details
		super().__init__(self.message)

	def to_payload(self) -> dict:
		payload: dict = {"error": self.message}
		if self.details is not None:
			payload["details"] = self.details
		return payload


class ValidationFailed(AppError):
	status_code = 400
	default_message = "Invalid request"


class Unauthenticated(AppError):
	status_code = 401
	default_message = "Could not validate credentials"


class Forbidden(AppError):
	status_code = 403
	default_message = "Access denied"


class NotFound(AppError):
	status_code = 404
	default_message = "Not found"


class Conflict(AppError):
	status_code = 400
	default_message = "Already exists"


class AlreadySubmitted(Conflict):
	default_message = "Тест уже пройден для этого уровня"


class TimeExpired(AppError):
	status_code = 400
	default_message = "Время теста истекло"


class StoreUnavailable(AppError):
	status_code = 503
	default_message = "Service temporarily unavailable"


class Internal(AppError):
	status_code = 500
	default_message = "Server error"
