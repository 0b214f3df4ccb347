from __future__ import annotations
from datetime import datetime
from typing import Annotated, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .enums import Level, QuestionType, Tier


# ---- Identity ----

class UserIdentity(BaseModel):
	role: Literal["user"] = "user"
	id: int
	full_name: str
	phone_number: str
	age: int


class AdminIdentity(BaseModel):
	role: Literal["admin"] = "admin"
	id: int
	email: str


Identity = Annotated[Union[UserIdentity, AdminIdentity], Field(discriminator="role")]


# ---- Auth requests ----

class RegisterRequest(BaseModel):
	full_name: Optional[str] = None
	phone_number: Optional[str] = None
	age: Optional[Union[int, str]] = None


class LoginRequest(BaseModel):
	phone_number: Optional[str] = None


class AdminLoginRequest(BaseModel):
	email: str
	password: str


class UserOut(BaseModel):
	model_config = ConfigDict(from_attributes=True)

	id: int
	full_name: str
	phone_number: str
	age: int
	created_at: Optional[datetime] = None


class AuthResponse(BaseModel):
	message: str
	token: str
	user: Optional[UserOut] = None


# ---- Question delivery ----

class DeliveredQuestion(BaseModel):
	"""A question as shown to a test-taker; carries no answer key."""

	id: int
	level: Level
	type: QuestionType
	question: str
	options: List[str]
	image_url: Optional[str] = None
	image_filename: Optional[str] = None


class QuestionSet(BaseModel):
	questions: List[DeliveredQuestion]
	time_minutes: int


# ---- Submission ----

class SubmittedAnswer(BaseModel):
	model_config = ConfigDict(populate_by_name=True)

	question_id: Union[int, str] = Field(validation_alias="questionId", serialization_alias="questionId")
	answer: str = ""

	@field_validator("question_id")
	@classmethod
	def _normalize_id(cls, value: Union[int, str]) -> Union[int, str]:
		if isinstance(value, str) and value.strip().isdigit():
			return int(value.strip())
		return value


class SubmitRequest(BaseModel):
	model_config = ConfigDict(populate_by_name=True)

	level: Level
	answers: List[SubmittedAnswer] = Field(default_factory=list)
	# Epoch milliseconds taken by the client when the test was opened
	start_time: float = Field(validation_alias="startTime", allow_inf_nan=False)


class ScoreReport(BaseModel):
	score: int
	percentage: int
	tier: Tier
	total_questions: int
	correct_answers: int
	test_time: int


class SubmitResponse(BaseModel):
	message: str = "Test submitted successfully"
	result: ScoreReport


# ---- Results ----

class DetailedAnswer(BaseModel):
	question_id: Union[int, str]
	question_text_ru: str
	question_text_kg: str
	given_answer: str
	correct_answer: str


class UserSummary(BaseModel):
	full_name: str
	phone_number: str


class DetailedResult(BaseModel):
	id: int
	user_id: int
	level: Level
	score: int
	percentage: int
	tier: Tier
	completed_at: datetime
	total_questions: int
	answers: List[DetailedAnswer]
	user: Optional[UserSummary] = None


# ---- Settings ----

class LevelSettingOut(BaseModel):
	questions: int
	time: int


class SettingUpdate(BaseModel):
	level: Level
	time_minutes: int = Field(ge=1, le=300)


class SettingOut(BaseModel):
	model_config = ConfigDict(from_attributes=True)

	level: Level
	time_minutes: int
	updated_at: Optional[datetime] = None


# ---- Admin ----

class AdminQuestionOut(BaseModel):
	model_config = ConfigDict(from_attributes=True)

	id: int
	level: Level
	type: QuestionType
	question_ru: str
	question_kg: str
	options_ru: List[str]
	options_kg: List[str]
	correct_answer: str
	image_filename: Optional[str] = None
	has_image: bool = False
	is_active: bool
	created_at: Optional[datetime] = None
	updated_at: Optional[datetime] = None


class DashboardStats(BaseModel):
	total_users: int
	total_questions: int
	total_tests: int
	avg_score: int
	level_distribution: Dict[str, int]
	recent_results: List[DetailedResult]
