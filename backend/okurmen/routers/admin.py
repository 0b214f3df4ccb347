from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile
from pydantic import BaseModel

from ..deps import get_bank, get_credentials, get_results, get_settings_store
from ..errors import ValidationFailed
from ..schemas import AdminLoginRequest, AdminQuestionOut, DashboardStats, DetailedResult, SettingOut, SettingUpdate, UserOut
from ..services import dashboard, identity, levels, projection
from ..services import questions as question_service
from ..services.questions import ImageUpload, QuestionDraft
from ..settings import settings
from ..stores import CredentialStore, QuestionBank, ResultStore, SettingsStore
from .auth import require_admin

router = APIRouter(prefix="/admin", tags=["admin"])
# Everything except login requires an admin token
protected = APIRouter(dependencies=[Depends(require_admin)])


class AdminTokenResponse(BaseModel):
	message: str
	token: str


class QuestionResponse(BaseModel):
	message: str
	question: AdminQuestionOut


class DeleteResponse(BaseModel):
	message: str
	deleted_id: int


class SettingsResponse(BaseModel):
	message: str
	settings: List[SettingOut]


@router.post("/login", response_model=AdminTokenResponse)
def admin_login(req: AdminLoginRequest, credentials: CredentialStore = Depends(get_credentials)):
	_, token = identity.login_admin(credentials, req.email, req.password)
	return AdminTokenResponse(message="Login successful", token=token)


@protected.get("/dashboard", response_model=DashboardStats)
def get_dashboard(
	credentials: CredentialStore = Depends(get_credentials),
	bank: QuestionBank = Depends(get_bank),
	results: ResultStore = Depends(get_results),
):
	return dashboard.dashboard_stats(credentials, bank, results)


async def _read_image(image: Optional[UploadFile]) -> Optional[ImageUpload]:
	if image is None or not image.filename:
		return None
	if not (image.content_type or "").startswith("image/"):
		raise ValidationFailed("Only image files are allowed")
	content = await image.read()
	if len(content) > settings.max_image_bytes:
		raise ValidationFailed("Image is too large")
	return ImageUpload(content=content, filename=image.filename)


@protected.get("/questions", response_model=List[AdminQuestionOut])
def list_questions(bank: QuestionBank = Depends(get_bank)):
	return [question_service.to_admin_view(q) for q in bank.list_all()]


@protected.post("/questions", response_model=QuestionResponse, status_code=201)
async def create_question(
	level: str = Form(...),
	type: str = Form(...),
	question_ru: str = Form(...),
	question_kg: str = Form(...),
	options_ru: Optional[str] = Form(default=None),
	options_kg: Optional[str] = Form(default=None),
	correct_answer: Optional[str] = Form(default=None),
	image: Optional[UploadFile] = File(default=None),
	bank: QuestionBank = Depends(get_bank),
):
	draft = QuestionDraft(level, type, question_ru, question_kg, options_ru, options_kg, correct_answer)
	upload = await _read_image(image)
	question = question_service.create_question(bank, draft, upload)
	return QuestionResponse(message="Question created successfully", question=question_service.to_admin_view(question))


@protected.put("/questions/{question_id}", response_model=QuestionResponse)
async def update_question(
	question_id: int,
	level: str = Form(...),
	type: str = Form(...),
	question_ru: str = Form(...),
	question_kg: str = Form(...),
	options_ru: Optional[str] = Form(default=None),
	options_kg: Optional[str] = Form(default=None),
	correct_answer: Optional[str] = Form(default=None),
	image: Optional[UploadFile] = File(default=None),
	bank: QuestionBank = Depends(get_bank),
):
	draft = QuestionDraft(level, type, question_ru, question_kg, options_ru, options_kg, correct_answer)
	upload = await _read_image(image)
	question = question_service.update_question(bank, question_id, draft, upload)
	return QuestionResponse(message="Question updated successfully", question=question_service.to_admin_view(question))


@protected.delete("/questions/{question_id}", response_model=DeleteResponse)
def delete_question(question_id: int, bank: QuestionBank = Depends(get_bank)):
	question_service.delete_question(bank, question_id)
	return DeleteResponse(message="Question deleted successfully", deleted_id=question_id)


@protected.get("/history", response_model=List[DetailedResult])
def test_history(
	results: ResultStore = Depends(get_results),
	bank: QuestionBank = Depends(get_bank),
	credentials: CredentialStore = Depends(get_credentials),
):
	return projection.list_all(results, bank, credentials)


@protected.get("/results", response_model=List[DetailedResult])
def all_results(
	results: ResultStore = Depends(get_results),
	bank: QuestionBank = Depends(get_bank),
	credentials: CredentialStore = Depends(get_credentials),
):
	return projection.list_all(results, bank, credentials)


@protected.get("/users", response_model=List[UserOut])
def list_users(credentials: CredentialStore = Depends(get_credentials)):
	return [UserOut.model_validate(u) for u in credentials.list_users()]


@protected.get("/settings", response_model=List[SettingOut])
def get_settings(settings_store: SettingsStore = Depends(get_settings_store)):
	return [SettingOut.model_validate(r) for r in settings_store.list_all()]


@protected.put("/settings", response_model=SettingsResponse)
def put_settings(updates: List[SettingUpdate], settings_store: SettingsStore = Depends(get_settings_store)):
	rows = levels.update_settings(settings_store, updates)
	return SettingsResponse(message="Test settings updated successfully", settings=rows)


router.include_router(protected)
