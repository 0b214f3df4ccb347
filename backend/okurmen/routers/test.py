from typing import Dict, List, Optional, Union

from fastapi import APIRouter, Depends, Query

from ..deps import get_bank, get_results, get_settings_store
from ..enums import Level, Role
from ..errors import Forbidden
from ..schemas import AdminIdentity, DetailedResult, LevelSettingOut, QuestionSet, SubmitRequest, SubmitResponse, UserIdentity
from ..services import levels, projection, scoring, session
from ..stores import QuestionBank, ResultStore, SettingsStore
from .auth import get_current_identity, require_user

router = APIRouter(prefix="/test", tags=["test"])


@router.get("/settings", response_model=Dict[str, LevelSettingOut])
def get_test_settings(
	settings_store: SettingsStore = Depends(get_settings_store),
	bank: QuestionBank = Depends(get_bank),
):
	return levels.public_settings(settings_store, bank)


@router.get("/questions/{level}", response_model=QuestionSet)
def get_questions(
	level: Level,
	lang: Optional[str] = Query(default=None),
	shuffle: bool = Query(default=False),
	user: UserIdentity = Depends(require_user),
	bank: QuestionBank = Depends(get_bank),
	settings_store: SettingsStore = Depends(get_settings_store),
):
	return session.assemble_questions(bank, settings_store, level, lang, shuffle=shuffle)


@router.post("/submit", response_model=SubmitResponse)
def submit_test(
	req: SubmitRequest,
	user: UserIdentity = Depends(require_user),
	results: ResultStore = Depends(get_results),
	bank: QuestionBank = Depends(get_bank),
	settings_store: SettingsStore = Depends(get_settings_store),
):
	report = scoring.submit(results, bank, settings_store, user.id, req.level, req.answers, req.start_time)
	return SubmitResponse(result=report)


@router.get("/results/{user_id}", response_model=List[DetailedResult])
def get_results_for_user(
	user_id: int,
	current: Union[UserIdentity, AdminIdentity] = Depends(get_current_identity),
	results: ResultStore = Depends(get_results),
	bank: QuestionBank = Depends(get_bank),
):
	if current.role == Role.USER.value and current.id != user_id:
		raise Forbidden("Access denied")
	return projection.list_for_user(results, bank, user_id)
