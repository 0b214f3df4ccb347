from __future__ import annotations
import json
import logging
from dataclasses import dataclass
from typing import List, Optional, Union

from ..enums import NO_ANSWER, Level, QuestionType
from ..errors import NotFound, ValidationFailed
from ..models import Question
from ..schemas import AdminQuestionOut
from ..stores import QuestionBank


logger = logging.getLogger(__name__)

IMAGE_TYPES = {"png": "image/png", "gif": "image/gif", "webp": "image/webp"}


@dataclass
class QuestionDraft:
	level: Optional[str]
	type: Optional[str]
	question_ru: Optional[str]
	question_kg: Optional[str]
	options_ru: Union[str, List[str], None] = None
	options_kg: Union[str, List[str], None] = None
	correct_answer: Optional[str] = None


@dataclass
class ImageUpload:
	content: bytes
	filename: str


def parse_options(raw: Union[str, List[str], None]) -> List[str]:
	"""Accept either a list or a JSON-encoded array (multipart forms send strings)."""
	if raw is None or raw == "":
		return []
	if isinstance(raw, list):
		return [str(o) for o in raw]
	try:
		data = json.loads(raw)
	except ValueError:
		logger.info("Could not parse options payload %r", raw)
		return []
	if not isinstance(data, list):
		return []
	return [str(o) for o in data]


def image_content_type(filename: Optional[str]) -> str:
	ext = (filename or "").lower().rsplit(".", 1)[-1]
	return IMAGE_TYPES.get(ext, "image/jpeg")


def _require_enum(enum_cls, value, label: str):
	try:
		return enum_cls(value)
	except ValueError:
		allowed = ", ".join(e.value for e in enum_cls)
		raise ValidationFailed(f"{label} must be one of: {allowed}") from None


def _apply(question: Question, draft: QuestionDraft, *, creating: bool) -> None:
	level = _require_enum(Level, draft.level, "level")
	qtype = _require_enum(QuestionType, draft.type, "type")
	question_ru = (draft.question_ru or "").strip()
	question_kg = (draft.question_kg or "").strip()
	if not question_ru:
		raise ValidationFailed("Question in Russian is required")
	if not question_kg:
		raise ValidationFailed("Question in Kyrgyz is required")

	options_ru: List[str] = []
	options_kg: List[str] = []
	if qtype is QuestionType.LOGIC:
		options_ru = parse_options(draft.options_ru)
		options_kg = parse_options(draft.options_kg)
		if len(options_ru) < 2 or len(options_kg) < 2:
			raise ValidationFailed("Logic questions require at least 2 options in each language")

	answer = (draft.correct_answer or "").strip()
	if answer:
		question.correct_answer = answer
	elif qtype in (QuestionType.MOTIVATIONAL, QuestionType.READING):
		question.correct_answer = NO_ANSWER
	elif creating or not question.correct_answer:
		raise ValidationFailed("Correct answer is required")

	question.level = level.value
	question.type = qtype.value
	question.question_ru = question_ru
	question.question_kg = question_kg
	question.options_ru = options_ru
	question.options_kg = options_kg


def to_admin_view(q: Question) -> AdminQuestionOut:
	return AdminQuestionOut(
		id=q.id,
		level=Level(q.level),
		type=QuestionType(q.type),
		question_ru=q.question_ru,
		question_kg=q.question_kg,
		options_ru=list(q.options_ru or []),
		options_kg=list(q.options_kg or []),
		correct_answer=q.correct_answer,
		image_filename=q.image_filename,
		has_image=q.image_file is not None,
		is_active=q.is_active,
		created_at=q.created_at,
		updated_at=q.updated_at,
	)


def create_question(bank: QuestionBank, draft: QuestionDraft, image: Optional[ImageUpload]) -> Question:
	question = Question(is_active=True)
	_apply(question, draft, creating=True)
	if image is not None:
		question.image_file = image.content
		question.image_filename = image.filename
	question = bank.save(question)
	logger.info("Question %s created for level %s", question.id, question.level)
	return question


def update_question(bank: QuestionBank, question_id: int, draft: QuestionDraft, image: Optional[ImageUpload]) -> Question:
	question = bank.get(question_id)
	if question is None:
		raise NotFound("Question not found")
	_apply(question, draft, creating=False)
	if image is not None:
		question.image_file = image.content
		question.image_filename = image.filename
	question = bank.save(question)
	logger.info("Question %s updated", question.id)
	return question


def delete_question(bank: QuestionBank, question_id: int) -> None:
	question = bank.get(question_id)
	if question is None:
		raise NotFound("Question not found")
	# Results keep the id; projection renders a placeholder for it
	bank.delete(question)
	logger.info("Question %s deleted", question_id)


def load_image(bank: QuestionBank, question_id: int) -> ImageUpload:
	question = bank.get(question_id)
	if question is None:
		raise NotFound("Question not found")
	if question.image_file is None:
		raise NotFound("Image not found")
	return ImageUpload(content=question.image_file, filename=question.image_filename or f"question-{question_id}.jpg")
