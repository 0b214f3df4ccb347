from __future__ import annotations
import random
from typing import Optional

from ..enums import Language, Level, QuestionType
from ..models import Question
from ..schemas import DeliveredQuestion, QuestionSet
from ..stores import QuestionBank, SettingsStore


def image_url(question_id: int) -> str:
	return f"/questions/{question_id}/image"


def project_question(q: Question, language: Language) -> DeliveredQuestion:
	# Only fields listed here reach the client; the answer key is never copied
	if language is Language.KG:
		text, options = q.question_kg, q.options_kg
	else:
		text, options = q.question_ru, q.options_ru
	has_image = q.image_file is not None
	return DeliveredQuestion(
		id=q.id,
		level=Level(q.level),
		type=QuestionType(q.type),
		question=text,
		options=list(options or []),
		image_url=image_url(q.id) if has_image else None,
		image_filename=q.image_filename if has_image else None,
	)


def assemble_questions(
	bank: QuestionBank,
	settings_store: SettingsStore,
	level: Level,
	language: Optional[str] = None,
	*,
	shuffle: bool = False,
	rng: Optional[random.Random] = None,
) -> QuestionSet:
	lang = language if isinstance(language, Language) else Language.parse(language)
	questions = [project_question(q, lang) for q in bank.active_for_level(level)]
	if shuffle:
		(rng or random).shuffle(questions)
	return QuestionSet(questions=questions, time_minutes=settings_store.time_minutes(level))
