from __future__ import annotations
from typing import Dict, List, Optional

from ..enums import NO_ANSWER, Level, Tier
from ..models import Question, Result, User
from ..schemas import DetailedAnswer, DetailedResult, UserSummary
from ..stores import CredentialStore, QuestionBank, ResultStore


MISSING_QUESTION_RU = "Вопрос не найден"
MISSING_QUESTION_KG = "Суроо табылган жок"


def _answer_line(entry: dict, question: Optional[Question]) -> DetailedAnswer:
	given = entry.get("answer")
	return DetailedAnswer(
		question_id=entry.get("questionId"),
		question_text_ru=question.question_ru if question else MISSING_QUESTION_RU,
		question_text_kg=question.question_kg if question else MISSING_QUESTION_KG,
		given_answer="" if given is None else str(given),
		correct_answer=question.correct_answer if question else NO_ANSWER,
	)


def expand(bank: QuestionBank, result: Result, user: Optional[User] = None) -> DetailedResult:
	"""Render a stored result against the current question bank.

	Question text and answer keys are looked up now, not at submission time.
	Questions deleted since then render as a placeholder.
	"""
	entries: List[dict] = list(result.answers or [])
	ids = [e.get("questionId") for e in entries if isinstance(e.get("questionId"), int)]
	questions: Dict[int, Question] = bank.by_ids(ids)
	answers = [_answer_line(e, questions.get(e.get("questionId"))) for e in entries]

	total = len(answers) or bank.count_active(Level(result.level))
	return DetailedResult(
		id=result.id,
		user_id=result.user_id,
		level=Level(result.level),
		score=result.score,
		percentage=result.percentage,
		tier=Tier(result.tier),
		completed_at=result.completed_at,
		total_questions=total,
		answers=answers,
		user=UserSummary(full_name=user.full_name, phone_number=user.phone_number) if user else None,
	)


def list_for_user(results: ResultStore, bank: QuestionBank, user_id: int) -> List[DetailedResult]:
	return [expand(bank, r) for r in results.for_user(user_id)]


def list_all(results: ResultStore, bank: QuestionBank, credentials: CredentialStore, limit: Optional[int] = None) -> List[DetailedResult]:
	rows = results.list_all(limit=limit)
	users = credentials.users_by_id(r.user_id for r in rows)
	return [expand(bank, r, users.get(r.user_id)) for r in rows]
