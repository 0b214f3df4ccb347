"""Grading and persistence of a single test attempt.

An attempt for a (user, level) pair is either not started, in progress or
submitted. Nothing is stored while it is in progress: the client sends the
epoch-millisecond timestamp at which it opened the test, and the time limit
is checked against that value on submission. Once a result exists the pair
is closed for good.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Dict, Iterable, Optional, Sequence, Union

from ..enums import Level, QuestionType, Tier
from ..errors import AlreadySubmitted, TimeExpired
from ..models import Question
from ..schemas import ScoreReport, SubmittedAnswer
from ..stores import QuestionBank, ResultStore, SettingsStore


logger = logging.getLogger(__name__)

WEAK_MAX = 40
MEDIUM_MAX = 70


@dataclass(frozen=True)
class Grade:
	correct: int
	scored: int


def compute_percentage(correct: int, scored: int) -> int:
	"""Percentage of correct answers, rounded half up; 0 when nothing was scored."""
	if scored <= 0:
		return 0
	return (200 * correct + scored) // (2 * scored)


def assign_tier(percentage: int) -> Tier:
	if percentage <= WEAK_MAX:
		return Tier.WEAK
	if percentage <= MEDIUM_MAX:
		return Tier.MEDIUM
	return Tier.HIGH


def grade_answers(answers: Iterable[SubmittedAnswer], questions: Dict[Union[int, str], Question]) -> Grade:
	correct = 0
	scored = 0
	for answer in answers:
		question = questions.get(answer.question_id)
		if question is None:
			continue
		if question.type == QuestionType.MOTIVATIONAL.value:
			continue
		scored += 1
		if answer.answer == question.correct_answer:
			correct += 1
	return Grade(correct=correct, scored=scored)


def elapsed_minutes(start_time_ms: float, now: datetime) -> float:
	return (now.timestamp() * 1000 - start_time_ms) / 1000 / 60


def submit(
	results: ResultStore,
	bank: QuestionBank,
	settings_store: SettingsStore,
	user_id: int,
	level: Level,
	answers: Sequence[SubmittedAnswer],
	start_time: float,
	*,
	now: Optional[datetime] = None,
) -> ScoreReport:
	now = now or datetime.now(timezone.utc)
	if now.tzinfo is None:
		now = now.replace(tzinfo=timezone.utc)
	level = Level(level)

	test_time = settings_store.time_minutes(level)
	elapsed = elapsed_minutes(start_time, now)
	if elapsed > test_time:
		logger.info("User %s submitted %s after %.1f of %d minutes", user_id, level.value, elapsed, test_time)
		raise TimeExpired()

	if results.find(user_id, level) is not None:
		raise AlreadySubmitted()

	questions = bank.active_for_level(level)
	grade = grade_answers(answers, {q.id: q for q in questions})
	percentage = compute_percentage(grade.correct, grade.scored)
	tier = assign_tier(percentage)

	# A concurrent submission that slipped past the check above fails here
	results.create(
		user_id=user_id,
		level=level,
		score=grade.correct,
		percentage=percentage,
		tier=tier.value,
		answers=[{"questionId": a.question_id, "answer": a.answer} for a in answers],
		completed_at=now.astimezone(timezone.utc).replace(tzinfo=None),
	)
	logger.info("User %s completed %s: %d/%d (%d%%)", user_id, level.value, grade.correct, grade.scored, percentage)

	return ScoreReport(
		score=grade.correct,
		percentage=percentage,
		tier=tier,
		total_questions=len(questions),
		correct_answers=grade.correct,
		test_time=test_time,
	)
