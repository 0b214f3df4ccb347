from datetime import datetime

from okurmen.enums import Tier
from okurmen.models import Result
from okurmen.services import projection


def _result(db, user_id, level="A1", answers=None, completed_at=None):
	row = Result(
		user_id=user_id, level=level, score=1, percentage=50, tier="medium",
		answers=answers or [], completed_at=completed_at or datetime(2026, 2, 1, 12, 0),
	)
	db.add(row)
	db.commit()
	db.refresh(row)
	return row


def test_expand_resolves_current_question_content(db, stores, user, make_question):
	q = make_question(question_ru="Старый", question_kg="Эски", correct_answer="a")
	row = _result(db, user.id, answers=[{"questionId": q.id, "answer": "b"}])

	q.question_ru = "Новый"
	q.correct_answer = "c"
	db.commit()

	detailed = projection.expand(stores["bank"], row)
	assert detailed.tier is Tier.MEDIUM
	assert detailed.total_questions == 1
	line = detailed.answers[0]
	assert line.question_id == q.id
	assert line.question_text_ru == "Новый"
	assert line.question_text_kg == "Эски"
	assert line.given_answer == "b"
	assert line.correct_answer == "c"


def test_deleted_question_renders_placeholder(db, stores, user, make_question):
	kept = make_question(correct_answer="a")
	gone = make_question(correct_answer="b")
	row = _result(db, user.id, answers=[{"questionId": kept.id, "answer": "a"}, {"questionId": gone.id, "answer": "x"}])
	gone_id = gone.id
	db.delete(gone)
	db.commit()

	detailed = projection.expand(stores["bank"], row)
	assert [a.question_id for a in detailed.answers] == [kept.id, gone_id]
	placeholder = detailed.answers[1]
	assert placeholder.question_text_ru == projection.MISSING_QUESTION_RU
	assert placeholder.question_text_kg == projection.MISSING_QUESTION_KG
	assert placeholder.correct_answer == "N/A"
	assert placeholder.given_answer == "x"


def test_total_falls_back_to_active_count(db, stores, user, make_question):
	make_question(level="B1")
	make_question(level="B1")
	row = _result(db, user.id, level="B1")
	assert projection.expand(stores["bank"], row).total_questions == 2


def test_list_for_user_newest_first(db, stores, user, other_user):
	_result(db, user.id, level="A1", completed_at=datetime(2026, 1, 1))
	_result(db, user.id, level="A2", completed_at=datetime(2026, 1, 5))
	_result(db, other_user.id, level="A1")
	listed = projection.list_for_user(stores["results"], stores["bank"], user.id)
	assert [r.level.value for r in listed] == ["A2", "A1"]


def test_list_all_includes_user_summary(db, stores, user):
	_result(db, user.id)
	listed = projection.list_all(stores["results"], stores["bank"], stores["credentials"])
	assert listed[0].user.full_name == user.full_name
	assert listed[0].user.phone_number == user.phone_number
