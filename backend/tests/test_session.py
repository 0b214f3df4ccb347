import random

from okurmen.enums import Level, QuestionType
from okurmen.services.session import assemble_questions


def test_questions_are_projected_to_russian_by_default(stores, make_question):
	q = make_question(question_ru="Сколько?", question_kg="Канча?", options_ru=["один", "два"], options_kg=["бир", "эки"])
	for lang in (None, "ru", "en", "", "KZ"):
		qs = assemble_questions(stores["bank"], stores["settings"], Level.A1, lang)
		assert [d.question for d in qs.questions] == ["Сколько?"]
		assert qs.questions[0].options == ["один", "два"]
		assert qs.questions[0].id == q.id


def test_kyrgyz_variant(stores, make_question):
	make_question(question_ru="Сколько?", question_kg="Канча?", options_ru=["один", "два"], options_kg=["бир", "эки"])
	qs = assemble_questions(stores["bank"], stores["settings"], Level.A1, "kg")
	assert qs.questions[0].question == "Канча?"
	assert qs.questions[0].options == ["бир", "эки"]


def test_answer_key_never_delivered(stores, make_question):
	make_question(type="logic", correct_answer="secret-logic")
	make_question(type="reading", correct_answer="secret-reading")
	make_question(type="motivational", correct_answer=None)
	for lang in ("ru", "kg"):
		qs = assemble_questions(stores["bank"], stores["settings"], Level.A1, lang)
		assert {d.type for d in qs.questions} == set(QuestionType)
		dumped = qs.model_dump_json()
		assert "correct_answer" not in dumped
		assert "secret-logic" not in dumped
		assert "secret-reading" not in dumped


def test_only_active_questions_of_level(stores, make_question):
	active = make_question(level="B2")
	make_question(level="B2", is_active=False)
	make_question(level="C1")
	qs = assemble_questions(stores["bank"], stores["settings"], Level.B2, "ru")
	assert [d.id for d in qs.questions] == [active.id]


def test_image_reference(stores, make_question):
	with_image = make_question(image_file=b"\x89PNG", image_filename="map.png")
	without = make_question()
	qs = assemble_questions(stores["bank"], stores["settings"], Level.A1, "ru")
	by_id = {d.id: d for d in qs.questions}
	assert by_id[with_image.id].image_url == f"/questions/{with_image.id}/image"
	assert by_id[with_image.id].image_filename == "map.png"
	assert by_id[without.id].image_url is None


def test_time_minutes_default_and_configured(stores, make_question, set_time):
	make_question(level="A2")
	assert assemble_questions(stores["bank"], stores["settings"], Level.A2).time_minutes == 20
	set_time("A2", 35)
	assert assemble_questions(stores["bank"], stores["settings"], Level.A2).time_minutes == 35


def test_shuffle_does_not_persist_order(stores, make_question):
	ids = [make_question().id for _ in range(6)]
	shuffled = assemble_questions(stores["bank"], stores["settings"], Level.A1, shuffle=True, rng=random.Random(3))
	assert sorted(d.id for d in shuffled.questions) == ids
	plain = assemble_questions(stores["bank"], stores["settings"], Level.A1)
	assert [d.id for d in plain.questions] == ids
