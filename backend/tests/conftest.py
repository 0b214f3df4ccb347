import os
import tempfile

# Settings are read at import time, so the environment must be ready first
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")
os.environ["DATABASE_URL"] = "sqlite:///" + os.path.join(tempfile.mkdtemp(prefix="okurmen-tests-"), "app.db")
os.environ.pop("SEED_ADMIN_EMAIL", None)
os.environ.pop("SEED_ADMIN_PASSWORD", None)

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from okurmen.db import Base, get_db, make_engine
from okurmen.enums import NO_ANSWER, Role
from okurmen.main import app
from okurmen.models import Admin, Question, TestSetting, User
from okurmen.security import hash_password, issue_token
from okurmen.stores import CredentialStore, QuestionBank, ResultStore, SettingsStore


@pytest.fixture
def engine(tmp_path):
	eng = make_engine(f"sqlite:///{tmp_path / 'test.db'}")
	Base.metadata.create_all(bind=eng)
	yield eng
	eng.dispose()


@pytest.fixture
def session_factory(engine):
	return sessionmaker(bind=engine, autocommit=False, autoflush=False, future=True)


@pytest.fixture
def db(session_factory):
	session = session_factory()
	try:
		yield session
	finally:
		session.close()


@pytest.fixture
def stores(db):
	return {
		"credentials": CredentialStore(db),
		"bank": QuestionBank(db),
		"settings": SettingsStore(db),
		"results": ResultStore(db),
	}


@pytest.fixture
def client(session_factory):
	def override_get_db():
		session = session_factory()
		try:
			yield session
		finally:
			session.close()

	app.dependency_overrides[get_db] = override_get_db
	try:
		yield TestClient(app)
	finally:
		app.dependency_overrides.clear()


@pytest.fixture
def make_question(db):
	def _make(level="A1", type="logic", correct_answer="a", **overrides):
		fields = dict(
			level=level,
			type=type,
			question_ru=f"Вопрос {type}",
			question_kg=f"Суроо {type}",
			options_ru=["a", "b", "c"] if type == "logic" else [],
			options_kg=["а", "б", "в"] if type == "logic" else [],
			correct_answer=correct_answer if correct_answer is not None else NO_ANSWER,
			is_active=True,
		)
		fields.update(overrides)
		question = Question(**fields)
		db.add(question)
		db.commit()
		db.refresh(question)
		return question
	return _make


@pytest.fixture
def set_time(db):
	def _set(level, minutes):
		db.merge(TestSetting(level=level, time_minutes=minutes))
		db.commit()
	return _set


@pytest.fixture
def user(db):
	row = User(full_name="Айбек Асанов", phone_number="+996700000001", age=17)
	db.add(row)
	db.commit()
	db.refresh(row)
	return row


@pytest.fixture
def other_user(db):
	row = User(full_name="Нурзат Бекова", phone_number="+996700000002", age=19)
	db.add(row)
	db.commit()
	db.refresh(row)
	return row


@pytest.fixture
def admin(db):
	row = Admin(email="admin@example.com", password_hash=hash_password("okurmen123"))
	db.add(row)
	db.commit()
	db.refresh(row)
	return row


@pytest.fixture
def user_headers(user):
	return {"Authorization": f"Bearer {issue_token(user.id, Role.USER)}"}


@pytest.fixture
def admin_headers(admin):
	return {"Authorization": f"Bearer {issue_token(admin.id, Role.ADMIN)}"}
