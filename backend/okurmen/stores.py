"""Storage interfaces consumed by the services.

Each store is a thin query/command wrapper over a SQLAlchemy session so the
scoring, session and projection code never touches ORM queries directly.
"""
from __future__ import annotations
from datetime import datetime
from typing import Dict, Iterable, List, Optional

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from .enums import Level
from .errors import AlreadySubmitted, Conflict
from .models import Admin, Question, Result, TestSetting, User
from .settings import settings


class CredentialStore:
	def __init__(self, db: Session) -> None:
		self.db = db

	def get_user(self, user_id: int) -> Optional[User]:
		return self.db.get(User, user_id)

	def get_admin(self, admin_id: int) -> Optional[Admin]:
		return self.db.get(Admin, admin_id)

	def find_user_by_phone(self, phone_number: str) -> Optional[User]:
		return self.db.query(User).filter(User.phone_number == phone_number).first()

	def find_admin_by_email(self, email: str) -> Optional[Admin]:
		return self.db.query(Admin).filter(Admin.email == email).first()

	def create_user(self, full_name: str, phone_number: str, age: int) -> User:
		row = User(full_name=full_name, phone_number=phone_number, age=age)
		self.db.add(row)
		try:
			self.db.commit()
		except IntegrityError:
			self.db.rollback()
			raise Conflict("Пользователь с таким номером телефона уже существует") from None
		self.db.refresh(row)
		return row

	def create_admin(self, email: str, password_hash: str) -> Admin:
		row = Admin(email=email, password_hash=password_hash)
		self.db.add(row)
		try:
			self.db.commit()
		except IntegrityError:
			self.db.rollback()
			raise Conflict("Admin already exists") from None
		self.db.refresh(row)
		return row

	def list_users(self) -> List[User]:
		return self.db.query(User).order_by(User.created_at.desc(), User.id.desc()).all()

	def count_users(self) -> int:
		return self.db.query(func.count(User.id)).scalar() or 0

	def users_by_id(self, ids: Iterable[int]) -> Dict[int, User]:
		ids = list(set(ids))
		if not ids:
			return {}
		return {u.id: u for u in self.db.query(User).filter(User.id.in_(ids)).all()}


class QuestionBank:
	def __init__(self, db: Session) -> None:
		self.db = db

	def get(self, question_id: int) -> Optional[Question]:
		return self.db.get(Question, question_id)

	def active_for_level(self, level: Level) -> List[Question]:
		return (
			self.db.query(Question)
			.filter(Question.level == Level(level).value, Question.is_active.is_(True))
			.order_by(Question.id)
			.all()
		)

	def count_active(self, level: Optional[Level] = None) -> int:
		q = self.db.query(func.count(Question.id)).filter(Question.is_active.is_(True))
		if level is not None:
			q = q.filter(Question.level == Level(level).value)
		return q.scalar() or 0

	def by_ids(self, ids: Iterable[int]) -> Dict[int, Question]:
		ids = list(set(ids))
		if not ids:
			return {}
		return {q.id: q for q in self.db.query(Question).filter(Question.id.in_(ids)).all()}

	def list_all(self) -> List[Question]:
		return self.db.query(Question).order_by(Question.created_at.desc(), Question.id.desc()).all()

	def save(self, question: Question) -> Question:
		self.db.add(question)
		self.db.commit()
		self.db.refresh(question)
		return question

	def delete(self, question: Question) -> None:
		self.db.delete(question)
		self.db.commit()


class SettingsStore:
	def __init__(self, db: Session) -> None:
		self.db = db

	def time_minutes(self, level: Level) -> int:
		row = self.db.get(TestSetting, Level(level).value)
		if row is None or not row.time_minutes:
			return settings.default_time_minutes
		return row.time_minutes

	def list_all(self) -> List[TestSetting]:
		return self.db.query(TestSetting).order_by(TestSetting.level).all()

	def upsert_many(self, entries: Iterable[tuple[Level, int]]) -> List[TestSetting]:
		# Later entries for the same level win
		rows: Dict[str, TestSetting] = {}
		for level, minutes in entries:
			key = Level(level).value
			row = rows.get(key) or self.db.get(TestSetting, key)
			if row is None:
				row = TestSetting(level=key, time_minutes=minutes)
				self.db.add(row)
			else:
				row.time_minutes = minutes
			rows[key] = row
		self.db.commit()
		for row in rows.values():
			self.db.refresh(row)
		return list(rows.values())


class ResultStore:
	def __init__(self, db: Session) -> None:
		self.db = db

	def find(self, user_id: int, level: Level) -> Optional[Result]:
		return (
			self.db.query(Result)
			.filter(Result.user_id == user_id, Result.level == Level(level).value)
			.first()
		)

	def create(self, *, user_id: int, level: Level, score: int, percentage: int, tier: str, answers: list, completed_at: datetime) -> Result:
		row = Result(
			user_id=user_id,
			level=Level(level).value,
			score=score,
			percentage=percentage,
			tier=tier,
			answers=answers,
			completed_at=completed_at,
		)
		self.db.add(row)
		try:
			self.db.commit()
		except IntegrityError:
			# Lost the race against a concurrent submission for the same level
			self.db.rollback()
			raise AlreadySubmitted() from None
		self.db.refresh(row)
		return row

	def for_user(self, user_id: int) -> List[Result]:
		return (
			self.db.query(Result)
			.filter(Result.user_id == user_id)
			.order_by(Result.completed_at.desc(), Result.id.desc())
			.all()
		)

	def list_all(self, limit: Optional[int] = None) -> List[Result]:
		q = self.db.query(Result).order_by(Result.completed_at.desc(), Result.id.desc())
		if limit is not None:
			q = q.limit(limit)
		return q.all()

	def count(self) -> int:
		return self.db.query(func.count(Result.id)).scalar() or 0

	def average_positive_percentage(self) -> float:
		value = self.db.query(func.avg(Result.percentage)).filter(Result.percentage > 0).scalar()
		return float(value or 0)

	def tier_distribution(self) -> Dict[str, int]:
		rows = self.db.query(Result.tier, func.count(Result.id)).group_by(Result.tier).all()
		return {tier: count for tier, count in rows}
