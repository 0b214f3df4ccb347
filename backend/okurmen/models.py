from __future__ import annotations
from datetime import datetime
from sqlalchemy import Column, String, DateTime, Integer, Text, Boolean, LargeBinary, JSON, ForeignKey, UniqueConstraint, Index
from .db import Base


class User(Base):
	__tablename__ = "users"
	id = Column(Integer, primary_key=True, autoincrement=True)
	full_name = Column(String(255), nullable=False)
	phone_number = Column(String(32), nullable=False, unique=True, index=True)
	age = Column(Integer, nullable=False)
	created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
	updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)


class Admin(Base):
	__tablename__ = "admins"
	id = Column(Integer, primary_key=True, autoincrement=True)
	email = Column(String(255), nullable=False, unique=True, index=True)
	password_hash = Column(String(256), nullable=False)
	created_at = Column(DateTime, default=datetime.utcnow, nullable=False)


class Question(Base):
	__tablename__ = "questions"
	__table_args__ = (Index("ix_questions_level_active", "level", "is_active"),)
	id = Column(Integer, primary_key=True, autoincrement=True)
	level = Column(String(8), nullable=False)
	type = Column(String(16), nullable=False)
	question_ru = Column(Text, nullable=False)
	question_kg = Column(Text, nullable=False)
	# Ordered option lists; empty for non-logic questions
	options_ru = Column(JSON, nullable=False, default=list)
	options_kg = Column(JSON, nullable=False, default=list)
	correct_answer = Column(Text, nullable=False)
	image_file = Column(LargeBinary, nullable=True)
	image_filename = Column(String(255), nullable=True)
	is_active = Column(Boolean, default=True, nullable=False)
	created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
	updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)


class TestSetting(Base):
	__test__ = False
	__tablename__ = "test_settings"
	level = Column(String(8), primary_key=True)
	time_minutes = Column(Integer, nullable=False)
	updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)


class Result(Base):
	__tablename__ = "results"
	# One attempt per user and level; concurrent inserts lose on this constraint
	__table_args__ = (UniqueConstraint("user_id", "level", name="uq_results_user_level"),)
	id = Column(Integer, primary_key=True, autoincrement=True)
	user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
	level = Column(String(8), nullable=False)
	score = Column(Integer, nullable=False)
	percentage = Column(Integer, nullable=False)
	tier = Column(String(8), nullable=False)
	# [{"questionId": int, "answer": str}, ...] in submission order
	answers = Column(JSON, nullable=False, default=list)
	completed_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)
