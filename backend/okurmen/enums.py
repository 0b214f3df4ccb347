from __future__ import annotations
from enum import Enum
from typing import Optional


class Level(str, Enum):
	A1 = "A1"
	A2 = "A2"
	B1 = "B1"
	B2 = "B2"
	C1 = "C1"
	C2 = "C2"
	EASY = "easy"


class QuestionType(str, Enum):
	LOGIC = "logic"
	READING = "reading"
	MOTIVATIONAL = "motivational"


class Role(str, Enum):
	USER = "user"
	ADMIN = "admin"


class Tier(str, Enum):
	WEAK = "weak"
	MEDIUM = "medium"
	HIGH = "high"


class Language(str, Enum):
	RU = "ru"
	KG = "kg"

	@classmethod
	def parse(cls, value: Optional[str]) -> "Language":
		# Unknown or missing values fall back to Russian
		if value and value.strip().lower() == cls.KG.value:
			return cls.KG
		return cls.RU


# Stored as the answer key of ungraded questions
NO_ANSWER = "N/A"
