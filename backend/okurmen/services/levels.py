from __future__ import annotations
from typing import Dict, List, Sequence

from ..schemas import LevelSettingOut, SettingOut, SettingUpdate
from ..stores import QuestionBank, SettingsStore


def public_settings(settings_store: SettingsStore, bank: QuestionBank) -> Dict[str, LevelSettingOut]:
	"""Question count and duration for every level that has a settings row."""
	out: Dict[str, LevelSettingOut] = {}
	for row in settings_store.list_all():
		out[row.level] = LevelSettingOut(questions=bank.count_active(row.level), time=row.time_minutes)
	return out


def update_settings(settings_store: SettingsStore, updates: Sequence[SettingUpdate]) -> List[SettingOut]:
	rows = settings_store.upsert_many((u.level, u.time_minutes) for u in updates)
	return [SettingOut.model_validate(r) for r in rows]
