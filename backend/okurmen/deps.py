from __future__ import annotations
from fastapi import Depends
from sqlalchemy.orm import Session

from .db import get_db
from .stores import CredentialStore, QuestionBank, ResultStore, SettingsStore


def get_credentials(db: Session = Depends(get_db)) -> CredentialStore:
	return CredentialStore(db)


def get_bank(db: Session = Depends(get_db)) -> QuestionBank:
	return QuestionBank(db)


def get_settings_store(db: Session = Depends(get_db)) -> SettingsStore:
	return SettingsStore(db)


def get_results(db: Session = Depends(get_db)) -> ResultStore:
	return ResultStore(db)
