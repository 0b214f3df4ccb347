"""Create an admin account: ``python -m okurmen.seed_admin EMAIL PASSWORD``."""
from __future__ import annotations
import argparse
import logging
import sys

from .db import SessionLocal, init_db
from .errors import AppError
from .services.identity import ensure_admin
from .stores import CredentialStore


logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
	parser = argparse.ArgumentParser(description="Create an admin account")
	parser.add_argument("email")
	parser.add_argument("password")
	args = parser.parse_args(argv)

	logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
	init_db()
	db = SessionLocal()
	try:
		admin = ensure_admin(CredentialStore(db), args.email, args.password)
	except AppError as exc:
		logger.error("Could not create admin: %s", exc.message)
		return 1
	finally:
		db.close()
	logger.info("Admin ready: %s", admin.email)
	return 0


if __name__ == "__main__":
	sys.exit(main())
