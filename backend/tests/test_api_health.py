import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from okurmen import db as db_module
from okurmen import main
from okurmen.db import get_db, make_engine
from okurmen.settings import settings


def test_health(client):
	r = client.get("/health")
	assert r.status_code == 200
	assert r.json()["status"] == "ok"
	assert client.get("/info").status_code == 404


def test_readiness_reports_store_state(client, monkeypatch):
	assert client.get("/health/ready").status_code == 200
	monkeypatch.setattr(db_module, "check_health", lambda bind=None: False)
	r = client.get("/health/ready")
	assert r.status_code == 503
	assert r.json()["checks"] == {"database": False}


def test_unreachable_store_maps_to_503(tmp_path):
	broken = make_engine(f"sqlite:///{tmp_path / 'missing' / 'nowhere.db'}")
	factory = sessionmaker(bind=broken, future=True)

	def override_get_db():
		session = factory()
		try:
			yield session
		finally:
			session.close()

	main.app.dependency_overrides[get_db] = override_get_db
	try:
		r = TestClient(main.app).get("/test/settings")
	finally:
		main.app.dependency_overrides.clear()
	assert r.status_code == 503
	assert r.json() == {"error": "Service temporarily unavailable"}


def test_unexpected_errors_are_not_leaked(client, monkeypatch):
	def boom(*args, **kwargs):
		raise RuntimeError("secret internals")

	monkeypatch.setattr("okurmen.services.levels.public_settings", boom)
	r = TestClient(main.app, raise_server_exceptions=False).get("/test/settings")
	assert r.status_code == 500
	assert r.json() == {"error": "Server error"}
	assert "secret" not in r.text


def test_startup_seeds_admin(monkeypatch):
	monkeypatch.setattr(settings, "seed_admin_email", "seed@example.com")
	monkeypatch.setattr(settings, "seed_admin_password", "seed-pass")
	with TestClient(main.app) as c:
		r = c.post("/admin/login", json={"email": "seed@example.com", "password": "seed-pass"})
	assert r.status_code == 200


def test_production_refuses_to_start_without_store(monkeypatch):
	monkeypatch.setattr(settings, "environment", "production")
	monkeypatch.setattr(main, "check_health", lambda bind=None: False)
	with pytest.raises(RuntimeError):
		with TestClient(main.app):
			pass
