import sqlite3

from fastapi.testclient import TestClient

from sinkhole.lists import DomainList, InMemoryListRepository, SqliteListRepository
from sinkhole.main import create_app


def test_default_backend_is_sqlite_and_schema_is_created():
	app = create_app()
	repo = app.state.list_repository
	assert isinstance(repo, SqliteListRepository)

	with TestClient(app) as client:
		assert client.get("/api/lists/allow").json()["data"] == []
		assert client.post("/api/lists/allow", json={"value": "kept.com"}).status_code == 201

	conn = sqlite3.connect(str(repo.db_path))
	try:
		tables = {row[0] for row in conn.execute("SELECT name FROM sqlite_master WHERE type = 'table'")}
	finally:
		conn.close()
	assert {"whitelist", "blacklist", "regex"} <= tables
	assert SqliteListRepository(repo.db_path).contains(DomainList.ALLOW, "kept.com")


def test_memory_backend_from_config(monkeypatch):
	monkeypatch.setenv("SINKHOLE_LIST_BACKEND", "memory")

	app = create_app()

	assert isinstance(app.state.list_repository, InMemoryListRepository)


def test_injected_repository_wins_over_config():
	repo = InMemoryListRepository(seed={DomainList.DENY: ["ads.example"]})

	app = create_app(list_repository=repo)

	assert app.state.list_repository is repo
	with TestClient(app) as client:
		assert client.get("/api/lists/deny").json()["data"] == ["ads.example"]


def test_apps_do_not_share_repositories():
	first = create_app(list_repository=InMemoryListRepository())
	second = create_app(list_repository=InMemoryListRepository())

	with TestClient(first) as client:
		client.post("/api/lists/allow", json={"value": "only-first.com"})
	with TestClient(second) as client:
		assert client.get("/api/lists/allow").json()["data"] == []


def test_settings_endpoint_hides_api_key(monkeypatch):
	monkeypatch.setenv("SINKHOLE_API_KEY", "top-secret")

	with TestClient(create_app(list_repository=InMemoryListRepository())) as client:
		r = client.get("/api/settings/api", headers={"X-Sinkhole-Authenticate": "top-secret"})

	assert r.status_code == 200
	data = r.json()["data"]
	assert data["auth_required"] is True
	assert data["list_backend"] == "sqlite"
	assert "top-secret" not in r.text
