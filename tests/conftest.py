import pytest
from fastapi.testclient import TestClient

from sinkhole.lists import DomainList, InMemoryListRepository, SqliteListRepository
from sinkhole.main import create_app
from sinkhole.utils.rate_limit import limiter

# Reference data every list test starts from
SEED = {
	DomainList.ALLOW: ["test.com"],
	DomainList.DENY: ["example.com"],
	DomainList.PATTERN: [r"(^|\.)example\.com$"],
}

_CONFIG_VARS = (
	"SINKHOLE_DATA_DIR",
	"SINKHOLE_HOST",
	"SINKHOLE_PORT",
	"SINKHOLE_API_KEY",
	"SINKHOLE_LIST_BACKEND",
	"SINKHOLE_LOCAL_VERSIONS",
	"SINKHOLE_LOCAL_BRANCHES",
	"SINKHOLE_WEB_VERSION",
	"LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch, tmp_path):
	"""Point configuration at a per-test data directory."""
	for name in _CONFIG_VARS:
		monkeypatch.delenv(name, raising=False)
	monkeypatch.setenv("SINKHOLE_DATA_DIR", str(tmp_path / "data"))
	limiter.reset()


def make_sqlite_repository(db_path, seed=SEED) -> SqliteListRepository:
	repo = SqliteListRepository(db_path)
	repo.initialize()
	for domain_list, values in seed.items():
		for value in values:
			repo.add(domain_list, value)
	return repo


@pytest.fixture
def sqlite_repo(tmp_path):
	return make_sqlite_repository(tmp_path / "gravity.db")


@pytest.fixture(params=["sqlite", "memory"])
def repository(request, tmp_path):
	"""A seeded repository, once per backend."""
	if request.param == "sqlite":
		return make_sqlite_repository(tmp_path / "gravity.db")
	return InMemoryListRepository(seed=SEED)


@pytest.fixture
def client(repository):
	with TestClient(create_app(list_repository=repository)) as test_client:
		yield test_client
