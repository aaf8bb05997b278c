from pathlib import Path

import pytest

from config import Settings
from server import create_app
from store import JsonFileStore
from tasks import TaskService
from users import UserService

from .fakes import InMemoryStore


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    return Settings(db_dir=tmp_path / "db")


@pytest.fixture()
def memory_store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture()
def users(memory_store) -> UserService:
    return UserService(memory_store)


@pytest.fixture()
def tasks(memory_store) -> TaskService:
    return TaskService(memory_store)


@pytest.fixture()
def app(settings):
    app = create_app(settings)
    app.config["TESTING"] = True
    return app


@pytest.fixture()
def client(app):
    with app.test_client() as c:
        yield c


@pytest.fixture()
def file_store(settings) -> JsonFileStore:
    return JsonFileStore(settings.db_dir)
