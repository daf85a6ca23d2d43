"""Shared pytest fixtures for resource-gateway tests."""

from collections.abc import Callable, Iterator
from pathlib import Path

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from resource_gateway import Settings, create_app
from resource_gateway.store import RecordStore

DEMO_PASSWORD = "correct horse battery staple"

ALICE, BOB, CHARLIE = 1, 2, 3


@pytest.fixture
def files_dir(tmp_path: Path) -> Path:
    """Create a served directory plus a secret sibling outside it.

    Layout:
        tmp_path/served/welcome.txt
        tmp_path/served/terms.txt
        tmp_path/served/reports/q1.txt
        tmp_path/served-private/leak.txt   # shares the served/ prefix
        tmp_path/secret.txt                # one level above served/
    """
    served = tmp_path / "served"
    (served / "reports").mkdir(parents=True)
    (served / "welcome.txt").write_text("hello from the served directory\n")
    (served / "terms.txt").write_text("terms\n")
    (served / "reports" / "q1.txt").write_text("revenue: 2400\n")

    private = tmp_path / "served-private"
    private.mkdir()
    (private / "leak.txt").write_text("PRIVATE SIBLING\n")

    (tmp_path / "secret.txt").write_text("TOP SECRET\n")
    return served


@pytest.fixture
def make_settings(files_dir: Path) -> Callable[..., Settings]:
    """Build Settings pointing at the temporary files directory."""

    def _make(**overrides: object) -> Settings:
        values: dict[str, object] = {
            "files_dir": files_dir,
            "demo_password": DEMO_PASSWORD,
        }
        values.update(overrides)
        return Settings(**values)  # type: ignore[arg-type]

    return _make


@pytest.fixture
def settings(make_settings: Callable[..., Settings]) -> Settings:
    return make_settings()


@pytest.fixture
def app(settings: Settings) -> FastAPI:
    """Gateway app in the default header-trust mode."""
    return create_app(settings)


@pytest.fixture
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def session_app(make_settings: Callable[..., Settings]) -> FastAPI:
    """Gateway app whose access-control routes use the session cookie."""
    return create_app(make_settings(auth_mode="session"))


@pytest.fixture
def session_client(session_app: FastAPI) -> Iterator[TestClient]:
    with TestClient(session_app) as test_client:
        yield test_client


@pytest.fixture
def login() -> Callable[[TestClient, str], TestClient]:
    """Log a client in as the given username and return it."""

    def _login(test_client: TestClient, username: str = "alice") -> TestClient:
        response = test_client.post(
            "/login", json={"username": username, "password": DEMO_PASSWORD}
        )
        assert response.status_code == 200, response.text
        return test_client

    return _login


@pytest.fixture
def alice_client(client: TestClient, login: Callable[..., TestClient]) -> TestClient:
    return login(client, "alice")


@pytest.fixture
def store() -> Iterator[RecordStore]:
    record_store = RecordStore.open(demo_password=DEMO_PASSWORD)
    yield record_store
    record_store.close()


@pytest.fixture
def demo_password() -> str:
    return DEMO_PASSWORD
