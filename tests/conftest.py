import pytest

from enterprise_ledger.state import reset_enterprise_state


@pytest.fixture(autouse=True)
def fresh_state():
    reset_enterprise_state()
    yield
    reset_enterprise_state()


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def client():
    from fastapi.testclient import TestClient

    from enterprise_ledger.api.main import app

    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
