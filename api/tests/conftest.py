import pytest
from httpx import ASGITransport, AsyncClient

from hub.channels import EventHub, get_hub, settings
from hub.main import app

TEST_PUBLISH_KEY = "test-key-for-testing"


@pytest.fixture(scope="function")
def hub():
    """Fresh channels per test; the module-level hub is never touched."""
    return EventHub()


@pytest.fixture(scope="function")
async def client(hub):
    app.dependency_overrides[get_hub] = lambda: hub
    original_publish_keys = settings.publish_keys
    settings.publish_keys = TEST_PUBLISH_KEY
    async with AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False),
        base_url="http://test",
        headers={"X-Publish-Key": TEST_PUBLISH_KEY},
    ) as ac:
        yield ac
    settings.publish_keys = original_publish_keys
    app.dependency_overrides.clear()
