import pytest
from pydantic import ValidationError

from hub.config import Settings


def test_csv_settings_are_split():
    settings = Settings(
        cors_origins=" http://a.test, ,http://b.test", publish_keys="k1,k2 "
    )
    assert settings.get_cors_origins() == ["http://a.test", "http://b.test"]
    assert settings.get_publish_keys() == ["k1", "k2"]


def test_empty_publish_keys():
    assert Settings(publish_keys="").get_publish_keys() == []


def test_reads_hub_prefixed_environment(monkeypatch):
    monkeypatch.setenv("HUB_CLIENT_QUEUE_MAXSIZE", "8")
    monkeypatch.setenv("HUB_PUBLISH_KEYS", "from-env")

    settings = Settings()

    assert settings.client_queue_maxsize == 8
    assert settings.get_publish_keys() == ["from-env"]


def test_queue_sizes_must_be_positive():
    with pytest.raises(ValidationError):
        Settings(client_queue_maxsize=0)


def test_validate_production_requires_publish_keys():
    settings = Settings(
        environment="production",
        publish_keys="",
        cors_origins="https://hub.example.com",
    )
    with pytest.raises(ValueError, match="HUB_PUBLISH_KEYS"):
        settings.validate_production()


def test_validate_production_rejects_local_origins():
    settings = Settings(
        environment="production",
        publish_keys="k",
        cors_origins="https://hub.example.com,http://127.0.0.1:3000",
    )
    with pytest.raises(ValueError, match="127.0.0.1"):
        settings.validate_production()


def test_validate_production_ok():
    settings = Settings(
        environment="production",
        publish_keys="k",
        cors_origins="https://hub.example.com",
    )
    assert settings.is_production
    settings.validate_production()


def test_development_skips_validation():
    Settings(environment="development", publish_keys="").validate_production()
