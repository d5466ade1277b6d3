from __future__ import annotations

import pytest

from pyacurite.config import AcuriteConfig, Credentials
from pyacurite.exceptions import AcuriteConfigError


def test_defaults() -> None:
    config = AcuriteConfig(email="me@example.com", password="secret")

    assert config.refresh_interval_seconds == 300
    assert config.supported_device_codes == ("5in1WS", "2in1T")
    assert config.supported_sensor_codes == ("Temperature", "Humidity")
    assert config.battery_low_threshold == 20
    assert config.name_overrides == {}
    assert config.account_id is None
    assert config.credentials == Credentials(email="me@example.com", password="secret")


@pytest.mark.parametrize(("email", "password"), [("", "secret"), ("me@example.com", ""), ("", "")])
def test_validate_requires_credentials(email: str, password: str) -> None:
    with pytest.raises(AcuriteConfigError, match="Missing required config"):
        AcuriteConfig(email=email, password=password).validate()


def test_validate_rejects_non_positive_interval() -> None:
    with pytest.raises(AcuriteConfigError, match="refresh_interval_seconds"):
        AcuriteConfig(email="a", password="b", refresh_interval_seconds=0).validate()


def test_from_mapping_reads_host_keys() -> None:
    config = AcuriteConfig.from_mapping(
        {
            "platform": "MyAcurite",
            "email": "me@example.com",
            "password": "secret",
            "accountId": 176464,
            "refreshIntervalSeconds": 120,
            "supportedDeviceCodes": ["5in1WS"],
            "supportedSensorCodes": ["Temperature"],
            "batteryLowThreshold": 15,
            "nameOverrides": {"123": "Patio"},
        }
    )

    assert config.account_id == "176464"
    assert config.refresh_interval_seconds == 120
    assert config.supported_device_codes == ("5in1WS",)
    assert config.supported_sensor_codes == ("Temperature",)
    assert config.battery_low_threshold == 15
    assert config.name_overrides == {"123": "Patio"}
    config.validate()


def test_from_mapping_falls_back_to_defaults_for_empty_values() -> None:
    config = AcuriteConfig.from_mapping(
        {
            "email": "me@example.com",
            "password": "secret",
            "refreshIntervalSeconds": 0,
            "supportedDeviceCodes": [],
            "supportedSensorCodes": "Temperature",
        }
    )

    assert config.refresh_interval_seconds == 300
    assert config.supported_device_codes == ("5in1WS", "2in1T")
    assert config.supported_sensor_codes == ("Temperature", "Humidity")


@pytest.mark.parametrize("key", ["refreshIntervalSeconds", "batteryLowThreshold"])
def test_from_mapping_rejects_non_numeric_values(key: str) -> None:
    with pytest.raises(AcuriteConfigError, match=key):
        AcuriteConfig.from_mapping({"email": "me@example.com", "password": "secret", key: "often"})


def test_from_mapping_missing_credentials_fails_validation() -> None:
    config = AcuriteConfig.from_mapping({})

    with pytest.raises(AcuriteConfigError):
        config.validate()


def test_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ACURITE_EMAIL", "env@example.com")
    monkeypatch.setenv("ACURITE_PASSWORD", "env-secret")
    monkeypatch.setenv("ACURITE_REFRESH_INTERVAL", "60")
    monkeypatch.setenv("ACURITE_SENSOR_CODES", "Temperature, Humidity ,Rain")

    config = AcuriteConfig.from_env(password="override")

    assert config.email == "env@example.com"
    assert config.password == "override"
    assert config.refresh_interval_seconds == 60.0
    assert config.supported_sensor_codes == ("Temperature", "Humidity", "Rain")


def test_from_env_rejects_non_numeric_interval(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ACURITE_REFRESH_INTERVAL", "soon")

    with pytest.raises(AcuriteConfigError, match="ACURITE_REFRESH_INTERVAL"):
        AcuriteConfig.from_env()
