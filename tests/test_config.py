import pytest
from pydantic import ValidationError

from huntress_probe.core.config import ProbeSettings
from huntress_probe.schemas.config import ProbeConfig, SeverityMap


def test_default_values():
    s = ProbeSettings(_env_file=None)
    assert s.endpoint_url == "http://localhost:24799/health"
    assert s.timeout == 10
    assert s.field_prefix == "huntress_"
    assert s.severity_healthy == "info"
    assert s.severity_degraded == "warning"
    assert s.severity_unhealthy == "critical"
    assert s.rmm_extra_paths == []
    assert s.log_file is None


def test_env_prefix():
    assert ProbeSettings.model_config["env_prefix"] == "HUNTRESS_PROBE_"


def test_type_coercion(monkeypatch):
    monkeypatch.setenv("HUNTRESS_PROBE_TIMEOUT", "3")
    monkeypatch.setenv("HUNTRESS_PROBE_FIELD_PREFIX", "hnt_")
    monkeypatch.setenv("HUNTRESS_PROBE_RMM_EXTRA_PATHS", '["/opt/syncro/syncro"]')
    s = ProbeSettings(_env_file=None)
    assert s.timeout == 3
    assert s.field_prefix == "hnt_"
    assert s.rmm_extra_paths == ["/opt/syncro/syncro"]


def test_severity_map_falls_back_to_unhealthy():
    severities = SeverityMap(healthy="low", degraded="medium", unhealthy="high")
    assert severities.for_status("Healthy") == "low"
    assert severities.for_status("Degraded") == "medium"
    assert severities.for_status("Unhealthy") == "high"
    assert severities.for_status("Rebooting") == "high"
    assert severities.for_status(None) == "high"


def test_probe_config_defaults():
    config = ProbeConfig()
    assert config.output.value == "human"
    assert config.summary.enabled is False
    assert config.summary.severities == SeverityMap()
    assert config.forward.enabled is False
    assert config.forward.prefix == "huntress_"


def test_invalid_timeout_is_rejected(monkeypatch):
    monkeypatch.setenv("HUNTRESS_PROBE_TIMEOUT", "0")
    with pytest.raises(ValidationError):
        ProbeSettings(_env_file=None)


def test_log_level_is_normalized_and_checked(monkeypatch):
    monkeypatch.setenv("HUNTRESS_PROBE_LOG_LEVEL", "info")
    assert ProbeSettings(_env_file=None).log_level == "INFO"
    monkeypatch.setenv("HUNTRESS_PROBE_LOG_LEVEL", "chatty")
    with pytest.raises(ValidationError):
        ProbeSettings(_env_file=None)


def test_unused_settings_are_not_declared():
    assert "app_name" not in ProbeSettings.model_fields
