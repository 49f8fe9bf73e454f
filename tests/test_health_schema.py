import pytest
from pydantic import ValidationError

from huntress_probe.schemas.health import HealthRecord


def test_parses_camel_case_and_ignores_unknown_fields(healthy_payload):
    record = HealthRecord.model_validate(healthy_payload)
    assert record.status == "Healthy"
    assert record.service_states["HuntressAgent"] == "Running"
    assert not hasattr(record, "tenant")


def test_missing_optional_fields_are_absent():
    record = HealthRecord.model_validate({"status": "Healthy"})
    assert record.message is None
    assert record.service_states is None
    assert record.versions is None
    assert record.sections() == []
    assert record.agent_version() is None
    assert record.has_message is False


def test_status_is_required():
    with pytest.raises(ValidationError):
        HealthRecord.model_validate({"message": "no status"})


def test_record_is_immutable():
    record = HealthRecord.model_validate({"status": "Healthy"})
    with pytest.raises(ValidationError):
        record.status = "Unhealthy"


def test_scalar_mapping_values_are_coerced_and_nulls_dropped():
    record = HealthRecord.model_validate({
        "status": "Degraded",
        "connectivity": {"connected": True, "latencyMs": 12, "lastError": None},
    })
    assert record.connectivity == {"connected": "true", "latencyMs": "12"}


def test_sections_keep_display_order_and_skip_empty(healthy_payload):
    healthy_payload["timestamps"] = {}
    record = HealthRecord.model_validate(healthy_payload)
    assert [title for title, _ in record.sections()] == ["Service States", "Versions", "Connectivity"]


def test_agent_version_uses_component_key(degraded_record):
    assert degraded_record.agent_version() == "1.2.3"
    assert degraded_record.agent_version("updater") is None


def test_nested_mapping_values_are_accepted():
    record = HealthRecord.model_validate({
        "status": "Healthy",
        "connectivity": {"proxy": {"enabled": False, "hosts": ["a", "b"]}, "connectionStatus": "Connected"},
    })
    assert record.status == "Healthy"
    assert record.connectivity["proxy"]["enabled"] is False
    assert dict(record.sections())["Connectivity"] == {
        "proxy": '{"enabled":false,"hosts":["a","b"]}',
        "connectionStatus": "Connected",
    }


def test_inner_mappings_are_read_only(degraded_record):
    with pytest.raises(TypeError):
        degraded_record.versions["agent"] = "tampered"
    with pytest.raises(TypeError):
        degraded_record.service_states.update({"Extra": "Running"})
    with pytest.raises(TypeError):
        del degraded_record.service_states["HuntressAgent"]
    assert degraded_record.versions["agent"] == "1.2.3"


def test_nested_values_are_read_only():
    record = HealthRecord.model_validate({"status": "Healthy", "connectivity": {"proxy": {"enabled": True}}})
    with pytest.raises(TypeError):
        record.connectivity["proxy"]["enabled"] = False


def test_non_text_agent_version_is_rendered_as_text():
    record = HealthRecord.model_validate({"status": "Healthy", "versions": {"agent": {"major": 1}}})
    assert record.agent_version() == '{"major":1}'
