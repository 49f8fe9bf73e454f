import json
from pathlib import Path

import pytest
import structlog

from huntress_probe.schemas.health import HealthRecord

FIXTURES = Path(__file__).parent / "fixtures"


def load_fixture(name: str) -> dict:
    return json.loads((FIXTURES / name).read_text(encoding="utf-8"))


@pytest.fixture
def healthy_payload():
    return load_fixture("healthy.json")


@pytest.fixture
def degraded_record():
    return HealthRecord.model_validate(load_fixture("degraded.json"))


@pytest.fixture(autouse=True)
def _reset_structlog():
    yield
    structlog.reset_defaults()


@pytest.fixture
def minimal_payload():
    return load_fixture("minimal_unhealthy.json")
