"""Pushes health fields to the Syncro RMM client, one ``asset_field set`` per field.

Forwarding is best-effort telemetry: a field that fails validation or whose
client call exits nonzero is logged and skipped, and the remaining fields
are still attempted.
"""

import re
from datetime import datetime
from pathlib import Path
import structlog

from huntress_probe.core.errors import ForwardError
from huntress_probe.schemas.health import ForwardField, HealthRecord, format_value
from huntress_probe.services.command_runner import CommandRunner, SubprocessCommandRunner

logger = structlog.get_logger(__name__)

FIELD_NAME_RE = re.compile(r"^[A-Za-z0-9_-]+$")
UNSAFE_VALUE_CHARS = str.maketrans("", "", '"`$\x00')
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def derive_fields(record: HealthRecord, prefix: str, agent_component: str = "agent",
                  now: datetime | None = None) -> list[ForwardField]:
    now = now or datetime.now()
    fields = [
        ForwardField(name=f"{prefix}status", value=record.status),
        ForwardField(name=f"{prefix}last_check", value=now.strftime(TIMESTAMP_FORMAT)),
        ForwardField(name=f"{prefix}message", value=record.message or ""),
    ]
    agent_version = record.agent_version(agent_component)
    if agent_version:
        fields.append(ForwardField(name=f"{prefix}agent_version", value=agent_version))
    if record.service_states:
        services = ",".join(f"{name}:{format_value(state)}" for name, state in record.service_states.items())
        fields.append(ForwardField(name=f"{prefix}services", value=services))
    return fields


def is_valid_field_name(name: str) -> bool:
    return bool(FIELD_NAME_RE.match(name))


def sanitize_value(value: str) -> str:
    """Strip characters that could break argument quoting on the client side.

    NUL bytes are removed too; they cannot be passed in a process argument.
    """
    return value.translate(UNSAFE_VALUE_CHARS)


def forward(client_path: Path, record: HealthRecord, prefix: str, runner: CommandRunner | None = None,
            agent_component: str = "agent", now: datetime | None = None) -> bool:
    """Set every derived field on the RMM client.

    Returns True once every field has been attempted, whatever the
    per-field outcome. Returns False, with a warning, only when the
    procedure is interrupted as a whole (e.g. the client cannot be spawned).
    """
    runner = runner or SubprocessCommandRunner()
    log = logger.bind(client_path=str(client_path))
    try:
        for field in derive_fields(record, prefix, agent_component, now):
            _set_field(runner, client_path, field, log)
    except ForwardError as e:
        log.warning("RMM forwarding aborted", error=str(e))
        return False
    except Exception as e:
        log.warning("RMM forwarding aborted by unexpected error", error=str(e), exception_type=type(e).__name__)
        return False
    return True


def _set_field(runner: CommandRunner, client_path: Path, field: ForwardField, log) -> bool:
    if not is_valid_field_name(field.name):
        log.warning("Skipping RMM field with invalid name", field=field.name)
        return False

    args = [str(client_path), "asset_field", "set", field.name, sanitize_value(field.value)]
    try:
        result = runner.run(args)
    except OSError as e:
        raise ForwardError(f"Unable to run RMM client for field {field.name}: {e}") from e
    except ValueError as e:
        # Rejected argument for this field only (e.g. an unencodable value).
        log.warning("Skipping RMM field the client could not be run with", field=field.name, error=str(e))
        return False

    if result.returncode != 0:
        log.warning("RMM client failed to set field", field=field.name, exit_code=result.returncode,
                    stderr=result.stderr)
        return False
    log.debug("RMM field set", field=field.name)
    return True
