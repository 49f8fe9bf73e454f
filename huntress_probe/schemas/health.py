import json
from typing import Any
from pydantic import BaseModel, ConfigDict, Field, field_validator


class ReadOnlyDict(dict):
    """dict that rejects every mutation; serializes like a plain dict."""

    def _readonly(self, *args, **kwargs):
        raise TypeError(f"{type(self).__name__} is read-only")

    __setitem__ = __delitem__ = __ior__ = _readonly
    clear = pop = popitem = setdefault = update = _readonly


def freeze(value: Any) -> Any:
    """Recursively turn dicts into ReadOnlyDicts and lists into tuples."""
    if isinstance(value, dict):
        return ReadOnlyDict((key, freeze(item)) for key, item in value.items())
    if isinstance(value, (list, tuple)):
        return tuple(freeze(item) for item in value)
    return value


def format_value(value: Any) -> str:
    """Text form of a mapping value; nested values are rendered as compact JSON."""
    if isinstance(value, str):
        return value
    return json.dumps(value, separators=(",", ":"), default=str)


class HealthRecord(BaseModel):
    """Health document reported by the agent's local endpoint.

    Optional mappings that the endpoint omits stay ``None`` so callers can
    tell "not reported" apart from "reported empty". Mapping values are
    strings, or nested JSON objects/arrays kept as reported.
    """
    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    status: str = Field(..., description="Overall status (Healthy, Degraded, Unhealthy, ...)")
    message: str | None = Field(default=None, description="Human-readable description")
    service_states: dict[str, Any] | None = Field(default=None, alias="serviceStates", description="Service name -> state")
    versions: dict[str, Any] | None = Field(default=None, description="Component name -> version")
    timestamps: dict[str, Any] | None = Field(default=None, description="Event name -> ISO-8601 timestamp")
    connectivity: dict[str, Any] | None = Field(default=None, description="Connection details")

    @field_validator("status", mode="before")
    @classmethod
    def _status_as_text(cls, value: Any) -> Any:
        if isinstance(value, (int, float, bool)):
            return str(value)
        return value

    @field_validator("message", mode="before")
    @classmethod
    def _message_as_text(cls, value: Any) -> Any:
        if value is None or isinstance(value, str):
            return value
        return str(value)

    @field_validator("service_states", "versions", "timestamps", "connectivity", mode="before")
    @classmethod
    def _scalar_values_as_text(cls, value: Any) -> Any:
        # Scalars are stringified and nulls dropped; nested objects and arrays are kept.
        if not isinstance(value, dict):
            return value
        coerced = {}
        for key, item in value.items():
            if item is None:
                continue
            if isinstance(item, bool):
                coerced[key] = "true" if item else "false"
            elif isinstance(item, (int, float)):
                coerced[key] = str(item)
            else:
                coerced[key] = item
        return coerced

    @field_validator("service_states", "versions", "timestamps", "connectivity", mode="after")
    @classmethod
    def _freeze_mapping(cls, value: dict[str, Any] | None) -> dict[str, Any] | None:
        if value is None:
            return None
        return freeze(value)

    @property
    def has_message(self) -> bool:
        return bool(self.message)

    def agent_version(self, component: str = "agent") -> str | None:
        """Version of the primary agent component, if reported."""
        if not self.versions:
            return None
        version = self.versions.get(component)
        if not version:
            return None
        return format_value(version)

    def sections(self) -> list[tuple[str, dict[str, str]]]:
        """Detail sections that are present, in display order, values as text."""
        candidates = [
            ("Service States", self.service_states),
            ("Versions", self.versions),
            ("Timestamps", self.timestamps),
            ("Connectivity", self.connectivity),
        ]
        return [
            (title, {name: format_value(value) for name, value in mapping.items()})
            for title, mapping in candidates if mapping
        ]


class Classification(BaseModel):
    """Exit code and severity label derived from a status string."""
    model_config = ConfigDict(frozen=True)

    exit_code: int
    label: str


class ForwardField(BaseModel):
    """A single asset field pushed to the RMM client."""
    model_config = ConfigDict(frozen=True)

    name: str
    value: str


class CommandResult(BaseModel):
    """Outcome of one external command invocation."""
    model_config = ConfigDict(frozen=True)

    returncode: int
    stdout: str = ""
    stderr: str = ""
