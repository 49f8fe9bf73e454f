from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")

class ProbeSettings(BaseSettings):
    # Health endpoint
    endpoint_url: str = "http://localhost:24799/health"
    timeout: int = Field(default=10, gt=0)  # seconds allowed for the single health request

    # Summary line
    alert_name: str = "Huntress Agent Health"
    customer_name: str = ""
    site_name: str = ""
    severity_healthy: str = "info"
    severity_degraded: str = "warning"
    severity_unhealthy: str = "critical"

    # RMM forwarding
    field_prefix: str = "huntress_"
    agent_component: str = "agent"  # versions key of the primary agent
    rmm_extra_paths: list[str] = []  # searched before the built-in candidates
    forward_timeout: int = Field(default=30, gt=0)  # seconds per asset_field call

    # Logging
    log_level: str = "WARNING"
    log_file: str | None = None

    # Fake health agent
    fake_agent_host: str = "127.0.0.1"
    fake_agent_port: int = 24799
    fake_agent_status: str = "Healthy"

    @field_validator("log_level")
    @classmethod
    def _known_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"unknown log level: {value}")
        return level

    model_config = SettingsConfigDict(env_prefix="HUNTRESS_PROBE_", env_file=".env", env_file_encoding="utf-8")

# Load settings
settings = ProbeSettings()
