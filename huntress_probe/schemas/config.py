from enum import Enum
from pydantic import BaseModel, ConfigDict, Field


class OutputMode(str, Enum):
    HUMAN = "human"
    RAW = "raw"


class SeverityMap(BaseModel):
    """Severity labels used in the summary line for each named status."""
    model_config = ConfigDict(frozen=True)

    healthy: str = "info"
    degraded: str = "warning"
    unhealthy: str = "critical"

    def for_status(self, status: str | None) -> str:
        """Unknown statuses and fetch failures use the unhealthy label."""
        if status == "Healthy":
            return self.healthy
        if status == "Degraded":
            return self.degraded
        return self.unhealthy


class SummaryConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    enabled: bool = False
    alert_name: str = "Huntress Agent Health"
    customer: str = ""
    site: str = ""
    create_ticket: bool = False
    severities: SeverityMap = Field(default_factory=SeverityMap)


class ForwardConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    enabled: bool = False
    prefix: str = "huntress_"
    agent_component: str = "agent"
    extra_paths: tuple[str, ...] = ()
    timeout: int = 30


class ProbeConfig(BaseModel):
    """Everything one probe run needs, resolved from settings and CLI flags."""
    model_config = ConfigDict(frozen=True)

    endpoint_url: str = "http://localhost:24799/health"
    timeout: int = 10
    output: OutputMode = OutputMode.HUMAN
    detail: bool = False
    color: bool = True
    summary: SummaryConfig = Field(default_factory=SummaryConfig)
    forward: ForwardConfig = Field(default_factory=ForwardConfig)
