"""Output renderers for the three probe output modes.

Raw and summary renderers return text; the human renderer writes styled
text to a ``rich`` console.
"""

import socket
from pydantic_core import PydanticSerializationError
from rich.console import Console
from rich.text import Text

from huntress_probe.core.errors import FetchError, RenderError
from huntress_probe.schemas.config import SummaryConfig
from huntress_probe.schemas.health import Classification, HealthRecord

TITLE = "Huntress Agent Health Check"

STATUS_STYLES = {
    "Healthy": "bold green",
    "Degraded": "bold yellow",
    "Unhealthy": "bold red",
}
DEFAULT_STATUS_STYLE = "bold magenta"
RUNNING_STYLE = "green"
NOT_RUNNING_STYLE = "red"


def render_raw(record: HealthRecord) -> str:
    """Serialize the full record back to JSON."""
    try:
        return record.model_dump_json(by_alias=True, exclude_none=True, indent=2)
    except PydanticSerializationError as e:
        raise RenderError(f"Unable to serialize health record: {e}") from e


def render_human(console: Console, record: HealthRecord, detail: bool = False) -> None:
    _banner(console)
    style = STATUS_STYLES.get(record.status, DEFAULT_STATUS_STYLE)
    console.print(Text.assemble(("Overall Status: ", "bold"), (record.status, style)))
    if record.has_message:
        console.print(Text.assemble(("Message: ", "bold"), record.message))

    if not detail:
        return

    for title, mapping in record.sections():
        console.print()
        console.print(Text(f"{title}:", style="bold cyan"))
        for name, value in mapping.items():
            if title == "Service States":
                value_style = RUNNING_STYLE if value == "Running" else NOT_RUNNING_STYLE
            else:
                value_style = ""
            console.print(Text.assemble("  - ", (f"{name}: ", "bold"), (value, value_style)))


def render_fetch_failure(console: Console, error: FetchError) -> None:
    _banner(console)
    console.print(Text.assemble(("Overall Status: ", "bold"), ("Error", "bold red")))
    console.print(Text(f"Unable to retrieve health data: {error.message}", style="red"))
    console.print(Text(f"{error.probable_cause} ({error.endpoint}).", style="yellow"))


def render_summary(summary: SummaryConfig, classification: Classification, status: str | None,
                   detail: str | None, hostname: str | None = None) -> str:
    """Single machine-parseable line; absent values render as empty strings."""
    if hostname is None:
        hostname = socket.gethostname()
    leading = "OK" if classification.exit_code == 0 else "ALERT"
    parts = [
        f"{leading}: {_clean(summary.alert_name)}",
        f"Status={_clean(status)}",
        f"Severity={_clean(summary.severities.for_status(status))}",
        f"Asset={_clean(hostname)}",
        f"Customer={_clean(summary.customer)}",
        f"Site={_clean(summary.site)}",
        f"CreateTicket={summary.create_ticket}",
        f"Detail={_clean(detail)}",
    ]
    return " | ".join(parts)


def _banner(console: Console) -> None:
    rule = "=" * (len(TITLE) + 4)
    console.print(Text(rule, style="bold blue"))
    console.print(Text(f"  {TITLE}", style="bold blue"))
    console.print(Text(rule, style="bold blue"))


def _clean(value: str | None) -> str:
    # Keep the summary on one line.
    if not value:
        return ""
    return " ".join(value.splitlines()).strip()
