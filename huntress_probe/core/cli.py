"""Command-line surface of the health probe.

Fetch -> classify -> render always runs; locate -> forward runs only when
forwarding is requested and never changes the exit code.
"""

import argparse
import json
import sys
import httpx
from rich.console import Console
import structlog

from huntress_probe.core.config import LOG_LEVELS, ProbeSettings, settings
from huntress_probe.core.errors import FetchError, RenderError
from huntress_probe.core.logging_config import setup_logging
from huntress_probe.schemas.config import ForwardConfig, OutputMode, ProbeConfig, SeverityMap, SummaryConfig
from huntress_probe.schemas.health import Classification, HealthRecord
from huntress_probe.services.classifier import FETCH_FAILURE_EXIT_CODE, classify
from huntress_probe.services.command_runner import SubprocessCommandRunner
from huntress_probe.services.health_fetcher import fetch_health
from huntress_probe.services.renderer import render_fetch_failure, render_human, render_raw, render_summary
from huntress_probe.services.rmm_forwarder import forward
from huntress_probe.services.rmm_locator import locate

logger = structlog.get_logger(__name__)

RENDER_FAILURE_EXIT_CODE = 11
FETCH_FAILURE = Classification(exit_code=FETCH_FAILURE_EXIT_CODE, label="Error")


def positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: {value!r}")
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be greater than 0: {number}")
    return number


def endpoint_url(value: str) -> str:
    """Accept only absolute http(s) URLs with a host."""
    try:
        url = httpx.URL(value)
    except httpx.InvalidURL as e:
        raise argparse.ArgumentTypeError(f"invalid URL {value!r}: {e}")
    if url.scheme not in ("http", "https") or not url.host:
        raise argparse.ArgumentTypeError(f"expected an http(s) URL with a host: {value!r}")
    return value


def build_parser(defaults: ProbeSettings = settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="huntress-probe",
        description="Check the local Huntress agent health endpoint and optionally forward it to Syncro",
    )
    output = parser.add_argument_group("output")
    output.add_argument("--json", "--raw", dest="raw", action="store_true",
                        help="Print the health record as JSON; always exits 0 when the fetch succeeds")
    output.add_argument("--detail", "--verbose", dest="detail", action="store_true",
                        help="Show service states, versions, timestamps and connectivity")
    output.add_argument("--no-color", dest="color", action="store_false", help="Disable colored output")

    summary = parser.add_argument_group("summary line")
    summary.add_argument("--summary", action="store_true", help="Also print a one-line alert summary")
    summary.add_argument("--alert-name", default=defaults.alert_name)
    summary.add_argument("--customer", default=defaults.customer_name)
    summary.add_argument("--site", default=defaults.site_name)
    summary.add_argument("--severity-healthy", default=defaults.severity_healthy)
    summary.add_argument("--severity-degraded", default=defaults.severity_degraded)
    summary.add_argument("--severity-unhealthy", default=defaults.severity_unhealthy)
    summary.add_argument("--create-ticket", action="store_true",
                         help="Passed through as CreateTicket=True in the summary line")

    rmm = parser.add_argument_group("RMM forwarding")
    rmm.add_argument("--forward", "--alert", dest="forward", action="store_true",
                     help="Write the result to Syncro asset fields")
    rmm.add_argument("--prefix", default=defaults.field_prefix, help="Asset field name prefix")

    parser.add_argument("--endpoint", type=endpoint_url, default=defaults.endpoint_url, help="Health endpoint URL")
    parser.add_argument("--timeout", type=positive_int, default=defaults.timeout, help="Request timeout in seconds")
    parser.add_argument("--log-level", type=str.upper, choices=LOG_LEVELS, default=defaults.log_level)
    return parser


def build_config(args: argparse.Namespace, defaults: ProbeSettings = settings) -> ProbeConfig:
    return ProbeConfig(
        endpoint_url=args.endpoint,
        timeout=args.timeout,
        output=OutputMode.RAW if args.raw else OutputMode.HUMAN,
        detail=args.detail,
        color=args.color,
        summary=SummaryConfig(
            enabled=args.summary,
            alert_name=args.alert_name,
            customer=args.customer,
            site=args.site,
            create_ticket=args.create_ticket,
            severities=SeverityMap(
                healthy=args.severity_healthy,
                degraded=args.severity_degraded,
                unhealthy=args.severity_unhealthy,
            ),
        ),
        forward=ForwardConfig(
            enabled=args.forward,
            prefix=args.prefix,
            agent_component=defaults.agent_component,
            extra_paths=tuple(defaults.rmm_extra_paths),
            timeout=defaults.forward_timeout,
        ),
    )


def run(config: ProbeConfig, console: Console | None = None, fetcher=fetch_health, locator=locate,
        forwarder=forward, hostname: str | None = None) -> int:
    """Execute one probe and return the process exit code."""
    if console is None:
        console = Console(no_color=not config.color, highlight=False)
    raw = config.output == OutputMode.RAW

    try:
        record = fetcher(config.endpoint_url, config.timeout)
    except FetchError as e:
        logger.error("Health check failed", kind=e.kind, endpoint=e.endpoint, error=e.message)
        if raw:
            _emit(console, json.dumps(e.to_dict()))
        else:
            render_fetch_failure(console, e)
            if config.summary.enabled:
                detail = f"{e.message}. {e.probable_cause}"
                _emit(console, render_summary(config.summary, FETCH_FAILURE, "Error", detail, hostname))
        return FETCH_FAILURE_EXIT_CODE

    classification = classify(record.status)
    if raw:
        _emit(console, render_raw(record))
    else:
        render_human(console, record, detail=config.detail)
        if config.summary.enabled:
            _emit(console, render_summary(config.summary, classification, record.status, record.message, hostname))

    if config.forward.enabled:
        _forward(config.forward, record, locator, forwarder)

    # Raw mode reports that output succeeded, not the health classification.
    return 0 if raw else classification.exit_code


def _forward(forward_config: ForwardConfig, record: HealthRecord, locator, forwarder) -> bool:
    client_path = locator(extra_paths=forward_config.extra_paths)
    if client_path is None:
        logger.warning("Syncro client not found, skipping RMM forwarding")
        return False
    attempted = forwarder(
        client_path, record, forward_config.prefix,
        runner=SubprocessCommandRunner(timeout=forward_config.timeout),
        agent_component=forward_config.agent_component,
    )
    if not attempted:
        logger.warning("RMM forwarding did not complete", client_path=str(client_path))
    return attempted


def _emit(console: Console, text: str) -> None:
    # Plain write so JSON and summary lines are never wrapped or styled.
    print(text, file=console.file)


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(level=args.log_level)
    config = build_config(args)
    try:
        return run(config)
    except RenderError as e:
        logger.error("Unable to render health output", error=str(e))
        print(f"Error: {e}", file=sys.stderr)
        return RENDER_FAILURE_EXIT_CODE
