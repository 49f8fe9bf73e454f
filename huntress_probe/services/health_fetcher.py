import json
import httpx
import structlog
from pydantic import ValidationError

from huntress_probe.core.errors import FetchParseError, FetchTimeoutError, FetchUnreachableError
from huntress_probe.schemas.health import HealthRecord

logger = structlog.get_logger(__name__)


def fetch_health(endpoint: str, timeout: float, client: httpx.Client | None = None,
                 transport: httpx.BaseTransport | None = None) -> HealthRecord:
    """Issue one GET to the agent health endpoint and parse the body.

    Exactly one attempt is made. Timeouts raise FetchTimeoutError, transport
    failures and non-2xx responses raise FetchUnreachableError, bodies that
    are not a health document raise FetchParseError.
    """
    if client is None:
        # The context manager closes the connection on every exit path.
        with httpx.Client(timeout=httpx.Timeout(timeout), transport=transport) as owned:
            return _fetch(owned, endpoint, timeout)
    return _fetch(client, endpoint, timeout)


def _fetch(client: httpx.Client, endpoint: str, timeout: float) -> HealthRecord:
    try:
        response = client.get(endpoint, timeout=timeout)
        response.raise_for_status()
    except httpx.TimeoutException as e:
        logger.warning("Health request timed out", endpoint=endpoint, timeout=timeout)
        raise FetchTimeoutError(f"No response from {endpoint} within {timeout} seconds", endpoint) from e
    except httpx.HTTPStatusError as e:
        logger.warning("Health endpoint returned an error", endpoint=endpoint, status_code=e.response.status_code)
        raise FetchUnreachableError(f"Health endpoint returned HTTP {e.response.status_code}", endpoint) from e
    except httpx.InvalidURL as e:
        logger.warning("Health endpoint URL is invalid", endpoint=endpoint, exception=str(e))
        raise FetchUnreachableError(f"Invalid endpoint URL {endpoint}: {e}", endpoint) from e
    except httpx.HTTPError as e:
        logger.warning("Health endpoint unreachable", endpoint=endpoint, exception=str(e),
                       exception_type=type(e).__name__)
        raise FetchUnreachableError(f"Unable to reach {endpoint}: {e}", endpoint) from e

    try:
        payload = response.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        logger.warning("Health response is not valid JSON", endpoint=endpoint)
        raise FetchParseError(f"Malformed JSON from {endpoint}: {e}", endpoint) from e

    if not isinstance(payload, dict):
        raise FetchParseError(f"Expected a JSON object from {endpoint}, got {type(payload).__name__}", endpoint)

    try:
        record = HealthRecord.model_validate(payload)
    except ValidationError as e:
        logger.warning("Health response does not match the expected shape", endpoint=endpoint,
                       errors=e.error_count())
        raise FetchParseError(f"Unexpected health document from {endpoint}: {e.error_count()} invalid field(s)",
                              endpoint) from e

    logger.info("Health data received", endpoint=endpoint, status=record.status)
    return record
