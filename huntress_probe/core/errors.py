"""Exception hierarchy for the health probe.

Fetch failures are fatal to a run (exit code 10). Forward failures never
leave the forwarder; they are logged and turned into a ``False`` result.
"""

PROBABLE_CAUSE = (
    "The Huntress agent may not be installed, may not be running, "
    "or its health endpoint is not accessible"
)


class ProbeError(Exception):
    """Base class for every error raised by the probe."""


class FetchError(ProbeError):
    """Health data could not be obtained from the agent endpoint."""

    kind = "fetch_error"

    def __init__(self, message: str, endpoint: str, probable_cause: str = PROBABLE_CAUSE):
        super().__init__(message)
        self.message = message
        self.endpoint = endpoint
        self.probable_cause = probable_cause

    def to_dict(self) -> dict[str, str]:
        return {"error": self.message, "kind": self.kind, "endpoint": self.endpoint}


class FetchUnreachableError(FetchError):
    """Connection refused, name resolution failure or non-2xx response."""

    kind = "unreachable"


class FetchTimeoutError(FetchError):
    """No response arrived within the configured bound."""

    kind = "timeout"


class FetchParseError(FetchError):
    """The response body is not a valid health document."""

    kind = "parse_error"


class RenderError(ProbeError):
    """The health record could not be serialized for output."""


class ForwardError(ProbeError):
    """The forwarding procedure was interrupted as a whole."""
