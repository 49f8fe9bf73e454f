from huntress_probe.schemas.health import Classification

FETCH_FAILURE_EXIT_CODE = 10

_STATUS_TABLE = {
    "Healthy": Classification(exit_code=0, label="Healthy"),
    "Degraded": Classification(exit_code=1, label="Degraded"),
    "Unhealthy": Classification(exit_code=2, label="Unhealthy"),
}

UNKNOWN = Classification(exit_code=3, label="Unknown")


def classify(status: str) -> Classification:
    """Map a status string to its exit code; exact, case-sensitive match."""
    return _STATUS_TABLE.get(status, UNKNOWN)
