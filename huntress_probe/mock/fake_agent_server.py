from datetime import datetime, timezone
from fastapi import FastAPI
from fastapi.responses import JSONResponse
import structlog

from huntress_probe.core.config import settings
from huntress_probe.middlewares.logging_middleware import LoggingMiddleware

logger = structlog.get_logger(__name__)

MESSAGES = {
    "Healthy": "All systems operational",
    "Degraded": "One or more services need attention",
    "Unhealthy": "Agent services are not running",
}


def sample_health(status: str) -> dict:
    """Health document shaped like the one served by the real agent."""
    now = datetime.now(timezone.utc).isoformat(timespec="seconds")
    running = "Running" if status == "Healthy" else "Stopped"
    payload = {
        "status": status,
        "serviceStates": {
            "HuntressAgent": "Running",
            "HuntressUpdater": running,
            "HuntressRio": "Running",
        },
        "versions": {
            "agent": "0.14.86",
            "updater": "0.14.86",
            "rio": "1.3.2",
        },
        "timestamps": {
            "lastCheckIn": now,
            "lastUpdate": now,
        },
        "connectivity": {
            "lastConnected": now,
            "connectionStatus": "Connected" if status != "Unhealthy" else "Disconnected",
        },
    }
    if status in MESSAGES:
        payload["message"] = MESSAGES[status]
    return payload


def create_app(status: str | None = None) -> FastAPI:
    """Create the fake Huntress agent health service."""
    app = FastAPI(title="Fake Huntress Agent", debug=False)
    app.state.health_status = status or settings.fake_agent_status

    # Add Logging Middleware
    app.add_middleware(LoggingMiddleware)

    @app.get("/status")
    async def liveness():
        return {"status": "Fake Huntress agent is running"}

    @app.get("/health")
    async def health():
        return sample_health(app.state.health_status)

    @app.put("/health/{status}")
    async def set_health(status: str):
        logger.info("Fake agent status changed", status=status)
        app.state.health_status = status
        return {"status": status}

    @app.get("/broken")
    async def broken():
        return JSONResponse(content={"error": "agent internal error"}, status_code=500)

    return app
