"""Fake Huntress agent entrypoint.

Configures logging, creates the FastAPI app serving /health, and starts the server.
"""

from huntress_probe.mock.fake_agent_server import create_app
from huntress_probe.core.config import settings
from huntress_probe.core.logging_config import setup_logging

# Configure logging
logger = setup_logging(level="INFO").bind(module=__name__)

# Create FastAPI application
app = create_app()

if __name__ == "__main__":
    import uvicorn

    logger.info(f"Starting fake agent on {settings.fake_agent_host}:{settings.fake_agent_port}")
    uvicorn.run(
        "fake_agent_entrypoint:app",
        host=settings.fake_agent_host,
        port=settings.fake_agent_port,
        log_level="info",
    )
