import logging
import time
import json
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response
import structlog

logger = structlog.get_logger(__name__)

class LoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        """Log each request to the fake agent and the health payload it returned"""
        start_time = time.time()

        logger.info(
            "Incoming Request",
            method=request.method,
            path=request.url.path,
            query_params=dict(request.query_params),
        )

        response = await call_next(request)

        # The body iterator can be consumed only once, so rebuild the response
        response_body = b""
        async for chunk in response.body_iterator:
            response_body += chunk
        response = Response(
            content=response_body,
            status_code=response.status_code,
            headers=dict(response.headers),
            media_type=response.media_type
        )

        process_time = time.time() - start_time
        response_log = {
            "status_code": response.status_code,
            "process_time": f"{process_time:.4f}s",
        }
        if logging.getLogger(__name__).isEnabledFor(logging.DEBUG):
            try:
                response_log["body"] = json.loads(response_body.decode("utf-8"))
            except ValueError:
                response_log["body"] = response_body.decode("utf-8")  # Log as raw text

        logger.info("Outgoing Response", **response_log)

        return response
