"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Reqline, a product of Garudex Labs

Health check endpoint for the reqline service.

Provides an HTTP endpoint that load balancers and monitoring systems can use
to check that the service is up.
"""

import time
from typing import Any, Dict

from fastapi import FastAPI

from reqline.api.models import HealthCheckResponse
from reqline.logging_config import get_logger

logger = get_logger(__name__)


class HealthEndpoints:
    """
    Health check endpoints for the reqline service.

    The service has no downstream dependencies to check, so a response from
    /health means the process is running.
    """

    def __init__(self, service_name: str, service_version: str):
        """
        Initialize health endpoints.

        Args:
            service_name: Name of the service
            service_version: Version of the service
        """
        self.service_name = service_name
        self.service_version = service_version
        logger.debug(f"HealthEndpoints initialized for {service_name} v{service_version}")

    def health_check(self) -> Dict[str, Any]:
        """
        Return the health check payload.

        Returns:
            Dictionary with service status in JSON format
        """
        return {
            "status": "OK",
            "message": "Reqline parser is running",
            "timestamp": int(time.time() * 1000),
            "service": self.service_name,
            "version": self.service_version,
        }


def create_fastapi_health_endpoint(
    app: FastAPI,
    health_endpoints: HealthEndpoints,
    path: str = "/health"
) -> None:
    """
    Create FastAPI health check endpoint.

    Args:
        app: FastAPI application instance
        health_endpoints: HealthEndpoints instance
        path: URL path for health check endpoint (default: /health)
    """
    @app.get(path, response_model=HealthCheckResponse)
    async def health():
        return health_endpoints.health_check()

    logger.debug(f"Registered FastAPI health endpoint at {path}")
