"""Health check endpoints."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any

from aiohttp import web

if TYPE_CHECKING:
    from persona_debate.infrastructure.persistence.database import DatabaseManager

logger = logging.getLogger(__name__)


class HealthCheck:
    """Provides /live and /ready endpoints for Kubernetes probes."""

    def __init__(self, db_manager: DatabaseManager) -> None:
        """Initialize the health check.

        Args:
            db_manager: DatabaseManager instance.
        """
        self._db_manager = db_manager

    async def check_liveness(self) -> dict[str, Any]:
        """Check if the application is alive.

        Returns:
            Liveness status with timestamp.
        """
        return {
            "status": "alive",
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    async def check_readiness(self) -> dict[str, Any]:
        """Check if the application is ready to serve traffic.

        Returns:
            Readiness status with component health details.
        """
        db_ok = await self._db_manager.is_healthy()
        return {"ready": db_ok, "database": db_ok}

    def register(self, app: web.Application) -> None:
        """Add the health routes to an application."""
        app.router.add_get("/live", self._handle_live)
        app.router.add_get("/ready", self._handle_ready)

    async def _handle_live(self, request: web.Request) -> web.Response:
        """Handle /live endpoint."""
        result = await self.check_liveness()
        return web.json_response(result)

    async def _handle_ready(self, request: web.Request) -> web.Response:
        """Handle /ready endpoint."""
        result = await self.check_readiness()
        status = 200 if result["ready"] else 503
        return web.json_response(result, status=status)
