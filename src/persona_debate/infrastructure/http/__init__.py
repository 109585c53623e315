"""HTTP infrastructure."""

from persona_debate.infrastructure.http.health_server import HealthCheck
from persona_debate.infrastructure.http.server import HttpServer

__all__ = ["HealthCheck", "HttpServer"]
