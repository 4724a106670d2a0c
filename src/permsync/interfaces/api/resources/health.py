"""Health check endpoints."""

import logging
from collections.abc import Awaitable, Callable, Mapping

import falcon.asgi

from permsync.domain.exceptions import PermSyncError

logger = logging.getLogger(__name__)

ReadinessCheck = Callable[[], Awaitable[None]]


class HealthResource:
    """Health and readiness endpoints."""

    def __init__(self, readiness_checks: Mapping[str, ReadinessCheck] | None = None) -> None:
        self._readiness_checks = dict(readiness_checks or {})

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """GET /v1/health - liveness."""
        resp.media = {"status": "ok"}
        resp.status = falcon.HTTP_200

    async def on_get_ready(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """GET /v1/health/ready - readiness (Metadata Store, Reference Store, links table)."""
        checks: dict[str, str] = {}
        ready = True
        for name, check in self._readiness_checks.items():
            try:
                await check()
                checks[name] = "ok"
            except PermSyncError as e:
                logger.warning("Readiness check %s failed: %s", name, e)
                checks[name] = str(e)
                ready = False

        if ready:
            resp.media = {"status": "ready", "checks": checks}
            resp.status = falcon.HTTP_200
        else:
            resp.media = {"status": "unavailable", "checks": checks}
            resp.status = falcon.HTTP_503
            resp.set_header("Retry-After", "1")
