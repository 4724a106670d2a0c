"""Falcon ASGI application."""

import logging

import falcon
import falcon.asgi
from falcon.asgi import App

from permsync.interfaces.api.middleware.cors import CORSMiddleware
from permsync.interfaces.api.resources.health import HealthResource
from permsync.interfaces.api.resources.permission_sets import (
    PermissionSetResource,
    PermissionSetsResource,
)

logger = logging.getLogger(__name__)


async def _log_exception(req, resp, ex, params):
    logger.error("Unhandled error on %s %s", req.method, req.path, exc_info=ex)
    resp.status = falcon.HTTP_500
    resp.media = {"title": "500 Internal Server Error"}


def create_app(
    permission_sets_resource: PermissionSetsResource,
    permission_set_resource: PermissionSetResource,
    health_resource: HealthResource,
    cors_origins: list[str],
) -> App:
    """Create Falcon ASGI app with routes."""
    app = falcon.asgi.App(middleware=[CORSMiddleware(cors_origins)])
    app.add_error_handler(Exception, _log_exception)
    app.add_route("/v1/health", health_resource)
    app.add_route("/v1/health/ready", health_resource, suffix="ready")
    app.add_route("/v1/permission-sets", permission_sets_resource)
    app.add_route("/v1/permission-sets/{name}", permission_set_resource)
    return app
