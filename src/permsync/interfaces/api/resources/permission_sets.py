"""Permission set API resources."""

import logging

import falcon
import falcon.asgi

from permsync.application.dto.permission_set_dto import PermissionSetAction
from permsync.application.use_cases.permission_set.delete_permission_set import (
    DeletePermissionSetUseCase,
)
from permsync.application.use_cases.permission_set.get_permission_set import (
    GetPermissionSetUseCase,
)
from permsync.application.use_cases.permission_set.upsert_permission_set import (
    UpsertPermissionSetUseCase,
)
from permsync.domain.exceptions import (
    DependentLinksExist,
    LinkLookupError,
    NotFound,
    PermSyncError,
    StoreError,
    ValidationError,
)

logger = logging.getLogger(__name__)


def _error(resp: falcon.asgi.Response, status: str, exc: PermSyncError) -> None:
    resp.status = status
    resp.media = {"error": str(exc), "type": type(exc).__name__}


class PermissionSetsResource:
    """POST /v1/permission-sets - upsert or delete a permission set."""

    def __init__(
        self,
        upsert_permission_set: UpsertPermissionSetUseCase,
        delete_permission_set: DeletePermissionSetUseCase,
    ) -> None:
        self._upsert = upsert_permission_set
        self._delete = delete_permission_set

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """Body: {"name": str, "document": object, "action": "upsert" | "delete"}."""
        try:
            body = await req.get_media()
        except (falcon.MediaNotFoundError, falcon.MediaMalformedError):
            _error(resp, falcon.HTTP_400, ValidationError("Request body must be a JSON object"))
            return
        if not isinstance(body, dict):
            _error(resp, falcon.HTTP_400, ValidationError("Request body must be a JSON object"))
            return

        try:
            action = PermissionSetAction(str(body.get("action", PermissionSetAction.UPSERT)).lower())
        except ValueError:
            _error(resp, falcon.HTTP_400, ValidationError(f"Unknown action: {body.get('action')}"))
            return

        try:
            if action is PermissionSetAction.DELETE:
                ack = await self._delete.execute(body.get("name"))
            else:
                if "document" not in body:
                    raise ValidationError("Missing required field: document")
                ack = await self._upsert.execute(body.get("name"), body["document"])
        except ValidationError as e:
            _error(resp, falcon.HTTP_400, e)
        except DependentLinksExist as e:
            _error(resp, falcon.HTTP_409, e)
        except (StoreError, LinkLookupError) as e:
            logger.warning("Transient failure handling %s: %s", action, e)
            _error(resp, falcon.HTTP_503, e)
            resp.set_header("Retry-After", "1")
        else:
            resp.media = {"name": ack.name, "status": ack.status}
            resp.status = falcon.HTTP_200


class PermissionSetResource:
    """GET /v1/permission-sets/{name} - read a permission set."""

    def __init__(self, get_permission_set: GetPermissionSetUseCase) -> None:
        self._get = get_permission_set

    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, name: str
    ) -> None:
        """Return the stored document and provider id (null until provisioned)."""
        try:
            output = await self._get.execute(name)
        except NotFound as e:
            _error(resp, falcon.HTTP_404, e)
            return
        except StoreError as e:
            _error(resp, falcon.HTTP_503, e)
            return
        resp.media = {
            "name": output.name,
            "document": output.document,
            "providerId": output.provider_id,
        }
        resp.status = falcon.HTTP_200
