"""
Admin gate for mutating operations (upload, edit, delete).

The credential is a static shared secret presented in the x-api-key header
or, failing that, the Authorization header (optionally as "Bearer <token>").
"""

import hmac
import logging

from fastapi import Header, Request

from showcase.config import Settings
from showcase.core.exceptions import Unauthorized

logger = logging.getLogger(__name__)

BEARER_SCHEME = "bearer"


def _normalize(credential: str | None) -> str:
    value = (credential or "").strip()
    scheme, _, rest = value.partition(" ")
    if scheme.lower() == BEARER_SCHEME:
        value = rest.strip()
    return value


def authorize(credential: str | None, secret: str | None) -> None:
    """
    Check a presented credential against the configured admin secret.

    Raises:
        Unauthorized: "Missing admin token" when nothing was presented,
            "Invalid admin token" on mismatch or when no secret is configured
    """
    presented = _normalize(credential)
    expected = (secret or "").strip()

    if not presented:
        logger.warning("Admin request rejected: no credential presented")
        raise Unauthorized("Missing admin token")

    if not expected or not hmac.compare_digest(
        presented.encode("utf-8"), expected.encode("utf-8")
    ):
        logger.warning(
            f"Admin request rejected: invalid credential (length {len(presented)})"
        )
        raise Unauthorized("Invalid admin token")


async def require_admin(
    request: Request,
    x_api_key: str | None = Header(default=None),
    authorization: str | None = Header(default=None),
) -> None:
    """
    Route dependency guarding admin operations.

    Usage:
        @router.delete("/{short_id}", dependencies=[Depends(require_admin)])
    """
    settings: Settings = request.app.state.settings
    credential = x_api_key if x_api_key and x_api_key.strip() else authorization
    authorize(credential, settings.ADMIN_TOKEN)
