# app/core/security.py
"""
Admin authorization.

`get_current_admin` runs after `get_principal` on every protected route and
reads `admins/{uid}` fresh each time, so granting or revoking access takes
effect on the caller's next request.
"""
import logging

from fastapi import Depends

from admin_backend.app.core.auth import get_principal
from admin_backend.app.core.constants import ADMINS
from admin_backend.app.core.errors import Forbidden, InternalError
from admin_backend.app.dependencies import get_db
from admin_backend.app.schemas.principal import Principal

logger = logging.getLogger("admin.auth")


def get_current_admin(
    principal: Principal = Depends(get_principal),
    db=Depends(get_db),
) -> Principal:
    """
    Dependency to allow access only to admin users.
    Only an explicit `isAdmin: true` grants access; a failed lookup is a 500, not a 403.
    """
    try:
        snap = db.collection(ADMINS).document(principal.uid).get()
    except Exception:
        logger.exception("Admin check failed for %s", principal.uid)
        raise InternalError("Admin check failed")

    is_admin = snap.exists and (snap.to_dict() or {}).get("isAdmin") is True
    if not is_admin:
        logger.info("Rejected non-admin principal %s", principal.uid)
        raise Forbidden()
    return principal
