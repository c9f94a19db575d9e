# app/core/auth.py
import logging
from typing import Optional

from fastapi import Depends, Request

from admin_backend.app.core.errors import InvalidCredential, Unauthenticated
from admin_backend.app.dependencies import get_identity
from admin_backend.app.schemas.principal import Principal
from admin_backend.app.services.identity import FirebaseIdentity

logger = logging.getLogger("admin.auth")


def _extract_bearer_token(request: Request) -> Optional[str]:
    """
    Reads the token from an `Authorization: Bearer <id_token>` header.
    Returns None when the header is missing or not a bearer credential.
    """
    auth_header = request.headers.get("Authorization")
    if not auth_header:
        return None
    parts = auth_header.split()
    if len(parts) == 2 and parts[0].lower() == "bearer":
        return parts[1]
    return None


def _token_to_principal(decoded: dict) -> Principal:
    uid = decoded.get("uid") or decoded.get("user_id") or decoded.get("sub")
    if not uid:
        raise InvalidCredential("Token missing uid")
    return Principal(
        uid=uid,
        email=decoded.get("email"),
        display_name=decoded.get("name"),
        claims=decoded,
    )


# --------- FastAPI Dependencies --------- #

def get_principal(
    request: Request,
    identity: FirebaseIdentity = Depends(get_identity),
) -> Principal:
    """
    Token required: verifies it against Firebase Auth and returns the Principal.
    Missing token -> 401 unauthenticated; rejected token -> 401 invalid_credential.
    """
    token = _extract_bearer_token(request)
    if not token:
        raise Unauthenticated()
    try:
        decoded = identity.verify_token(token)
    except Exception as exc:
        logger.warning("Auth verification failed: %s", exc)
        raise InvalidCredential()
    principal = _token_to_principal(decoded)
    request.state.principal = principal
    return principal
