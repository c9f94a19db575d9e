# app/services/identity.py
"""
Thin adapter over `firebase_admin.auth`.

Routers never import the Auth SDK directly; they receive a `FirebaseIdentity`
through `get_identity` so the verify/list calls can be replaced in tests.
"""
from typing import Any, Dict, List, Optional

from firebase_admin import auth as fb_auth

from admin_backend.app.config import get_firebase_app
from admin_backend.app.core.constants import AUTH_USER_LIMIT
from admin_backend.app.services.timefmt import millis_to_iso


class FirebaseIdentity:
    """Construction is free; the Firebase app is resolved on the first SDK call."""

    def __init__(self, app=None):
        self._app = app

    @property
    def app(self):
        if self._app is None:
            self._app = get_firebase_app()
        return self._app

    def verify_token(self, id_token: str) -> Dict[str, Any]:
        # check_revoked=True -> tokens issued before a logout are rejected
        return fb_auth.verify_id_token(id_token, app=self.app, check_revoked=True)

    def list_users(self, max_results: int = AUTH_USER_LIMIT) -> List[Any]:
        page = fb_auth.list_users(max_results=max_results, app=self.app)
        return list(page.users)

    def get_user_by_email(self, email: str):
        return fb_auth.get_user_by_email(email, app=self.app)


def _provider_to_dict(info: Any) -> Dict[str, Any]:
    return {
        "uid": getattr(info, "uid", None),
        "displayName": getattr(info, "display_name", None),
        "email": getattr(info, "email", None),
        "photoURL": getattr(info, "photo_url", None),
        "providerId": getattr(info, "provider_id", None),
        "phoneNumber": getattr(info, "phone_number", None),
    }


def auth_user_to_dict(user: Any) -> Dict[str, Any]:
    """Reshape a Firebase `UserRecord` into the dashboard's camelCase user row."""
    meta = getattr(user, "user_metadata", None)
    created: Optional[int] = getattr(meta, "creation_timestamp", None)
    last_sign_in: Optional[int] = getattr(meta, "last_sign_in_timestamp", None)
    return {
        "uid": user.uid,
        "email": user.email,
        "displayName": user.display_name,
        "photoURL": user.photo_url,
        "emailVerified": bool(user.email_verified),
        "disabled": bool(user.disabled),
        "creationTime": millis_to_iso(created),
        "lastSignInTime": millis_to_iso(last_sign_in),
        "providerData": [_provider_to_dict(p) for p in (user.provider_data or [])],
    }
