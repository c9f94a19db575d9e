"""
Dependency wiring for the FastAPI app.

Routers ask for the Firestore client and the identity adapter through these
functions; tests swap them out with `app.dependency_overrides`.
"""
from admin_backend.app.config import get_firestore_client
from admin_backend.app.services.identity import FirebaseIdentity

_identity: FirebaseIdentity | None = None


def get_db():
    return get_firestore_client()


def get_identity() -> FirebaseIdentity:
    global _identity
    if _identity is None:
        _identity = FirebaseIdentity()
    return _identity
