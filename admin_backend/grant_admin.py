#!/usr/bin/env python3
"""
Adds (or with --revoke, removes) a user from the `admins` allowlist.

Usage: python -m admin_backend.grant_admin <user_email> [--revoke]
"""
import sys

from firebase_admin import auth, firestore

from admin_backend.app.config import get_firestore_client
from admin_backend.app.core.constants import ADMINS
from admin_backend.app.dependencies import get_identity


def grant_admin(user_email: str, is_admin: bool = True, db=None, identity=None) -> bool:
    """Writes `admins/{uid}.isAdmin` for the Auth user with this e-mail."""
    try:
        identity = identity or get_identity()
        db = db or get_firestore_client()
    except Exception as e:
        print(f"❌ Firebase initialization failed: {e}")
        return False

    try:
        user = identity.get_user_by_email(user_email)
        print(f"✅ User found: {user.uid} - {user.email}")

        db.collection(ADMINS).document(user.uid).set({
            "isAdmin": is_admin,
            "email": user.email,
            "updatedAt": firestore.SERVER_TIMESTAMP,
        }, merge=True)
        print(f"✅ admins/{user.uid}.isAdmin = {is_admin}")
        return True

    except auth.UserNotFoundError:
        print(f"❌ User not found: {user_email}")
        return False
    except Exception as e:
        print(f"❌ Error updating admin record: {e}")
        return False


def main(argv=None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)
    revoke = "--revoke" in args
    args = [a for a in args if a != "--revoke"]
    if len(args) != 1:
        print("Usage: python -m admin_backend.grant_admin <user_email> [--revoke]")
        return 1

    user_email = args[0]
    print(f"{'Revoking' if revoke else 'Granting'} admin access for: {user_email}")
    if grant_admin(user_email, is_admin=not revoke):
        # Takes effect on the user's next request; the check is not cached
        print("🎉 Done.")
        return 0
    print("💥 Failed to update admin record")
    return 1


if __name__ == "__main__":
    sys.exit(main())
