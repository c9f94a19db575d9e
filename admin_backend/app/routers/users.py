"""
# `app/routers/users.py` - Users & Progress (admin only)

## Endpoints

### `GET /users/learn-progress`
One row per Firebase Auth user (up to 1000) with six "category completed"
flags read from `progress/{uid}`. Missing progress means every flag is `false`.

### `GET /users/progress`
Every `progress` document as `{userId, ...fields}`; `lastStreakUtc` (epoch ms)
is rendered as an ISO-8601 string.

### `GET /users/progress/{userId}`
Single progress document, `404` when it does not exist.

### `GET /users/auth`
Raw Firebase Auth listing (up to 1000 users).

### `GET /users/combined`
Auth listing with the whole progress document attached (`null` when absent),
most recent sign-in first; users that never signed in sort last.
"""
import logging

from fastapi import APIRouter, Depends

from admin_backend.app.core.constants import AUTH_USER_LIMIT, PROGRESS
from admin_backend.app.core.errors import AdminApiError, NotFound, internal_error
from admin_backend.app.core.security import get_current_admin
from admin_backend.app.dependencies import get_db, get_identity
from admin_backend.app.services.identity import auth_user_to_dict
from admin_backend.app.services.progress import (
    combined_rows,
    learn_progress_rows,
    progress_by_uid,
    progress_row,
)

logger = logging.getLogger("admin.users")

router = APIRouter(prefix="/users", tags=["Admin: Users"], dependencies=[Depends(get_current_admin)])


@router.get("/learn-progress")
def get_learn_progress(db=Depends(get_db), identity=Depends(get_identity)):
    try:
        users = identity.list_users(AUTH_USER_LIMIT)
        progress = progress_by_uid(db.collection(PROGRESS).stream())
        return learn_progress_rows(users, progress)
    except Exception as exc:
        raise internal_error(exc, logger, "Fetching learn progress")


@router.get("/progress")
def list_progress(db=Depends(get_db)):
    try:
        return [progress_row(d.id, d.to_dict() or {}) for d in db.collection(PROGRESS).stream()]
    except Exception as exc:
        raise internal_error(exc, logger, "Fetching user progress")


@router.get("/progress/{user_id}")
def get_user_progress(user_id: str, db=Depends(get_db)):
    try:
        snap = db.collection(PROGRESS).document(user_id).get()
        if not snap.exists:
            raise NotFound("User progress not found")
        return progress_row(snap.id, snap.to_dict() or {})
    except AdminApiError:
        raise
    except Exception as exc:
        raise internal_error(exc, logger, "Fetching progress for %s" % user_id)


@router.get("/auth")
def list_auth_users(identity=Depends(get_identity)):
    try:
        return [auth_user_to_dict(u) for u in identity.list_users(AUTH_USER_LIMIT)]
    except Exception as exc:
        raise internal_error(exc, logger, "Fetching auth users")


@router.get("/combined")
def list_combined_users(db=Depends(get_db), identity=Depends(get_identity)):
    try:
        users = identity.list_users(AUTH_USER_LIMIT)
        progress = progress_by_uid(db.collection(PROGRESS).stream())
        return combined_rows(users, progress)
    except Exception as exc:
        raise internal_error(exc, logger, "Fetching combined user data")
