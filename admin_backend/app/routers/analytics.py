"""
Analytics router for the admin dashboard: summary totals, leaderboard and
display-name change history.
"""
import logging

from fastapi import APIRouter, Depends
from firebase_admin import firestore

from admin_backend.app.core.constants import AUTH_USER_LIMIT, DISPLAY_NAME_CHANGE_LIMIT, DISPLAY_NAME_CHANGES, PROGRESS
from admin_backend.app.core.errors import internal_error
from admin_backend.app.core.security import get_current_admin
from admin_backend.app.dependencies import get_db, get_identity
from admin_backend.app.services.analytics import summarize_progress
from admin_backend.app.services.leaderboard import leaderboard_row

logger = logging.getLogger("admin.analytics")

router = APIRouter(tags=["Admin: Analytics"], dependencies=[Depends(get_current_admin)])


@router.get("/analytics/summary")
def get_analytics_summary(db=Depends(get_db), identity=Depends(get_identity)):
    """
    Totals over every progress document plus the Auth user count.
    """
    try:
        total_users = len(identity.list_users(AUTH_USER_LIMIT))
        docs = (d.to_dict() or {} for d in db.collection(PROGRESS).stream())
        return summarize_progress(docs, total_users)
    except Exception as exc:
        raise internal_error(exc, logger, "Fetching analytics")


@router.get("/leaderboard")
def get_leaderboard(db=Depends(get_db)):
    """
    All progress documents by level (high→low), no limit, each with a resolved display name.
    """
    try:
        docs = db.collection(PROGRESS).order_by("level", direction=firestore.Query.DESCENDING).stream()
        return [leaderboard_row(d.id, d.to_dict() or {}) for d in docs]
    except Exception as exc:
        raise internal_error(exc, logger, "Building leaderboard")


@router.get("/display-name-changes")
def list_display_name_changes(db=Depends(get_db)):
    try:
        docs = (
            db.collection(DISPLAY_NAME_CHANGES)
            .order_by("timestamp", direction=firestore.Query.DESCENDING)
            .limit(DISPLAY_NAME_CHANGE_LIMIT)
            .stream()
        )
        return [{"id": d.id, **(d.to_dict() or {})} for d in docs]
    except Exception as exc:
        raise internal_error(exc, logger, "Fetching display name changes")
