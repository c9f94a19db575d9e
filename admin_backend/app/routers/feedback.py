# app/routers/feedback.py - Feedback + recycle bin
#
# POST /feedback is public so that client apps without admin credentials can
# submit feedback; everything else sits behind get_current_admin.
import logging

from fastapi import APIRouter, Depends, status
from firebase_admin import firestore

from admin_backend.app.config import Settings, get_settings
from admin_backend.app.core.constants import FEEDBACK, FEEDBACK_LIMIT, FEEDBACK_STATUSES
from admin_backend.app.core.errors import AdminApiError, BadRequest, internal_error
from admin_backend.app.core.security import get_current_admin
from admin_backend.app.dependencies import get_db
from admin_backend.app.schemas.feedback import FeedbackActionOut, FeedbackIn, FeedbackStatusIn
from admin_backend.app.services.recycle_bin import resolve_feedback, restore_feedback, sweep_recycle_bin

logger = logging.getLogger("admin.feedback")

router = APIRouter(prefix="/feedback", tags=["Feedback"])
admin_router = APIRouter(
    prefix="/feedback",
    tags=["Admin: Feedback"],
    dependencies=[Depends(get_current_admin)],
)


# ---------- Public ----------

@router.post("", status_code=status.HTTP_201_CREATED, summary="Submit feedback (no auth)")
def submit_feedback(payload: FeedbackIn, db=Depends(get_db)):
    if not payload.userId or not payload.message:
        raise BadRequest("userId and message are required.")
    try:
        db.collection(FEEDBACK).add({
            "userId": payload.userId,
            "message": payload.message,
            "userName": payload.userName or "Anonymous",
            "userEmail": payload.userEmail or "",
            "status": "new",
            "timestamp": firestore.SERVER_TIMESTAMP,
        })
    except Exception as exc:
        raise internal_error(exc, logger, "Submitting feedback")
    return {"success": True}


# ---------- Admin ----------

@admin_router.get("", summary="(Admin) Latest feedback, newest first")
def list_feedback(db=Depends(get_db)):
    try:
        docs = (
            db.collection(FEEDBACK)
            .order_by("timestamp", direction=firestore.Query.DESCENDING)
            .limit(FEEDBACK_LIMIT)
            .stream()
        )
        return [{"id": d.id, **(d.to_dict() or {})} for d in docs]
    except Exception as exc:
        raise internal_error(exc, logger, "Fetching feedback")


@admin_router.get("/recycled", summary="(Admin) Recycle bin; purges expired entries")
def list_recycled_feedback(db=Depends(get_db), settings: Settings = Depends(get_settings)):
    """
    Lists the recycle bin newest-first. Entries past their expiry are deleted
    as part of this GET and left out of the response.
    """
    try:
        live, _ = sweep_recycle_bin(db, retention_days=settings.recycle_retention_days)
        return live
    except Exception as exc:
        raise internal_error(exc, logger, "Fetching recycled feedback")


@admin_router.patch("/{feedback_id}/status", response_model=FeedbackActionOut, response_model_exclude_none=True)
def update_feedback_status(feedback_id: str, payload: FeedbackStatusIn, db=Depends(get_db)):
    if payload.status not in FEEDBACK_STATUSES:
        raise BadRequest("Invalid status. Must be: new or read. Use /resolve endpoint for resolved status.")
    try:
        db.collection(FEEDBACK).document(feedback_id).update({
            "status": payload.status,
            "updatedAt": firestore.SERVER_TIMESTAMP,
        })
    except Exception as exc:
        raise internal_error(exc, logger, "Updating feedback status")
    return FeedbackActionOut(feedbackId=feedback_id, status=payload.status)


@admin_router.post("/{feedback_id}/resolve", response_model=FeedbackActionOut, response_model_exclude_none=True)
def resolve(feedback_id: str, db=Depends(get_db), settings: Settings = Depends(get_settings)):
    try:
        resolve_feedback(db, feedback_id, retention_days=settings.recycle_retention_days)
    except AdminApiError:
        raise
    except Exception as exc:
        raise internal_error(exc, logger, "Resolving feedback")
    return FeedbackActionOut(feedbackId=feedback_id, message="Feedback moved to recycle bin")


@admin_router.post("/{feedback_id}/restore", response_model=FeedbackActionOut, response_model_exclude_none=True)
def restore(feedback_id: str, db=Depends(get_db)):
    try:
        restore_feedback(db, feedback_id)
    except AdminApiError:
        raise
    except Exception as exc:
        raise internal_error(exc, logger, "Restoring feedback")
    return FeedbackActionOut(feedbackId=feedback_id, message="Feedback restored")
