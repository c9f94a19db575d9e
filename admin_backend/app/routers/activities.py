# app/routers/activities.py - activity log (admin only)
import logging

from fastapi import APIRouter, Depends, status
from firebase_admin import firestore
from google.cloud.firestore_v1 import FieldFilter

from admin_backend.app.core.constants import ACTIVITIES, ACTIVITY_LIMIT
from admin_backend.app.core.errors import BadRequest, internal_error
from admin_backend.app.core.security import get_current_admin
from admin_backend.app.dependencies import get_db
from admin_backend.app.schemas.activity import ActivityIn

logger = logging.getLogger("admin.activities")

router = APIRouter(tags=["Admin: Activities"], dependencies=[Depends(get_current_admin)])


def _latest(query):
    docs = query.order_by("timestamp", direction=firestore.Query.DESCENDING).limit(ACTIVITY_LIMIT).stream()
    return [{"id": d.id, **(d.to_dict() or {})} for d in docs]


@router.get("/activities/user/{user_id}", summary="Latest activities of one user")
def list_user_activities(user_id: str, db=Depends(get_db)):
    try:
        q = db.collection(ACTIVITIES).where(filter=FieldFilter("userId", "==", user_id))
        return _latest(q)
    except Exception as exc:
        raise internal_error(exc, logger, "Fetching activities for %s" % user_id)


@router.get("/activities/recent", summary="Latest activities across all users")
def list_recent_activities(db=Depends(get_db)):
    try:
        return _latest(db.collection(ACTIVITIES))
    except Exception as exc:
        raise internal_error(exc, logger, "Fetching recent activities")


@router.post("/activity", status_code=status.HTTP_201_CREATED, summary="Record an activity")
def create_activity(payload: ActivityIn, db=Depends(get_db)):
    if not payload.userId or not payload.type:
        raise BadRequest("userId and type are required.")
    try:
        db.collection(ACTIVITIES).add({
            "userId": payload.userId,
            "type": payload.type,
            "details": payload.details or "",
            "timestamp": firestore.SERVER_TIMESTAMP,
        })
    except Exception as exc:
        raise internal_error(exc, logger, "Creating activity")
    return {"success": True}
