# app/routers/diagnostics.py
import logging

from fastapi import APIRouter, Depends

from admin_backend.app.core.errors import internal_error
from admin_backend.app.core.security import get_current_admin
from admin_backend.app.dependencies import get_db

logger = logging.getLogger("admin.diagnostics")

router = APIRouter(tags=["Admin: Diagnostics"], dependencies=[Depends(get_current_admin)])


@router.get("/test-firestore", summary="List root collections (connectivity check)")
def test_firestore(db=Depends(get_db)):
    try:
        return {"collections": [col.id for col in db.collections()]}
    except Exception as exc:
        raise internal_error(exc, logger, "Listing collections")
