# app/services/recycle_bin.py
"""
Feedback <-> recycle bin moves and the expiry sweep.

Resolve and restore are two independent writes (copy, then delete). A failure
between them leaves the document in both collections; nothing here repairs
that, the caller just gets the 500.

The sweep deletes expired entries in batches of BATCH_SIZE. With more than
that many expired entries a later batch can fail after earlier ones have
committed; the GET then returns 500 with part of the purge already done.
"""
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from firebase_admin import firestore

from admin_backend.app.core.constants import FEEDBACK, RECYCLE_BIN, RECYCLE_RETENTION_DAYS, RESOLVED
from admin_backend.app.core.errors import NotFound
from admin_backend.app.services.timefmt import days_after, to_datetime, to_iso, utcnow

logger = logging.getLogger("admin.sweep")

# Firestore caps a write batch at 500 operations
BATCH_SIZE = 400

_RECYCLE_FIELDS = ("recycledAt", "expiresAt")


def resolve_feedback(db, feedback_id: str, retention_days: int = RECYCLE_RETENTION_DAYS) -> None:
    """Copy `feedback/{id}` into the recycle bin as resolved, then delete the original."""
    ref = db.collection(FEEDBACK).document(feedback_id)
    snap = ref.get()
    if not snap.exists:
        raise NotFound("Feedback not found")

    data = snap.to_dict() or {}
    db.collection(RECYCLE_BIN).document(feedback_id).set({
        **data,
        "status": RESOLVED,
        "recycledAt": firestore.SERVER_TIMESTAMP,
        "expiresAt": days_after(utcnow(), retention_days),
    })
    ref.delete()


def restore_feedback(db, feedback_id: str) -> None:
    """Move a recycle bin entry back into `feedback` as read, without the recycle fields."""
    ref = db.collection(RECYCLE_BIN).document(feedback_id)
    snap = ref.get()
    if not snap.exists:
        raise NotFound("Recycled feedback not found")

    original = {k: v for k, v in (snap.to_dict() or {}).items() if k not in _RECYCLE_FIELDS}
    db.collection(FEEDBACK).document(feedback_id).set({
        **original,
        "status": "read",
        "restoredAt": firestore.SERVER_TIMESTAMP,
    })
    ref.delete()


def expiry_of(data: Dict[str, Any], retention_days: int = RECYCLE_RETENTION_DAYS) -> Optional[datetime]:
    """Stored `expiresAt`, else `recycledAt` + retention; None when neither is a timestamp."""
    expires_at = to_datetime(data.get("expiresAt"))
    if expires_at is not None:
        return expires_at
    recycled_at = to_datetime(data.get("recycledAt"))
    if recycled_at is not None:
        return days_after(recycled_at, retention_days)
    return None


def sweep_recycle_bin(
    db,
    now: Optional[datetime] = None,
    retention_days: int = RECYCLE_RETENTION_DAYS,
) -> Tuple[List[Dict[str, Any]], int]:
    """
    Read the whole recycle bin newest-first, delete expired entries and return
    the live ones together with the number purged.

    Entries with no usable timestamp never expire.
    """
    now = now or utcnow()
    snaps = (
        db.collection(RECYCLE_BIN)
        .order_by("recycledAt", direction=firestore.Query.DESCENDING)
        .stream()
    )

    live: List[Dict[str, Any]] = []
    expired = []
    for snap in snaps:
        data = snap.to_dict() or {}
        expires_at = expiry_of(data, retention_days)
        if expires_at is not None and expires_at < now:
            expired.append(snap.reference)
        else:
            live.append({"id": snap.id, **data, "recycledAt": to_iso(data.get("recycledAt"))})

    for start in range(0, len(expired), BATCH_SIZE):
        batch = db.batch()
        for ref in expired[start:start + BATCH_SIZE]:
            batch.delete(ref)
        batch.commit()

    if expired:
        logger.info("Purged %d expired recycle bin entries", len(expired))
    return live, len(expired)


def run_scheduled_sweep() -> None:
    """APScheduler job: same sweep as the list route, without a caller to report to."""
    from admin_backend.app.config import get_firestore_client, get_settings

    try:
        sweep_recycle_bin(get_firestore_client(), retention_days=get_settings().recycle_retention_days)
    except Exception:
        logger.exception("Scheduled recycle bin sweep failed")
