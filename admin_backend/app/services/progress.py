# app/services/progress.py
"""Cross-referencing Firebase Auth users with the `progress` collection."""
from typing import Any, Dict, Iterable, List

from admin_backend.app.core.constants import LEARN_FLAGS
from admin_backend.app.services.identity import auth_user_to_dict
from admin_backend.app.services.timefmt import iso_to_millis, millis_to_iso


def progress_by_uid(snaps: Iterable) -> Dict[str, Dict[str, Any]]:
    return {s.id: (s.to_dict() or {}) for s in snaps}


def progress_row(doc_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
    """`userId` + document fields, with `lastStreakUtc` rendered as ISO-8601."""
    row = {"userId": doc_id, **data}
    row["lastStreakUtc"] = millis_to_iso(data.get("lastStreakUtc"))
    return row


def learn_progress_rows(users: Iterable, progress: Dict[str, Dict[str, Any]]) -> List[Dict[str, Any]]:
    rows = []
    for user in users:
        data = progress.get(user.uid) or {}
        row = {
            "userId": user.uid,
            "displayName": user.display_name or user.email or user.uid,
        }
        for flag in LEARN_FLAGS:
            row[flag] = bool(data.get(flag))
        rows.append(row)
    return rows


def combined_rows(users: Iterable, progress: Dict[str, Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Auth rows with the whole progress doc (or None), most recent sign-in first."""
    rows = []
    for user in users:
        row = auth_user_to_dict(user)
        row["progress"] = progress.get(user.uid)
        rows.append(row)
    rows.sort(key=lambda r: iso_to_millis(r.get("lastSignInTime")), reverse=True)
    return rows
