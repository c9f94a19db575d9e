# app/services/leaderboard.py
import logging
from typing import Any, Dict, Optional

logger = logging.getLogger("admin.analytics")

_PLACEHOLDERS = ("undefined", "null")


def _usable_name(value: Any) -> Optional[str]:
    """Non-empty string that isn't a serialized JS placeholder."""
    if not isinstance(value, str) or value in _PLACEHOLDERS:
        return None
    return value.strip() or None


def resolve_display_name(doc_id: str, data: Dict[str, Any]) -> str:
    """
    Name priority: changeName > displayName > e-mail local part > "Player <id[:6]>".
    "Unknown" only when the document has no id to fall back on.
    """
    name = _usable_name(data.get("changeName"))
    source = "changeName"
    if name is None:
        name = _usable_name(data.get("displayName"))
        source = "displayName"
    if name is None:
        email = data.get("email")
        if isinstance(email, str) and "@" in email:
            name = email.split("@")[0]
            source = "email"
    if name is None and doc_id:
        name = "Player " + doc_id[:6]
        source = "id"
    if name is None:
        name, source = "Unknown", "default"

    logger.debug("User %s: displayName=%r (from %s)", doc_id, name, source)
    return name


def leaderboard_row(doc_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
    return {**data, "userId": doc_id, "displayName": resolve_display_name(doc_id, data)}
