# app/services/analytics.py
from numbers import Number
from typing import Any, Dict, Iterable


def _num(value: Any):
    # Booleans are ints in Python but never a score
    if isinstance(value, bool) or not isinstance(value, Number):
        return 0
    return value


def summarize_progress(progress_docs: Iterable[Dict[str, Any]], total_users: int) -> Dict[str, Any]:
    """
    Fold every progress document into running totals and maxima.

    Averages are raw float division over the number of progress docs and fall
    back to 0 when there are none.
    """
    stats = {
        "totalUsersWithProgress": 0,
        "totalLevel": 0,
        "totalXP": 0,
        "totalChests": 0,
        "totalStreaks": 0,
        "maxLevel": 0,
        "maxXP": 0,
    }
    for data in progress_docs:
        level = _num(data.get("level"))
        score = _num(data.get("score"))
        stats["totalUsersWithProgress"] += 1
        stats["totalLevel"] += level
        stats["totalXP"] += score
        stats["totalChests"] += _num(data.get("chestsOpened"))
        stats["totalStreaks"] += _num(data.get("streakDays"))
        stats["maxLevel"] = max(stats["maxLevel"], level)
        stats["maxXP"] = max(stats["maxXP"], score)

    count = stats["totalUsersWithProgress"]
    return {
        "totalUsers": total_users,
        **stats,
        "avgLevel": stats["totalLevel"] / count if count > 0 else 0,
        "avgXP": stats["totalXP"] / count if count > 0 else 0,
    }
