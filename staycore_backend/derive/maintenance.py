from collections import Counter

from .records import get_field


def summarize_maintenance(requests, room_id=None):
    statuses = Counter()
    priorities = Counter()
    total = 0
    for request in requests or ():
        if room_id is not None and get_field(request, "room_id") != room_id:
            continue
        total += 1
        statuses[(get_field(request, "status") or "submitted").lower()] += 1
        priorities[(get_field(request, "priority") or "normal").lower()] += 1
    return {
        "total": total,
        "pending": statuses["submitted"],
        "inProgress": statuses["in_progress"],
        "completed": statuses["completed"],
        "urgent": priorities["urgent"],
        "byPriority": dict(priorities),
    }
