from dataclasses import dataclass, field

from ..errors import ValidationError
from .occupancy import KNOWN_STATUSES, normalize_status
from .records import get_field

TENANT_FIELDS = ("tenant_name", "tenant_phone", "tenant_email")
# Statuses that always wipe the occupant off the room
CLEARING_STATUSES = ("needs_cleaning", "maintenance")
OCCUPANT_STATUSES = ("available", "occupied")


@dataclass(frozen=True)
class TransitionResult:
    from_status: str
    to_status: str
    changes: dict = field(default_factory=dict)

    @property
    def clears_tenant(self):
        return self.to_status in CLEARING_STATUSES

    def to_dict(self):
        return {
            "fromStatus": self.from_status,
            "toStatus": self.to_status,
            "clearsTenant": self.clears_tenant,
            "changes": dict(self.changes),
        }


def _text(payload, name):
    value = get_field(payload, name)
    if value is None:
        return None
    return str(value).strip()


def can_transition_room(current_status, next_status, payload=None):
    """Validate a room status change and work out the field changes it implies.

    Any status may move to any other. Moving to maintenance needs a non-empty
    note; moving to needs_cleaning or maintenance clears the tenant fields no
    matter what the payload says; available and occupied accept tenant fields.

    Raises ValidationError("invalid_status") or ValidationError("notes_required").
    """
    payload = payload or {}
    target = normalize_status(next_status)
    if target not in KNOWN_STATUSES:
        raise ValidationError("invalid_status", f"Unknown room status: {next_status!r}", field="status")

    notes = _text(payload, "notes")
    if target == "maintenance" and not notes:
        raise ValidationError("notes_required", "A note is required to put a room into maintenance", field="notes")

    changes = {"status": target}
    if notes:
        changes["notes"] = notes

    if target in CLEARING_STATUSES:
        changes.update(dict.fromkeys(TENANT_FIELDS))
    elif target in OCCUPANT_STATUSES:
        for name in TENANT_FIELDS:
            value = get_field(payload, name)
            if value is not None:
                changes[name] = str(value).strip() or None

    return TransitionResult(from_status=normalize_status(current_status), to_status=target, changes=changes)
