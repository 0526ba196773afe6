import pytest

from staycore_backend.derive import can_transition_room
from staycore_backend.errors import ValidationError


def test_maintenance_requires_notes():
    with pytest.raises(ValidationError) as exc:
        can_transition_room("available", "maintenance", {"notes": ""})
    assert exc.value.code == "notes_required"

    with pytest.raises(ValidationError):
        can_transition_room("available", "maintenance", {"notes": "   "})


def test_maintenance_with_notes_clears_tenant():
    result = can_transition_room("occupied", "maintenance", {"notes": "AC broken", "tenant_name": "Kim"})
    assert result.to_status == "maintenance"
    assert result.changes["notes"] == "AC broken"
    assert result.changes["tenant_name"] is None
    assert result.changes["tenant_phone"] is None
    assert result.changes["tenant_email"] is None
    assert result.clears_tenant


def test_needs_cleaning_always_clears_tenant():
    result = can_transition_room("occupied", "needs_cleaning", {"tenantName": "Kim"})
    assert result.changes["tenant_name"] is None


def test_occupied_takes_tenant_from_payload():
    result = can_transition_room("available", "occupied", {"tenantName": " Kim Lee ", "tenant_phone": "555"})
    assert result.changes == {"status": "occupied", "tenant_name": "Kim Lee", "tenant_phone": "555"}
    assert not result.clears_tenant


def test_alias_target_and_unknown_target():
    assert can_transition_room("available", "out_of_service", {"notes": "Leak"}).to_status == "maintenance"
    with pytest.raises(ValidationError) as exc:
        can_transition_room("available", "demolished")
    assert exc.value.code == "invalid_status"
