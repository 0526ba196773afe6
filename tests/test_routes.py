from staycore_backend.extensions import db
from staycore_backend.models import Room


def test_health(client):
    resp = client.get("/api/health")
    assert resp.status_code == 200
    assert resp.get_json()["status"] == "ok"


def test_admin_login_rejects_bad_password(client):
    resp = client.post("/api/auth/admin-login", json={"username": "admin", "password": "nope"})
    assert resp.status_code == 401


def test_me_reports_admin_role(client, auth_headers):
    resp = client.get("/api/auth/me", headers=auth_headers)
    assert resp.status_code == 200
    assert resp.get_json()["is_admin"] is True


def test_admin_routes_need_token(client):
    assert client.get("/api/rooms").status_code == 401
    assert client.get("/api/reports/financial").status_code == 401


def test_available_count_is_public(client, room):
    resp = client.get("/api/rooms/available-count")
    assert resp.status_code == 200
    assert resp.get_json() == {"available": 1}


def test_room_status_change(client, auth_headers, room):
    room_id = room.id
    resp = client.put(f"/api/rooms/{room_id}/status", json={"status": "maintenance", "notes": ""},
                      headers=auth_headers)
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "notes_required"

    resp = client.put(f"/api/rooms/{room_id}/status", json={"status": "maintenance", "notes": "AC broken"},
                      headers=auth_headers)
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["room"]["status"] == "maintenance"
    assert body["room"]["notes"] == "AC broken"
    assert body["transition"]["clearsTenant"] is True


def test_unknown_room_is_404(client, auth_headers):
    resp = client.put("/api/rooms/999/status", json={"status": "available"}, headers=auth_headers)
    assert resp.status_code == 404
    assert resp.get_json()["error"] == "not_found"


def test_guest_payment_flow(client, auth_headers, guest):
    guest_id = guest.id
    resp = client.get("/api/guests/payment-due?start=2024-06-09&end=2024-06-15", headers=auth_headers)
    assert resp.status_code == 200
    assert [g["id"] for g in resp.get_json()["guests"]] == [guest_id]

    resp = client.post(f"/api/guests/{guest_id}/payment", json={}, headers=auth_headers)
    assert resp.status_code == 400

    resp = client.post(f"/api/guests/{guest_id}/payment", json={"payment_method": "card"}, headers=auth_headers)
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["guest"]["payment_status"] == "paid"
    assert body["payment"]["invoice_number"].startswith("INV-")


def test_payment_due_rejects_half_window(client, auth_headers):
    resp = client.get("/api/guests/payment-due?start=2024-06-09", headers=auth_headers)
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "invalid_window"


def test_move_out_via_patch(client, auth_headers, guest, room):
    guest_id, room_id = guest.id, room.id
    resp = client.patch(f"/api/guests/{guest_id}", json={"has_moved_out": True}, headers=auth_headers)
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["guest"]["has_moved_out"] is True
    assert body["room"]["status"] == "needs_cleaning"
    assert body["room"]["tenant_name"] is None

    resp = client.get("/api/guests", headers=auth_headers)
    assert resp.get_json() == []
    assert db.session.get(Room, room_id).status == "needs_cleaning"


def test_financial_report(client, auth_headers, room):
    room_id = room.id
    resp = client.post("/api/payments", json={"room_id": room_id, "amount": 100, "payment_date": "2024-06-01"},
                       headers=auth_headers)
    assert resp.status_code == 201
    resp = client.post("/api/receipts", json={"amount": "40.00", "receipt_date": "2024-06-02", "category": "Supplies"},
                       headers=auth_headers)
    assert resp.status_code == 201

    resp = client.get("/api/reports/financial?period=current-month&as_of=2024-06-20", headers=auth_headers)
    assert resp.status_code == 200
    report = resp.get_json()
    assert report["totalRevenue"] == 100.0
    assert report["totalExpenses"] == 40.0
    assert report["netProfit"] == 60.0
    assert report["profitMargin"] == 60.0
    assert report["categoryBreakdown"] == [{"name": "Supplies", "value": 40.0, "percentage": 100.0}]
    assert report["propertyBreakdown"][0]["revenue"] == 100.0

    resp = client.get("/api/reports/financial?period=fortnight", headers=auth_headers)
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "invalid_period"


def test_occupancy_report(client, auth_headers, guest):
    resp = client.get("/api/reports/occupancy", headers=auth_headers)
    assert resp.status_code == 200
    overall = resp.get_json()["overall"]
    assert overall["occupied"] == 1
    assert overall["occupancyRate"] == 100.0


def test_public_inquiry(client, auth_headers):
    resp = client.post("/api/inquiries", json={"name": "Sam", "email": "sam@example.com", "message": "Weekly rate?"})
    assert resp.status_code == 201

    resp = client.get("/api/inquiries", headers=auth_headers)
    assert [i["name"] for i in resp.get_json()] == ["Sam"]


def test_maintenance_lifecycle_and_report(client, auth_headers, room):
    room_id = room.id
    resp = client.post("/api/maintenance", json={"room_id": room_id, "title": "Leaky tap",
                                                 "description": "Bathroom sink", "priority": "urgent"},
                       headers=auth_headers)
    assert resp.status_code == 201
    request_id = resp.get_json()["id"]

    resp = client.post("/api/maintenance", json={"room_id": room_id, "title": "Bulb", "description": "Hall",
                                                 "priority": "whenever"}, headers=auth_headers)
    assert resp.status_code == 400

    resp = client.put(f"/api/maintenance/{request_id}", json={"status": "completed"}, headers=auth_headers)
    assert resp.status_code == 200
    assert resp.get_json()["completed_at"] is not None

    report = client.get("/api/reports/maintenance", headers=auth_headers).get_json()
    assert report["total"] == 1
    assert report["completed"] == 1
    assert report["urgent"] == 1


def test_patch_guest_with_null_name_is_400(client, auth_headers, guest):
    resp = client.patch(f"/api/guests/{guest.id}", json={"guest_name": None}, headers=auth_headers)
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "missing_field"


def test_move_out_unknown_room_is_404(client, auth_headers, guest):
    resp = client.post(f"/api/guests/{guest.id}/move-out", json={"room_id": 999}, headers=auth_headers)
    assert resp.status_code == 404


def test_room_create_and_edit_keep_ground_floor(client, auth_headers, building):
    resp = client.post("/api/rooms", json={"number": "G1", "building_id": building.id, "floor": 0},
                       headers=auth_headers)
    assert resp.status_code == 201
    room = resp.get_json()
    assert room["floor"] == 0

    resp = client.put(f"/api/rooms/{room['id']}", json={"number": "G2", "rental_rate": "350", "notes": "Garden view"},
                      headers=auth_headers)
    assert resp.status_code == 200
    edited = resp.get_json()
    assert (edited["number"], edited["rental_rate"], edited["notes"], edited["floor"]) == ("G2", 350.0, "Garden view", 0)
    assert edited["status"] == "available"
