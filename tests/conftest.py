from datetime import date

import pytest

from staycore_backend import create_app
from staycore_backend.config import TestingConfig
from staycore_backend.extensions import db
from staycore_backend.models import Building, Guest, Room
from staycore_backend.security import AuthContext


@pytest.fixture
def app():
    app = create_app(TestingConfig)
    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin():
    return AuthContext.admin()


@pytest.fixture
def auth_headers(client):
    resp = client.post("/api/auth/admin-login", json={"username": "admin", "password": "test-password"})
    assert resp.status_code == 200, resp.get_json()
    return {"Authorization": f"Bearer {resp.get_json()['access_token']}"}


@pytest.fixture
def building(app):
    b = Building(name="Main House", address="1 Harbour Rd")
    db.session.add(b)
    db.session.commit()
    return b


@pytest.fixture
def room(building):
    r = Room(number="101", building_id=building.id, status="available")
    db.session.add(r)
    db.session.commit()
    return r


@pytest.fixture
def guest(room):
    g = Guest(
        room_id=room.id,
        guest_name="Dana Reyes",
        email="dana@example.com",
        phone="555-0101",
        booking_type="weekly",
        check_in_date=date(2024, 6, 3),
        payment_amount=250,
        next_payment_due=date(2024, 6, 10),
        payment_status="pending",
    )
    room.status = "occupied"
    room.tenant_name = g.guest_name
    db.session.add(g)
    db.session.commit()
    return g
