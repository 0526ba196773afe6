import logging

from flask import Blueprint, jsonify

from ..errors import NotFoundError, ValidationError
from ..extensions import db
from ..models import Inquiry
from ..models.inquiry import INQUIRY_STATUSES
from ..security import admin_required
from ..utils.params import json_body, require_fields

log = logging.getLogger(__name__)

inquiries_bp = Blueprint("inquiries", __name__, url_prefix="/api")


@inquiries_bp.post("/inquiries")
def submit_inquiry():
    """Public contact form"""
    data = json_body()
    require_fields(data, ["name", "email", "message"])
    if "@" not in str(data["email"]):
        raise ValidationError("invalid_email", "A valid email is required", field="email")

    inquiry = Inquiry(
        name=str(data["name"]).strip(),
        email=str(data["email"]).strip(),
        phone=data.get("phone"),
        message=data["message"],
    )
    db.session.add(inquiry)
    db.session.commit()
    log.info("Inquiry %s received", inquiry.id)
    return jsonify({"message": "Inquiry submitted", "id": inquiry.id}), 201


@inquiries_bp.get("/inquiries")
@admin_required
def list_inquiries(auth):
    inquiries = Inquiry.query.order_by(Inquiry.created_at.desc(), Inquiry.id.desc()).all()
    return jsonify([i.serialize() for i in inquiries]), 200


@inquiries_bp.put("/inquiries/<int:inquiry_id>")
@admin_required
def update_inquiry(inquiry_id, auth):
    inquiry = db.session.get(Inquiry, inquiry_id)
    if inquiry is None:
        raise NotFoundError("inquiry", inquiry_id)

    data = json_body()
    status = data.get("status")
    if status not in INQUIRY_STATUSES:
        raise ValidationError("invalid_status", f"status must be one of {', '.join(INQUIRY_STATUSES)}",
                              field="status")
    inquiry.status = status
    db.session.commit()
    return jsonify(inquiry.serialize()), 200
