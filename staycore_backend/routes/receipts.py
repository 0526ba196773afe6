from flask import Blueprint, jsonify, request

from ..errors import NotFoundError
from ..extensions import db
from ..models import Receipt
from ..security import admin_required
from ..utils.params import amount_value, date_value, int_value, json_body, pagination, require_fields

receipts_bp = Blueprint("receipts", __name__, url_prefix="/api")

TEXT_FIELDS = ("vendor", "category", "payment_method", "description")


def _get_receipt(receipt_id):
    receipt = db.session.get(Receipt, receipt_id)
    if receipt is None:
        raise NotFoundError("receipt", receipt_id)
    return receipt


@receipts_bp.get("/receipts")
@admin_required
def list_receipts(auth):
    category = request.args.get("category")
    building_id = request.args.get("building_id", type=int)
    limit, offset = pagination()

    query = Receipt.query
    if category:
        query = query.filter(Receipt.category == category)
    if building_id:
        query = query.filter(Receipt.building_id == building_id)

    total = query.count()
    receipts = query.order_by(Receipt.receipt_date.desc(), Receipt.id.desc()).limit(limit).offset(offset).all()
    return jsonify({"receipts": [r.serialize() for r in receipts], "count": total}), 200


@receipts_bp.post("/receipts")
@admin_required
def create_receipt(auth):
    data = json_body()
    require_fields(data, ["amount", "receipt_date"])
    receipt = Receipt(
        amount=amount_value(data, "amount"),
        receipt_date=date_value(data, "receipt_date", required=True),
        building_id=int_value(data, "building_id"),
        **{field: data.get(field) for field in TEXT_FIELDS},
    )
    db.session.add(receipt)
    db.session.commit()
    return jsonify(receipt.serialize()), 201


@receipts_bp.put("/receipts/<int:receipt_id>")
@admin_required
def update_receipt(receipt_id, auth):
    receipt = _get_receipt(receipt_id)
    data = json_body()
    if "amount" in data:
        receipt.amount = amount_value(data, "amount")
    if "receipt_date" in data:
        receipt.receipt_date = date_value(data, "receipt_date", required=True)
    if "building_id" in data:
        receipt.building_id = int_value(data, "building_id")
    for field in TEXT_FIELDS:
        if field in data:
            setattr(receipt, field, data[field])
    db.session.commit()
    return jsonify(receipt.serialize()), 200


@receipts_bp.delete("/receipts/<int:receipt_id>")
@admin_required
def delete_receipt(receipt_id, auth):
    receipt = _get_receipt(receipt_id)
    db.session.delete(receipt)
    db.session.commit()
    return jsonify({"message": "Receipt deleted"}), 200
