from datetime import datetime

from staycore_backend.extensions import db


class Receipt(db.Model):
    """An expense: money paid out to a vendor."""
    __tablename__ = 'receipts'

    id = db.Column(db.Integer, primary_key=True)
    vendor = db.Column(db.String(255), nullable=True)
    category = db.Column(db.String(80), nullable=True)
    amount = db.Column(db.Numeric(10, 2), nullable=False)
    receipt_date = db.Column(db.Date, nullable=False, index=True)
    payment_method = db.Column(db.String(50), nullable=True)
    description = db.Column(db.Text, nullable=True)
    building_id = db.Column(db.Integer, db.ForeignKey('buildings.id'), nullable=True)

    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    def __repr__(self):
        return f'<Receipt {self.id}: {self.vendor} ${self.amount}>'

    def serialize(self):
        return {
            "id": self.id,
            "vendor": self.vendor,
            "category": self.category,
            "amount": float(self.amount),
            "receipt_date": self.receipt_date.isoformat() if self.receipt_date else None,
            "payment_method": self.payment_method,
            "description": self.description,
            "building_id": self.building_id,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
